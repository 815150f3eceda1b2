"""Customer — the minimal view of a user that checkout needs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Customer:
    id: str
    name: str
    email: str | None = None
    is_admin: bool = False

    @property
    def can_receive_email(self) -> bool:
        return bool(self.email and self.email.strip())
