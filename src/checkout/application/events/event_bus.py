"""EventBus — the subject that fans order events out to observers.

``notify`` hands each observer its own copy of the order and runs it as
a separate task on a thread pool, then returns without waiting. A
failing observer is logged with its traceback and dropped: the caller
and the other observers never see the error. There is no ordering
between observers and no retry of failed notifications.
"""

from __future__ import annotations

import copy
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for

import structlog

from checkout.application.events.observer import Observer
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order

logger = structlog.get_logger(__name__)


class EventBus:

    def __init__(self, max_workers: int = 4) -> None:
        self._observers: list[Observer] = []
        self._pending: set[Future] = set()
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="event-bus"
        )

    # --- Registry -------------------------------------------------------------

    def attach(self, observer: Observer) -> None:
        if not isinstance(observer, Observer):
            raise TypeError(
                f"Observer must implement Observer, got {type(observer).__name__}"
            )
        with self._lock:
            if observer in self._observers:
                logger.warning("observer_already_attached", observer=observer.name)
                return
            self._observers.append(observer)
            count = len(self._observers)
        logger.info("observer_attached", observer=observer.name, observers=count)

    def detach(self, observer: Observer) -> None:
        with self._lock:
            if observer not in self._observers:
                return
            self._observers.remove(observer)
            count = len(self._observers)
        logger.info("observer_detached", observer=observer.name, observers=count)

    def clear(self) -> None:
        with self._lock:
            self._observers.clear()

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)

    @property
    def observer_names(self) -> list[str]:
        with self._lock:
            return [observer.name for observer in self._observers]

    # --- Dispatch -------------------------------------------------------------

    def notify(self, event: OrderEvent, order: Order) -> None:
        if not isinstance(event, OrderEvent):
            raise TypeError(f"Unknown order event {event!r}")

        with self._lock:
            observers = list(self._observers)
        if not observers:
            logger.debug("no_observers", order_event=event.value, order_id=order.id)
            return

        logger.debug(
            "notifying_observers",
            order_event=event.value,
            order_id=order.id,
            observers=len(observers),
        )
        for observer in observers:
            snapshot = copy.deepcopy(order)
            try:
                future = self._executor.submit(self._dispatch, observer, event, snapshot)
            except RuntimeError:
                logger.error(
                    "event_bus_closed",
                    observer=observer.name,
                    order_event=event.value,
                    order_id=order.id,
                )
                continue
            with self._lock:
                self._pending.add(future)
            future.add_done_callback(self._forget)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for dispatched notifications. False if some are still running."""
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait_for(pending, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _dispatch(observer: Observer, event: OrderEvent, order: Order) -> None:
        try:
            observer.update(event, order)
        except Exception:
            logger.exception(
                "observer_failed",
                observer=observer.name,
                order_event=event.value,
                order_id=order.id,
            )

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
