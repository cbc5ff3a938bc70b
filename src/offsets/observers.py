"""
Diagnostic observers for incremental offset values.

Observers are a side channel: they are told when a value is created,
bound into a statement, or rendered for offset storage. A failing
observer is logged and skipped; it never changes the outcome of the
operation that triggered it.
"""

import logging
import threading
from typing import Any, Protocol

from src.utils.tracing import add_span_event

logger = logging.getLogger(__name__)

_observers: list["ValueObserver"] = []
_lock = threading.Lock()


class ValueObserver(Protocol):
    """Receives lifecycle events for incremental values."""

    def on_created(self, value) -> None: ...

    def on_bound(self, value, position: int) -> None: ...

    def on_rendered(self, value, rendered: int | str) -> None: ...


class LoggingObserver:
    """Writes value events to a logger at DEBUG level."""

    def __init__(self, logger_name: str = "src.offsets.trace"):
        self.logger = logging.getLogger(logger_name)

    def on_created(self, value) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Created {value.kind} offset: {value!r}")

    def on_bound(self, value, position: int) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Bound {value.kind} offset at position {position}: {value!r}")

    def on_rendered(self, value, rendered: int | str) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Rendered {value.kind} offset: {rendered!r}")


class SpanEventObserver:
    """Records value events on the current OpenTelemetry span."""

    def on_created(self, value) -> None:
        add_span_event("incremental_value.created", kind=value.kind)

    def on_bound(self, value, position: int) -> None:
        add_span_event("incremental_value.bound", kind=value.kind, position=position)

    def on_rendered(self, value, rendered: int | str) -> None:
        add_span_event("incremental_value.rendered", kind=value.kind, rendered=rendered)


def register_observer(observer: ValueObserver) -> None:
    """
    Register an observer for value events.

    Registering the same observer twice has no effect.
    """
    with _lock:
        if observer not in _observers:
            _observers.append(observer)
            logger.debug(f"Registered value observer: {type(observer).__name__}")


def unregister_observer(observer: ValueObserver) -> None:
    """Remove a previously registered observer, if present."""
    with _lock:
        if observer in _observers:
            _observers.remove(observer)


def clear_observers() -> None:
    """Remove all registered observers."""
    with _lock:
        _observers.clear()


def get_observers() -> list[ValueObserver]:
    """Snapshot of the registered observers."""
    with _lock:
        return list(_observers)


def notify(event: str, *args: Any) -> None:
    """
    Dispatch an event to every registered observer.

    Args:
        event: Observer method name (on_created, on_bound, on_rendered)
        *args: Arguments passed to the observer method
    """
    for observer in get_observers():
        try:
            getattr(observer, event)(*args)
        except Exception as e:
            logger.error(
                f"Error in value observer {type(observer).__name__}.{event}: {e}"
            )
