"""
Environment-driven settings for incremental offset diagnostics.

Environment variables:
    OFFSET_TRACE_LOGGING: Log value events at DEBUG (default: false)
    OFFSET_TRACE_SPANS: Record value events as span events (default: false)
"""

import logging
import os
from dataclasses import dataclass

from .observers import LoggingObserver, SpanEventObserver, ValueObserver, register_observer

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in _TRUE_VALUES


@dataclass(frozen=True)
class OffsetSettings:
    """Diagnostic settings for incremental offsets."""

    trace_logging: bool = False
    trace_spans: bool = False

    @classmethod
    def from_env(cls) -> "OffsetSettings":
        """Read settings from the environment."""
        return cls(
            trace_logging=_env_flag("OFFSET_TRACE_LOGGING"),
            trace_spans=_env_flag("OFFSET_TRACE_SPANS"),
        )

    def observers(self) -> list[ValueObserver]:
        """Observers enabled by these settings."""
        observers: list[ValueObserver] = []
        if self.trace_logging:
            observers.append(LoggingObserver())
        if self.trace_spans:
            observers.append(SpanEventObserver())
        return observers


def configure_from_env() -> OffsetSettings:
    """
    Register the observers enabled in the environment.

    Returns:
        The settings that were applied
    """
    settings = OffsetSettings.from_env()

    for observer in settings.observers():
        register_observer(observer)

    logger.info(
        f"Offset diagnostics configured: logging={settings.trace_logging}, "
        f"spans={settings.trace_spans}"
    )
    return settings
