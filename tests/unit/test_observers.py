"""
Unit tests for diagnostic observers and their environment configuration.
"""

import logging
import os
from unittest.mock import Mock, patch

import pytest

from src.offsets import (
    DecodeError,
    IntegralValue,
    LoggingObserver,
    OffsetSettings,
    OpaqueValue,
    SpanEventObserver,
    classify,
    configure_from_env,
    register_observer,
    unregister_observer,
)
from src.offsets.observers import get_observers


class TestObserverRegistry:
    """Test observer registration and dispatch"""

    def test_events_dispatched(self, statement):
        observer = Mock()
        register_observer(observer)

        value = IntegralValue(7)
        value.bind(statement, 1)
        value.render()

        observer.on_created.assert_called_once_with(value)
        observer.on_bound.assert_called_once_with(value, 1)
        observer.on_rendered.assert_called_once_with(value, 7)

    def test_opaque_render_event_gets_text(self):
        observer = Mock()
        register_observer(observer)

        OpaqueValue(b"\x00\xff").render()

        assert observer.on_rendered.call_args[0][1] == "AP8="

    def test_register_twice_is_noop(self):
        observer = Mock()
        register_observer(observer)
        register_observer(observer)

        assert get_observers() == [observer]

    def test_unregister(self):
        observer = Mock()
        register_observer(observer)
        unregister_observer(observer)
        unregister_observer(observer)

        IntegralValue(1)

        observer.on_created.assert_not_called()

    def test_failing_observer_does_not_change_result(self, caplog):
        """Test observer errors are logged and the operation completes"""
        observer = Mock()
        observer.on_created.side_effect = RuntimeError("observer broke")
        register_observer(observer)

        with caplog.at_level(logging.ERROR, logger="src.offsets.observers"):
            value = classify(5)

        assert value == IntegralValue(5)
        assert "observer broke" in caplog.text

    def test_domain_errors_still_raised(self):
        """Test observers never mask classification errors"""
        register_observer(Mock())

        with pytest.raises(DecodeError):
            classify("not-base64!!")


class TestLoggingObserver:
    """Test LoggingObserver"""

    def test_logs_at_debug(self, caplog, statement):
        register_observer(LoggingObserver())

        with caplog.at_level(logging.DEBUG, logger="src.offsets.trace"):
            value = OpaqueValue(b"\x00\xff")
            value.bind(statement, 2)
            value.render()

        messages = [r.getMessage() for r in caplog.records if r.name == "src.offsets.trace"]
        assert messages == [
            "Created opaque offset: OpaqueValue('AP8=')",
            "Bound opaque offset at position 2: OpaqueValue('AP8=')",
            "Rendered opaque offset: 'AP8='",
        ]

    def test_silent_above_debug(self, caplog):
        register_observer(LoggingObserver())

        with caplog.at_level(logging.INFO, logger="src.offsets.trace"):
            IntegralValue(1).render()

        assert not [r for r in caplog.records if r.name == "src.offsets.trace"]


class TestSpanEventObserver:
    """Test SpanEventObserver"""

    def test_adds_span_events(self, statement):
        register_observer(SpanEventObserver())

        with patch("src.offsets.observers.add_span_event") as mock_event:
            value = IntegralValue(3)
            value.bind(statement, 1)
            value.render()

        assert [c[0][0] for c in mock_event.call_args_list] == [
            "incremental_value.created",
            "incremental_value.bound",
            "incremental_value.rendered",
        ]
        assert mock_event.call_args_list[1][1] == {"kind": "integral", "position": 1}

    def test_no_active_span_is_harmless(self):
        register_observer(SpanEventObserver())

        assert IntegralValue(3).render() == 3


class TestOffsetSettings:
    """Test environment-driven settings"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = OffsetSettings.from_env()

        assert settings == OffsetSettings(trace_logging=False, trace_spans=False)
        assert settings.observers() == []

    def test_from_env(self):
        env = {"OFFSET_TRACE_LOGGING": "true", "OFFSET_TRACE_SPANS": "1"}
        with patch.dict(os.environ, env, clear=True):
            settings = OffsetSettings.from_env()

        assert settings.trace_logging is True
        assert settings.trace_spans is True
        kinds = [type(o) for o in settings.observers()]
        assert kinds == [LoggingObserver, SpanEventObserver]

    def test_configure_from_env_registers(self):
        with patch.dict(os.environ, {"OFFSET_TRACE_LOGGING": "yes"}, clear=True):
            settings = configure_from_env()

        assert settings.trace_logging is True
        assert [type(o) for o in get_observers()] == [LoggingObserver]
