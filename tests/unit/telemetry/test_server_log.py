"""
Tests for ServerLog, the fallback channel, and logging setup.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from faultline.config import LoggingConfig
from faultline.primitives.common import LogEntry
from faultline.telemetry.logging import ServerLog, get_fallback_logger, setup_logging


class TestServerLog:
    @pytest.mark.parametrize(
        ("priority", "level"),
        [
            ("debug", "debug"),
            ("info", "info"),
            ("warn", "warning"),
            ("error", "error"),
            ("fatal", "critical"),
            ("FATAL", "critical"),
            ("made-up", "error"),
        ],
    )
    def test_priority_selects_level(self, priority, level):
        with capture_logs() as logs:
            ServerLog().log(LogEntry(message="m", priority=priority))
        assert logs[0]["log_level"] == level

    def test_entry_fields_attached(self):
        with capture_logs() as logs:
            ServerLog(instance="ca-1").log(
                LogEntry(message="Exception: ERR_X", facility="audit", priority="error", caller_level=2)
            )
        assert logs == [
            {
                "event": "Exception: ERR_X",
                "facility": "audit",
                "priority": "error",
                "caller_level": 2,
                "instance": "ca-1",
                "log_level": "error",
            }
        ]

    def test_emit(self):
        with capture_logs() as logs:
            ServerLog().emit("started")
        assert logs[0]["event"] == "started"
        assert logs[0]["facility"] == "system"
        assert logs[0]["log_level"] == "info"


class TestFallbackLogger:
    def test_cached_per_channel(self):
        first = get_fallback_logger("faultline.test.channel")
        assert get_fallback_logger("faultline.test.channel") is first
        assert first is logging.getLogger("faultline.test.channel")

    def test_default_channel(self):
        assert get_fallback_logger().name == "faultline.system"


class TestSetupLogging:
    @pytest.fixture
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield root
        root.handlers[:] = handlers
        root.setLevel(level)
        structlog.reset_defaults()

    def test_json_output(self, restore_root, capsys):
        setup_logging(LoggingConfig(level="DEBUG", format="json"))
        ServerLog().log(LogEntry(message="Exception: ERR_X", facility="system"))
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Exception: ERR_X"
        assert record["facility"] == "system"
        assert record["level"] == "error"

    def test_fallback_channel_rendered_too(self, restore_root, capsys):
        setup_logging(LoggingConfig(level="DEBUG", format="json"))
        get_fallback_logger().debug("Exception: ERR_Y")
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "Exception: ERR_Y"
        assert record["logger"] == "faultline.system"

    def test_level_applied(self, restore_root):
        setup_logging(LoggingConfig(level="warning"))
        assert restore_root.level == logging.WARNING
