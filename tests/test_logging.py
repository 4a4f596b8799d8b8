#!/usr/bin/env python3
"""
Tests for structured logging helpers.
"""

import logging
import subprocess
import sys
import textwrap

import structlog

from mpdwire_common.logging import clear_context, get_bound_logger, operation_context


class TestLogging:
    """Component loggers and temporary context"""

    def test_bound_logger_carries_component(self):
        logger = get_bound_logger("command_runner", version="0.1.0")
        context = structlog.get_context(logger.bind())
        assert context["component"] == "command_runner"
        assert context["version"] == "0.1.0"

    def test_operation_context_is_temporary(self):
        clear_context()
        with operation_context(command="status"):
            assert structlog.contextvars.get_contextvars() == {"command": "status"}
        assert structlog.contextvars.get_contextvars() == {}

    def test_operation_context_unbinds_on_error(self):
        clear_context()
        try:
            with operation_context(command="play"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert structlog.contextvars.get_contextvars() == {}


class TestHostApplicationLogging:
    """The library never reconfigures the application's logging"""

    def test_getting_a_logger_keeps_root_handlers(self):
        root = logging.getLogger()
        handler = logging.NullHandler()
        old_level = root.level
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
        try:
            get_bound_logger("frame_reader")
            assert handler in root.handlers
            assert root.level == logging.DEBUG
        finally:
            root.removeHandler(handler)
            root.setLevel(old_level)

    def test_import_keeps_root_handlers(self):
        script = textwrap.dedent("""
            import logging, sys
            root = logging.getLogger()
            handler = logging.StreamHandler(sys.stderr)
            root.addHandler(handler)
            root.setLevel(logging.DEBUG)
            import mpdwire_client
            print(handler in root.handlers, logging.getLevelName(root.level))
        """)
        result = subprocess.run([sys.executable, "-c", script],
                                capture_output=True, text=True, check=True)
        assert result.stdout.split() == ["True", "DEBUG"]

    def test_events_reach_application_handler(self):
        records = []

        class ListHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        mpd_logger = logging.getLogger("mpdwire")
        handler = ListHandler(level=logging.DEBUG)
        old_level = mpd_logger.level
        mpd_logger.addHandler(handler)
        mpd_logger.setLevel(logging.DEBUG)
        try:
            get_bound_logger("idle_session").info("idle.changed", changed="player")
        finally:
            mpd_logger.removeHandler(handler)
            mpd_logger.setLevel(old_level)
        assert len(records) == 1
        assert "idle.changed" in records[0].getMessage()
