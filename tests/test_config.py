#!/usr/bin/env python3
"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from mpdwire_common.config import MPDWireConfig


class TestMPDWireConfig:
    """Defaults, environment overrides and validation"""

    def test_defaults(self, monkeypatch):
        for name in ("MPD_HOST", "MPD_PORT", "MPD_PASSWORD", "MPD_IDLE_DRAIN"):
            monkeypatch.delenv(name, raising=False)
        cfg = MPDWireConfig(_env_file=None)
        assert cfg.host == "localhost"
        assert cfg.port == 6600
        assert cfg.password is None
        assert cfg.idle_drain is None
        assert cfg.idle_drain_timeout == pytest.approx(0.1)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MPD_HOST", "/run/mpd/socket")
        monkeypatch.setenv("MPD_PORT", "6601")
        monkeypatch.setenv("MPD_IDLE_DRAIN", "false")
        monkeypatch.setenv("MPD_LOG_LEVEL", "debug")
        cfg = MPDWireConfig(_env_file=None)
        assert cfg.host == "/run/mpd/socket"
        assert cfg.port == 6601
        assert cfg.idle_drain is False
        assert cfg.get_log_level() == "DEBUG"

    def test_port_range(self):
        with pytest.raises(ValidationError):
            MPDWireConfig(_env_file=None, port=70000)

    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValidationError):
            MPDWireConfig(_env_file=None, idle_drain_timeout=0)
        with pytest.raises(ValidationError):
            MPDWireConfig(_env_file=None, socket_timeout=-1)

    def test_log_format_choices(self):
        with pytest.raises(ValidationError):
            MPDWireConfig(_env_file=None, log_format="xml")
