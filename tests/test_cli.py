#!/usr/bin/env python3
"""
Tests for the mpdwire command-line tool.
"""

import json

import pytest

from mpdwire_client import cli
from mpdwire_client.client import MPDClient

GREETING = "OK MPD 0.23.5"


@pytest.fixture
def run_cli(monkeypatch, scripted, settings, capsys):
    """Run main() against a scripted daemon; returns (exit code, stdout, stderr, factory)."""
    def run(argv, *scripts):
        factory = scripted(*scripts)
        monkeypatch.setattr(cli, "configure_structlog", lambda **kwargs: None)
        monkeypatch.setattr(
            cli, "MPDClient",
            lambda **kwargs: MPDClient(settings=settings, transport_factory=factory, **kwargs)
        )
        code = cli.main(argv)
        out, err = capsys.readouterr()
        return code, out, err, factory
    return run


class TestFormatValue:
    """Human-readable rendering"""

    def test_unit(self):
        assert cli.format_value(True) == "OK"

    def test_record(self):
        assert cli.format_value({"volume": "50", "state": "play"}) == "volume: 50\nstate: play"

    def test_scalar_list(self):
        assert cli.format_value(["a", "b"]) == "a\nb"

    def test_record_list(self):
        assert cli.format_value([{"file": "a"}, {"file": "b"}]) == "file: a\n\nfile: b"

    def test_grouped(self):
        value = {"mad": {"suffix": ["mp3", "mp2"]}}
        assert cli.format_value(value) == "mad:\n  suffix: mp3, mp2"


class TestMain:
    """Argument handling and exit codes"""

    def test_status(self, run_cli):
        code, out, _, factory = run_cli(["status"], [GREETING, "volume: 50", "OK"])
        assert code == 0
        assert out.strip() == "50"
        assert factory.opened[0].written == ["status", "close"]

    def test_arguments_forwarded(self, run_cli):
        code, _, _, factory = run_cli(["find", "artist", "The Beatles"], [GREETING, "OK"])
        assert code == 0
        assert factory.opened[0].written[0] == 'find "artist" "The Beatles"'

    def test_json_output(self, run_cli):
        code, out, _, _ = run_cli(["--json", "outputs"], [GREETING, "outputid: 0", "outputname: alsa", "OK"])
        assert code == 0
        assert json.loads(out) == [{"outputid": "0", "outputname": "alsa"}]

    def test_protocol_error_exit_code(self, run_cli):
        code, _, err, _ = run_cli(["--json", "play", "99"], [GREETING, "ACK [2@0] {play} Bad song index"])
        assert code == 1
        assert json.loads(err)["details"]["error_code"] == 2

    def test_unknown_command(self, run_cli):
        code, _, err, factory = run_cli(["frobnicate"])
        assert code == 2
        assert "frobnicate" in err
        assert factory.calls == []

    def test_connection_failure(self, run_cli):
        code, _, err, _ = run_cli(["status"])
        assert code == 1
        assert "Connection failed" in err
