#!/usr/bin/env python3
"""
Tests for the exception hierarchy.
"""

from mpdwire_common.exceptions import (
    AckCode, InvalidArgumentError, MPDError, MPDConnectionError, MPDProtocolError,
    MPDTimeoutError, MPDWriteError, UnsupportedCommandError
)


class TestExceptions:
    """Every failure is typed and carries structured fields"""

    def test_hierarchy(self):
        for cls in (MPDConnectionError, MPDWriteError, MPDTimeoutError):
            assert issubclass(cls, MPDError)
        assert issubclass(MPDProtocolError, MPDError)
        assert issubclass(UnsupportedCommandError, MPDError)

    def test_codes(self):
        assert MPDConnectionError().code == "CONNECTION_ERROR"
        assert MPDWriteError().code == "WRITE_ERROR"
        assert MPDTimeoutError().code == "TIMEOUT_ERROR"

    def test_protocol_error_fields(self):
        error = MPDProtocolError(5, 0, "play", "no such song")
        assert error.message == "no such song"
        assert error.ack is AckCode.UNKNOWN
        assert str(error) == "[5@0] {play} no such song"
        assert error.to_dict() == {
            "message": "no such song",
            "code": "PROTOCOL_ERROR",
            "details": {"error_code": 5, "command_index": 0, "current_command": "play"},
        }

    def test_to_dict_without_details(self):
        assert MPDTimeoutError().to_dict() == {"message": "Command timed out", "code": "TIMEOUT_ERROR"}

    def test_ack_codes(self):
        assert AckCode(50) is AckCode.NO_EXIST
        assert int(AckCode.EXIST) == 56

    def test_invalid_argument(self):
        error = InvalidArgumentError("a\nb")
        assert isinstance(error, MPDError)
        assert error.code == "INVALID_ARGUMENT"
        assert error.argument == "a\nb"
        assert "line break" in error.message
