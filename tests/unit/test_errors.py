"""Unit tests for the exception hierarchy in xray_desktop.errors."""

import pytest

from xray_desktop.errors import (
    BackendError,
    BridgeError,
    BridgeTimeoutError,
    DesktopError,
    DiagnosticError,
    EmptyResponseError,
    EnvelopeParseError,
    OutputDecodeError,
    SerializationError,
    SpawnError,
    ValidationError,
)

BRIDGE_ERRORS = [
    SerializationError,
    SpawnError,
    BridgeTimeoutError,
    OutputDecodeError,
    EmptyResponseError,
    DiagnosticError,
    EnvelopeParseError,
    BackendError,
]


class TestExceptionHierarchy:
    """All concrete exceptions must be subclasses of DesktopError."""

    @pytest.mark.parametrize("exc_cls", BRIDGE_ERRORS)
    def test_subclass_of_bridge_error(self, exc_cls):
        assert issubclass(exc_cls, BridgeError)
        assert issubclass(exc_cls, DesktopError)

    def test_validation_error_is_not_a_bridge_error(self):
        assert issubclass(ValidationError, DesktopError)
        assert not issubclass(ValidationError, BridgeError)

    @pytest.mark.parametrize("exc_cls", BRIDGE_ERRORS)
    def test_message_preserved(self, exc_cls):
        err = exc_cls("something went wrong")
        assert str(err) == "something went wrong"


class TestBackendError:
    def test_returncode_defaults_to_none(self):
        assert BackendError("x").returncode is None

    def test_returncode_is_kept(self):
        err = BackendError("invalid token", returncode=1)
        assert err.returncode == 1
        assert str(err) == "invalid token"

    def test_raise_from_chaining(self):
        inner = OSError("No such file or directory")
        with pytest.raises(SpawnError) as exc_info:
            try:
                raise inner
            except OSError as e:
                raise SpawnError("Failed to run bridge: No such file or directory") from e
        assert exc_info.value.__cause__ is inner
