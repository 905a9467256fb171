"""Tests for msgkit.errors — exception hierarchy and messages."""

from msgkit.errors import MsgkitError, NotInstalledError, PayloadEncodingError


class TestHierarchy:
    def test_not_installed_is_msgkit_error(self) -> None:
        assert issubclass(NotInstalledError, MsgkitError)

    def test_not_installed_is_not_implemented(self) -> None:
        assert issubclass(NotInstalledError, NotImplementedError)

    def test_payload_encoding_is_type_error(self) -> None:
        assert issubclass(PayloadEncodingError, MsgkitError)
        assert issubclass(PayloadEncodingError, TypeError)


class TestMessages:
    def test_not_installed(self) -> None:
        err = NotInstalledError("AbstractHeaders")
        assert err.contract == "AbstractHeaders"
        assert str(err) == "AbstractHeaders.from_raw must be overridden or a concrete type installed"

    def test_payload_encoding(self) -> None:
        err = PayloadEncodingError(1.5)
        assert err.payload_type == "float"
        assert str(err) == "Cannot convert payload of type 'float' to bytes"
