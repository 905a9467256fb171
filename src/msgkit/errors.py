"""msgkit exception hierarchy.

Shared across headers, message, and registry so every module raises
and catches the same types.
"""


class MsgkitError(Exception):
    """Base for all msgkit-specific errors."""


class NotInstalledError(MsgkitError, NotImplementedError):
    """Raised when a contract's ``from_raw`` is called with no handler.

    A programming error: install a concrete type (``Message.install()``)
    or call ``from_raw`` on the concrete class directly.
    """

    def __init__(self, contract: str) -> None:
        self.contract = contract
        super().__init__(
            f"{contract}.from_raw must be overridden or a concrete type installed"
        )


class PayloadEncodingError(MsgkitError, TypeError):
    """Raised when a payload cannot be normalized to bytes for the raw form."""

    def __init__(self, payload: object) -> None:
        self.payload_type = type(payload).__name__
        super().__init__(f"Cannot convert payload of type {self.payload_type!r} to bytes")
