"""Immutable message envelope: headers plus an opaque payload.

``Message`` pairs a ``HeaderMap`` with a payload and converts to and
from the raw form exchanged with the invoking host. ``MessageBuilder``
is the mutable, single-owner staging object used to assemble one.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Self

from msgkit._internal.types import HeaderValue, RawMessage
from msgkit.config import DEFAULT_CONFIG, RawFormConfig
from msgkit.errors import NotInstalledError, PayloadEncodingError
from msgkit.headers import AbstractHeaders, HeaderMap
from msgkit.registry import Registry, current_registry


class AbstractMessage(ABC):
    """Contract for message implementations that interoperate via raw form.

    Subclasses must implement ``to_raw``. ``from_raw`` on the base
    delegates to whichever concrete type is installed in the current
    registry.
    """

    __slots__ = ()

    @classmethod
    def from_raw(cls, raw: RawMessage) -> "AbstractMessage":
        """Parse *raw* with the installed message implementation."""
        handler = current_registry().resolve(AbstractMessage)
        if handler is None:
            raise NotInstalledError("AbstractMessage")
        return handler(raw)

    @abstractmethod
    def to_raw(
        self,
        *,
        preserve_payload: bool = False,
        preserve_header_values: bool = False,
    ) -> RawMessage:
        """Convert to raw form.

        The payload is normalized to ``bytes`` unless *preserve_payload*;
        header values are normalized to strings unless
        *preserve_header_values*.
        """


def to_bytes(payload: Any, config: RawFormConfig = DEFAULT_CONFIG) -> bytes:
    """Normalize a payload to bytes. ``None`` becomes ``b""``."""
    if payload is None:
        return b""
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode(config.payload_encoding, config.encoding_errors)
    if isinstance(payload, (list, tuple)) and all(isinstance(b, int) for b in payload):
        try:
            return bytes(payload)
        except ValueError:
            raise PayloadEncodingError(payload) from None
    raise PayloadEncodingError(payload)


class Message(AbstractMessage):
    """Immutable message with case-insensitive headers and a payload.

    Constructing from an existing ``Message`` returns that same instance.
    Constructing from another ``AbstractMessage`` converts it through its
    raw form, ignoring *payload*. Anything else is handed to ``HeaderMap``.

    Examples:
        >>> msg = Message(HeaderMap().add("Content-Type", "text/plain"), "hi")
        >>> msg.to_raw()
        {'headers': {'Content-Type': {'values': ['text/plain']}}, 'payload': b'hi'}
        >>> Message(msg) is msg
        True
    """

    __slots__ = ("_headers", "_payload")

    def __new__(cls, headers: Any = None, payload: Any = None) -> "Message":
        if isinstance(headers, Message):
            return headers
        if isinstance(headers, AbstractMessage):
            return cls.from_raw(headers.to_raw(preserve_payload=True, preserve_header_values=True))
        return super().__new__(cls)

    def __init__(self, headers: Any = None, payload: Any = None) -> None:
        # Already built by __new__
        if isinstance(headers, AbstractMessage):
            return
        object.__setattr__(self, "_headers", HeaderMap(headers))
        object.__setattr__(self, "_payload", payload)

    @property
    def headers(self) -> HeaderMap:
        """The message headers."""
        return self._headers

    @property
    def payload(self) -> Any:
        """The message payload, exactly as given."""
        return self._payload

    # -- Raw form --

    def to_raw(
        self,
        *,
        preserve_payload: bool = False,
        preserve_header_values: bool = False,
        config: RawFormConfig | None = None,
    ) -> RawMessage:
        payload = self._payload
        return {
            "headers": self._headers.to_raw(preserve_values=preserve_header_values),
            "payload": payload if preserve_payload else to_bytes(payload, config or DEFAULT_CONFIG),
        }

    @classmethod
    def from_raw(cls, raw: RawMessage) -> Self:
        """Build a message from raw form.

        Missing or ``None`` headers yield an empty ``HeaderMap``.
        """
        headers = HeaderMap.from_raw(raw.get("headers") or {})
        return cls(headers, raw.get("payload"))

    @classmethod
    def install(cls, registry: Registry | None = None) -> Callable[[], None]:
        """Install ``HeaderMap`` and ``cls`` as the default contract implementations.

        Returns an uninstall callable restoring both previous handlers.
        """
        registry = registry if registry is not None else current_registry()
        uninstall_headers = HeaderMap.install(registry)
        token = registry.register(AbstractMessage, cls.from_raw)

        def uninstall() -> None:
            registry.unregister(token)
            uninstall_headers()

        return uninstall

    @classmethod
    def builder(cls) -> "MessageBuilder":
        """Create a builder for a new message."""
        return MessageBuilder()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._headers == other._headers and self._payload == other._payload

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Message(headers={self._headers!r}, payload={self._payload!r})"


class MessageBuilder:
    """Mutable builder for a ``Message``.

    Every method except ``build`` updates the builder in place and
    returns it, so calls chain. Not safe for concurrent use.
    """

    __slots__ = ("_headers", "_payload")

    def __init__(self) -> None:
        self._headers = HeaderMap()
        self._payload: Any = None

    def add_header(self, name: str, *values: HeaderValue) -> Self:
        """Append values for a header, creating it if needed."""
        self._headers = self._headers.add(name, *values)
        return self

    def replace_header(self, name: str, *values: HeaderValue) -> Self:
        """Set values for a header, dropping existing values."""
        self._headers = self._headers.replace(name, *values)
        return self

    def headers(self, headers: AbstractHeaders | Any) -> Self:
        """Replace all headers."""
        self._headers = HeaderMap(headers)
        return self

    def payload(self, payload: Any) -> Self:
        """Replace the payload."""
        self._payload = payload
        return self

    def build(self) -> Message:
        """Create a message from the builder's current content."""
        return Message(self._headers, self._payload)
