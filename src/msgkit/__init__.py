"""msgkit — immutable headers and messages for function invocation.

Case-insensitive multi-value headers, an immutable message envelope,
and a builder, all convertible to and from the raw form exchanged with
the invoking host.

Basic usage::

    from msgkit import Message

    uninstall = Message.install()

    msg = (
        Message.builder()
        .add_header("Content-Type", "application/json")
        .payload(b'{"n": 1}')
        .build()
    )
    raw = msg.to_raw()
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "AbstractHeaders",
    "AbstractMessage",
    "HeaderMap",
    "Message",
    "MessageBuilder",
    "MsgkitError",
    "MultiValueMapping",
    "NotInstalledError",
    "PayloadEncodingError",
    "RawFormConfig",
    "Registry",
    "current_registry",
    "use_registry",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AbstractHeaders": "msgkit.headers",
    "HeaderMap": "msgkit.headers",
    "AbstractMessage": "msgkit.message",
    "Message": "msgkit.message",
    "MessageBuilder": "msgkit.message",
    "MsgkitError": "msgkit.errors",
    "NotInstalledError": "msgkit.errors",
    "PayloadEncodingError": "msgkit.errors",
    "MultiValueMapping": "msgkit._internal.multimap",
    "RawFormConfig": "msgkit.config",
    "Registry": "msgkit.registry",
    "current_registry": "msgkit.registry",
    "use_registry": "msgkit.registry",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import msgkit`` fast while providing a clean top-level API.
    """
    module = _LAZY_IMPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module), name)
