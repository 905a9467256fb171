"""Immutable, case-insensitive, multi-valued message headers.

``HeaderMap`` implements ``Mapping[str, Any]`` and the
``MultiValueMapping`` protocol. Names are matched case-insensitively;
the casing first written (or last replaced) is kept for the raw form.
Every ``add``/``replace`` returns a new map.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Self

from msgkit._internal.types import HeaderValue, RawHeaders, RawHeadersInput
from msgkit.errors import NotInstalledError
from msgkit.registry import Registry, current_registry

logger = logging.getLogger("msgkit.headers")


class AbstractHeaders(ABC):
    """Contract for header implementations that interoperate via raw form.

    Subclasses must implement ``to_raw``. ``from_raw`` on the base
    delegates to whichever concrete type is installed in the current
    registry.
    """

    __slots__ = ()

    @classmethod
    def from_raw(cls, raw: RawHeadersInput) -> "AbstractHeaders":
        """Parse *raw* with the installed header implementation."""
        handler = current_registry().resolve(AbstractHeaders)
        if handler is None:
            raise NotInstalledError("AbstractHeaders")
        return handler(raw)

    @abstractmethod
    def to_raw(self, *, preserve_values: bool = False) -> RawHeaders:
        """Convert to raw form: display name -> ``{"values": [...]}``.

        Values are normalized to strings unless *preserve_values*.
        """


def _normalize(name: str) -> str:
    return name.lower()


def _is_value_list(values: object) -> bool:
    return isinstance(values, Iterable) and not isinstance(values, (str, bytes, bytearray, Mapping))


class HeaderMap(AbstractHeaders, Mapping[str, Any]):
    """Immutable, case-insensitive headers with multiple values per name.

    ``__getitem__`` and ``get_first`` return the first value for a name.
    ``get_all`` returns a fresh list of every value.

    Examples:
        >>> h = HeaderMap().add("Content-Type", "text/plain").add("content-type", "x")
        >>> h.get_all("CONTENT-TYPE")
        ['text/plain', 'x']
        >>> h.to_raw()
        {'Content-Type': {'values': ['text/plain', 'x']}}
    """

    __slots__ = ("_names", "_values")

    _names: dict[str, str]
    _values: dict[str, list[HeaderValue]]

    def __init__(self, source: "AbstractHeaders | RawHeadersInput | None" = None) -> None:
        if source is None:
            names: dict[str, str] = {}
            values: dict[str, list[HeaderValue]] = {}
        elif isinstance(source, HeaderMap):
            names = dict(source._names)
            values = {key: list(vals) for key, vals in source._values.items()}
        elif isinstance(source, AbstractHeaders):
            parsed = HeaderMap.from_raw(source.to_raw())
            names, values = parsed._names, parsed._values
        elif isinstance(source, Mapping):
            parsed = HeaderMap.from_raw(source)
            names, values = parsed._names, parsed._values
        else:
            msg = f"headers must be AbstractHeaders, Mapping or None, not {type(source).__name__}"
            raise TypeError(msg)
        object.__setattr__(self, "_names", names)
        object.__setattr__(self, "_values", values)

    # -- Raw form --

    @classmethod
    def from_raw(cls, raw: RawHeadersInput) -> Self:
        """Build headers from raw form, skipping malformed entries.

        Names differing only in case are merged; values are concatenated
        in encounter order and the first-seen casing becomes the display name.
        """
        headers = cls()
        for name, entry in raw.items():
            values = entry.get("values") if isinstance(entry, Mapping) else None
            if not isinstance(name, str) or not _is_value_list(values):
                logger.debug("Skipping malformed raw header %r: %r", name, entry)
                continue
            headers = headers.add(name, *values)
        return headers

    def to_raw(self, *, preserve_values: bool = False) -> RawHeaders:
        convert: Callable[[HeaderValue], HeaderValue] = (lambda v: v) if preserve_values else str
        return {
            self._names[key]: {"values": [convert(v) for v in vals]}
            for key, vals in self._values.items()
        }

    @classmethod
    def install(cls, registry: Registry | None = None) -> Callable[[], None]:
        """Install ``cls.from_raw`` as the default ``AbstractHeaders.from_raw``.

        Returns an uninstall callable restoring the previous handler.
        """
        registry = registry if registry is not None else current_registry()
        token = registry.register(AbstractHeaders, cls.from_raw)

        def uninstall() -> None:
            registry.unregister(token)

        return uninstall

    # -- Copy-on-write updates --

    def _copy(self) -> Self:
        return type(self)(self)

    def add(self, name: str, *values: HeaderValue) -> Self:
        """Return a new map with *values* appended to *name*.

        Creates the header when absent. The display name of an existing
        header is kept.
        """
        key = _normalize(name)
        new = self._copy()
        new._names.setdefault(key, name)
        new._values.setdefault(key, []).extend(values)
        return new

    def replace(self, name: str, *values: HeaderValue) -> Self:
        """Return a new map where *name* holds exactly *values*.

        The display name becomes *name*. An empty *values* leaves the
        header present with no values.
        """
        key = _normalize(name)
        new = self._copy()
        new._names[key] = name
        new._values[key] = list(values)
        return new

    # -- Lookup --

    def get_first(self, name: str) -> HeaderValue | None:
        """Return the first value for *name*, or ``None`` if missing."""
        values = self._values.get(_normalize(name))
        return values[0] if values else None

    def get_all(self, name: str) -> list[HeaderValue]:
        """Return a copy of every value for *name* (empty if missing)."""
        return list(self._values.get(_normalize(name), ()))

    def multi_items(self) -> Iterator[tuple[str, HeaderValue]]:
        """Yield ``(display name, value)`` for every value, in order."""
        for key, vals in self._values.items():
            name = self._names[key]
            for value in vals:
                yield name, value

    # -- Mapping protocol --

    def __getitem__(self, key: str) -> HeaderValue:
        try:
            values = self._values[_normalize(key)]
        except KeyError:
            raise KeyError(key) from None
        # Present but emptied by replace()
        return values[0] if values else None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return _normalize(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._values)

    def get(self, key: str, default: Any = None) -> Any:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._values.get(_normalize(key))
        return values[0] if values else default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self._names == other._names and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{self._names[k]!r}: {v!r}" for k, v in self._values.items())
        return f"HeaderMap({{{items}}})"
