"""MultiValueMapping protocol — shared read interface for header maps.

A structural protocol so callers can accept any case-insensitive,
multi-valued header mapping without coupling to ``HeaderMap``.
"""

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only mapping where names can have multiple values.

    ``__getitem__`` returns the first value for a name.
    ``get_all`` returns all values for a name.

    Defined with explicit dunder methods because Protocols cannot
    inherit from non-Protocol ABCs like ``Mapping``.
    """

    def __getitem__(self, key: str) -> Any: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get_first(self, name: str) -> Any: ...
    def get_all(self, name: str) -> list[Any]: ...
