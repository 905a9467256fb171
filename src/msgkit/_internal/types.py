"""Shared type aliases used across msgkit modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias, TypedDict


class RawHeaderEntry(TypedDict):
    """One header in raw form: every value for a single display name."""

    values: list[Any]


class RawMessage(TypedDict):
    """A message in raw form: raw headers plus a payload."""

    headers: "RawHeaders"
    payload: Any


# Header value — strings on the wire, any object before serialization
HeaderValue: TypeAlias = Any

# Display name -> entry, one per distinct case-normalized name
RawHeaders: TypeAlias = dict[str, RawHeaderEntry]

# Permissive input accepted by ``from_raw`` (malformed entries are skipped)
RawHeadersInput: TypeAlias = Mapping[Any, Any]

# Handler registered for a contract — parses raw form into a concrete object
FromRaw: TypeAlias = Callable[[Any], Any]
