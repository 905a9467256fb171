"""Pluggable default implementations for the raw form contracts.

A ``Registry`` holds one current ``from_raw`` handler per abstract
contract (``AbstractHeaders``, ``AbstractMessage``). Concrete types
register themselves via ``install()`` and get back an uninstall
callable that restores whatever was registered before.

Provides:
- ``Registry``: explicit handler table with ``register``/``unregister``.
- ``registry_var``: the registry in effect for this task/thread.
- ``use_registry``: scope a registry to a block.

Thread safety:
    ``registry_var`` is a ``ContextVar``, so each task or thread sees
    its own current registry. A single ``Registry`` is not locked;
    callers serialize register/unregister pairs on a shared instance.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from msgkit._internal.types import FromRaw

logger = logging.getLogger("msgkit.registry")


@dataclass(frozen=True, slots=True, eq=False)
class Registration:
    """Token returned by ``Registry.register``.

    Remembers the handler that was current before registration so
    ``Registry.unregister`` can put it back.
    """

    contract: type
    handler: FromRaw
    previous: FromRaw | None


class Registry:
    """One current ``from_raw`` handler per contract.

    Registrations nest: the last registered handler wins, and
    unregistering restores the handler it replaced. Restores are
    expected in reverse order of registration; out-of-order restores
    are applied anyway and logged.
    """

    __slots__ = ("_handlers", "_active", "name")

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._handlers: dict[type, FromRaw] = {}
        self._active: list[Registration] = []

    def register(self, contract: type, handler: FromRaw) -> Registration:
        """Make *handler* the current handler for *contract*."""
        token = Registration(contract, handler, self._handlers.get(contract))
        self._handlers[contract] = handler
        self._active.append(token)
        logger.debug("%s: registered %r for %s", self.name, handler, contract.__name__)
        return token

    def unregister(self, token: Registration) -> None:
        """Restore the handler that was current before *token* was registered."""
        if token not in self._active:
            logger.debug("%s: %s registration already removed", self.name, token.contract.__name__)
            return
        after = self._active[self._active.index(token) + 1 :]
        later = [t for t in after if t.contract is token.contract]
        if later:
            logger.warning(
                "%s: unregistering %s out of order; %d later registration(s) still active",
                self.name,
                token.contract.__name__,
                len(later),
            )
        self._active.remove(token)
        if token.previous is None:
            self._handlers.pop(token.contract, None)
        else:
            self._handlers[token.contract] = token.previous
        logger.debug("%s: restored %r for %s", self.name, token.previous, token.contract.__name__)

    def resolve(self, contract: type) -> FromRaw | None:
        """Return the current handler for *contract*, or ``None``."""
        return self._handlers.get(contract)

    def __contains__(self, contract: object) -> bool:
        return contract in self._handlers

    def __repr__(self) -> str:
        names = ", ".join(c.__name__ for c in self._handlers)
        return f"<Registry {self.name!r} [{names}]>"


default_registry = Registry("default")
"""Registry used when no other registry is in scope."""

registry_var: ContextVar[Registry] = ContextVar("msgkit_registry", default=default_registry)
"""The registry in effect for the current context."""


def current_registry() -> Registry:
    """Return the registry in effect for the current context."""
    return registry_var.get()


@contextmanager
def use_registry(registry: Registry) -> Iterator[Registry]:
    """Make *registry* current for the duration of the block.

    Usage::

        with use_registry(Registry("tests")) as registry:
            uninstall = Message.install()
            ...
    """
    token = registry_var.set(registry)
    try:
        yield registry
    finally:
        registry_var.reset(token)
