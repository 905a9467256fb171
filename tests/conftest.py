"""Shared fixtures — every test runs against its own registry."""

from collections.abc import Iterator

import pytest

from msgkit.registry import Registry, use_registry


@pytest.fixture(autouse=True)
def registry() -> Iterator[Registry]:
    """A fresh registry scoped to the test, so installs never leak."""
    with use_registry(Registry("test")) as reg:
        yield reg
