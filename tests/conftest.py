"""Shared pytest fixtures for lazywire tests."""

from __future__ import annotations

from collections import Counter
from typing import Any

import pytest

from lazywire import ServiceProvider, ServiceRegistryBuilder, create_provider


@pytest.fixture()
def calls() -> Counter[str]:
    """Count factory invocations per service name."""
    return Counter()


@pytest.fixture()
def mixed_provider(calls: Counter[str]) -> ServiceProvider:
    """Provider with singleton ``a``, scoped ``b`` (needs ``a``) and transient ``c`` (needs ``a`` and ``b``)."""

    class A:
        def __init__(self) -> None:
            calls["a"] += 1

    class B:
        def __init__(self, context: Any) -> None:
            self.a = context.a
            calls["b"] += 1

    class C:
        def __init__(self, context: Any) -> None:
            self.a = context.a
            self.b = context.b
            calls["c"] += 1

    def build(builder: ServiceRegistryBuilder) -> None:
        builder.add_singleton("a", A).add_scoped("b", B).add_transient("c", C)

    return create_provider(build)
