"""Tests for lifetime caching across scopes."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable

import pytest

from lazywire import ServiceProvider, create_provider


class Service:
    pass


def _made(calls: Counter[str], name: str) -> object:
    calls[name] += 1
    return object()


@pytest.fixture()
def counting_factory(calls: Counter[str]) -> Callable[[], Service]:
    def factory() -> Service:
        calls["service"] += 1
        return Service()

    return factory


class TestSingleton:
    def test_constructed_once_across_scopes(self, calls: Counter[str], counting_factory: Callable[[], Service]) -> None:
        provider = create_provider(lambda builder: builder.add_singleton("service", factory=counting_factory))

        first = provider.begin()
        assert calls["service"] == 0
        instance = first.service
        assert calls["service"] == 1
        assert first.service is instance

        second = provider.begin()
        assert second.service is instance
        assert calls["service"] == 1

    def test_providers_over_same_registry_keep_separate_caches(
        self,
        calls: Counter[str],
        counting_factory: Callable[[], Service],
    ) -> None:
        first = create_provider(lambda builder: builder.add_singleton("service", factory=counting_factory))
        second = create_provider(first.registry)

        assert first.begin().service is not second.begin().service
        assert calls["service"] == 2


class TestScoped:
    def test_constructed_once_per_scope(self, calls: Counter[str], counting_factory: Callable[[], Service]) -> None:
        provider = create_provider(lambda builder: builder.add_scoped("service", factory=counting_factory))

        first = provider.begin()
        instance = first.service
        assert first.service is instance
        assert calls["service"] == 1

        second = provider.begin()
        assert second.service is not instance
        assert second.service is second.service
        assert calls["service"] == 2

    def test_contexts_of_one_scope_share_scoped_instances(self, counting_factory: Callable[[], Service]) -> None:
        provider = create_provider(lambda builder: builder.add_scoped("service", factory=counting_factory))
        scope = provider.begin_scope()

        assert scope.create_context().service is scope.create_context().service


class TestTransient:
    def test_constructed_on_every_access(self, calls: Counter[str], counting_factory: Callable[[], Service]) -> None:
        provider = create_provider(lambda builder: builder.add_transient("service", factory=counting_factory))

        first = provider.begin()
        assert first.service is not first.service
        assert calls["service"] == 2

        second = provider.begin()
        _ = second.service
        _ = second.service
        assert calls["service"] == 4


class TestDependentContext:
    def test_all_singletons(self, calls: Counter[str]) -> None:
        provider = create_provider(
            lambda builder: builder.add_singleton("a", factory=lambda: _made(calls, "a"))
            .add_singleton("b", factory=lambda context: (context.a, _made(calls, "b")))
            .add_singleton("c", factory=lambda context: (context.a, context.b, _made(calls, "c"))),
        )

        context = provider.begin()
        _ = context.b
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 0)
        _ = context.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)

        provider.begin().c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)

    def test_all_scoped(self, calls: Counter[str]) -> None:
        provider = create_provider(
            lambda builder: builder.add_scoped("a", factory=lambda: _made(calls, "a"))
            .add_scoped("b", factory=lambda context: (context.a, _made(calls, "b")))
            .add_scoped("c", factory=lambda context: (context.a, context.b, _made(calls, "c"))),
        )

        first = provider.begin()
        _ = first.a
        _ = first.b
        _ = first.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)

        second = provider.begin()
        _ = second.c
        assert (calls["a"], calls["b"], calls["c"]) == (2, 2, 2)

    def test_all_transient(self, calls: Counter[str]) -> None:
        provider = create_provider(
            lambda builder: builder.add_transient("a", factory=lambda: _made(calls, "a"))
            .add_transient("b", factory=lambda context: (context.a, _made(calls, "b")))
            .add_transient("c", factory=lambda context: (context.a, context.b, _made(calls, "c"))),
        )

        context = provider.begin()
        _ = context.a
        assert (calls["a"], calls["b"], calls["c"]) == (1, 0, 0)
        _ = context.b
        assert (calls["a"], calls["b"], calls["c"]) == (2, 1, 0)
        _ = context.c
        assert (calls["a"], calls["b"], calls["c"]) == (4, 2, 1)


class TestMixedLifetimes:
    def test_root_to_leaf(self, calls: Counter[str], mixed_provider: ServiceProvider) -> None:
        first = mixed_provider.begin()
        _ = first.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)
        _ = first.b
        _ = first.a
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)

        second = mixed_provider.begin()
        _ = second.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 2, 2)
        _ = second.b
        _ = second.a
        assert (calls["a"], calls["b"], calls["c"]) == (1, 2, 2)

    def test_leaf_to_root(self, calls: Counter[str], mixed_provider: ServiceProvider) -> None:
        first = mixed_provider.begin()
        _ = first.a
        assert (calls["a"], calls["b"], calls["c"]) == (1, 0, 0)
        _ = first.b
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 0)
        _ = first.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)

        second = mixed_provider.begin()
        _ = second.a
        assert (calls["a"], calls["b"], calls["c"]) == (1, 1, 1)
        _ = second.b
        assert (calls["a"], calls["b"], calls["c"]) == (1, 2, 1)
        _ = second.c
        assert (calls["a"], calls["b"], calls["c"]) == (1, 2, 2)

    def test_dependencies_are_the_cached_instances(self, mixed_provider: ServiceProvider) -> None:
        context = mixed_provider.begin()

        c = context.c

        assert c.a is context.a
        assert c.b is context.b
        assert c.b.a is context.a
        assert context.c is not c

    def test_transient_accesses_within_one_expression(self, calls: Counter[str], mixed_provider: ServiceProvider) -> None:
        context = mixed_provider.begin()

        pair = (context.c, context.c)

        assert pair[0] is not pair[1]
        assert calls["c"] == 2
        assert calls["b"] == 1


def test_scope_name_defaults_to_none_and_is_mutable(mixed_provider: ServiceProvider) -> None:
    scope = mixed_provider.begin_scope()
    assert scope.name is None

    scope.name = "request"
    assert scope.name == "request"
    assert mixed_provider.begin_scope("job").name == "job"


def test_resolution_stack_is_empty_at_rest(mixed_provider: ServiceProvider) -> None:
    scope = mixed_provider.begin_scope()
    context = scope.create_context()

    _ = context.c

    assert scope.path == ()
