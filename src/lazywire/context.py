from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from lazywire.exceptions import InvalidServiceNameError

if TYPE_CHECKING:
    from lazywire.scope import ServiceScope


class DependencyContext(Mapping[str, Any]):
    """Lazy, name-indexed view over the services of one scope.

    Reading a name resolves it: ``context.resolve("db")``, ``context["db"]``
    and ``context.db`` are equivalent. The context holds no cache; every read
    is delegated to the owning scope, which caches according to the service
    lifetime. Entries of the optional exotic mapping take precedence and are
    returned as-is without involving the scope.

    Iterating the context yields registered names followed by exotic-only
    names, so ``dict(context)`` resolves every service.
    Contexts compare and hash by identity.

    Examples:
        .. code-block:: python

            context = provider.begin()
            repository = context.repository
            everything = dict(context)

    """

    __slots__ = ("_exotic_context", "_scope")

    def __init__(
        self,
        scope: ServiceScope,
        exotic_context: Mapping[str, Any] | None = None,
    ) -> None:
        self._scope = scope
        self._exotic_context = exotic_context

    @property
    def scope(self) -> ServiceScope:
        return self._scope

    def resolve(self, name: str) -> Any:
        """Resolve ``name`` from the exotic mapping or the owning scope.

        Raises:
            InvalidServiceNameError: If ``name`` is not a string.
            ResolveError: If the scope fails to resolve ``name``.

        """
        if not isinstance(name, str):
            msg = f"Invalid service name: {name!r}"
            raise InvalidServiceNameError(msg, service_name=name, scope_name=self._scope.name)
        if self._exotic_context is not None and name in self._exotic_context:
            return self._exotic_context[name]
        return self._scope.resolve(name, self)

    def get(self, name: str, default: Any = None) -> Any:  # type: ignore[override]
        """Resolve ``name`` if it is registered or exotic, otherwise return ``default``."""
        if name not in self:
            return default
        return self.resolve(name)

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __getattr__(self, name: str) -> Any:
        # Protocol hooks (``__await__``, ``__deepcopy__``, ``_pytest*``) must not build services.
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resolve(name)

    def __contains__(self, name: object) -> bool:
        if self._exotic_context is not None and name in self._exotic_context:
            return True
        return isinstance(name, str) and self._scope.registry.has(name)

    def __iter__(self) -> Iterator[str]:
        registry = self._scope.registry
        yield from registry.names
        if self._exotic_context is not None:
            yield from (name for name in self._exotic_context if not registry.has(name))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    # Comparing by content would construct every service.
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"<{type(self).__name__} scope={self._scope.name!r}>"
