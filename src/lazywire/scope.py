from __future__ import annotations

import logging
from collections.abc import Mapping
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING, Any

from lazywire.context import DependencyContext
from lazywire.exceptions import (
    CircularResolutionError,
    LifetimeEscalationError,
    ServiceNotRegisteredError,
)
from lazywire.providers import CreateFunction, Instance, Lifetime

if TYPE_CHECKING:
    from lazywire.registry import ServiceRegistry

logger = logging.getLogger(__name__)

_MISSING = object()


class ServiceScope:
    """Resolve services within one resolution boundary.

    A scope shares the registry, the singleton cache and the singleton lock of
    the provider that created it, and owns a private scoped-instance cache and
    a resolution stack. The stack holds the names currently under construction
    and is empty between top-level resolutions.

    Scopes are not thread-safe; use one scope per thread of control.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        singletons: dict[str, Instance],
        *,
        singleton_lock: AbstractContextManager[Any] | None = None,
        name: str | None = None,
    ) -> None:
        self._registry = registry
        self._singletons = singletons
        self._singleton_lock: AbstractContextManager[Any] = (
            singleton_lock if singleton_lock is not None else nullcontext()
        )
        self._scoped: dict[str, Instance] = {}
        self._path: list[str] = []
        self.name = name
        """Debug label shown in resolution error messages."""

    @property
    def registry(self) -> ServiceRegistry:
        return self._registry

    @property
    def path(self) -> tuple[str, ...]:
        """Names currently under construction, oldest first."""
        return tuple(self._path)

    def create_context(self, exotic_context: Mapping[str, Any] | None = None) -> DependencyContext:
        """Create a dependency context bound to this scope.

        Args:
            exotic_context: Optional mapping of extra entries that take
                precedence over registered services and bypass the scope.

        """
        return DependencyContext(self, exotic_context)

    def resolve(self, name: str, context: DependencyContext) -> Instance:
        """Resolve ``name`` through the cache matching its lifetime.

        On a cache miss the registered factory is invoked with ``context``, so
        the factory's own lookups recurse through this method depth-first.

        Args:
            name: Service name to resolve.
            context: Context handed to the factory on construction.

        Raises:
            CircularResolutionError: If ``name`` is already under construction.
            ServiceNotRegisteredError: If ``name`` is not registered.
            LifetimeEscalationError: If a scoped or transient service is
                constructed below a singleton.

        """
        self._raise_if_circular(name)
        self._raise_if_not_registered(name)
        descriptor = self._registry.get(name)
        lifetime = descriptor.lifetime

        if lifetime is Lifetime.SINGLETON:
            with self._singleton_lock:
                instance = self._singletons.get(name, _MISSING)
                if instance is _MISSING:
                    instance = self._construct(name, lifetime, descriptor.create, context)
                    self._singletons[name] = instance
            return instance

        if lifetime is Lifetime.SCOPED:
            instance = self._scoped.get(name, _MISSING)
            if instance is _MISSING:
                self._raise_if_lifetime_exceeded(name)
                instance = self._construct(name, lifetime, descriptor.create, context)
                self._scoped[name] = instance
            return instance

        self._raise_if_lifetime_exceeded(name)
        return self._construct(name, lifetime, descriptor.create, context)

    def _construct(
        self,
        name: str,
        lifetime: Lifetime,
        create: CreateFunction,
        context: DependencyContext,
    ) -> Instance:
        self._path.append(name)
        try:
            instance = create(context)
        finally:
            self._path.pop()
        logger.debug("Constructed %s service '%s' in scope %s", lifetime.value, name, self._label)
        return instance

    def _raise_if_not_registered(self, name: str) -> None:
        if self._registry.has(name):
            return
        msg = f"{self._prefix}Invalid service name: {self._format_path(-1, name)}"
        logger.debug(msg)
        raise ServiceNotRegisteredError(
            msg,
            service_name=name,
            path=(*self._path, name),
            scope_name=self.name,
        )

    def _raise_if_circular(self, name: str) -> None:
        if name not in self._path:
            return
        marked = self._path.index(name)
        msg = f"{self._prefix}Invalid service resolution: {self._format_path(marked, name)}"
        logger.debug(msg)
        raise CircularResolutionError(
            msg,
            service_name=name,
            path=(*self._path, name),
            scope_name=self.name,
        )

    def _raise_if_lifetime_exceeded(self, name: str) -> None:
        for index in range(len(self._path) - 1, -1, -1):
            if self._registry.get(self._path[index]).lifetime is Lifetime.SINGLETON:
                msg = f"{self._prefix}Invalid service lifetime: {self._format_path(index, name)}"
                logger.debug(msg)
                raise LifetimeEscalationError(
                    msg,
                    service_name=name,
                    path=(*self._path, name),
                    scope_name=self.name,
                )

    def _format_path(self, marked: int, name: str) -> str:
        entries = [f"[{entry}]" if index == marked else entry for index, entry in enumerate(self._path)]
        entries.append(f"[{name}]")
        return " -> ".join(entries)

    @property
    def _label(self) -> str:
        return "(unnamed)" if self.name is None else self.name

    @property
    def _prefix(self) -> str:
        return f"/{self._label}/ "

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
