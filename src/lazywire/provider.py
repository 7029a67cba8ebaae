from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from lazywire.context import DependencyContext
from lazywire.lock_mode import LockMode
from lazywire.providers import Instance
from lazywire.registry import ServiceRegistry, ServiceRegistryBuilder
from lazywire.scope import ServiceScope

logger = logging.getLogger(__name__)


class ServiceProvider:
    """Hold a registry and the singleton cache shared by every scope it begins.

    The provider performs no resolution itself. Singletons constructed in one
    scope are visible to, and reused by, every other scope of the same
    provider. Separate providers never share singletons, even when they are
    created over the same registry.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        *,
        lock_mode: LockMode = LockMode.NONE,
    ) -> None:
        """Initialize a provider over a built registry.

        Args:
            registry: Frozen service registry.
            lock_mode: Locking strategy for the singleton cache. Use
                ``LockMode.THREAD`` when scopes of this provider resolve
                singletons from several threads.

        """
        self._registry = registry
        self._lock_mode = lock_mode
        self._singletons: dict[str, Instance] = {}
        self._singleton_lock = threading.RLock() if lock_mode is LockMode.THREAD else None

    @property
    def registry(self) -> ServiceRegistry:
        return self._registry

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def begin_scope(self, name: str | None = None) -> ServiceScope:
        """Create a new scope bound to this provider's registry and singleton cache.

        Args:
            name: Optional debug label included in resolution error messages.

        """
        logger.debug("Beginning scope %s", "(unnamed)" if name is None else name)
        return ServiceScope(
            self._registry,
            self._singletons,
            singleton_lock=self._singleton_lock,
            name=name,
        )

    def begin(self, exotic_context: Mapping[str, Any] | None = None) -> DependencyContext:
        """Begin a new unnamed scope and return its dependency context.

        Examples:
            .. code-block:: python

                context = provider.begin()
                handler = context.handler

        """
        return self.begin_scope().create_context(exotic_context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(services={len(self._registry)}, lock_mode={self._lock_mode.value})"


def create_provider(
    registry_or_build: ServiceRegistry | Callable[[ServiceRegistryBuilder], object],
    *,
    lock_mode: LockMode = LockMode.NONE,
) -> ServiceProvider:
    """Create a provider from an existing registry or a build callable.

    Args:
        registry_or_build: Either a built ``ServiceRegistry`` or a callable
            that registers services on a fresh ``ServiceRegistryBuilder``.
        lock_mode: Locking strategy for the singleton cache.

    Examples:
        .. code-block:: python

            provider = create_provider(
                lambda builder: builder
                .add_singleton("settings", Settings)
                .add_scoped("session", Session),
            )

    """
    if isinstance(registry_or_build, ServiceRegistry):
        registry = registry_or_build
    else:
        registry = ServiceRegistry.build(registry_or_build)
    return ServiceProvider(registry, lock_mode=lock_mode)
