from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lazywire.exceptions import InvalidRegistrationError, ServiceNotRegisteredError
from lazywire.providers import (
    Instance,
    Lifetime,
    ServiceDescriptor,
    ServiceFactory,
    ServiceTarget,
)

if TYPE_CHECKING:
    from typing_extensions import Self


class ServiceRegistry:
    """Store service descriptors indexed by service name.

    The registry is immutable once built. Iteration follows registration order;
    re-registering a name while building keeps its original position.
    """

    def __init__(self, descriptors: Mapping[str, ServiceDescriptor] | None = None) -> None:
        self._descriptors: Mapping[str, ServiceDescriptor] = MappingProxyType(dict(descriptors or {}))

    @classmethod
    def build(cls, build: Callable[[ServiceRegistryBuilder], object]) -> ServiceRegistry:
        """Run ``build`` against a fresh builder and freeze the result.

        Args:
            build: Callable that registers services on the builder. Its return
                value is ignored.

        """
        builder = ServiceRegistryBuilder()
        build(builder)
        return builder.build()

    @property
    def names(self) -> tuple[str, ...]:
        """Registered service names in registration order."""
        return tuple(self._descriptors)

    def get(self, name: str) -> ServiceDescriptor:
        """Get the descriptor registered under ``name``.

        Args:
            name: Service name to look up.

        Raises:
            ServiceNotRegisteredError: If no service is registered under ``name``.

        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            msg = f"Invalid service name: {name}"
            raise ServiceNotRegisteredError(msg, service_name=name)
        return descriptor

    def has(self, name: str) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __repr__(self) -> str:
        entries = ", ".join(f"{name}={descriptor.lifetime.value}" for name, descriptor in self._descriptors.items())
        return f"{type(self).__name__}({entries})"


class ServiceRegistryBuilder:
    """Collect service registrations and freeze them into a ``ServiceRegistry``.

    Each registration method records a descriptor under a name, replacing any
    prior registration for that name, and returns the builder for chaining.
    Exactly one of ``concrete_type`` or ``factory`` must be supplied.

    Examples:
        .. code-block:: python

            registry = (
                ServiceRegistryBuilder()
                .add_singleton("settings", Settings)
                .add_scoped("session", factory=lambda context: Session(context.settings))
                .add_transient("handler", Handler)
                .build()
            )

    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ServiceDescriptor] = {}

    def add_singleton(
        self,
        name: str,
        concrete_type: type[Any] | None = None,
        *,
        factory: Callable[..., Instance] | None = None,
    ) -> Self:
        """Register a service constructed once per provider."""
        return self.add(name, self._target(name, concrete_type, factory), lifetime=Lifetime.SINGLETON)

    def add_scoped(
        self,
        name: str,
        concrete_type: type[Any] | None = None,
        *,
        factory: Callable[..., Instance] | None = None,
    ) -> Self:
        """Register a service constructed once per scope."""
        return self.add(name, self._target(name, concrete_type, factory), lifetime=Lifetime.SCOPED)

    def add_transient(
        self,
        name: str,
        concrete_type: type[Any] | None = None,
        *,
        factory: Callable[..., Instance] | None = None,
    ) -> Self:
        """Register a service constructed on every access."""
        return self.add(name, self._target(name, concrete_type, factory), lifetime=Lifetime.TRANSIENT)

    def add_instance(self, name: str, instance: Instance) -> Self:
        """Register a pre-built value as a singleton.

        Re-registering the same name overrides the previous registration.
        """
        self._validate_name(name)
        self._descriptors[name] = ServiceDescriptor(
            lifetime=Lifetime.SINGLETON,
            create=ServiceFactory.from_instance(instance),
        )
        return self

    def add(self, name: str, target: ServiceTarget, *, lifetime: Lifetime) -> Self:
        """Register a tagged target under ``name`` with the given lifetime.

        Args:
            name: Service name used for lookups.
            target: Tagged target describing how to produce the instance.
            lifetime: Lifetime policy of the service.

        Raises:
            InvalidRegistrationError: If ``name`` is not a string or the target
                is invalid for its kind.

        """
        self._validate_name(name)
        self._descriptors[name] = ServiceDescriptor(
            lifetime=lifetime,
            create=ServiceFactory.from_target(target),
            target=target,
        )
        return self

    def build(self) -> ServiceRegistry:
        return ServiceRegistry(self._descriptors)

    def _target(
        self,
        name: str,
        concrete_type: type[Any] | None,
        factory: Callable[..., Instance] | None,
    ) -> ServiceTarget:
        if concrete_type is not None and factory is not None:
            msg = f"Service '{name}': provide either `concrete_type` or `factory`, not both."
            raise InvalidRegistrationError(msg)
        if concrete_type is not None:
            return ServiceTarget.concrete(concrete_type)
        if factory is not None:
            return ServiceTarget.factory(factory)
        msg = f"Service '{name}': either `concrete_type` or `factory` must be provided."
        raise InvalidRegistrationError(msg)

    @staticmethod
    def _validate_name(name: object) -> None:
        if not isinstance(name, str):
            msg = f"Service name must be a string, got {name!r}."
            raise InvalidRegistrationError(msg)
