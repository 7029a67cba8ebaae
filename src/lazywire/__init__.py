from lazywire.context import DependencyContext
from lazywire.exceptions import (
    CircularResolutionError,
    InvalidRegistrationError,
    InvalidServiceNameError,
    LazyWireError,
    LifetimeEscalationError,
    ResolveError,
    ServiceNotRegisteredError,
)
from lazywire.lock_mode import LockMode
from lazywire.provider import ServiceProvider, create_provider
from lazywire.providers import (
    Lifetime,
    ServiceDescriptor,
    ServiceFactory,
    ServiceTarget,
    TargetKind,
)
from lazywire.registry import ServiceRegistry, ServiceRegistryBuilder
from lazywire.scope import ServiceScope

__all__ = [
    "CircularResolutionError",
    "DependencyContext",
    "InvalidRegistrationError",
    "InvalidServiceNameError",
    "LazyWireError",
    "Lifetime",
    "LifetimeEscalationError",
    "LockMode",
    "ResolveError",
    "ServiceDescriptor",
    "ServiceFactory",
    "ServiceNotRegisteredError",
    "ServiceProvider",
    "ServiceRegistry",
    "ServiceRegistryBuilder",
    "ServiceScope",
    "ServiceTarget",
    "TargetKind",
    "create_provider",
]
