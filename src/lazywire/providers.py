from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from lazywire.exceptions import InvalidRegistrationError

if TYPE_CHECKING:
    from lazywire.context import DependencyContext

Instance: TypeAlias = Any
"""A service instance produced by a registered target."""

CreateFunction: TypeAlias = Callable[["DependencyContext"], Instance]
"""A normalized single-argument factory that receives the dependency context."""

_CONTEXT_PARAMETER_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


class Lifetime(Enum):
    """Defines the lifetime of a service registered in the registry."""

    SINGLETON = "singleton"
    """A single instance is created and shared by every scope of the provider."""

    SCOPED = "scoped"
    """Instance is shared within a scope, different instances across scopes."""

    TRANSIENT = "transient"
    """A new instance is created every time the service is accessed."""


class TargetKind(Enum):
    """Declare how a registered target produces its instance."""

    CONCRETE = "concrete"
    """The target is a class and is instantiated."""

    FACTORY = "factory"
    """The target is a plain callable and is called."""


@dataclass(frozen=True, slots=True)
class ServiceTarget:
    """A registration target tagged with its kind.

    The kind is stated by the caller at registration time, so the engine never
    guesses whether a callable is a constructor or a factory.
    """

    kind: TargetKind
    target: Callable[..., Instance]

    @classmethod
    def concrete(cls, concrete_type: type[Any]) -> ServiceTarget:
        return cls(kind=TargetKind.CONCRETE, target=concrete_type)

    @classmethod
    def factory(cls, factory: Callable[..., Instance]) -> ServiceTarget:
        return cls(kind=TargetKind.FACTORY, target=factory)


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """The immutable ``(lifetime, create)`` pair registered under a service name."""

    lifetime: Lifetime
    """The lifetime policy of the service."""
    create: CreateFunction
    """Normalized factory invoked with the dependency context on a cache miss."""
    target: ServiceTarget | None = None
    """The original registration target, if the descriptor was built from one."""


class ServiceFactory:
    """Normalize registration targets into single-argument create functions."""

    @classmethod
    def from_target(cls, service_target: ServiceTarget) -> CreateFunction:
        """Build the create function for a tagged target.

        Concrete types are instantiated and factories are called. In both cases
        the dependency context is passed as the only positional argument when
        the target accepts one, and omitted when the target takes no
        positional parameters.

        Args:
            service_target: Tagged registration target.

        Raises:
            InvalidRegistrationError: If the target is not callable or a
                concrete target is not a class.

        """
        target = service_target.target
        if not callable(target):
            msg = f"Service target {target!r} is not callable."
            raise InvalidRegistrationError(msg)
        if service_target.kind is TargetKind.CONCRETE and not inspect.isclass(target):
            msg = f"Concrete target {target!r} must be a class; register it as a factory instead."
            raise InvalidRegistrationError(msg)

        if cls._accepts_context(target, service_target.kind):
            return target

        def create_without_context(_context: DependencyContext) -> Instance:
            return target()

        return create_without_context

    @classmethod
    def from_instance(cls, instance: Instance) -> CreateFunction:
        """Build a create function that always returns a pre-built instance."""

        def create_instance(_context: DependencyContext) -> Instance:
            return instance

        return create_instance

    @staticmethod
    def _accepts_context(target: Callable[..., Any], kind: TargetKind) -> bool:
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError):
            # Builtin-backed classes (dict, list subclasses) would consume the context as data.
            return kind is TargetKind.FACTORY
        return any(
            parameter.kind in _CONTEXT_PARAMETER_KINDS for parameter in signature.parameters.values()
        )
