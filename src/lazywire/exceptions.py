from __future__ import annotations

from collections.abc import Sequence


class LazyWireError(Exception):
    """Represent a base class for all lazywire-specific failures.

    Catch this type when you want to handle any lazywire error path without
    matching each concrete exception class individually.
    """


class InvalidRegistrationError(LazyWireError):
    """Signal invalid registration input passed to ``ServiceRegistryBuilder``.

    Raised by ``add_singleton``, ``add_scoped``, ``add_transient`` and ``add``
    when the service name is not a string, when both or neither of
    ``concrete_type``/``factory`` are given, or when the target is not a valid
    callable for its declared kind.
    """


class ResolveError(LazyWireError):
    """Signal a failure detected while resolving a service.

    Every resolution failure is a programmer error detected synchronously at
    access time. The error carries the requested ``service_name``, the
    resolution ``path`` that was active when it was detected and the label of
    the scope (``scope_name``) for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: object = None,
        path: Sequence[str] = (),
        scope_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.service_name = service_name
        self.path = tuple(path)
        self.scope_name = scope_name


class ServiceNotRegisteredError(ResolveError):
    """Signal that a service name has no registration in the registry.

    Typical fix is registering the service on the builder passed to
    ``create_provider`` or supplying it through an exotic context.
    """


class InvalidServiceNameError(ResolveError):
    """Signal a lookup with a key that is not a string."""


class CircularResolutionError(ResolveError):
    """Signal that a service was requested while it is already being constructed.

    The message shows the active path with the first occurrence of the
    repeated service and the new request marked, e.g.
    ``/(unnamed)/ Invalid service resolution: a -> [b] -> c -> [b]``.
    """


class LifetimeEscalationError(ResolveError):
    """Signal that a singleton transitively depends on a shorter-lived service.

    A singleton outlives every scope, so capturing a scoped or transient
    dependency would leak it across scope boundaries. The message marks the
    nearest singleton on the active path and the offending request, e.g.
    ``/(unnamed)/ Invalid service lifetime: [a] -> b -> [c]``.
    """
