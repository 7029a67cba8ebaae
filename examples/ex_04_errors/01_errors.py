"""Errors and troubleshooting.

Every resolution failure is a ``ResolveError`` carrying the scope label and
the active resolution path:

1. ``ServiceNotRegisteredError`` for unknown names.
2. ``CircularResolutionError`` when a service depends on itself, directly or not.
3. ``LifetimeEscalationError`` when a singleton depends on a scoped service.
"""

from __future__ import annotations

from lazywire import (
    CircularResolutionError,
    LifetimeEscalationError,
    ResolveError,
    ServiceNotRegisteredError,
    create_provider,
)


def main() -> None:
    provider = create_provider(
        lambda builder: builder.add_scoped("a", factory=lambda context: context.b)
        .add_scoped("b", factory=lambda context: context.c)
        .add_scoped("c", factory=lambda context: context.b)
        .add_singleton("cache", factory=lambda context: context.session)
        .add_scoped("session", factory=object),
    )

    try:
        _ = provider.begin().missing
    except ServiceNotRegisteredError as error:
        print(error)  # => /(unnamed)/ Invalid service name: [missing]

    scope = provider.begin_scope("request")
    try:
        _ = scope.create_context().a
    except CircularResolutionError as error:
        print(error)  # => /request/ Invalid service resolution: a -> [b] -> c -> [b]

    try:
        _ = provider.begin().cache
    except LifetimeEscalationError as error:
        print(error)  # => /(unnamed)/ Invalid service lifetime: [cache] -> [session]
        print(f"is_resolve_error={isinstance(error, ResolveError)}")  # => is_resolve_error=True

    print(f"stack_after_failure={scope.path}")  # => stack_after_failure=()


if __name__ == "__main__":
    main()
