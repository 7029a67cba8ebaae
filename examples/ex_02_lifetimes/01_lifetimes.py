"""Lifetimes: singleton, scoped and transient caching.

This module covers:

1. ``SINGLETON`` services are built once per provider and shared by every scope.
2. ``SCOPED`` services are built once per scope.
3. ``TRANSIENT`` services are built on every access.
4. Resolution order does not change how often each factory runs.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from lazywire import ServiceRegistryBuilder, create_provider

calls: Counter[str] = Counter()


class Clock:
    def __init__(self) -> None:
        calls["clock"] += 1


class Session:
    def __init__(self, context: Any) -> None:
        self.clock = context.clock
        calls["session"] += 1


class Command:
    def __init__(self, context: Any) -> None:
        self.clock = context.clock
        self.session = context.session
        calls["command"] += 1


def _counts() -> str:
    return f"clock={calls['clock']} session={calls['session']} command={calls['command']}"


def main() -> None:
    registry = (
        ServiceRegistryBuilder()
        .add_singleton("clock", Clock)
        .add_scoped("session", Session)
        .add_transient("command", Command)
        .build()
    )
    provider = create_provider(registry)

    first = provider.begin()
    _ = first.command
    print(_counts())  # => clock=1 session=1 command=1

    _ = first.session
    _ = first.clock
    print(_counts())  # => clock=1 session=1 command=1

    _ = first.command
    print(_counts())  # => clock=1 session=1 command=2

    second = provider.begin()
    _ = second.clock
    _ = second.session
    _ = second.command
    print(_counts())  # => clock=1 session=2 command=3

    print(f"shared_clock={first.clock is second.clock}")  # => shared_clock=True
    print(f"shared_session={first.session is second.session}")  # => shared_session=False
    print(f"fresh_command={second.command is not second.command}")  # => fresh_command=True


if __name__ == "__main__":
    main()
