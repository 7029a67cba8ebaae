"""Quickstart: register named services and let factories pull their dependencies.

Each service receives the dependency context and reads what it needs by name.
Nothing is built until a name is read.
"""

from __future__ import annotations

from typing import Any

from lazywire import create_provider


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, context: Any) -> None:
        self.database = context.database


class UserService:
    def __init__(self, context: Any) -> None:
        self.repository = context.repository


def main() -> None:
    provider = create_provider(
        lambda builder: builder.add_singleton("database", Database)
        .add_scoped("repository", UserRepository)
        .add_transient("service", UserService),
    )
    print(f"names={','.join(provider.registry.names)}")  # => names=database,repository,service

    context = provider.begin()
    service = context.service

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
