"""Exotic context: per-scope values that are not part of the registry.

An exotic mapping supplied to ``begin`` or ``create_context`` takes precedence
over registered services and is visible to every factory of the scope.
"""

from __future__ import annotations

from typing import Any

from lazywire import create_provider


class Settings:
    def __init__(self) -> None:
        self.region = "eu"


class RequestHandler:
    def __init__(self, context: Any) -> None:
        self.request_id = context.request_id
        self.region = context.settings.region


def main() -> None:
    provider = create_provider(
        lambda builder: builder.add_singleton("settings", Settings).add_scoped("handler", RequestHandler),
    )

    scope = provider.begin_scope("request")
    context = scope.create_context({"request_id": "req-42"})
    handler = context.handler
    print(f"request_id={handler.request_id} region={handler.region}")  # => request_id=req-42 region=eu

    overridden = provider.begin({"request_id": "req-43", "settings": Settings()})
    print(f"override_bypasses_registry={overridden.settings is not context.settings}")  # => override_bypasses_registry=True

    resolved = dict(provider.begin({"request_id": "req-44"}))
    print(f"spread={sorted(resolved)}")  # => spread=['handler', 'request_id', 'settings']


if __name__ == "__main__":
    main()
