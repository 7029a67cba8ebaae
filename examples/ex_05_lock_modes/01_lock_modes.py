"""Lock modes for the shared singleton cache.

1. Default ``LockMode.NONE`` assumes a single thread of control.
2. ``LockMode.THREAD`` serializes singleton construction across threads that
   begin scopes from the same provider.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from lazywire import LockMode, create_provider


class Engine:
    pass


def main() -> None:
    calls = 0
    calls_lock = threading.Lock()

    def make_engine() -> Engine:
        nonlocal calls
        with calls_lock:
            calls += 1
        time.sleep(0.05)
        return Engine()

    provider = create_provider(
        lambda builder: builder.add_singleton("engine", factory=make_engine),
        lock_mode=LockMode.THREAD,
    )
    print(f"lock_mode={provider.lock_mode.value}")  # => lock_mode=thread

    barrier = threading.Barrier(4)

    def resolve() -> Engine:
        barrier.wait(timeout=5.0)
        return provider.begin().engine

    with ThreadPoolExecutor(max_workers=4) as executor:
        engines = list(executor.map(lambda _: resolve(), range(4)))

    print(f"engine_calls={calls}")  # => engine_calls=1
    print(f"same_engine={all(engine is engines[0] for engine in engines)}")  # => same_engine=True


if __name__ == "__main__":
    main()
