from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for the provider-wide singleton cache.

    Scopes created by the same provider share its singleton cache. Use
    ``THREAD`` when several threads begin scopes from one provider and may
    construct the same singleton concurrently.
    """

    THREAD = "thread"
    """Guard singleton lookup, construction and storage with a re-entrant ``threading.RLock``."""

    NONE = "none"
    """Disable locking around the singleton cache. Resolution assumes a single thread."""
