"""State store implementations for workspace persistence."""

from tabkeeper.store.base import StateStore
from tabkeeper.store.local import LocalStateStore

__all__ = ["LocalStateStore", "StateStore"]
