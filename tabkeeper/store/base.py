"""State store interface for workspace persistence.

The state store is a plain key-value slot: one fixed key holds the whole
serialized ``WorkspaceState`` document.  Callers read the blob, mutate it in
memory and write the whole thing back.  Serializing those read-modify-write
cycles is the repository's job, not the store's.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StateStore(Protocol):
    """Async protocol for reading and writing JSON blobs by key.

    Storage layout (keyed by state key):
        {root}/state/{key}.json
    """

    async def read(self, key: str) -> str | None:
        """Return the stored blob, or ``None`` if nothing was written yet."""
        ...

    async def write(self, key: str, data: str) -> None:
        """Replace the stored blob."""
        ...

    async def delete(self, key: str) -> None:
        """Remove the stored blob.  No-op if not found."""
        ...
