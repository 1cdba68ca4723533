"""Local filesystem state store.

Stores each key as a JSON file under a data root with optional namespace
prefix::

    {data_root}/{prefix}/state/{key}.json

When prefix is None, the path collapses to::

    {data_root}/state/{key}.json

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path, so a crash mid-write never leaves a truncated
workspace document behind.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path

from anyio import to_thread


class LocalStateStore:
    """Local filesystem implementation of the StateStore protocol."""

    def __init__(self, data_root: str | Path, prefix: str | None = None) -> None:
        base = Path(data_root)
        if prefix:
            base = base / prefix
        self._base = base / "state"

    def path_for(self, key: str) -> Path:
        return self._base / f"{key}.json"

    async def read(self, key: str) -> str | None:
        return await to_thread.run_sync(partial(_read_file, self.path_for(key)))

    async def write(self, key: str, data: str) -> None:
        await to_thread.run_sync(partial(_atomic_write, self.path_for(key), data))

    async def delete(self, key: str) -> None:
        await to_thread.run_sync(partial(_unlink, self.path_for(key)))


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _unlink(path: Path) -> None:
    path.unlink(missing_ok=True)
