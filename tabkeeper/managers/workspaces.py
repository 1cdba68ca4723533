"""Workspace CRUD operations.

Encapsulates all access to the persisted ``WorkspaceState`` document: list,
get, rename, delete and the current-workspace pointer.  Operations that need
the editor host (save, load, restore-previous) live in ``tab_workspaces``.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from loguru import logger

from tabkeeper.models.workspace import (
    WORKSPACE_NAME_MAX_LENGTH,
    WORKSPACE_NAME_MIN_LENGTH,
    WORKSPACE_NAME_PATTERN,
    Workspace,
    WorkspaceState,
    WorkspaceStatistics,
    utcnow,
)

if TYPE_CHECKING:
    from tabkeeper.store.base import StateStore

DEFAULT_STATE_KEY = "tabkeeper.tabWorkspaces"


class DuplicateWorkspaceError(ValueError):
    """Raised when a workspace with the given name already exists."""


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace is not found."""


class InvalidWorkspaceNameError(ValueError):
    """Raised when a workspace name breaks the naming rules."""


def normalize_workspace_name(name: str) -> str:
    """Return the trimmed name.  Raises ``InvalidWorkspaceNameError`` if nothing is left."""
    trimmed = name.strip()
    if not trimmed:
        msg = "Workspace name cannot be empty"
        raise InvalidWorkspaceNameError(msg)
    return trimmed


def validate_workspace_name(name: str) -> str:
    """Apply the naming rules for user-entered names and return the trimmed name.

    Store operations only require a non-empty name; callers that take names
    from a user (the CLI, editor prompts) check them here first.
    """
    trimmed = normalize_workspace_name(name)
    if len(trimmed) < WORKSPACE_NAME_MIN_LENGTH:
        msg = f"Workspace name must be at least {WORKSPACE_NAME_MIN_LENGTH} characters long"
        raise InvalidWorkspaceNameError(msg)
    if len(trimmed) > WORKSPACE_NAME_MAX_LENGTH:
        msg = f"Workspace name cannot be longer than {WORKSPACE_NAME_MAX_LENGTH} characters"
        raise InvalidWorkspaceNameError(msg)
    if not WORKSPACE_NAME_PATTERN.match(trimmed):
        msg = "Workspace name can only contain letters, numbers, spaces, hyphens, underscores, and dots"
        raise InvalidWorkspaceNameError(msg)
    return trimmed


class WorkspaceRepository:
    """Serialized access to the single persisted ``WorkspaceState`` document.

    Every mutation is a whole-document read-modify-write.  ``transaction``
    holds an ``asyncio.Lock`` for the duration so two coroutines cannot
    interleave their writes.  The lock is not reentrant: do not open a
    transaction from inside another one.
    """

    def __init__(self, store: StateStore, key: str = DEFAULT_STATE_KEY) -> None:
        self._store = store
        self._key = key
        self._lock = asyncio.Lock()

    async def read(self) -> WorkspaceState:
        raw = await self._store.read(self._key)
        if raw is None:
            return WorkspaceState()
        return WorkspaceState.model_validate_json(raw)

    async def write(self, state: WorkspaceState) -> None:
        await self._store.write(self._key, state.model_dump_json(indent=2))

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[WorkspaceState]:
        """Yield the current state; persist it if the block exits cleanly."""
        async with self._lock:
            state = await self.read()
            yield state
            await self.write(state)


async def list_workspaces(repo: WorkspaceRepository) -> list[Workspace]:
    """List all workspaces, most recently modified first."""
    state = await repo.read()
    return sorted(state.workspaces, key=lambda w: w.last_modified, reverse=True)


async def get_workspace(repo: WorkspaceRepository, name: str) -> Workspace:
    """Get a workspace by name.  Raises ``WorkspaceNotFoundError`` if missing."""
    workspace = (await repo.read()).find(name)
    if workspace is None:
        raise WorkspaceNotFoundError(name)
    return workspace


async def delete_workspace(repo: WorkspaceRepository, name: str) -> None:
    """Delete a workspace.  Raises ``WorkspaceNotFoundError`` if missing.

    Deleting the current workspace clears the current pointer.
    """
    async with repo.transaction() as state:
        if not state.remove(name):
            raise WorkspaceNotFoundError(name)
        if state.current_workspace == name:
            state.current_workspace = None
    logger.info("Deleted workspace {!r}", name)


async def rename_workspace(repo: WorkspaceRepository, old_name: str, new_name: str) -> Workspace:
    """Rename a workspace, keeping the current pointer on it.

    Raises, in this order, ``WorkspaceNotFoundError`` if ``old_name`` is
    missing, ``DuplicateWorkspaceError`` if ``new_name`` is taken and
    ``InvalidWorkspaceNameError`` if ``new_name`` is blank.
    """
    new_name = new_name.strip()
    async with repo.transaction() as state:
        workspace = state.find(old_name)
        if workspace is None:
            raise WorkspaceNotFoundError(old_name)
        if state.find(new_name) is not None:
            raise DuplicateWorkspaceError(new_name)
        new_name = normalize_workspace_name(new_name)

        workspace.name = new_name
        workspace.last_modified = utcnow()
        if state.current_workspace == old_name:
            state.current_workspace = new_name

    logger.info("Renamed workspace {!r} to {!r}", old_name, new_name)
    return workspace


async def get_current_workspace_name(repo: WorkspaceRepository) -> str | None:
    """Name of the current workspace, or ``None`` if unset or since deleted."""
    current = (await repo.read()).current
    return current.name if current else None


async def clear_current_workspace(repo: WorkspaceRepository) -> None:
    """Unset the current workspace without deleting it."""
    async with repo.transaction() as state:
        state.current_workspace = None


async def get_workspace_statistics(repo: WorkspaceRepository) -> WorkspaceStatistics:
    state = await repo.read()
    current = state.current
    return WorkspaceStatistics(
        total_workspaces=len(state.workspaces),
        current_workspace=current.name if current else None,
        has_previous_workspace=state.previous_workspace is not None,
    )
