"""Tab workspace manager -- save, load and restore-previous.

These operations span both backends:

- **Editor host**: the live pane set that is captured or replaced
- **Workspace repository**: the persisted ``WorkspaceState`` document

Each public method holds an operation lock for its whole run, so a second
save or load issued while one is mid-flight waits instead of interleaving
its host calls and state writes with the first.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from loguru import logger

from tabkeeper.execution.extractor import extract_descriptors
from tabkeeper.managers.workspaces import WorkspaceNotFoundError, normalize_workspace_name
from tabkeeper.models.tab import FILE_SCHEME, TabDescriptor, uri_basename, uri_scheme
from tabkeeper.models.workspace import Workspace, utcnow

if TYPE_CHECKING:
    from tabkeeper.execution.reopen import TabReopener
    from tabkeeper.host.base import EditorHost
    from tabkeeper.managers.workspaces import WorkspaceRepository
    from tabkeeper.models.tab import Pane
    from tabkeeper.models.workspace import ReopenResult


class NoPreviousWorkspaceError(LookupError):
    """Raised when restoring the previous workspace but none was auto-saved."""


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def descriptor_from_stored(uri: str) -> TabDescriptor:
    """Rebuild a descriptor from a persisted resource identifier.

    Only ``file`` resources can be restored; anything else comes back
    unresolved so the executor counts it as skipped.
    """
    if uri_scheme(uri) != FILE_SCHEME:
        logger.debug("Skipping non-file URI: {}", uri)
        return TabDescriptor.unresolved(uri)
    return TabDescriptor.document(uri, label=uri_basename(uri), is_pinned=True)


class TabWorkspaceManager:
    """Captures the open tabs into named workspaces and restores them."""

    def __init__(
        self,
        repo: WorkspaceRepository,
        host: EditorHost,
        reopener: TabReopener,
        *,
        lock: asyncio.Lock | None = None,
    ) -> None:
        self._repo = repo
        self._host = host
        self._reopener = reopener
        # Shared with TabSorter when both drive the same host.
        self._operation_lock = lock or asyncio.Lock()

    # -- Save ------------------------------------------------------------------

    async def save_current_tabs(self, name: str, *, is_auto_save: bool = False) -> Workspace:
        """Save the open tabs.

        A named save replaces any workspace with the same name and makes it
        current.  An auto-save only overwrites the previous-workspace slot.
        Names are trimmed; ``InvalidWorkspaceNameError`` is raised for a blank
        name on a named save.
        """
        if not is_auto_save:
            name = normalize_workspace_name(name)
        async with self._operation_lock:
            panes = await self._host.list_open_panes()
            return await self._save(name, panes, is_auto_save=is_auto_save)

    async def _save(self, name: str, panes: list[Pane], *, is_auto_save: bool) -> Workspace:
        tabs = [d.resolved_uri for d in extract_descriptors(panes) if d.is_resolvable]
        workspace = Workspace(name=name, tabs=tabs)

        async with self._repo.transaction() as state:
            if is_auto_save:
                state.previous_workspace = workspace
            else:
                state.remove(name)
                state.workspaces.append(workspace)
                state.current_workspace = name

        if is_auto_save:
            logger.debug("Auto-saved previous workspace with {} tabs", len(tabs))
        else:
            logger.info("Saved workspace {!r} with {} tabs", name, len(tabs))
        return workspace

    # -- Load ------------------------------------------------------------------

    async def load_workspace(self, name: str, *, auto_save_current: bool = False) -> ReopenResult:
        """Replace the open tabs with workspace ``name``.

        Raises ``WorkspaceNotFoundError`` (store untouched) if there is no such
        workspace and ``BatchCloseError`` if the open tabs could not be closed.
        Panes that fail to reopen are counted in ``skipped``.
        """
        async with self._operation_lock:
            return await self._load(name, auto_save_current=auto_save_current)

    async def _load(self, name: str, *, auto_save_current: bool) -> ReopenResult:
        workspace = (await self._repo.read()).find(name)
        if workspace is None:
            raise WorkspaceNotFoundError(name)

        panes = await self._host.list_open_panes()
        if auto_save_current and panes:
            await self._save(f"auto-save-{_epoch_ms()}", panes, is_auto_save=True)

        targets = [descriptor_from_stored(uri) for uri in workspace.tabs]
        result = await self._reopener.execute(targets, live_panes=panes)

        async with self._repo.transaction() as state:
            state.current_workspace = name
            loaded = state.find(name)
            if loaded is not None:
                loaded.last_modified = utcnow()

        if result.skipped:
            logger.info(
                "Loaded workspace {!r} with {} tabs ({} skipped - deleted, binary or non-file)",
                name,
                result.opened,
                result.skipped,
            )
        else:
            logger.info("Loaded workspace {!r} with {} tabs", name, result.opened)
        return result

    # -- Restore previous ------------------------------------------------------

    async def restore_previous_workspace(self) -> tuple[Workspace, ReopenResult]:
        """Turn the auto-saved slot into a named workspace and load it.

        The slot is cleared once the load completes.  If the load fails the
        restored workspace is removed again and the slot is kept, so the
        restore can be retried.  Raises ``NoPreviousWorkspaceError`` if the
        slot is empty.
        """
        async with self._operation_lock:
            async with self._repo.transaction() as state:
                previous = state.previous_workspace
                if previous is None:
                    raise NoPreviousWorkspaceError
                restored = Workspace(name=f"restored-{_epoch_ms()}", tabs=list(previous.tabs))
                state.remove(restored.name)
                state.workspaces.append(restored)

            try:
                result = await self._load(restored.name, auto_save_current=False)
            except Exception:
                async with self._repo.transaction() as state:
                    state.remove(restored.name)
                raise

            async with self._repo.transaction() as state:
                state.previous_workspace = None

        logger.info("Restored previous workspace as {!r}", restored.name)
        return restored, result
