"""Application wiring.

Builds the object graph for one editor host::

    LocalStateStore -> WorkspaceRepository --+
                                             +-> TabWorkspaceManager
    EditorHost -> TabReopener ---------------+-> TabSorter

Host integrations create one ``TabkeeperApp`` per editor window and call its
methods from their command handlers.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tabkeeper.execution.reopen import TabReopener
from tabkeeper.execution.sorting import TabSorter
from tabkeeper.managers.tab_workspaces import TabWorkspaceManager
from tabkeeper.managers.workspaces import WorkspaceRepository, validate_workspace_name
from tabkeeper.settings import TabkeeperSettings, get_settings
from tabkeeper.store.local import LocalStateStore

if TYPE_CHECKING:
    from tabkeeper.host.base import EditorHost
    from tabkeeper.models.workspace import ReopenResult, Workspace
    from tabkeeper.store.base import StateStore


def build_repository(settings: TabkeeperSettings, store: StateStore | None = None) -> WorkspaceRepository:
    if store is None:
        store = LocalStateStore(settings.data_root, prefix=settings.data_prefix)
    return WorkspaceRepository(store, key=settings.state_key)


@dataclass
class TabkeeperApp:
    settings: TabkeeperSettings
    repository: WorkspaceRepository
    workspaces: TabWorkspaceManager
    sorter: TabSorter

    @classmethod
    def from_settings(
        cls,
        host: EditorHost,
        settings: TabkeeperSettings | None = None,
        *,
        store: StateStore | None = None,
    ) -> TabkeeperApp:
        settings = settings or get_settings()
        repository = build_repository(settings, store)
        reopener = TabReopener(host, settle_delay=settings.settle_delay, open_delay=settings.open_delay)
        # One lock per host: a sort must not run while a load rebuilds the tabs.
        lock = asyncio.Lock()
        return cls(
            settings=settings,
            repository=repository,
            workspaces=TabWorkspaceManager(repository, host, reopener, lock=lock),
            sorter=TabSorter(host, reopener, lock=lock),
        )

    async def save_workspace(self, name: str) -> Workspace:
        """Save the open tabs under a user-entered ``name``.

        Raises ``InvalidWorkspaceNameError`` if the name breaks the naming rules.
        """
        return await self.workspaces.save_current_tabs(validate_workspace_name(name))

    async def sort_tabs(self) -> ReopenResult | None:
        """Sort open tabs using the configured custom file type order."""
        return await self.sorter.sort_tabs(self.settings.custom_file_type_order)

    async def load_workspace(self, name: str) -> ReopenResult:
        """Load ``name``, auto-saving the open tabs first if configured to."""
        return await self.workspaces.load_workspace(name, auto_save_current=self.settings.auto_save_before_load)
