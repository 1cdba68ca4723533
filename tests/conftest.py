"""Shared test fixtures: an in-memory editor host and a tmp_path state store.

``FakeEditorHost`` behaves like a small editor: it keeps an ordered pane list,
knows which resources exist on "disk" and which are binary, and records every
host call so tests can assert on the exact protocol that was followed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from tabkeeper.execution.reopen import TabReopener
from tabkeeper.execution.sorting import TabSorter
from tabkeeper.managers.tab_workspaces import TabWorkspaceManager
from tabkeeper.managers.workspaces import WorkspaceRepository
from tabkeeper.models.tab import CustomInput, DiffInput, OtherInput, Pane, TextInput
from tabkeeper.store.local import LocalStateStore

ROOT = "file:///ws"


def file_uri(name: str) -> str:
    return f"{ROOT}/{name}"


def text_pane(name: str, **kwargs: Any) -> Pane:
    return Pane(label=name, input=TextInput(uri=file_uri(name)), **kwargs)


def diff_pane(name: str, **kwargs: Any) -> Pane:
    return Pane(
        label=f"{name} (Working Tree)",
        input=DiffInput(original=f"git:/ws/{name}?HEAD", modified=file_uri(name)),
        **kwargs,
    )


def custom_pane(name: str, view_type: str = "imagePreview.previewEditor", **kwargs: Any) -> Pane:
    return Pane(label=name, input=CustomInput(uri=file_uri(name), view_type=view_type), **kwargs)


def other_pane(label: str, **kwargs: Any) -> Pane:
    return Pane(label=label, input=OtherInput(), **kwargs)


class FakeEditorHost:
    """In-memory implementation of the EditorHost protocol."""

    def __init__(self, panes: list[Pane] | None = None, *, existing: set[str] | None = None) -> None:
        self.panes: list[Pane] = list(panes or [])
        self.existing: set[str] = set(existing or ())
        self.binary: set[str] = set()
        self.unopenable: set[str] = set()
        self.fail_close = False
        self.close_yields = False
        self.closed = asyncio.Event()
        self.fail_focus = False
        self.calls: list[tuple] = []
        for pane in self.panes:
            self.existing.update(_pane_uris(pane))

    def open_panes(self, *panes: Pane) -> None:
        """Replace the open panes; their resources are registered as existing."""
        self.panes = list(panes)
        for pane in panes:
            self.existing.update(_pane_uris(pane))

    # -- Protocol --------------------------------------------------------------

    async def list_open_panes(self) -> list[Pane]:
        self.calls.append(("list",))
        return list(self.panes)

    async def close_panes(self, panes: list[Pane], *, force: bool) -> None:
        self.calls.append(("close", len(panes), force))
        if self.fail_close:
            msg = "close rejected"
            raise RuntimeError(msg)
        ids = {id(p) for p in panes}
        self.panes = [p for p in self.panes if id(p) not in ids]
        self.closed.set()
        if self.close_yields:
            await asyncio.sleep(0)

    async def stat_resource(self, uri: str) -> None:
        self.calls.append(("stat", uri))
        if uri not in self.existing:
            msg = f"File not found: {uri}"
            raise FileNotFoundError(msg)

    async def open_document(self, uri: str) -> Any:
        self.calls.append(("open", uri))
        if uri in self.binary:
            msg = "File seems to be binary and cannot be opened as text"
            raise ValueError(msg)
        if uri in self.unopenable:
            msg = f"Permission denied: {uri}"
            raise PermissionError(msg)
        return uri

    async def show_document(self, document: Any, *, view_column: int | None, preview: bool, focus: bool) -> None:
        self.calls.append(("show", document, view_column, preview, focus))
        if focus and self.fail_focus:
            msg = "cannot focus"
            raise RuntimeError(msg)
        existing = next((p for p in self.panes if _pane_uris(p) == [document]), None)
        if focus:
            for pane in self.panes:
                pane.is_active = False
        if existing is not None:
            existing.is_active = existing.is_active or focus
            return
        self.panes.append(
            Pane(
                label=document.rsplit("/", 1)[-1],
                input=TextInput(uri=document),
                is_active=focus,
                is_pinned=not preview,
                view_column=view_column or 1,
            )
        )

    async def open_diff(
        self,
        original: str,
        modified: str,
        label: str,
        *,
        view_column: int | None,
        preview: bool,
    ) -> None:
        self.calls.append(("diff", original, modified, label, view_column, preview))
        if modified not in self.existing:
            msg = f"File not found: {modified}"
            raise FileNotFoundError(msg)
        self.panes.append(
            Pane(
                label=label,
                input=DiffInput(original=original, modified=modified),
                is_pinned=not preview,
                view_column=view_column or 1,
            )
        )

    # -- Helpers ---------------------------------------------------------------

    def open_uris(self) -> list[str]:
        uris = []
        for pane in self.panes:
            uris.extend(_pane_uris(pane)[-1:])
        return uris

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


def _pane_uris(pane: Pane) -> list[str]:
    source = pane.input
    if isinstance(source, TextInput | CustomInput):
        return [source.uri]
    if isinstance(source, DiffInput):
        return [source.modified]
    return []


@pytest.fixture
def host() -> FakeEditorHost:
    return FakeEditorHost()


@pytest.fixture
def store(tmp_path: Path) -> LocalStateStore:
    return LocalStateStore(tmp_path)


@pytest.fixture
def repo(store: LocalStateStore) -> WorkspaceRepository:
    return WorkspaceRepository(store)


@pytest.fixture
def reopener(host: FakeEditorHost) -> TabReopener:
    return TabReopener(host, settle_delay=0, open_delay=0)


@pytest.fixture
def manager(repo: WorkspaceRepository, host: FakeEditorHost, reopener: TabReopener) -> TabWorkspaceManager:
    return TabWorkspaceManager(repo, host, reopener)


@pytest.fixture
def sorter(host: FakeEditorHost, reopener: TabReopener) -> TabSorter:
    return TabSorter(host, reopener)
