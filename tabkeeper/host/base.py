"""Editor host capability consumed by tabkeeper.

The host owns the real tab groups and documents.  tabkeeper never touches them
directly; it asks the host to list, close and open panes through this protocol.
Every method is a suspension point and any of them except ``list_open_panes``
may raise.  Error text matters: the reopen executor inspects exception
messages to tell binary resources apart from other failures.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from tabkeeper.models.tab import Pane


@runtime_checkable
class EditorHost(Protocol):
    """Async protocol for the editor's tab and document APIs."""

    async def list_open_panes(self) -> list[Pane]:
        """All open panes across every group, in host order."""
        ...

    async def close_panes(self, panes: list[Pane], *, force: bool) -> None:
        """Close ``panes`` as one undoable batch."""
        ...

    async def open_document(self, uri: str) -> Any:
        """Load a document and return an opaque handle for ``show_document``."""
        ...

    async def show_document(self, document: Any, *, view_column: int | None, preview: bool, focus: bool) -> None:
        """Reveal a loaded document in ``view_column``."""
        ...

    async def open_diff(
        self,
        original: str,
        modified: str,
        label: str,
        *,
        view_column: int | None,
        preview: bool,
    ) -> None:
        """Open a comparison pane between two resources."""
        ...

    async def stat_resource(self, uri: str) -> None:
        """Existence probe.  Raises if the resource is gone."""
        ...
