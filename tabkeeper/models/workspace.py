"""Workspace data models.

A workspace is a named, ordered list of resource identifiers captured from the
open editor panes.  All workspaces live in one :class:`WorkspaceState`
document, persisted as a single JSON blob in the state store.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from tabkeeper.models.enums import SkipReason

WORKSPACE_NAME_MIN_LENGTH = 2
WORKSPACE_NAME_MAX_LENGTH = 50
WORKSPACE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_.]+$")


def utcnow() -> datetime:
    return datetime.now(UTC)


class Workspace(BaseModel):
    """A saved set of tabs."""

    name: str
    tabs: list[str] = Field(default_factory=list, description="Resource identifiers in restore order")
    created_at: datetime = Field(default_factory=utcnow)
    last_modified: datetime = Field(default_factory=utcnow)


class WorkspaceState(BaseModel):
    """Persisted root: the named collection plus the current/previous slots."""

    workspaces: list[Workspace] = Field(default_factory=list)
    current_workspace: str | None = None
    """Weak reference by name.  May dangle after a delete; treat a miss as absent."""

    previous_workspace: Workspace | None = None
    """Single-slot buffer holding the last auto-save taken before a load."""

    def find(self, name: str) -> Workspace | None:
        for workspace in self.workspaces:
            if workspace.name == name:
                return workspace
        return None

    def remove(self, name: str) -> bool:
        """Drop every workspace called ``name``.  Returns whether anything was removed."""
        before = len(self.workspaces)
        self.workspaces = [w for w in self.workspaces if w.name != name]
        return len(self.workspaces) < before

    @property
    def current(self) -> Workspace | None:
        if self.current_workspace is None:
            return None
        return self.find(self.current_workspace)


# -- Operation results -------------------------------------------------------


class PaneFailure(BaseModel):
    """A pane the executor could not reopen."""

    label: str
    uri: str | None = None
    reason: SkipReason
    message: str = ""


class ReopenResult(BaseModel):
    """Outcome of one close-then-reopen pass."""

    opened: int = 0
    skipped: int = 0
    failures: list[PaneFailure] = Field(default_factory=list)


class WorkspaceStatistics(BaseModel):
    total_workspaces: int
    current_workspace: str | None = None
    has_previous_workspace: bool = False


class TabStatistics(BaseModel):
    total_tabs: int
    tabs_by_extension: dict[str, int] = Field(default_factory=dict)
