"""Data models for tabkeeper."""

from tabkeeper.models.enums import DescriptorKind, PaneInputKind, SkipReason
from tabkeeper.models.tab import (
    CustomInput,
    DiffInput,
    OtherInput,
    Pane,
    PaneInput,
    TabDescriptor,
    TextInput,
)
from tabkeeper.models.workspace import (
    PaneFailure,
    ReopenResult,
    TabStatistics,
    Workspace,
    WorkspaceState,
    WorkspaceStatistics,
)

__all__ = [
    "CustomInput",
    # Enums
    "DescriptorKind",
    "DiffInput",
    "OtherInput",
    # Tabs
    "Pane",
    # Results
    "PaneFailure",
    "PaneInput",
    "PaneInputKind",
    "ReopenResult",
    "SkipReason",
    "TabDescriptor",
    "TabStatistics",
    "TextInput",
    # Workspace
    "Workspace",
    "WorkspaceState",
    "WorkspaceStatistics",
]
