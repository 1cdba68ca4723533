"""Shared enumerations used across tabkeeper."""

from __future__ import annotations

from enum import StrEnum

# -- Host panes --------------------------------------------------------------


class PaneInputKind(StrEnum):
    """Discriminator for what an open editor pane is showing."""

    TEXT = "text"
    DIFF = "diff"
    CUSTOM = "custom"
    OTHER = "other"


# -- Descriptors -------------------------------------------------------------


class DescriptorKind(StrEnum):
    """Restorable identity of a pane."""

    DOCUMENT = "document"
    DIFF = "diff"
    UNRESOLVED = "unresolved"


# -- Reopen ------------------------------------------------------------------


class SkipReason(StrEnum):
    """Why a pane was not reopened."""

    BINARY = "binary"
    UNREADABLE = "unreadable"
    UNSUPPORTED = "unsupported"
