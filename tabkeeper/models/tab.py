"""Pane and tab descriptor models.

A :class:`Pane` is what the editor host reports for one open editor surface.
Its ``input`` is a tagged union keyed on ``kind``: a plain text document, a
two-sided comparison, a custom editor, or something the host does not expose
as a document.

A :class:`TabDescriptor` is the restorable identity extracted from a pane.  It
is also a tagged variant (``document`` / ``diff`` / ``unresolved``) and every
consumer dispatches on ``kind`` rather than probing which URI fields are set.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Annotated, Literal
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel, Field, model_validator

from tabkeeper.models.enums import DescriptorKind, PaneInputKind

FILE_SCHEME = "file"

# -- Pane inputs -------------------------------------------------------------


class TextInput(BaseModel):
    kind: Literal[PaneInputKind.TEXT] = PaneInputKind.TEXT
    uri: str


class DiffInput(BaseModel):
    kind: Literal[PaneInputKind.DIFF] = PaneInputKind.DIFF
    original: str
    modified: str


class CustomInput(BaseModel):
    """Custom editor bound to a resource (image preview, notebook, ...)."""

    kind: Literal[PaneInputKind.CUSTOM] = PaneInputKind.CUSTOM
    uri: str
    view_type: str


class OtherInput(BaseModel):
    """Any pane the host does not describe with a resource (webviews, settings, terminals)."""

    kind: Literal[PaneInputKind.OTHER] = PaneInputKind.OTHER


PaneInput = Annotated[TextInput | DiffInput | CustomInput | OtherInput, Field(discriminator="kind")]


class Pane(BaseModel):
    """One open editor pane as reported by the host, in host order."""

    label: str
    is_active: bool = False
    is_pinned: bool = False
    view_column: int = 1
    input: PaneInput | None = None


# -- Descriptors -------------------------------------------------------------


class TabDescriptor(BaseModel):
    """Restorable identity of a single pane."""

    kind: DescriptorKind
    label: str
    is_active: bool = False
    is_pinned: bool = False
    view_column: int = 1

    uri: str | None = None
    view_type: str | None = None
    original_uri: str | None = None
    modified_uri: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> TabDescriptor:
        if self.kind == DescriptorKind.DOCUMENT:
            if self.uri is None or self.original_uri is not None or self.modified_uri is not None:
                msg = "document descriptor needs uri and no diff sides"
                raise ValueError(msg)
        elif self.kind == DescriptorKind.DIFF:
            if self.original_uri is None or self.modified_uri is None or self.uri is not None:
                msg = "diff descriptor needs original_uri and modified_uri and no uri"
                raise ValueError(msg)
        elif any(v is not None for v in (self.uri, self.original_uri, self.modified_uri)):
            msg = "unresolved descriptor carries only a label"
            raise ValueError(msg)
        return self

    # -- Constructors ----------------------------------------------------------

    @classmethod
    def document(cls, uri: str, *, label: str | None = None, **kwargs) -> TabDescriptor:
        return cls(kind=DescriptorKind.DOCUMENT, uri=uri, label=label or uri_basename(uri), **kwargs)

    @classmethod
    def diff(cls, original_uri: str, modified_uri: str, *, label: str, **kwargs) -> TabDescriptor:
        return cls(
            kind=DescriptorKind.DIFF,
            original_uri=original_uri,
            modified_uri=modified_uri,
            label=label,
            **kwargs,
        )

    @classmethod
    def unresolved(cls, label: str, **kwargs) -> TabDescriptor:
        return cls(kind=DescriptorKind.UNRESOLVED, label=label, **kwargs)

    # -- Accessors -------------------------------------------------------------

    @property
    def resolved_uri(self) -> str | None:
        """The resource this pane stands for: the document, or the modified side of a diff."""
        if self.kind == DescriptorKind.DOCUMENT:
            return self.uri
        if self.kind == DescriptorKind.DIFF:
            return self.modified_uri
        return None

    @property
    def is_resolvable(self) -> bool:
        return self.kind != DescriptorKind.UNRESOLVED

    def same_target(self, other: TabDescriptor) -> bool:
        """True if both descriptors would reopen the same pane."""
        return (
            self.kind == other.kind
            and self.uri == other.uri
            and self.original_uri == other.original_uri
            and self.modified_uri == other.modified_uri
        )


# -- URI helpers -------------------------------------------------------------


def uri_scheme(uri: str) -> str:
    """Lower-cased scheme of ``uri`` (empty for bare paths)."""
    return urlsplit(uri).scheme.lower()


def uri_to_path(uri: str) -> str:
    """Filesystem-style path of a resource identifier.

    ``file:///home/u/a%20b.py`` -> ``/home/u/a b.py``.  Identifiers without a
    scheme are already paths and are returned unchanged.
    """
    parts = urlsplit(uri)
    if not parts.scheme:
        return uri
    return unquote(parts.path)


def uri_basename(uri: str) -> str:
    return PurePosixPath(uri_to_path(uri)).name
