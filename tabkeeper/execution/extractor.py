"""Tab descriptor extraction.

Turns the host's live pane list into descriptors, one per pane, in host order.
Pure and total: a pane whose input is missing or not resource-backed still
yields a descriptor, identified only by its label.
"""

from __future__ import annotations

from collections.abc import Iterable

from tabkeeper.models.enums import PaneInputKind
from tabkeeper.models.tab import Pane, TabDescriptor


def descriptor_from_pane(pane: Pane) -> TabDescriptor:
    common = {
        "label": pane.label,
        "is_active": pane.is_active,
        "is_pinned": pane.is_pinned,
        "view_column": pane.view_column,
    }
    source = pane.input
    if source is None:
        return TabDescriptor.unresolved(**common)

    match source.kind:
        case PaneInputKind.TEXT:
            return TabDescriptor.document(source.uri, **common)
        case PaneInputKind.DIFF:
            return TabDescriptor.diff(source.original, source.modified, **common)
        case PaneInputKind.CUSTOM:
            return TabDescriptor.document(source.uri, view_type=source.view_type, **common)
        case _:
            return TabDescriptor.unresolved(**common)


def extract_descriptors(panes: Iterable[Pane]) -> list[TabDescriptor]:
    return [descriptor_from_pane(pane) for pane in panes]


def active_descriptor(descriptors: Iterable[TabDescriptor]) -> TabDescriptor | None:
    """The descriptor that held focus at capture time, if any."""
    for descriptor in descriptors:
        if descriptor.is_active:
            return descriptor
    return None
