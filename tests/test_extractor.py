"""Unit tests for tab descriptor extraction."""

from __future__ import annotations

from tabkeeper.execution.extractor import active_descriptor, descriptor_from_pane, extract_descriptors
from tabkeeper.models.enums import DescriptorKind
from tabkeeper.models.tab import Pane
from tests.conftest import custom_pane, diff_pane, file_uri, other_pane, text_pane


def test_extract_preserves_order_and_flags() -> None:
    panes = [
        text_pane("b.py", view_column=2),
        text_pane("a.md", is_active=True, is_pinned=True),
        diff_pane("c.ts"),
    ]
    descriptors = extract_descriptors(panes)

    assert [d.label for d in descriptors] == ["b.py", "a.md", "c.ts (Working Tree)"]
    assert descriptors[0].view_column == 2
    assert descriptors[1].is_active is True
    assert descriptors[1].is_pinned is True
    assert descriptors[2].kind == DescriptorKind.DIFF


def test_text_pane_becomes_document() -> None:
    d = descriptor_from_pane(text_pane("a.py"))
    assert d.kind == DescriptorKind.DOCUMENT
    assert d.uri == file_uri("a.py")
    assert d.view_type is None


def test_diff_pane_keeps_both_sides() -> None:
    d = descriptor_from_pane(diff_pane("a.py"))
    assert d.original_uri == "git:/ws/a.py?HEAD"
    assert d.modified_uri == file_uri("a.py")
    assert d.uri is None


def test_custom_pane_becomes_document_with_view_type() -> None:
    d = descriptor_from_pane(custom_pane("logo.png"))
    assert d.kind == DescriptorKind.DOCUMENT
    assert d.uri == file_uri("logo.png")
    assert d.view_type == "imagePreview.previewEditor"


def test_unrecognised_panes_degrade_to_label_only() -> None:
    for pane in (other_pane("Settings"), Pane(label="Welcome")):
        d = descriptor_from_pane(pane)
        assert d.kind == DescriptorKind.UNRESOLVED
        assert d.label == pane.label
        assert d.resolved_uri is None


def test_extract_empty() -> None:
    assert extract_descriptors([]) == []


def test_active_descriptor() -> None:
    descriptors = extract_descriptors([text_pane("a.py"), text_pane("b.py", is_active=True)])
    active = active_descriptor(descriptors)
    assert active is not None
    assert active.label == "b.py"
    assert active_descriptor(extract_descriptors([text_pane("a.py")])) is None
