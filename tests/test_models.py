"""Unit tests for pane and descriptor models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tabkeeper.models.enums import DescriptorKind, PaneInputKind
from tabkeeper.models.tab import (
    DiffInput,
    OtherInput,
    Pane,
    TabDescriptor,
    uri_basename,
    uri_scheme,
    uri_to_path,
)
from tabkeeper.models.workspace import Workspace, WorkspaceState


def test_pane_input_discriminated_from_dict() -> None:
    pane = Pane.model_validate(
        {
            "label": "a.py",
            "input": {"kind": "diff", "original": "git:/a.py", "modified": "file:///a.py"},
        }
    )
    assert isinstance(pane.input, DiffInput)
    assert pane.input.kind == PaneInputKind.DIFF


def test_pane_input_other_and_missing() -> None:
    assert isinstance(Pane(label="Settings", input={"kind": "other"}).input, OtherInput)
    assert Pane(label="Welcome").input is None


def test_document_descriptor_shape() -> None:
    d = TabDescriptor.document("file:///ws/src/app.py")
    assert d.kind == DescriptorKind.DOCUMENT
    assert d.label == "app.py"
    assert d.resolved_uri == "file:///ws/src/app.py"
    assert d.is_resolvable


def test_diff_descriptor_resolves_to_modified_side() -> None:
    d = TabDescriptor.diff("git:/ws/a.py?HEAD", "file:///ws/a.py", label="a.py (Working Tree)")
    assert d.resolved_uri == "file:///ws/a.py"


def test_unresolved_descriptor_has_no_uri() -> None:
    d = TabDescriptor.unresolved("Settings")
    assert d.resolved_uri is None
    assert d.is_resolvable is False


@pytest.mark.parametrize(
    "fields",
    [
        {"kind": "document", "label": "x"},
        {"kind": "document", "label": "x", "uri": "file:///x", "modified_uri": "file:///y"},
        {"kind": "diff", "label": "x", "modified_uri": "file:///y"},
        {"kind": "diff", "label": "x", "uri": "file:///x", "original_uri": "a", "modified_uri": "b"},
        {"kind": "unresolved", "label": "x", "uri": "file:///x"},
    ],
)
def test_descriptor_rejects_mixed_shapes(fields: dict) -> None:
    with pytest.raises(ValidationError):
        TabDescriptor(**fields)


def test_same_target_ignores_focus_and_column() -> None:
    a = TabDescriptor.document("file:///ws/a.py", is_active=True, view_column=2)
    b = TabDescriptor.document("file:///ws/a.py", is_pinned=True)
    c = TabDescriptor.document("file:///ws/b.py")
    assert a.same_target(b)
    assert not a.same_target(c)


def test_uri_helpers() -> None:
    assert uri_scheme("file:///ws/a.py") == "file"
    assert uri_scheme("untitled:Untitled-1") == "untitled"
    assert uri_scheme("/plain/path.txt") == ""

    assert uri_to_path("file:///home/u/a%20b.py") == "/home/u/a b.py"
    assert uri_to_path("/plain/path.txt") == "/plain/path.txt"
    assert uri_basename("file:///ws/dir/Readme.MD") == "Readme.MD"


def test_workspace_state_roundtrip_dates_as_iso() -> None:
    state = WorkspaceState(workspaces=[Workspace(name="ws", tabs=["file:///a"])], current_workspace="ws")
    raw = state.model_dump_json()
    assert '"created_at":"' in raw

    restored = WorkspaceState.model_validate_json(raw)
    assert restored.workspaces[0].created_at == state.workspaces[0].created_at
    assert restored.current is not None
    assert restored.current.name == "ws"


def test_workspace_state_current_dangling_is_absent() -> None:
    state = WorkspaceState(current_workspace="gone")
    assert state.current is None


def test_workspace_state_remove() -> None:
    state = WorkspaceState(workspaces=[Workspace(name="a"), Workspace(name="b")])
    assert state.remove("a") is True
    assert state.remove("a") is False
    assert [w.name for w in state.workspaces] == ["b"]
