"""Tests for loading workspaces from JSON."""

import json

import pytest

from blockgen.workspace import (
    InputType,
    WorkspaceFormatError,
    load_workspace,
    workspace_from_dict,
    workspace_to_dict,
)

DOCUMENT = {
    "blocks": [
        {
            "type": "controls_if",
            "id": "if1",
            "comment": "Check",
            "inputs": {
                "IF0": {"type": "logic_boolean", "output": True, "fields": {"BOOL": "TRUE"}}
            },
            "statements": {
                "DO0": {
                    "type": "text_print",
                    "next": {"type": "text_print", "disabled": True},
                }
            },
            "next": {"type": "text_print", "id": "after"},
        },
        {"type": "math_number", "id": "n1", "output": True, "fields": {"NUM": 4}},
    ]
}


class TestWorkspaceFromDict:
    """Test cases for workspace_from_dict."""

    def test_structure(self):
        """Test that connections, flags and fields are restored."""
        workspace = workspace_from_dict(DOCUMENT)

        head, number = workspace.get_top_blocks()
        assert head.id == "if1"
        assert head.comment == "Check"
        assert head.get_input("IF0").kind == InputType.VALUE
        assert head.get_input_target_block("IF0").get_field_value("BOOL") == "TRUE"
        body = head.get_input_target_block("DO0")
        assert head.get_input("DO0").kind == InputType.STATEMENT
        assert body.next_block.disabled is True
        assert head.next_block.id == "after"
        assert number.output is True
        assert len(workspace) == 6

    def test_empty_input_slots(self):
        """Test that null inputs declare the slot without a target."""
        workspace = workspace_from_dict(
            {"blocks": [{"type": "controls_if", "inputs": {"IF0": None}}]}
        )

        block = workspace.get_top_blocks()[0]
        assert block.get_input("IF0") is not None
        assert block.get_input_target_block("IF0") is None

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"blocks": "nope"},
            {"blocks": [{"id": "missing-type"}]},
            {"blocks": [{"type": "a", "id": "x"}, {"type": "b", "id": "x"}]},
        ],
    )
    def test_invalid_documents(self, data):
        """Test that malformed documents are rejected."""
        with pytest.raises(WorkspaceFormatError):
            workspace_from_dict(data)

    def test_round_trip(self):
        """Test that serializing a loaded workspace keeps its structure."""
        workspace = workspace_from_dict(DOCUMENT)

        again = workspace_from_dict(workspace_to_dict(workspace))

        assert [b.type for b in again.get_all_blocks()] == [
            b.type for b in workspace.get_all_blocks()
        ]
        assert workspace_to_dict(again) == workspace_to_dict(workspace)


class TestLoadWorkspace:
    """Test cases for load_workspace."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "workspace.json"
        path.write_text(json.dumps(DOCUMENT))

        assert len(load_workspace(path).get_top_blocks()) == 2

    def test_invalid_json(self, tmp_path):
        """Test that broken JSON is reported as a format error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(WorkspaceFormatError, match="broken.json"):
            load_workspace(path)
