"""
Loading workspaces from JSON documents.

Only the block structure is read: types, fields, connections, disabled flags
and comments. Layout information such as positions is ignored.

Document shape::

    {"blocks": [
        {"type": "controls_if", "id": "a1",
         "inputs": {"IF0": {"type": "logic_boolean", "output": true,
                            "fields": {"BOOL": "TRUE"}}},
         "statements": {"DO0": {"type": "text_print", ...}},
         "next": {"type": "text_print", ...}}
    ]}

Each entry of ``blocks`` is the head of a top-level chain.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from blockgen.workspace.models import Block, InputType, Workspace


class WorkspaceFormatError(ValueError):
    """Raised when a workspace document cannot be turned into blocks."""


def load_workspace(path: str | Path) -> Workspace:
    """Read a workspace from a JSON file.

    Args:
        path: Path to the JSON document

    Returns:
        The loaded workspace

    Raises:
        WorkspaceFormatError: If the file is not valid JSON or misses required keys
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise WorkspaceFormatError(f"Invalid JSON in {path.name}: {e}") from e
    workspace = workspace_from_dict(data)
    logger.debug(f"Loaded {len(workspace)} blocks from {path}")
    return workspace


def workspace_from_dict(data: dict[str, Any]) -> Workspace:
    """Build a workspace from a decoded JSON document."""
    if not isinstance(data, dict) or not isinstance(data.get("blocks", []), list):
        raise WorkspaceFormatError("Workspace document must contain a 'blocks' list")

    workspace = Workspace()
    seen_ids: set[str] = set()
    for entry in data.get("blocks", []):
        _build_block(entry, workspace, seen_ids)
    return workspace


def _build_block(entry: Any, workspace: Workspace, seen_ids: set[str]) -> Block:
    if not isinstance(entry, dict) or "type" not in entry:
        raise WorkspaceFormatError(f"Block entry without a 'type': {entry!r}")

    block_id = entry.get("id")
    if block_id is not None:
        if block_id in seen_ids:
            raise WorkspaceFormatError(f"Duplicate block id '{block_id}'")
        seen_ids.add(block_id)

    block = workspace.new_block(
        entry["type"],
        id=block_id,
        fields=dict(entry.get("fields", {})),
        disabled=bool(entry.get("disabled", False)),
        comment=entry.get("comment"),
        output=bool(entry.get("output", False)),
    )

    for name, child in entry.get("inputs", {}).items():
        if child is None:
            block.add_input(name, InputType.VALUE)
        else:
            block.connect_value(name, _build_block(child, workspace, seen_ids))

    for name, child in entry.get("statements", {}).items():
        if child is None:
            block.add_input(name, InputType.STATEMENT)
        else:
            block.connect_statement(name, _build_block(child, workspace, seen_ids))

    if entry.get("next"):
        block.set_next(_build_block(entry["next"], workspace, seen_ids))

    return block


def workspace_to_dict(workspace: Workspace) -> dict[str, Any]:
    """Serialize a workspace's block structure back into a document."""
    return {"blocks": [_block_to_dict(block) for block in workspace.get_top_blocks()]}


def _block_to_dict(block: Block) -> dict[str, Any]:
    data: dict[str, Any] = {"type": block.type}
    if block.id is not None:
        data["id"] = block.id
    if block.fields:
        data["fields"] = dict(block.fields)
    if block.disabled:
        data["disabled"] = True
    if block.comment:
        data["comment"] = block.comment
    if block.output:
        data["output"] = True

    values = {
        slot.name: _block_to_dict(slot.target) if slot.target else None
        for slot in block.value_inputs()
    }
    if values:
        data["inputs"] = values
    statements = {
        slot.name: _block_to_dict(slot.target) if slot.target else None
        for slot in block.statement_inputs()
    }
    if statements:
        data["statements"] = statements
    if block.next_block:
        data["next"] = _block_to_dict(block.next_block)
    return data
