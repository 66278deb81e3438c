"""Block graph model and workspace loading."""

from blockgen.workspace.loader import (
    WorkspaceFormatError,
    load_workspace,
    workspace_from_dict,
    workspace_to_dict,
)
from blockgen.workspace.models import Block, Input, InputType, Workspace

__all__ = [
    "Block",
    "Input",
    "InputType",
    "Workspace",
    "WorkspaceFormatError",
    "load_workspace",
    "workspace_from_dict",
    "workspace_to_dict",
]
