from blockgen.generator import (
    Generator,
    GeneratorConfig,
    GeneratorError,
    Names,
    UnsupportedBlockTypeError,
)
from blockgen.workspace import Block, InputType, Workspace, load_workspace

__version__ = "0.1.0"


__all__ = [
    "Block",
    "Generator",
    "GeneratorConfig",
    "GeneratorError",
    "InputType",
    "Names",
    "UnsupportedBlockTypeError",
    "Workspace",
    "load_workspace",
]
