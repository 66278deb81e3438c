"""
Code generation from block workspaces.

This module provides the generator core that language bindings build on.
"""

from blockgen.generator.config import GeneratorConfig
from blockgen.generator.constants import (
    FUNCTION_NAME_PLACEHOLDER,
    NAME_TYPE,
    ORDER_ATOMIC,
    ORDER_NONE,
)
from blockgen.generator.core import Generator, PassState, Rule, Translation
from blockgen.generator.errors import (
    GeneratorError,
    InvalidPrecedenceOrderError,
    MalformedStatementResultError,
    MalformedValueResultError,
    ReentrantPassError,
    UnsupportedBlockTypeError,
)
from blockgen.generator.names import Names
from blockgen.generator.registry import FunctionDefinition, FunctionRegistry

__all__ = [
    "FUNCTION_NAME_PLACEHOLDER",
    "NAME_TYPE",
    "ORDER_ATOMIC",
    "ORDER_NONE",
    "FunctionDefinition",
    "FunctionRegistry",
    "Generator",
    "GeneratorConfig",
    "GeneratorError",
    "InvalidPrecedenceOrderError",
    "MalformedStatementResultError",
    "MalformedValueResultError",
    "Names",
    "PassState",
    "ReentrantPassError",
    "Rule",
    "Translation",
    "UnsupportedBlockTypeError",
]
