"""
Generator core: turns a workspace of blocks into source code.

A Generator is built once per target language. The language binding registers
one translation rule per block type; a rule receives the block and returns a
string for statement blocks or a (code, order) tuple for value blocks. The
generator walks the graph, dispatches to the rules, brackets nested
expressions by precedence and assembles the final text.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from loguru import logger

from blockgen.generator.config import GeneratorConfig
from blockgen.generator.constants import (
    FUNCTION_NAME_PLACEHOLDER,
    NAME_TYPE,
    ORDER_ATOMIC,
    ORDER_NONE,
)
from blockgen.generator.errors import (
    InvalidPrecedenceOrderError,
    MalformedStatementResultError,
    MalformedValueResultError,
    ReentrantPassError,
    UnsupportedBlockTypeError,
)
from blockgen.generator.names import Names
from blockgen.generator.registry import FunctionRegistry
from blockgen.generator.text import comment_lines, prefix_lines, scrub_whitespace
from blockgen.workspace.models import Block, Workspace

Order: TypeAlias = int | float
Translation: TypeAlias = str | tuple[str, Order]
Rule: TypeAlias = Callable[[Block], Translation]


@dataclass
class PassState:
    """Mutable state scoped to a single generation pass.

    Attributes:
        functions: Helper functions requested so far
        names: Name database handing out identifiers
        blocks_translated: Number of rules invoked
    """

    functions: FunctionRegistry = field(default_factory=FunctionRegistry)
    names: Names = field(default_factory=Names)
    blocks_translated: int = 0


def _is_valid_order(order: Any) -> bool:
    if isinstance(order, bool) or not isinstance(order, int | float):
        return False
    return not math.isnan(order)


def _join_sections(sections: list[str]) -> str:
    """Join per-block code so that sections are separated by one line break."""
    return "\n".join(
        section[:-1] if section.endswith("\n") else section for section in sections
    )


class Generator:
    """Code generator for one target language."""

    ORDER_ATOMIC: Order = ORDER_ATOMIC
    ORDER_NONE: Order = ORDER_NONE
    NAME_TYPE = NAME_TYPE
    FUNCTION_NAME_PLACEHOLDER = FUNCTION_NAME_PLACEHOLDER

    def __init__(
        self,
        name: str,
        config: GeneratorConfig | None = None,
        rules: dict[str, Rule] | None = None,
    ):
        """Initialize the generator.

        Args:
            name: Language name, used in error messages
            config: Output settings; defaults honour BLOCKGEN_* variables
            rules: Initial translation rules keyed by block type
        """
        self.name = name
        self.config = config if config is not None else GeneratorConfig.from_env()
        self.rules: dict[str, Rule] = dict(rules or {})
        self._reserved_words = ""
        self.state = PassState()
        self._running = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, rules={len(self.rules)})"

    # Binding surface

    def register(self, block_type: str, rule: Rule) -> Rule:
        """Register the translation rule for a block type, replacing any previous one."""
        self.rules[block_type] = rule
        return rule

    def rule(self, block_type: str) -> Callable[[Rule], Rule]:
        """Decorator form of register."""

        def decorator(func: Rule) -> Rule:
            return self.register(block_type, func)

        return decorator

    def has_rule(self, block_type: str) -> bool:
        return block_type in self.rules

    def add_reserved_words(self, words: str) -> None:
        """Add a comma-separated batch of words the generated code may not use.

        Duplicates are harmless. Words take effect from the next pass on.
        """
        self._reserved_words += words + ","

    @property
    def reserved_words(self) -> set[str]:
        return {word for word in self._reserved_words.split(",") if word}

    @property
    def names(self) -> Names:
        return self.state.names

    @property
    def functions(self) -> FunctionRegistry:
        return self.state.functions

    # Hooks for language bindings

    def init(self, workspace: Workspace) -> None:
        """Reset per-pass state before generating code for a workspace."""
        if self.config.stable_names:
            names = self.state.names
        else:
            names = Names()
        names.reserve(self.reserved_words)
        self.state = PassState(names=names)

    def finish(self, code: str) -> str:
        """Prepend the helper function definitions collected during the pass."""
        definitions = self.state.functions.definitions()
        if not definitions:
            return code
        return "\n\n".join(definitions) + "\n\n\n" + code

    def scrub(self, block: Block, code: str) -> str:
        """Attach comments to a block's code and append the rest of its chain.

        Comments are emitted for statement blocks and for value blocks that
        stand alone. A statement block also surfaces the comments of the value
        blocks plugged into it, since those have no line of their own.

        Args:
            block: Block the code was generated for
            code: Code generated by the block's rule

        Returns:
            Code for the block and every block after it in the chain
        """
        comments = ""
        if not block.output or block.parent is None:
            prefix = self.config.comment_prefix
            comment = block.get_comment_text()
            if comment:
                comments += comment_lines(comment, prefix)
            for slot in block.value_inputs():
                if slot.target is None:
                    continue
                nested = self.all_nested_comments(slot.target)
                if nested:
                    comments += self.prefix_lines(nested, prefix)

        next_code = self.block_to_code(block.next_block)
        if isinstance(next_code, tuple):
            raise MalformedStatementResultError(
                f'Expecting code from statement block "{block.next_block.type}"',
                block.next_block,
            )
        return comments + code + next_code

    def scrub_naked_value(self, line: str) -> str:
        """Finish a value block used as a top-level statement."""
        return line

    # Traversal

    def workspace_to_code(self, workspace: Workspace) -> str:
        """Generate code for every block in a workspace.

        Args:
            workspace: Workspace holding the block graph

        Returns:
            Complete program text

        Raises:
            ReentrantPassError: If a pass is already running on this generator
            GeneratorError: If a binding rule is missing or misbehaves
        """
        if self._running:
            raise ReentrantPassError(
                f'Generator for "{self.name}" is already running a pass'
            )
        self._running = True
        try:
            self.init(workspace)
            top_blocks = workspace.get_top_blocks()
            logger.debug(
                f"Generating {self.name} code for {len(top_blocks)} top-level blocks"
            )

            sections = []
            for block in top_blocks:
                line = self.block_to_code(block)
                if isinstance(line, tuple):
                    # Top-level blocks don't care about operator order
                    line = line[0]
                if not line:
                    continue
                if block.output:
                    line = self.scrub_naked_value(line)
                sections.append(line)

            code = self.finish(_join_sections(sections))
            code = scrub_whitespace(code)
            logger.debug(
                f"Generated {len(code.splitlines())} lines from "
                f"{self.state.blocks_translated} blocks, "
                f"{len(self.state.functions)} helper functions"
            )
            return code
        finally:
            self._running = False

    def block_to_code(self, block: Block | None) -> Translation:
        """Generate code for a block and the chain that follows it.

        Args:
            block: Block to translate, may be None

        Returns:
            A string for statement blocks, a (code, order) tuple for value
            blocks, or "" if the block is None

        Raises:
            UnsupportedBlockTypeError: If no rule is registered for the block type
        """
        if block is None:
            return ""
        if block.disabled:
            return self.block_to_code(block.next_block)

        rule = self.rules.get(block.type)
        if rule is None:
            raise UnsupportedBlockTypeError(self.name, block.type, block)

        self.state.blocks_translated += 1
        result = rule(block)
        if isinstance(result, tuple):
            if len(result) != 2 or not isinstance(result[0], str):
                raise MalformedValueResultError(
                    f'Expecting (code, order) from value block "{block.type}"', block
                )
            return self.scrub(block, result[0]), result[1]
        if isinstance(result, str):
            return self.scrub(block, result)

        error = MalformedValueResultError if block.output else MalformedStatementResultError
        raise error(
            f'Block "{block.type}" produced {type(result).__name__}, '
            f"expected code",
            block,
        )

    def value_to_code(self, block: Block, name: str, order: Order) -> str:
        """Generate code for the block plugged into a value input.

        Args:
            block: Block owning the input
            name: Name of the value input
            order: Weakest precedence the surrounding code can take without
                parentheses

        Returns:
            The generated expression, parenthesized when needed, or "" if
            nothing usable is connected

        Raises:
            InvalidPrecedenceOrderError: If order, or the inner order, is not a number
            MalformedValueResultError: If the connected block yields a plain string
        """
        if not _is_valid_order(order):
            raise InvalidPrecedenceOrderError(
                f'Expecting valid order from block "{block.type}", got {order!r}',
                block,
            )
        target = block.get_input_target_block(name)
        if target is None:
            return ""

        result = self.block_to_code(target)
        if result == "":
            # Disabled block
            return ""
        if not isinstance(result, tuple):
            raise MalformedValueResultError(
                f'Expecting tuple from value block "{target.type}"', target
            )

        code, inner_order = result
        if not _is_valid_order(inner_order):
            raise InvalidPrecedenceOrderError(
                f'Expecting valid order from value block "{target.type}", '
                f"got {inner_order!r}",
                target,
            )
        if code and self._needs_parens(order, inner_order):
            code = f"({code})"
        return code

    def _needs_parens(self, order: Order, inner_order: Order) -> bool:
        # Equal levels are assumed to compose left to right, which does not hold
        # for right-associative operators such as exponentiation.
        sentinels = (self.ORDER_ATOMIC, self.ORDER_NONE)
        return (
            order <= inner_order
            and order != inner_order
            and order not in sentinels
            and inner_order not in sentinels
        )

    def statement_to_code(self, block: Block, name: str) -> str:
        """Generate indented code for the chain plugged into a statement input.

        Args:
            block: Block owning the input
            name: Name of the statement input

        Returns:
            Indented code, or "" if nothing is connected
        """
        target = block.get_input_target_block(name)
        code = self.block_to_code(target)
        if isinstance(code, tuple):
            raise MalformedStatementResultError(
                f'Expecting code from statement block "{target.type}"', target
            )
        if code:
            code = self.prefix_lines(code, self.config.indent)
        return code

    # Helpers shared by bindings

    def prefix_lines(self, text: str, prefix: str) -> str:
        return prefix_lines(text, prefix)

    def all_nested_comments(self, block: Block) -> str:
        """Collect the comments of a block and everything attached to it.

        Returns:
            Comments joined by newlines with a trailing newline, or "" if none
        """
        comments = []
        for descendant in block.iter_descendants():
            comment = descendant.get_comment_text()
            if comment:
                comments.append(comment)
        if comments:
            comments.append("")
        return "\n".join(comments)

    def provide_function(self, desired_name: str, code: list[str]) -> str:
        """Define a helper function to be emitted once by finish.

        The body may refer to its own name through FUNCTION_NAME_PLACEHOLDER.

        Args:
            desired_name: Logical name of the helper
            code: Lines of the definition

        Returns:
            The name the helper will actually have
        """
        return self.state.functions.provide(
            desired_name, code, self.state.names, stable=self.config.stable_names
        )
