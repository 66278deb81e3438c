"""
Block graph consumed by the code generator.

A workspace holds blocks in the order they were added. Blocks connect to each
other through value inputs (a single producer block), statement inputs (the
head of a chain) and next-links (the following statement). The graph must be
acyclic along next-links and statement chains; nothing here checks that.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class InputType(Enum):
    """Kinds of named inputs a block can have."""

    VALUE = auto()
    STATEMENT = auto()


@dataclass(eq=False)
class Input:
    """Named input slot of a block.

    Attributes:
        name: Input name, e.g. "A" or "DO"
        kind: Whether the slot takes a value or a statement chain
        target: Connected block, or the head of the connected chain
    """

    name: str
    kind: InputType
    target: "Block | None" = None


@dataclass(eq=False)
class Block:
    """Node of the block graph.

    Attributes:
        type: Type tag selecting the translation rule
        id: Identifier used in error messages
        fields: Values typed into the block (names, literals, operators)
        inputs: Input slots in declaration order
        next_block: Statement that follows this one
        parent: Block this one is attached to, None for top-level blocks
        disabled: Disabled blocks generate no code
        comment: Comment text attached by the user
        output: Whether the block has an output connection (value block)
    """

    type: str
    id: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    inputs: dict[str, Input] = field(default_factory=dict)
    next_block: "Block | None" = None
    parent: "Block | None" = None
    disabled: bool = False
    comment: str | None = None
    output: bool = False

    def __repr__(self) -> str:
        return f"Block(type={self.type!r}, id={self.id!r})"

    def get_field_value(self, name: str) -> Any:
        """Get the value of a field, or None if the block has no such field."""
        return self.fields.get(name)

    def get_comment_text(self) -> str | None:
        return self.comment or None

    def get_input(self, name: str) -> Input | None:
        return self.inputs.get(name)

    def get_input_target_block(self, name: str) -> "Block | None":
        """Get the block connected to an input.

        Returns:
            The connected block, or None if the input is empty or does not exist
        """
        slot = self.inputs.get(name)
        return slot.target if slot else None

    def value_inputs(self) -> list[Input]:
        return [slot for slot in self.inputs.values() if slot.kind == InputType.VALUE]

    def statement_inputs(self) -> list[Input]:
        return [
            slot for slot in self.inputs.values() if slot.kind == InputType.STATEMENT
        ]

    def get_children(self) -> list["Block"]:
        """Get directly attached blocks: connected inputs first, then the next block."""
        children = [slot.target for slot in self.inputs.values() if slot.target]
        if self.next_block:
            children.append(self.next_block)
        return children

    def get_descendants(self) -> list["Block"]:
        """Get this block and everything reachable from it, depth first."""
        return list(self.iter_descendants())

    def iter_descendants(self) -> Iterator["Block"]:
        yield self
        for child in self.get_children():
            yield from child.iter_descendants()

    def add_input(self, name: str, kind: InputType) -> Input:
        """Declare an input slot, keeping any existing slot with the same name."""
        if name not in self.inputs:
            self.inputs[name] = Input(name=name, kind=kind)
        return self.inputs[name]

    def connect_value(self, name: str, block: "Block") -> "Block":
        """Plug a value block into a value input.

        Returns:
            The connected block, for chaining in tests and builders
        """
        return self._connect(self.add_input(name, InputType.VALUE), block)

    def connect_statement(self, name: str, block: "Block") -> "Block":
        """Plug the head of a statement chain into a statement input."""
        return self._connect(self.add_input(name, InputType.STATEMENT), block)

    def set_next(self, block: "Block") -> "Block":
        """Attach the statement that follows this one."""
        self._detach(block)
        self.next_block = block
        block.parent = self
        return block

    def _connect(self, slot: Input, block: "Block") -> "Block":
        self._detach(block)
        slot.target = block
        block.parent = self
        return block

    @staticmethod
    def _detach(block: "Block") -> None:
        parent = block.parent
        if parent is None:
            return
        if parent.next_block is block:
            parent.next_block = None
        for slot in parent.inputs.values():
            if slot.target is block:
                slot.target = None
        block.parent = None


@dataclass
class Workspace:
    """Collection of blocks in insertion order."""

    blocks: list[Block] = field(default_factory=list)

    def new_block(self, block_type: str, **kwargs: Any) -> Block:
        """Create a block and add it to the workspace.

        Args:
            block_type: Type tag of the block
            **kwargs: Other Block attributes (id, fields, disabled, ...)

        Returns:
            The new block
        """
        block = Block(type=block_type, **kwargs)
        if block.id is None:
            block.id = f"b{len(self.blocks) + 1}"
        self.blocks.append(block)
        return block

    def add_block(self, block: Block) -> Block:
        self.blocks.append(block)
        return block

    def get_top_blocks(self) -> list[Block]:
        """Get blocks that are not attached to any other block, in insertion order."""
        return [block for block in self.blocks if block.parent is None]

    def get_all_blocks(self) -> list[Block]:
        return list(self.blocks)

    def get_block_by_id(self, block_id: str) -> Block | None:
        return next((b for b in self.blocks if b.id == block_id), None)

    def __len__(self) -> int:
        return len(self.blocks)
