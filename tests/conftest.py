"""
Pytest configuration and shared fixtures.

The fixtures build a tiny "Toy" language binding whose rules cover statement
blocks, value blocks with precedence, statement inputs and helper functions.
"""

import pytest

from blockgen.generator import Generator, GeneratorConfig
from blockgen.workspace import Block, Workspace

ORDER_MULTIPLICATIVE = 3
ORDER_ADDITIVE = 4
ORDER_RELATIONAL = 6

OPERATORS = {
    "*": ORDER_MULTIPLICATIVE,
    "/": ORDER_MULTIPLICATIVE,
    "+": ORDER_ADDITIVE,
    "-": ORDER_ADDITIVE,
    "<": ORDER_RELATIONAL,
}


def build_toy_generator(config: GeneratorConfig | None = None) -> Generator:
    """Create a generator with rules for a handful of toy block types."""
    gen = Generator("Toy", config=config or GeneratorConfig())

    @gen.rule("print")
    def print_block(block: Block) -> str:
        return f"print({block.get_field_value('TEXT')!r})\n"

    @gen.rule("number")
    def number_block(block: Block) -> tuple[str, int]:
        return str(block.get_field_value("NUM")), gen.ORDER_ATOMIC

    @gen.rule("variable")
    def variable_block(block: Block) -> tuple[str, int]:
        return gen.names.get_name(block.get_field_value("VAR"), "variable"), 0

    @gen.rule("binary")
    def binary_block(block: Block) -> tuple[str, int]:
        op = block.get_field_value("OP")
        order = OPERATORS[op]
        left = gen.value_to_code(block, "A", order) or "0"
        right = gen.value_to_code(block, "B", order) or "0"
        return f"{left} {op} {right}", order

    @gen.rule("while")
    def while_block(block: Block) -> str:
        condition = gen.value_to_code(block, "COND", gen.ORDER_NONE) or "False"
        body = gen.statement_to_code(block, "DO") or "  pass\n"
        return f"while {condition}:\n{body}"

    @gen.rule("square")
    def square_block(block: Block) -> tuple[str, int]:
        name = gen.provide_function(
            "square",
            [f"def {gen.FUNCTION_NAME_PLACEHOLDER}(x):", "  return x * x"],
        )
        argument = gen.value_to_code(block, "X", gen.ORDER_NONE) or "0"
        return f"{name}({argument})", 0

    return gen


@pytest.fixture
def generator() -> Generator:
    """Fixture providing the toy generator."""
    return build_toy_generator()


@pytest.fixture
def make_generator():
    """Fixture providing the toy generator factory, for custom configs."""
    return build_toy_generator


@pytest.fixture
def workspace() -> Workspace:
    """Fixture providing an empty workspace."""
    return Workspace()


@pytest.fixture
def expression(workspace):
    """Fixture building binary expressions: expression("+", a, b)."""

    def build(op: str, left: Block, right: Block) -> Block:
        block = workspace.new_block("binary", fields={"OP": op}, output=True)
        block.connect_value("A", left)
        block.connect_value("B", right)
        return block

    return build


@pytest.fixture
def variable(workspace):
    """Fixture building variable getter blocks."""

    def build(name: str) -> Block:
        return workspace.new_block("variable", fields={"VAR": name}, output=True)

    return build


@pytest.fixture
def printer(workspace):
    """Fixture building print statement blocks."""

    def build(text: str, **kwargs) -> Block:
        return workspace.new_block("print", fields={"TEXT": text}, **kwargs)

    return build
