"""
Exceptions raised while generating code from a workspace.

Every error here signals a bug in a language binding or in the block graph, so
they abort the current generation pass and propagate to the caller.
"""

from typing import Any


class GeneratorError(Exception):
    """Base exception for code generation failures.

    The block that triggered the error, when known, is kept on the exception and
    its id is appended to the message so the host editor can highlight it.

    Examples:
        >>> raise GeneratorError("Something went wrong")
        GeneratorError: Something went wrong
    """

    def __init__(self, message: str, block: Any | None = None):
        """Initialize the exception with a message and optional block.

        Args:
            message: The error message
            block: Optional block where the error occurred
        """
        self.message = message
        self.block = block
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location_info = ""
        block_id = getattr(self.block, "id", None)
        if block_id:
            location_info = f" (block id '{block_id}')"
        return f"{self.message}{location_info}"

    def with_block(self, block: Any) -> "GeneratorError":
        """Create a new error of the same kind attached to a different block.

        Args:
            block: Block to associate with the error

        Returns:
            A copy of this error, keeping its class and attributes, with the
            updated block
        """
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.block = block
        Exception.__init__(error, error._format_message())
        return error


class UnsupportedBlockTypeError(GeneratorError):
    """No translation rule is registered for a block's type tag."""

    def __init__(self, language: str, block_type: str, block: Any | None = None):
        self.language = language
        self.block_type = block_type
        super().__init__(
            f'Language "{language}" does not know how to generate code '
            f'for block type "{block_type}"',
            block,
        )


class InvalidPrecedenceOrderError(GeneratorError):
    """A precedence order was missing or not a number."""


class MalformedValueResultError(GeneratorError):
    """A value block translated to a plain string instead of (code, order)."""


class MalformedStatementResultError(GeneratorError):
    """A statement block translated to a (code, order) tuple."""


class ReentrantPassError(GeneratorError):
    """A generation pass was started while another one was still running."""
