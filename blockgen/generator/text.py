"""Text helpers for assembling generated code."""

import re

_LINE_START = re.compile(r"\n(.)")
_LEADING_BLANK_LINES = re.compile(r"^(?:[ \t]*\n)+")
_TRAILING_WHITESPACE = re.compile(r"\s+$")
_TRAILING_SPACES = re.compile(r"[ \t]+\n")


def prefix_lines(text: str, prefix: str) -> str:
    """Prepend a prefix to the first line and every non-empty following line.

    Args:
        text: Lines of code
        prefix: Common prefix, e.g. indentation or a comment marker

    Returns:
        The prefixed text
    """
    return prefix + _LINE_START.sub(lambda m: f"\n{prefix}{m.group(1)}", text)


def comment_lines(text: str, prefix: str) -> str:
    """Turn free text into newline-terminated comment lines."""
    return prefix_lines(text, prefix) + "\n"


def scrub_whitespace(code: str) -> str:
    """Normalize whitespace of a finished program.

    Leading blank lines are dropped, trailing whitespace collapses to a single
    newline and no line keeps trailing spaces or tabs.
    """
    code = _LEADING_BLANK_LINES.sub("", code)
    code = _TRAILING_WHITESPACE.sub("", code)
    if not code:
        return ""
    code = _TRAILING_SPACES.sub("\n", code + "\n")
    return code
