"""Configuration for a generator instance."""

import os
from dataclasses import dataclass

from blockgen.generator.constants import DEFAULT_COMMENT_PREFIX, DEFAULT_INDENT

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class GeneratorConfig:
    """Settings that shape the text a generator emits.

    Attributes:
        indent: Prefix added to every line of a statement input
        comment_prefix: Prefix for comment lines taken from block comments
        stable_names: Keep the name database between passes so that generated
            identifiers stay the same from one run to the next
    """

    indent: str = DEFAULT_INDENT
    comment_prefix: str = DEFAULT_COMMENT_PREFIX
    stable_names: bool = False

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a config, letting BLOCKGEN_* environment variables override defaults."""
        config = cls()
        if "BLOCKGEN_INDENT" in os.environ:
            config.indent = os.environ["BLOCKGEN_INDENT"]
        if "BLOCKGEN_COMMENT_PREFIX" in os.environ:
            config.comment_prefix = os.environ["BLOCKGEN_COMMENT_PREFIX"]
        if "BLOCKGEN_STABLE_NAMES" in os.environ:
            value = os.environ["BLOCKGEN_STABLE_NAMES"].strip().lower()
            config.stable_names = value in _TRUE_VALUES
        return config
