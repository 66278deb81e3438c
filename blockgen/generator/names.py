"""
Name database for generated code.

Maps the names users type into blocks (and the names bindings want for their
helpers) onto identifiers that are legal in the target language, distinct from
each other and distinct from the language's reserved words.
"""

import re
from collections.abc import Iterable

from loguru import logger

_UNSAFE_CHARS = re.compile(r"[^\w]")


class Names:
    """Collision-free identifier allocation, one namespace per generation pass."""

    def __init__(self, reserved_words: Iterable[str] | str = ""):
        """Initialize the database.

        Args:
            reserved_words: Words that may never be handed out, either as an
                iterable or as a comma-separated string
        """
        self.reserved: set[str] = set()
        self.reserve(reserved_words)
        self._db: dict[str, str] = {}
        self._taken: set[str] = set()

    def reserve(self, words: Iterable[str] | str) -> None:
        """Add more reserved words."""
        if isinstance(words, str):
            words = words.split(",")
        self.reserved.update(word for word in words if word)

    def reset(self) -> None:
        """Forget every name handed out so far. Reserved words are kept."""
        self._db.clear()
        self._taken.clear()

    def get_name(self, name: str, category: str, case_sensitive: bool = False) -> str:
        """Get the identifier for a user-visible name.

        The same name in the same category always maps to the same identifier;
        matching is case-insensitive unless case_sensitive is set.

        Args:
            name: Name as entered by the user
            category: Naming category, e.g. "variable" or "procedure"
            case_sensitive: Treat names differing only in case as distinct

        Returns:
            Identifier that is safe to emit
        """
        key = f"{name if case_sensitive else name.lower()}_{category}"
        if key in self._db:
            return self._db[key]
        safe = self.get_distinct_name(name, category)
        self._db[key] = safe
        return safe

    def get_distinct_name(self, name: str, category: str) -> str:
        """Get an identifier that has never been handed out before.

        A numeric suffix starting at 2 is appended until the candidate is
        neither taken nor reserved.

        Args:
            name: Desired name
            category: Naming category, kept for symmetry with get_name

        Returns:
            A fresh identifier
        """
        safe = self.safe_name(name)
        candidate = safe
        suffix = 1
        while candidate in self._taken or candidate in self.reserved:
            suffix += 1
            candidate = f"{safe}{suffix}"
        self._taken.add(candidate)
        if candidate != name:
            logger.debug(f"Renamed {category} '{name}' to '{candidate}'")
        return candidate

    @staticmethod
    def safe_name(name: str) -> str:
        """Turn an arbitrary string into an identifier-shaped one."""
        if not name:
            return "unnamed"
        name = _UNSAFE_CHARS.sub("_", name)
        if name[0].isdigit():
            name = f"my_{name}"
        return name

    @staticmethod
    def equals(name1: str, name2: str) -> bool:
        """Check whether two user-visible names refer to the same thing."""
        return name1.lower() == name2.lower()
