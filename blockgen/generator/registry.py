"""Registry of helper functions requested by blocks during a pass."""

from dataclasses import dataclass, field

from loguru import logger

from blockgen.generator.constants import FUNCTION_NAME_PLACEHOLDER, NAME_TYPE
from blockgen.generator.names import Names


@dataclass
class FunctionDefinition:
    """A helper function emitted once per pass.

    Attributes:
        desired_name: Logical name the binding asked for
        name: Identifier actually assigned
        code: Body with every placeholder replaced by ``name``
    """

    desired_name: str
    name: str
    code: str


@dataclass
class FunctionRegistry:
    """Memoizes helper definitions by logical name, in request order."""

    entries: dict[str, FunctionDefinition] = field(default_factory=dict)

    def provide(
        self, desired_name: str, code: list[str], names: Names, stable: bool = False
    ) -> str:
        """Register a helper function, or look up the one already registered.

        Only the first call for a logical name stores a body; callers must pass
        the same code every time they use the same name.

        Args:
            desired_name: Logical name of the helper (e.g. "is_prime")
            code: Lines of the definition, may contain the name placeholder
            names: Name database used to pick a collision-free identifier
            stable: Reuse the identifier the name database gave this logical
                name in an earlier pass

        Returns:
            The identifier to call the helper by
        """
        entry = self.entries.get(desired_name)
        if entry is None:
            if stable:
                name = names.get_name(desired_name, NAME_TYPE, case_sensitive=True)
            else:
                name = names.get_distinct_name(desired_name, NAME_TYPE)
            body = "\n".join(code).replace(FUNCTION_NAME_PLACEHOLDER, name)
            entry = FunctionDefinition(desired_name=desired_name, name=name, code=body)
            self.entries[desired_name] = entry
            logger.debug(f"Provided function '{desired_name}' as '{name}'")
        return entry.name

    def definitions(self) -> list[str]:
        """Get the stored function bodies in the order they were first requested."""
        return [entry.code for entry in self.entries.values()]

    def clear(self) -> None:
        self.entries.clear()

    def __contains__(self, desired_name: object) -> bool:
        return desired_name in self.entries

    def __len__(self) -> int:
        return len(self.entries)
