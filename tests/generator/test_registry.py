"""Tests for the helper function registry."""

from blockgen.generator import FUNCTION_NAME_PLACEHOLDER, FunctionRegistry, Names

BODY = [
    f"def {FUNCTION_NAME_PLACEHOLDER}(n):",
    f"  return n if n < 2 else {FUNCTION_NAME_PLACEHOLDER}(n - 1) + n",
]


class TestFunctionRegistry:
    """Test cases for FunctionRegistry."""

    def test_provide_substitutes_placeholder(self):
        """Test that the body can refer to its own final name."""
        registry = FunctionRegistry()

        name = registry.provide("triangle", BODY, Names())

        assert name == "triangle"
        assert registry.definitions() == [
            "def triangle(n):\n  return n if n < 2 else triangle(n - 1) + n"
        ]

    def test_provide_is_memoized(self):
        """Test that repeated requests return the same name and one entry."""
        registry = FunctionRegistry()
        names = Names()

        first = registry.provide("triangle", BODY, names)
        second = registry.provide("triangle", BODY, names)

        assert first == second
        assert len(registry) == 1
        assert "triangle" in registry

    def test_later_body_is_ignored(self):
        """Test that only the first body for a logical name is kept."""
        registry = FunctionRegistry()
        names = Names()

        registry.provide("helper", ["first"], names)
        registry.provide("helper", ["second"], names)

        assert registry.definitions() == ["first"]

    def test_name_avoids_reserved_words(self):
        """Test that the assigned name does not clash with reserved words."""
        registry = FunctionRegistry()

        name = registry.provide("len", [f"def {FUNCTION_NAME_PLACEHOLDER}(): pass"], Names("len"))

        assert name == "len2"
        assert registry.definitions() == ["def len2(): pass"]

    def test_name_avoids_user_variables(self):
        """Test that a helper does not take a name already given to a variable."""
        registry = FunctionRegistry()
        names = Names()
        names.get_name("total", "variable")

        assert registry.provide("total", ["..."], names) == "total2"

    def test_definitions_in_request_order(self):
        """Test that definitions come out in first-request order."""
        registry = FunctionRegistry()
        names = Names()
        for logical in ["b", "a", "c", "a"]:
            registry.provide(logical, [logical], names)

        assert registry.definitions() == ["b", "a", "c"]

    def test_clear(self):
        """Test that clear forgets every definition."""
        registry = FunctionRegistry()
        registry.provide("helper", ["x"], Names())

        registry.clear()

        assert len(registry) == 0
        assert registry.definitions() == []

    def test_names_differing_in_case_stay_distinct(self):
        """Test that logical names differing only in case get separate identifiers."""
        registry = FunctionRegistry()
        names = Names()

        lower = registry.provide("isprime", ["lower"], names)
        camel = registry.provide("isPrime", ["camel"], names)

        assert lower == "isprime"
        assert camel == "isPrime"
        assert registry.definitions() == ["lower", "camel"]

    def test_names_differing_in_case_stay_distinct_when_stable(self):
        """Test the same case handling when the name database is reused."""
        registry = FunctionRegistry()
        names = Names()

        lower = registry.provide("isprime", ["lower"], names, stable=True)
        camel = registry.provide("isPrime", ["camel"], names, stable=True)

        assert lower != camel

    def test_stable_name_survives_new_registry(self):
        """Test that a reused name database hands a helper the same name again."""
        names = Names()

        first = FunctionRegistry().provide("helper", ["x"], names, stable=True)
        second = FunctionRegistry().provide("helper", ["x"], names, stable=True)

        assert first == second == "helper"

    def test_fresh_name_without_stable(self):
        """Test that without reuse a second pass on the same database moves on."""
        names = Names()

        first = FunctionRegistry().provide("helper", ["x"], names)
        second = FunctionRegistry().provide("helper", ["x"], names)

        assert first == "helper"
        assert second == "helper2"
