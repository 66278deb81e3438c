"""Small Python binding for blockgen.

Usage: blockgen generate examples/hello_world.json --language examples/python_lite.py
"""

from blockgen import Block, Generator, GeneratorConfig

# Precedence table, lower binds tighter
ORDER_ATOMIC = 0
ORDER_FUNCTION_CALL = 2
ORDER_EXPONENTIATION = 3
ORDER_UNARY_SIGN = 4
ORDER_MULTIPLICATIVE = 5
ORDER_ADDITIVE = 6
ORDER_RELATIONAL = 11
ORDER_LOGICAL_NOT = 12
ORDER_LOGICAL_AND = 13
ORDER_LOGICAL_OR = 14
ORDER_NONE = 99

ARITHMETIC = {
    "ADD": (" + ", ORDER_ADDITIVE),
    "MINUS": (" - ", ORDER_ADDITIVE),
    "MULTIPLY": (" * ", ORDER_MULTIPLICATIVE),
    "DIVIDE": (" / ", ORDER_MULTIPLICATIVE),
    "POWER": (" ** ", ORDER_EXPONENTIATION),
}

COMPARISONS = {"EQ": "==", "NEQ": "!=", "LT": "<", "LTE": "<=", "GT": ">", "GTE": ">="}

RESERVED_WORDS = (
    "and,as,assert,break,class,continue,def,del,elif,else,except,finally,for,"
    "from,global,if,import,in,is,lambda,nonlocal,not,or,pass,raise,return,try,"
    "while,with,yield,False,None,True,print,range,len,str,int,float"
)


class PythonLite(Generator):
    """Generates Python 3 from a handful of common blocks."""

    def __init__(self, config: GeneratorConfig | None = None):
        super().__init__("Python", config)
        self.add_reserved_words(RESERVED_WORDS)
        self.register("text", self.text)
        self.register("text_print", self.text_print)
        self.register("math_number", self.math_number)
        self.register("math_arithmetic", self.math_arithmetic)
        self.register("math_is_prime", self.math_is_prime)
        self.register("logic_boolean", self.logic_boolean)
        self.register("logic_compare", self.logic_compare)
        self.register("logic_negate", self.logic_negate)
        self.register("variables_get", self.variables_get)
        self.register("variables_set", self.variables_set)
        self.register("controls_if", self.controls_if)
        self.register("controls_repeat_ext", self.controls_repeat_ext)

    def scrub_naked_value(self, line: str) -> str:
        return line + "\n"

    def text(self, block: Block) -> tuple[str, int]:
        return repr(str(block.get_field_value("TEXT") or "")), ORDER_ATOMIC

    def text_print(self, block: Block) -> str:
        arg = self.value_to_code(block, "TEXT", ORDER_NONE) or "''"
        return f"print({arg})\n"

    def math_number(self, block: Block) -> tuple[str, int]:
        value = block.get_field_value("NUM")
        code = str(value)
        order = ORDER_UNARY_SIGN if code.startswith("-") else ORDER_ATOMIC
        return code, order

    def math_arithmetic(self, block: Block) -> tuple[str, int]:
        operator, order = ARITHMETIC[block.get_field_value("OP")]
        left = self.value_to_code(block, "A", order) or "0"
        right = self.value_to_code(block, "B", order) or "0"
        return f"{left}{operator}{right}", order

    def math_is_prime(self, block: Block) -> tuple[str, int]:
        name = self.provide_function(
            "math_isPrime",
            [
                f"def {self.FUNCTION_NAME_PLACEHOLDER}(n):",
                "  if n in (2, 3):",
                "    return True",
                "  if n <= 1 or n % 2 == 0 or n % 3 == 0:",
                "    return False",
                "  for x in range(6, int(n ** 0.5) + 2, 6):",
                "    if n % (x - 1) == 0 or n % (x + 1) == 0:",
                "      return False",
                "  return True",
            ],
        )
        number = self.value_to_code(block, "NUMBER_TO_CHECK", ORDER_NONE) or "0"
        return f"{name}({number})", ORDER_FUNCTION_CALL

    def logic_boolean(self, block: Block) -> tuple[str, int]:
        code = "True" if block.get_field_value("BOOL") == "TRUE" else "False"
        return code, ORDER_ATOMIC

    def logic_compare(self, block: Block) -> tuple[str, int]:
        operator = COMPARISONS[block.get_field_value("OP")]
        left = self.value_to_code(block, "A", ORDER_RELATIONAL) or "0"
        right = self.value_to_code(block, "B", ORDER_RELATIONAL) or "0"
        return f"{left} {operator} {right}", ORDER_RELATIONAL

    def logic_negate(self, block: Block) -> tuple[str, int]:
        argument = self.value_to_code(block, "BOOL", ORDER_LOGICAL_NOT) or "True"
        return f"not {argument}", ORDER_LOGICAL_NOT

    def variables_get(self, block: Block) -> tuple[str, int]:
        return self.names.get_name(block.get_field_value("VAR"), "variable"), ORDER_ATOMIC

    def variables_set(self, block: Block) -> str:
        name = self.names.get_name(block.get_field_value("VAR"), "variable")
        value = self.value_to_code(block, "VALUE", ORDER_NONE) or "0"
        return f"{name} = {value}\n"

    def controls_if(self, block: Block) -> str:
        condition = self.value_to_code(block, "IF0", ORDER_NONE) or "False"
        branch = self.statement_to_code(block, "DO0") or "  pass\n"
        code = f"if {condition}:\n{branch}"
        if block.get_input("ELSE"):
            branch = self.statement_to_code(block, "ELSE") or "  pass\n"
            code += f"else:\n{branch}"
        return code

    def controls_repeat_ext(self, block: Block) -> str:
        times = self.value_to_code(block, "TIMES", ORDER_NONE) or "0"
        branch = self.statement_to_code(block, "DO") or "  pass\n"
        loop_var = self.names.get_distinct_name("count", "variable")
        return f"for {loop_var} in range({times}):\n{branch}"


generator = PythonLite()
