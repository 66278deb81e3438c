"""
Constants shared by the generator core and language bindings.

Binding authors define their own precedence tables; only the two sentinel
orders below have a meaning to the core.
"""

# Atomic expressions (literals, names, calls) never need parentheses
ORDER_ATOMIC = 0

# Expressions with no meaningful precedence never need parentheses either
ORDER_NONE = 99

# Naming category that keeps generated helper names apart from user variables
NAME_TYPE = "generated_function"

# Stands in for a helper's name inside its own body until the name is assigned.
# It must never be valid code in any target language, nor look like a comment.
FUNCTION_NAME_PLACEHOLDER = "{leCUI8hutHZI4480Dc}"

# Default indentation for statement inputs
DEFAULT_INDENT = "  "

# Default prefix for comment lines attached to blocks
DEFAULT_COMMENT_PREFIX = "# "
