# Public entry points of the Bilisp core.
#
# A driver parses a line of text, then calls:
#   read(tree)      -> Value   (syntax tree to value tree)
#   evaluate(value) -> Value   (reduce; the input tree is consumed)
#   render(value)   -> str     (canonical text)
# and finally releases the result with value.release().

__version__ = "0.0.2"

from bilisp.types.value import (
    Value,
    Integer,
    Float,
    Symbol,
    Error,
    SExpression,
    QExpression,
    allocations,
    render,
)
from bilisp.reader.parser import parse
from bilisp.reader.reader import read
from bilisp.evaluation.evaluator import evaluate
from bilisp.evaluation.builtins import apply

__all__ = [
    "__version__",
    "Value",
    "Integer",
    "Float",
    "Symbol",
    "Error",
    "SExpression",
    "QExpression",
    "allocations",
    "render",
    "parse",
    "read",
    "evaluate",
    "apply",
]
