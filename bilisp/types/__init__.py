from bilisp.types.value import (
    Value,
    Integer,
    Float,
    Symbol,
    Error,
    ListValue,
    SExpression,
    QExpression,
    allocations,
    render,
    wrap_i64,
    INT64_MIN,
    INT64_MAX,
)

__all__ = [
    "Value",
    "Integer",
    "Float",
    "Symbol",
    "Error",
    "ListValue",
    "SExpression",
    "QExpression",
    "allocations",
    "render",
    "wrap_i64",
    "INT64_MIN",
    "INT64_MAX",
]
