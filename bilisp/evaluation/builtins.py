"""Builtin operators for Bilisp.

Arithmetic (+ - * / % ^ max min) folds numbers left to right; list builtins
(list head tail join eval) work on Q-expressions. Every builtin takes
ownership of its operands: whatever it does not hand back inside the result
is released before it returns, including on failure.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Union

from bilisp.errors import ErrorKind
from bilisp.types.value import (
    Error,
    Float,
    Integer,
    QExpression,
    SExpression,
    Value,
    wrap_i64,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]
EvaluatorFn = Callable[[Value], Value]
Builtin = Callable[[list[Value], EvaluatorFn], Value]

ARITHMETIC_OPS = frozenset(["+", "-", "*", "/", "%", "^", "max", "min"])


def _release_all(operands: list[Value]) -> None:
    for v in operands:
        v.release()
    operands.clear()


def _fail(operands: list[Value], message: str, kind: ErrorKind) -> Error:
    _release_all(operands)
    return Error(message, kind)


def _division_by_zero() -> Error:
    return Error("Division by zero!", ErrorKind.DIVISION_BY_ZERO)


# -------------------------------
# Arithmetic
# -------------------------------
def int_op(op: str, x: int, y: int) -> Union[Number, Error]:
    if op == "+":
        return wrap_i64(x + y)
    if op == "-":
        return wrap_i64(x - y)
    if op == "*":
        return wrap_i64(x * y)
    if op == "/":
        if y == 0:
            return _division_by_zero()
        if x % y == 0:
            return wrap_i64(x // y)
        return x / y
    if op == "%":
        if y == 0:
            return _division_by_zero()
        # Remainder takes the sign of the dividend
        r = abs(x) % abs(y)
        return -r if x < 0 else r
    if op == "^":
        if y < 0:
            return float_op(op, float(x), float(y))
        return wrap_i64(pow(x, y, 1 << 64))
    if op == "max":
        return y if y > x else x
    # min; builtin_op has already rejected names outside ARITHMETIC_OPS
    return y if y < x else x


def float_op(op: str, x: float, y: float) -> Union[float, Error]:
    if op == "+":
        return x + y
    if op == "-":
        return x - y
    if op == "*":
        return x * y
    if op == "/":
        if y == 0.0:
            return _division_by_zero()
        return x / y
    if op == "^":
        if x == 0.0 and y < 0.0:
            return _division_by_zero()
        try:
            return math.pow(x, y)
        except OverflowError:
            return Error("Numeric overflow!", ErrorKind.NUMERIC_OVERFLOW)
        except ValueError:
            # negative base with a fractional exponent
            return math.nan
    if op == "max":
        return y if y > x else x
    if op == "min":
        return y if y < x else x
    return Error("Invalid operator", ErrorKind.BAD_OPERATOR)


def builtin_op(op: str, operands: list[Value]) -> Value:
    if not operands:
        return Error(f"Function '{op}' passed no arguments!", ErrorKind.WRONG_ARITY)
    if not all(isinstance(v, (Integer, Float)) for v in operands):
        return _fail(operands, "Cannot operate on non-number!", ErrorKind.NON_NUMERIC_OPERAND)
    if op not in ARITHMETIC_OPS:
        return _fail(operands, "Invalid operator", ErrorKind.BAD_OPERATOR)

    first = operands[0]
    x: Number = first.value
    is_float = isinstance(first, Float)

    if op == "-" and len(operands) == 1:
        x = -x if is_float else wrap_i64(-x)

    for y in operands[1:]:
        if is_float or isinstance(y, Float):
            result = float_op(op, float(x), float(y.value))
        else:
            result = int_op(op, x, y.value)
        if isinstance(result, Error):
            _release_all(operands)
            return result
        x = result
        is_float = isinstance(x, float)

    _release_all(operands)
    return Float(x) if is_float else Integer(x)


# -------------------------------
# List operations
# -------------------------------
def _expect_qexpr(name: str, operands: list[Value], non_empty: bool) -> Optional[Error]:
    if len(operands) != 1:
        return _fail(
            operands,
            f"Function '{name}' passed incorrect number of arguments. "
            f"Got {len(operands)}, Expected 1.",
            ErrorKind.WRONG_ARITY,
        )
    if not isinstance(operands[0], QExpression):
        return _fail(operands, f"Function '{name}' passed incorrect type!", ErrorKind.TYPE_MISMATCH)
    if non_empty and not operands[0].cells:
        return _fail(operands, f"Function '{name}' passed {{}}!", ErrorKind.EMPTY_LIST)
    return None


def builtin_head(operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    err = _expect_qexpr("head", operands, non_empty=True)
    if err is not None:
        return err
    q = operands[0]
    while len(q) > 1:
        q.pop(1).release()
    return q


def builtin_tail(operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    err = _expect_qexpr("tail", operands, non_empty=True)
    if err is not None:
        return err
    q = operands[0]
    q.pop(0).release()
    return q


def builtin_list(operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    return QExpression(operands)


def builtin_join(operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    if not all(isinstance(v, QExpression) for v in operands):
        return _fail(operands, "Function 'join' passed incorrect type!", ErrorKind.TYPE_MISMATCH)
    if not operands:
        return QExpression()
    joined = operands[0]
    for other in operands[1:]:
        joined.cells.extend(other.detach())
    return joined


def builtin_eval(operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    err = _expect_qexpr("eval", operands, non_empty=False)
    if err is not None:
        return err
    return evaluate_fn(SExpression(operands[0].detach()))


LIST_BUILTINS: dict[str, Builtin] = {
    "list": builtin_list,
    "head": builtin_head,
    "tail": builtin_tail,
    "join": builtin_join,
    "eval": builtin_eval,
}


def apply(op: str, operands: list[Value], evaluate_fn: EvaluatorFn) -> Value:
    """Apply builtin ``op`` to ``operands``, taking ownership of them.

    ``evaluate_fn`` is used by ``eval`` to reduce the list it is given.
    """
    logger.debug("apply %s to %d operand(s)", op, len(operands))
    fn = LIST_BUILTINS.get(op)
    if fn is not None:
        return fn(operands, evaluate_fn)
    return builtin_op(op, operands)
