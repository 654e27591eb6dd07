"""Core evaluator for Bilisp.

Only S-expressions reduce; every other value evaluates to itself. Reduction
consumes its input: children are replaced in place by their results and
anything not handed back in the result is released.
"""

from __future__ import annotations

import logging

from bilisp.errors import ErrorKind
from bilisp.evaluation.builtins import apply
from bilisp.types.value import Error, SExpression, Symbol, Value

logger = logging.getLogger(__name__)


def evaluate(v: Value) -> Value:
    if isinstance(v, SExpression):
        return reduce_sexpr(v)
    return v


def reduce_sexpr(v: SExpression) -> Value:
    """
    Reduce an S-expression to a single value.

    The first Error among the evaluated children (left to right) becomes the
    result of the whole expression. An empty list is its own value and a
    one-element list unwraps to that element.
    """
    cells = v.cells
    for i, child in enumerate(cells):
        cells[i] = evaluate(child)

    for i, child in enumerate(cells):
        if isinstance(child, Error):
            logger.debug("short-circuit on %r", child)
            return v.take(i)

    if not cells:
        return v
    if len(cells) == 1:
        return v.take(0)

    head = v.pop(0)
    if not isinstance(head, Symbol):
        head.release()
        v.release()
        return Error("S-expression does not start with a symbol!", ErrorKind.BAD_OPERATOR)

    op = head.name
    head.release()
    return apply(op, v.detach(), evaluate)
