"""Syntax tree -> Value tree.

``read`` is total: malformed literals become Error values in place rather
than aborting the whole read.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol, Sequence

from bilisp.errors import ErrorKind
from bilisp.types.value import (
    INT64_MAX,
    INT64_MIN,
    Error,
    Float,
    Integer,
    ListValue,
    QExpression,
    SExpression,
    Symbol,
    Value,
)

logger = logging.getLogger(__name__)

PUNCTUATION = frozenset(["(", ")", "{", "}"])


class SyntaxNode(Protocol):
    tag: str
    contents: str
    children: Sequence[SyntaxNode]


def read_integer(node: SyntaxNode) -> Value:
    try:
        n = int(node.contents, 10)
    except ValueError:
        return Error("Invalid integer", ErrorKind.INVALID_LITERAL)
    if not INT64_MIN <= n <= INT64_MAX:
        return Error("Invalid integer", ErrorKind.INVALID_LITERAL)
    return Integer(n)


def literal_text(node: SyntaxNode) -> str:
    """Full matched text of a literal, whether matched as one token or several."""
    if node.children:
        return "".join(literal_text(c) for c in node.children)
    return node.contents


def read_float(node: SyntaxNode) -> Value:
    text = literal_text(node)
    try:
        x = float(text)
    except ValueError:
        return Error("Invalid float", ErrorKind.INVALID_LITERAL)
    if math.isinf(x):
        return Error("Invalid float", ErrorKind.INVALID_LITERAL)
    return Float(x)


def is_skipped(node: SyntaxNode) -> bool:
    return node.contents in PUNCTUATION or node.tag == "regex"


def read(node: SyntaxNode) -> Value:
    if "number" in node.tag:
        return read_integer(node)
    if "float" in node.tag:
        return read_float(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    if node.tag == ">" or "sexpr" in node.tag:
        lst: ListValue = SExpression()
    elif "qexpr" in node.tag:
        lst = QExpression()
    else:
        logger.debug("Reading unrecognised node %r as an empty S-expression", node)
        lst = SExpression()

    for child in node.children:
        if is_skipped(child):
            continue
        lst.add(read(child))
    return lst
