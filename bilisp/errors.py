from __future__ import annotations

from enum import Enum


class BilispError(Exception):
    """ Base class for all Bilisp exceptions"""
    pass


class BilispSyntaxError(BilispError):
    """ Raised by the grammar when input cannot be parsed"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message if position is None else f"{message} at {position}")
        self.message = message
        self.position = position


class DoubleReleaseError(BilispError):
    """ Raised when a value is released more than once"""


class ErrorKind(Enum):
    """Category of an Error value.

    Errors produced while evaluating are values, not exceptions; the kind lets
    callers (the language server, tests) tell them apart without matching on
    message text.
    """
    INVALID_LITERAL = "invalid-literal"
    DIVISION_BY_ZERO = "division-by-zero"
    NON_NUMERIC_OPERAND = "non-numeric-operand"
    BAD_OPERATOR = "bad-operator"
    WRONG_ARITY = "wrong-arity"
    EMPTY_LIST = "empty-list"
    TYPE_MISMATCH = "type-mismatch"
    NUMERIC_OVERFLOW = "numeric-overflow"
