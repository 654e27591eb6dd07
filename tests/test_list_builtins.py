import pytest

from bilisp.errors import ErrorKind
from bilisp.evaluation.builtins import apply
from bilisp.evaluation.evaluator import evaluate
from bilisp.types.value import Error, Integer, QExpression, Symbol, allocations, render


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list 1 2 3)", "{1 2 3}"),
        ("(list)", "list"),
        ("(list 1 (+ 1 1) {3})", "{1 2 {3}}"),
        ("(list + 1 2)", "{+ 1 2}"),
        ("(head {1 2 3})", "{1}"),
        ("(tail {1 2 3})", "{2 3}"),
        ("(tail {1})", "{}"),
        ("(head (list 1 2))", "{1}"),
        ("(head {(+ 1 2) 4})", "{(+ 1 2)}"),
        ("(join {1 2} {3})", "{1 2 3}"),
        ("(join {1} {} {2 3} {{4}})", "{1 2 3 {4}}"),
        ("(join {})", "{}"),
        ("(eval {+ 1 2})", "3"),
        ("(eval (list + 1 2))", "3"),
        ("(eval {})", "()"),
        ("(eval {5})", "5"),
        ("(eval (head {(+ 1 2) (+ 10 20)}))", "3"),
        ("(eval (tail {tail tail {5 6 7}}))", "{6 7}"),
        ("(eval (join {+} (list 1 2) {3}))", "6"),
        ("{1 (+ 1 1)}", "{1 (+ 1 1)}"),
        ("()", "()"),
    ]
)
def test_list_builtins(interp, no_leaks, source, expected):
    assert interp.run(source) == expected


@pytest.mark.parametrize(
    "source,expected,kind",
    [
        ("(head {})", "Function 'head' passed {}!", ErrorKind.EMPTY_LIST),
        ("(tail {})", "Function 'tail' passed {}!", ErrorKind.EMPTY_LIST),
        ("(head 1)", "Function 'head' passed incorrect type!", ErrorKind.TYPE_MISMATCH),
        ("(tail (+ 1 2))", "Function 'tail' passed incorrect type!", ErrorKind.TYPE_MISMATCH),
        ("(head {1} {2})", "Function 'head' passed incorrect number of arguments. Got 2, Expected 1.",
         ErrorKind.WRONG_ARITY),
        ("(tail {1} {2} {3})", "Function 'tail' passed incorrect number of arguments. Got 3, Expected 1.",
         ErrorKind.WRONG_ARITY),
        ("(join {1} 2)", "Function 'join' passed incorrect type!", ErrorKind.TYPE_MISMATCH),
        ("(eval 1)", "Function 'eval' passed incorrect type!", ErrorKind.TYPE_MISMATCH),
        ("(eval {1} {2})", "Function 'eval' passed incorrect number of arguments. Got 2, Expected 1.",
         ErrorKind.WRONG_ARITY),
        ("(eval {1 2})", "S-expression does not start with a symbol!", ErrorKind.BAD_OPERATOR),
        ("(eval {/ 1 0})", "Division by zero!", ErrorKind.DIVISION_BY_ZERO),
        ("(+ 1 (head {}))", "Function 'head' passed {}!", ErrorKind.EMPTY_LIST),
    ]
)
def test_list_builtin_errors(interp, no_leaks, source, expected, kind):
    assert interp.run(source) == f"Error: {expected}"
    result = interp.eval(source)
    try:
        assert isinstance(result, Error)
        assert result.kind is kind
    finally:
        result.release()


def test_head_and_tail_split_a_list(no_leaks):
    def q():
        return QExpression([Symbol("x"), Symbol("y"), Symbol("z")])

    head = apply("head", [q()], evaluate)
    tail = apply("tail", [q()], evaluate)
    assert render(head) == "{x}"
    assert render(tail) == "{y z}"
    head.release()
    tail.release()


def test_join_keeps_argument_order(no_leaks):
    result = apply(
        "join",
        [QExpression([Symbol("a"), Symbol("b")]), QExpression([Symbol("c")])],
        evaluate,
    )
    assert render(result) == "{a b c}"
    result.release()


def test_wrong_arity_releases_every_operand():
    before = allocations.live
    result = apply("head", [QExpression([Integer(1)]), QExpression([Integer(2), Integer(3)])], evaluate)
    assert result.message.startswith("Function 'head' passed incorrect number")
    result.release()
    assert allocations.live == before
