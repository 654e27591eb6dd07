import pytest

from bilisp.reader.parser import AstNode, parse
from bilisp.reader.reader import read
from bilisp.types.value import Error, Float, Integer, QExpression, SExpression, Symbol, allocations


def read_source(source):
    return read(parse(source))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("5", SExpression([Integer(5)])),
        ("-12", SExpression([Integer(-12)])),
        ("3.25", SExpression([Float(3.25)])),
        ("+", SExpression([Symbol("+")])),
        ("(+ 1 2)", SExpression([SExpression([Symbol("+"), Integer(1), Integer(2)])])),
        ("{1 {2}}", SExpression([QExpression([Integer(1), QExpression([Integer(2)])])])),
        ("+ 1 (* 2 3)", SExpression([Symbol("+"), Integer(1), SExpression([Symbol("*"), Integer(2), Integer(3)])])),
        ("()", SExpression([SExpression()])),
        ("", SExpression()),
    ]
)
def test_read(source, expected):
    assert read_source(source) == expected


@pytest.mark.parametrize(
    "literal,expected",
    [
        ("9223372036854775807", Integer(9223372036854775807)),
        ("-9223372036854775808", Integer(-9223372036854775808)),
        ("9223372036854775808", Error("Invalid integer")),
        ("-9223372036854775809", Error("Invalid integer")),
    ]
)
def test_integer_range(literal, expected):
    assert read_source(literal).cells[0] == expected


def test_float_overflow_is_an_error():
    literal = "1" * 400 + ".0"
    assert read_source(literal).cells[0] == Error("Invalid float")


def test_invalid_literal_does_not_abort_the_read():
    v = read_source("(+ 1 99999999999999999999 2)")
    assert v.cells[0].cells[2] == Error("Invalid integer")
    assert v.cells[0].cells[3] == Integer(2)


def test_float_split_across_tokens_uses_full_text():
    # A grammar may match a float as <number> '.' <number>
    node = AstNode(
        "expr|float|>",
        children=[
            AstNode("expr|number|regex", "12"),
            AstNode("char", "."),
            AstNode("expr|number|regex", "05"),
        ],
    )
    assert read(node) == Float(12.05)


def test_punctuation_and_anchors_are_skipped():
    node = AstNode(
        ">",
        children=[
            AstNode("regex"),
            AstNode("char", "("),
            AstNode("expr|symbol|string", "list"),
            AstNode("char", ")"),
            AstNode("regex"),
        ],
    )
    assert read(node) == SExpression([Symbol("list")])


def test_read_allocates_one_value_per_node():
    before = allocations.live
    v = read_source("(+ 1 {2 3})")
    # root, sexpr, +, 1, qexpr, 2, 3
    assert allocations.live == before + 7
    v.release()
    assert allocations.live == before
