"""
  Bilisp Lexer and Parser

Produces a tagged syntax tree in the shape the reader expects, one node per
grammar match:

    number : /-?[0-9]+/ ;
    float  : /-?[0-9]+\\.[0-9]+/ ;
    symbol : '+' | '-' | '*' | '/' | '%' | '^'
           | "max" | "min" | "list" | "head" | "tail" | "join" | "eval" ;
    sexpr  : '(' <expr>* ')' ;
    qexpr  : '{' <expr>* '}' ;
    expr   : <float> | <number> | <symbol> | <sexpr> | <qexpr> ;
    lispy  : /^/ <expr>* /$/ ;

Tags follow the `rule|rule|kind` convention:

    - root             -> ">"
    - integer literal  -> "expr|number|regex"
    - float literal    -> "expr|float|regex"
    - symbol           -> "expr|symbol|string"
    - s-expression     -> "expr|sexpr|>"
    - q-expression     -> "expr|qexpr|>"
    - ( ) { }          -> "char"
    - start/end anchor -> "regex"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from bilisp.errors import BilispSyntaxError

SYMBOLS = frozenset(
    ["+", "-", "*", "/", "%", "^", "max", "min", "list", "head", "tail", "join", "eval"]
)

TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<float>-?[0-9]+\.[0-9]+)"  # must precede number
    r"|(?P<number>-?[0-9]+)"
    r"|(?P<symbol>[A-Za-z_]+|[+\-*/%^])"
)

CLOSERS: dict[str, str] = {"lparen": "rparen", "lbrace": "rbrace"}
GROUP_TAGS: dict[str, str] = {"lparen": "expr|sexpr|>", "lbrace": "expr|qexpr|>"}


@dataclass
class AstNode:
    tag: str
    contents: str = ""
    children: list[AstNode] = field(default_factory=list)
    position: int = 0
    end: int = 0

    def __repr__(self):
        return f"AstNode({self.tag!r}, {self.contents!r}, children={len(self.children)})"


def lex(source: str) -> Iterator[tuple[str, str, int]]:
    """Token generator: yields (token_type, token_text, offset) tuples."""
    pos = 0
    n = len(source)
    while True:
        while pos < n and source[pos].isspace():
            pos += 1
        if pos >= n:
            return
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise BilispSyntaxError(f"Unexpected character {source[pos]!r}", pos)
        kind = m.lastgroup
        pos = m.end()
        if kind == "comment":
            continue
        text = m.group(kind)
        if kind == "symbol" and text not in SYMBOLS:
            raise BilispSyntaxError(f"Unknown symbol {text!r}", m.start())
        yield kind, text, m.start()


class TokenStream:
    def __init__(self, tokens: Iterator[tuple[str, str, int]], length: int = 0):
        self.tokens = iter(tokens)
        self.buffer: list[tuple[str, str, int]] = []
        self.length = length

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, self.length
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, self.length))

    def parse_expr(self) -> AstNode:
        tok_type, tok_val, pos = self.advance()
        if tok_type is None:
            raise BilispSyntaxError("Unexpected end of input", pos)

        if tok_type == "number":
            return AstNode("expr|number|regex", tok_val, position=pos, end=pos + len(tok_val))
        if tok_type == "float":
            return AstNode("expr|float|regex", tok_val, position=pos, end=pos + len(tok_val))
        if tok_type == "symbol":
            return AstNode("expr|symbol|string", tok_val, position=pos, end=pos + len(tok_val))

        if tok_type in CLOSERS:
            node = AstNode(GROUP_TAGS[tok_type], position=pos)
            node.children.append(AstNode("char", tok_val, position=pos, end=pos + 1))
            closer = CLOSERS[tok_type]
            while True:
                next_type, next_val, next_pos = self.peek()
                if next_type is None:
                    raise BilispSyntaxError(f"Unmatched {tok_val!r}", pos)
                if next_type == closer:
                    self.advance()
                    node.children.append(AstNode("char", next_val, position=next_pos, end=next_pos + 1))
                    node.end = next_pos + 1
                    return node
                if next_type in ("rparen", "rbrace"):
                    raise BilispSyntaxError(f"Unexpected {next_val!r}", next_pos)
                node.children.append(self.parse_expr())

        raise BilispSyntaxError(f"Unexpected {tok_val!r}", pos)

    def parse_all(self) -> Iterator[AstNode]:
        while self.peek()[0] is not None:
            yield self.parse_expr()


def parse(source: str) -> AstNode:
    """Parse a whole input line into a root node holding every top-level expression."""
    stream = TokenStream(lex(source), len(source))
    root = AstNode(">", end=len(source))
    root.children.append(AstNode("regex", position=0))
    root.children.extend(stream.parse_all())
    root.children.append(AstNode("regex", position=len(source), end=len(source)))
    return root


def parse_forms(source: str) -> Iterator[AstNode]:
    """Yield each top-level expression of ``source`` on its own."""
    return TokenStream(lex(source), len(source)).parse_all()
