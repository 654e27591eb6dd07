from bilisp.reader.parser import AstNode, lex, parse, parse_forms, TokenStream, SYMBOLS
from bilisp.reader.reader import read

__all__ = ["AstNode", "lex", "parse", "parse_forms", "TokenStream", "SYMBOLS", "read"]
