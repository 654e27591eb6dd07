from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

# readline is unavailable on some platforms; the loop works without history.
try:
    import readline
except ImportError:
    readline = None

from bilisp import __version__, config
from bilisp.debug_utils.pprint import DEFAULT_OPTIONS, format_ast
from bilisp.errors import BilispSyntaxError
from bilisp.evaluation.evaluator import evaluate
from bilisp.reader.parser import AstNode, parse
from bilisp.reader.reader import read
from bilisp.types.value import Error, Value, render

logger = logging.getLogger(__name__)

VERSION = __version__


class Interpreter:
    """
    Drives one input at a time through parse -> read -> evaluate -> render.
    Nothing is carried between inputs; each builds and releases its own tree.
    """

    def __init__(
        self, show_ast: bool = False, out: Optional[TextIO] = None, ast_options: Optional[dict] = None
    ):
        self.show_ast = show_ast
        self.ast_options = ast_options if ast_options is not None else dict(DEFAULT_OPTIONS)
        self.out = out if out is not None else sys.stdout

    def parse(self, code: str) -> AstNode:
        return parse(code)

    def eval(self, code: str) -> Value:
        """Evaluate ``code`` and return the result; the caller must release it."""
        tree = self.parse(code)
        if self.show_ast:
            print(format_ast(tree, self.ast_options), file=self.out)
        return evaluate(read(tree))

    def run(self, code: str) -> str:
        """Evaluate ``code`` and return the rendered result, releasing the value."""
        result = self.eval(code)
        try:
            if isinstance(result, Error):
                return f"Error: {render(result)}"
            return render(result)
        finally:
            result.release()

    def repl(self) -> None:
        history = _load_history()
        print(f"Bilisp {VERSION}", file=self.out)
        print("Press Ctrl+c to Exit\n", file=self.out)
        prompt = config.get_prompt()
        try:
            while True:
                try:
                    line = input(prompt)
                except EOFError:
                    print(file=self.out)
                    break
                if not line.strip():
                    continue
                try:
                    print(self.run(line), file=self.out)
                except BilispSyntaxError as ex:
                    logger.warning("syntax error in %r: %s", line, ex)
                    print(f"<stdin>: {ex}", file=self.out)
        except KeyboardInterrupt:
            print(file=self.out)
        finally:
            _save_history(history)


def _load_history() -> Optional[Path]:
    path = config.get_history_path()
    if readline is None or path is None:
        return None
    try:
        readline.read_history_file(path)
    except OSError:
        logger.debug("no history file at %s", path)
    return path


def _save_history(path: Optional[Path]) -> None:
    if readline is None or path is None:
        return
    try:
        readline.write_history_file(path)
    except OSError as ex:
        logger.warning("could not write history to %s: %s", path, ex)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bilisp", description="Bilisp expression evaluator")
    parser.add_argument("-c", "--command", help="evaluate one expression and exit")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree of each input")
    parser.add_argument("--color", action="store_true", help="colorize the syntax tree printed by --ast")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    level = "DEBUG" if args.verbose else config.get_log_level()
    if level:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    ast_options = config.get_ast_options()
    if args.color:
        ast_options["color"] = True
    interp = Interpreter(show_ast=args.ast, ast_options=ast_options)
    if args.command is not None:
        try:
            print(interp.run(args.command))
        except BilispSyntaxError as ex:
            print(f"<command>: {ex}", file=sys.stderr)
            return 1
        return 0

    interp.repl()
    return 0


if __name__ == "__main__":
    sys.exit(main())
