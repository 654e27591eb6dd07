import json

from bilisp.reader.parser import AstNode

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[94m"
COLOR_SYMBOL = "\033[92m"
COLOR_GROUP = "\033[96m"
COLOR_CHAR = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "max_depth": 64,
    "color": False,
}


# ----------------- Colorize utility -----------------
def colorize(tag: str, options: dict = DEFAULT_OPTIONS) -> str:
    if not options.get("color", False):
        return tag
    if "number" in tag or "float" in tag:
        return f"{COLOR_NUMBER}{tag}{RESET}"
    if "symbol" in tag:
        return f"{COLOR_SYMBOL}{tag}{RESET}"
    if "sexpr" in tag or "qexpr" in tag or tag == ">":
        return f"{COLOR_GROUP}{tag}{RESET}"
    return f"{COLOR_CHAR}{tag}{RESET}"


# ----------------- Pretty printer -----------------
def format_ast(node: AstNode, options: dict = DEFAULT_OPTIONS, _depth: int = 0) -> str:
    """Outline of a syntax tree, one node per line: ``tag 'contents'``."""
    pad = " " * (options.get("indent", 2) * _depth)
    if _depth >= options.get("max_depth", 64):
        return pad + "..."
    line = pad + colorize(node.tag, options)
    if node.contents:
        line += f" '{node.contents}'"
    lines = [line]
    for child in node.children:
        lines.append(format_ast(child, options, _depth + 1))
    return "\n".join(lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
