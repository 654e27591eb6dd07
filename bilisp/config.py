from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

from bilisp.debug_utils.pprint import load_options_from_json


# Defaults
_DEFAULT_PROMPT = 'bilisp> '
_DEFAULT_HISTORY = Path.home() / '.bilisp_history'


def get_prompt() -> str:
    return os.environ.get('BILISP_PROMPT', _DEFAULT_PROMPT)


def get_history_path() -> Optional[Path]:
    raw = os.environ.get('BILISP_HISTORY')
    if raw is None:
        return _DEFAULT_HISTORY
    # an empty value disables history
    raw = raw.strip()
    return Path(raw).expanduser() if raw else None


def get_log_level() -> Optional[str]:
    raw = os.environ.get('BILISP_LOG_LEVEL', '').strip()
    return raw.upper() or None


def get_ast_options() -> dict:
    # BILISP_AST_OPTIONS holds a JSON object, e.g. '{"indent": 4, "color": true}'
    return load_options_from_json(os.environ.get('BILISP_AST_OPTIONS', '{}'))
