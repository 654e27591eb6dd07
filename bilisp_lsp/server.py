from __future__ import annotations

"""
A minimal pygls-based Language Server for Bilisp.

Features:
- Initialize/Shutdown/Exit
- Text synchronization and document store
- Diagnostics: syntax errors, and top-level forms that evaluate to an Error
- Hover: builtin signatures, otherwise the value of the form under the cursor
- Completion: the builtin vocabulary

Every top-level form is evaluated on its own; forms are pure, so evaluating a
buffer has no side effects.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    TextDocumentSyncKind,
)

from bilisp import __version__
from bilisp.errors import BilispSyntaxError, ErrorKind
from bilisp.evaluation.evaluator import evaluate
from bilisp.reader.parser import AstNode, parse_forms
from bilisp.reader.reader import read
from bilisp.types.value import Error, render

logger = logging.getLogger(__name__)

SOURCE = "bilisp-ls"

BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ x y ...): sum",
    "-": "(- x y ...): difference; (- x) negates",
    "*": "(* x y ...): product",
    "/": "(/ x y ...): quotient; integer when exact, otherwise float",
    "%": "(% x y ...): integer remainder",
    "^": "(^ x y ...): power",
    "max": "(max x y ...): largest operand",
    "min": "(min x y ...): smallest operand",
    "list": "(list a b ...): collect operands into a Q-expression",
    "head": "(head {a b ...}): Q-expression of the first element",
    "tail": "(tail {a b ...}): Q-expression without the first element",
    "join": "(join {a ...} {b ...} ...): concatenate Q-expressions",
    "eval": "(eval {...}): evaluate a Q-expression as an S-expression",
}


@dataclass
class FormResult:
    node: AstNode
    text: str
    is_error: bool
    kind: Optional[ErrorKind] = None


@dataclass
class DocumentState:
    text: str
    forms: List[FormResult] = field(default_factory=list)
    syntax_error: Optional[BilispSyntaxError] = None


def analyze(text: str) -> DocumentState:
    """Parse ``text`` and evaluate every top-level form independently."""
    state = DocumentState(text=text)
    try:
        nodes = list(parse_forms(text))
    except BilispSyntaxError as ex:
        state.syntax_error = ex
        return state
    for node in nodes:
        result = evaluate(read(node))
        try:
            if isinstance(result, Error):
                state.forms.append(FormResult(node, render(result), True, result.kind))
            else:
                state.forms.append(FormResult(node, render(result), False))
        finally:
            result.release()
    return state


# --- Positions ---
def position_from_offset(text: str, offset: int) -> Position:
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line=line, character=offset - line_start)


def offset_from_position(text: str, pos: Position) -> int:
    lines = text.splitlines(True)
    return sum(len(line) for line in lines[: pos.line]) + pos.character


def _mk_range(text: str, start: int, end: int) -> Range:
    return Range(start=position_from_offset(text, start), end=position_from_offset(text, max(end, start + 1)))


# --- Diagnostics ---
def build_diagnostics(state: DocumentState) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    if state.syntax_error is not None:
        offset = state.syntax_error.position or 0
        diags.append(
            Diagnostic(
                range=_mk_range(state.text, offset, offset + 1),
                message=state.syntax_error.message,
                severity=DiagnosticSeverity.Error,
                code="syntax-error",
                source=SOURCE,
            )
        )
        return diags

    for form in state.forms:
        if form.is_error:
            diags.append(
                Diagnostic(
                    range=_mk_range(state.text, form.node.position, form.node.end),
                    message=form.text,
                    severity=DiagnosticSeverity.Warning,
                    code=form.kind.value if form.kind is not None else None,
                    source=SOURCE,
                )
            )
    return diags


# --- Hover ---
def extract_word_at(text: str, offset: int) -> Optional[str]:
    start = offset
    while start > 0 and text[start - 1] not in " \t(){}\n\r":
        start -= 1
    end = offset
    while end < len(text) and text[end] not in " \t(){}\n\r":
        end += 1
    word = text[start:end]
    return word if word else None


def hover_text(state: DocumentState, offset: int) -> Optional[str]:
    word = extract_word_at(state.text, offset)
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    for form in state.forms:
        if form.node.position <= offset < form.node.end:
            return f"=> {form.text}"
    return None


# --- Completion ---
def completion_items() -> List[CompletionItem]:
    return [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in BUILTIN_SIGNATURES.items()
    ]


class BilispLanguageServer(LanguageServer):
    CMD_NAME = "bilisp-ls"
    VERSION = __version__

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> None:
        state = analyze(text)
        self.documents[uri] = state
        self.publish_diagnostics(uri, build_diagnostics(state))


ls = BilispLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    ls.update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents.get(uri, DocumentState("")).text
    ls.update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    contents = hover_text(state, offset_from_position(state.text, params.position))
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["(", "{"]))
def on_completion(params: CompletionParams) -> CompletionList:
    return CompletionList(is_incomplete=False, items=completion_items())


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    logger.info("starting %s over stdio", ls.CMD_NAME)
    ls.start_io()


if __name__ == "__main__":
    main()
