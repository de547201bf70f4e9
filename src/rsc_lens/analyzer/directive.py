"""Module directive classification ('use client' / 'use server')."""
from enum import Enum
from typing import Optional
from tree_sitter import Node

from .parser import LanguageParser

CLIENT_MARKER = 'use client'
SERVER_MARKER = 'use server'

# Nodes allowed before the directive statement
_PROLOGUE_SKIP = {'comment', 'hash_bang_line'}


class Directive(Enum):
    CLIENT = 'client'
    SERVER = 'server'
    NONE = 'none'


_MARKERS = {
    f'"{CLIENT_MARKER}"': Directive.CLIENT,
    f"'{CLIENT_MARKER}'": Directive.CLIENT,
    f'"{SERVER_MARKER}"': Directive.SERVER,
    f"'{SERVER_MARKER}'": Directive.SERVER,
}


def classify_directive(text: str, language: str = LanguageParser.DEFAULT_LANGUAGE) -> Directive:
    """Classify a module by its first statement.

    Only the first statement after comments is inspected. Invalid syntax
    classifies as Directive.NONE rather than raising.

    Args:
        text: Full module text
        language: Grammar used to read the text

    Returns:
        Directive of the leading string-literal statement
    """
    if not text.strip():
        return Directive.NONE

    tree = LanguageParser(language).parse(text)
    root = tree.root_node
    if root.has_error:
        return Directive.NONE

    statement = _first_statement(root)
    if statement is None or statement.type != 'expression_statement':
        return Directive.NONE

    expressions = [c for c in statement.named_children if c.type not in _PROLOGUE_SKIP]
    if len(expressions) != 1 or expressions[0].type != 'string':
        return Directive.NONE

    # Directives compare the raw literal, escapes included
    raw = expressions[0].text.decode('utf-8')
    return _MARKERS.get(raw, Directive.NONE)


def is_client_directive(text: str, language: str = LanguageParser.DEFAULT_LANGUAGE) -> bool:
    """True if the module starts with a 'use client' directive."""
    return classify_directive(text, language) is Directive.CLIENT


def _first_statement(root: Node) -> Optional[Node]:
    for child in root.named_children:
        if child.type not in _PROLOGUE_SKIP:
            return child
    return None
