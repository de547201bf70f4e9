"""JSX usage scanner.

Walks a parsed module for JSX elements whose tag is one of a given set of
plain identifiers and computes where an inline marker belongs for each one.

Anchor placement:
- <X /> self-closing: right after the element
- <X>...</X> on one line: right after the closing tag
- <X>\\n...\\n</X> spanning lines: right after the opening tag

Positions are zero-width, 0-based, and use UTF-16 code-unit columns so they
line up with editor coordinates.
"""
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Tuple

from tree_sitter import Node, Tree


@dataclass(frozen=True)
class UsageAnchor:
    line: int
    character: int
    component: str = ''

    @property
    def start(self) -> Tuple[int, int]:
        return (self.line, self.character)

    @property
    def end(self) -> Tuple[int, int]:
        # Zero-width
        return (self.line, self.character)

    def to_dict(self) -> dict:
        return {'line': self.line, 'character': self.character, 'component': self.component}


class JSXUsageScanner:
    """Finds JSX usages of a fixed set of component names."""

    def __init__(self, source_code: str | bytes):
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')
        self.source = source_code

    def scan(self, root_node: Node, names: AbstractSet[str]) -> List[UsageAnchor]:
        """Return anchors for every matching element, in document order."""
        anchors: List[UsageAnchor] = []
        if not names:
            return anchors

        # Pre-order traversal
        stack = [root_node]
        while stack:
            node = stack.pop()

            if node.type == 'jsx_element':
                anchor = self._element_anchor(node, names)
                if anchor is not None:
                    anchors.append(anchor)
            elif node.type == 'jsx_self_closing_element':
                name = self._tag_name(node)
                if name in names:
                    anchors.append(self._anchor_at(node.end_point, node.end_byte, name))

            stack.extend(reversed(node.named_children))

        return anchors

    def _element_anchor(self, node: Node, names: AbstractSet[str]) -> Optional[UsageAnchor]:
        open_tag = node.child_by_field_name('open_tag')
        close_tag = node.child_by_field_name('close_tag')
        if open_tag is None:
            return None

        name = self._tag_name(open_tag)
        if name not in names:
            return None

        if close_tag is None:
            return self._anchor_at(open_tag.end_point, open_tag.end_byte, name)

        if open_tag.end_point[0] != close_tag.start_point[0]:
            return self._anchor_at(open_tag.end_point, open_tag.end_byte, name)
        return self._anchor_at(close_tag.end_point, close_tag.end_byte, name)

    @staticmethod
    def _tag_name(tag: Node) -> Optional[str]:
        """Plain identifier tag name; None for fragments, member and namespaced tags."""
        name_node = tag.child_by_field_name('name')
        if name_node is None or name_node.type != 'identifier':
            return None
        return name_node.text.decode('utf-8')

    def _anchor_at(self, point, byte_offset: int, component: str) -> UsageAnchor:
        row, byte_column = point[0], point[1]
        line_start = byte_offset - byte_column
        return UsageAnchor(
            line=row,
            character=utf16_column(self.source[line_start:byte_offset]),
            component=component,
        )


def utf16_column(line_prefix: bytes) -> int:
    """Length in UTF-16 code units of a UTF-8 encoded line prefix."""
    return len(line_prefix.decode('utf-8', errors='replace').encode('utf-16-le')) // 2


def scan_usages(tree: Tree, source_code: str | bytes, names: AbstractSet[str]) -> List[UsageAnchor]:
    return JSXUsageScanner(source_code).scan(tree.root_node, names)
