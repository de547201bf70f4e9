"""Inline rendering of usage anchors, the terminal counterpart of an editor decoration."""
from collections import defaultdict
from typing import Dict, Iterable, List

from rich.text import Text

from .analyzer.usage_scanner import UsageAnchor

MARKER_GLYPH = '◆'


def utf16_to_index(line: str, character: int) -> int:
    """Convert a UTF-16 column to a Python string index within line."""
    units = 0
    for index, char in enumerate(line):
        if units >= character:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(line)


def render_annotated(text: str, anchors: Iterable[UsageAnchor], label: str,
                     color: str = 'grey62', line_numbers: bool = True) -> Text:
    """Render source text with the marker label inserted after each anchor."""
    by_line: Dict[int, List[int]] = defaultdict(list)
    for anchor in anchors:
        by_line[anchor.line].append(anchor.character)

    lines = text.split('\n')
    width = len(str(len(lines)))
    rendered = Text()

    for number, line in enumerate(lines):
        if line_numbers:
            rendered.append(f"{number + 1:>{width}} ", style='dim')

        cursor = 0
        for character in sorted(by_line.get(number, ())):
            index = utf16_to_index(line, character)
            rendered.append(line[cursor:index])
            rendered.append(f"  {MARKER_GLYPH} {label}", style=f"italic {color}")
            cursor = index
        rendered.append(line[cursor:])

        if number < len(lines) - 1:
            rendered.append('\n')

    return rendered
