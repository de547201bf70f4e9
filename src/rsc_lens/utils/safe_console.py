"""Terminal-safe Console wrapper for Rich.

Sanitizes Unicode glyphs on terminals that don't support UTF-8.
"""
from rich.console import Console
from rich.text import Text
from typing import Any
from .logger import sanitize_for_terminal, is_utf8_capable


def sanitize_text(text: Text) -> Text:
    """Sanitize a styled Text, moving span offsets along with replaced glyphs.

    Replacements can change length ('→' becomes '->'), so the plain string is
    sanitized piece by piece between span boundaries and the spans are
    re-applied at the shifted offsets.
    """
    plain = text.plain
    boundaries = sorted({0, len(plain)} | {s.start for s in text.spans} | {s.end for s in text.spans})

    offsets = {}
    pieces = []
    position = 0
    for start, end in zip(boundaries, boundaries[1:]):
        offsets[start] = position
        piece = sanitize_for_terminal(plain[start:end])
        pieces.append(piece)
        position += len(piece)
    offsets[boundaries[-1]] = position

    sanitized = text.blank_copy(''.join(pieces))
    for span in text.spans:
        sanitized.stylize(span.style, offsets[span.start], offsets[span.end])
    return sanitized


class SafeConsole(Console):
    """Console that replaces Unicode glyphs with ASCII on non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """All arguments are passed through to Rich's Console."""
        self._needs_sanitization = not is_utf8_capable()

        if self._needs_sanitization:
            kwargs.setdefault('legacy_windows', True)

        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic Unicode sanitization.

        Args:
            *objects: Objects to print (same as Rich Console.print)
            **kwargs: Keyword arguments (same as Rich Console.print)
        """
        if not self._needs_sanitization:
            super().print(*objects, **kwargs)
            return

        sanitized_objects = []
        for obj in objects:
            if isinstance(obj, str):
                sanitized_objects.append(sanitize_for_terminal(obj))
            elif isinstance(obj, Text):
                sanitized_objects.append(sanitize_text(obj))
            else:
                sanitized_objects.append(obj)

        super().print(*sanitized_objects, **kwargs)
