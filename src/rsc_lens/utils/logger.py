"""Terminal encoding detection with ASCII fallbacks for output glyphs.

Some terminals (legacy Windows consoles, C locales in CI) cannot print the
glyphs used by the CLI; those are swapped for ASCII equivalents.
"""
import sys
import locale


# Unicode to ASCII glyph mapping
ICON_MAP = {
    # Status
    '✓': '[OK]',
    '✗': '[FAIL]',
    '⚠': '[WARN]',

    # Markers
    '◆': '*',
    '◇': 'o',
    '•': '*',
    '→': '->',
    '…': '...',

    # Table borders used by rich box styles
    '│': '|',
    '─': '-',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (LookupError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can handle UTF-8 Unicode characters."""
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace glyphs with ASCII equivalents if the terminal doesn't support UTF-8.

    Args:
        text: Text potentially containing Unicode glyphs

    Returns:
        str: Sanitized text safe for current terminal
    """
    if is_utf8_capable():
        return text

    sanitized = text
    for unicode_char, ascii_replacement in ICON_MAP.items():
        sanitized = sanitized.replace(unicode_char, ascii_replacement)
    return sanitized
