"""Tree-sitter parser for JSX-capable module languages."""
from pathlib import Path
from typing import Optional
from tree_sitter import Language, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript


# Grammar handles are immutable and safe to share between parsers
_GRAMMARS = {
    'javascript': Language(tsjavascript.language()),
    'typescript': Language(tstypescript.language_typescript()),
    'tsx': Language(tstypescript.language_tsx()),
}


class ParseError(Exception):
    """Raised when a buffer is not syntactically valid module code."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        location = path or '<buffer>'
        if line is not None:
            location = f"{location}:{line + 1}"
        super().__init__(f"{location}: {message}")


class LanguageParser:
    """Parser for JavaScript, TypeScript and TSX using the tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.tsx': 'tsx',
    }

    DEFAULT_LANGUAGE = 'tsx'

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        """Initialize parser for given language.

        Args:
            language: One of 'javascript', 'typescript', 'tsx'

        Raises:
            ValueError: If language is not supported
        """
        if language not in _GRAMMARS:
            raise ValueError(f"Unsupported language: {language}")
        self.language = language
        self.parser = Parser(_GRAMMARS[language])

    def parse(self, source_code: str | bytes) -> Tree:
        """Parse source without validating it. Trees may contain ERROR nodes."""
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')
        return self.parser.parse(source_code)

    def parse_source(self, source_code: str | bytes, path: Optional[str] = None) -> Tree:
        """Parse source and reject trees that contain syntax errors.

        Args:
            source_code: Module text
            path: Originating path, used only in the error message

        Returns:
            Parsed Tree object

        Raises:
            ParseError: If the tree contains ERROR or MISSING nodes
        """
        tree = self.parse(source_code)
        if tree.root_node.has_error:
            node = find_first_error(tree.root_node)
            line = node.start_point[0] if node is not None else None
            raise ParseError("invalid syntax", path=path, line=line)
        return tree

    @classmethod
    def language_for(cls, file_path: str | Path) -> str:
        """Grammar name for a path. Unknown extensions fall back to TSX."""
        extension = Path(file_path).suffix.lower()
        return cls.SUPPORTED_LANGUAGES.get(extension, cls.DEFAULT_LANGUAGE)

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> 'LanguageParser':
        """Create parser based on file extension.

        Args:
            file_path: Path to determine language from

        Returns:
            LanguageParser instance
        """
        return cls(cls.language_for(file_path))


def find_first_error(node):
    """Return the first ERROR or MISSING node in document order, if any."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == 'ERROR' or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None
