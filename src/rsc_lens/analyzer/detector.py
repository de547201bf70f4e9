"""Client component usage detection for a single source buffer.

Pipeline (two read-only passes over one parsed tree):
1. Directive: a 'use client' buffer is already client code, nothing to mark
2. Imports: relative imports resolved on disk and classified by directive
3. JSX: usages of the client-bound names become anchors
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .directive import is_client_directive
from .js_import_tracker import JSImportTracker
from .parser import LanguageParser, ParseError
from .resolver import FileSystem, ImportBinding, ImportResolver
from .usage_scanner import JSXUsageScanner, UsageAnchor

SKIPPED_CLIENT_MODULE = 'client-module'
SKIPPED_NO_CLIENT_IMPORTS = 'no-client-imports'


@dataclass(frozen=True)
class SourceBuffer:
    text: str
    path: str

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'SourceBuffer':
        path = Path(path)
        return cls(text=path.read_text(encoding='utf-8'), path=str(path.resolve()))

    @property
    def base_dir(self) -> str:
        return os.path.dirname(self.path)

    @property
    def language(self) -> str:
        return LanguageParser.language_for(self.path)


@dataclass
class DetectionResult:
    """Outcome of a strict detection run."""
    anchors: List[UsageAnchor] = field(default_factory=list)
    bindings: List[ImportBinding] = field(default_factory=list)
    skipped_reason: Optional[str] = None


class ClientUsageDetector:
    """Finds usages of client components in a buffer.

    detect() is strict: ParseError propagates so callers can tell invalid
    input apart from a clean file.
    """

    def __init__(self, file_system: Optional[FileSystem] = None):
        self.resolver = ImportResolver(file_system)
        self.import_tracker = JSImportTracker()

    def detect(self, buffer: SourceBuffer) -> DetectionResult:
        """Run detection on a buffer.

        Args:
            buffer: Text and originating path of the module

        Returns:
            DetectionResult with anchors in document order

        Raises:
            ParseError: If the buffer is not valid module syntax
        """
        if is_client_directive(buffer.text, buffer.language):
            return DetectionResult(skipped_reason=SKIPPED_CLIENT_MODULE)

        source = buffer.text.encode('utf-8')
        tree = LanguageParser.from_file_extension(buffer.path).parse_source(source, path=buffer.path)

        declarations = self.import_tracker.collect_declarations(tree.root_node)
        bindings = self.resolver.resolve(declarations, buffer.base_dir)
        if not bindings:
            return DetectionResult(skipped_reason=SKIPPED_NO_CLIENT_IMPORTS)

        names = {binding.local_name for binding in bindings}
        anchors = JSXUsageScanner(source).scan(tree.root_node, names)
        return DetectionResult(anchors=anchors, bindings=bindings)


def find_client_component_usages(buffer: SourceBuffer,
                                 file_system: Optional[FileSystem] = None) -> List[UsageAnchor]:
    """Anchors for every client component usage in buffer. Invalid syntax yields []."""
    try:
        return ClientUsageDetector(file_system).detect(buffer).anchors
    except ParseError:
        return []
