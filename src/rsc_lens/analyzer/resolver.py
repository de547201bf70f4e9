import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set, Union

from .directive import is_client_directive
from .js_import_tracker import ImportDeclaration
from .parser import LanguageParser

# Probed in this order, each as a file and then as a directory index
IMPORT_EXTENSIONS = ('.jsx', '.tsx')

RELATIVE_PREFIXES = ('./', '../')

PathLike = Union[str, Path]


class FileSystem(Protocol):
    """Read-only file-system view used for import resolution."""

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding='utf-8')


@dataclass(frozen=True)
class ImportBinding:
    local_name: str
    module_path: str


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith(RELATIVE_PREFIXES)


def candidate_paths(base_dir: PathLike, specifier: str) -> List[Path]:
    """
    Builds the ordered candidate list for a relative import specifier:
    ./Button -> Button.jsx, Button/index.jsx, Button.tsx, Button/index.tsx
    """
    base = os.fspath(base_dir)
    candidates = []
    for ext in IMPORT_EXTENSIONS:
        candidates.append(Path(os.path.normpath(os.path.join(base, f"{specifier}{ext}"))))
        candidates.append(Path(os.path.normpath(os.path.join(base, specifier, f"index{ext}"))))
    return candidates


class ImportResolver:
    """
    Resolves relative import declarations to on-disk modules and keeps those
    marked with a 'use client' directive.
    """

    def __init__(self, file_system: Optional[FileSystem] = None):
        self.fs = file_system or LocalFileSystem()

    def resolve(self, declarations: Iterable[ImportDeclaration], base_dir: PathLike) -> List[ImportBinding]:
        """
        Args:
            declarations: Import declarations of the analyzed module
            base_dir: Directory of the analyzed module

        Returns:
            One binding per default/named local name imported from a client module
        """
        bindings: List[ImportBinding] = []

        for declaration in declarations:
            if not declaration.local_names or not is_relative_specifier(declaration.specifier):
                continue

            module_path = self.find_client_module(base_dir, declaration.specifier)
            if module_path is None:
                continue

            for name in declaration.local_names:
                bindings.append(ImportBinding(local_name=name, module_path=str(module_path)))

        return bindings

    def client_names(self, declarations: Iterable[ImportDeclaration], base_dir: PathLike) -> Set[str]:
        return {binding.local_name for binding in self.resolve(declarations, base_dir)}

    def find_client_module(self, base_dir: PathLike, specifier: str) -> Optional[Path]:
        """First candidate path that exists, is readable and is client-classified."""
        for candidate in candidate_paths(base_dir, specifier):
            if self._is_client_module(candidate):
                return candidate
        return None

    def _is_client_module(self, path: Path) -> bool:
        try:
            if not self.fs.exists(path):
                return False
            text = self.fs.read_text(path)
        except (OSError, UnicodeDecodeError):
            # Unreadable candidates count as missing
            return False
        return is_client_directive(text, LanguageParser.language_for(path))
