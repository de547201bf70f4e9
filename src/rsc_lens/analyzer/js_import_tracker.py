from dataclasses import dataclass, field
from typing import List, Tuple

from tree_sitter import Node


@dataclass(frozen=True)
class ImportDeclaration:
    specifier: str
    local_names: Tuple[str, ...] = field(default_factory=tuple)


class JSImportTracker:
    def collect_declarations(self, root_node: Node) -> List[ImportDeclaration]:
        """
        Collects the top-level ESM import declarations of a module.

        Only default and named bindings are kept, since those are the names
        that can appear as a JSX tag. Namespace imports (import * as ns) and
        side-effect imports (import './styles.css') yield no local names.
        """
        declarations: List[ImportDeclaration] = []

        for node in root_node.named_children:
            if node.type != 'import_statement':
                continue

            source_node = node.child_by_field_name('source')
            if source_node is None:
                # import x = require('mod') has no source field
                continue

            specifier = strip_quotes(source_node.text.decode('utf-8'))
            local_names: List[str] = []

            for clause in node.named_children:
                if clause.type != 'import_clause':
                    continue

                for child in clause.named_children:
                    # Case: Default Import (e.g., import X from './mod')
                    if child.type == 'identifier':
                        local_names.append(child.text.decode('utf-8'))

                    # Case: Named Imports (e.g., import { X, Y as Z } from './mod')
                    elif child.type == 'named_imports':
                        for spec in child.named_children:
                            if spec.type != 'import_specifier':
                                continue
                            alias_node = spec.child_by_field_name('alias')
                            name_node = alias_node or spec.child_by_field_name('name')
                            if name_node is not None:
                                local_names.append(name_node.text.decode('utf-8'))

                    # namespace_import: <ns.X /> is a member tag, never matched

            declarations.append(ImportDeclaration(
                specifier=specifier,
                local_names=tuple(local_names),
            ))

        return declarations


def strip_quotes(text: str) -> str:
    return text.strip('"\'`')
