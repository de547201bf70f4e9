"""Tests for import extraction and relative import resolution."""
from pathlib import Path

import pytest

from rsc_lens.analyzer.js_import_tracker import ImportDeclaration, JSImportTracker
from rsc_lens.analyzer.parser import LanguageParser
from rsc_lens.analyzer.resolver import (
    ImportBinding,
    ImportResolver,
    candidate_paths,
    is_relative_specifier,
)

CLIENT = "'use client';\nexport default function C() { return <div />; }\n"
SERVER = "export default function S() { return <div />; }\n"


def collect(code: str):
    tree = LanguageParser('tsx').parse_source(code)
    return JSImportTracker().collect_declarations(tree.root_node)


class TestImportTracker:
    """Top-level import declarations and their JSX-usable names."""

    def test_default_named_and_aliased(self):
        declarations = collect("import Def, { A, B as C } from './mod';\n")
        assert declarations == [ImportDeclaration('./mod', ('Def', 'A', 'C'))]

    def test_namespace_import_has_no_names(self):
        declarations = collect("import * as NS from './mod';\n")
        assert declarations[0].local_names == ()

    def test_default_plus_namespace(self):
        declarations = collect("import Def, * as NS from './mod';\n")
        assert declarations[0].local_names == ('Def',)

    def test_side_effect_import(self):
        declarations = collect("import './globals.css';\n")
        assert declarations == [ImportDeclaration('./globals.css', ())]

    def test_double_quoted_source_after_statement(self):
        declarations = collect('const a = 1;\nimport X from "../x";\n')
        assert declarations == [ImportDeclaration('../x', ('X',))]

    def test_multiple_declarations_in_order(self):
        code = "import A from './a';\nimport { B } from 'pkg';\nimport C from './c';\n"
        assert [d.specifier for d in collect(code)] == ['./a', 'pkg', './c']


class TestCandidatePaths:
    """Fixed candidate ordering."""

    def test_order(self):
        base = Path('/project/app')
        assert candidate_paths(base, './Button') == [
            Path('/project/app/Button.jsx'),
            Path('/project/app/Button/index.jsx'),
            Path('/project/app/Button.tsx'),
            Path('/project/app/Button/index.tsx'),
        ]

    def test_parent_directory_is_normalized(self):
        candidates = candidate_paths('/project/app/page', '../components/Nav')
        assert candidates[0] == Path('/project/app/components/Nav.jsx')

    @pytest.mark.parametrize("specifier,expected", [
        ('./Button', True),
        ('../ui/Button', True),
        ('react', False),
        ('@/components/Button', False),
        ('/abs/Button', False),
        ('.', False),
    ])
    def test_is_relative_specifier(self, specifier, expected):
        assert is_relative_specifier(specifier) is expected


class TestImportResolver:
    """Client classification of resolved modules."""

    def test_direct_file(self, write_files):
        root = write_files({'Client.tsx': CLIENT})
        bindings = ImportResolver().resolve([ImportDeclaration('./Client', ('Client',))], root)
        assert bindings == [ImportBinding('Client', str(root / 'Client.tsx'))]

    def test_directory_index(self, write_files):
        root = write_files({'widgets/index.jsx': CLIENT})
        names = ImportResolver().client_names([ImportDeclaration('./widgets', ('Widget',))], root)
        assert names == {'Widget'}

    def test_server_module_contributes_nothing(self, write_files):
        root = write_files({'Server.tsx': SERVER})
        assert ImportResolver().resolve([ImportDeclaration('./Server', ('Server',))], root) == []

    def test_missing_module_contributes_nothing(self, tmp_path):
        assert ImportResolver().resolve([ImportDeclaration('./Nope', ('Nope',))], tmp_path) == []

    def test_other_extensions_are_not_probed(self, write_files):
        root = write_files({'Client.js': CLIENT, 'Other.ts': CLIENT})
        declarations = [
            ImportDeclaration('./Client', ('Client',)),
            ImportDeclaration('./Other', ('Other',)),
        ]
        assert ImportResolver().resolve(declarations, root) == []

    def test_non_client_candidate_does_not_stop_probing(self, write_files):
        root = write_files({'Card.jsx': SERVER, 'Card.tsx': CLIENT})
        bindings = ImportResolver().resolve([ImportDeclaration('./Card', ('Card',))], root)
        assert bindings == [ImportBinding('Card', str(root / 'Card.tsx'))]

    def test_first_client_candidate_wins(self, write_files):
        root = write_files({'Card.jsx': CLIENT, 'Card/index.jsx': CLIENT, 'Card.tsx': CLIENT})
        bindings = ImportResolver().resolve([ImportDeclaration('./Card', ('Card',))], root)
        assert bindings == [ImportBinding('Card', str(root / 'Card.jsx'))]

    def test_every_local_name_is_bound(self, write_files):
        root = write_files({'ui.tsx': CLIENT})
        declarations = collect("import Root, { Item, Panel as P } from './ui';\n")
        names = [b.local_name for b in ImportResolver().resolve(declarations, root)]
        assert names == ['Root', 'Item', 'P']

    def test_non_relative_specifier_is_never_probed(self, memory_fs):
        fs = memory_fs({'/app/react.tsx': CLIENT})
        resolver = ImportResolver(fs)
        assert resolver.resolve([ImportDeclaration('react', ('React',))], '/app') == []
        assert fs.probed == []

    def test_unreadable_candidate_is_skipped(self, memory_fs):
        fs = memory_fs({'/app/Card.tsx': CLIENT}, unreadable=['/app/Card.jsx'])
        bindings = ImportResolver(fs).resolve([ImportDeclaration('./Card', ('Card',))], '/app')
        assert bindings == [ImportBinding('Card', str(Path('/app/Card.tsx')))]

    def test_probe_stops_after_client_match(self, memory_fs):
        fs = memory_fs({'/app/Card/index.jsx': CLIENT})
        ImportResolver(fs).resolve([ImportDeclaration('./Card', ('Card',))], '/app')
        assert fs.probed == [str(Path('/app/Card.jsx')), str(Path('/app/Card/index.jsx'))]

    def test_invalid_candidate_syntax_is_not_client(self, write_files):
        root = write_files({'Broken.tsx': "'use client';\nexport default function (\n"})
        assert ImportResolver().resolve([ImportDeclaration('./Broken', ('Broken',))], root) == []

    def test_names_without_bindings_skip_resolution(self, memory_fs):
        fs = memory_fs({'/app/styles.tsx': CLIENT})
        assert ImportResolver(fs).resolve([ImportDeclaration('./styles', ())], '/app') == []
        assert fs.probed == []
