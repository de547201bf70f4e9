"""RSC Lens CLI - Mark client component usages in React Server Components code."""
import json
from pathlib import Path
from typing import List

import typer
from rich.markup import escape
from rich.table import Table

from rsc_lens.analyzer.detector import (
    SKIPPED_CLIENT_MODULE,
    ClientUsageDetector,
    SourceBuffer,
    find_client_component_usages,
)
from rsc_lens.analyzer.directive import Directive, classify_directive
from rsc_lens.analyzer.parser import LanguageParser, ParseError
from rsc_lens.annotate import MARKER_GLYPH, render_annotated
from rsc_lens.config import __version__, get_config
from rsc_lens.utils.safe_console import SafeConsole

app = typer.Typer(
    name="rsc-lens",
    help="Mark usages of 'use client' components in JSX/TSX files",
    add_completion=False
)
console = SafeConsole()

SCAN_PATTERNS = ['*.jsx', '*.tsx', '*.js', '*.ts']

EXIT_USAGE_ERROR = 1
EXIT_PARSE_ERROR = 2


def _load_buffer(file_path: str) -> SourceBuffer:
    """Read a file into a SourceBuffer or exit with a readable error."""
    path = Path(file_path)
    if not path.is_file():
        console.print(f"[bold red]Error:[/bold red] File does not exist: {escape(str(path))}")
        raise typer.Exit(EXIT_USAGE_ERROR)
    try:
        return SourceBuffer.from_file(path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/bold red] Cannot read {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE_ERROR)


def _collect_files(root: Path, excluded_dirs: set) -> List[Path]:
    files = set()
    for pattern in SCAN_PATTERNS:
        for file_path in root.rglob(pattern):
            if any(part in excluded_dirs for part in file_path.relative_to(root).parts):
                continue
            if file_path.name.endswith('.d.ts'):
                continue
            files.add(file_path)
    return sorted(files)


@app.command()
def usages(
    file_path: str = typer.Argument(..., help="JSX/TSX file to analyze"),
    as_json: bool = typer.Option(False, "--json", help="Print raw 0-based anchors as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Fail with exit code 2 on syntax errors"),
):
    """List client component usages in a single file."""
    buffer = _load_buffer(file_path)

    if strict:
        try:
            anchors = ClientUsageDetector().detect(buffer).anchors
        except ParseError as e:
            console.print(f"[bold red]Parse error:[/bold red] {escape(str(e))}")
            raise typer.Exit(EXIT_PARSE_ERROR)
    else:
        anchors = find_client_component_usages(buffer)

    if as_json:
        typer.echo(json.dumps([anchor.to_dict() for anchor in anchors], indent=2))
        return

    if not anchors:
        console.print("[bold green]No client component usages found.[/bold green]")
        return

    table = Table(title=f"Client component usages in {escape(file_path)}")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Column", justify="right", style="cyan")
    table.add_column("Component", style="magenta")
    for anchor in anchors:
        table.add_row(str(anchor.line + 1), str(anchor.character + 1), anchor.component)
    console.print(table)
    console.print(f"\n[bold yellow]Total:[/bold yellow] {len(anchors)} usage(s)")


@app.command()
def annotate(
    file_path: str = typer.Argument(..., help="JSX/TSX file to render"),
    line_numbers: bool = typer.Option(True, "--line-numbers/--no-line-numbers", help="Prefix lines with numbers"),
):
    """Print a file with an inline marker after each client component usage."""
    config = get_config()
    buffer = _load_buffer(file_path)
    anchors = find_client_component_usages(buffer)
    console.print(
        render_annotated(buffer.text, anchors, config.marker_label,
                         color=config.marker_color, line_numbers=line_numbers),
        highlight=False,
    )


@app.command()
def directive(
    file_paths: List[str] = typer.Argument(..., help="Files to classify"),
):
    """Show the leading directive of each file."""
    styles = {
        Directive.CLIENT: "bold magenta",
        Directive.SERVER: "bold blue",
        Directive.NONE: "dim",
    }
    for file_path in file_paths:
        buffer = _load_buffer(file_path)
        kind = classify_directive(buffer.text, LanguageParser.language_for(buffer.path))
        console.print(f"{escape(file_path)}: [{styles[kind]}]{kind.value}[/{styles[kind]}]", soft_wrap=True)


@app.command()
def scan(
    project_path: str = typer.Argument(".", help="Directory to scan"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """Analyze every JSX/TSX file under a directory, each one independently."""
    root = Path(project_path)
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory does not exist: {escape(str(root))}")
        raise typer.Exit(EXIT_USAGE_ERROR)

    config = get_config()
    detector = ClientUsageDetector()
    results = {}
    client_modules = 0
    parse_failures = []

    for file_path in _collect_files(root, config.excluded_dirs):
        relative = file_path.relative_to(root).as_posix()
        try:
            buffer = SourceBuffer.from_file(file_path)
        except (OSError, UnicodeDecodeError):
            continue
        try:
            result = detector.detect(buffer)
        except ParseError:
            parse_failures.append(relative)
            continue
        if result.skipped_reason == SKIPPED_CLIENT_MODULE:
            client_modules += 1
        if result.anchors:
            results[relative] = result.anchors

    if as_json:
        payload = {
            'files': {name: [a.to_dict() for a in anchors] for name, anchors in results.items()},
            'client_modules': client_modules,
            'parse_errors': parse_failures,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    if results:
        table = Table(title="Client component usages")
        table.add_column("File", style="cyan")
        table.add_column("Usages", justify="right", style="yellow")
        table.add_column("Components", style="magenta")
        for name, anchors in results.items():
            components = ", ".join(sorted({a.component for a in anchors}))
            table.add_row(escape(name), str(len(anchors)), components)
        console.print(table)
    else:
        console.print("[bold green]No client component usages found.[/bold green]")

    console.print(f"\n[bold yellow]Summary:[/bold yellow]")
    console.print(f"  {MARKER_GLYPH} Files with usages: {len(results)}")
    console.print(f"  {MARKER_GLYPH} 'use client' modules: {client_modules}")
    if parse_failures:
        console.print(f"  [yellow]⚠ Skipped (syntax errors): {len(parse_failures)}[/yellow]")


@app.command()
def version():
    """Print the RSC Lens version."""
    typer.echo(f"rsc-lens {__version__}")


if __name__ == "__main__":
    app()
