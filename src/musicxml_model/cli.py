"""Command-line interface for musicxml-model."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from musicxml_model.coding.codec import XmlEncoder
from musicxml_model.doctypes import (
    COMPRESSED_EXTENSIONS,
    PARTWISE_DOCTYPE,
    UNCOMPRESSED_EXTENSIONS,
)
from musicxml_model.errors import CodingError, DecodeReport
from musicxml_model.helpers import check_file, decode_file
from musicxml_model.score import ROOT_TYPES, ScorePartwise

console = Console()
error_console = Console(stderr=True)

MUSICXML_EXTENSIONS = UNCOMPRESSED_EXTENSIONS | COMPRESSED_EXTENSIONS


def _collect_files(path: Path, recursive: bool) -> list[Path]:
    if path.is_dir():
        if not recursive:
            raise ValueError(f"{path} is a directory. Use --recursive to check all files.")
        return sorted({p for ext in MUSICXML_EXTENSIONS for p in path.rglob(f"*{ext}")})
    return [path]


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


type_option = click.option(
    "--type",
    "-t",
    "root_tag",
    type=click.Choice(sorted(ROOT_TYPES)),
    default=None,
    help="Element type of the document root (detected from the root tag by default).",
)
trim_option = click.option(
    "--trim",
    is_flag=True,
    help="Strip whitespace around element text.",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log decoding decisions to stderr.",
)


@click.group()
@click.version_option(package_name="musicxml-model")
def main() -> None:
    """Decode and encode MusicXML documents."""


@main.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@type_option
@trim_option
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format.",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Check all MusicXML files in directory.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only output errors, no success messages.",
)
@verbose_option
def check(
    path: Path,
    root_tag: str | None,
    trim: bool,
    output: str,
    recursive: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Check that MusicXML files decode into the typed model.

    PATH can be a single file or a directory (with --recursive).
    """
    _configure_logging(verbose)
    value_type = ROOT_TYPES[root_tag] if root_tag else None

    try:
        files = _collect_files(path, recursive)
    except ValueError as exc:
        error_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    if path.is_dir() and not files:
        error_console.print(f"[yellow]Warning:[/yellow] No MusicXML files found in {path}")
        sys.exit(0)

    reports = [check_file(f, value_type=value_type, trim_whitespace=trim) for f in files]

    if output == "json":
        _output_json(reports)
    else:
        _output_text(reports, quiet)

    sys.exit(0 if all(r.ok for r in reports) else 1)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@type_option
@trim_option
@click.option(
    "--compact",
    is_flag=True,
    help="Write without indentation.",
)
@verbose_option
def roundtrip(
    path: Path,
    root_tag: str | None,
    trim: bool,
    compact: bool,
    verbose: bool,
) -> None:
    """Decode a MusicXML file and print it encoded again."""
    _configure_logging(verbose)
    value_type = ROOT_TYPES[root_tag] if root_tag else None

    try:
        value = decode_file(path, value_type=value_type, trim_whitespace=trim)
        is_score = isinstance(value, ScorePartwise)
        encoder = XmlEncoder(
            pretty_print=not compact,
            xml_declaration=is_score,
            doctype=PARTWISE_DOCTYPE if is_score else None,
        )
        xml = encoder.encode(value)
    except CodingError as exc:
        error_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    click.echo(xml.decode(encoder.encoding), nl=False)


def _output_text(reports: list[DecodeReport], quiet: bool) -> None:
    """Output reports as formatted text."""
    for report in reports:
        if report.ok:
            if not quiet:
                console.print(f"[green]✓[/green] {report.file_path} - {report.root_tag}")
            continue

        console.print(f"[red]✗[/red] {report.file_path} - Failed")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Kind", style="dim", width=22)
        table.add_column("Location", width=30)
        table.add_column("Description")

        for error in report.errors:
            table.add_row(error.kind.value, error.path, error.description)

        console.print(table)
        console.print()

    total = len(reports)
    ok = sum(1 for r in reports if r.ok)
    failed = total - ok

    if total > 1:
        console.print(f"\n[bold]Summary:[/bold] {ok}/{total} files decoded", end="")
        if failed > 0:
            console.print(f", [red]{failed} failed[/red]")
        else:
            console.print()


def _output_json(reports: list[DecodeReport]) -> None:
    """Output reports as JSON."""
    output = []
    for report in reports:
        output.append({
            "file": report.file_path,
            "ok": report.ok,
            "root": report.root_tag,
            "error_count": report.error_count,
            "errors": [
                {
                    "kind": e.kind.value,
                    "description": e.description,
                    "path": list(e.coding_path),
                }
                for e in report.errors
            ],
        })

    console.print_json(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
