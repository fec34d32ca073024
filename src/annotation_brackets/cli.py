"""Bracket translator insertions in saved HTML files.

Usage:
    annotation-brackets chapter.html                  # writes chapter.bracketed.html
    annotation-brackets ch1.html ch2.html -o out/     # writes into out/
    annotation-brackets chapter.html --in-place       # rewrites chapter.html
    annotation-brackets chapter.html --dry-run        # report only
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lxml.etree import ParserError
from rich.console import Console
from rich.table import Table

from annotation_brackets import setup_logging
from annotation_brackets.brackets.pipeline import BracketReport, bracket_html
from annotation_brackets.config import get_settings

console = Console()
logger = logging.getLogger(__name__)


def _output_path(source: Path, output_dir: Path | None, *, in_place: bool) -> Path:
    """Decide where the bracketed copy of source is written."""
    if in_place:
        return source
    if output_dir is not None:
        return output_dir / source.name
    return source.with_name(f"{source.stem}.bracketed{source.suffix}")


def _process_file(
    source: Path,
    destination: Path,
    *,
    dry_run: bool,
) -> BracketReport:
    """Bracket one file. Raises OSError/ValueError on unreadable input."""
    content = source.read_text(encoding="utf-8")
    if not content.strip():
        msg = f"{source} is empty"
        raise ValueError(msg)

    result, report = bracket_html(content)
    if not dry_run:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result, encoding="utf-8")
        logger.debug("Wrote %s", destination)
    return report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annotation-brackets",
        description="Surround italic translator insertions with [brackets].",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="HTML files to process")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for bracketed copies (default: alongside the input)",
    )
    target.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite each input file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing files.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for bracketing HTML files."""
    args = _build_parser().parse_args(argv)
    setup_logging(get_settings())

    table = Table(title="Bracketed annotations")
    table.add_column("File")
    table.add_column("Visited", justify="right")
    table.add_column("Groups", justify="right")
    table.add_column("Fused", justify="right")
    table.add_column("Moved", justify="right")
    table.add_column("Output")

    failures = 0
    for source in args.inputs:
        destination = _output_path(source, args.output_dir, in_place=args.in_place)
        try:
            report = _process_file(source, destination, dry_run=args.dry_run)
        except (OSError, ValueError, ParserError) as exc:
            failures += 1
            console.print(f"[red]Error[/] processing {source}: {exc}")
            continue

        table.add_row(
            str(source),
            str(report.visited),
            str(report.groups),
            str(report.fused),
            str(report.trailing_moved + report.leading_moved),
            "[dim]dry run[/]" if args.dry_run else str(destination),
        )

    if table.row_count:
        console.print(table)

    if failures:
        console.print(f"[red]{failures} file(s) failed.[/]")
        sys.exit(1)
