"""grep-style command line driver."""

import sys
from pathlib import Path
from typing import Iterable, List, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperCommand

from . import __version__
from .errors import PatternError
from .regex import CompiledPattern, compile


app = typer.Typer(
    add_completion=False,
    help="Print lines that match a pattern.",
)

_err_console = Console(stderr=True)


def _print_trace(message: str) -> None:
    _err_console.print(escape(message), style="dim")


def _version_callback(value: bool):
    if value:
        typer.echo(f"flatre {__version__}")
        raise typer.Exit()


class GrepCommand(TyperCommand):
    """Command whose usage errors exit with status 1, like a failed match."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def grep_lines(
    compiled: CompiledPattern,
    lines: Iterable[str],
    prefix: Optional[str] = None,
    only_matching: bool = False
) -> bool:
    """Print matching lines (or matched parts); return True if any matched."""
    matched = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        lead = f"{prefix}:" if prefix is not None else ""
        if only_matching:
            for found in compiled.finditer(line):
                # Empty matches are not printed, as with grep -o
                if found.end > found.start:
                    typer.echo(f"{lead}{found.group()}")
                matched = True
        elif compiled.search(line) is not None:
            typer.echo(f"{lead}{line}")
            matched = True
    return matched


@app.command(cls=GrepCommand)
def grep(
    pattern: str = typer.Option(
        ...,
        "-E", "--regexp",
        help="Pattern to search for",
    ),
    files: Optional[List[Path]] = typer.Argument(
        None,
        help="Files to search (standard input if omitted)",
    ),
    only_matching: bool = typer.Option(
        False,
        "-o", "--only-matching",
        help="Print only the matched parts of each line",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Trace matcher decisions on stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """
    Search FILES (or standard input) for lines matching PATTERN.

    Exits with status 0 if any line matched and 1 otherwise.
    """
    try:
        compiled = compile(pattern, trace=_print_trace if debug else None)
    except PatternError as e:
        _err_console.print(f"[red]invalid pattern:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    matched = False
    if not files:
        matched = grep_lines(compiled, sys.stdin, only_matching=only_matching)
    else:
        prefix_names = len(files) > 1
        for path in files:
            try:
                with open(path, encoding="utf-8", errors="replace") as handle:
                    if grep_lines(compiled, handle,
                                  str(path) if prefix_names else None,
                                  only_matching):
                        matched = True
            except OSError as e:
                _err_console.print(f"[red]{escape(str(path))}:[/red] {escape(e.strerror or str(e))}")

    raise typer.Exit(0 if matched else 1)


def main():
    app()


if __name__ == "__main__":
    main()
