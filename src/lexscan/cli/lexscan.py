"""
lexscan - Lexical Scanner Command-Line Interface
================================================

This module implements the ``lexscan`` console tool. It runs the
tokenizer or the semi-expression aggregator over source files and
prints the results.

Commands
--------
- **tokens**: Print every token with the line it ends on
- **semis**: Print every semi-expression, numbered
- **specials**: Print the special character tables

Usage Examples
--------------
List tokens:
    $ lexscan tokens Program.cs

List semi-expressions of several files:
    $ lexscan semis Program.cs Parser.cs

Treat '|' and '->' as atomic tokens:
    $ lexscan --single '|' --pair '->' tokens main.c

Fail on unterminated comments and literals:
    $ lexscan --strict semis main.c
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from lexscan import __version__
from lexscan.cli.errors import ExitCode, handle_cli_exception
from lexscan.config import ScannerOptions
from lexscan.semi import SemiExpression
from lexscan.toker import Toker


logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the scanner options built from the group-level flags.
    """

    def __init__(self) -> None:
        self.options = ScannerOptions.from_env()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def printable(text: str) -> str:
    """Show embedded newlines and tabs as escapes."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-s", "--single",
    multiple=True,
    help="Add a special single character (can be repeated)",
)
@click.option(
    "-p", "--pair",
    multiple=True,
    help="Add a special two-character token (can be repeated)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Report unterminated comments, literals and for(...) headers as errors",
)
@click.option(
    "-e", "--encoding",
    default=None,
    help="Source file encoding (default: utf-8-sig)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="lexscan")
@pass_context
def main(
    ctx: Context,
    single: tuple[str, ...],
    pair: tuple[str, ...],
    strict: bool,
    encoding: Optional[str],
    verbose: bool,
) -> None:
    """
    Lexical scanner for C-family source files.

    \b
    Commands:
      tokens    List tokens
      semis     List semi-expressions
      specials  Show special character tables

    \b
    Examples:
      lexscan tokens Program.cs
      lexscan semis Program.cs Parser.cs
      lexscan -s '|' -p '->' tokens main.c
    """
    ctx.verbose = verbose
    ctx.setup_logging()

    options = ctx.options
    options.verbose = verbose
    if strict:
        options.strict = True
    if encoding:
        options.encoding = encoding

    for ch in single:
        if len(ch) != 1:
            raise click.BadParameter(f"'{ch}' is not a single character", param_hint="--single")
        options.extra_single_chars.append(ch)
    for p in pair:
        if len(p) != 2:
            raise click.BadParameter(f"'{p}' is not a two-character token", param_hint="--pair")
        options.extra_char_pairs.append(p)


# =============================================================================
# Tokens Command
# =============================================================================

@main.command("tokens")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def tokens_cmd(ctx: Context, files: tuple[Path, ...]) -> None:
    """
    Print the tokens of each FILE.

    Each line shows the line number where the token ends and the token
    text, with newlines shown as \\n.
    """
    failed = 0
    try:
        for path in files:
            with Toker(ctx.options) as toker:
                if not toker.open(path):
                    click.echo(f"Error: can't open {path}", err=True)
                    failed += 1
                    continue

                click.echo(f"Processing file: {path}")
                count = 0
                while (tok := toker.get_tok()) is not None:
                    count += 1
                    click.echo(f" -- line#{toker.line_count():4d} : {printable(tok)}")

                if ctx.verbose:
                    click.echo(f"{count} tokens")
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)

    if failed:
        sys.exit(ExitCode.INVALID_ARGS)


# =============================================================================
# Semis Command
# =============================================================================

@main.command("semis")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--no-newlines",
    is_flag=True,
    help="Do not insert the newline marker before 'using' and '#'",
)
@click.option(
    "--discard-comments",
    is_flag=True,
    help="Leave comments out of semi-expressions",
)
@pass_context
def semis_cmd(
    ctx: Context,
    files: tuple[Path, ...],
    no_newlines: bool,
    discard_comments: bool,
) -> None:
    """
    Print the semi-expressions of each FILE.
    """
    options = ctx.options
    if no_newlines:
        options.return_newlines = False
    if discard_comments:
        options.discard_comments = True

    failed = 0
    try:
        for path in files:
            with SemiExpression(options) as semi:
                if not semi.open(path):
                    click.echo(f"Error: can't open {path}", err=True)
                    failed += 1
                    continue

                click.echo(f"Processing file: {path}")
                count = 0
                while semi.get_semi():
                    count += 1
                    click.echo(f"Set {count}: {printable(semi.display_str())}")

                if ctx.verbose:
                    click.echo(f"{count} semi-expressions")
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)

    if failed:
        sys.exit(ExitCode.INVALID_ARGS)


# =============================================================================
# Specials Command
# =============================================================================

@main.command("specials")
@pass_context
def specials_cmd(ctx: Context) -> None:
    """
    Print the special single characters and character pairs.
    """
    try:
        registry = ctx.options.build_registry()
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)

    click.echo("Special single chars:")
    click.echo(f"  {registry.format_singles()}")
    click.echo("Special char pairs:")
    click.echo(f"  {registry.format_pairs()}")


if __name__ == "__main__":
    main()
