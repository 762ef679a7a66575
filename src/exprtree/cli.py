"""
exprtree CLI.

Commands:
- eval:   parse, render and reduce an expression
- tokens: show the token stream
- tree:   show the parsed AST as a tree
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from exprtree._version import get_version
from exprtree.core.config import EngineConfig, load_config
from exprtree.core.driver import OUTPUT_FORMATS, drive, format_error
from exprtree.core.errors import ConfigError, ExprTreeError
from exprtree.core.ir.expressions import BinaryExpr, Expr
from exprtree.core.parser import Parser
from exprtree.core.tokenizer import Tokenizer

DEFAULT_EXPRESSION = "3 + 5 * (2 - 8)"

console = Console()

app = typer.Typer(
    help="exprtree – parse integer arithmetic into an AST, render it, and reduce it",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"exprtree version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """exprtree CLI main callback for global options."""
    pass


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def _load_settings(
    config_path: Path | None,
    verbose: bool,
    require_end: bool | None = None,
    max_bits: int | None = None,
) -> EngineConfig:
    """Load config, apply CLI overrides, and set up logging."""
    try:
        config = load_config(config_path).with_overrides(
            require_end=require_end,
            max_bits=max_bits,
            log_level="DEBUG" if verbose else None,
        )
    except ConfigError as e:
        typer.echo(format_error(e), err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        # pydantic ValidationError on an invalid override
        typer.echo(f"Error: invalid option: {e}", err=True)
        raise typer.Exit(code=1)

    _configure_logging(config.log_level)
    return config


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(DEFAULT_EXPRESSION, help="Arithmetic expression"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: 'text' or 'json'"),
    lenient: bool = typer.Option(
        False, "--lenient", help="Ignore tokens left over after the expression"
    ),
    bits: int | None = typer.Option(
        None, "--bits", help="Signed integer width for literals and results"
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to exprtree.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Parse an expression, print its fully-parenthesized form and its value.
    """
    if format not in OUTPUT_FORMATS:
        typer.echo(f"Error: unknown format {format!r} (use 'text' or 'json')", err=True)
        raise typer.Exit(code=2)

    config = _load_settings(
        config_path,
        verbose,
        require_end=False if lenient else None,
        max_bits=bits,
    )
    code = drive(expression, config, output_format=format)
    raise typer.Exit(code=code)


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Arithmetic expression"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Show the token stream produced for an expression.
    """
    _configure_logging("DEBUG" if verbose else "WARNING")

    table = Table(title="Tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind")
    table.add_column("Value")

    try:
        for tok in Tokenizer(expression):
            table.add_row(str(tok.pos), str(tok.kind), tok.value)
    except ExprTreeError as e:
        typer.echo(format_error(e), err=True)
        raise typer.Exit(code=1)

    console.print(table)


def _build_tree(expr: Expr, root: Tree) -> None:
    stack: list[tuple[Expr, Tree]] = [(expr, root)]
    while stack:
        node, branch = stack.pop()
        if isinstance(node, BinaryExpr):
            child = branch.add(f"[bold]{node.op.value}[/bold]")
            stack.append((node.right, child))
            stack.append((node.left, child))
        else:
            branch.add(f"[cyan]{node.value}[/cyan]")


@app.command(name="tree")
def tree_command(
    expression: str = typer.Argument(..., help="Arithmetic expression"),
    lenient: bool = typer.Option(
        False, "--lenient", help="Ignore tokens left over after the expression"
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to exprtree.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Show the parsed AST of an expression as a tree.
    """
    config = _load_settings(config_path, verbose, require_end=False if lenient else None)

    try:
        parser = Parser(
            Tokenizer(expression),
            require_end=config.require_end,
            max_bits=config.max_bits,
        )
        expr = parser.parse()
    except ExprTreeError as e:
        typer.echo(format_error(e), err=True)
        raise typer.Exit(code=1)

    root = Tree(f"{expr.render()}  [dim](depth {expr.depth()}, {expr.node_count()} nodes)[/dim]")
    _build_tree(expr, root)
    console.print(root)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
