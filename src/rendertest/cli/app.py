"""
rendertest CLI: render an element from an importable module and inspect it.

Targets are ``module:attribute`` where the attribute is an element or a
zero-argument callable returning one, e.g. ``myapp.views:build_page``.
"""

from __future__ import annotations

from enum import Enum

import typer
import yaml
from rich.console import Console

from rendertest.cli.formatters import build_matches_table, build_render_tree
from rendertest.cli.load_helpers import load_target_or_exit, render_or_exit
from rendertest.core.elements import display_name_of
from rendertest.query.printer import print_snapshot, snapshot_to_data
from rendertest.utils.logging import configure_logging

app = typer.Typer(help="rendertest CLI: render component trees and inspect the output.")
console = Console()


class OutputFormat(str, Enum):
    JSX = "jsx"
    JSON = "json"
    YAML = "yaml"
    TREE = "tree"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


@app.command()
def show(
    target: str = typer.Argument(..., help="module:attribute naming an element or element factory"),
    fmt: OutputFormat = typer.Option(OutputFormat.JSX, "--format", "-f", help="Output format"),
    verbose_errors: bool = typer.Option(False, "--traceback", help="Show a traceback when rendering fails"),
) -> None:
    """Render TARGET and print its output."""
    element = load_target_or_exit(target, console=console)
    session = render_or_exit(element, console=console, verbose_errors=verbose_errors)

    if fmt is OutputFormat.JSX:
        console.print(print_snapshot(session.to_json()), markup=False, highlight=False)
    elif fmt is OutputFormat.JSON:
        console.print_json(data=snapshot_to_data(session.to_json()))
    elif fmt is OutputFormat.YAML:
        text = yaml.safe_dump(snapshot_to_data(session.to_json()), sort_keys=False, default_flow_style=False)
        console.print(text.rstrip(), markup=False, highlight=False)
    else:
        console.print(build_render_tree(session.to_tree(), title=target))

    session.unmount()


@app.command("find")
def find_nodes(
    target: str = typer.Argument(..., help="module:attribute naming an element or element factory"),
    type_name: str = typer.Option(..., "--type", "-t", help="Host tag or component name to search for"),
) -> None:
    """List every node of TARGET whose type name is TYPE."""
    element = load_target_or_exit(target, console=console)
    session = render_or_exit(element, console=console)

    matches = session.root.find_all(lambda node: display_name_of(node.type) == type_name)
    if not matches:
        console.print(f"[yellow]No nodes found[/yellow] with type: {type_name}")
        session.unmount()
        raise typer.Exit(code=1)

    console.print(build_matches_table(matches, title=f"Nodes of type {type_name}"))
    session.unmount()


if __name__ == "__main__":
    app()
