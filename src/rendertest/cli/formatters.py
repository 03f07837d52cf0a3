"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Any, List, Mapping

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from rendertest.core.elements import display_name_of
from rendertest.query.instance import NodeHandle
from rendertest.query.printer import format_value
from rendertest.query.serializers import TreeNode


def format_props(props: Mapping[str, Any]) -> str:
    """One-line props display, skipping children."""
    parts = []
    for name in sorted(props):
        if name == "children":
            continue
        value = props[name]
        parts.append(f'{name}="{value}"' if isinstance(value, str) else f"{name}={{{format_value(value)}}}")
    return " ".join(parts)


def _label(node: Any) -> str:
    if isinstance(node, TreeNode):
        kind = "[cyan]component[/cyan]" if node.node_type == "component" else "[green]host[/green]"
        props = format_props(node.props)
        label = f"{kind} [bold]{escape(display_name_of(node.type))}[/bold]"
        return f"{label} {escape(props)}" if props else label
    return f"[dim]{escape(repr(node))}[/dim]"


def _add_rendered(branch: Tree, rendered: Any) -> None:
    items = rendered if isinstance(rendered, list) else [rendered]
    for item in items:
        if item is None:
            continue
        child = branch.add(_label(item))
        if isinstance(item, TreeNode):
            _add_rendered(child, item.rendered)


def build_render_tree(tree_output: Any, title: str = "rendered") -> Tree:
    """Rich tree for ``Session.to_tree()`` output."""
    tree = Tree(f"[bold]{escape(title)}[/bold]")
    _add_rendered(tree, tree_output)
    return tree


def build_matches_table(matches: List[NodeHandle], title: str = "Matches") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Props")
    table.add_column("Parent")
    for idx, handle in enumerate(matches, start=1):
        parent = handle.parent
        table.add_row(
            str(idx),
            escape(display_name_of(handle.type)),
            escape(format_props(handle.props)),
            escape(display_name_of(parent.type)) if parent is not None else "-",
        )
    return table


__all__ = ["build_matches_table", "build_render_tree", "format_props"]
