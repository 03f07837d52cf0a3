from __future__ import annotations

"""Shared helpers for loading render targets with CLI-friendly errors."""

import importlib
from typing import Any

import typer
from rich.console import Console

from rendertest.core.elements import Element
from rendertest.errors import RenderTestError
from rendertest.renderer import Session, create


def load_target_or_exit(target: str, *, console: Console) -> Element:
    """Resolve ``module:attribute`` to an element, calling the attribute if it is a factory."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        console.print(f"[red]Invalid target[/red]: {target} (expected module:attribute)")
        raise typer.Exit(code=1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        console.print(f"[red]Failed to import[/red] {module_name}: {err}")
        raise typer.Exit(code=1)
    try:
        value: Any = getattr(module, attr)
    except AttributeError:
        console.print(f"[red]Attribute not found[/red]: {attr} in {module_name}")
        raise typer.Exit(code=1)

    if callable(value) and not isinstance(value, Element):
        value = value()
    if not isinstance(value, Element):
        console.print(f"[red]Not an element[/red]: {target} resolved to {type(value).__name__}")
        raise typer.Exit(code=1)
    return value


def render_or_exit(element: Element, *, console: Console, verbose_errors: bool = False) -> Session:
    try:
        return create(element)
    except (RenderTestError, TypeError) as err:
        if verbose_errors:
            console.print_exception()
        console.print(f"[red]Failed to render:[/red] {err}")
        raise typer.Exit(code=1)


__all__ = ["load_target_or_exit", "render_or_exit"]
