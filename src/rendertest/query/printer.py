"""JSX-like text and plain-data renderings of snapshot output."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Union

from rendertest.query.serializers import SnapshotNode, SnapshotOutput

INDENT = "  "


def format_value(value: Any) -> str:
    """Display form of a prop value outside of quotes."""
    if callable(value) and not isinstance(value, type):
        return f"[Function {getattr(value, '__name__', 'anonymous')}]"
    if isinstance(value, type):
        return f"[Class {value.__name__}]"
    return repr(value)


def _format_prop(name: str, value: Any) -> str:
    if isinstance(value, str):
        return f'{name}="{value}"'
    return f"{name}={{{format_value(value)}}}"


def _print_node(node: SnapshotOutput, depth: int, lines: List[str]) -> None:
    pad = INDENT * depth
    if isinstance(node, str):
        lines.append(pad + node)
        return

    props = [_format_prop(name, node.props[name]) for name in sorted(node.props)]
    if not props and not node.children:
        lines.append(f"{pad}<{node.type} />")
        return

    if props:
        lines.append(f"{pad}<{node.type}")
        for prop in props:
            lines.append(pad + INDENT + prop)
        if not node.children:
            lines.append(pad + "/>")
            return
        lines.append(pad + ">")
    else:
        lines.append(f"{pad}<{node.type}>")
    for child in node.children:
        _print_node(child, depth + 1, lines)
    lines.append(f"{pad}</{node.type}>")


def print_snapshot(output: Union[SnapshotOutput, Sequence[SnapshotOutput], None]) -> str:
    """Render ``Session.to_json()`` output as indented JSX-like text."""
    if output is None:
        return "null"
    lines: List[str] = []
    nodes = output if isinstance(output, list) else [output]
    for node in nodes:
        _print_node(node, 0, lines)
    return "\n".join(lines)


def _value_to_data(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, SnapshotNode):
        return snapshot_to_data(value)
    if isinstance(value, (list, tuple)):
        return [_value_to_data(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _value_to_data(item) for key, item in value.items()}
    return format_value(value)


def snapshot_to_data(output: Union[SnapshotOutput, Sequence[SnapshotOutput], None]) -> Optional[Any]:
    """Plain, YAML-safe data for snapshot output; non-data prop values become display strings."""
    if output is None or isinstance(output, str):
        return output
    if isinstance(output, list):
        return [snapshot_to_data(node) for node in output]
    children = None
    if output.children is not None:
        children = [snapshot_to_data(child) for child in output.children]
    return {
        "type": output.type,
        "props": {name: _value_to_data(value) for name, value in output.props.items()},
        "children": children,
    }


def data_to_snapshot(data: Any) -> Union[SnapshotOutput, List[SnapshotOutput], None]:
    """Inverse of ``snapshot_to_data`` for comparison; display strings stay strings."""
    if data is None or isinstance(data, str):
        return data
    if isinstance(data, list):
        return [data_to_snapshot(item) for item in data]
    return SnapshotNode.model_validate(data)


__all__ = ["data_to_snapshot", "format_value", "print_snapshot", "snapshot_to_data"]
