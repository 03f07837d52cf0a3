"""Non-recursive traversal helpers over sibling-linked fiber trees."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Union

from rendertest.core.fiber import Fiber
from rendertest.core.tags import VALID_WRAPPER_TAGS, WorkTag


def collect_children(start: Fiber, wrap: Callable[[Fiber], Any]) -> List[Union[Any, str]]:
    """
    Significant children of ``start`` in document order.

    Wrappable fibers are emitted through ``wrap`` and not descended into; text
    fibers are emitted as strings; every other fiber (fragments, providers,
    consumers, modes, profilers, portals) is transparent and its children are
    visited in its place.

    Back-links are tracked on an explicit ancestor stack because
    ``fiber.parent`` can point at a stale alternate.
    """
    children: List[Union[Any, str]] = []
    node = start.child
    if node is None:
        return children

    ancestors: List[Fiber] = [start]
    while True:
        descend = False
        if node.tag in VALID_WRAPPER_TAGS:
            children.append(wrap(node))
        elif node.tag is WorkTag.HOST_TEXT:
            children.append(str(node.memoized_props))
        else:
            descend = True

        if descend and node.child is not None:
            ancestors.append(node)
            node = node.child
            continue

        while node.sibling is None:
            if ancestors[-1] is start:
                return children
            node = ancestors.pop()
        node = node.sibling


def node_and_siblings(node: Optional[Fiber]) -> List[Fiber]:
    nodes: List[Fiber] = []
    while node is not None:
        nodes.append(node)
        node = node.sibling
    return nodes


def flatten(nested: Sequence[Any]) -> List[Any]:
    """Flatten arbitrarily nested lists using an explicit stack of [index, array] frames."""
    result: List[Any] = []
    stack: List[List[Any]] = [[0, nested]]
    while stack:
        frame = stack.pop()
        while frame[0] < len(frame[1]):
            item = frame[1][frame[0]]
            frame[0] += 1
            if isinstance(item, list):
                stack.append(frame)
                stack.append([0, item])
                break
            result.append(item)
    return result


__all__ = ["collect_children", "flatten", "node_and_siblings"]
