"""Resolve which fiber of an alternate pair belongs to the committed tree."""

from __future__ import annotations

from typing import Optional

from rendertest.core.fiber import Fiber
from rendertest.core.tags import WorkTag


def _is_listed_child(fiber: Fiber, parent: Fiber) -> bool:
    child = parent.child
    while child is not None:
        if child is fiber:
            return True
        child = child.sibling
    return False


def is_fiber_current(fiber: Fiber) -> bool:
    """True when every ancestor link of ``fiber`` is live and ends at a committed root."""
    node = fiber
    while node.parent is not None:
        if not _is_listed_child(node, node.parent):
            return False
        node = node.parent
    if node.tag is not WorkTag.HOST_ROOT:
        return False
    root = node.state_node
    return root is not None and root.current is node


def find_current_fiber_using_slow_path(fiber: Fiber) -> Optional[Fiber]:
    """
    Return the committed version of ``fiber``'s logical node.

    Returns None when neither version is part of the committed tree: the node
    was removed, or it is still being mounted by an unfinished render.
    """
    if is_fiber_current(fiber):
        return fiber
    alternate = fiber.alternate
    if alternate is not None and is_fiber_current(alternate):
        return alternate
    return None


__all__ = ["find_current_fiber_using_slow_path", "is_fiber_current"]
