"""
Identity registry: one durable NodeHandle per logical node.

A logical node is represented by a fiber and, after its first update, by that
fiber's alternate as well. Handles are registered against whichever fiber was
wrapped first and found again through either member of the pair, so the same
handle comes back before and after re-renders.

The map is weak on both sides: entries disappear with their fibers, and a
handle only holds its fiber through a weak reference.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

from rendertest.core.fiber import Fiber
from rendertest.core.tags import VALID_WRAPPER_TAGS
from rendertest.errors import InvalidWrapperTargetError

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from rendertest.query.instance import NodeHandle


class IdentityRegistry:
    def __init__(self) -> None:
        self._handles: "weakref.WeakKeyDictionary[Fiber, NodeHandle]" = weakref.WeakKeyDictionary()

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, fiber: Fiber) -> bool:
        return fiber in self._handles

    def lookup(self, fiber: Fiber) -> "NodeHandle | None":
        handle = self._handles.get(fiber)
        if handle is None and fiber.alternate is not None:
            handle = self._handles.get(fiber.alternate)
        return handle

    def wrap(self, fiber: Fiber) -> "NodeHandle":
        """Return the handle for ``fiber``'s logical node, creating it on first use."""
        from rendertest.query.instance import NodeHandle

        handle = self.lookup(fiber)
        if handle is None:
            if fiber.tag not in VALID_WRAPPER_TAGS:
                raise InvalidWrapperTargetError(fiber.tag)
            handle = NodeHandle(fiber, registry=self)
            self._handles[fiber] = handle
        return handle


default_registry = IdentityRegistry()


def wrap_fiber(fiber: Fiber) -> "NodeHandle":
    return default_registry.wrap(fiber)


__all__ = ["IdentityRegistry", "default_registry", "wrap_fiber"]
