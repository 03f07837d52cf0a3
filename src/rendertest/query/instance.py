"""
NodeHandle: the stable, read-only view of a logical node, and the search API.

Handles never cache what they read. Every property access resolves the
committed fiber again, so a handle obtained before an update reads the new
props afterwards, and reading through a handle whose node was unmounted
raises ``UnmountedAccessError``.
"""

from __future__ import annotations

import inspect
import json
import textwrap
import weakref
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from rendertest.core.elements import display_name_of
from rendertest.core.fiber import Fiber
from rendertest.core.host_config import get_public_instance
from rendertest.core.reflection import find_current_fiber_using_slow_path
from rendertest.core.tags import VALID_WRAPPER_TAGS, WorkTag
from rendertest.errors import InvalidWrapperTargetError, NodeLookupError, UnmountedAccessError
from rendertest.query.walker import collect_children

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from rendertest.query.registry import IdentityRegistry

Predicate = Callable[["NodeHandle"], Any]

_MISSING = object()


class NodeHandle:
    """Durable handle for a component, host element or forward ref in a rendered tree."""

    def __init__(self, fiber: Fiber, registry: "IdentityRegistry"):
        if fiber.tag not in VALID_WRAPPER_TAGS:
            raise InvalidWrapperTargetError(fiber.tag)
        self._fiber_ref = weakref.ref(fiber)
        self._registry = registry

    def __repr__(self) -> str:
        fiber = self._fiber_ref()
        if fiber is None:
            return "<NodeHandle (collected)>"
        return f"<NodeHandle {display_name_of(fiber.type)}>"

    # =========================================================================
    # Current-version resolution
    # =========================================================================

    def _current_fiber(self) -> Fiber:
        fiber = self._fiber_ref()
        current = find_current_fiber_using_slow_path(fiber) if fiber is not None else None
        if current is None:
            raise UnmountedAccessError(
                "Can't read from an unmounted or currently-mounting component. "
                "The node was removed from the tree or its render has not been committed yet."
            )
        return current

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def instance(self) -> Any:
        """Component instance for class components, the node mock for host elements, else None."""
        fiber = self._current_fiber()
        if fiber.tag is WorkTag.HOST_COMPONENT:
            return get_public_instance(fiber.state_node)
        return fiber.state_node

    @property
    def type(self) -> Any:
        return self._current_fiber().type

    @property
    def props(self) -> Dict[str, Any]:
        return self._current_fiber().memoized_props

    @property
    def parent(self) -> Optional["NodeHandle"]:
        """Nearest wrappable ancestor, or None at the top of the tree."""
        node = self._current_fiber().parent
        while node is not None:
            if node.tag in VALID_WRAPPER_TAGS:
                return self._registry.wrap(node)
            node = node.parent
        return None

    @property
    def children(self) -> List[Union["NodeHandle", str]]:
        return collect_children(self._current_fiber(), self._registry.wrap)

    # =========================================================================
    # Search
    # =========================================================================

    def find(self, predicate: Predicate) -> "NodeHandle":
        return expect_one(
            self.find_all(predicate, deep=False),
            f"matching custom predicate: {describe_predicate(predicate)}",
        )

    def find_by_type(self, type: Any) -> "NodeHandle":
        return expect_one(
            self.find_all_by_type(type, deep=False),
            f'with node type: "{display_name_of(type)}"',
        )

    def find_by_props(self, props: Mapping[str, Any]) -> "NodeHandle":
        return expect_one(
            self.find_all_by_props(props, deep=False),
            f"with props: {describe_props(props)}",
        )

    def find_all(self, predicate: Predicate, *, deep: bool = True) -> List["NodeHandle"]:
        return find_all(self, predicate, deep=deep)

    def find_all_by_type(self, type: Any, *, deep: bool = True) -> List["NodeHandle"]:
        return find_all(self, lambda node: strict_equals(node.type, type), deep=deep)

    def find_all_by_props(self, props: Mapping[str, Any], *, deep: bool = True) -> List["NodeHandle"]:
        return find_all(self, lambda node: node.props is not None and props_match(node.props, props), deep=deep)


def find_all(root: NodeHandle, predicate: Predicate, *, deep: bool = True) -> List[NodeHandle]:
    """
    Pre-order search below and including ``root``.

    With ``deep=False`` the search does not continue inside a node that
    matched; nodes that did not match are still searched.
    """
    results: List[NodeHandle] = []
    if predicate(root):
        results.append(root)
        if not deep:
            return results

    for child in root.children:
        if isinstance(child, str):
            continue
        results.extend(find_all(child, predicate, deep=deep))
    return results


def expect_one(results: List[NodeHandle], description: str) -> NodeHandle:
    if len(results) == 1:
        return results[0]
    raise NodeLookupError(len(results), description)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Identity for objects, value equality for primitives.

    bools only equal bools, numbers compare by value (NaN never matches,
    -0.0 matches 0), strings by value, None only matches None.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right


def props_match(props: Mapping[str, Any], expected: Mapping[str, Any]) -> bool:
    for key, value in expected.items():
        actual = props.get(key, _MISSING)
        if actual is _MISSING or not strict_equals(actual, value):
            return False
    return True


def describe_predicate(predicate: Predicate) -> str:
    """Source text of the predicate when available, else its qualified name."""
    try:
        source = inspect.getsource(predicate)
    except (OSError, TypeError):
        source = None
    if source:
        return textwrap.dedent(source).strip()
    name = getattr(predicate, "__qualname__", None) or getattr(predicate, "__name__", None)
    return name if name else repr(predicate)


def describe_props(props: Mapping[str, Any]) -> str:
    return json.dumps(dict(props), separators=(",", ":"), default=repr)


__all__ = [
    "NodeHandle",
    "Predicate",
    "describe_predicate",
    "describe_props",
    "expect_one",
    "find_all",
    "props_match",
    "strict_equals",
]
