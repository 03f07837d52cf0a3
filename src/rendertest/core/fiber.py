"""
Fiber: the mutable node record the reconciler builds and the query layer reads.

Each logical node is represented by at most two fibers, the committed one and
its work-in-progress ``alternate``. ``create_work_in_progress`` always reuses
the alternate, so the pair is fixed for the life of the logical node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rendertest.core.elements import (
    ContextConsumer,
    ContextProvider,
    Element,
    ForwardRef,
    Fragment,
    Portal,
    Profiler,
    StrictMode,
    is_class_component,
)
from rendertest.core.tags import WorkTag


@dataclass(eq=False)
class Fiber:
    tag: WorkTag
    type: Any = None
    key: Any = None
    pending_props: Any = None
    memoized_props: Any = None
    state_node: Any = None
    ref: Any = None

    child: Optional["Fiber"] = None
    sibling: Optional["Fiber"] = None
    parent: Optional["Fiber"] = None  # the "return" fiber
    index: int = 0
    alternate: Optional["Fiber"] = None

    deletions: List["Fiber"] = field(default_factory=list)
    # Class state captured before the last render, for component_did_update.
    prev_state: Optional[Dict[str, Any]] = None

    def __repr__(self) -> str:
        return f"Fiber({self.tag}, type={self.type!r}, key={self.key!r})"


def create_work_in_progress(current: Fiber, pending_props: Any) -> Fiber:
    """Return the alternate of ``current`` primed for a new render pass."""
    wip = current.alternate
    if wip is None:
        wip = Fiber(
            tag=current.tag,
            type=current.type,
            key=current.key,
            state_node=current.state_node,
        )
        wip.alternate = current
        current.alternate = wip
    wip.pending_props = pending_props
    wip.memoized_props = current.memoized_props
    wip.state_node = current.state_node
    wip.child = None
    wip.sibling = None
    wip.deletions = []
    return wip


def tag_for_element_type(element_type: Any) -> WorkTag:
    if isinstance(element_type, str):
        return WorkTag.HOST_COMPONENT
    if element_type is Fragment:
        return WorkTag.FRAGMENT
    if element_type is StrictMode:
        return WorkTag.MODE
    if element_type is Profiler:
        return WorkTag.PROFILER
    if isinstance(element_type, ContextProvider):
        return WorkTag.CONTEXT_PROVIDER
    if isinstance(element_type, ContextConsumer):
        return WorkTag.CONTEXT_CONSUMER
    if isinstance(element_type, ForwardRef):
        return WorkTag.FORWARD_REF
    if is_class_component(element_type):
        return WorkTag.CLASS_COMPONENT
    if callable(element_type):
        return WorkTag.FUNCTION_COMPONENT
    raise TypeError(
        f"Element type is invalid: expected a string, a component or a special type but got {element_type!r}"
    )


def create_fiber_from_element(element: Element) -> Fiber:
    return Fiber(
        tag=tag_for_element_type(element.type),
        type=element.type,
        key=element.key,
        pending_props=element.props,
        ref=element.ref,
    )


def create_fiber_from_fragment(children: List[Any], key: Any) -> Fiber:
    return Fiber(tag=WorkTag.FRAGMENT, key=key, pending_props={"children": children})


def create_fiber_from_text(text: str) -> Fiber:
    return Fiber(tag=WorkTag.HOST_TEXT, pending_props=text)


def create_fiber_from_portal(portal: Portal) -> Fiber:
    return Fiber(
        tag=WorkTag.HOST_PORTAL,
        key=portal.key,
        pending_props={"children": portal.children},
        state_node=portal.container,
    )


__all__ = [
    "Fiber",
    "create_work_in_progress",
    "create_fiber_from_element",
    "create_fiber_from_fragment",
    "create_fiber_from_portal",
    "create_fiber_from_text",
    "tag_for_element_type",
]
