"""
rendertest: render component trees in memory, then query and snapshot them.

Example:
    from rendertest import Component, create, create_element as h

    class Counter(Component):
        def render(self):
            return h("span", None, str(self.props["count"]))

    session = create(h("div", None, h(Counter, {"count": 1})))
    counter = session.root.find_by_type(Counter)
    session.update(h("div", None, h(Counter, {"count": 2})))
    counter.props["count"]   # 2, same handle
"""

from rendertest.core.elements import (
    Component,
    Element,
    Fragment,
    Profiler,
    StrictMode,
    create_context,
    create_element,
    create_portal,
    create_ref,
    forward_ref,
)
from rendertest.core.host_config import Container
from rendertest.errors import (
    InvalidWrapperTargetError,
    NodeLookupError,
    RenderTestError,
    UnhandledNodeKindError,
    UnmountedAccessError,
    UnmountedRendererError,
)
from rendertest.query.instance import NodeHandle
from rendertest.query.printer import print_snapshot
from rendertest.query.serializers import SnapshotNode, TreeNode
from rendertest.renderer import RendererOptions, Session, batched_updates, create

__all__ = [
    "Component",
    "Container",
    "Element",
    "Fragment",
    "InvalidWrapperTargetError",
    "NodeHandle",
    "NodeLookupError",
    "Profiler",
    "RenderTestError",
    "RendererOptions",
    "Session",
    "SnapshotNode",
    "StrictMode",
    "TreeNode",
    "UnhandledNodeKindError",
    "UnmountedAccessError",
    "UnmountedRendererError",
    "batched_updates",
    "create",
    "create_context",
    "create_element",
    "create_portal",
    "create_ref",
    "forward_ref",
    "print_snapshot",
]
