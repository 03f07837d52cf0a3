"""
Serializers for rendered output.

Two independent projections:
- Snapshot form (``to_json``): host elements and text only, built from the
  committed host instances. Props never include ``children``; the rendered
  children are listed instead. Used for textual snapshot comparison.
- Semantic tree form (``to_tree``): built from fibers, keeps the
  component/host distinction, component instances and nesting. Structural
  fibers (fragments, providers, consumers, modes, profilers, forward refs,
  roots and portals) are transparent.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from rendertest.core.fiber import Fiber
from rendertest.core.host_config import HostInstance, HostTextInstance
from rendertest.core.tags import STRUCTURAL_TAGS, WorkTag
from rendertest.errors import UnhandledNodeKindError
from rendertest.query.walker import flatten, node_and_siblings

SNAPSHOT_MARKER = "rendertest.test.json"


class SnapshotNode(BaseModel):
    """A host element in snapshot form."""

    # Identifies snapshot output for printers and comparison helpers.
    typeof: ClassVar[str] = SNAPSHOT_MARKER

    type: str
    props: Dict[str, Any] = Field(default_factory=dict)
    children: Optional[List[Union["SnapshotNode", str]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict, text children kept as strings."""
        children = None
        if self.children is not None:
            children = [c.to_dict() if isinstance(c, SnapshotNode) else c for c in self.children]
        return {"type": self.type, "props": dict(self.props), "children": children}


SnapshotOutput = Union[SnapshotNode, str]


class TreeNode(BaseModel):
    """A component or host element in semantic tree form."""

    node_type: Literal["component", "host"]
    type: Any
    props: Dict[str, Any] = Field(default_factory=dict)
    instance: Any = None
    rendered: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_type": self.node_type,
            "type": self.type,
            "props": dict(self.props),
            "instance": self.instance,
            "rendered": rendered_to_data(self.rendered),
        }


def rendered_to_data(rendered: Any) -> Any:
    """Convert ``to_tree`` output (node, text, list or None) into plain data."""
    if isinstance(rendered, TreeNode):
        return rendered.to_dict()
    if isinstance(rendered, list):
        return [rendered_to_data(item) for item in rendered]
    return rendered


def is_snapshot(value: Any) -> bool:
    return getattr(value, "typeof", None) == SNAPSHOT_MARKER


# =========================================================================
# Snapshot form
# =========================================================================


def to_json(instance: Union[HostInstance, HostTextInstance]) -> SnapshotOutput:
    tag = getattr(instance, "tag", None)
    if tag == "TEXT":
        return instance.text
    if tag == "INSTANCE":
        props = {key: value for key, value in instance.props.items() if key != "children"}
        rendered_children = None
        if instance.children:
            rendered_children = [to_json(child) for child in instance.children]
        return SnapshotNode(type=instance.type, props=props, children=rendered_children)
    raise UnhandledNodeKindError("to_json", tag)


# =========================================================================
# Semantic tree form
# =========================================================================


def children_to_tree(node: Optional[Fiber]) -> Any:
    if node is None:
        return None
    children = node_and_siblings(node)
    if not children:
        return None
    if len(children) == 1:
        return to_tree(children[0])
    return flatten([to_tree(child) for child in children])


def to_tree(node: Optional[Fiber]) -> Any:
    if node is None:
        return None
    tag = node.tag
    if tag in (WorkTag.HOST_ROOT, WorkTag.HOST_PORTAL):
        return children_to_tree(node.child)
    if tag is WorkTag.CLASS_COMPONENT:
        return TreeNode(
            node_type="component",
            type=node.type,
            props=dict(node.memoized_props),
            instance=node.state_node,
            rendered=children_to_tree(node.child),
        )
    if tag is WorkTag.FUNCTION_COMPONENT:
        return TreeNode(
            node_type="component",
            type=node.type,
            props=dict(node.memoized_props),
            instance=None,
            rendered=children_to_tree(node.child),
        )
    if tag is WorkTag.HOST_COMPONENT:
        return TreeNode(
            node_type="host",
            type=node.type,
            props=dict(node.memoized_props),
            instance=None,
            rendered=flatten([to_tree(child) for child in node_and_siblings(node.child)]),
        )
    if tag is WorkTag.HOST_TEXT:
        return str(node.memoized_props)
    if tag in STRUCTURAL_TAGS:
        return children_to_tree(node.child)
    raise UnhandledNodeKindError("to_tree", tag)


__all__ = [
    "SNAPSHOT_MARKER",
    "SnapshotNode",
    "SnapshotOutput",
    "TreeNode",
    "children_to_tree",
    "is_snapshot",
    "rendered_to_data",
    "to_json",
    "to_tree",
]
