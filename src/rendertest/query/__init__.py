"""
Query and snapshot layer over rendered fiber trees.

Components:
- IdentityRegistry: one durable NodeHandle per logical node
- NodeHandle: read-only view with find/find_all search helpers
- collect_children / flatten: non-recursive traversal
- to_json / to_tree: snapshot and semantic tree serializers
- print_snapshot: JSX-like text for snapshot output
"""

from rendertest.query.instance import NodeHandle, expect_one, find_all, props_match
from rendertest.query.printer import print_snapshot, snapshot_to_data
from rendertest.query.registry import IdentityRegistry, default_registry, wrap_fiber
from rendertest.query.serializers import SNAPSHOT_MARKER, SnapshotNode, TreeNode, to_json, to_tree
from rendertest.query.walker import collect_children, flatten, node_and_siblings

__all__ = [
    "IdentityRegistry",
    "NodeHandle",
    "SNAPSHOT_MARKER",
    "SnapshotNode",
    "TreeNode",
    "collect_children",
    "default_registry",
    "expect_one",
    "find_all",
    "flatten",
    "node_and_siblings",
    "print_snapshot",
    "props_match",
    "snapshot_to_data",
    "to_json",
    "to_tree",
    "wrap_fiber",
]
