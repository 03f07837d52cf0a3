"""
Minimal rendering engine behind the test renderer.

Components:
- elements: declarative descriptions (create_element, Component, Fragment, ...)
- fiber: mutable tree nodes paired with their alternates
- host_config: in-memory host instances and containers
- reconciler: create/update containers, batched and flushed updates
- reflection: committed-version lookup for a fiber
- scheduling: cooperative scheduler for async roots
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
from rendertest.core.reconciler import (
    FiberRoot,
    batched_updates,
    create_container,
    flush_sync,
    get_public_root_instance,
    update_container,
)
from rendertest.core.reflection import find_current_fiber_using_slow_path
from rendertest.core.tags import WorkTag

__all__ = [
    "Component",
    "Container",
    "Element",
    "FiberRoot",
    "Fragment",
    "Profiler",
    "StrictMode",
    "WorkTag",
    "batched_updates",
    "create_container",
    "create_context",
    "create_element",
    "create_portal",
    "create_ref",
    "find_current_fiber_using_slow_path",
    "flush_sync",
    "forward_ref",
    "get_public_root_instance",
    "update_container",
]
