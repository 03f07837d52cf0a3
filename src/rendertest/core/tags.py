"""Fiber tags and the tag sets the query layer dispatches on."""

from __future__ import annotations

from enum import Enum


class WorkTag(str, Enum):
    """Role of a fiber in the tree."""

    HOST_ROOT = "host_root"
    HOST_PORTAL = "host_portal"
    FRAGMENT = "fragment"
    CONTEXT_PROVIDER = "context_provider"
    CONTEXT_CONSUMER = "context_consumer"
    MODE = "mode"
    PROFILER = "profiler"
    FORWARD_REF = "forward_ref"
    CLASS_COMPONENT = "class_component"
    FUNCTION_COMPONENT = "function_component"
    HOST_COMPONENT = "host_component"
    HOST_TEXT = "host_text"

    def __str__(self) -> str:
        return self.value


# Tags that get a NodeHandle and show up in `children` and search results.
VALID_WRAPPER_TAGS = frozenset(
    {
        WorkTag.FUNCTION_COMPONENT,
        WorkTag.CLASS_COMPONENT,
        WorkTag.HOST_COMPONENT,
        WorkTag.FORWARD_REF,
    }
)

# Composition-only tags, transparent to serialization.
STRUCTURAL_TAGS = frozenset(
    {
        WorkTag.FRAGMENT,
        WorkTag.CONTEXT_PROVIDER,
        WorkTag.CONTEXT_CONSUMER,
        WorkTag.MODE,
        WorkTag.PROFILER,
        WorkTag.FORWARD_REF,
    }
)


__all__ = ["WorkTag", "VALID_WRAPPER_TAGS", "STRUCTURAL_TAGS"]
