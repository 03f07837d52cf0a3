"""Error types raised by the renderer and the query layer."""

from __future__ import annotations

from typing import Any


class RenderTestError(RuntimeError):
    """Base class for rendertest failures."""


class InvariantViolation(RenderTestError):
    """An internal invariant was broken. Indicates a bug, never user error."""


class InvalidWrapperTargetError(InvariantViolation):
    """A fiber outside the wrappable tag set was passed to the identity registry."""

    def __init__(self, tag: Any):
        self.tag = tag
        super().__init__(
            f"Unexpected object passed to NodeHandle constructor (tag: {tag}). "
            "This is probably a bug in the renderer."
        )


class UnhandledNodeKindError(InvariantViolation):
    """A serializer met a node kind it does not cover."""

    def __init__(self, function: str, tag: Any):
        self.function = function
        self.tag = tag
        super().__init__(f"{function}() does not yet know how to handle nodes with tag={tag}")


class UnmountedAccessError(RenderTestError):
    """A handle was read but its logical node has no committed version."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "Unable to find node on an unmounted component.")


class UnmountedRendererError(RenderTestError):
    """The session was used after unmount, or before anything was mounted."""


class NodeLookupError(RenderTestError, LookupError):
    """A ``find*`` call did not match exactly one node."""

    def __init__(self, count: int, description: str):
        self.count = count
        self.description = description
        if count == 0:
            prefix = "No instances found "
        else:
            prefix = f"Expected 1 but found {count} instances "
        super().__init__(prefix + description)


__all__ = [
    "RenderTestError",
    "InvariantViolation",
    "InvalidWrapperTargetError",
    "UnhandledNodeKindError",
    "UnmountedAccessError",
    "UnmountedRendererError",
    "NodeLookupError",
]
