"""
Session entry point: render an element in memory and inspect the result.

Example:
    from rendertest import create, create_element as h

    session = create(h("div", {"id": "x"}, "hi"))
    session.to_json().to_dict()   # {"type": "div", "props": {"id": "x"}, "children": ["hi"]}
    session.root.find_by_props({"id": "x"}).type   # "div"
    session.unmount()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, field_validator

from rendertest.core.elements import Element
from rendertest.core.host_config import Container, default_create_node_mock
from rendertest.core.reconciler import (
    FiberRoot,
    batched_updates,
    create_container,
    flush_sync,
    get_public_root_instance,
    update_container,
)
from rendertest.core.scheduling import Scheduler, default_scheduler
from rendertest.errors import UnmountedRendererError
from rendertest.query.instance import NodeHandle
from rendertest.query.registry import IdentityRegistry, default_registry
from rendertest.query.serializers import SnapshotOutput, to_json, to_tree
from rendertest.utils.logging import log_calls

logger = logging.getLogger(__name__)


class RendererOptions(BaseModel):
    """Options accepted by ``create``."""

    create_node_mock: Callable[[Element], Any] = default_create_node_mock
    unstable_is_async: bool = False

    model_config = {"arbitrary_types_allowed": True, "extra": "forbid"}

    @field_validator("create_node_mock", mode="before")
    @classmethod
    def default_when_missing(cls, v: Any) -> Any:
        return default_create_node_mock if v is None else v

    @classmethod
    def resolve(cls, options: Union["RendererOptions", Mapping[str, Any], None], **overrides: Any) -> "RendererOptions":
        if isinstance(options, RendererOptions):
            if not overrides:
                return options
            options = options.model_dump()
        data = dict(options or {})
        data.update(overrides)
        return cls.model_validate(data)


class Session:
    """A mounted test renderer. Obtain one with ``create``."""

    def __init__(self, root: FiberRoot, container: Container, registry: IdentityRegistry = default_registry):
        self._root: Optional[FiberRoot] = root
        self._container: Optional[Container] = container
        self._registry = registry

    @property
    def is_mounted(self) -> bool:
        return self._root is not None

    @property
    def root(self) -> NodeHandle:
        """Handle for the top-level rendered node."""
        if self._root is None or self._root.current.child is None:
            raise UnmountedRendererError("Can't access .root on unmounted test renderer")
        return self._registry.wrap(self._root.current.child)

    def to_json(self) -> Union[SnapshotOutput, List[SnapshotOutput], None]:
        if self._root is None or self._container is None:
            return None
        children = self._container.children
        if not children:
            return None
        if len(children) == 1:
            return to_json(children[0])
        return [to_json(child) for child in children]

    def to_tree(self) -> Any:
        if self._root is None:
            return None
        return to_tree(self._root.current)

    @log_calls()
    def update(self, element: Any) -> None:
        if self._root is None:
            logger.debug("Ignoring update on an unmounted session")
            return
        update_container(element, self._root, None, None)

    @log_calls()
    def unmount(self) -> None:
        if self._root is None:
            return
        update_container(None, self._root, None, None)
        self._root = None
        self._container = None

    def get_instance(self) -> Any:
        if self._root is None:
            return None
        return get_public_root_instance(self._root)

    # =========================================================================
    # Scheduling controls (async sessions)
    # =========================================================================

    def _scheduler(self) -> Scheduler:
        return self._root.scheduler if self._root is not None else default_scheduler

    def unstable_flush_all(self) -> List[Any]:
        return self._scheduler().flush_all()

    def unstable_flush_through(self, expected_values: Sequence[Any]) -> List[Any]:
        return self._scheduler().flush_through(expected_values)

    def unstable_flush_sync(self, fn: Callable[[], Any]) -> List[Any]:
        return self._scheduler().with_clean_yields(lambda: flush_sync(fn))

    def unstable_yield(self, value: Any) -> None:
        self._scheduler().yield_value(value)


@log_calls()
def create(
    element: Any,
    options: Union[RendererOptions, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> Session:
    """Render ``element`` into a fresh in-memory container."""
    opts = RendererOptions.resolve(options, **overrides)
    container = Container(create_node_mock=opts.create_node_mock)
    root = create_container(container, opts.unstable_is_async, False)
    update_container(element, root, None, None)
    return Session(root, container)


__all__ = ["RendererOptions", "Session", "batched_updates", "create"]
