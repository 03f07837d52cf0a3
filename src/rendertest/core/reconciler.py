"""
Minimal fiber reconciler driving the test renderer.

Turns element descriptions into a fiber tree, double-buffered through
``alternate`` pairs, and commits host instances into a ``Container``.

Rendering is one fiber per unit of work with no recursion:
    begin work  -> compute the fiber's children from its element
    reconcile   -> match new children against the committed ones (key, then index)
    advance     -> first child, else next sibling, else climb to an ancestor's sibling

Sync roots render as soon as an update is scheduled (deferred to the end of
``batched_updates``). Async roots hand a callback to the scheduler and render
only when flushed, possibly across several flushes.

Not supported: priorities, bailouts, hydration, effects other than class
lifecycle methods and refs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from rendertest.core.elements import Component, Context, Element, Portal, display_name_of
from rendertest.core.fiber import (
    Fiber,
    create_fiber_from_element,
    create_fiber_from_fragment,
    create_fiber_from_portal,
    create_fiber_from_text,
    create_work_in_progress,
)
from rendertest.core.host_config import (
    Container,
    create_instance,
    create_text_instance,
    get_public_instance,
)
from rendertest.core.reflection import find_current_fiber_using_slow_path
from rendertest.core.scheduling import Scheduler, ShouldYield, default_scheduler
from rendertest.core.tags import WorkTag
from rendertest.errors import RenderTestError

logger = logging.getLogger(__name__)

NESTED_UPDATE_LIMIT = 50


@dataclass(eq=False)
class FiberRoot:
    """Bookkeeping for one container: the committed root fiber plus pending work."""

    container: Container
    current: Fiber
    is_async: bool = False
    context: Dict[Context, Any] = field(default_factory=dict)
    scheduler: Scheduler = default_scheduler

    pending_element: Any = None
    work_in_progress: Optional[Fiber] = None
    next_unit: Optional[Fiber] = None
    callbacks: List[Callable[[], Any]] = field(default_factory=list)

    is_scheduled: bool = False
    is_rendering: bool = False
    needs_rerender: bool = False


class _BatchingState:
    def __init__(self) -> None:
        self.depth = 0
        self.force_sync = False
        self.pending_roots: List[FiberRoot] = []


_batch = _BatchingState()


# =========================================================================
# Public collaborator interface
# =========================================================================


def create_container(container: Container, is_async: bool = False, hydrate: bool = False) -> FiberRoot:
    if hydrate:
        raise ValueError("The test renderer does not support hydration")
    root_fiber = Fiber(tag=WorkTag.HOST_ROOT, pending_props={"children": None}, memoized_props={"children": None})
    root = FiberRoot(container=container, current=root_fiber, is_async=is_async)
    root_fiber.state_node = root
    return root


def update_container(
    element: Any,
    root: FiberRoot,
    parent_context: Optional[Dict[Context, Any]] = None,
    callback: Optional[Callable[[], Any]] = None,
) -> None:
    """
    Render ``element`` into ``root``; ``None`` unmounts everything under it.

    ``parent_context`` maps contexts to the values consumers see when no
    provider above them supplies one.
    """
    root.pending_element = element
    if parent_context is not None:
        root.context = dict(parent_context)
    if callback is not None:
        root.callbacks.append(callback)
    if not root.is_rendering:
        # A new top-level element invalidates any interrupted render.
        root.work_in_progress = None
        root.next_unit = None
    logger.debug("Scheduled %s for root %s", "unmount" if element is None else repr(element), id(root))
    schedule_work(root)


def get_public_root_instance(root: FiberRoot) -> Any:
    child = root.current.child
    if child is None:
        return None
    if child.tag is WorkTag.HOST_COMPONENT:
        return get_public_instance(child.state_node)
    return child.state_node


def batched_updates(fn: Callable[..., Any], *args: Any) -> Any:
    """Run ``fn`` and render sync roots once, after the outermost batch exits."""
    _batch.depth += 1
    try:
        return fn(*args)
    finally:
        _batch.depth -= 1
        if _batch.depth == 0:
            _flush_pending_roots()


def flush_sync(fn: Callable[..., Any], *args: Any) -> Any:
    """Run ``fn`` treating every root as sync, then render whatever it scheduled."""
    previous = _batch.force_sync
    _batch.force_sync = True
    try:
        return batched_updates(fn, *args)
    finally:
        _batch.force_sync = previous


# =========================================================================
# Scheduling
# =========================================================================


def schedule_work(root: FiberRoot) -> None:
    if root.is_rendering:
        root.needs_rerender = True
        return
    if root.is_async and not _batch.force_sync:
        if not root.is_scheduled:
            root.is_scheduled = True
            root.scheduler.schedule_callback(lambda should_yield: _perform_async_work(root, should_yield))
        return
    if _batch.depth > 0:
        if root not in _batch.pending_roots:
            _batch.pending_roots.append(root)
        return
    _perform_sync_work(root)


def _flush_pending_roots() -> None:
    while _batch.pending_roots:
        root = _batch.pending_roots.pop(0)
        _perform_sync_work(root)


def _perform_sync_work(root: FiberRoot) -> None:
    for _ in range(NESTED_UPDATE_LIMIT):
        _work_loop(root, None)
        _commit_root(root)
        if not root.needs_rerender:
            return
        root.needs_rerender = False
    raise RenderTestError(
        "Maximum update depth exceeded. A component keeps calling set_state during render or commit."
    )


def _perform_async_work(root: FiberRoot, should_yield: ShouldYield) -> None:
    root.is_scheduled = False
    if not _work_loop(root, should_yield):
        root.is_scheduled = True
        root.scheduler.schedule_callback(lambda next_should_yield: _perform_async_work(root, next_should_yield))
        return
    _commit_root(root)
    if root.needs_rerender:
        root.needs_rerender = False
        schedule_work(root)


class _ClassUpdater:
    """Receives ``Component.set_state`` calls and schedules the owning root."""

    def enqueue_set_state(self, instance: Component) -> None:
        fiber = instance._fiber
        if fiber is None:
            return
        node = fiber
        while node.parent is not None:
            node = node.parent
        root = node.state_node if node.tag is WorkTag.HOST_ROOT else None
        if root is None:
            return
        if root.is_rendering:
            root.needs_rerender = True
            return
        if find_current_fiber_using_slow_path(fiber) is None:
            logger.warning("Ignoring set_state on unmounted component %s", type(instance).__name__)
            instance._pending_state = []
            return
        if root.work_in_progress is not None:
            # An interrupted render may already be past this component; start over.
            root.work_in_progress = None
            root.next_unit = None
        schedule_work(root)


_class_updater = _ClassUpdater()


# =========================================================================
# Render phase
# =========================================================================


def _work_loop(root: FiberRoot, should_yield: Optional[ShouldYield]) -> bool:
    """Perform units of work until done or told to yield. Returns True when complete."""
    if root.work_in_progress is None:
        root.work_in_progress = create_work_in_progress(root.current, {"children": root.pending_element})
        root.work_in_progress.parent = None
        root.next_unit = root.work_in_progress

    root.is_rendering = True
    try:
        unit = root.next_unit
        while unit is not None:
            unit = _perform_unit_of_work(root, unit)
            root.next_unit = unit
            if unit is not None and should_yield is not None and should_yield():
                break
    finally:
        root.is_rendering = False
    return root.next_unit is None


def _perform_unit_of_work(root: FiberRoot, fiber: Fiber) -> Optional[Fiber]:
    children = _begin_work(root, fiber)
    fiber.memoized_props = fiber.pending_props
    if fiber.tag is not WorkTag.HOST_TEXT:
        _reconcile_children(fiber, children)
    if fiber.child is not None:
        return fiber.child

    node: Optional[Fiber] = fiber
    while node is not None:
        if node is root.work_in_progress:
            return None
        if node.sibling is not None:
            return node.sibling
        node = node.parent
    return None


def _begin_work(root: FiberRoot, fiber: Fiber) -> Any:
    tag = fiber.tag
    props = fiber.pending_props
    if tag is WorkTag.HOST_TEXT:
        return None
    if tag is WorkTag.FUNCTION_COMPONENT:
        return fiber.type(props)
    if tag is WorkTag.CLASS_COMPONENT:
        return _render_class_component(fiber)
    if tag is WorkTag.FORWARD_REF:
        return fiber.type.render(props, fiber.ref)
    if tag is WorkTag.CONTEXT_CONSUMER:
        render = props.get("children")
        if not callable(render):
            raise TypeError(f"{display_name_of(fiber.type)} expects a function as its only child")
        return render(_read_context(root, fiber, fiber.type.context))
    return props.get("children")


def _render_class_component(fiber: Fiber) -> Any:
    instance = fiber.state_node
    if instance is None:
        instance = fiber.type(fiber.pending_props)
        instance._updater = _class_updater
        fiber.state_node = instance
        fiber.prev_state = None
    else:
        fiber.prev_state = instance.state
    instance._fiber = fiber
    instance.props = fiber.pending_props
    instance.state = instance._process_pending_state()
    return instance.render()


def _read_context(root: FiberRoot, fiber: Fiber, context: Context) -> Any:
    node = fiber.parent
    while node is not None:
        if node.tag is WorkTag.CONTEXT_PROVIDER and node.type.context is context:
            return node.memoized_props.get("value", context.default_value)
        node = node.parent
    return root.context.get(context, context.default_value)


# =========================================================================
# Child reconciliation
# =========================================================================


def _normalize_children(children: Any) -> List[Any]:
    if children is None or isinstance(children, bool):
        return []
    if isinstance(children, (list, tuple)):
        return [child for child in children if child is not None and not isinstance(child, bool)]
    return [children]


def _slot_key(child: Any, index: int) -> Tuple[str, Any]:
    key = child.key if isinstance(child, (Element, Portal)) else None
    return ("key", key) if key is not None else ("index", index)


def _reuse_or_create(match: Optional[Fiber], child: Any) -> Tuple[Fiber, bool]:
    """Return the fiber for ``child`` and whether ``match`` was reused."""
    if isinstance(child, str) or (isinstance(child, (int, float)) and not isinstance(child, bool)):
        text = str(child)
        if match is not None and match.tag is WorkTag.HOST_TEXT:
            return create_work_in_progress(match, text), True
        return create_fiber_from_text(text), False

    if isinstance(child, Element):
        if match is not None and match.tag is not WorkTag.HOST_TEXT and match.type is child.type:
            wip = create_work_in_progress(match, child.props)
            wip.ref = child.ref
            return wip, True
        return create_fiber_from_element(child), False

    if isinstance(child, (list, tuple)):
        if match is not None and match.tag is WorkTag.FRAGMENT and match.type is None:
            return create_work_in_progress(match, {"children": list(child)}), True
        return create_fiber_from_fragment(list(child), None), False

    if isinstance(child, Portal):
        if match is not None and match.tag is WorkTag.HOST_PORTAL and match.state_node is child.container:
            return create_work_in_progress(match, {"children": child.children}), True
        return create_fiber_from_portal(child), False

    raise TypeError(f"Objects are not valid as a child (found: {child!r})")


def _reconcile_children(parent: Fiber, new_children: Any) -> None:
    existing: Dict[Tuple[str, Any], Fiber] = {}
    old = parent.alternate.child if parent.alternate is not None else None
    while old is not None:
        slot = ("key", old.key) if old.key is not None else ("index", old.index)
        if slot in existing:
            # Duplicate key: only the first old fiber can be matched.
            parent.deletions.append(old)
        else:
            existing[slot] = old
        old = old.sibling

    previous: Optional[Fiber] = None
    parent.child = None
    for index, child in enumerate(_normalize_children(new_children)):
        match = existing.pop(_slot_key(child, index), None)
        fiber, reused = _reuse_or_create(match, child)
        if match is not None and not reused:
            parent.deletions.append(match)
        fiber.parent = parent
        fiber.index = index
        fiber.sibling = None
        if previous is None:
            parent.child = fiber
        else:
            previous.sibling = fiber
        previous = fiber

    parent.deletions.extend(existing.values())


# =========================================================================
# Commit phase
# =========================================================================


def _walk(start: Fiber) -> Iterator[Fiber]:
    """Pre-order over ``start`` and its descendants, never past its siblings."""
    node = start
    while True:
        yield node
        if node.child is not None:
            node = node.child
            continue
        if node is start:
            return
        while node.sibling is None:
            node = node.parent
            if node is None or node is start:
                return
        node = node.sibling


def _host_children(fiber: Fiber) -> List[Any]:
    """Nearest host instances below ``fiber``; portal subtrees belong to their own container."""
    result: List[Any] = []
    pending = [fiber.child] if fiber.child is not None else []
    while pending:
        node = pending.pop()
        if node.sibling is not None:
            pending.append(node.sibling)
        if node.tag in (WorkTag.HOST_COMPONENT, WorkTag.HOST_TEXT):
            result.append(node.state_node)
        elif node.tag is not WorkTag.HOST_PORTAL and node.child is not None:
            pending.append(node.child)
    return result


def _set_ref(ref: Any, value: Any) -> None:
    if callable(ref):
        ref(value)
    else:
        ref.current = value


def _public_instance(fiber: Fiber) -> Any:
    if fiber.tag is WorkTag.HOST_COMPONENT:
        return get_public_instance(fiber.state_node)
    return fiber.state_node


def _commit_deletion(deleted: Fiber) -> None:
    for node in _walk(deleted):
        if node.tag is WorkTag.CLASS_COMPONENT and node.state_node is not None:
            node.state_node.component_will_unmount()
        if node.ref is not None and node.tag in (WorkTag.HOST_COMPONENT, WorkTag.CLASS_COMPONENT):
            _set_ref(node.ref, None)
        if node.tag is WorkTag.HOST_PORTAL:
            node.state_node.children = []


def _commit_root(root: FiberRoot) -> None:
    finished = root.work_in_progress
    if finished is None:
        return
    root.work_in_progress = None
    root.next_unit = None
    root.is_rendering = True
    try:
        for fiber in _walk(finished):
            for deleted in fiber.deletions:
                _commit_deletion(deleted)
            fiber.deletions = []

        root.current = finished

        for fiber in _walk(finished):
            if fiber.tag is WorkTag.HOST_COMPONENT:
                if fiber.state_node is None:
                    fiber.state_node = create_instance(fiber.type, fiber.memoized_props, root.container)
                else:
                    fiber.state_node.props = fiber.memoized_props
            elif fiber.tag is WorkTag.HOST_TEXT:
                if fiber.state_node is None:
                    fiber.state_node = create_text_instance(fiber.memoized_props)
                else:
                    fiber.state_node.text = fiber.memoized_props

        for fiber in _walk(finished):
            if fiber.tag in (WorkTag.HOST_COMPONENT, WorkTag.HOST_PORTAL):
                fiber.state_node.children = _host_children(fiber)
        root.container.children = _host_children(finished)

        for fiber in _walk(finished):
            _commit_lifecycles(fiber)

        callbacks, root.callbacks = root.callbacks, []
    finally:
        root.is_rendering = False

    logger.debug("Committed root %s with %d top-level host node(s)", id(root), len(root.container.children))
    for callback in callbacks:
        callback()


def _commit_lifecycles(fiber: Fiber) -> None:
    previous = fiber.alternate
    if fiber.tag is WorkTag.CLASS_COMPONENT:
        instance = fiber.state_node
        if not instance._mounted:
            instance._mounted = True
            instance.component_did_mount()
        else:
            instance.component_did_update(previous.memoized_props, fiber.prev_state)

    if fiber.tag not in (WorkTag.HOST_COMPONENT, WorkTag.CLASS_COMPONENT):
        return
    old_ref = previous.ref if previous is not None else None
    if old_ref is fiber.ref:
        return
    if old_ref is not None:
        _set_ref(old_ref, None)
    if fiber.ref is not None:
        _set_ref(fiber.ref, _public_instance(fiber))


__all__ = [
    "FiberRoot",
    "batched_updates",
    "create_container",
    "flush_sync",
    "get_public_root_instance",
    "schedule_work",
    "update_container",
]
