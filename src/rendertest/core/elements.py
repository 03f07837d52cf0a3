"""
Declarative element descriptions consumed by the reconciler.

An element names what to render (a host tag string, a component function,
a Component subclass or one of the special types below) together with its
props. Elements are immutable snapshots; the reconciler turns them into fibers.

Example:
    from rendertest.core.elements import Fragment, create_element as h

    def Greeting(props):
        return h("span", None, "Hello ", props["name"])

    tree = h("div", {"id": "app"}, h(Greeting, {"name": "Ada"}), h(Fragment, None, "a", "b"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass(frozen=True, eq=False)
class Element:
    """Description of a single node: a type plus its props."""

    type: Any
    props: Dict[str, Any] = field(default_factory=dict)
    key: Optional[Any] = None
    ref: Any = None

    def __repr__(self) -> str:
        return f"Element({display_name_of(self.type)!r}, key={self.key!r})"


class SpecialType:
    """Marker used as the type of structural elements (fragments, modes, profilers)."""

    def __init__(self, name: str):
        self.display_name = name

    def __repr__(self) -> str:
        return self.display_name


Fragment = SpecialType("Fragment")
StrictMode = SpecialType("StrictMode")
Profiler = SpecialType("Profiler")


class Context:
    """A value passed down the tree through a Provider and read by a Consumer."""

    def __init__(self, default_value: Any = None, display_name: str = "Context"):
        self.default_value = default_value
        self.display_name = display_name
        self.Provider = ContextProvider(self)
        self.Consumer = ContextConsumer(self)

    def __repr__(self) -> str:
        return f"Context({self.display_name})"


class ContextProvider:
    def __init__(self, context: Context):
        self.context = context
        self.display_name = f"{context.display_name}.Provider"

    def __repr__(self) -> str:
        return self.display_name


class ContextConsumer:
    def __init__(self, context: Context):
        self.context = context
        self.display_name = f"{context.display_name}.Consumer"

    def __repr__(self) -> str:
        return self.display_name


class ForwardRef:
    """Component type whose render function receives the ref as a second argument."""

    def __init__(self, render: Callable[[Dict[str, Any], Any], Any]):
        self.render = render
        self.display_name = f"ForwardRef({getattr(render, '__name__', 'anonymous')})"

    def __repr__(self) -> str:
        return self.display_name


@dataclass(frozen=True, eq=False)
class Portal:
    """Children rendered into a different host container."""

    children: Any
    container: Any
    key: Optional[Any] = None


@dataclass
class Ref:
    """Object ref filled in with the public instance on commit."""

    current: Any = None


class Component:
    """
    Base class for stateful components.

    Subclasses implement ``render()`` and may define ``component_did_mount``,
    ``component_did_update(prev_props, prev_state)`` and
    ``component_will_unmount``. ``set_state`` accepts a mapping or a callable
    ``(state, props) -> mapping`` and schedules a re-render of the owning root.
    """

    default_props: Dict[str, Any] = {}

    def __init__(self, props: Dict[str, Any]):
        self.props = props
        self.state: Dict[str, Any] = {}
        self._pending_state: List[Any] = []
        self._fiber = None
        self._updater = None
        self._mounted = False

    def set_state(self, partial: Any) -> None:
        self._pending_state.append(partial)
        if self._updater is not None:
            self._updater.enqueue_set_state(self)

    def render(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.render() is not implemented")

    def component_did_mount(self) -> None:
        pass

    def component_did_update(self, prev_props: Dict[str, Any], prev_state: Optional[Dict[str, Any]]) -> None:
        pass

    def component_will_unmount(self) -> None:
        pass

    def _process_pending_state(self) -> Dict[str, Any]:
        state = dict(self.state)
        for partial in self._pending_state:
            update = partial(state, self.props) if callable(partial) else partial
            if update:
                state.update(update)
        self._pending_state = []
        return state


def create_element(type: Any, props: Optional[Dict[str, Any]] = None, *children: Any) -> Element:
    """Build an Element; ``key`` and ``ref`` are lifted out of props."""
    props = dict(props or {})
    key = props.pop("key", None)
    ref = props.pop("ref", None)
    if len(children) == 1:
        props["children"] = children[0]
    elif children:
        props["children"] = list(children)

    defaults = getattr(type, "default_props", None)
    if defaults:
        for name, value in defaults.items():
            props.setdefault(name, value)
    return Element(type=type, props=props, key=key, ref=ref)


def create_context(default_value: Any = None, display_name: str = "Context") -> Context:
    return Context(default_value, display_name)


def forward_ref(render: Callable[[Dict[str, Any], Any], Any]) -> ForwardRef:
    return ForwardRef(render)


def create_portal(children: Any, container: Any, key: Optional[Any] = None) -> Portal:
    return Portal(children=children, container=container, key=key)


def create_ref() -> Ref:
    return Ref()


def display_name_of(type: Any) -> str:
    """Human-readable name for an element type."""
    if isinstance(type, str):
        return type
    name = getattr(type, "display_name", None) or getattr(type, "__name__", None)
    return name if name else repr(type)


def is_class_component(element_type: Any) -> bool:
    return isinstance(element_type, type) and issubclass(element_type, Component)


__all__ = [
    "Element",
    "Component",
    "Context",
    "ContextProvider",
    "ContextConsumer",
    "ForwardRef",
    "Fragment",
    "Portal",
    "Profiler",
    "Ref",
    "SpecialType",
    "StrictMode",
    "create_context",
    "create_element",
    "create_portal",
    "create_ref",
    "display_name_of",
    "forward_ref",
    "is_class_component",
]
