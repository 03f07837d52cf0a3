"""In-memory host instances the test renderer commits into."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from rendertest.core.elements import Element


def default_create_node_mock(element: Element) -> Any:
    return None


@dataclass(eq=False)
class Container:
    """Top-level host container; also usable as a portal target."""

    children: List[Union["HostInstance", "HostTextInstance"]] = field(default_factory=list)
    create_node_mock: Callable[[Element], Any] = default_create_node_mock
    tag: str = "CONTAINER"


@dataclass(eq=False)
class HostInstance:
    type: str
    props: Dict[str, Any]
    root_container: Optional[Container] = None
    children: List[Union["HostInstance", "HostTextInstance"]] = field(default_factory=list)
    tag: str = "INSTANCE"


@dataclass(eq=False)
class HostTextInstance:
    text: str
    tag: str = "TEXT"


def create_instance(type: str, props: Dict[str, Any], root_container: Optional[Container]) -> HostInstance:
    return HostInstance(type=type, props=props, root_container=root_container)


def create_text_instance(text: str) -> HostTextInstance:
    return HostTextInstance(text=text)


def get_public_instance(instance: Any) -> Any:
    """What refs and ``NodeHandle.instance`` see for a host node: the node mock."""
    if isinstance(instance, HostInstance):
        container = instance.root_container
        create_node_mock = container.create_node_mock if container is not None else default_create_node_mock
        return create_node_mock(Element(type=instance.type, props=instance.props))
    return instance


__all__ = [
    "Container",
    "HostInstance",
    "HostTextInstance",
    "create_instance",
    "create_text_instance",
    "default_create_node_mock",
    "get_public_instance",
]
