"""
Sample components shared by the test suite and the CLI tests.

Kept deliberately small: each one exercises a single engine feature.
"""

from __future__ import annotations

from rendertest import Component, Fragment, create_context, create_element as h, forward_ref
from rendertest.core.scheduling import yield_value

ThemeContext = create_context("light", display_name="Theme")


def Greeting(props):
    return h("span", {"className": "greeting"}, "Hello ", props["name"])


def Item(props):
    return h("li", {"id": props["id"]}, props["label"])


def ItemList(props):
    return h("ul", None, [h(Item, {"key": item, "id": item, "label": item.upper()}) for item in props["items"]])


class Counter(Component):
    default_props = {"step": 1}

    def __init__(self, props):
        super().__init__(props)
        self.state = {"count": props.get("start", 0)}
        self.mounted = 0
        self.updates = []
        self.unmounted = 0

    def increment(self):
        self.set_state(lambda state, props: {"count": state["count"] + props["step"]})

    def component_did_mount(self):
        self.mounted += 1

    def component_did_update(self, prev_props, prev_state):
        self.updates.append((prev_props, prev_state))

    def component_will_unmount(self):
        self.unmounted += 1

    def render(self):
        return h("button", {"onClick": self.increment}, str(self.state["count"]))


def ThemedLabel(props):
    return h(ThemeContext.Consumer, None, lambda theme: h("label", {"data-theme": theme}, props["text"]))


FancyInput = forward_ref(lambda props, ref: h("input", {"type": "text", "ref": ref, "value": props.get("value")}))


def Yielding(props):
    yield_value(props["label"])
    return h("p", None, props["label"])


def Pair(props):
    return h(Fragment, None, h("dt", None, props["term"]), h("dd", None, props["definition"]))


def build_page():
    """Element factory used as a CLI target."""
    return h(
        "main",
        {"id": "page"},
        h(Greeting, {"name": "Ada"}),
        h(ItemList, {"items": ["a", "b"]}),
    )


page_element = build_page()
not_an_element = 42
