"""
Tests for the snapshot (to_json) and semantic tree (to_tree) serializers.
"""

import pytest

from rendertest import Fragment, create, create_element as h
from rendertest.core.host_config import Container, HostInstance, HostTextInstance
from rendertest.core.tags import WorkTag
from rendertest.errors import UnhandledNodeKindError
from rendertest.query.serializers import (
    SNAPSHOT_MARKER,
    SnapshotNode,
    TreeNode,
    is_snapshot,
    rendered_to_data,
    to_json,
    to_tree,
)
from tests.utils.components import Counter, Greeting, Pair
from tests.utils.fibers import fiber, host, link, mount, text


class TestToJson:
    """Tests for the snapshot form."""

    def test_text_instance(self):
        assert to_json(HostTextInstance("hi")) == "hi"

    def test_host_instance_excludes_children_prop(self):
        """``children`` never appears in snapshot props."""
        instance = HostInstance(type="div", props={"id": "x", "children": "hi"})
        instance.children = [HostTextInstance("hi")]

        node = to_json(instance)

        assert node.type == "div"
        assert node.props == {"id": "x"}
        assert node.children == ["hi"]

    def test_childless_instance_has_no_children_list(self):
        node = to_json(HostInstance(type="br", props={}))
        assert node.children is None

    def test_children_keep_order(self):
        instance = HostInstance(type="ul", props={})
        instance.children = [
            HostInstance(type="li", props={"id": "a"}),
            HostTextInstance("between"),
            HostInstance(type="li", props={"id": "b"}),
        ]

        node = to_json(instance)

        assert [c if isinstance(c, str) else c.props["id"] for c in node.children] == ["a", "between", "b"]

    def test_unknown_kind_raises(self):
        with pytest.raises(UnhandledNodeKindError, match=r"to_json\(\) does not yet know how to handle nodes with tag=CONTAINER"):
            to_json(Container())

    def test_marker(self):
        """Snapshot nodes carry the class-level marker."""
        node = to_json(HostInstance(type="div", props={}))

        assert SnapshotNode.typeof == SNAPSHOT_MARKER
        assert node.typeof == SNAPSHOT_MARKER
        assert is_snapshot(node)
        assert not is_snapshot({"type": "div"})

    def test_to_dict(self):
        instance = HostInstance(type="div", props={"id": "x"})
        instance.children = [HostTextInstance("hi")]

        assert to_json(instance).to_dict() == {"type": "div", "props": {"id": "x"}, "children": ["hi"]}


class TestSessionToJson:
    """Snapshot output through a session."""

    def test_single_host(self):
        session = create(h("div", {"id": "x"}, "hi"))
        assert session.to_json().to_dict() == {"type": "div", "props": {"id": "x"}, "children": ["hi"]}

    def test_components_are_invisible(self):
        """Only host elements and text reach the snapshot."""
        session = create(h("div", None, h(Greeting, {"name": "Ada"})))

        assert session.to_json().to_dict() == {
            "type": "div",
            "props": {},
            "children": [
                {"type": "span", "props": {"className": "greeting"}, "children": ["Hello ", "Ada"]},
            ],
        }

    def test_multiple_top_level_nodes(self):
        """A fragment at the top yields a list."""
        session = create(h(Pair, {"term": "t", "definition": "d"}))

        output = session.to_json()

        assert isinstance(output, list)
        assert [node.type for node in output] == ["dt", "dd"]

    def test_nothing_rendered(self):
        session = create(None)
        assert session.to_json() is None

    def test_top_level_text(self):
        session = create("plain")
        assert session.to_json() == "plain"

    def test_numbers_render_as_text(self):
        session = create(h("span", None, 3))
        assert session.to_json().children == ["3"]


class TestToTree:
    """Tests for the semantic tree form over fibers."""

    def test_host_rendered_is_always_a_list(self):
        """The scenario shape: host rendered output is a flat list even for one child."""
        session = create(h("div", {"id": "x"}, "hi"))

        assert session.to_tree().to_dict() == {
            "node_type": "host",
            "type": "div",
            "props": {"id": "x", "children": "hi"},
            "instance": None,
            "rendered": ["hi"],
        }

    def test_div_with_text_scenario(self):
        """root -> div{id: x} -> "hi": snapshot matches exactly; the tree keeps rendered as a list."""
        div = link(host("div", id="x"), text("hi"))
        root = mount(div)
        div.state_node = HostInstance(type="div", props={"id": "x"}, children=[HostTextInstance("hi")])

        assert to_json(div.state_node).to_dict() == {"type": "div", "props": {"id": "x"}, "children": ["hi"]}
        assert to_tree(root).to_dict() == {
            "node_type": "host",
            "type": "div",
            "props": {"id": "x"},
            "instance": None,
            "rendered": ["hi"],
        }

    def test_host_without_children(self):
        tree = to_tree(host("br"))
        assert tree.rendered == []

    def test_function_component(self):
        """Function components have no instance; one child is unwrapped."""
        session = create(h(Greeting, {"name": "Ada"}))

        tree = session.to_tree()

        assert tree.node_type == "component"
        assert tree.type is Greeting
        assert tree.props == {"name": "Ada"}
        assert tree.instance is None
        assert isinstance(tree.rendered, TreeNode)
        assert tree.rendered.type == "span"
        assert tree.rendered.rendered == ["Hello ", "Ada"]

    def test_class_component_instance(self):
        session = create(h(Counter, {"start": 2}))

        tree = session.to_tree()

        assert tree.node_type == "component"
        assert isinstance(tree.instance, Counter)
        assert tree.instance.state == {"count": 2}
        assert tree.props == {"start": 2, "step": 1}

    def test_structural_nodes_are_transparent(self):
        """Fragments disappear and their children are flattened into the parent."""
        session = create(h("dl", None, h(Fragment, None, h("dt", None, "a"), [h("dd", {"key": "x"}, "b")])))

        tree = session.to_tree()

        assert [child.type for child in tree.rendered] == ["dt", "dd"]

    def test_component_with_several_children(self):
        session = create(h(Pair, {"term": "t", "definition": "d"}))

        tree = session.to_tree()

        assert isinstance(tree.rendered, list)
        assert [child.type for child in tree.rendered] == ["dt", "dd"]

    def test_component_rendering_nothing(self):
        def Empty(props):
            return None

        tree = create(h(Empty)).to_tree()

        assert tree.rendered is None

    def test_empty_root(self):
        assert create(None).to_tree() is None

    def test_props_are_copied(self):
        """Tree output does not alias the committed props."""
        session = create(h("div", {"id": "x"}))
        tree = session.to_tree()
        tree.props["id"] = "changed"

        assert session.root.props["id"] == "x"

    def test_hand_built_root(self):
        root = mount(link(host("p"), text("a"), link(fiber(WorkTag.MODE), text("b"))))

        assert rendered_to_data(to_tree(root)) == {
            "node_type": "host",
            "type": "p",
            "props": {},
            "instance": None,
            "rendered": ["a", "b"],
        }

    def test_unknown_tag_raises(self):
        with pytest.raises(UnhandledNodeKindError, match="to_tree"):
            to_tree(fiber("bogus"))

    def test_to_tree_none(self):
        assert to_tree(None) is None
