"""
Tests for the identity registry and handle stability.
"""

import gc

import pytest

from rendertest import UnmountedAccessError, create, create_element as h
from rendertest.core.fiber import Fiber, create_work_in_progress
from rendertest.core.tags import WorkTag
from rendertest.errors import InvalidWrapperTargetError
from tests.utils.components import Counter, Greeting
from tests.utils.fibers import fiber, host, mount, text


class TestWrap:
    """Tests for IdentityRegistry.wrap."""

    def test_wrap_is_idempotent(self, registry):
        """Wrapping the same fiber twice returns the same handle."""
        node = host("div")
        assert registry.wrap(node) is registry.wrap(node)

    def test_wrap_resolves_alternate(self, registry):
        """Either fiber of an alternate pair maps to one handle."""
        node = host("div")
        alternate = create_work_in_progress(node, {"id": "next"})

        assert registry.wrap(node) is registry.wrap(alternate)

    def test_wrap_alternate_first(self, registry):
        """Order of wrapping inside the pair does not matter."""
        node = host("div")
        alternate = create_work_in_progress(node, {})

        first = registry.wrap(alternate)
        assert registry.wrap(node) is first
        assert len(registry) == 1

    @pytest.mark.parametrize(
        "tag",
        [WorkTag.FUNCTION_COMPONENT, WorkTag.CLASS_COMPONENT, WorkTag.HOST_COMPONENT, WorkTag.FORWARD_REF],
    )
    def test_wrappable_tags(self, registry, tag):
        """Components, host elements and forward refs can be wrapped."""
        assert registry.wrap(fiber(tag, type=object())) is not None

    @pytest.mark.parametrize(
        "tag",
        [WorkTag.HOST_ROOT, WorkTag.HOST_TEXT, WorkTag.FRAGMENT, WorkTag.CONTEXT_PROVIDER, WorkTag.MODE],
    )
    def test_invalid_target_raises(self, registry, tag):
        """Anything else is an invariant violation."""
        with pytest.raises(InvalidWrapperTargetError, match="tag: " + tag.value):
            registry.wrap(fiber(tag))

    def test_entries_are_weak(self, registry):
        """Cache entries go away with their fibers."""
        node = Fiber(tag=WorkTag.HOST_COMPONENT, type="div", memoized_props={})
        registry.wrap(node)
        assert len(registry) == 1

        del node
        gc.collect()
        assert len(registry) == 0


class TestHandleStability:
    """Handles stay valid and current across re-renders."""

    def test_same_handle_after_update(self):
        """The root handle is identical before and after an update."""
        session = create(h(Greeting, {"name": "Ada"}))
        before = session.root

        session.update(h(Greeting, {"name": "Grace"}))

        assert session.root is before

    def test_old_handle_reads_new_props(self):
        """A handle obtained before an update reads the committed props afterwards."""
        session = create(h("div", None, h(Greeting, {"name": "Ada"})))
        greeting = session.root.find_by_type(Greeting)

        session.update(h("div", None, h(Greeting, {"name": "Grace"})))
        assert greeting.props["name"] == "Grace"

        session.update(h("div", None, h(Greeting, {"name": "Linus"})))
        assert greeting.props["name"] == "Linus"

    def test_handle_survives_many_updates(self):
        """Alternates flip on every commit; the handle keeps up."""
        session = create(h(Counter, {"start": 0}))
        handle = session.root

        for value in range(5):
            session.update(h(Counter, {"start": value, "label": value}))
            assert session.root is handle
            assert handle.props["label"] == value

    def test_removed_node_handle_raises(self):
        """Reading through a handle of a removed node fails loudly."""
        session = create(h("div", None, h(Greeting, {"name": "Ada"})))
        greeting = session.root.find_by_type(Greeting)

        session.update(h("div", None))

        with pytest.raises(UnmountedAccessError):
            greeting.props
        with pytest.raises(UnmountedAccessError):
            greeting.children

    def test_handle_after_unmount_raises(self):
        """Every read fails once the session is unmounted."""
        session = create(h("section", {"id": "s"}))
        root = session.root

        session.unmount()

        with pytest.raises(UnmountedAccessError):
            root.props
        with pytest.raises(UnmountedAccessError):
            root.type

    def test_uncommitted_fiber_raises(self, registry):
        """A fiber that was never committed has no current version."""
        orphan = host("div")
        handle = registry.wrap(orphan)

        with pytest.raises(UnmountedAccessError):
            handle.props

    def test_committed_hand_built_tree(self, registry):
        """Hand-built trees attached to a committed root are readable."""
        div = host("div", id="x")
        mount(div)
        div.child = text("hi")
        div.child.parent = div

        handle = registry.wrap(div)
        assert handle.props == {"id": "x"}
        assert handle.children == ["hi"]


class TestDefaultRegistry:
    """The module-level registry is shared by every session."""

    def test_wrap_fiber_matches_session_root(self):
        from rendertest.query.registry import default_registry, wrap_fiber

        session = create(h("div"))
        root = session.root

        fiber = root._current_fiber()
        assert wrap_fiber(fiber) is root
        assert fiber in default_registry or fiber.alternate in default_registry
