import pytest

from sapwood.dom import (
    Comment,
    Text,
    append,
    append_static_text,
    attr,
    element,
    event,
    fragment,
    set_noderef,
)
from sapwood.noderef import NodeRef
from sapwood.scope import create_root
from sapwood.signal import Signal


def populate(count, tag="ul", child_tag="li"):
    """Build a parent element holding ``count`` fresh children."""
    parent = element(tag)
    children = [element(child_tag) for _ in range(count)]
    for child in children:
        append(parent, child)
    return parent, children


def _append_ancestor():
    outer, (inner,) = populate(1, "div", "div")
    append(inner, outer)


def _append_to_self():
    node = element("div")
    append(node, node)


def test_append_keeps_order_and_parent():
    parent, (first, second) = populate(2)
    assert parent.child_nodes == (first, second)
    assert first.parent_node is parent
    assert first.next_sibling is second
    assert second.next_sibling is None


def test_insert_before_reference():
    parent, (first, last) = populate(2)
    middle = element("li")
    parent.insert_before(middle, last)
    assert parent.child_nodes == (first, middle, last)


def test_insert_before_none_appends():
    parent, (first,) = populate(1)
    second = element("li")
    parent.insert_before(second, None)
    assert parent.child_nodes == (first, second)


@pytest.mark.parametrize(
    "action",
    [
        lambda: element("ul").insert_before(element("li"), element("li")),
        lambda: element("ul").replace_child(element("li"), element("li")),
        lambda: element("ul").remove_child(element("li")),
        _append_ancestor,
        _append_to_self,
        lambda: append(Text("x"), element("b")),
        lambda: element(""),
    ],
    ids=[
        "foreign-reference",
        "replace-missing",
        "remove-missing",
        "ancestor",
        "self",
        "text-child",
        "empty-tag",
    ],
)
def test_invalid_operations_raise(action):
    with pytest.raises(ValueError):
        action()


def test_appending_moves_node_from_old_parent():
    old_parent, (child,) = populate(1, "div", "span")
    new_parent = element("div")
    append(new_parent, child)
    assert old_parent.child_nodes == ()
    assert new_parent.child_nodes == (child,)
    assert child.parent_node is new_parent


def test_fragment_children_move_on_insert():
    frag = fragment()
    children = [element("li"), element("li")]
    for child in children:
        append(frag, child)
    parent = element("ul")
    append(parent, frag)
    assert parent.child_nodes == tuple(children)
    assert frag.child_nodes == ()
    assert children[0].parent_node is parent


def test_replace_child_puts_new_in_place():
    parent, (a, b, c) = populate(3)
    replacement = element("li")
    assert parent.replace_child(replacement, b) is b
    assert b.parent_node is None
    assert parent.child_nodes == (a, replacement, c)


def test_replace_child_with_itself_changes_nothing():
    parent, (a,) = populate(1)
    parent.replace_child(a, a)
    assert parent.child_nodes == (a,)


def test_replace_child_with_following_sibling():
    parent, (a, b) = populate(2)
    parent.replace_child(b, a)
    assert parent.child_nodes == (b,)
    assert a.parent_node is None


def test_remove_detaches():
    parent, (child,) = populate(1, "div", "span")
    child.remove()
    assert parent.child_nodes == ()
    assert child.parent_node is None


def test_attribute_round_trip():
    el = element("p")
    el.set_attribute("id", "my-id")
    assert el.get_attribute("id") == "my-id"
    assert el.get_attribute("class") is None


def test_attr_follows_signal():
    state = Signal("my-class")
    el = element("p")
    create_root(lambda: attr(el, "class", lambda: state.get()))
    assert el.get_attribute("class") == "my-class"
    state.set("other")
    assert el.get_attribute("class") == "other"


def test_attr_formats_value_as_text():
    el = element("p")
    create_root(lambda: attr(el, "data-count", lambda: 3))
    assert el.get_attribute("data-count") == "3"


def test_event_handlers_receive_event():
    el = element("button")
    received = []
    event(el, "click", received.append)
    payload = object()
    el.dispatch_event("click", payload)
    el.dispatch_event("input", "ignored")
    assert received == [payload]


def test_append_static_text():
    p = element("p")
    append_static_text(p, "Hello World!")
    assert p.text_content == "Hello World!"
    assert isinstance(p.child_nodes[0], Text)


def test_text_content_skips_comments():
    p = element("p")
    append(p, Comment("hidden"))
    append_static_text(p, "shown")
    assert p.text_content == "shown"
    assert p.child_nodes[0].text_content == "hidden"


def test_set_noderef_stores_node():
    node = element("input")
    ref = NodeRef()
    set_noderef(node, ref)
    assert ref.get() is node


@pytest.mark.parametrize(
    ("fill", "expected"),
    [
        (lambda p: append_static_text(p, "Hello World!"), "<p>Hello World!</p>"),
        (lambda p: append_static_text(p, "a<b"), "<p>a&lt;b</p>"),
        (lambda p: p.set_attribute("class", "x"), '<p class="x"></p>'),
    ],
    ids=["text", "escaped", "attribute"],
)
def test_to_html(fill, expected):
    p = element("p")
    fill(p)
    assert p.to_html() == expected