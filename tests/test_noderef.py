import pytest

from sapwood.dom import element
from sapwood.noderef import NodeRef


def test_new_ref_is_empty():
    ref = NodeRef()
    assert ref.try_get() is None


def test_get_unset_raises():
    ref = NodeRef()
    with pytest.raises(LookupError, match="NodeRef is not set"):
        ref.get()


def test_set_then_get():
    ref = NodeRef()
    node = element("input")
    ref.set(node)
    assert ref.get() is node
    assert ref.try_get() is node


def test_set_replaces_previous_node():
    ref = NodeRef()
    first = element("input")
    second = element("input")
    ref.set(first)
    ref.set(second)
    assert ref.get() is second


def test_equality_compares_contents():
    node = element("div")
    a = NodeRef()
    b = NodeRef()
    assert a == b
    a.set(node)
    assert (a == b) is False
    b.set(node)
    assert a == b