import pytest

from sapwood.dom import Comment, append, append_static_text, element, set_noderef
from sapwood.noderef import NodeRef
from sapwood.render import append_render
from sapwood.signal import Signal
from sapwood.template import TemplateResult, render_to


def mount(build):
    """Render ``build`` into a fresh container and return the container."""
    container = element("div")
    render_to(build, container)
    return container


def paragraph(fill):
    """Return a template builder producing a ``<p>`` filled by ``fill``."""

    def build():
        p = element("p")
        fill(p)
        return TemplateResult(p)

    return build


@pytest.mark.parametrize(
    ("fill", "expected"),
    [
        (lambda p: append_static_text(p, "Hello World!"), "Hello World!"),
        (lambda p: append_render(p, lambda: "Hello Maple!"), "Hello Maple!"),
    ],
    ids=["hello_world", "interpolation"],
)
def test_static_content(fill, expected):
    (p,) = mount(paragraph(fill)).child_nodes
    assert p.tag == "p"
    assert p.text_content == expected


def test_reactive():
    count = Signal(0)
    container = mount(paragraph(lambda p: append_render(p, lambda: count.get())))
    p = container.child_nodes[0]
    assert p.text_content == "0"
    count.set(1)
    assert p.text_content == "1"


def test_noderefs():
    noderef = NodeRef()
    inputs = []

    def build():
        div = element("div")
        field = element("input")
        set_noderef(field, noderef)
        append(div, field)
        inputs.append(field)
        return TemplateResult(div)

    container = mount(build)
    assert noderef.get() is inputs[0]
    assert inputs[0].parent_node.parent_node is container


def test_empty_is_blank_comment():
    node = TemplateResult.empty().inner_element()
    assert isinstance(node, Comment)
    assert node.data == ""


def test_inner_element_returns_node():
    node = element("span")
    assert TemplateResult(node).inner_element() is node


def test_equality_is_by_node_identity():
    node = element("span")
    assert TemplateResult(node) == TemplateResult(node)
    assert (TemplateResult(node) == TemplateResult(element("span"))) is False