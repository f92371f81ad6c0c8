"""A small in-memory document tree and the helpers that build it."""

from __future__ import annotations

from html import escape
from typing import Any, Callable, Protocol

from sapwood.effect import create_effect

_VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


class _NodeHolder(Protocol):
    def set(self, node: Node) -> None: ...


class Node:
    """A node in the document tree.

    Tree operations follow the usual DOM rules: inserting a node moves it from
    its current parent, and inserting a fragment moves the fragment's children.
    """

    _accepts_children = True

    def __init__(self) -> None:
        self._parent: Node | None = None
        self._children: list[Node] = []

    @property
    def parent_node(self) -> Node | None:
        """The parent of this node, or ``None`` when detached."""
        return self._parent

    @property
    def child_nodes(self) -> tuple[Node, ...]:
        """The children of this node, in order."""
        return tuple(self._children)

    @property
    def next_sibling(self) -> Node | None:
        """The node following this one under the same parent, if any."""
        if self._parent is None:
            return None
        siblings = self._parent._children
        position = siblings.index(self) + 1
        return siblings[position] if position < len(siblings) else None

    @property
    def text_content(self) -> str:
        """The concatenated text of all descendant text nodes."""
        return self._collect_text()

    def _collect_text(self) -> str:
        return "".join(child._collect_text() for child in self._children)

    def _check_insertable(self, child: Node) -> None:
        if not self._accepts_children:
            raise ValueError(f"{type(self).__name__} nodes cannot have children")
        ancestor: Node | None = self
        while ancestor is not None:
            if ancestor is child:
                raise ValueError("cannot insert a node into itself or its descendant")
            ancestor = ancestor._parent

    def _take(self, child: Node) -> list[Node]:
        if isinstance(child, Fragment):
            nodes, child._children = child._children, []
        else:
            if child._parent is not None:
                child._parent._children.remove(child)
            nodes = [child]
        for node in nodes:
            node._parent = None
        return nodes

    def append_child(self, child: Node) -> Node:
        """Append ``child`` as the last child and return it."""
        return self.insert_before(child, None)

    def insert_before(self, child: Node, reference: Node | None) -> Node:
        """Insert ``child`` before ``reference``, or at the end when it is ``None``."""
        if reference is not None and reference._parent is not self:
            raise ValueError("reference node is not a child of this node")
        self._check_insertable(child)
        if reference is child:
            reference = child.next_sibling
        nodes = self._take(child)
        position = len(self._children) if reference is None else self._children.index(reference)
        self._children[position:position] = nodes
        for node in nodes:
            node._parent = self
        return child

    def replace_child(self, new_child: Node, old_child: Node) -> Node:
        """Put ``new_child`` where ``old_child`` is and return ``old_child``."""
        if old_child._parent is not self:
            raise ValueError("node to replace is not a child of this node")
        if new_child is old_child:
            return old_child
        self._check_insertable(new_child)
        reference = old_child.next_sibling
        if reference is new_child:
            reference = new_child.next_sibling
        self._children.remove(old_child)
        old_child._parent = None
        self.insert_before(new_child, reference)
        return old_child

    def remove_child(self, child: Node) -> Node:
        """Detach ``child`` from this node and return it."""
        if child._parent is not self:
            raise ValueError("node is not a child of this node")
        self._children.remove(child)
        child._parent = None
        return child

    def remove(self) -> None:
        """Detach this node from its parent, if it has one."""
        if self._parent is not None:
            self._parent.remove_child(self)

    def to_html(self) -> str:
        """Serialise this node and its descendants as HTML."""
        return "".join(child.to_html() for child in self._children)


class Element(Node):
    """An element with a tag name, attributes and event listeners."""

    def __init__(self, tag: str) -> None:
        super().__init__()
        self.tag = tag
        self.attributes: dict[str, str] = {}
        self._listeners: dict[str, list[Callable[[Any], Any]]] = {}

    def set_attribute(self, name: str, value: object) -> None:
        """Set attribute ``name`` to the text of ``value``."""
        self.attributes[name] = str(value)

    def get_attribute(self, name: str) -> str | None:
        """Return the attribute's value, or ``None`` when it is not set."""
        return self.attributes.get(name)

    def add_event_listener(self, name: str, handler: Callable[[Any], Any]) -> None:
        """Call ``handler`` with the event whenever an event ``name`` is dispatched."""
        self._listeners.setdefault(name, []).append(handler)

    def dispatch_event(self, name: str, event: Any = None) -> None:
        """Call every listener registered on this element for ``name``."""
        for handler in list(self._listeners.get(name, ())):
            handler(event)

    def to_html(self) -> str:
        attributes = "".join(
            f' {name}="{escape(value)}"' for name, value in self.attributes.items()
        )
        opening = f"<{self.tag}{attributes}>"
        if self.tag in _VOID_TAGS and not self._children:
            return opening
        return f"{opening}{super().to_html()}</{self.tag}>"

    def __repr__(self) -> str:
        return f"Element({self.tag!r})"


class Text(Node):
    """A text node."""

    _accepts_children = False

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def _collect_text(self) -> str:
        return self.data

    def to_html(self) -> str:
        return escape(self.data, quote=False)

    def __repr__(self) -> str:
        return f"Text({self.data!r})"


class Comment(Node):
    """A comment node, used as an invisible placeholder or marker."""

    _accepts_children = False

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    @property
    def text_content(self) -> str:
        return self.data

    def _collect_text(self) -> str:
        return ""

    def to_html(self) -> str:
        return f"<!--{self.data}-->"

    def __repr__(self) -> str:
        return f"Comment({self.data!r})"


class Fragment(Node):
    """A parentless container whose children move out when it is inserted."""

    def __repr__(self) -> str:
        return f"Fragment({len(self._children)} children)"


def element(tag: str) -> Element:
    """Create a new element with the given tag."""
    if not tag:
        raise ValueError("element tag must not be empty")
    return Element(tag)


def fragment() -> Fragment:
    """Create a new empty fragment."""
    return Fragment()


def attr(element: Element, name: str, value: Callable[[], object]) -> None:
    """Keep attribute ``name`` of ``element`` set to the text of ``value()``."""
    create_effect(lambda: element.set_attribute(name, str(value())))


def event(element: Element, name: str, handler: Callable[[Any], Any]) -> None:
    """Register ``handler`` for events named ``name`` on ``element``."""
    element.add_event_listener(name, handler)


def append(parent: Node, child: Node) -> None:
    """Append ``child`` to ``parent``."""
    parent.append_child(child)


def append_static_text(parent: Node, text: object) -> None:
    """Append a text node holding the text of ``text`` to ``parent``."""
    parent.append_child(Text(str(text)))


def set_noderef(node: Node, noderef: _NodeHolder) -> None:
    """Store ``node`` in ``noderef``."""
    noderef.set(node)