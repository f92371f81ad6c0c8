"""How values are turned into nodes and how those nodes are kept up to date."""

from __future__ import annotations

import functools
from typing import Any, Callable

from sapwood.dom import Comment, Fragment, Node, Text
from sapwood.effect import create_effect_initial
from sapwood.signal_vec import VecDiffKind
from sapwood.template import TemplateList, TemplateResult


@functools.singledispatch
def render(value: Any) -> Node:
    """Create the node for ``value``; plain values become text nodes."""
    return Text(str(value))


@render.register(TemplateResult)
def _render_template(value: TemplateResult) -> Node:
    return value.node


@render.register(TemplateList)
def _render_list(value: TemplateList) -> Node:
    frag = Fragment()
    for item in list(value.templates.inner_signal.get()):
        frag.append_child(item.node)
    return frag


def _replace(value: Any, parent: Node, node: Node) -> Node:
    new_node = render(value)
    parent.replace_child(new_node, node)
    return new_node


@functools.singledispatch
def update_node(value: Any, parent: Node, node: Node) -> Node:
    """Bring ``node`` under ``parent`` up to date with ``value`` and return the live node.

    Text nodes are reused by changing their text; other nodes are replaced.
    """
    if isinstance(node, Text):
        node.data = str(value)
        return node
    return _replace(value, parent, node)


@update_node.register(TemplateResult)
def _update_template(value: TemplateResult, parent: Node, node: Node) -> Node:
    return _replace(value, parent, node)


def _after(nodes: list[Node]) -> Node | None:
    return nodes[-1].next_sibling if nodes else None


@update_node.register(TemplateList)
def _update_list(value: TemplateList, parent: Node, node: Node) -> Node:
    templates = value.templates
    current = [item.node for item in templates.inner_signal.get()]

    for change in list(templates.changes):
        match change.kind:
            case VecDiffKind.REPLACE:
                anchor = current[0] if current else None
                new_nodes = [item.node for item in change.values or []]
                for new_node in new_nodes:
                    parent.insert_before(new_node, anchor)
                for old_node in current:
                    parent.remove_child(old_node)
                current = new_nodes
            case VecDiffKind.INSERT:
                index = change.index
                if not 0 <= index <= len(current):
                    raise IndexError(f"index {index} out of range for length {len(current)}")
                reference = current[index] if index < len(current) else _after(current)
                parent.insert_before(change.value.node, reference)
                current.insert(index, change.value.node)
            case VecDiffKind.UPDATE:
                parent.replace_child(change.value.node, current[change.index])
                current[change.index] = change.value.node
            case VecDiffKind.REMOVE:
                parent.remove_child(current.pop(change.index))
            case VecDiffKind.SWAP:
                first = current[change.index]
                second = current[change.other_index]
                if first is not second:
                    placeholder = Comment("")
                    parent.replace_child(placeholder, first)
                    parent.replace_child(first, second)
                    parent.replace_child(second, placeholder)
                    current[change.index], current[change.other_index] = second, first
            case VecDiffKind.PUSH:
                parent.insert_before(change.value.node, _after(current))
                current.append(change.value.node)
            case VecDiffKind.POP:
                if current:
                    parent.remove_child(current.pop())
            case VecDiffKind.CLEAR:
                for old_node in current:
                    parent.remove_child(old_node)
                current = []

    return node


def append_render(parent: Node, child: Callable[[], Any]) -> None:
    """Append the rendering of ``child()`` to ``parent`` and keep it up to date.

    ``child`` is called inside an effect, so the node is updated whenever a
    signal it reads changes.
    """

    def initial() -> tuple[Callable[[], None], Node]:
        node = render(child())

        def effect() -> None:
            nonlocal node
            node = update_node(child(), parent, node)

        return effect, node

    parent.append_child(create_effect_initial(initial))