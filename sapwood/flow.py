"""Iteration over reactive lists, keyed or by index, with minimal re-rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, TypeVar

from sapwood.dom import Comment, Node, append, fragment
from sapwood.effect import create_effect
from sapwood.scope import Owner, create_root
from sapwood.signal import StateHandle
from sapwood.template import TemplateResult

T = TypeVar("T")

_MISSING = object()


@dataclass
class _Rendered:
    owner: Owner
    value: Any
    result: TemplateResult


def _build(template: Callable[[T], TemplateResult], item: T) -> tuple[Owner, TemplateResult]:
    built: list[TemplateResult] = []
    owner = create_root(lambda: built.append(template(item)))
    return owner, built[0]


def _insert_before(marker: Node, node: Node) -> None:
    parent = marker.parent_node
    if parent is None:
        raise RuntimeError("list marker is detached from the document")
    parent.insert_before(node, marker)


def _replace(old_node: Node, new_node: Node) -> None:
    parent = old_node.parent_node
    if parent is None:
        raise RuntimeError("rendered node is detached from the document")
    parent.replace_child(new_node, old_node)


def keyed(
    iterable: StateHandle[list[T]],
    template: Callable[[T], TemplateResult],
    key: Callable[[T], Hashable],
) -> TemplateResult:
    """Render each item of ``iterable`` with ``template``, identified by ``key``.

    An item is rendered again only when its value differs from the value last
    rendered under the same key; items whose keys disappear are removed.
    """
    rendered: dict[Hashable, _Rendered] = {}
    frag = fragment()
    marker = Comment("")
    append(frag, marker)

    def update() -> None:
        items = iterable.get()
        previous = {item_key: entry.value for item_key, entry in rendered.items()}

        for item in items:
            item_key = key(item)
            old_value = previous.get(item_key, _MISSING)
            if old_value is not _MISSING and not (old_value != item):
                continue

            entry = rendered.get(item_key)
            if entry is not None:
                entry.owner.dispose()

            owner, result = _build(template, item)
            rendered[item_key] = _Rendered(owner, item, result)
            if entry is not None:
                _replace(entry.result.node, result.node)
            else:
                _insert_before(marker, result.node)

        if len(rendered) > len(items):
            live = {key(item) for item in items}
            excess = [rendered.pop(item_key) for item_key in list(rendered) if item_key not in live]
            for entry in excess:
                entry.owner.dispose()
            for entry in excess:
                entry.result.node.remove()

    create_effect(update)

    for item in iterable.get():
        _insert_before(marker, rendered[key(item)].result.node)

    return TemplateResult(frag)


def indexed(
    iterable: StateHandle[list[T]],
    template: Callable[[T], TemplateResult],
) -> TemplateResult:
    """Render each item of ``iterable`` with ``template``, identified by position.

    A position is rendered again only when its value differs from the value
    previously at that position; positions past the new end are removed.
    """
    rendered: list[tuple[Owner, TemplateResult]] = []
    previous: list[Any] = []
    frag = fragment()
    marker = Comment("")
    append(frag, marker)

    def update() -> None:
        nonlocal previous
        items = iterable.get()

        for index, item in enumerate(items):
            if index < len(previous) and not (previous[index] != item):
                continue

            if index < len(rendered):
                rendered[index][0].dispose()

            owner, result = _build(template, item)
            if index < len(rendered):
                old_node = rendered[index][1].node
                rendered[index] = (owner, result)
                _replace(old_node, result.node)
            else:
                rendered.append((owner, result))
                _insert_before(marker, result.node)

        if len(rendered) > len(items):
            excess = rendered[len(items):]
            del rendered[len(items):]
            for owner, result in excess:
                owner.dispose()
                result.node.remove()

        previous = list(items)

    create_effect(update)

    for _owner, result in rendered:
        _insert_before(marker, result.node)

    return TemplateResult(frag)