"""Template results and rendering them into a parent node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from sapwood.dom import Comment, Node
from sapwood.scope import Owner, create_root
from sapwood.signal_vec import SignalVec


@dataclass(frozen=True)
class TemplateResult:
    """The root node produced by building a template."""

    node: Node

    @classmethod
    def empty(cls) -> TemplateResult:
        """Return a result holding a blank comment node."""
        return cls(Comment(""))

    def inner_element(self) -> Node:
        """Return the root node."""
        return self.node


@dataclass(frozen=True)
class TemplateList:
    """A reactive list of template results, rendered change by change."""

    templates: SignalVec[Any]


_global_owners: list[Owner] = []


def render_to(template: Callable[[], TemplateResult], parent: Node) -> None:
    """Build ``template`` in a new reactive root and append its node to ``parent``.

    The root is kept alive for the lifetime of the process.
    """
    owner = create_root(lambda: parent.append_child(template().node))
    _global_owners.append(owner)