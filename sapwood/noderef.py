"""References to nodes, filled in when the node is built."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sapwood.dom import Node


class NodeRef:
    """A slot holding a reference to a node once it is set."""

    def __init__(self) -> None:
        self._node: Node | None = None

    def get(self) -> Node:
        """Return the stored node; raise :class:`LookupError` if none is set."""
        node = self._node
        if node is None:
            raise LookupError("NodeRef is not set")
        return node

    def try_get(self) -> Node | None:
        """Return the stored node, or ``None`` if none is set."""
        return self._node

    def set(self, node: Node) -> None:
        """Store ``node``."""
        self._node = node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        return self._node is other._node

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NodeRef({self._node!r})"