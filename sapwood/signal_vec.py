"""A reactive list that reports fine-grained changes to its subscribers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from sapwood.effect import create_effect_initial
from sapwood.signal import Signal

T = TypeVar("T")
U = TypeVar("U")


class VecDiffKind(enum.Enum):
    """The kind of change applied to a :class:`SignalVec`."""

    REPLACE = "replace"
    INSERT = "insert"
    UPDATE = "update"
    REMOVE = "remove"
    SWAP = "swap"
    PUSH = "push"
    POP = "pop"
    CLEAR = "clear"


def _check_index(index: int, limit: int) -> None:
    if not 0 <= index < limit:
        raise IndexError(f"index {index} out of range for length {limit}")


@dataclass(frozen=True)
class VecDiff:
    """One change to a :class:`SignalVec`.

    ``index`` is used by insert, update, remove and swap; ``other_index`` by
    swap; ``value`` by insert, update and push; ``values`` by replace.
    """

    kind: VecDiffKind
    index: int | None = None
    other_index: int | None = None
    value: Any = None
    values: list[Any] | None = None

    def apply_to(self, items: list[Any]) -> None:
        """Apply this change to ``items`` in place."""
        match self.kind:
            case VecDiffKind.REPLACE:
                items[:] = list(self.values or [])
            case VecDiffKind.INSERT:
                _check_index(self.index, len(items) + 1)
                items.insert(self.index, self.value)
            case VecDiffKind.UPDATE:
                _check_index(self.index, len(items))
                items[self.index] = self.value
            case VecDiffKind.REMOVE:
                _check_index(self.index, len(items))
                del items[self.index]
            case VecDiffKind.SWAP:
                _check_index(self.index, len(items))
                _check_index(self.other_index, len(items))
                first, second = self.index, self.other_index
                items[first], items[second] = items[second], items[first]
            case VecDiffKind.PUSH:
                items.append(self.value)
            case VecDiffKind.POP:
                if items:
                    items.pop()
            case VecDiffKind.CLEAR:
                items.clear()


class SignalVec(Generic[T]):
    """A reactive list whose subscribers see each individual change.

    Subscribers are notified before pending changes are applied, so they can
    read both the old contents and the list of changes.
    """

    def __init__(self, values: list[T] | None = None) -> None:
        self._signal: Signal[list[T]] = Signal(list(values or []))
        self._changes: list[VecDiff] = []

    @property
    def inner_signal(self) -> Signal[list[T]]:
        """The signal holding the backing list; mutating it directly skips updates."""
        return self._signal

    @property
    def changes(self) -> list[VecDiff]:
        """Changes pending until the subscribers have been notified."""
        return self._changes

    def replace(self, values: list[T]) -> None:
        """Replace the whole contents."""
        self._change(VecDiff(VecDiffKind.REPLACE, values=list(values)))

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before ``index``."""
        self._change(VecDiff(VecDiffKind.INSERT, index=index, value=value))

    def update(self, index: int, value: T) -> None:
        """Queue a replacement of the item at ``index``; applied with the next change."""
        self._changes.append(VecDiff(VecDiffKind.UPDATE, index=index, value=value))

    def remove(self, index: int) -> None:
        """Remove the item at ``index``."""
        self._change(VecDiff(VecDiffKind.REMOVE, index=index))

    def swap(self, index1: int, index2: int) -> None:
        """Exchange the items at two positions."""
        self._change(VecDiff(VecDiffKind.SWAP, index=index1, other_index=index2))

    def push(self, value: T) -> None:
        """Append ``value``."""
        self._change(VecDiff(VecDiffKind.PUSH, value=value))

    def pop(self) -> None:
        """Remove the last item, if any."""
        self._change(VecDiff(VecDiffKind.POP))

    def clear(self) -> None:
        """Remove every item."""
        self._change(VecDiff(VecDiffKind.CLEAR))

    def _change(self, change: VecDiff) -> None:
        self._changes.append(change)
        self._signal.trigger_subscribers()
        pending, self._changes[:] = list(self._changes), []
        items = self._signal.get_untracked()
        for diff in pending:
            diff.apply_to(items)

    def map(self, f: Callable[[T], U]) -> SignalVec[U]:
        """Return a derived list holding ``f`` of each item, kept in step with this one."""
        signal = self._signal
        changes = self._changes

        def initial() -> tuple[Callable[[], None], SignalVec[U]]:
            derived: SignalVec[U] = SignalVec([f(value) for value in signal.get()])

            def follow() -> None:
                signal.get()
                for change in list(changes):
                    match change.kind:
                        case VecDiffKind.REPLACE:
                            derived.replace([f(value) for value in change.values or []])
                        case VecDiffKind.INSERT:
                            derived.insert(change.index, f(change.value))
                        case VecDiffKind.UPDATE:
                            derived.update(change.index, f(change.value))
                        case VecDiffKind.REMOVE:
                            derived.remove(change.index)
                        case VecDiffKind.SWAP:
                            derived.swap(change.index, change.other_index)
                        case VecDiffKind.PUSH:
                            derived.push(f(change.value))
                        case VecDiffKind.POP:
                            derived.pop()
                        case VecDiffKind.CLEAR:
                            derived.clear()

            return follow, derived

        return create_effect_initial(initial)

    def to_list(self) -> list[T]:
        """Return a copy of the current contents."""
        return list(self._signal.get())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._signal.get_untracked()!r})"