"""Signals: observable values that notify subscribers when set."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from sapwood.scope import record_dependency

T = TypeVar("T")


class _Cell(Generic[T]):
    """Shared storage behind a signal and all of its handles."""

    def __init__(self, value: T) -> None:
        self.value = value
        self.subscribers: dict[Callable[[], Any], None] = {}

    def subscribe(self, callback: Callable[[], Any]) -> None:
        self.subscribers[callback] = None

    def unsubscribe(self, callback: Callable[[], Any]) -> None:
        self.subscribers.pop(callback, None)


class StateHandle(Generic[T]):
    """A read-only view of a signal's state."""

    def __init__(self, cell: _Cell[T]) -> None:
        self._cell = cell

    def get(self) -> T:
        """Return the value, recording it as a dependency of the running computation."""
        record_dependency(self._cell)
        return self._cell.value

    def get_untracked(self) -> T:
        """Return the value without recording a dependency."""
        return self._cell.value

    def subscribe(self, callback: Callable[[], Any]) -> None:
        """Call ``callback`` whenever the state changes; subscribing twice is a no-op."""
        self._cell.subscribe(callback)

    def unsubscribe(self, callback: Callable[[], Any]) -> None:
        """Stop calling ``callback``; unknown callbacks are ignored."""
        self._cell.unsubscribe(callback)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cell.value!r})"


class Signal(StateHandle[T]):
    """State that can be set, notifying everything that depends on it."""

    def __init__(self, value: T) -> None:
        super().__init__(_Cell(value))

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        self._cell.value = value
        self.trigger_subscribers()

    def handle(self) -> StateHandle[T]:
        """Return a read-only handle sharing this signal's state."""
        return StateHandle(self._cell)

    def trigger_subscribers(self) -> None:
        """Notify subscribers without changing the value."""
        for callback in list(self._cell.subscribers):
            callback()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signal):
            return NotImplemented
        return bool(self.get_untracked() == other.get_untracked())

    __hash__ = None  # type: ignore[assignment]