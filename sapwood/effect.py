"""Effects, memos and selectors built on reactive computations."""

from __future__ import annotations

import operator
from typing import Any, Callable, TypeVar

from sapwood.scope import Computation
from sapwood.signal import Signal, StateHandle

R = TypeVar("R")
T = TypeVar("T")


def create_effect_initial(initial: Callable[[], tuple[Callable[[], Any], R]]) -> R:
    """Create an effect whose first run differs from the later ones.

    ``initial`` is called once and returns ``(effect, value)``. ``effect`` is
    run on every later change of the sources read, and ``value`` is returned.
    """
    effect: Callable[[], Any] | None = None
    result: Any = None
    started = False

    def body() -> None:
        nonlocal effect, result, started
        if not started:
            started = True
            effect, result = initial()
        elif effect is not None:
            effect()

    computation = Computation(body)
    computation()
    return result


def create_effect(effect: Callable[[], Any]) -> None:
    """Run ``effect`` now and again whenever a source it read changes."""

    def initial() -> tuple[Callable[[], Any], None]:
        effect()
        return effect, None

    create_effect_initial(initial)


def create_selector_with(
    derived: Callable[[], T], comparator: Callable[[T, T], bool]
) -> StateHandle[T]:
    """Memoise ``derived``, notifying dependents only when ``comparator`` says it changed.

    ``comparator(old, new)`` returns ``True`` when the two values are the same.
    """

    def initial() -> tuple[Callable[[], None], StateHandle[T]]:
        memo = Signal(derived())

        def update() -> None:
            new_value = derived()
            if not comparator(memo.get_untracked(), new_value):
                memo.set(new_value)

        return update, memo.handle()

    return create_effect_initial(initial)


def create_memo(derived: Callable[[], T]) -> StateHandle[T]:
    """Memoise ``derived``, notifying dependents on every recomputation."""
    return create_selector_with(derived, lambda _old, _new: False)


def create_selector(derived: Callable[[], T]) -> StateHandle[T]:
    """Memoise ``derived``, notifying dependents only when the value is unequal."""
    return create_selector_with(derived, operator.eq)