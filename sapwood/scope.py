"""Reactive scopes: owners of computations, dependency tracking and cleanup."""

from __future__ import annotations

import threading
import warnings
from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class Source(Protocol):
    """Anything a computation can depend on and be notified by."""

    def subscribe(self, callback: Callable[[], Any]) -> None: ...

    def unsubscribe(self, callback: Callable[[], Any]) -> None: ...


class _Runtime(threading.local):
    def __init__(self) -> None:
        self.contexts: list[Computation] = []
        self.owner: Owner | None = None


_runtime = _Runtime()


class Owner:
    """Owns the computations and cleanup callbacks created in a reactive scope.

    Disposing the owner detaches its computations from their dependencies and
    runs the cleanup callbacks.
    """

    def __init__(self) -> None:
        self._effects: list[Computation] = []
        self._cleanups: list[Callable[[], Any]] = []

    def add_effect(self, computation: Computation) -> None:
        """Take ownership of a computation."""
        self._effects.append(computation)

    def add_cleanup(self, callback: Callable[[], Any]) -> None:
        """Register a callback to run when the owner is disposed."""
        self._cleanups.append(callback)

    def dispose(self) -> None:
        """Destroy the owned computations and run the cleanup callbacks once."""
        effects, self._effects = self._effects, []
        cleanups, self._cleanups = self._cleanups, []
        for computation in effects:
            computation.clear_dependencies()
        for callback in cleanups:
            callback()
        for computation in effects:
            computation._dispose()

    def __enter__(self) -> Owner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class Computation:
    """A re-runnable body that tracks the sources it reads.

    Creating a computation registers it with the owner of the enclosing
    reactive scope. Calling it runs the body inside a fresh scope, and the
    computation subscribes itself to every source the body read.
    """

    def __init__(self, body: Callable[[], Any]) -> None:
        self._body = body
        self.dependencies: set[Source] = set()
        self.owner = Owner()
        self.disposed = False

        current = _runtime.owner
        if current is None:
            warnings.warn(
                "Effects created outside of a reactive root will never get disposed.",
                RuntimeWarning,
                stacklevel=2,
            )
        else:
            current.add_effect(self)

    def add_dependency(self, handle: Source) -> None:
        """Record a source read during the current run."""
        self.dependencies.add(handle)

    def clear_dependencies(self) -> None:
        """Unsubscribe from every recorded source and forget them."""
        for handle in self.dependencies:
            handle.unsubscribe(self)
        self.dependencies.clear()

    def __call__(self) -> None:
        if self.disposed:
            return
        self.clear_dependencies()
        _runtime.contexts.append(self)
        try:
            previous, self.owner = self.owner, Owner()
            previous.dispose()
            self.owner = create_root(self._body)
            for handle in self.dependencies:
                handle.subscribe(self)
        finally:
            _runtime.contexts.pop()

    def _dispose(self) -> None:
        self.clear_dependencies()
        self.disposed = True
        self.owner.dispose()


def record_dependency(handle: Source) -> None:
    """Make the running computation, if any, depend on ``handle``."""
    if _runtime.contexts:
        _runtime.contexts[-1].add_dependency(handle)


def create_root(callback: Callable[[], Any]) -> Owner:
    """Run ``callback`` in a new reactive scope and return that scope's owner."""
    outer = _runtime.owner
    owner = Owner()
    _runtime.owner = owner
    try:
        callback()
    finally:
        _runtime.owner = outer
    return owner


def untrack(f: Callable[[], T]) -> T:
    """Call ``f`` without recording any dependencies, and return its result."""
    saved = _runtime.contexts
    _runtime.contexts = []
    try:
        return f()
    finally:
        _runtime.contexts = saved


def on_cleanup(f: Callable[[], Any]) -> None:
    """Run ``f`` when the current reactive scope is disposed."""
    owner = _runtime.owner
    if owner is None:
        warnings.warn(
            "Cleanup callbacks created outside of a reactive root will never run.",
            RuntimeWarning,
            stacklevel=2,
        )
        return
    owner.add_cleanup(f)