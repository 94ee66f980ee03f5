"""Reactive value nodes that propagate changes down a graph in two phases."""

from __future__ import annotations

import weakref
from abc import abstractmethod
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[Any, Any], Any]


class NoValueError(Exception):
    """Raised when a derived node has not produced any value yet."""

    def __init__(self, message: str = "no_value_error") -> None:
        super().__init__(message)


class _Slot:
    __slots__ = ("fn",)

    def __init__(self, fn: Observer) -> None:
        self.fn = fn


class Connection:
    """Handle to an observer registered on a node."""

    def __init__(self, slots: list[_Slot], slot: _Slot) -> None:
        self._slots = slots
        self._slot = slot

    @property
    def connected(self) -> bool:
        return any(s is self._slot for s in self._slots)

    def disconnect(self) -> None:
        """Stop delivering notifications to the observer."""
        self._slots[:] = [s for s in self._slots if s is not self._slot]


def has_changed(a: Any, b: Any) -> bool:
    """Return whether two values differ; incomparable values count as changed."""
    try:
        return not (a == b)
    except Exception:
        return True


class ReaderNode(Generic[T]):
    """A node holding a value that flows down to its children.

    Changes travel in two steps: ``send_down`` makes the newest value visible
    throughout the graph, and ``notify`` then informs observers, so that they
    always see a consistent state.
    """

    def __init__(self, value: T) -> None:
        self._current = value
        self._last = value
        self._last_notified = value
        self._needs_send_down = False
        self._needs_notify = False
        self._children: list[weakref.ref[ReaderNode[Any]]] = []
        self._slots: list[_Slot] = []

    @property
    def current(self) -> T:
        return self._current

    @property
    def last(self) -> T:
        return self._last

    @property
    def children(self) -> tuple[ReaderNode[Any], ...]:
        """The children that are still alive."""
        return tuple(c for c in (ref() for ref in self._children) if c is not None)

    @property
    def observers(self) -> tuple[Observer, ...]:
        return tuple(slot.fn for slot in self._slots)

    def recompute(self) -> None:
        """Refresh the current value from the node's sources."""

    def recompute_deep(self) -> None:
        """Refresh the current value, including every ancestor first."""

    def link(self, child: ReaderNode[Any]) -> None:
        """Register ``child`` to receive this node's propagation."""
        if any(ref() is child for ref in self._children):
            raise ValueError("child node must not be linked twice")
        self._children.append(weakref.ref(child))

    def push_down(self, value: T) -> None:
        """Set a new current value, marking it for propagation if it changed."""
        if has_changed(value, self._current):
            self._current = value
            self._needs_send_down = True

    def send_down(self) -> None:
        """Make the current value visible and pass propagation to children."""
        self.recompute()
        if self._needs_send_down:
            self._last = self._current
            self._needs_send_down = False
            self._needs_notify = True
            for child in self.children:
                child.send_down()

    def notify(self) -> None:
        """Call observers with the previous and new value, then notify children."""
        if self._needs_send_down or not self._needs_notify:
            return
        self._needs_notify = False
        old = self._last_notified
        for slot in list(self._slots):
            slot.fn(old, self._last)
        self._last_notified = self._last

        garbage = False
        for ref in list(self._children):
            child = ref()
            if child is None:
                garbage = True
            else:
                child.notify()
        if garbage:
            self._collect()

    def observe(self, fn: Observer) -> Connection:
        """Register ``fn(old, new)`` to be called on notification."""
        slot = _Slot(fn)
        self._slots.append(slot)
        return Connection(self._slots, slot)

    def _collect(self) -> None:
        self._children = [ref for ref in self._children if ref() is not None]


class CursorNode(ReaderNode[T]):
    """A node that can also send values back up towards its sources."""

    @abstractmethod
    def send_up(self, value: T) -> None:
        """Propagate ``value`` upwards to the node's parents."""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

    def __new__(cls, *args: Any, **kwargs: Any) -> CursorNode[T]:
        if getattr(cls.send_up, "__isabstractmethod__", False):
            raise TypeError(f"cannot instantiate {cls.__name__} without send_up")
        return super().__new__(cls)