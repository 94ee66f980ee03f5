"""Committing changes of several root nodes at once."""

from __future__ import annotations

from typing import Any

from lager.nodes import ReaderNode


def _root_of(obj: Any) -> ReaderNode[Any]:
    roots = getattr(obj, "roots", None)
    if callable(roots):
        return roots()
    if isinstance(obj, ReaderNode):
        return obj
    raise TypeError(f"{type(obj).__name__} has no root node to commit")


def commit(*args: Any) -> None:
    """Propagate every root's value before notifying any watcher.

    Watchers therefore always see a consistent state of all the roots.
    """
    roots = [_root_of(obj) for obj in args]
    for root in roots:
        root.send_down()
    for root in roots:
        root.notify()