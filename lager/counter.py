"""A counter application: model, actions, reducer and a text front end."""

from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from lager.store import make_store


@dataclass(frozen=True)
class Model:
    value: int = 0


@dataclass(frozen=True)
class IncrementAction:
    pass


@dataclass(frozen=True)
class DecrementAction:
    pass


@dataclass(frozen=True)
class ResetAction:
    new_value: int = 0


Action = Union[IncrementAction, DecrementAction, ResetAction]


def update(model: Model, action: Action) -> Model:
    """Apply ``action`` to the counter."""
    match action:
        case IncrementAction():
            return Model(model.value + 1)
        case DecrementAction():
            return Model(model.value - 1)
        case ResetAction(new_value=new_value):
            return Model(new_value)
    raise TypeError(f"unknown counter action: {action!r}")


def intent(event: str) -> Optional[Action]:
    """Map an input character to an action, or None."""
    return {
        "+": IncrementAction(),
        "-": DecrementAction(),
        ".": ResetAction(),
    }.get(event)


def draw(prev: Model, curr: Model) -> None:
    """Print the previous and the current value."""
    print(f"last value: {prev.value}")
    print(f"current value: {curr.value}")


class _ManualLoop:
    """Runs posted work right away, queueing work posted while running."""

    def __init__(self) -> None:
        self._queue: deque[Callable[[], Any]] = deque()
        self._running = False

    def post(self, fn: Callable[[], Any]) -> None:
        self._queue.append(fn)
        if self._running:
            return
        self._running = True
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._running = False


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read characters from standard input and drive the counter with them."""
    store = make_store(Model(), update, _ManualLoop())
    store.watch(draw)
    for line in sys.stdin:
        for char in line:
            if char.isspace():
                continue
            action = intent(char)
            if action is not None:
                store.dispatch(action)
    return 0