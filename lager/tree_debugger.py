"""A debugger that keeps the whole history of a store as a tree of branches.

Every action reduced by the wrapped reducer is recorded together with the
model it produced.  Moving the cursor back and dispatching a new action starts
a new branch instead of discarding the steps that followed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from lager.context import Effect, invoke_reducer, noop, sequence


@dataclass(frozen=True)
class Pos:
    """A position inside one level of the history tree."""

    branch: int
    step: int


Cursor = tuple[Pos, ...]


@dataclass(frozen=True)
class GotoAction:
    """Move the cursor to ``cursor`` if it points to an existing step."""

    cursor: Cursor


@dataclass(frozen=True)
class UndoAction:
    """Move the cursor one step back."""


@dataclass(frozen=True)
class RedoAction:
    """Move the cursor one step forward; not supported."""


@dataclass(frozen=True)
class PauseAction:
    """Queue incoming actions instead of reducing them."""


@dataclass(frozen=True)
class ResumeAction:
    """Reduce every queued action and stop queueing."""


_DEBUGGER_ACTIONS = (GotoAction, UndoAction, RedoAction, PauseAction, ResumeAction)


@dataclass(frozen=True)
class Step:
    """One recorded action, the model it produced and the branches from it."""

    action: Any
    model: Any
    branches: tuple[tuple[Step, ...], ...] = ()


@dataclass(frozen=True)
class SummaryStep:
    """A run of ``steps`` plain steps, followed by a step that has branches."""

    steps: int
    branches: tuple[tuple[SummaryStep, ...], ...] = ()


History = tuple[Step, ...]
Branches = tuple[History, ...]
Summary = tuple[tuple[SummaryStep, ...], ...]


def _append_at(
    branches: Branches, cursor: Cursor, index: int, action: Any, model: Any
) -> tuple[Branches, Cursor]:
    pos = cursor[index]
    next_index = index + 1
    history = branches[pos.branch]
    node = history[pos.step]
    if next_index < len(cursor):
        sub_branches, new_cursor = _append_at(
            node.branches, cursor, next_index, action, model
        )
        new_node = replace(node, branches=sub_branches)
        new_history = history[: pos.step] + (new_node,) + history[pos.step + 1 :]
    elif pos.step + 1 == len(history):
        new_cursor = cursor[:index] + (Pos(pos.branch, pos.step + 1),) + cursor[index + 1 :]
        new_history = history + (Step(action, model),)
    else:
        new_cursor = cursor + (Pos(len(node.branches), 0),)
        new_node = replace(node, branches=node.branches + ((Step(action, model),),))
        new_history = history[: pos.step] + (new_node,) + history[pos.step + 1 :]
    new_branches = branches[: pos.branch] + (new_history,) + branches[pos.branch + 1 :]
    return new_branches, new_cursor


def _summarize(branches: Branches) -> Summary:
    result = []
    for history in branches:
        steps = 0
        current = []
        for step in history:
            if not step.branches:
                steps += 1
            else:
                current.append(SummaryStep(steps, _summarize(step.branches)))
                steps = 0
        current.append(SummaryStep(steps))
        result.append(tuple(current))
    return tuple(result)


@dataclass(frozen=True)
class DebuggerModel:
    """The debugger's state: the history tree, the cursor and queued actions."""

    init: Any = None
    cursor: Cursor = ()
    paused: bool = False
    branches: Branches = ()
    pending: tuple[Any, ...] = field(default=())

    def lookup(self, cursor: Cursor) -> tuple[Optional[Any], Any]:
        """Return the action and model at ``cursor``; raise IndexError if invalid."""
        if not cursor:
            return None, self.init
        branches = self.branches
        node: Optional[Step] = None
        for pos in cursor:
            if not 0 <= pos.branch < len(branches):
                raise IndexError("bad cursor")
            history = branches[pos.branch]
            if not 0 <= pos.step < len(history):
                raise IndexError("bad cursor")
            node = history[pos.step]
            branches = node.branches
        assert node is not None
        return node.action, node.model

    def append(self, action: Any, model: Any) -> DebuggerModel:
        """Record a new step after the cursor and move the cursor onto it."""
        if not self.cursor:
            branches = self.branches + ((Step(action, model),),)
            return replace(self, branches=branches, cursor=(Pos(len(branches) - 1, 0),))
        branches, cursor = _append_at(self.branches, self.cursor, 0, action, model)
        return replace(self, branches=branches, cursor=cursor)

    def check(self, cursor: Cursor) -> bool:
        """Whether ``cursor`` points to an existing step."""
        try:
            self.lookup(cursor)
        except IndexError:
            return False
        return True

    def summary(self) -> Summary:
        """A compact description of the shape of the history tree."""
        return _summarize(self.branches)

    def current(self) -> Any:
        """The model at the cursor."""
        return self.lookup(self.cursor)[1]


def _pause_effect(ctx: Any) -> None:
    ctx.loop.pause()


def _resume_effect(ctx: Any) -> None:
    ctx.loop.resume()


def update(
    reducer: Callable[[Any, Any], Any], model: DebuggerModel, action: Any
) -> tuple[DebuggerModel, Effect]:
    """Reduce ``action`` into the debugger model, returning it and an effect."""
    match action:
        case GotoAction(cursor=cursor):
            if model.check(cursor):
                model = replace(model, cursor=tuple(cursor))
            return model, noop
        case UndoAction():
            if model.cursor:
                pos = model.cursor[-1]
                head = model.cursor[:-1]
                cursor = head + (Pos(pos.branch, pos.step - 1),) if pos.step > 0 else head
                model = replace(model, cursor=cursor)
            return model, noop
        case RedoAction():
            raise RuntimeError("redo is not supported")
        case PauseAction():
            return replace(model, paused=True), _pause_effect
        case ResumeAction():
            pending = model.pending
            model = replace(model, paused=False, pending=())
            eff: Effect = noop
            for queued in pending:
                model, new_eff = update(reducer, model, queued)
                eff = sequence(eff, new_eff)
            return model, sequence(_resume_effect, eff)

    if model.paused:
        return replace(model, pending=model.pending + (action,)), noop

    produced: list[Effect] = []
    state = invoke_reducer(reducer, model.current(), action, produced.append)
    eff = produced[-1] if produced else noop
    return model.append(action, state), eff