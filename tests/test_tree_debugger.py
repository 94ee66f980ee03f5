import pytest

from lager.context import Context, noop
from lager.tree_debugger import (
    DebuggerModel,
    GotoAction,
    PauseAction,
    Pos,
    RedoAction,
    ResumeAction,
    SummaryStep,
    UndoAction,
    update,
)


def add(model, action):
    return model + action


class FakeLoop:
    def __init__(self):
        self.calls = []

    def pause(self):
        self.calls.append("pause")

    def resume(self):
        self.calls.append("resume")


def run(model, *actions):
    for act in actions:
        model, _ = update(add, model, act)
    return model


def test_empty_cursor_looks_up_init():
    m = DebuggerModel(7)
    assert m.lookup(()) == (None, 7)
    assert m.current() == 7


def test_append_on_empty_cursor():
    m = DebuggerModel(0).append("a", 1)
    assert m.cursor == (Pos(0, 0),)
    assert m.lookup(m.cursor) == ("a", 1)


def test_append_extends_history():
    m = DebuggerModel(0).append("a", 1).append("b", 2)
    assert m.cursor == (Pos(0, 1),)
    assert m.current() == 2


def test_update_records_reduced_models():
    m = run(DebuggerModel(0), 2, 3)
    assert m.current() == 5
    assert m.lookup((Pos(0, 0),)) == (2, 2)


def test_undo_moves_back_to_init():
    m = run(DebuggerModel(0), 2, 3)
    m = run(m, UndoAction())
    assert m.current() == 2
    m = run(m, UndoAction(), UndoAction())
    assert m.cursor == ()
    assert m.current() == 0


def test_action_after_undo_creates_branch():
    m = run(DebuggerModel(0), 1, 1, UndoAction(), 10)
    assert len(m.cursor) == 2
    assert m.check(m.cursor)
    assert m.current() == 11
    assert m.lookup((Pos(0, 1),)) == (1, 2)
    assert m.summary() == (
        (SummaryStep(0, ((SummaryStep(1),),)), SummaryStep(1)),
    )


def test_second_branch_is_separate():
    m = run(DebuggerModel(0), 1, 1, UndoAction(), 10, UndoAction(), 20)
    assert m.current() == 21
    assert m.check(m.cursor)
    m = run(m, 1)
    assert m.current() == 22


def test_goto_valid_and_invalid():
    m = run(DebuggerModel(0), 1, 2)
    moved = run(m, GotoAction((Pos(0, 0),)))
    assert moved.current() == 1
    stayed = run(m, GotoAction((Pos(3, 0),)))
    assert stayed.cursor == m.cursor


def test_bad_cursor():
    m = run(DebuggerModel(0), 1)
    assert not m.check((Pos(0, 5),))
    with pytest.raises(IndexError):
        m.lookup((Pos(1, 0),))


def test_redo_raises():
    with pytest.raises(RuntimeError):
        update(add, DebuggerModel(0), RedoAction())


def test_pause_and_resume():
    loop = FakeLoop()
    ctx = Context(loop=loop)
    m, eff = update(add, DebuggerModel(0), PauseAction())
    assert m.paused
    eff(ctx)
    assert loop.calls == ["pause"]

    m, eff = update(add, m, 4)
    assert eff is noop
    assert m.pending == (4,)
    assert m.current() == 0

    m, eff = update(add, m, ResumeAction())
    assert not m.paused
    assert m.pending == ()
    assert m.current() == 4
    eff(ctx)
    assert loop.calls == ["pause", "resume"]


def test_reducer_effect_is_returned():
    seen = []

    def effect(ctx):
        seen.append(ctx)

    def reducer(model, action):
        return model + action, effect

    ctx = Context()
    m, eff = update(reducer, DebuggerModel(0), 3)
    assert m.current() == 3
    eff(ctx)
    assert seen == [ctx]