# lager

A small library for writing interactive programs with a unidirectional data
flow. The whole application state is one value. Only a pure *reducer* changes
it: the reducer takes the current model and an *action* and returns the next
model, or a `(model, effect)` pair when something must happen afterwards.

## Modules

- `lager.store`: `make_store(init, reducer, loop, *enhancers)` builds a
  `Store`. `Store.dispatch(action)` schedules the action on the loop,
  `Store.get()` returns the committed model, and `Store.watch(fn)` calls
  `fn(old, new)` after each change. `with_deps(**kwargs)` is an enhancer that
  adds named dependencies, which effects read through `ctx.deps`.
- `lager.context`: `Context` is handed to effects. It offers `dispatch`,
  `converted(converter)`, `loop` and `deps`. `invoke_reducer` calls any
  reducer, with or without effects. `sequence(*effects)` chains effects and
  drops empty ones. `noop` is the empty effect.
- `lager.nodes`: `ReaderNode` and `CursorNode` hold values that propagate in
  two phases. `send_down` makes new values visible and `notify` then calls
  observers, so watchers always see a consistent state. `observe` returns a
  `Connection` with `disconnect()`. `NoValueError` and `has_changed` live here
  as well.
- `lager.xform_nodes`: `make_xform_reader_node` and `make_xform_cursor_node`
  derive nodes from parent nodes through transducers. `identity` is the
  pass-through transducer.
- `lager.commit`: `commit(*roots)` sends every root down before it notifies
  any of them.
- `lager.sensor`: `make_sensor(fn)` returns a `Sensor` that samples `fn` each
  time it is committed.
- `lager.lenses`: `view`, `set_` and `over` work with lenses built from
  `attr`, `at`, `at_i`, `getset`, `make_lens`, and composed with `comp`.
- `lager.tree_debugger`: `update(reducer, model, action)` wraps a reducer and
  records every step in a `DebuggerModel` as a branching history. It handles
  `GotoAction`, `UndoAction`, `PauseAction` and `ResumeAction`. `RedoAction`
  raises `RuntimeError`.
- `lager.counter` and `lager.autopong`: example applications. Each provides a
  model, actions and a reducer.

## Event loops

The package ships no event loop. A store needs a loop object with a
`post(fn)` method. The `PauseAction` and `ResumeAction` effects of the tree
debugger also call `pause()` and `resume()` on it.

## Example

```python
from lager.counter import IncrementAction, Model, update
from lager.store import make_store


class ImmediateLoop:
    def post(self, fn):
        fn()


store = make_store(Model(), update, ImmediateLoop())
store.watch(lambda old, new: print(old.value, "->", new.value))
store.dispatch(IncrementAction())   # prints "0 -> 1"
```

## Counter demo

This demo runs a terminal counter. It reads characters from standard input:
`+` increments, `-` decrements and `.` resets. After each change it prints
the previous and the current value.

```
lager-counter
```

## What it does not do

- There is no graphical or full-screen front end. The pong game is only a
  model and a reducer.
- There is no debugger server or user interface. The tree debugger is a
  reducer wrapper only.
- Models cannot be saved to or loaded from files.

## Tests

```
pip install .[test]
pytest
```