"""The store: holds the model and glues reducer, event loop and watchers."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from lager.context import Context, Effect, invoke_reducer
from lager.lenses import comp
from lager.nodes import Connection, CursorNode

StoreCreator = Callable[[Any, Any, Any, Mapping[str, Any]], "Store"]
Enhancer = Callable[[StoreCreator], StoreCreator]


class _StoreNode(CursorNode[Any]):
    def send_up(self, value: Any) -> None:
        self.push_down(value)


class Store(Context):
    """Holds the data model and applies actions to it through a reducer.

    Actions are processed on ``loop``, which must offer ``post(fn)``.  The
    reducer returns either a model or a ``(model, effect)`` pair; effects are
    scheduled on the loop and receive a :class:`Context`.
    """

    def __init__(
        self,
        init: Any,
        reducer: Callable[[Any, Any], Any],
        loop: Any,
        deps: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(self._dispatch_action, loop, deps)
        self._node = _StoreNode(init)
        self._reducer = reducer
        self._ctx = Context(self._dispatch_action, loop, self.deps)

    def roots(self) -> _StoreNode:
        return self._node

    def _dispatch_action(self, action: Any) -> None:
        loop = self._loop
        node = self._node
        ctx = self._ctx

        def handle(effect: Effect) -> None:
            loop.post(lambda: effect(ctx))

        def process() -> None:
            node.send_up(invoke_reducer(self._reducer, node.current, action, handle))
            node.send_down()
            loop.post(node.notify)

        loop.post(process)

    def dispatch(self, action: Any) -> None:
        """Schedule ``action`` to be reduced into the model."""
        self._dispatch_action(action)

    def get(self) -> Any:
        """The current, committed model."""
        return self._node.last

    def watch(self, fn: Callable[[Any, Any], Any]) -> Connection:
        """Call ``fn(old, new)`` after each change of the model."""
        return self._node.observe(fn)


def with_deps(**kwargs: Any) -> Enhancer:
    """Store enhancer adding the given named dependencies."""
    new_deps = dict(kwargs)

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def creator(model: Any, reducer: Any, loop: Any, deps: Mapping[str, Any]) -> Store:
            return next_creator(model, reducer, loop, {**deps, **new_deps})

        return creator

    return enhancer


def make_store(init: Any, reducer: Callable[[Any, Any], Any], loop: Any, *args: Enhancer) -> Store:
    """Build a store from an initial model, a reducer, a loop and enhancers."""
    enhancer = comp(*args)
    creator = enhancer(lambda model, red, lp, deps: Store(model, red, lp, deps))
    return creator(init, reducer, loop, {})