"""Contexts handed to effects, and helpers for reducers that produce effects."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional

Effect = Callable[["Context"], Any]
Dispatcher = Callable[[Any], Any]


def noop(*args: Any, **kwargs: Any) -> None:
    """Accept any arguments and discard them; the empty effect."""
    del args, kwargs


class Context:
    """Lets effects dispatch new actions, control the event loop and reach deps.

    A context is a reference to the store that created it: dispatching through
    it feeds actions back into that store.
    """

    def __init__(
        self,
        dispatcher: Dispatcher = noop,
        loop: Any = None,
        deps: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._loop = loop
        self._deps: Mapping[str, Any] = MappingProxyType(dict(deps or {}))

    @property
    def loop(self) -> Any:
        """The event loop the store schedules its work on."""
        return self._loop

    @property
    def deps(self) -> Mapping[str, Any]:
        """The dependencies available to effects, by name."""
        return self._deps

    def dispatch(self, action: Any) -> None:
        """Send ``action`` to the store."""
        self._dispatcher(action)

    def converted(self, converter: Callable[[Any], Any]) -> Context:
        """A context whose actions are passed through ``converter`` first."""
        return Context(
            lambda action: self.dispatch(converter(action)), self._loop, self._deps
        )


def _is_empty(effect: Optional[Effect]) -> bool:
    return effect is None or effect is noop


def _has_effect(result: Any) -> bool:
    return isinstance(result, tuple) and len(result) == 2 and (
        result[1] is None or callable(result[1])
    )


def invoke_reducer(
    reducer: Callable[[Any, Any], Any],
    model: Any,
    action: Any,
    handler: Callable[[Effect], Any],
) -> Any:
    """Apply ``reducer`` and return the new model.

    A reducer may return either a model or a ``(model, effect)`` pair; in the
    second case ``handler`` is called with the effect after the reducer ran.
    """
    result = reducer(model, action)
    if _has_effect(result):
        new_model, effect = result
        handler(noop if effect is None else effect)
        return new_model
    return result


def sequence(*args: Optional[Effect]) -> Effect:
    """An effect that runs the given effects in order; empty ones are dropped."""
    effects = [eff for eff in args if not _is_empty(eff)]
    if not effects:
        return noop
    if len(effects) == 1:
        return effects[0]

    def sequenced(ctx: Context) -> None:
        for eff in effects:
            eff(ctx)

    return sequenced