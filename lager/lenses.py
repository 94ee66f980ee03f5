"""Functional lenses for reading and updating parts of immutable values."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable

Lens = Callable[[Callable[[Any], Any]], Callable[[Any], Any]]


class _Functor:
    """Carrier for a focused value: constant when viewing, mapping when updating."""

    __slots__ = ("value", "const")

    def __init__(self, value: Any, const: bool) -> None:
        self.value = value
        self.const = const

    def __call__(self, fn: Callable[[Any], Any]) -> _Functor:
        if self.const:
            return self
        return _Functor(fn(self.value), False)


def view(lens: Lens, whole: Any) -> Any:
    """Return the part of ``whole`` that ``lens`` focuses on."""
    return lens(lambda v: _Functor(v, True))(whole).value


def set_(lens: Lens, whole: Any, value: Any) -> Any:
    """Return a copy of ``whole`` with the focused part replaced by ``value``."""
    return lens(lambda _: _Functor(value, False))(whole).value


def over(lens: Lens, whole: Any, fn: Callable[[Any], Any]) -> Any:
    """Return a copy of ``whole`` with ``fn`` applied to the focused part."""
    return lens(lambda v: _Functor(fn(v), False))(whole).value


def comp(*args: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Compose functions right to left; composing lenses focuses left to right."""

    def composed(x: Any) -> Any:
        for fn in reversed(args):
            x = fn(x)
        return x

    return composed


def getset(getter: Callable[[Any], Any], setter: Callable[[Any, Any], Any]) -> Lens:
    """Build a lens from a getter and a setter returning an updated copy."""

    def lens(f: Callable[[Any], Any]) -> Callable[[Any], Any]:
        def run(p: Any) -> Any:
            return f(getter(p))(lambda x: setter(p, x))

        return run

    return lens


def _with_attr(p: Any, name: str, x: Any) -> Any:
    if hasattr(p, "_replace"):
        return p._replace(**{name: x})
    r = copy.copy(p)
    object.__setattr__(r, name, x)
    return r


def attr(name: str) -> Lens:
    """Lens on the attribute ``name`` of an object."""
    return getset(lambda p: getattr(p, name), lambda p, x: _with_attr(p, name, x))


def at(key: Any) -> Lens:
    """Lens on ``key`` of a container; missing keys read as None and ignore writes."""

    def getter(p: Any) -> Any:
        try:
            return p[key]
        except LookupError:
            return None

    def setter(p: Any, x: Any) -> Any:
        try:
            p[key]
        except LookupError:
            return p
        r = copy.copy(p)
        r[key] = x
        return r

    return getset(getter, setter)


def at_i(index: int) -> Lens:
    """Lens on position ``index`` of an immutable sequence."""

    def in_range(p: Any) -> bool:
        return 0 <= index < len(p)

    def getter(p: Any) -> Any:
        return p[index] if in_range(p) else None

    def setter(p: Any, x: Any) -> Any:
        if not in_range(p):
            return p
        if hasattr(p, "set"):
            return p.set(index, x)
        if isinstance(p, tuple):
            return p[:index] + (x,) + p[index + 1 :]
        r = list(p)
        r[index] = x
        return type(p)(r)

    return getset(getter, setter)


def make_lens(key: Any, container_type: type) -> Lens:
    """Choose a fitting lens for ``key`` inside values of ``container_type``."""
    if issubclass(container_type, tuple) and not hasattr(container_type, "_fields"):
        return at_i(key)
    if isinstance(key, str) and not issubclass(container_type, Mapping):
        return attr(key)
    return at(key)