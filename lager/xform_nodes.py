"""Derived nodes whose values come from their parents through a transducer.

A transducer here is a function taking a reducing step ``step(acc, *inputs)``
and returning a new step with the same signature.  Values flowing down are
reduced into the node itself.  Values flowing up from a cursor node go back
to its parents.
"""

from __future__ import annotations

from typing import Any, Callable

from lager.nodes import CursorNode, NoValueError, ReaderNode

Step = Callable[..., Any]
Transducer = Callable[[Step], Step]

_NO_VALUE = object()


def identity(step: Step) -> Step:
    """The transducer that passes every input straight on to ``step``."""

    def passthrough(acc: Any, *inputs: Any) -> Any:
        return step(acc, *inputs)

    return passthrough


def _tuplify(inputs: tuple[Any, ...]) -> Any:
    return inputs[0] if len(inputs) == 1 else tuple(inputs)


def _last(acc: Any, *inputs: Any) -> Any:
    return _tuplify(inputs) if inputs else acc


def _send_down(node: ReaderNode[Any], *inputs: Any) -> ReaderNode[Any]:
    if inputs:
        node.push_down(_tuplify(inputs))
    return node


def _send_up(node: XformCursorNode, *inputs: Any) -> XformCursorNode:
    node.push_up(_tuplify(inputs))
    return node


class XformReaderNode(ReaderNode[Any]):
    """A node computing its value from its parents' values through ``xform``."""

    def __init__(self, xform: Transducer, *parents: ReaderNode[Any]) -> None:
        result = xform(_last)(_NO_VALUE, *(p.current for p in parents))
        if result is _NO_VALUE:
            raise NoValueError()
        super().__init__(result)
        self._parents = tuple(parents)
        self._down_step = xform(_send_down)

    @property
    def parents(self) -> tuple[ReaderNode[Any], ...]:
        return self._parents

    def recompute(self) -> None:
        """Feed the parents' current values through the transducer."""
        self._down_step(self, *(p.current for p in self._parents))

    def recompute_deep(self) -> None:
        """Recompute every ancestor first, then this node."""
        for parent in self._parents:
            parent.recompute_deep()
        self.recompute()


class XformCursorNode(XformReaderNode, CursorNode[Any]):
    """A derived node that can also send values back to its parents."""

    def __init__(
        self,
        xform: Transducer,
        set_xform: Transducer,
        *parents: CursorNode[Any],
    ) -> None:
        super().__init__(xform, *parents)
        self._up_step = set_xform(_send_up)

    def send_up(self, value: Any) -> None:
        """Pass ``value`` through the setter transducer towards the parents."""
        self._up_step(self, value)

    def push_up(self, value: Any) -> None:
        """Hand ``value`` to the parents, one component per parent if several."""
        if len(self._parents) == 1:
            self._parents[0].send_up(value)
            return
        values = tuple(value)
        if len(values) != len(self._parents):
            raise ValueError(
                f"expected {len(self._parents)} values, got {len(values)}"
            )
        for parent, component in zip(self._parents, values):
            parent.send_up(component)


def _link_to_parents(node: XformReaderNode) -> XformReaderNode:
    for parent in node.parents:
        parent.link(node)
    return node


def make_xform_reader_node(xform: Transducer, *args: ReaderNode[Any]) -> XformReaderNode:
    """Create a derived reader node and link it to its parents."""
    node = XformReaderNode(xform, *args)
    _link_to_parents(node)
    return node


def make_xform_cursor_node(
    xform: Transducer, set_xform: Transducer, *args: CursorNode[Any]
) -> XformCursorNode:
    """Create a derived cursor node and link it to its parents."""
    node = XformCursorNode(xform, set_xform, *args)
    _link_to_parents(node)
    return node