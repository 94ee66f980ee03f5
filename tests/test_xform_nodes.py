import pytest

from lager.nodes import CursorNode, NoValueError
from lager.xform_nodes import (
    XformCursorNode,
    identity,
    make_xform_cursor_node,
    make_xform_reader_node,
)


class Root(CursorNode):
    def send_up(self, value):
        self.push_down(value)


def map_(fn):
    def xform(step):
        return lambda acc, *xs: step(acc, fn(*xs))

    return xform


def filter_(pred):
    def xform(step):
        return lambda acc, *xs: step(acc, *xs) if pred(*xs) else acc

    return xform


def double(x):
    return x * 2


def half(x):
    return x // 2


def test_initial_value_from_parent():
    root = Root(3)
    child = make_xform_reader_node(map_(double), root)
    assert child.current == double(3)
    assert child.last == double(3)


def test_identity_xform_copies_parent():
    root = Root("hello")
    child = make_xform_reader_node(identity, root)
    assert child.last == "hello"


def test_propagates_on_send_down():
    root = Root(3)
    child = make_xform_reader_node(map_(double), root)
    seen = []
    child.observe(lambda old, new: seen.append((old, new)))
    root.push_down(5)
    root.send_down()
    assert child.last == double(5)
    assert seen == []
    root.notify()
    assert seen == [(double(3), double(5))]


def test_filter_without_initial_value_raises():
    root = Root(1)
    with pytest.raises(NoValueError):
        make_xform_reader_node(filter_(lambda x: x > 10), root)


def test_filter_drops_values():
    root = Root(20)
    child = make_xform_reader_node(filter_(lambda x: x > 10), root)
    root.push_down(5)
    root.send_down()
    assert child.last == 20
    root.push_down(30)
    root.send_down()
    assert child.last == 30


def test_multiple_parents_give_tuple():
    a = Root(1)
    b = Root("x")
    child = make_xform_reader_node(identity, a, b)
    assert child.last == (1, "x")
    b.push_down("y")
    b.send_down()
    assert child.last == (1, "y")


def test_linked_as_child():
    root = Root(0)
    child = make_xform_reader_node(identity, root)
    assert root.children == (child,)


def test_recompute_deep_updates_chain():
    root = Root(2)
    mid = make_xform_reader_node(map_(double), root)
    leaf = make_xform_reader_node(map_(double), mid)
    root.push_down(4)
    leaf.recompute_deep()
    assert mid.current == double(4)
    assert leaf.current == double(double(4))


def test_cursor_send_up_reaches_root():
    root = Root(4)
    cursor = make_xform_cursor_node(map_(double), map_(half), root)
    assert cursor.last == double(4)
    cursor.send_up(double(7))
    assert root.current == 7
    root.send_down()
    assert cursor.last == double(7)


def test_cursor_push_up_to_several_parents():
    a = Root(1)
    b = Root(2)
    cursor = make_xform_cursor_node(identity, identity, a, b)
    assert isinstance(cursor, XformCursorNode)
    cursor.send_up((8, 9))
    assert a.current == 8
    assert b.current == 9


def test_cursor_push_up_wrong_arity():
    a = Root(1)
    b = Root(2)
    cursor = make_xform_cursor_node(identity, identity, a, b)
    with pytest.raises(ValueError):
        cursor.push_up((1, 2, 3))