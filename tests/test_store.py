from collections import deque

from lager.commit import commit
from lager.context import Context
from lager.store import Store, make_store, with_deps


class ManualLoop:
    def __init__(self):
        self.queue = deque()
        self.running = False
        self.paused = False

    def post(self, fn):
        self.queue.append(fn)
        self._run()

    def _run(self):
        if self.running or self.paused:
            return
        self.running = True
        try:
            while self.queue and not self.paused:
                self.queue.popleft()()
        finally:
            self.running = False

    def finish(self):
        self.queue.clear()

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False
        self._run()


class QueueLoop:
    def __init__(self):
        self.queue = deque()

    def post(self, fn):
        self.queue.append(fn)

    def run(self):
        while self.queue:
            self.queue.popleft()()


def counter(model, action):
    if action == "inc":
        return model + 1
    if action == "dec":
        return model - 1
    return 0


def test_basic_dispatch_and_watch():
    viewed = []
    store = make_store(0, counter, ManualLoop())
    store.watch(lambda old, new: viewed.append((old, new)))
    store.dispatch("inc")
    assert store.get() == 1
    assert viewed == [(0, 1)]


def test_several_actions():
    store = make_store(0, counter, ManualLoop())
    for action in ["inc", "inc", "dec", "inc"]:
        store.dispatch(action)
    assert store.get() == 2
    store.dispatch("reset")
    assert store.get() == 0


def test_unchanged_model_does_not_notify():
    viewed = []
    store = make_store(0, counter, ManualLoop())
    store.watch(lambda old, new: viewed.append(new))
    store.dispatch("reset")
    assert viewed == []


def test_actions_wait_for_the_loop():
    loop = QueueLoop()
    store = make_store(0, counter, loop)
    store.dispatch("inc")
    assert store.get() == 0
    loop.run()
    assert store.get() == 1


def test_effect_as_a_result():
    called = []
    viewed = []

    def effect(ctx):
        called.append(ctx)

    store = make_store(0, lambda m, a: (m + a, effect), ManualLoop())
    store.watch(lambda old, new: viewed.append(new))
    store.dispatch(2)
    assert viewed == [2]
    assert len(called) == 1
    assert isinstance(called[0], Context)


def test_effect_can_dispatch():
    def reducer(model, action):
        if action == "start":
            return model, lambda ctx: ctx.dispatch("inc")
        return counter(model, action)

    store = make_store(0, reducer, ManualLoop())
    store.dispatch("start")
    assert store.get() == 1


def test_effect_with_dependencies():
    class Foo:
        x = 0

    foo = Foo()
    seen = []

    def effect(ctx):
        seen.append(ctx.deps["foo"].x)

    store = make_store(0, lambda m, a: (m + a, effect), ManualLoop(), with_deps(foo=foo))
    foo.x = 42
    store.dispatch(2)
    assert seen == [42]
    assert store.deps["foo"] is foo


def test_with_deps_merges_enhancers():
    store = make_store(0, counter, ManualLoop(), with_deps(a=1), with_deps(b=2))
    assert dict(store.deps) == {"a": 1, "b": 2}


def test_effect_controls_loop():
    loop = ManualLoop()
    store = make_store(0, lambda m, a: (m + a, lambda ctx: ctx.loop.pause()), loop)
    store.dispatch(1)
    assert loop.paused
    assert store.loop is loop


def test_store_constructor_and_commit():
    store = Store(5, counter, ManualLoop(), {"k": "v"})
    assert store.get() == 5
    store.roots().push_down(7)
    commit(store)
    assert store.get() == 7
    assert store.deps["k"] == "v"


def test_disconnected_watcher_not_called():
    viewed = []
    store = make_store(0, counter, ManualLoop())
    conn = store.watch(lambda old, new: viewed.append(new))
    conn.disconnect()
    store.dispatch("inc")
    assert viewed == []
    assert store.get() == 1