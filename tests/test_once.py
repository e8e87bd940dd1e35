from emitter import Emitter


def test_once_fires_a_single_time(emitter, calls):
    emitter.once("foo", lambda val: calls.extend(["one", val]))

    emitter.emit("foo", 1)
    emitter.emit("foo", 2)
    emitter.emit("foo", 3)
    emitter.emit("bar", 1)

    assert calls == ["one", 1]
    assert not emitter.has("foo")


def test_once_is_removed_before_callback_runs(emitter):
    seen = []

    def handler():
        seen.append(emitter.listeners("foo"))
        emitter.emit("foo")

    emitter.once("foo", handler)
    emitter.emit("foo")
    assert seen == [[]]


def test_once_not_double_fired_by_nested_emit_from_earlier_listener(emitter, calls):
    depth = []

    def first():
        if not depth:
            depth.append(1)
            emitter.emit("foo")

    emitter.on("foo", first)
    emitter.once("foo", lambda: calls.append("once"))

    emitter.emit("foo")
    assert calls == ["once"]


def test_off_removes_once_listener_by_original_callback(emitter, calls):
    def one():
        calls.append("one")

    emitter.once("foo", one)
    emitter.once("fee", one)
    emitter.off("foo", one)

    emitter.emit("foo")
    emitter.emit("foo")
    emitter.emit("foo")
    assert calls == []

    emitter.emit("fee")
    emitter.emit("fee")
    assert calls == ["one"]


def test_listeners_reports_original_callback_for_once(emitter):
    def handler():
        pass

    emitter.once("foo", handler)
    assert emitter.listeners("foo") == [handler]


def test_once_mixed_with_on_keeps_order():
    emitter = Emitter()
    calls = []
    emitter.on("tick", lambda: calls.append("a"))
    emitter.once("tick", lambda: calls.append("b"))
    emitter.on("tick", lambda: calls.append("c"))

    emitter.emit("tick")
    emitter.emit("tick")
    assert calls == ["a", "b", "c", "a", "c"]
