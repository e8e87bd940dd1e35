def test_listeners_returns_registered_callbacks_in_order(emitter):
    def foo():
        pass

    def bar():
        pass

    emitter.on("foo", foo)
    emitter.once("foo", bar)
    assert emitter.listeners("foo") == [foo, bar]


def test_listeners_empty_when_none(emitter):
    assert emitter.listeners("foo") == []


def test_listeners_returns_a_copy(emitter):
    def foo():
        pass

    emitter.on("foo", foo)
    emitter.listeners("foo").clear()
    assert emitter.listeners("foo") == [foo]


def test_has_and_aliases(emitter):
    assert not emitter.has("foo")
    assert not emitter.has_listeners("foo")
    assert not emitter.hasListeners("foo")

    emitter.on("foo", lambda: None)
    assert emitter.has("foo")
    assert emitter.has_listeners("foo")
    assert emitter.hasListeners("foo")


def test_event_names(emitter):
    emitter.on("foo", lambda: None)
    emitter.once("bar", lambda: None)
    emitter.only("baz", lambda: None)
    assert sorted(emitter.event_names()) == ["bar", "foo"]
