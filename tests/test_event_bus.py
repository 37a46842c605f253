from responsive.services.event_bus import EventBus, ResponsiveEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    def h1(e):
        order.append(("h1", e.name))

    def h2(e):
        order.append(("h2", e.name))

    bus.subscribe(ResponsiveEvent.VIEWPORT_CHANGED, h1)
    bus.subscribe(ResponsiveEvent.VIEWPORT_CHANGED, h2)
    bus.publish(ResponsiveEvent.VIEWPORT_CHANGED, {"width": 375})
    assert order == [
        ("h1", ResponsiveEvent.VIEWPORT_CHANGED.value),
        ("h2", ResponsiveEvent.VIEWPORT_CHANGED.value),
    ]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(ResponsiveEvent.ORIENTATION_CHANGED, incr, once=True)
    bus.publish(ResponsiveEvent.ORIENTATION_CHANGED)
    bus.publish(ResponsiveEvent.ORIENTATION_CHANGED)
    assert count == 1
    assert bus.subscriber_count(ResponsiveEvent.ORIENTATION_CHANGED) == 0


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    sub = bus.subscribe("custom", lambda e: received.append(e.payload))
    bus.publish("custom", 1)
    bus.unsubscribe(sub)
    bus.publish("custom", 2)
    assert received == [1]
    assert not sub.active
    bus.unsubscribe(sub)  # second call is harmless


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", good)
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_cancel_removes_from_bus():
    bus = EventBus()
    received = []
    sub = bus.subscribe("custom", lambda e: received.append(e.payload))
    sub.cancel()
    bus.publish("custom", 1)
    assert received == []
    assert bus.subscriber_count("custom") == 0
    sub.cancel()  # repeat is harmless
