"""Tests for event bus."""

from poseforge.core.events import EventBus, EventType


def test_subscribe_publish():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.CAMERA_FOV_SET, lambda **kw: received.append(kw))
    bus.publish(EventType.CAMERA_FOV_SET, fov=60)
    assert received == [{"fov": 60}]


def test_unsubscribe():
    bus = EventBus()
    received = []
    handler = lambda **kw: received.append(kw)
    bus.subscribe(EventType.PARAMS_RESET, handler)
    bus.unsubscribe(EventType.PARAMS_RESET, handler)
    bus.publish(EventType.PARAMS_RESET)
    assert received == []


def test_multiple_subscribers():
    bus = EventBus()
    a, b = [], []
    bus.subscribe(EventType.AI_POSE_REQUESTED, lambda **kw: a.append(kw["prompt"]))
    bus.subscribe(EventType.AI_POSE_REQUESTED, lambda **kw: b.append(kw["prompt"]))
    bus.publish(EventType.AI_POSE_REQUESTED, prompt="wave")
    assert a == ["wave"]
    assert b == ["wave"]


def test_different_events_independent():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.PARAMS_RANDOMIZE, lambda **kw: received.append(1))
    bus.publish(EventType.PARAMS_RESET)
    assert received == []


def test_handler_may_unsubscribe_during_publish():
    bus = EventBus()
    calls = []

    def once(**kw):
        calls.append("once")
        bus.unsubscribe(EventType.NOTIFY, once)

    bus.subscribe(EventType.NOTIFY, once)
    bus.subscribe(EventType.NOTIFY, lambda **kw: calls.append("always"))
    bus.publish(EventType.NOTIFY, message="hi", error=False)
    bus.publish(EventType.NOTIFY, message="hi", error=False)
    assert calls == ["once", "always", "always"]


def test_clear():
    bus = EventBus()
    bus.subscribe(EventType.PARAMS_RESET, lambda **kw: None)
    bus.clear()
    bus.publish(EventType.PARAMS_RESET)
