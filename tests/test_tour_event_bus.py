from tourguide.design.tour_definition import TourStep
from tourguide.services.event_bus import EventBus, StepChange, TourEvent, TourNotice


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    def h1(e):
        order.append(("h1", e.payload.index))

    def h2(e):
        order.append(("h2", e.payload.index))

    bus.subscribe(TourEvent.STEP_CHANGED, h1)
    bus.subscribe(TourEvent.STEP_CHANGED, h2)
    step = TourStep(selector="#search", title="Search")
    evt = bus.publish(TourEvent.STEP_CHANGED, StepChange("demo", 1, step))
    assert order == [("h1", 1), ("h2", 1)]
    assert evt.name is TourEvent.STEP_CHANGED


def test_events_are_routed_by_name():
    bus = EventBus()
    shown, closed = [], []
    bus.subscribe(TourEvent.TOUR_SHOWN, lambda e: shown.append(e.payload))
    bus.subscribe(TourEvent.TOUR_CLOSED, lambda e: closed.append(e.payload))
    bus.publish(TourEvent.TOUR_CLOSED, TourNotice("demo"))
    assert shown == []
    assert closed == [TourNotice("demo")]


def test_plain_string_names_are_coerced():
    bus = EventBus()
    seen = []
    bus.subscribe("tour_shown", lambda e: seen.append(e.name))
    bus.publish(TourEvent.TOUR_SHOWN, TourNotice("demo"))
    assert seen == [TourEvent.TOUR_SHOWN]


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(TourEvent.TOUR_CLOSED, lambda e: calls.append(1))
    bus.publish(TourEvent.TOUR_CLOSED)
    bus.unsubscribe(sub)
    bus.publish(TourEvent.TOUR_CLOSED)
    assert calls == [1]
    # second unsubscribe is a no-op
    bus.unsubscribe(sub)


def test_unsubscribe_matches_by_identity():
    bus = EventBus()
    calls = []

    def handler(e):
        calls.append(1)

    first = bus.subscribe(TourEvent.TOUR_SHOWN, handler)
    bus.subscribe(TourEvent.TOUR_SHOWN, handler)
    bus.unsubscribe(first)
    bus.publish(TourEvent.TOUR_SHOWN)
    assert calls == [1]


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe(TourEvent.PLACEMENT_COMPUTED, bad)
    bus.subscribe(TourEvent.PLACEMENT_COMPUTED, lambda e: calls.append("ok"))
    bus.publish(TourEvent.PLACEMENT_COMPUTED)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)
