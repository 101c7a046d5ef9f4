"""Headless tests for TourController (fake locator / viewport / measure)."""

from __future__ import annotations

import pytest

from tourguide.design import reduced_motion
from tourguide.design.geometry import Coords, Rect, ViewportSnapshot, mask_rect
from tourguide.design.orientation import CardinalOrientation as O
from tourguide.design.tour_definition import TourDefinition, TourOptions, TourStep
from tourguide.services.event_bus import EventBus, TargetMissing, TourEvent, TourNotice
from tourguide.services.target_locator import TargetNotFoundError
from tourguide.services.tour_controller import TourController

RECTS = {
    "#search": Rect(top=100, left=100, width=50, height=50),
    "#filters": Rect(top=300, left=400, width=120, height=30),
}


class FakePage:
    def __init__(self):
        self.lookups = []

    def locate(self, selector):
        self.lookups.append(selector)
        try:
            return RECTS[selector]
        except KeyError:
            raise TargetNotFoundError(selector) from None


def _tour(**step_opts):
    return TourDefinition(
        id="demo",
        steps=[
            TourStep(selector="#search", title="Search", options=TourOptions(**step_opts)),
            TourStep(selector="#filters", title="Filters"),
            TourStep(selector="#missing", title="Gone"),
        ],
        options=TourOptions(orientation_preferences=[O.SOUTH]),
    )


def _controller(tour=None, *, measure=None, visible=True, bus=None, page=None):
    page = page or FakePage()
    return TourController(
        tour or _tour(),
        locate=page.locate,
        viewport=lambda: ViewportSnapshot(width=1024, height=768),
        measure=measure or (lambda index: Rect.from_size(200, 80)),
        event_bus=bus,
        visible=visible,
    )


def test_show_computes_frame_for_first_step():
    ctl = _controller()
    frame = ctl.show()
    assert frame is ctl.frame
    assert frame.step_index == 0
    assert frame.target == RECTS["#search"]
    assert frame.mask == mask_rect(RECTS["#search"], 5)
    assert frame.placement.orientation is O.SOUTH
    assert frame.placement.coords == Coords(x=25, y=165)


def test_navigation_bounds_are_ignored():
    ctl = _controller()
    ctl.show()
    ctl.prev()
    assert ctl.current_index == 0
    assert ctl.is_first_step
    ctl.next()
    assert ctl.current_index == 1
    ctl.go_to_step(7)
    ctl.go_to_step(-1)
    assert ctl.current_index == 1


def test_last_step_flag():
    tour = TourDefinition(
        id="two",
        steps=[TourStep(selector="#search", title="A"), TourStep(selector="#filters", title="B")],
    )
    ctl = _controller(tour)
    ctl.show()
    assert not ctl.is_last_step
    ctl.next()
    assert ctl.is_last_step
    ctl.next()
    assert ctl.current_index == 1


def test_skip_rewinds_and_hides():
    bus = EventBus()
    closed = []
    bus.subscribe(TourEvent.TOUR_CLOSED, lambda e: closed.append(e.payload))
    ctl = _controller(bus=bus)
    ctl.show()
    ctl.next()
    ctl.skip()
    assert ctl.current_index == 0
    assert not ctl.visible
    assert ctl.frame is None
    assert closed == [TourNotice("demo")]


def test_handle_key_dispatch():
    ctl = _controller()
    ctl.show()
    assert ctl.handle_key("ArrowRight") is True
    assert ctl.current_index == 1
    assert ctl.handle_key("ArrowLeft") is True
    assert ctl.current_index == 0
    assert ctl.handle_key("Enter") is False
    assert ctl.handle_key("Escape") is True
    assert not ctl.visible


def test_missing_target_propagates_and_publishes():
    bus = EventBus()
    missing = []
    bus.subscribe(TourEvent.TARGET_MISSING, lambda e: missing.append(e.payload))
    ctl = _controller(bus=bus)
    ctl.show()
    ctl.go_to_step(1)
    with pytest.raises(TargetNotFoundError) as info:
        ctl.go_to_step(2)
    assert info.value.selector == "#missing"
    assert missing == [TargetMissing("demo", 2, "#missing")]
    assert ctl.frame is None


def test_hidden_controller_does_not_look_up_targets():
    page = FakePage()
    ctl = _controller(visible=False, page=page)
    assert ctl.refresh() is None
    ctl.go_to_step(1)
    assert page.lookups == []
    assert ctl.current_index == 1


def test_unmeasured_tooltip_yields_frame_without_placement():
    ctl = _controller(measure=lambda index: None)
    frame = ctl.show()
    assert frame.placement is None
    assert frame.mask == mask_rect(RECTS["#search"], 5)


def test_step_options_drive_request():
    ctl = _controller(_tour(mask_padding=0, orientation_preferences=["north"]))
    frame = ctl.show()
    assert frame.mask == RECTS["#search"]
    assert frame.placement.orientation is O.NORTH
    assert frame.placement.coords == Coords(x=25, y=10)


def test_step_changed_precedes_placement():
    bus = EventBus()
    seen = []
    bus.subscribe(TourEvent.STEP_CHANGED, lambda e: seen.append(e.name))
    bus.subscribe(TourEvent.PLACEMENT_COMPUTED, lambda e: seen.append(e.name))
    ctl = _controller(bus=bus)
    ctl.show()
    ctl.next()
    assert seen == ["step_changed", "placement_computed"] * 2


def test_measure_called_with_active_index():
    calls = []

    def measure(index):
        calls.append(index)
        return Rect.from_size(100, 40)

    ctl = _controller(measure=measure)
    ctl.show()
    ctl.next()
    assert calls == [0, 1]


def test_transition_respects_reduced_motion():
    ctl = _controller(_tour(transition_ms=300))
    assert ctl.show().transition_ms == 300
    with reduced_motion.temporarily_reduced_motion(True):
        assert ctl.refresh().transition_ms == 0


def test_logic_handle_navigates():
    ctl = _controller()
    ctl.show()
    logic = ctl.logic
    assert logic.step.title == "Search"
    assert (logic.step_index, logic.step_count) == (0, 3)
    logic.next()
    assert ctl.current_index == 1
    logic.close()
    assert not ctl.visible


def test_invalid_construction():
    with pytest.raises(ValueError):
        _controller(TourDefinition(id="empty", steps=[]))
    with pytest.raises(ValueError):
        TourController(
            _tour(),
            locate=FakePage().locate,
            viewport=lambda: ViewportSnapshot(width=1, height=1),
            initial_step_index=3,
        )
