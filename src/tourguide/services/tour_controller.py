"""Tour controller: step state machine feeding the placement engine.

Owns the active step index and visibility of one tour and turns every step
activation into a ``TourFrame`` (target rect, mask rect, tooltip placement)
for the rendering layer.

Collaborators are injected as callables so the controller runs headless:

* ``locate(selector) -> Rect`` – viewport-relative target rect, raises
  ``TargetNotFoundError``
* ``viewport() -> ViewportSnapshot``
* ``measure(step_index) -> Rect | None`` – tooltip size for the step, ``None``
  while not yet measured

Ordering
--------
``go_to_step`` publishes ``STEP_CHANGED`` *before* refreshing, giving the
overlay a chance to build and measure the tooltip for the new step so that
measurement happens-before placement. A missing target aborts the refresh:
``TARGET_MISSING`` is published and the error is re-raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..design.geometry import Rect, ViewportSnapshot, mask_rect
from ..design.placement import PlacementRequest, PlacementResult, resolve_orientation
from ..design.reduced_motion import effective_transition_ms
from ..design.tour_definition import ResolvedOptions, TourDefinition, TourStep, resolve_options
from .event_bus import EventBus, StepChange, TargetMissing, TourEvent, TourNotice
from .target_locator import TargetNotFoundError

__all__ = ["TourFrame", "TourLogic", "TourController"]

_log = logging.getLogger(__name__)

Locator = Callable[[str], Rect]
ViewportProvider = Callable[[], ViewportSnapshot]
TooltipMeasure = Callable[[int], Optional[Rect]]


@dataclass(frozen=True)
class TourFrame:
    """Everything the overlay needs to paint one step.

    ``target`` and ``mask`` are viewport-relative; ``placement.coords`` is
    page-absolute. ``placement`` is ``None`` while the tooltip is unmeasured.
    """

    step_index: int
    step: TourStep
    options: ResolvedOptions
    target: Rect
    mask: Rect
    placement: Optional[PlacementResult]
    transition_ms: int


@dataclass(frozen=True)
class TourLogic:
    """Navigation handle passed to custom tooltip renderers."""

    next: Callable[[], None]
    prev: Callable[[], None]
    close: Callable[[], None]
    go_to_step: Callable[[int], None]
    step: TourStep
    step_index: int
    step_count: int


class TourController:
    def __init__(
        self,
        tour: TourDefinition,
        *,
        locate: Locator,
        viewport: ViewportProvider,
        measure: Optional[TooltipMeasure] = None,
        event_bus: Optional[EventBus] = None,
        initial_step_index: int = 0,
        visible: bool = True,
    ) -> None:
        if not tour.steps:
            raise ValueError(f"Tour {tour.id} has no steps")
        if not 0 <= initial_step_index < len(tour.steps):
            raise ValueError(
                f"initial_step_index {initial_step_index} out of range for {len(tour.steps)} steps"
            )
        self._tour = tour
        self._locate = locate
        self._viewport = viewport
        self._measure = measure or (lambda _index: None)
        self._bus = event_bus or EventBus()
        self._index = initial_step_index
        self._visible = visible
        self._frame: Optional[TourFrame] = None

    # State ------------------------------------------------------------
    @property
    def tour(self) -> TourDefinition:
        return self._tour

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> TourStep:
        return self._tour.steps[self._index]

    @property
    def step_count(self) -> int:
        return len(self._tour.steps)

    @property
    def is_first_step(self) -> bool:
        return self._index == 0

    @property
    def is_last_step(self) -> bool:
        return self._index + 1 == len(self._tour.steps)

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def frame(self) -> Optional[TourFrame]:
        return self._frame

    def current_options(self) -> ResolvedOptions:
        return resolve_options(self._tour.options, self.current_step.options)

    @property
    def logic(self) -> TourLogic:
        return TourLogic(
            next=self.next,
            prev=self.prev,
            close=self.skip,
            go_to_step=self.go_to_step,
            step=self.current_step,
            step_index=self._index,
            step_count=self.step_count,
        )

    # Navigation -------------------------------------------------------
    def show(self) -> Optional[TourFrame]:
        self._visible = True
        self._bus.publish(TourEvent.TOUR_SHOWN, TourNotice(self._tour.id))
        self._publish_step_changed()
        return self.refresh()

    def go_to_step(self, step_index: int) -> None:
        if step_index < 0 or step_index >= len(self._tour.steps):
            return
        self._index = step_index
        if not self._visible:
            return
        self._publish_step_changed()
        self.refresh()

    def next(self) -> None:
        self.go_to_step(self._index + 1)

    def prev(self) -> None:
        self.go_to_step(self._index - 1)

    def skip(self) -> None:
        """Close the tour and rewind it to the first step."""
        self._index = 0
        self._visible = False
        self._frame = None
        self._bus.publish(TourEvent.TOUR_CLOSED, TourNotice(self._tour.id))

    close = skip

    def _publish_step_changed(self) -> None:
        self._bus.publish(
            TourEvent.STEP_CHANGED, StepChange(self._tour.id, self._index, self.current_step)
        )

    def handle_key(self, key: str) -> bool:
        """Dispatch a navigation key name; returns True when consumed."""
        if key == "Escape":
            self.skip()
        elif key == "ArrowRight":
            self.next()
        elif key == "ArrowLeft":
            self.prev()
        else:
            return False
        return True

    # Placement --------------------------------------------------------
    def refresh(self) -> Optional[TourFrame]:
        """Recompute the frame for the active step; no-op while hidden."""
        if not self._visible:
            return None
        step = self.current_step
        options = self.current_options()
        try:
            target = self._locate(step.selector)
        except TargetNotFoundError as exc:
            self._frame = None
            self._bus.publish(
                TourEvent.TARGET_MISSING, TargetMissing(self._tour.id, self._index, exc.selector)
            )
            raise
        request = PlacementRequest(
            target=target,
            tooltip=self._measure(self._index),
            padding=options.mask_padding,
            tooltip_separation=options.tooltip_separation,
            orientation_preferences=options.orientation_preferences,
        )
        placement = resolve_orientation(request, self._viewport())
        frame = TourFrame(
            step_index=self._index,
            step=step,
            options=options,
            target=target,
            mask=mask_rect(target, options.mask_padding),
            placement=placement,
            transition_ms=effective_transition_ms(options.transition_ms),
        )
        self._frame = frame
        if placement is None:
            _log.debug("step %s: tooltip not measured yet", self._index)
        self._bus.publish(TourEvent.PLACEMENT_COMPUTED, frame)
        return frame
