"""Synchronous event bus for tour lifecycle notifications.

The controller publishes step changes, computed placements and lookup
failures; the overlay and host code subscribe. Dispatch happens on the
publisher's thread in subscription order. A failing handler doesn't break the
publish cycle; the failure is logged and kept in ``errors``.

Payloads are typed per event:

=====================  ==================
``TOUR_SHOWN``         ``TourNotice``
``TOUR_CLOSED``        ``TourNotice``
``STEP_CHANGED``       ``StepChange``
``PLACEMENT_COMPUTED`` ``TourFrame``
``TARGET_MISSING``     ``TargetMissing``
=====================  ==================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, List

from ..design.tour_definition import TourStep

__all__ = [
    "TourEvent",
    "TourNotice",
    "StepChange",
    "TargetMissing",
    "Event",
    "EventBus",
    "Subscription",
]

_log = logging.getLogger(__name__)


class TourEvent(str, Enum):
    TOUR_SHOWN = "tour_shown"
    TOUR_CLOSED = "tour_closed"
    STEP_CHANGED = "step_changed"
    PLACEMENT_COMPUTED = "placement_computed"
    TARGET_MISSING = "target_missing"


@dataclass(frozen=True)
class TourNotice:
    tour_id: str


@dataclass(frozen=True)
class StepChange:
    tour_id: str
    index: int
    step: TourStep


@dataclass(frozen=True)
class TargetMissing:
    tour_id: str
    index: int
    selector: str


@dataclass(frozen=True)
class Event:
    name: TourEvent
    payload: Any


Handler = Callable[[Event], None]


@dataclass(eq=False)
class Subscription:
    event: TourEvent
    handler: Handler


class EventBus:
    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[TourEvent, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(self, event: TourEvent, handler: Handler) -> Subscription:
        sub = Subscription(event=TourEvent(event), handler=handler)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            if sub in bucket:
                bucket.remove(sub)

    def publish(self, event: TourEvent, payload: Any = None) -> Event:
        evt = Event(name=TourEvent(event), payload=payload)
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        for sub in subs:
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _log.exception("handler for %s failed", evt.name.value)
                self._errors.append((evt, exc))
        return evt

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
