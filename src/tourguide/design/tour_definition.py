"""Tour definition model and registry.

Headless data model for guided tours: steps anchored to widgets by selector,
presentation options, and a process-wide registry so tours can be declared at
import time and started later by id.

Options cascade
---------------
``TourOptions`` fields left as ``None`` inherit from the next level. The
effective options for a step are ``defaults <- tour options <- step options``
(later wins), resolved into a concrete ``ResolvedOptions``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Sequence

from ..config import settings
from .orientation import CardinalOrientation

__all__ = [
    "TourOptions",
    "ResolvedOptions",
    "TourStep",
    "TourDefinition",
    "resolve_options",
    "register_tour",
    "get_tour",
    "list_tours",
    "clear_tours",
]


@dataclass(frozen=True)
class TourOptions:
    mask_padding: Optional[float] = None
    tooltip_separation: Optional[float] = None
    orientation_preferences: Optional[Sequence[CardinalOrientation | str]] = None
    tooltip_width: Optional[int] = None
    transition_ms: Optional[int] = None
    disable_mask_interaction: Optional[bool] = None
    prev_label: Optional[str] = None
    next_label: Optional[str] = None
    skip_label: Optional[str] = None
    renderer: Optional[Any] = None  # TooltipRenderer (components layer)


@dataclass(frozen=True)
class ResolvedOptions:
    mask_padding: float = settings.DEFAULT_MASK_PADDING
    tooltip_separation: float = settings.DEFAULT_TOOLTIP_SEPARATION
    orientation_preferences: Optional[Sequence[CardinalOrientation | str]] = None
    tooltip_width: int = settings.DEFAULT_TOOLTIP_WIDTH
    transition_ms: int = settings.DEFAULT_TRANSITION_MS
    disable_mask_interaction: bool = False
    prev_label: str = settings.DEFAULT_PREV_LABEL
    next_label: str = settings.DEFAULT_NEXT_LABEL
    skip_label: str = settings.DEFAULT_SKIP_LABEL
    renderer: Optional[Any] = None


@dataclass(frozen=True)
class TourStep:
    selector: str
    title: str
    description: str = ""
    id: Optional[str] = None
    options: TourOptions = field(default_factory=TourOptions)


@dataclass(frozen=True)
class TourDefinition:
    id: str
    steps: Sequence[TourStep] = field(default_factory=list)
    options: TourOptions = field(default_factory=TourOptions)
    version: int = 1
    description: str = ""

    def step_ids(self) -> List[Optional[str]]:  # convenience
        return [s.id for s in self.steps]


def resolve_options(*layers: Optional[TourOptions]) -> ResolvedOptions:
    """Merge option layers over the defaults; later layers win on non-None fields."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for f in fields(layer):
            value = getattr(layer, f.name)
            if value is not None:
                merged[f.name] = value
    return ResolvedOptions(**merged)


_registry: Dict[str, TourDefinition] = {}


def register_tour(defn: TourDefinition) -> None:
    if defn.id in _registry:
        raise ValueError(f"Tour already registered: {defn.id}")
    ids = set()
    for step in defn.steps:
        if step.id is None:
            continue
        if step.id in ids:
            raise ValueError(f"Duplicate step id {step.id} in tour {defn.id}")
        ids.add(step.id)
    _registry[defn.id] = defn


def get_tour(tour_id: str) -> TourDefinition:
    return _registry[tour_id]


def list_tours() -> List[TourDefinition]:
    return list(_registry.values())


def clear_tours() -> None:
    _registry.clear()
