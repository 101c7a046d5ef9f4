"""Tooltip placement resolver.

Picks one orientation for the tooltip of the active tour step.

Algorithm
---------
1. No tooltip measurement yet -> ``None`` (the overlay keeps the tooltip
   hidden instead of flashing it at a wrong position).
2. Walk the preference list (or ``DEFAULT_ORIENTATION_ORDER``) in order. For
   each orientation compute the viewport-relative top-left and the overflow on
   all four viewport edges. The first orientation with no positive overflow
   wins (first-fit, not best margin).
3. Nothing fits -> use the first preference anyway. A visible tooltip that
   crosses the viewport edge beats no tooltip at all.

The winning coordinates are converted to page-absolute space with the scroll
offset from the supplied ``ViewportSnapshot``. Inputs are never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .geometry import Coords, Rect, ViewportSnapshot, to_absolute_coords
from .orientation import (
    CardinalOrientation,
    candidate_coords,
    compute_overflow,
    normalize_preferences,
)
from ..config.settings import DEFAULT_MASK_PADDING, DEFAULT_TOOLTIP_SEPARATION

__all__ = [
    "PlacementRequest",
    "PlacementResult",
    "resolve_orientation",
    "resolve_placement",
]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementRequest:
    """Input to the resolver, built fresh on every step activation.

    ``target`` is viewport-relative. ``tooltip`` only contributes its size and
    is ``None`` until the tooltip widget has been measured.
    """

    target: Rect
    tooltip: Optional[Rect]
    padding: float = DEFAULT_MASK_PADDING
    tooltip_separation: float = DEFAULT_TOOLTIP_SEPARATION
    orientation_preferences: Optional[Sequence[CardinalOrientation | str]] = None
    _order: Tuple[CardinalOrientation, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0 (got {self.padding})")
        if self.tooltip_separation < 0:
            raise ValueError(f"tooltip_separation must be >= 0 (got {self.tooltip_separation})")
        object.__setattr__(
            self, "_order", tuple(normalize_preferences(self.orientation_preferences))
        )

    @property
    def orientations(self) -> Tuple[CardinalOrientation, ...]:
        """Effective try-order (defaults applied, names coerced)."""
        return self._order


@dataclass(frozen=True)
class PlacementResult:
    orientation: CardinalOrientation
    coords: Coords  # page-absolute
    fits: bool


def resolve_orientation(
    request: PlacementRequest, viewport: ViewportSnapshot
) -> Optional[PlacementResult]:
    """Return the chosen orientation and page-absolute coords, or ``None``.

    ``fits`` is False when no orientation fit and the first preference was
    used as fallback.
    """
    tooltip = request.tooltip
    if tooltip is None:
        return None
    order = request.orientations
    for orientation in order:
        local = candidate_coords(
            orientation, request.target, tooltip, request.padding, request.tooltip_separation
        )
        if compute_overflow(local, tooltip, viewport).fits:
            _log.debug("tooltip placed %s at (%s, %s)", orientation.value, local.x, local.y)
            return PlacementResult(
                orientation=orientation,
                coords=_to_page(local, tooltip, viewport),
                fits=True,
            )
    fallback = order[0]
    local = candidate_coords(
        fallback, request.target, tooltip, request.padding, request.tooltip_separation
    )
    _log.info(
        "no orientation fits %sx%s viewport; falling back to %s",
        viewport.width,
        viewport.height,
        fallback.value,
    )
    return PlacementResult(orientation=fallback, coords=_to_page(local, tooltip, viewport), fits=False)


def resolve_placement(request: PlacementRequest, viewport: ViewportSnapshot) -> Optional[Coords]:
    """Page-absolute tooltip top-left for ``request``; ``None`` while unmeasured."""
    result = resolve_orientation(request, viewport)
    return result.coords if result is not None else None


def _to_page(local: Coords, tooltip: Rect, viewport: ViewportSnapshot) -> Coords:
    rect = Rect(top=local.y, left=local.x, width=tooltip.width, height=tooltip.height)
    return to_absolute_coords(rect, False, viewport)
