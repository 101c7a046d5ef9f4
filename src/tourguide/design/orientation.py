"""Tooltip orientations and their placement formulas.

Each ``CardinalOrientation`` member owns exactly one placement function,
registered in ``_PLACEMENTS``. Adding an orientation means adding a member and
one function; the resolver in ``placement`` never branches on specific members.

All formulas take the *viewport-relative* target rect and return the
viewport-relative top-left corner of the tooltip. The mask edge is the target
edge pushed out by ``padding``; the tooltip sits ``separation`` beyond it.

Naming: the first word is the side of the target the tooltip sits on, the
optional second word is the edge the tooltip aligns with. ``north-east`` sits
above the target with right edges aligned; ``east-north`` sits to the right
with top edges aligned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .geometry import Coords, Rect, ViewportSnapshot

__all__ = [
    "CardinalOrientation",
    "Overflow",
    "DEFAULT_ORIENTATION_ORDER",
    "candidate_coords",
    "compute_overflow",
    "normalize_preferences",
]


class CardinalOrientation(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTH_EAST = "north-east"
    NORTH_WEST = "north-west"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"
    EAST_NORTH = "east-north"
    EAST_SOUTH = "east-south"
    WEST_NORTH = "west-north"
    WEST_SOUTH = "west-south"


DEFAULT_ORIENTATION_ORDER: Tuple[CardinalOrientation, ...] = (
    CardinalOrientation.EAST,
    CardinalOrientation.SOUTH,
    CardinalOrientation.WEST,
    CardinalOrientation.NORTH,
    CardinalOrientation.EAST_NORTH,
    CardinalOrientation.EAST_SOUTH,
    CardinalOrientation.SOUTH_EAST,
    CardinalOrientation.SOUTH_WEST,
    CardinalOrientation.WEST_NORTH,
    CardinalOrientation.WEST_SOUTH,
    CardinalOrientation.NORTH_EAST,
    CardinalOrientation.NORTH_WEST,
)


@dataclass(frozen=True)
class Overflow:
    """Distance the tooltip crosses each viewport edge; <= 0 means inside."""

    top: float
    right: float
    bottom: float
    left: float

    @property
    def fits(self) -> bool:
        return self.top <= 0 and self.right <= 0 and self.bottom <= 0 and self.left <= 0


PlacementFn = Callable[[Rect, Rect, float, float], Coords]


# Horizontal / vertical anchors --------------------------------------------
def _centered_x(t: Rect, tip: Rect) -> float:
    return t.left + t.width / 2 - tip.width / 2


def _centered_y(t: Rect, tip: Rect) -> float:
    return t.top + t.height / 2 - tip.height / 2


def _above(t: Rect, tip: Rect, pad: float, sep: float) -> float:
    return t.top - pad - sep - tip.height


def _below(t: Rect, tip: Rect, pad: float, sep: float) -> float:
    return t.bottom + pad + sep


def _right_of(t: Rect, tip: Rect, pad: float, sep: float) -> float:
    return t.right + pad + sep


def _left_of(t: Rect, tip: Rect, pad: float, sep: float) -> float:
    return t.left - pad - sep - tip.width


# Placement functions -------------------------------------------------------
def _north(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_centered_x(t, tip), y=_above(t, tip, pad, sep))


def _south(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_centered_x(t, tip), y=_below(t, tip, pad, sep))


def _east(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_right_of(t, tip, pad, sep), y=_centered_y(t, tip))


def _west(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_left_of(t, tip, pad, sep), y=_centered_y(t, tip))


def _north_east(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=t.right + pad - tip.width, y=_above(t, tip, pad, sep))


def _north_west(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=t.left - pad, y=_above(t, tip, pad, sep))


def _south_east(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=t.right + pad - tip.width, y=_below(t, tip, pad, sep))


def _south_west(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=t.left - pad, y=_below(t, tip, pad, sep))


def _east_north(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_right_of(t, tip, pad, sep), y=t.top - pad)


def _east_south(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_right_of(t, tip, pad, sep), y=t.bottom + pad - tip.height)


def _west_north(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_left_of(t, tip, pad, sep), y=t.top - pad)


def _west_south(t: Rect, tip: Rect, pad: float, sep: float) -> Coords:
    return Coords(x=_left_of(t, tip, pad, sep), y=t.bottom + pad - tip.height)


_PLACEMENTS: Dict[CardinalOrientation, PlacementFn] = {
    CardinalOrientation.NORTH: _north,
    CardinalOrientation.SOUTH: _south,
    CardinalOrientation.EAST: _east,
    CardinalOrientation.WEST: _west,
    CardinalOrientation.NORTH_EAST: _north_east,
    CardinalOrientation.NORTH_WEST: _north_west,
    CardinalOrientation.SOUTH_EAST: _south_east,
    CardinalOrientation.SOUTH_WEST: _south_west,
    CardinalOrientation.EAST_NORTH: _east_north,
    CardinalOrientation.EAST_SOUTH: _east_south,
    CardinalOrientation.WEST_NORTH: _west_north,
    CardinalOrientation.WEST_SOUTH: _west_south,
}


def candidate_coords(
    orientation: CardinalOrientation,
    target: Rect,
    tooltip: Rect,
    padding: float,
    separation: float,
) -> Coords:
    """Viewport-relative top-left of ``tooltip`` placed at ``orientation``."""
    return _PLACEMENTS[orientation](target, tooltip, padding, separation)


def compute_overflow(coords: Coords, tooltip: Rect, viewport: ViewportSnapshot) -> Overflow:
    """Overflow of a tooltip at viewport-relative ``coords`` against ``viewport``."""
    return Overflow(
        top=-coords.y,
        right=coords.x + tooltip.width - viewport.width,
        bottom=coords.y + tooltip.height - viewport.height,
        left=-coords.x,
    )


def normalize_preferences(
    preferences: Optional[Iterable[CardinalOrientation | str]],
) -> List[CardinalOrientation]:
    """Coerce ``preferences`` to enum members; empty/None yields the default order.

    Raises ``ValueError`` for unknown orientation names.
    """
    if not preferences:
        return list(DEFAULT_ORIENTATION_ORDER)
    out: List[CardinalOrientation] = []
    for pref in preferences:
        try:
            out.append(CardinalOrientation(pref))
        except ValueError:
            raise ValueError(f"Unknown orientation: {pref!r}") from None
    return out or list(DEFAULT_ORIENTATION_ORDER)
