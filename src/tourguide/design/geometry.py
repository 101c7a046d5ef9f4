"""Geometry primitives for tour placement.

Coordinate spaces
-----------------
Two spaces are used throughout the engine and every function states which one
it expects:

* *viewport-relative*: origin at the top-left of the visible area of the tour
  root (what a bounding-rect query returns).
* *page-absolute*: viewport-relative plus the current scroll offset. Overlay
  children that live inside the scrolled content use this space.

The current scroll offset and viewport size are never read from a live widget
here. Callers capture a ``ViewportSnapshot`` and pass it in, which keeps these
functions pure and trivially testable headless.

Public API
----------
Rect, Coords, ViewportSnapshot
to_absolute_coords(rect, round_to_int, viewport) -> Coords
mask_rect(target, padding) -> Rect
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Rect",
    "Coords",
    "ViewportSnapshot",
    "to_absolute_coords",
    "mask_rect",
]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. ``right``/``bottom`` are derived."""

    top: float
    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @classmethod
    def from_size(cls, width: float, height: float) -> "Rect":
        return cls(top=0, left=0, width=width, height=height)

    @classmethod
    def from_qrect(cls, qrect) -> "Rect":
        # QRect.right() is off by one (inclusive); use width/height instead
        return cls(top=qrect.y(), left=qrect.x(), width=qrect.width(), height=qrect.height())


@dataclass(frozen=True)
class Coords:
    x: float
    y: float


@dataclass(frozen=True)
class ViewportSnapshot:
    """Viewport size and scroll offset captured at one instant."""

    width: float
    height: float
    scroll_x: float = 0
    scroll_y: float = 0


def to_absolute_coords(rect: Rect, round_to_int: bool, viewport: ViewportSnapshot) -> Coords:
    """Convert a viewport-relative rect's top-left corner to page-absolute coords.

    ``round_to_int`` rounds to the nearest whole pixel (used for crisp mask
    edges); otherwise fractional values are preserved for tooltip alignment.
    The result is a snapshot of ``viewport`` and does not track later scrolling.
    """
    x = rect.left + viewport.scroll_x
    y = rect.top + viewport.scroll_y
    if round_to_int:
        return Coords(x=round(x), y=round(y))
    return Coords(x=x, y=y)


def mask_rect(target: Rect, padding: float) -> Rect:
    """Return ``target`` grown by ``padding`` on every side (same space as input)."""
    return Rect(
        top=target.top - padding,
        left=target.left - padding,
        width=target.width + padding * 2,
        height=target.height + padding * 2,
    )
