"""Qt overlay widgets rendering tour frames."""

from __future__ import annotations

from .tour_overlay import (  # noqa: F401
    TooltipRenderer,
    DefaultTooltipRenderer,
    CallableTooltipRenderer,
    TourMask,
    TourTooltip,
    TourOverlay,
)

__all__ = [
    "TooltipRenderer",
    "DefaultTooltipRenderer",
    "CallableTooltipRenderer",
    "TourMask",
    "TourTooltip",
    "TourOverlay",
]
