"""Global defaults for tour presentation and placement."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_MASK_PADDING: Final = 5  # px reserved around the target for the cutout
DEFAULT_TOOLTIP_SEPARATION: Final = 10  # px between mask edge and tooltip
DEFAULT_TOOLTIP_WIDTH: Final = 250
DEFAULT_TRANSITION_MS: Final = int(os.environ.get("TOURGUIDE_TRANSITION_MS", "200"))

DEFAULT_PREV_LABEL: Final = "prev"
DEFAULT_NEXT_LABEL: Final = "next"
DEFAULT_SKIP_LABEL: Final = "skip"

# Darkening applied outside the cutout (RGBA) and cutout corner radius
MASK_RGBA: Final = (0, 0, 0, 153)
MASK_CORNER_RADIUS: Final = 5
