"""Headless tour design layer.

Pure geometry, orientation formulas, the placement resolver and the tour data
model. Nothing in this package imports Qt.
"""

from .geometry import Rect, Coords, ViewportSnapshot, to_absolute_coords, mask_rect  # noqa: F401
from .orientation import (  # noqa: F401
    CardinalOrientation,
    Overflow,
    DEFAULT_ORIENTATION_ORDER,
    candidate_coords,
    compute_overflow,
    normalize_preferences,
)
from .placement import (  # noqa: F401
    PlacementRequest,
    PlacementResult,
    resolve_orientation,
    resolve_placement,
)
from .tour_definition import (  # noqa: F401
    TourOptions,
    ResolvedOptions,
    TourStep,
    TourDefinition,
    resolve_options,
    register_tour,
    get_tour,
    list_tours,
    clear_tours,
)
