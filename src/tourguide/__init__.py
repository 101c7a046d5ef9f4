"""Spotlight tour public API.

Curated surface for applications embedding guided tours:

- Placement engine (headless): geometry, orientations, ``resolve_placement``
- Tour model & registry: ``TourStep``, ``TourDefinition``, ``register_tour``
- Runtime: ``TourController`` plus the Qt ``TourOverlay``

Importing this package does not create a ``QApplication``.
"""

from __future__ import annotations

from .design.geometry import Rect, Coords, ViewportSnapshot, to_absolute_coords, mask_rect  # noqa: F401
from .design.orientation import CardinalOrientation, DEFAULT_ORIENTATION_ORDER  # noqa: F401
from .design.placement import (  # noqa: F401
    PlacementRequest,
    PlacementResult,
    resolve_orientation,
    resolve_placement,
)
from .design.tour_definition import (  # noqa: F401
    TourOptions,
    TourStep,
    TourDefinition,
    register_tour,
    get_tour,
    list_tours,
    clear_tours,
)
from .services.event_bus import EventBus, TourEvent  # noqa: F401
from .services.target_locator import TargetNotFoundError, locate_target  # noqa: F401
from .services.tour_controller import TourController, TourFrame, TourLogic  # noqa: F401
from .components.tour_overlay import TourOverlay  # noqa: F401

__version__ = "0.1.0"
