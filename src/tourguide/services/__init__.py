"""Tour services: event bus, target lookup (Qt boundary) and controller."""

from .event_bus import (  # noqa: F401
    EventBus,
    TourEvent,
    Event,
    Subscription,
    TourNotice,
    StepChange,
    TargetMissing,
)
from .tour_controller import TourController, TourFrame, TourLogic  # noqa: F401
from .target_locator import (  # noqa: F401
    TargetNotFoundError,
    locate_target,
    capture_viewport,
    overlay_surface,
    measure_widget,
)
