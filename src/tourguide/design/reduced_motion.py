"""Reduced motion preference for tour transitions.

The engine does not animate anything itself; it only hands the rendering layer
a declared transition duration. This module decides whether that duration is
honoured or collapsed to zero (users who prefer reduced motion, headless test
runs).

- Global module state with a plain setter/getter.
- Environment bootstrap: ``TOURGUIDE_PREFER_REDUCED_MOTION=1`` (or
  true/yes/on, case-insensitive) enables reduced motion at import time.
- ``effective_transition_ms(ms)`` returns ``ms`` (clamped to >= 0) normally
  and 0 when reduced motion is on.
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

__all__ = [
    "set_reduced_motion",
    "is_reduced_motion",
    "effective_transition_ms",
    "temporarily_reduced_motion",
]

_reduced_motion_enabled: bool = (
    os.getenv("TOURGUIDE_PREFER_REDUCED_MOTION", "").strip().lower() in {"1", "true", "yes", "on"}
)


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion_enabled
    _reduced_motion_enabled = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion_enabled


def effective_transition_ms(ms: int) -> int:
    if _reduced_motion_enabled:
        return 0
    return max(0, int(ms))


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Force reduced motion on (or off with ``force=False``) inside the block."""
    prev = _reduced_motion_enabled
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)
