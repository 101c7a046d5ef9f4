"""Target lookup and viewport capture for Qt widget trees.

This is the only boundary of the placement engine that touches live widgets.
Everything it returns is a plain value (``Rect`` / ``ViewportSnapshot``) so the
resolver downstream stays pure.

Selectors
---------
A selector names one widget by ``objectName``, loosely following Qt style
sheet syntax:

* ``"#saveButton"`` or ``"saveButton"`` – any widget with that objectName
* ``"QPushButton#saveButton"`` – additionally require ``inherits("QPushButton")``

Coordinate spaces
-----------------
``locate_target`` returns a *viewport-relative* rect: relative to the visible
area of ``root`` (the scroll area's viewport widget when ``root`` is a
``QScrollArea``). ``capture_viewport`` reports the matching size and
scroll offset. ``overlay_surface`` returns the widget whose local coordinates
are *page-absolute* (the scrolled content widget, else ``root``).
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from PyQt6.QtCore import QPoint, QRect
from PyQt6.QtWidgets import QScrollArea, QWidget

from ..design.geometry import Rect, ViewportSnapshot

__all__ = [
    "TargetNotFoundError",
    "parse_selector",
    "locate_target",
    "capture_viewport",
    "overlay_surface",
    "measure_widget",
]

_log = logging.getLogger(__name__)


class TargetNotFoundError(LookupError):
    """Raised when a selector matches no widget below the tour root."""

    def __init__(self, selector: str):
        super().__init__(f'element specified by "{selector}" could not be found')
        self.selector = selector


def parse_selector(selector: str) -> Tuple[Optional[str], str]:
    """Split ``selector`` into ``(class_name | None, object_name)``."""
    text = (selector or "").strip()
    if "#" in text:
        cls, _, name = text.partition("#")
        return (cls.strip() or None), name.strip()
    return None, text


def _viewport_widget(root: QWidget) -> QWidget:
    if isinstance(root, QScrollArea):
        return root.viewport()
    return root


def locate_target(root: QWidget, selector: str) -> Rect:
    """Return the viewport-relative rect of the widget matched by ``selector``.

    Raises ``TargetNotFoundError`` when nothing below ``root`` matches. Never
    cached: callers re-run it on every step change.
    """
    cls_name, object_name = parse_selector(selector)
    if not object_name:
        raise TargetNotFoundError(selector)
    match: Optional[QWidget] = None
    for candidate in root.findChildren(QWidget, object_name):
        if cls_name is None or candidate.inherits(cls_name):
            match = candidate
            break
    if match is None:
        _log.warning("tour target %r not found under %s", selector, root.objectName() or root)
        raise TargetNotFoundError(selector)
    reference = _viewport_widget(root)
    top_left = reference.mapFromGlobal(match.mapToGlobal(QPoint(0, 0)))
    return Rect.from_qrect(QRect(top_left, match.size()))


def capture_viewport(root: QWidget) -> ViewportSnapshot:
    """Snapshot visible size and scroll offset of ``root``."""
    if isinstance(root, QScrollArea):
        vp = root.viewport()
        return ViewportSnapshot(
            width=vp.width(),
            height=vp.height(),
            scroll_x=root.horizontalScrollBar().value(),
            scroll_y=root.verticalScrollBar().value(),
        )
    return ViewportSnapshot(width=root.width(), height=root.height())


def overlay_surface(root: QWidget) -> QWidget:
    """Widget whose local coordinate system is page-absolute for ``root``."""
    if isinstance(root, QScrollArea) and root.widget() is not None:
        return root.widget()
    return root


def measure_widget(widget: Optional[QWidget]) -> Optional[Rect]:
    """Size of ``widget`` from its size hint, or ``None`` while it has no real size."""
    if widget is None:
        return None
    hint = widget.sizeHint()
    fixed = widget.minimumWidth() == widget.maximumWidth()
    width = widget.minimumWidth() if fixed else hint.width()
    height = widget.heightForWidth(width) if widget.hasHeightForWidth() else -1
    if height <= 0:
        height = hint.height()
    if width <= 0 or height <= 0:
        return None
    return Rect.from_size(width, height)
