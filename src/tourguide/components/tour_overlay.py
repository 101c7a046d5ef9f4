"""Spotlight tour overlay widgets.

Paints a ``TourController``'s frames on top of a live widget tree:

* ``TourMask`` darkens the page except for a rounded cutout around the target.
* ``TourTooltip`` is the card holding title, description and navigation.
* ``TourOverlay`` owns the controller, wires bus events to both widgets,
  forwards navigation keys and re-runs placement when the root resizes.

Usage::

    overlay = TourOverlay(main_window, get_tour("onboarding"))
    overlay.start()

Rendering strategy
------------------
The tooltip body is produced by a renderer object chosen per step
(``options.renderer``, else ``DefaultTooltipRenderer``). Renderers only build
widgets; they never compute geometry. ``DefaultTooltipRenderer`` accepts
optional builders replacing just the title, description or footer.

Ordering
--------
On ``STEP_CHANGED`` the tooltip body is rebuilt first, so the controller's
subsequent placement pass measures the new content. If measurement is still
unavailable the tooltip stays hidden and one retry per step is queued on the
event loop. A missing target hides mask and tooltip until a later refresh finds
it again.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from PyQt6.QtCore import QEvent, QObject, QPoint, QPropertyAnimation, QRectF, Qt, QTimer
from PyQt6.QtGui import QColor, QPainter, QPainterPath
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ..config.settings import MASK_CORNER_RADIUS, MASK_RGBA
from ..design.geometry import Rect, to_absolute_coords
from ..design.tour_definition import ResolvedOptions, TourDefinition
from ..services.event_bus import Event, EventBus, StepChange, Subscription, TourEvent
from ..services.target_locator import (
    TargetNotFoundError,
    capture_viewport,
    locate_target,
    measure_widget,
    overlay_surface,
)
from ..services.tour_controller import TourController, TourFrame, TourLogic

__all__ = [
    "TooltipRenderer",
    "DefaultTooltipRenderer",
    "CallableTooltipRenderer",
    "TourMask",
    "TourTooltip",
    "TourOverlay",
]

_log = logging.getLogger(__name__)

_KEY_NAMES = {
    Qt.Key.Key_Escape.value: "Escape",
    Qt.Key.Key_Right.value: "ArrowRight",
    Qt.Key.Key_Left.value: "ArrowLeft",
}


# Renderers -------------------------------------------------------------------
class TooltipRenderer(Protocol):
    def build(self, logic: TourLogic, options: ResolvedOptions, parent: QWidget) -> QWidget: ...


class DefaultTooltipRenderer:
    """Title, description and a skip/prev/next footer.

    Each part can be swapped with a builder: ``title_builder(title, logic)``,
    ``description_builder(description, logic)``, ``footer_builder(logic)``.
    """

    def __init__(
        self,
        *,
        title_builder: Optional[Callable[[str, TourLogic], QWidget]] = None,
        description_builder: Optional[Callable[[str, TourLogic], QWidget]] = None,
        footer_builder: Optional[Callable[[TourLogic], QWidget]] = None,
    ) -> None:
        self._title_builder = title_builder
        self._description_builder = description_builder
        self._footer_builder = footer_builder

    def build(self, logic: TourLogic, options: ResolvedOptions, parent: QWidget) -> QWidget:
        body = QWidget(parent)
        layout = QVBoxLayout(body)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)
        step = logic.step
        if self._title_builder is not None:
            layout.addWidget(self._title_builder(step.title, logic))
        else:
            title = QLabel(step.title)
            title.setObjectName("tourTitle")
            title.setWordWrap(True)
            layout.addWidget(title)
        if self._description_builder is not None:
            layout.addWidget(self._description_builder(step.description, logic))
        else:
            desc = QLabel(step.description)
            desc.setObjectName("tourDescription")
            desc.setWordWrap(True)
            layout.addWidget(desc)
        if self._footer_builder is not None:
            layout.addWidget(self._footer_builder(logic))
        else:
            layout.addWidget(self._default_footer(logic, options))
        return body

    def _default_footer(self, logic: TourLogic, options: ResolvedOptions) -> QWidget:
        footer = QWidget()
        row = QHBoxLayout(footer)
        row.setContentsMargins(0, 0, 0, 0)
        skip = QPushButton(options.skip_label)
        skip.setObjectName("tourSkipButton")
        skip.clicked.connect(lambda _=False: logic.close())  # type: ignore
        prev = QPushButton(options.prev_label)
        prev.setObjectName("tourPrevButton")
        prev.setEnabled(logic.step_index != 0)
        prev.clicked.connect(lambda _=False: logic.prev())  # type: ignore
        nxt = QPushButton(options.next_label)
        nxt.setObjectName("tourNextButton")
        nxt.setEnabled(logic.step_index + 1 != logic.step_count)
        nxt.clicked.connect(lambda _=False: logic.next())  # type: ignore
        row.addWidget(skip)
        row.addStretch(1)
        row.addWidget(prev)
        row.addWidget(nxt)
        return footer


class CallableTooltipRenderer:
    """Adapts ``fn(logic) -> QWidget`` to a renderer replacing the whole body."""

    def __init__(self, fn: Callable[[TourLogic], QWidget]):
        self._fn = fn

    def build(self, logic: TourLogic, options: ResolvedOptions, parent: QWidget) -> QWidget:
        return self._fn(logic)


_DEFAULT_RENDERER = DefaultTooltipRenderer()


# Widgets ---------------------------------------------------------------------
class TourMask(QWidget):
    """Darkened layer with a rounded cutout (page-absolute ``Rect``)."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("TourMask")
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._cutout: Optional[Rect] = None
        self.hide()

    @property
    def cutout(self) -> Optional[Rect]:
        return self._cutout

    def set_cutout(self, cutout: Optional[Rect]) -> None:
        self._cutout = cutout
        self.update()

    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        full = QPainterPath()
        full.addRect(QRectF(0, 0, self.width(), self.height()))
        if self._cutout is not None:
            hole = QPainterPath()
            c = self._cutout
            hole.addRoundedRect(
                QRectF(c.left, c.top, c.width, c.height), MASK_CORNER_RADIUS, MASK_CORNER_RADIUS
            )
            full = full.subtracted(hole)
        painter.fillPath(full, QColor(*MASK_RGBA))


class TourTooltip(QFrame):
    """Fixed-width tooltip card; forwards navigation keys to ``on_key``."""

    def __init__(self, parent: QWidget, on_key: Callable[[str], bool]):
        super().__init__(parent)
        self.setObjectName("TourTooltip")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._on_key = on_key
        self._content: Optional[QWidget] = None
        self._anim: Optional[QPropertyAnimation] = None
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        self.hide()

    @property
    def content(self) -> Optional[QWidget]:
        return self._content

    def set_content(self, widget: QWidget, width: int) -> None:
        layout = self.layout()
        if self._content is not None:
            layout.removeWidget(self._content)
            self._content.hide()
            # the old body may own the button whose click is being handled
            self._content.deleteLater()
        self._content = widget
        layout.addWidget(widget)
        # addWidget defers showing the child while the card is visible
        widget.show()
        self.setFixedWidth(width)
        layout.activate()
        size = measure_widget(self)
        if size is not None:
            self.resize(int(size.width), int(size.height))

    def place(self, x: int, y: int, duration_ms: int) -> None:
        if self._anim is not None:
            self._anim.stop()
            self._anim = None
        target = QPoint(x, y)
        if duration_ms <= 0 or not self.isVisible():
            self.move(target)
            return
        self._anim = QPropertyAnimation(self, b"pos", self)
        self._anim.setStartValue(self.pos())
        self._anim.setEndValue(target)
        self._anim.setDuration(duration_ms)
        self._anim.start()

    def keyPressEvent(self, event):  # type: ignore[override]
        name = _KEY_NAMES.get(event.key())
        if name is not None and self._on_key(name):
            event.accept()
            return
        super().keyPressEvent(event)


class TourOverlay(QObject):
    """Hosts mask + tooltip for ``tour`` over ``root`` and drives its controller."""

    def __init__(
        self,
        root: QWidget,
        tour: TourDefinition,
        *,
        event_bus: Optional[EventBus] = None,
        initial_step_index: int = 0,
    ) -> None:
        super().__init__(root)
        self._root = root
        self._surface = overlay_surface(root)
        self._mask = TourMask(self._surface)
        # swallows clicks on the target itself when mask interaction is disabled
        self._blocker = QWidget(self._surface)
        self._blocker.setObjectName("TourCutoutBlocker")
        self._blocker.hide()
        self._tooltip = TourTooltip(self._surface, self._handle_key)
        self._built_index: Optional[int] = None
        self._retried_index: Optional[int] = None
        self._controller = TourController(
            tour,
            locate=lambda selector: locate_target(root, selector),
            viewport=lambda: capture_viewport(root),
            measure=self._measure,
            event_bus=event_bus,
            initial_step_index=initial_step_index,
            visible=False,
        )
        bus = self._controller.event_bus
        self._subscriptions: List[Subscription] = [
            bus.subscribe(TourEvent.STEP_CHANGED, self._on_step_changed),
            bus.subscribe(TourEvent.PLACEMENT_COMPUTED, self._on_placement),
            bus.subscribe(TourEvent.TARGET_MISSING, self._on_hidden),
            bus.subscribe(TourEvent.TOUR_CLOSED, self._on_hidden),
        ]
        root.installEventFilter(self)

    # Public API --------------------------------------------------------
    @property
    def controller(self) -> TourController:
        return self._controller

    @property
    def mask(self) -> TourMask:
        return self._mask

    @property
    def tooltip(self) -> TourTooltip:
        return self._tooltip

    @property
    def blocker(self) -> QWidget:
        return self._blocker

    def start(self) -> Optional[TourFrame]:
        """Show the tour at its current step. Raises ``TargetNotFoundError``."""
        return self._controller.show()

    def close(self) -> None:
        self._controller.skip()

    def dispose(self) -> None:
        """Close the tour, detach from the bus and root, and delete the widgets."""
        if self._controller.visible:
            self._controller.skip()
        bus = self._controller.event_bus
        for sub in self._subscriptions:
            bus.unsubscribe(sub)
        self._subscriptions = []
        self._root.removeEventFilter(self)
        for widget in (self._mask, self._blocker, self._tooltip):
            widget.hide()
            widget.deleteLater()

    # Controller plumbing ----------------------------------------------
    def _measure(self, step_index: int) -> Optional[Rect]:
        if self._built_index != step_index:
            return None
        return measure_widget(self._tooltip)

    def _handle_key(self, name: str) -> bool:
        return self._controller.handle_key(name)

    def _on_step_changed(self, event: Event) -> None:
        change: StepChange = event.payload
        options = self._controller.current_options()
        renderer = options.renderer or _DEFAULT_RENDERER
        body = renderer.build(self._controller.logic, options, self._tooltip)
        self._tooltip.set_content(body, options.tooltip_width)
        self._built_index = change.index
        self._retried_index = None

    def _on_placement(self, event: Event) -> None:
        frame: TourFrame = event.payload
        viewport = capture_viewport(self._root)
        self._mask.setGeometry(self._surface.rect())
        origin = to_absolute_coords(frame.mask, True, viewport)
        cutout = Rect(top=origin.y, left=origin.x, width=frame.mask.width, height=frame.mask.height)
        self._mask.set_cutout(cutout)
        self._mask.show()
        self._mask.raise_()
        if frame.options.disable_mask_interaction:
            self._blocker.setGeometry(
                int(cutout.left), int(cutout.top), int(cutout.width), int(cutout.height)
            )
            self._blocker.show()
            self._blocker.raise_()
        else:
            self._blocker.hide()
        if frame.placement is None:
            self._tooltip.hide()
            self._queue_retry(frame.step_index)
            return
        coords = frame.placement.coords
        self._tooltip.place(round(coords.x), round(coords.y), frame.transition_ms)
        self._tooltip.show()
        self._tooltip.raise_()
        self._tooltip.setFocus()

    def _on_hidden(self, event: Event) -> None:
        self._hide_all()

    def _hide_all(self) -> None:
        self._mask.hide()
        self._mask.set_cutout(None)
        self._blocker.hide()
        self._tooltip.hide()

    def _queue_retry(self, step_index: int) -> None:
        if self._retried_index == step_index:
            return
        self._retried_index = step_index
        QTimer.singleShot(0, self._safe_refresh)

    def _safe_refresh(self) -> None:
        try:
            self._controller.refresh()
        except TargetNotFoundError as exc:
            # TARGET_MISSING already hid the overlay
            _log.warning("tour target lost during refresh: %s", exc)

    def eventFilter(self, watched, event):  # type: ignore[override]
        if watched is self._root and event.type() == QEvent.Type.Resize:
            if self._controller.visible:
                self._safe_refresh()
        return False
