# -*- coding: utf-8 -*-
"""
src/textsnip/gui/capture_overlay.py

Defines the CaptureOverlay widget for the selection step.

This module provides a PyQt6 QWidget that creates a borderless, full-screen,
semi-transparent window over the primary display. It does not decide
anything itself: mouse and key events are translated into selection events
and handed to `event_sink`, and the orchestrator calls back into `show()`,
`render()` and `hide()` with what to display.
"""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QPoint, QRect, Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QFontMetrics, QPainter, QPen
from PyQt6.QtWidgets import QApplication, QWidget

from ..core.selection import Cancel, Event, Move, Press, Redraw, Release

logger = logging.getLogger(__name__)

OUTLINE_COLOR = QColor(255, 0, 0)
OUTLINE_WIDTH = 2
LABEL_COLOR = QColor(255, 255, 0)
LABEL_FONT = QFont("Arial", 12)


class CaptureOverlay(QWidget):
    """
    A full-screen, semi-transparent overlay for selecting a screen region.

    The widget is created once and reused for every capture; `show()` re-reads
    the primary screen geometry each time.
    """

    def __init__(self, event_sink: Callable[[Event], None], opacity: float = 0.3):
        """
        Args:
            event_sink: Receives every selection event this widget produces.
            opacity (float): Opacity of the dark fill, 0 to 1.
        """
        super().__init__()
        self.event_sink = event_sink
        self.fill_color = QColor(0, 0, 0, int(round(255 * opacity)))
        self.redraw: Optional[Redraw] = None

        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |
            Qt.WindowType.WindowStaysOnTopHint |
            Qt.WindowType.Tool  # Prevents it from appearing in the taskbar
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # --- Surface operations called by the orchestrator ---

    def show(self):
        screen = QApplication.primaryScreen()
        if screen is None:
            logger.error("No primary screen found; overlay falls back to 800x600.")
            self.setGeometry(0, 0, 800, 600)
        else:
            self.setGeometry(screen.geometry())
        self.redraw = None
        super().show()
        self.activateWindow()
        self.raise_()
        self.setFocus()
        logger.debug("CaptureOverlay shown and activated.")

    def render(self, redraw: Redraw):
        self.redraw = redraw
        self.update()

    def hide(self):
        self.redraw = None
        super().hide()

    def surface_size(self):
        # Logical units, like event.position(); the snapshot may be larger on scaled displays.
        return self.width(), self.height()

    # --- Painting ---

    def paintEvent(self, event):
        """Draws the semi-transparent overlay, the selection and its size label."""
        painter = QPainter(self)
        painter.fillRect(self.rect(), QBrush(self.fill_color))

        if self.redraw is None or self.redraw.rect.width == 0 or self.redraw.rect.height == 0:
            return

        x, y, width, height = self.redraw.rect
        selection_rect = QRect(x, y, width, height)

        # Clear the area inside the selection so the content under it shows undimmed
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
        painter.fillRect(selection_rect, Qt.GlobalColor.transparent)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

        painter.setPen(QPen(OUTLINE_COLOR, OUTLINE_WIDTH, Qt.PenStyle.SolidLine))
        painter.drawRect(selection_rect)

        # label_pos is the label's top-left; drawText wants the baseline
        painter.setFont(LABEL_FONT)
        painter.setPen(LABEL_COLOR)
        ascent = QFontMetrics(LABEL_FONT).ascent()
        label_x, label_y = self.redraw.label_pos
        painter.drawText(QPoint(label_x, label_y + ascent), self.redraw.label)

    # --- Input translation ---

    def mousePressEvent(self, event):
        pos = event.position().toPoint()
        self.event_sink(Press(pos.x(), pos.y(), primary=event.button() == Qt.MouseButton.LeftButton))

    def mouseMoveEvent(self, event):
        pos = event.position().toPoint()
        self.event_sink(Move(pos.x(), pos.y()))

    def mouseReleaseEvent(self, event):
        pos = event.position().toPoint()
        self.event_sink(Release(pos.x(), pos.y(), primary=event.button() == Qt.MouseButton.LeftButton))

    def keyPressEvent(self, event):
        """Allows the user to cancel the capture with the Escape key."""
        if event.key() == Qt.Key.Key_Escape:
            logger.info("Capture cancelled by user (Escape key).")
            self.event_sink(Cancel())
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        # Closed by the window manager: treat it like Escape and keep the widget.
        event.ignore()
        self.event_sink(Cancel())
