# -*- coding: utf-8 -*-
"""
src/textsnip/app.py

Tray application shell for TextSnip.

This module contains `TextSnipApp`, which owns the system tray icon, the
global hotkey listener and the Qt side of the capture pipeline (overlay,
presenter, background recognition), and `main()`, the process entry point.
The capture sequencing itself lives in `core.orchestrator`.
"""

import logging
import sys
import threading

from PyQt6.QtCore import QObject, QTimer, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QColor, QFont, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from .config import APP_NAME, Config, get_config
from .core.ocr_adapter import OcrPipelineAdapter
from .core.ocr_engine import create_engine
from .core.orchestrator import CaptureOrchestrator
from .core.snapshot import take_snapshot
from .gui.capture_overlay import CaptureOverlay
from .gui.presenter import QtPresenter
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Lets the tray menu close before the screen is grabbed.
CAPTURE_DELAY_MS = 150


def create_tray_icon() -> QIcon:
    """Draws the tray icon: a white 'A' tile on blue."""
    pixmap = QPixmap(32, 32)
    pixmap.fill(QColor(0, 0, 255))
    painter = QPainter(pixmap)
    painter.fillRect(4, 4, 24, 24, QColor(255, 255, 255))
    painter.setPen(QColor(0, 0, 255))
    painter.setFont(QFont("Arial", 16, QFont.Weight.Bold))
    painter.drawText(pixmap.rect(), Qt.AlignmentFlag.AlignCenter, "A")
    painter.end()
    return QIcon(pixmap)


class TextSnipApp(QObject):
    """
    The main application controller. Manages the tray, the hotkey and the
    Qt collaborators of the capture orchestrator.
    """
    # Emitted from the hotkey thread; delivered on the GUI thread.
    trigger_capture = pyqtSignal()
    # (Result, callback) from the recognition thread; delivered on the GUI thread.
    recognition_finished = pyqtSignal(object, object)

    def __init__(self, app: QApplication, config: Config):
        super().__init__()
        self.app = app
        self.config = config
        self.hotkey_manager = None

        self.adapter = OcrPipelineAdapter(lambda: create_engine(self.config), temp_dir=config.temp_dir)
        self.overlay = CaptureOverlay(event_sink=self._on_overlay_event, opacity=config.overlay_opacity)
        self.orchestrator = CaptureOrchestrator(
            snapshotter=take_snapshot,
            overlay=self.overlay,
            recognizer=self.adapter,
            presenter=QtPresenter(),
            run_recognition=self._run_in_background,
            min_selection_size=config.min_selection_size,
        )

        self.trigger_capture.connect(self.request_capture)
        self.recognition_finished.connect(self._deliver_recognition)

        self.setup_tray_icon()
        if config.hotkey_enabled:
            self.setup_hotkey_listener()

    def setup_tray_icon(self):
        """Creates and configures the system tray icon and its menu."""
        self.tray_icon = QSystemTrayIcon(create_tray_icon(), self)
        self.tray_icon.setToolTip(f"{APP_NAME} - Screen OCR Tool")

        menu = QMenu()
        capture_action = QAction("Capture && OCR", menu)
        capture_action.triggered.connect(self.request_capture)
        menu.addAction(capture_action)

        menu.addSeparator()

        exit_action = QAction("Exit", menu)
        exit_action.triggered.connect(self.quit_app)
        menu.addAction(exit_action)

        # Keep a reference; QSystemTrayIcon does not own the menu.
        self.tray_menu = menu
        self.tray_icon.setContextMenu(menu)
        self.tray_icon.activated.connect(self._on_tray_activated)
        self.tray_icon.show()

    def setup_hotkey_listener(self):
        """Starts the global hotkey listener."""
        # Imported here: pynput needs a display server as soon as it is imported.
        from .utils.hotkey_manager import HotkeyManager

        self.hotkey_manager = HotkeyManager(callback=self.trigger_capture.emit)
        if not self.hotkey_manager.start():
            self.hotkey_manager = None

    def _on_tray_activated(self, reason):
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.request_capture()

    def request_capture(self):
        """Starts a capture once any open menu has had time to close."""
        QTimer.singleShot(CAPTURE_DELAY_MS, self.orchestrator.start_capture)

    def _on_overlay_event(self, event):
        self.orchestrator.handle_overlay_event(event)

    def _run_in_background(self, job, on_done):
        """Runs `job` on a worker thread and calls `on_done` back on the GUI thread."""
        def worker():
            result = job()
            self.recognition_finished.emit(result, on_done)

        threading.Thread(target=worker, name="textsnip-recognition", daemon=True).start()

    def _deliver_recognition(self, result, on_done):
        on_done(result)

    def quit_app(self):
        """Stops the hotkey listener, hides the tray icon and quits."""
        logger.info(f"Quitting {APP_NAME}...")
        if self.hotkey_manager:
            self.hotkey_manager.stop()
        self.orchestrator.reset()
        self.tray_icon.hide()
        self.app.quit()


def main():
    """
    The main entry point for the TextSnip application.

    Loads the configuration, sets up logging, creates the QApplication and
    the tray controller, and runs the event loop until Exit is chosen.
    """
    config = get_config()
    setup_logging(config.log_level, config.log_dir)
    logger.info(f"Configuration loaded from {config.config_file_path}")

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    # Closing the result dialog must not end the process; only Exit does.
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.warning("No system tray detected; the icon may not be visible.")

    # Keep a reference so the controller and its tray icon stay alive.
    text_snip_app = TextSnipApp(app, config)
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
