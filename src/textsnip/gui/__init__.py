# -*- coding: utf-8 -*-
"""
The GUI Package for TextSnip.

All PyQt6 widgets live here: the selection overlay, the result dialog and
the presenter that shows notices. The tray shell itself is in `app.py`.
"""

from .capture_overlay import CaptureOverlay
from .presenter import QtPresenter
from .results_window import ResultDialog

__all__ = [
    "CaptureOverlay",
    "QtPresenter",
    "ResultDialog",
]
