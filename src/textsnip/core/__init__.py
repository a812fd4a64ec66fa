# -*- coding: utf-8 -*-
"""
The Core Processing Package for TextSnip.

Everything between the trigger and the presenter that does not need a
display: the selection state machine, the snapshot and crop, the OCR
adapter and the orchestrator that sequences them. Nothing in here imports
Qt, so the whole pipeline can be exercised headless.
"""

from .errors import CaptureError, ConfigurationError, OcrEngineError, TextSnipError
from .geometry import Rect, SelectionRectangle
from .orchestrator import CaptureOrchestrator, CaptureState
from .result import Result
from .selection import OverlayState, SelectionMachine, transition

__all__ = [
    "CaptureError",
    "CaptureOrchestrator",
    "CaptureState",
    "ConfigurationError",
    "OcrEngineError",
    "OverlayState",
    "Rect",
    "Result",
    "SelectionMachine",
    "SelectionRectangle",
    "TextSnipError",
    "transition",
]
