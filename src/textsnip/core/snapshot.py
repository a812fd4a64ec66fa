# -*- coding: utf-8 -*-
"""
src/textsnip/core/snapshot.py

Grabs the primary display into memory at the moment selection begins.

The whole screen is captured up front, before the overlay is shown, so the
overlay's own dimming never ends up in the recognized pixels and the user
selects from a frozen frame.
"""

import logging
from dataclasses import dataclass

import cv2
import mss
import mss.exception
import numpy as np

from .errors import CaptureError

logger = logging.getLogger(__name__)

# mss keeps the union of all monitors at index 0; the primary display is 1.
PRIMARY_MONITOR_INDEX = 1


@dataclass(frozen=True)
class Snapshot:
    """
    An immutable BGR pixel grid of the primary display.

    Attributes:
        pixels: (height, width, 3) uint8 array, marked read-only.
        left, top: Position of the display in virtual-desktop coordinates.
    """
    pixels: np.ndarray
    left: int = 0
    top: int = 0

    def __post_init__(self):
        if self.pixels.ndim not in (2, 3):
            raise ValueError(f"Snapshot pixels must be 2-D or 3-D, got shape {self.pixels.shape}")
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def from_array(cls, pixels: np.ndarray, left: int = 0, top: int = 0) -> "Snapshot":
        """Wraps a copy of `pixels` so later writes to the source can't leak in."""
        return cls(pixels=np.array(pixels, copy=True), left=left, top=top)


def take_snapshot() -> Snapshot:
    """
    Captures the primary display with mss.

    Raises:
        CaptureError: If the display cannot be grabbed.
    """
    try:
        with mss.mss() as sct:
            monitor = sct.monitors[PRIMARY_MONITOR_INDEX]
            sct_img = sct.grab(monitor)
            # mss returns BGRA; OpenCV and the encoders downstream work in BGR.
            bgr = cv2.cvtColor(np.array(sct_img), cv2.COLOR_BGRA2BGR)
    except (mss.exception.ScreenShotError, IndexError) as e:
        raise CaptureError.from_exception(e, "Failed to capture the primary display") from e

    snapshot = Snapshot(pixels=bgr, left=monitor["left"], top=monitor["top"])
    logger.info(f"Snapshot taken: {snapshot.width}x{snapshot.height} at ({snapshot.left}, {snapshot.top})")
    return snapshot
