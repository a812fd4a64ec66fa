# -*- coding: utf-8 -*-
"""
src/textsnip/core/extractor.py

Crops a finalized selection out of a snapshot.
"""

import logging
from typing import Tuple

import numpy as np

from .geometry import Rect
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


def clamp_rect(rect: Rect, width: int, height: int) -> Rect:
    """Clamps `rect` to a `width` x `height` grid; the result may be empty."""
    left = min(max(rect.x, 0), width)
    top = min(max(rect.y, 0), height)
    right = min(max(rect.right, left), width)
    bottom = min(max(rect.bottom, top), height)
    return Rect(left, top, right - left, bottom - top)


def to_snapshot_pixels(rect: Rect, surface_size: Tuple[int, int], snapshot: Snapshot) -> Rect:
    """
    Maps a rectangle in overlay coordinates onto snapshot pixels.

    On a scaled display the overlay works in logical units while the
    snapshot holds physical pixels, e.g. a 1920x1080 overlay over a
    3840x2160 snapshot at 200%. Edges are scaled independently per axis and
    rounded, so at integer ratios the mapping is exact.
    """
    surface_width, surface_height = surface_size
    if surface_width <= 0 or surface_height <= 0:
        return rect
    if (surface_width, surface_height) == (snapshot.width, snapshot.height):
        return rect

    scale_x = snapshot.width / surface_width
    scale_y = snapshot.height / surface_height
    left = int(round(rect.x * scale_x))
    top = int(round(rect.y * scale_y))
    right = int(round(rect.right * scale_x))
    bottom = int(round(rect.bottom * scale_y))
    mapped = Rect(left, top, right - left, bottom - top)
    logger.debug(f"Selection {rect.as_tuple()} mapped to {mapped.as_tuple()} "
                 f"(scale {scale_x:.2f} x {scale_y:.2f})")
    return mapped


def crop(snapshot: Snapshot, rect: Rect) -> np.ndarray:
    """
    Returns a new image holding exactly the pixels of `snapshot` under `rect`.

    The rectangle is clamped to the snapshot first. A selection that needs
    clamping means the overlay and the snapshot disagree about the display
    size, which is logged but not treated as an error.
    """
    clamped = clamp_rect(rect, snapshot.width, snapshot.height)
    if clamped != rect:
        logger.warning(f"Selection {rect.as_tuple()} clamped to {clamped.as_tuple()} "
                       f"for a {snapshot.width}x{snapshot.height} snapshot")

    region = snapshot.pixels[clamped.y:clamped.bottom, clamped.x:clamped.right]
    # Copy so the crop owns its memory and is writable, independent of the snapshot.
    return np.ascontiguousarray(region).copy()
