# -*- coding: utf-8 -*-
"""
src/textsnip/core/geometry.py

Plain geometry types for the selection rectangle.

Coordinates are overlay-local. The overlay spans the whole primary display,
so overlay-local coordinates equal snapshot pixel coordinates.
"""

from dataclasses import dataclass
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    x: int
    y: int


class Rect(NamedTuple):
    """An axis-aligned rectangle with non-negative width and height."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_larger_than(self, min_size: int) -> bool:
        """True when both dimensions are strictly greater than `min_size`."""
        return self.width > min_size and self.height > min_size

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class SelectionRectangle:
    """
    The two corners of a drag: where the button went down and where the
    pointer is now. Normalization is done on demand so the raw corners are
    kept intact while dragging back past the anchor.
    """
    anchor: Point
    current: Point

    @classmethod
    def at(cls, x: int, y: int) -> "SelectionRectangle":
        point = Point(x, y)
        return cls(anchor=point, current=point)

    def moved_to(self, x: int, y: int) -> "SelectionRectangle":
        return SelectionRectangle(anchor=self.anchor, current=Point(x, y))

    def normalized(self) -> Rect:
        ax, ay = self.anchor
        cx, cy = self.current
        return Rect(min(ax, cx), min(ay, cy), abs(cx - ax), abs(cy - ay))


def size_label(rect: Rect) -> str:
    """The live dimension label drawn next to the selection."""
    return f"{rect.width} × {rect.height}"
