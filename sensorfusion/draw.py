#!/usr/bin/env python3
"""
Diagnostic Drawing

Records debug geometry (lines and polylines with colours) so callers can
inspect or render what the fusion core believes about the world. Nothing
here affects fusion results.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from .physics import Vector2D


class Colour(Enum):
    """Debug colours as 0xRRGGBB."""
    WHITE = 0xFFFFFF
    RED = 0xFF0000
    GREEN = 0x00FF00
    BLUE = 0x0000FF
    YELLOW = 0xFFFF00
    TEAL = 0x00FFFF
    PURPLE = 0xFF00FF

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Colour as an (r, g, b) triple of 0-255 ints."""
        return ((self.value >> 16) & 0xFF, (self.value >> 8) & 0xFF, self.value & 0xFF)


@dataclass
class DrawnLine:
    """One recorded line segment."""
    start: Vector2D
    end: Vector2D
    colour: Colour


@dataclass
class Canvas:
    """
    Collects debug lines for one tick.

    Segments with a NaN or infinite endpoint are dropped, so degenerate
    shapes never poison a renderer.
    """
    lines: List[DrawnLine] = field(default_factory=list)

    def line(self, start: Vector2D, end: Vector2D, colour: Colour = Colour.WHITE) -> None:
        if not (start.is_finite() and end.is_finite()):
            return
        self.lines.append(DrawnLine(start, end, colour))

    def polyline(self, points: Iterable[Vector2D], colour: Colour = Colour.WHITE) -> None:
        """Draw consecutive segments through points."""
        points = list(points)
        for start, end in zip(points, points[1:]):
            self.line(start, end, colour)

    def cross(self, centre: Vector2D, size: float, colour: Colour = Colour.WHITE) -> None:
        """Mark a point with a small diagonal cross."""
        offset = size / math.sqrt(2)
        self.line(centre + Vector2D(-offset, -offset), centre + Vector2D(offset, offset), colour)
        self.line(centre + Vector2D(-offset, offset), centre + Vector2D(offset, -offset), colour)

    def lines_of(self, colour: Colour) -> List[DrawnLine]:
        """All recorded lines with the given colour."""
        return [line for line in self.lines if line.colour is colour]

    def clear(self) -> None:
        self.lines.clear()

    def __len__(self) -> int:
        return len(self.lines)
