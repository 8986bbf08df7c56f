#!/usr/bin/env python3
"""
Uncertainty Region Geometry

Implements the planar shapes used to bound where a contact could be:
- Ellipse with containment, radius-at-angle, and distance bounds
- Circle for reachable-area queries
- Outline polylines for diagnostic drawing

Ellipses are normalised at construction so width <= height; height lies
along the orientation direction. Containment is boundary-inclusive for
ellipses and strict for circles.
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Tuple

from .physics import Vector2D


# =============================================================================
# CONSTANTS
# =============================================================================

# Points used when drawing an ellipse outline
DEFAULT_BOUNDARY_POINTS = 40

# Vertices of a circle outline
CIRCLE_BOUNDARY_POINTS = 8


# =============================================================================
# SHAPE INTERFACES
# =============================================================================

class Shape(ABC):
    """Abstract region of the plane."""

    @abstractmethod
    def translate(self, vector: Vector2D) -> None:
        """Move the shape in place."""

    @abstractmethod
    def contains(self, point: Vector2D) -> bool:
        """True if point lies inside the shape."""

    @abstractmethod
    def min_distance_to(self, point: Vector2D) -> float:
        """Distance from point to the nearest edge along the centre line."""

    @abstractmethod
    def max_distance_to(self, point: Vector2D) -> float:
        """Distance from point to the farthest edge along the centre line."""

    def minmax_distance_to(self, point: Vector2D) -> Tuple[float, float]:
        """Both distance bounds as (near, far)."""
        return (self.min_distance_to(point), self.max_distance_to(point))

    @abstractmethod
    def boundary(self) -> List[Vector2D]:
        """Closed outline polyline for drawing."""


class EllipticalShape(Shape):
    """Shape with a direction-dependent radius that can be grown uniformly."""

    @abstractmethod
    def radius(self, angle: float) -> float:
        """Distance from centre to edge in the given world direction."""

    @abstractmethod
    def expand(self, amount: float) -> None:
        """Grow the shape outward by amount on every side."""


# =============================================================================
# ELLIPSE
# =============================================================================

@dataclass
class Ellipse(EllipticalShape):
    """
    Oriented ellipse.

    Attributes:
        centre: Centre point
        orientation: Direction of the major (height) axis in radians
        width: Full minor-axis length
        height: Full major-axis length
    """
    centre: Vector2D = field(default_factory=Vector2D.zero)
    orientation: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self):
        """Normalise so width <= height."""
        if self.width > self.height:
            self.width, self.height = self.height, self.width
            self.orientation += math.pi / 2

    @property
    def semi_major(self) -> float:
        """Half the height."""
        return self.height / 2

    @property
    def semi_minor(self) -> float:
        """Half the width."""
        return self.width / 2

    def translate(self, vector: Vector2D) -> None:
        self.centre = self.centre + vector

    def expand(self, amount: float) -> None:
        self.width += 2 * amount
        self.height += 2 * amount

    def radius(self, angle: float) -> float:
        """
        Polar radius of the ellipse in a world direction.

        Args:
            angle: World heading in radians

        Returns:
            a*b / sqrt(a^2 sin^2(phi) + b^2 cos^2(phi)) with phi measured from
            the orientation; the semi-major axis if the ellipse is a point
            or the direction lies along a degenerate segment
        """
        phi = angle - self.orientation
        a = self.semi_major
        b = self.semi_minor
        denominator = math.sqrt((a * math.sin(phi)) ** 2 + (b * math.cos(phi)) ** 2)
        if denominator == 0:
            return a
        return a * b / denominator

    def contains(self, point: Vector2D) -> bool:
        local = (self.centre - point).rotated(-self.orientation)
        a = self.semi_major
        b = self.semi_minor
        if a == 0 or b == 0:
            # Degenerate: a segment along the major axis, or a point
            return abs(local.y) <= b and abs(local.x) <= a
        return (local.x / a) ** 2 + (local.y / b) ** 2 <= 1.0

    def min_distance_to(self, point: Vector2D) -> float:
        centre_distance = point.distance_to(self.centre)
        return abs(centre_distance - self.radius((self.centre - point).angle))

    def max_distance_to(self, point: Vector2D) -> float:
        centre_distance = point.distance_to(self.centre)
        return centre_distance + self.radius((self.centre - point).angle)

    def minmax_distance_to(self, point: Vector2D) -> Tuple[float, float]:
        centre_distance = point.distance_to(self.centre)
        r = self.radius((self.centre - point).angle)
        return (abs(centre_distance - r), centre_distance + r)

    def boundary(self, points: int = DEFAULT_BOUNDARY_POINTS) -> List[Vector2D]:
        """
        Outline polyline, closed (first point repeated at the end).

        Args:
            points: Approximate number of vertices around the outline

        Returns:
            Vertices in world coordinates
        """
        a = self.semi_major
        b = self.semi_minor
        half = max(points // 2, 2)

        def half_height(x: float) -> float:
            if a == 0:
                return b
            return math.sqrt(max(0.0, b * b - (x * x / (a * a)) * b * b))

        xs = [-a + i * (2 * a / half) for i in range(half)] + [a]
        upper = [Vector2D(x, half_height(x)) for x in xs]
        lower = [Vector2D(p.x, -p.y) for p in reversed(upper)]
        outline = upper + lower[1:-1]
        world = [p.rotated(self.orientation) + self.centre for p in outline]
        world.append(world[0])
        return world


# =============================================================================
# CIRCLE
# =============================================================================

class Circle(EllipticalShape):
    """
    Circle with strict (open) containment.

    Attributes:
        centre: Centre point
        radius_length: Radius; radius() returns it for every direction
    """

    def __init__(self, centre: Vector2D, radius: float):
        self.centre = centre
        self.radius_length = radius

    def __repr__(self) -> str:
        return f"Circle({self.centre!r}, {self.radius_length:.6g})"

    def translate(self, vector: Vector2D) -> None:
        self.centre = self.centre + vector

    def expand(self, amount: float) -> None:
        self.radius_length += amount

    def radius(self, angle: float = 0.0) -> float:
        return self.radius_length

    def contains(self, point: Vector2D) -> bool:
        return self.centre.distance_to(point) < self.radius_length

    def min_distance_to(self, point: Vector2D) -> float:
        return abs(point.distance_to(self.centre) - self.radius_length)

    def max_distance_to(self, point: Vector2D) -> float:
        return point.distance_to(self.centre) + self.radius_length

    def boundary(self, points: int = CIRCLE_BOUNDARY_POINTS) -> List[Vector2D]:
        step = 2 * math.pi / points
        outline = [self.centre + Vector2D.from_polar(self.radius_length, i * step)
                   for i in range(points)]
        outline.append(outline[0])
        return outline
