#!/usr/bin/env python3
"""
Planar Physics Primitives for the Sensor Fusion Core

Provides the small numeric vocabulary every other module builds on:
- 2D vector operations (add, subtract, scale, dot, scalar cross, rotation)
- Heading and bearing helpers working in radians
- Angle wrapping into the (-pi, pi] range

The simulation advances in fixed ticks of TICK_LENGTH seconds. All lengths are
in simulation units (metres), all angles in radians measured counter-clockwise
from the +X axis.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


# =============================================================================
# SIMULATION CONSTANTS
# =============================================================================

# Fixed duration of one simulation tick (seconds)
TICK_LENGTH = 1.0 / 60.0

# Component tolerance used by Vector2D equality
VECTOR_EPSILON = 1e-10


# =============================================================================
# ANGLE HELPERS
# =============================================================================

def normalize_angle(angle: float) -> float:
    """
    Wrap an angle into the (-pi, pi] range.

    Args:
        angle: Angle in radians, any magnitude

    Returns:
        Equivalent angle in (-pi, pi]
    """
    wrapped = math.fmod(angle, 2 * math.pi)
    if wrapped <= -math.pi:
        wrapped += 2 * math.pi
    elif wrapped > math.pi:
        wrapped -= 2 * math.pi
    return wrapped


def angle_diff(a: float, b: float) -> float:
    """
    Signed shortest rotation taking heading a onto heading b.

    Args:
        a: Starting angle in radians
        b: Target angle in radians

    Returns:
        Difference b - a wrapped into (-pi, pi]
    """
    return normalize_angle(b - a)


# =============================================================================
# VECTOR2D CLASS
# =============================================================================

@dataclass
class Vector2D:
    """
    2D vector for positions, velocities, and accelerations in the plane.

    Heading 0 points along +X, pi/2 along +Y.
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        """Vector addition."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        """Vector subtraction."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        """Scalar multiplication."""
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        """Right scalar multiplication."""
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector2D:
        """Scalar division."""
        if scalar == 0:
            raise ValueError("Cannot divide vector by zero")
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2D:
        """Negation."""
        return Vector2D(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        """Equality check with tolerance."""
        if not isinstance(other, Vector2D):
            return False
        return (abs(self.x - other.x) < VECTOR_EPSILON and
                abs(self.y - other.y) < VECTOR_EPSILON)

    def dot(self, other: Vector2D) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D) -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        return self.x * other.y - self.y * other.x

    @property
    def magnitude(self) -> float:
        """Vector magnitude (length)."""
        return math.hypot(self.x, self.y)

    @property
    def magnitude_squared(self) -> float:
        """Squared magnitude (avoids sqrt for comparisons)."""
        return self.x**2 + self.y**2

    @property
    def angle(self) -> float:
        """Heading of the vector in radians, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def normalized(self) -> Vector2D:
        """Return unit vector in same direction."""
        mag = self.magnitude
        if mag == 0:
            return Vector2D(0.0, 0.0)
        return self / mag

    def distance_to(self, other: Vector2D) -> float:
        """Distance to another point."""
        return (self - other).magnitude

    def rotated(self, angle_rad: float) -> Vector2D:
        """Rotate counter-clockwise about the origin."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector2D(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    def is_finite(self) -> bool:
        """True when neither component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: tuple[float, float]) -> Vector2D:
        """Create from tuple."""
        return cls(t[0], t[1])

    @classmethod
    def from_polar(cls, magnitude: float, angle_rad: float) -> Vector2D:
        """Create from a length and a heading."""
        return cls(magnitude * math.cos(angle_rad), magnitude * math.sin(angle_rad))

    @classmethod
    def zero(cls) -> Vector2D:
        """Zero vector."""
        return cls(0.0, 0.0)

    @classmethod
    def unit_x(cls) -> Vector2D:
        """Unit vector along +X (heading 0)."""
        return cls(1.0, 0.0)

    @classmethod
    def unit_y(cls) -> Vector2D:
        """Unit vector along +Y (heading pi/2)."""
        return cls(0.0, 1.0)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.6g}, {self.y:.6g})"
