#!/usr/bin/env python3
"""
Test Suite for Planar Physics Primitives

Tests cover:
1. Vector2D arithmetic (add, subtract, scale, divide, negate, equality tolerance)
2. Dot product, scalar cross product, magnitude, normalisation
3. Heading, rotation, polar construction
4. Angle wrapping and signed angle differences
"""

import math
import pytest

from sensorfusion.physics import (
    TICK_LENGTH,
    Vector2D,
    angle_diff,
    normalize_angle,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def unit_x():
    """Unit vector in X direction."""
    return Vector2D(1, 0)


@pytest.fixture
def unit_y():
    """Unit vector in Y direction."""
    return Vector2D(0, 1)


# =============================================================================
# VECTOR2D TESTS
# =============================================================================

class TestVector2DBasicOperations:
    """Tests for basic Vector2D arithmetic operations."""

    @pytest.mark.parametrize("v1,v2,expected", [
        ((1, 2), (4, 5), (5, 7)),
        ((0, 0), (1, 1), (1, 1)),
        ((-1, -2), (1, 2), (0, 0)),
        ((1.5, 2.5), (0.5, 0.5), (2, 3)),
    ])
    def test_vector_addition(self, v1, v2, expected):
        """Test vector addition."""
        assert Vector2D(*v1) + Vector2D(*v2) == Vector2D(*expected)

    @pytest.mark.parametrize("v1,v2,expected", [
        ((5, 7), (4, 5), (1, 2)),
        ((1, 1), (1, 1), (0, 0)),
        ((0, 0), (1, 2), (-1, -2)),
    ])
    def test_vector_subtraction(self, v1, v2, expected):
        """Test vector subtraction."""
        assert Vector2D(*v1) - Vector2D(*v2) == Vector2D(*expected)

    @pytest.mark.parametrize("v,scalar,expected", [
        ((1, 2), 2, (2, 4)),
        ((1, 2), 0, (0, 0)),
        ((1, 2), -1, (-1, -2)),
    ])
    def test_scalar_multiplication(self, v, scalar, expected):
        """Test scalar multiplication (both left and right)."""
        vec = Vector2D(*v)
        assert vec * scalar == Vector2D(*expected)
        assert scalar * vec == Vector2D(*expected)

    def test_scalar_division(self):
        """Test scalar division."""
        assert Vector2D(2, 4) / 2 == Vector2D(1, 2)

    def test_division_by_zero_raises_error(self):
        """Test that division by zero raises ValueError."""
        with pytest.raises(ValueError, match="Cannot divide vector by zero"):
            Vector2D(1, 2) / 0

    def test_negation(self):
        """Test vector negation."""
        assert -Vector2D(1, -2) == Vector2D(-1, 2)

    def test_equality_uses_tolerance(self):
        """Components closer than 1e-10 compare equal."""
        assert Vector2D(1.0, 2.0) == Vector2D(1.0 + 1e-12, 2.0 - 1e-12)
        assert Vector2D(1.0, 2.0) != Vector2D(1.0 + 1e-6, 2.0)

    def test_equality_with_other_types(self):
        """Non-vectors never compare equal."""
        assert Vector2D(1, 2) != (1, 2)


class TestVector2DProducts:
    """Tests for dot/cross products and magnitudes."""

    @pytest.mark.parametrize("v1,v2,expected", [
        ((1, 0), (0, 1), 0),
        ((1, 0), (1, 0), 1),
        ((1, 0), (-1, 0), -1),
        ((1, 2), (3, 4), 11),
    ])
    def test_dot_product(self, v1, v2, expected):
        """Test dot product."""
        assert Vector2D(*v1).dot(Vector2D(*v2)) == pytest.approx(expected)

    def test_cross_product_sign(self, unit_x, unit_y):
        """X cross Y is positive, Y cross X is negative."""
        assert unit_x.cross(unit_y) == pytest.approx(1.0)
        assert unit_y.cross(unit_x) == pytest.approx(-1.0)

    def test_magnitude(self):
        """3-4-5 triangle."""
        vec = Vector2D(3, 4)
        assert vec.magnitude == pytest.approx(5.0)
        assert vec.magnitude_squared == pytest.approx(25.0)

    def test_normalized(self):
        """Normalised vectors have unit length."""
        assert Vector2D(3, 4).normalized() == Vector2D(0.6, 0.8)

    def test_normalized_zero_vector(self):
        """The zero vector normalises to itself."""
        assert Vector2D.zero().normalized() == Vector2D.zero()

    def test_distance_to(self):
        """Distance between two points."""
        assert Vector2D(1, 1).distance_to(Vector2D(4, 5)) == pytest.approx(5.0)


class TestVector2DHeading:
    """Tests for angle, rotation and polar construction."""

    @pytest.mark.parametrize("v,expected", [
        ((1, 0), 0.0),
        ((0, 1), math.pi / 2),
        ((-1, 0), math.pi),
        ((0, -1), -math.pi / 2),
    ])
    def test_angle(self, v, expected):
        """Heading of a vector."""
        assert Vector2D(*v).angle == pytest.approx(expected)

    def test_rotation_quarter_turn(self, unit_x, unit_y):
        """Rotating +X by pi/2 gives +Y."""
        assert unit_x.rotated(math.pi / 2) == unit_y

    def test_rotation_preserves_length(self):
        """Rotation never changes magnitude."""
        vec = Vector2D(3, -7)
        assert vec.rotated(1.234).magnitude == pytest.approx(vec.magnitude)

    def test_from_polar(self):
        """Polar construction round-trips through angle and magnitude."""
        vec = Vector2D.from_polar(2.0, math.pi / 3)
        assert vec.magnitude == pytest.approx(2.0)
        assert vec.angle == pytest.approx(math.pi / 3)

    def test_is_finite(self):
        """NaN and inf components are detected."""
        assert Vector2D(1, 2).is_finite()
        assert not Vector2D(float("nan"), 0).is_finite()
        assert not Vector2D(0, float("inf")).is_finite()

    def test_tuple_conversion(self):
        """to_tuple / from_tuple."""
        assert Vector2D.from_tuple((1.5, -2.0)).to_tuple() == (1.5, -2.0)


# =============================================================================
# ANGLE TESTS
# =============================================================================

class TestAngleHelpers:
    """Tests for angle wrapping."""

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi, math.pi),
        (3 * math.pi / 2, -math.pi / 2),
        (-3 * math.pi / 2, math.pi / 2),
        (4 * math.pi + 0.5, 0.5),
    ])
    def test_normalize_angle(self, angle, expected):
        """Angles wrap into (-pi, pi]."""
        assert normalize_angle(angle) == pytest.approx(expected)

    @pytest.mark.parametrize("a,b,expected", [
        (0.0, math.pi / 2, math.pi / 2),
        (math.pi / 2, 0.0, -math.pi / 2),
        (3.0, -3.0, 2 * math.pi - 6.0),
        (-3.0, 3.0, 6.0 - 2 * math.pi),
    ])
    def test_angle_diff_takes_short_way(self, a, b, expected):
        """Differences across the +/-pi seam take the shorter rotation."""
        assert angle_diff(a, b) == pytest.approx(expected)

    def test_tick_length(self):
        """Simulation runs at 60 ticks per second."""
        assert TICK_LENGTH == pytest.approx(1 / 60)
