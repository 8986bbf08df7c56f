#!/usr/bin/env python3
"""
Test Suite for Uncertainty Region Geometry

Tests cover:
1. Ellipse normalisation (width <= height)
2. Containment, including rotated ellipses and boundary points
3. Radius at angle, min/max distance to external points
4. Translation and expansion
5. Degenerate ellipses (zero width or zero size)
6. Circle containment and distance bounds
7. Outline polylines
"""

import math
import random

import pytest

from sensorfusion.geometry import Circle, Ellipse
from sensorfusion.physics import Vector2D


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def upright_ellipse():
    """Centred at origin, major axis along X (orientation 0), 5 wide, 10 high."""
    return Ellipse(Vector2D(0, 0), 0.0, 5.0, 10.0)


@pytest.fixture
def diagonal_ellipse():
    """Same shape rotated by pi/4."""
    return Ellipse(Vector2D(0, 0), math.pi / 4, 5.0, 10.0)


# =============================================================================
# CONSTRUCTION TESTS
# =============================================================================

class TestEllipseConstruction:
    """Tests for normalisation at construction."""

    def test_width_not_greater_than_height_kept(self, upright_ellipse):
        assert upright_ellipse.width == 5.0
        assert upright_ellipse.height == 10.0
        assert upright_ellipse.orientation == 0.0

    def test_wide_ellipse_is_swapped_and_rotated(self):
        """A wide ellipse becomes a tall one turned a quarter turn."""
        ellipse = Ellipse(Vector2D(0, 0), 0.0, 10.0, 5.0)
        assert ellipse.width == 5.0
        assert ellipse.height == 10.0
        assert ellipse.orientation == pytest.approx(math.pi / 2)

    def test_swapped_ellipse_covers_same_points(self):
        """Normalisation does not change which points are inside."""
        ellipse = Ellipse(Vector2D(0, 0), 0.0, 10.0, 5.0)
        assert ellipse.contains(Vector2D(0, 4))
        assert not ellipse.contains(Vector2D(4, 0))


# =============================================================================
# CONTAINMENT TESTS
# =============================================================================

class TestEllipseContains:
    """Tests for Ellipse.contains."""

    @pytest.mark.parametrize("point", [(4, 0), (0, 2), (0, 0), (-4.9, 0)])
    def test_points_inside(self, upright_ellipse, point):
        assert upright_ellipse.contains(Vector2D(*point))

    @pytest.mark.parametrize("point", [(0, 3), (0, -6), (5, -6), (0, 6), (6, 0)])
    def test_points_outside(self, upright_ellipse, point):
        assert not upright_ellipse.contains(Vector2D(*point))

    def test_boundary_is_inside(self, upright_ellipse):
        """Containment is boundary-inclusive."""
        assert upright_ellipse.contains(Vector2D(5, 0))
        assert upright_ellipse.contains(Vector2D(0, 2.5))

    def test_rotated(self, diagonal_ellipse):
        assert diagonal_ellipse.contains(Vector2D(3, 3))
        assert not diagonal_ellipse.contains(Vector2D(-3, 3))

    def test_off_centre(self):
        ellipse = Ellipse(Vector2D(100, -50), 0.0, 5.0, 10.0)
        assert ellipse.contains(Vector2D(104, -50))
        assert not ellipse.contains(Vector2D(4, 0))

    def test_invariant_under_full_turns(self):
        """Adding multiples of 2pi to the orientation never changes containment."""
        rng = random.Random(42)
        for _ in range(100):
            orientation = rng.uniform(-math.pi, math.pi)
            base = Ellipse(Vector2D(1, 2), orientation, 3.0, 8.0)
            turns = rng.choice([-3, -1, 1, 2, 5])
            turned = Ellipse(Vector2D(1, 2), orientation + turns * 2 * math.pi, 3.0, 8.0)
            point = Vector2D(rng.uniform(-6, 8), rng.uniform(-5, 9))
            # Skip points within rounding distance of the edge
            local = (base.centre - point).rotated(-orientation)
            level = (local.x / 4.0) ** 2 + (local.y / 1.5) ** 2
            if abs(level - 1.0) < 1e-6:
                continue
            assert base.contains(point) == turned.contains(point)

    def test_zero_width_is_a_segment(self):
        """Zero width degrades to the major axis."""
        ellipse = Ellipse(Vector2D(0, 0), 0.0, 0.0, 10.0)
        assert ellipse.contains(Vector2D(3, 0))
        assert not ellipse.contains(Vector2D(6, 0))
        assert not ellipse.contains(Vector2D(0, 0.1))

    def test_zero_size_is_a_point(self):
        ellipse = Ellipse(Vector2D(2, 2), 0.0, 0.0, 0.0)
        assert ellipse.contains(Vector2D(2, 2))
        assert not ellipse.contains(Vector2D(2, 2.001))


# =============================================================================
# RADIUS AND DISTANCE TESTS
# =============================================================================

class TestEllipseRadius:
    """Tests for Ellipse.radius."""

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 5.0),
        (math.pi, 5.0),
        (math.pi / 2, 2.5),
        (-math.pi / 2, 2.5),
    ])
    def test_axes(self, upright_ellipse, angle, expected):
        assert upright_ellipse.radius(angle) == pytest.approx(expected)

    def test_rotated_axes(self, diagonal_ellipse):
        assert diagonal_ellipse.radius(math.pi / 4) == pytest.approx(5.0)
        assert diagonal_ellipse.radius(3 * math.pi / 4) == pytest.approx(2.5)

    def test_radius_point_lies_on_boundary(self, diagonal_ellipse):
        """The point at radius(angle) in direction angle is on the edge."""
        for angle in (0.1, 1.0, 2.0, -2.5):
            r = diagonal_ellipse.radius(angle)
            assert diagonal_ellipse.contains(Vector2D.from_polar(r * 0.999, angle))
            assert not diagonal_ellipse.contains(Vector2D.from_polar(r * 1.001, angle))

    def test_point_ellipse_radius(self):
        assert Ellipse(Vector2D(0, 0), 0.0, 0.0, 0.0).radius(1.0) == 0.0


class TestEllipseDistance:
    """Tests for min/max distance bounds."""

    @pytest.fixture
    def raised_ellipse(self):
        return Ellipse(Vector2D(0, 5), 0.0, 5.0, 10.0)

    @pytest.mark.parametrize("point,expected", [
        ((0, 0), 7.5),
        ((5, 5), 10.0),
        ((0, 5), 5.0),
        ((0, 6), 3.5),
    ])
    def test_max_distance(self, raised_ellipse, point, expected):
        assert raised_ellipse.max_distance_to(Vector2D(*point)) == pytest.approx(expected)

    @pytest.fixture
    def shifted_ellipse(self):
        return Ellipse(Vector2D(5, 0), math.pi / 2, 5.0, 10.0)

    @pytest.mark.parametrize("point,expected", [
        ((0, 0), 2.5),
        ((5, 5), 0.0),
        ((5.5, 0), 2.0),
    ])
    def test_min_distance(self, shifted_ellipse, point, expected):
        assert shifted_ellipse.min_distance_to(Vector2D(*point)) == pytest.approx(expected, abs=1e-9)

    def test_minmax_distance(self, shifted_ellipse):
        near, far = shifted_ellipse.minmax_distance_to(Vector2D(0, 0))
        assert near == pytest.approx(2.5)
        assert far == pytest.approx(7.5)


# =============================================================================
# TRANSFORM TESTS
# =============================================================================

class TestEllipseTransforms:
    """Tests for translate and expand."""

    def test_translate(self, upright_ellipse):
        upright_ellipse.translate(Vector2D(10, -3))
        assert upright_ellipse.centre == Vector2D(10, -3)
        assert upright_ellipse.contains(Vector2D(14, -3))

    def test_expand_grows_both_axes(self, upright_ellipse):
        upright_ellipse.expand(1.5)
        assert upright_ellipse.width == pytest.approx(8.0)
        assert upright_ellipse.height == pytest.approx(13.0)
        assert upright_ellipse.contains(Vector2D(0, 3.9))


class TestEllipseBoundary:
    """Tests for outline polylines."""

    def test_boundary_is_closed_and_on_edge(self, diagonal_ellipse):
        outline = diagonal_ellipse.boundary()
        assert outline[0] == outline[-1]
        assert len(outline) > 20
        for point in outline:
            angle = (point - diagonal_ellipse.centre).angle
            distance = point.distance_to(diagonal_ellipse.centre)
            assert distance == pytest.approx(diagonal_ellipse.radius(angle), abs=1e-9)


# =============================================================================
# CIRCLE TESTS
# =============================================================================

class TestCircle:
    """Tests for Circle."""

    def test_contains_is_strict(self):
        circle = Circle(Vector2D(0, 0), 5.0)
        assert circle.contains(Vector2D(3, 3))
        assert not circle.contains(Vector2D(5, 0))

    def test_distances(self):
        circle = Circle(Vector2D(10, 0), 2.0)
        assert circle.min_distance_to(Vector2D(0, 0)) == pytest.approx(8.0)
        assert circle.max_distance_to(Vector2D(0, 0)) == pytest.approx(12.0)
        assert circle.minmax_distance_to(Vector2D(0, 0)) == pytest.approx((8.0, 12.0))

    def test_translate_and_expand(self):
        circle = Circle(Vector2D(0, 0), 1.0)
        circle.translate(Vector2D(1, 1))
        circle.expand(2.0)
        assert circle.centre == Vector2D(1, 1)
        assert circle.radius(0.7) == pytest.approx(3.0)

    def test_boundary(self):
        outline = Circle(Vector2D(0, 0), 2.0).boundary()
        assert len(outline) == 9
        assert all(p.magnitude == pytest.approx(2.0) for p in outline)
