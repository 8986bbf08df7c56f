#!/usr/bin/env python3
"""
Intercept and Firing Solutions

Predicts where a moving, accelerating target can be met:
- FiringSolution: unguided projectile fired at a fixed speed
- Intercept: guided interceptor limited by a net acceleration

Both reduce "distance travelled by the shot equals distance to the target's
future position" to a quartic in time and pick one real root. Root choice
follows RootSelection:

    LEGACY            Fixed indices carried over from the existing controller
                      (firing: third of four / first of two;
                       intercept: second of four / second of two)
    EARLIEST_POSITIVE Smallest strictly positive root

LEGACY is the default. It has no derivation behind it and can pick a
negative time for some geometries; callers wanting a physically motivated
choice should pass EARLIEST_POSITIVE.

A target with zero acceleration makes the firing quartic degenerate (zero
leading coefficient), so no solution is produced for it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .kinematics import position_relative_to, velocity_relative_to
from .physics import Vector2D
from .polynomial import Roots, solve_quartic

logger = logging.getLogger(__name__)


class RootSelection(Enum):
    """How an impact time is chosen among the quartic's real roots."""
    LEGACY = "legacy"
    EARLIEST_POSITIVE = "earliest_positive"


def _acceleration_of(body) -> Vector2D:
    return getattr(body, "acceleration", None) or Vector2D.zero()


def _earliest_positive(roots: Roots) -> Optional[float]:
    for root in roots:
        if root > 0:
            return root
    return None


# =============================================================================
# FIRING SOLUTION
# =============================================================================

@dataclass
class FiringSolution:
    """
    Where and when a projectile fired now meets the target.

    Attributes:
        impact_time: Seconds from now until impact
        impact_point: Target position at impact
        target_velocity: Target velocity when the solution was computed
        target_acceleration: Target acceleration assumed during flight
    """
    impact_time: float
    impact_point: Vector2D
    target_velocity: Vector2D
    target_acceleration: Vector2D

    @property
    def position(self) -> Vector2D:
        return self.impact_point

    @property
    def velocity(self) -> Vector2D:
        return self.target_velocity

    @property
    def acceleration(self) -> Vector2D:
        return self.target_acceleration

    @staticmethod
    def quartic_coefficients(rel_pos: Vector2D, rel_vel: Vector2D, acc: Vector2D,
                             projectile_speed: float) -> tuple:
        """Coefficients (a4..a0) of |p + v t + a t^2/2|^2 - (s t)^2 = 0."""
        return (
            acc.dot(acc) / 4.0,
            acc.dot(rel_vel),
            rel_vel.dot(rel_vel) + acc.dot(rel_pos) - projectile_speed ** 2,
            2.0 * rel_vel.dot(rel_pos),
            rel_pos.dot(rel_pos),
        )

    @classmethod
    def solve(
        cls,
        shooter,
        projectile_speed: float,
        target,
        selection: RootSelection = RootSelection.LEGACY
    ) -> Optional[FiringSolution]:
        """
        Compute a firing solution.

        Args:
            shooter: Body with position and velocity (projectile inherits it)
            projectile_speed: Muzzle speed relative to the shooter
            target: Body with position, velocity and acceleration
            selection: Root selection policy

        Returns:
            FiringSolution, or None if no usable root exists
        """
        rel_pos = position_relative_to(target, shooter)
        rel_vel = velocity_relative_to(target, shooter)
        acc = _acceleration_of(target)

        roots = solve_quartic(*cls.quartic_coefficients(rel_pos, rel_vel, acc, projectile_speed))
        logger.debug("Firing solution roots: %s", roots.values)

        if selection is RootSelection.EARLIEST_POSITIVE:
            impact_time = _earliest_positive(roots)
        elif len(roots) == 4:
            impact_time = roots[2]
        elif len(roots) == 2:
            impact_time = roots[0]
        else:
            impact_time = None

        if impact_time is None:
            return None

        impact_point = target.position + rel_vel * impact_time + acc * (0.5 * impact_time ** 2)
        return cls(
            impact_time=impact_time,
            impact_point=impact_point,
            target_velocity=target.velocity,
            target_acceleration=acc,
        )


# =============================================================================
# GUIDED INTERCEPT
# =============================================================================

@dataclass
class Intercept:
    """
    Meeting point for an interceptor accelerating at a fixed magnitude.

    Attributes:
        time: Seconds from now until the meeting
        point: Target position at the meeting
        target_velocity: Target velocity when the intercept was computed
        target_acceleration: Target acceleration assumed until the meeting
    """
    time: float
    point: Vector2D
    target_velocity: Vector2D
    target_acceleration: Vector2D

    @property
    def position(self) -> Vector2D:
        return self.point

    @property
    def velocity(self) -> Vector2D:
        return self.target_velocity

    @property
    def acceleration(self) -> Vector2D:
        return self.target_acceleration

    @classmethod
    def solve(
        cls,
        vessel,
        acceleration: float,
        target,
        selection: RootSelection = RootSelection.LEGACY
    ) -> Optional[Intercept]:
        """
        Compute an intercept for a vessel that can accelerate at `acceleration`.

        Args:
            vessel: Interceptor with position and velocity
            acceleration: Net acceleration magnitude available to the vessel
            target: Body with position, velocity and acceleration
            selection: Root selection policy

        Returns:
            Intercept, or None if no usable root exists
        """
        rel_pos = position_relative_to(target, vessel)
        rel_vel = velocity_relative_to(target, vessel)
        acc = _acceleration_of(target)

        roots = solve_quartic(
            0.25 * (acceleration ** 2 - acc.magnitude_squared),
            -rel_vel.dot(acc),
            -acc.dot(rel_pos) - rel_vel.dot(rel_vel),
            -2.0 * rel_pos.dot(rel_vel),
            -rel_pos.dot(rel_pos),
        )
        logger.debug("Intercept roots: %s", roots.values)

        if selection is RootSelection.EARLIEST_POSITIVE:
            time = _earliest_positive(roots)
        elif len(roots) in (2, 4):
            time = roots[1]
        else:
            time = None

        if time is None:
            return None

        point = target.position + rel_vel * time + acc * (0.5 * time ** 2)
        return cls(
            time=time,
            point=point,
            target_velocity=target.velocity,
            target_acceleration=acc,
        )
