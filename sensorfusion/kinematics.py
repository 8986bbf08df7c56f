#!/usr/bin/env python3
"""
Kinematic Capabilities and Derived Quantities

Any object that carries some subset of position, velocity, acceleration,
heading and angular velocity can take part in relative-motion queries:
- Capability protocols expose only the single accessor attribute
- Free functions compute everything derived from those accessors
  (relative vectors, bearings, projections, orbital rates)
- KinematicModel snapshots a moving body for constant-acceleration
  extrapolation

Positions accept either a Vector2D or any object with a ``position``
attribute, so points and bodies can be mixed freely.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol, Union, runtime_checkable

from .geometry import Circle
from .physics import Vector2D, angle_diff, normalize_angle


# =============================================================================
# CAPABILITY PROTOCOLS
# =============================================================================

@runtime_checkable
class HasPosition(Protocol):
    """Anything located in the plane."""

    @property
    def position(self) -> Vector2D:
        ...


@runtime_checkable
class HasVelocity(Protocol):
    """Anything with a linear velocity."""

    @property
    def velocity(self) -> Vector2D:
        ...


@runtime_checkable
class HasAcceleration(Protocol):
    """Anything with a linear acceleration estimate."""

    @property
    def acceleration(self) -> Vector2D:
        ...


@runtime_checkable
class HasHeading(Protocol):
    """Anything facing a direction."""

    @property
    def heading(self) -> float:
        ...


@runtime_checkable
class HasAngularVelocity(Protocol):
    """Anything rotating at a known rate (rad/s)."""

    @property
    def angular_velocity(self) -> float:
        ...


PositionLike = Union[Vector2D, HasPosition]


def position_of(item: PositionLike) -> Vector2D:
    """Resolve a point or a positioned object to its coordinates."""
    if isinstance(item, Vector2D):
        return item
    return item.position


# =============================================================================
# POSITION QUERIES
# =============================================================================

def position_relative_to(subject: PositionLike, other: PositionLike) -> Vector2D:
    """Position of subject as seen from other."""
    return position_of(subject) - position_of(other)


def distance_to(subject: PositionLike, other: PositionLike) -> float:
    """Straight-line distance between two points or bodies."""
    return position_relative_to(other, subject).magnitude


def bearing_to(subject: PositionLike, other: PositionLike) -> float:
    """
    Absolute bearing from subject towards other.

    Args:
        subject: Observer point or body
        other: Observed point or body

    Returns:
        Heading of the line of sight in radians
    """
    return position_relative_to(other, subject).angle


# =============================================================================
# VELOCITY QUERIES
# =============================================================================

def velocity_relative_to(subject: HasVelocity, other: HasVelocity) -> Vector2D:
    """Velocity of subject in the frame of other."""
    return subject.velocity - other.velocity


def speed(subject: HasVelocity) -> float:
    """Magnitude of the velocity."""
    return subject.velocity.magnitude


def speed_relative_to(subject: HasVelocity, other: HasVelocity) -> float:
    """Magnitude of the relative velocity."""
    return velocity_relative_to(subject, other).magnitude


def orbital_velocity_to(subject, other) -> float:
    """
    Angular rate at which other sweeps across subject's sky.

    Both arguments need a position and a velocity.

    Returns:
        Line-of-sight rotation rate in rad/s (positive counter-clockwise)
    """
    rel_pos = position_relative_to(other, subject)
    rel_vel = velocity_relative_to(other, subject)
    dist_sq = rel_pos.magnitude_squared
    if dist_sq == 0:
        return 0.0
    return rel_pos.cross(rel_vel) / dist_sq


def velocity_after(subject, time: float) -> Vector2D:
    """Velocity after time seconds of constant acceleration."""
    return subject.velocity + subject.acceleration * time


def position_after(subject, time: float) -> Vector2D:
    """
    Constant-acceleration projection of a body's position.

    Args:
        subject: Body with position and velocity; acceleration is used when
                 present, otherwise it is treated as zero
        time: Look-ahead in seconds

    Returns:
        p + v*t + a*t^2/2
    """
    acceleration = getattr(subject, "acceleration", None) or Vector2D.zero()
    return (subject.position
            + subject.velocity * time
            + acceleration * (0.5 * time * time))


def possible_position_after(subject, max_acceleration: float, time: float) -> Circle:
    """
    Region a body can reach within time seconds under bounded thrust.

    Args:
        subject: Body with position and velocity
        max_acceleration: Largest acceleration magnitude it can apply
        time: Look-ahead in seconds

    Returns:
        Circle centred on the ballistic position with radius a*t^2/2
    """
    centre = subject.position + subject.velocity * time
    return Circle(centre, 0.5 * max_acceleration * time * time)


# =============================================================================
# ACCELERATION QUERIES
# =============================================================================

def acceleration_magnitude(subject: HasAcceleration) -> float:
    """Magnitude of the acceleration."""
    return subject.acceleration.magnitude


def acceleration_relative_to(subject: HasAcceleration, other: HasAcceleration) -> Vector2D:
    """Acceleration of subject in the frame of other."""
    return subject.acceleration - other.acceleration


def orbital_acceleration_to(subject, other) -> float:
    """
    Angular acceleration of the line of sight from subject to other.

    Differentiates the orbital rate assuming constant relative acceleration.

    Returns:
        Rate of change of orbital_velocity_to in rad/s^2
    """
    rel_pos = position_relative_to(other, subject)
    rel_vel = velocity_relative_to(other, subject)
    rel_acc = acceleration_relative_to(other, subject)
    dist_sq = rel_pos.magnitude_squared
    if dist_sq == 0:
        return 0.0
    omega = rel_pos.cross(rel_vel) / dist_sq
    return (rel_pos.cross(rel_acc) - 2.0 * omega * rel_pos.dot(rel_vel)) / dist_sq


# =============================================================================
# HEADING QUERIES
# =============================================================================

def relative_bearing_to(subject, other: PositionLike) -> float:
    """Bearing to other measured from subject's heading, in (-pi, pi]."""
    return angle_diff(subject.heading, bearing_to(subject, other))


def heading_after(subject, time: float) -> float:
    """Heading after time seconds at constant angular velocity, in (-pi, pi]."""
    return normalize_angle(subject.heading + subject.angular_velocity * time)


# =============================================================================
# KINEMATIC SNAPSHOT
# =============================================================================

@dataclass
class KinematicModel:
    """
    Constant-acceleration snapshot of a moving body.

    Attributes:
        position: Position at capture time
        velocity: Velocity at capture time
        acceleration: Acceleration held constant for extrapolation
    """
    position: Vector2D = field(default_factory=Vector2D.zero)
    velocity: Vector2D = field(default_factory=Vector2D.zero)
    acceleration: Vector2D = field(default_factory=Vector2D.zero)

    @classmethod
    def from_object(cls, subject) -> KinematicModel:
        """Copy the kinematic state of any body; missing acceleration is zero."""
        acceleration = getattr(subject, "acceleration", None) or Vector2D.zero()
        return cls(
            position=Vector2D(subject.position.x, subject.position.y),
            velocity=Vector2D(subject.velocity.x, subject.velocity.y),
            acceleration=Vector2D(acceleration.x, acceleration.y),
        )

    def after(self, time: float) -> KinematicModel:
        """Snapshot extrapolated time seconds into the future."""
        return KinematicModel(
            position=position_after(self, time),
            velocity=velocity_after(self, time),
            acceleration=self.acceleration,
        )
