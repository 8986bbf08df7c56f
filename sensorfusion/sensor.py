#!/usr/bin/env python3
"""
Sensor Model and Host Interface

Describes what a single directional scan produces and how trustworthy it is:
- Contact classes and their physical acceleration limits
- Error bounds derived from signal-to-noise ratio
- Emitter snapshots capturing the beam state at scan time
- The abstract host interface the scheduler drives each tick

Error model (per scan):
    factor   = 10^(-snr/10)
    bearing  = bearing_noise_factor  * factor * rng_range   (radians)
    distance = distance_noise_factor * factor * rng_range   (metres)
    velocity = velocity_noise_factor * factor * rng_range   (m/s)
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .config import ErrorModelConfig
from .physics import Vector2D, normalize_angle


# =============================================================================
# CONTACT CLASSES
# =============================================================================

class ContactClass(Enum):
    """What the sensor believes a detected object is."""
    FIGHTER = "fighter"
    FRIGATE = "frigate"
    CRUISER = "cruiser"
    ASTEROID = "asteroid"
    TARGET = "target"
    MISSILE = "missile"
    TORPEDO = "torpedo"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MaxAcceleration:
    """
    Thrust limits of a contact class.

    Attributes:
        forward: Forward linear acceleration (m/s^2)
        reverse: Reverse linear acceleration (m/s^2)
        lateral: Sideways linear acceleration (m/s^2)
        angular: Angular acceleration (rad/s^2)
    """
    forward: float
    reverse: float
    lateral: float
    angular: float

    @property
    def magnitude(self) -> float:
        """Largest achievable linear acceleration in any direction."""
        return math.hypot(max(self.forward, self.reverse), self.lateral)

    @classmethod
    def for_class(cls, contact_class: ContactClass) -> MaxAcceleration:
        """Look up the limits for a contact class."""
        return MAX_ACCELERATION_BY_CLASS[contact_class]


_MISSILE_LIMITS = MaxAcceleration(300.0, 0.0, 100.0, 4 * math.pi)

MAX_ACCELERATION_BY_CLASS: Dict[ContactClass, MaxAcceleration] = {
    ContactClass.FIGHTER: MaxAcceleration(60.0, 30.0, 30.0, 2 * math.pi),
    ContactClass.FRIGATE: MaxAcceleration(10.0, 5.0, 5.0, math.pi / 4),
    ContactClass.CRUISER: MaxAcceleration(5.0, 2.5, 2.5, math.pi / 8),
    ContactClass.ASTEROID: MaxAcceleration(0.0, 0.0, 0.0, 0.0),
    ContactClass.TARGET: MaxAcceleration(0.0, 0.0, 0.0, 0.0),
    ContactClass.MISSILE: _MISSILE_LIMITS,
    ContactClass.TORPEDO: MaxAcceleration(70.0, 0.0, 20.0, 2 * math.pi),
    # Unidentified objects get the most agile bound so regions stay conservative
    ContactClass.UNKNOWN: _MISSILE_LIMITS,
}


# =============================================================================
# ERROR MODEL
# =============================================================================

@dataclass(frozen=True)
class SensorError:
    """
    Error bounds of one scan.

    Attributes:
        bearing: Angular error (radians)
        distance: Range error (metres)
        velocity: Velocity error (m/s)
    """
    bearing: float
    distance: float
    velocity: float

    @classmethod
    def from_snr(cls, snr: float, model: Optional[ErrorModelConfig] = None) -> SensorError:
        """
        Derive error bounds from signal quality.

        Args:
            snr: Signal-to-noise ratio in dB
            model: Noise factors; defaults to ErrorModelConfig()

        Returns:
            Error bounds, all growing as snr falls
        """
        model = model or ErrorModelConfig()
        factor = 10.0 ** (-snr / 10.0)
        return cls(
            bearing=model.bearing_noise_factor * factor * model.rng_range,
            distance=model.distance_noise_factor * factor * model.rng_range,
            velocity=model.velocity_noise_factor * factor * model.rng_range,
        )


# =============================================================================
# SCAN RESULT AND EMITTER
# =============================================================================

@dataclass(frozen=True)
class ScanResult:
    """Raw detection returned by a host scan."""
    contact_class: ContactClass
    position: Vector2D
    velocity: Vector2D
    rssi: float
    snr: float


@dataclass(frozen=True)
class Emitter:
    """
    Beam state at the moment of a scan.

    Attributes:
        position: Sensor position
        min_distance: Near edge of the range gate
        max_distance: Far edge of the range gate
        heading: Beam centre direction (radians)
        width: Full beam width (radians)
    """
    position: Vector2D
    min_distance: float
    max_distance: float
    heading: float
    width: float

    @property
    def min_heading(self) -> float:
        return self.heading - self.width / 2

    @property
    def max_heading(self) -> float:
        return self.heading + self.width / 2

    @classmethod
    def capture(cls, position: Vector2D, host: SensorHost) -> Emitter:
        """Snapshot the host's current beam settings at position."""
        return cls(
            position=Vector2D(position.x, position.y),
            min_distance=host.min_distance,
            max_distance=host.max_distance,
            heading=host.heading,
            width=host.width,
        )


# =============================================================================
# HOST INTERFACE
# =============================================================================

class SensorHost(ABC):
    """
    Host-side sensor the scheduler controls.

    Beam parameters are plain attributes or properties; setters take effect
    on the next scan. Implementations wrap a physics simulation.
    """

    heading: float
    width: float
    min_distance: float
    max_distance: float

    @abstractmethod
    def scan(self) -> Optional[ScanResult]:
        """Sweep the current beam; None when nothing is detected."""

    @abstractmethod
    def current_time(self) -> float:
        """Simulation clock in seconds."""

    @property
    @abstractmethod
    def tick_length(self) -> float:
        """Fixed duration of one tick in seconds."""

    def point(self, heading: float, width: float,
              min_distance: float, max_distance: float) -> None:
        """Set all beam parameters at once (heading wrapped to (-pi, pi])."""
        self.heading = normalize_angle(heading)
        self.width = width
        self.min_distance = min_distance
        self.max_distance = max_distance
