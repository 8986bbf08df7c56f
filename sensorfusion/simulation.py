#!/usr/bin/env python3
"""
Simulated Sensor Host

In-process stand-in for the physics simulation that owns the real sensor.
It provides exactly what the scheduler consumes from a host:
- A directional beam (heading, width, range gate) that can be re-aimed
- A scan query returning the nearest object inside the beam
- A monotonic clock advancing in fixed ticks

Signal quality falls off with distance:
    snr = reference_snr - 20 * log10(distance / reference_distance)

With a seed, measurements are perturbed by noise kept inside the error
bounds the SNR implies; without one, scans are exact.
"""

from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import ErrorModelConfig, FusionConfig
from .physics import TICK_LENGTH, Vector2D, angle_diff
from .sensor import ContactClass, ScanResult, SensorError, SensorHost

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Signal-to-noise ratio (dB) at the reference distance
DEFAULT_REFERENCE_SNR = 50.0

# Distance (m) at which DEFAULT_REFERENCE_SNR is measured
DEFAULT_REFERENCE_DISTANCE = 1000.0

# Fraction of each error bound used for noise, keeping noisy points inside
# the uncertainty ellipse
NOISE_FRACTION = 0.5


# =============================================================================
# SIMULATED OBJECTS
# =============================================================================

@dataclass
class SimulatedObject:
    """Point body moving under constant acceleration."""
    contact_class: ContactClass = ContactClass.UNKNOWN
    position: Vector2D = field(default_factory=Vector2D.zero)
    velocity: Vector2D = field(default_factory=Vector2D.zero)
    acceleration: Vector2D = field(default_factory=Vector2D.zero)
    rssi: float = 1.0

    def step(self, dt: float) -> None:
        """Advance dt seconds."""
        self.position = self.position + self.velocity * dt + self.acceleration * (0.5 * dt * dt)
        self.velocity = self.velocity + self.acceleration * dt


# =============================================================================
# SIMULATED SENSOR HOST
# =============================================================================

class SimulatedSensor(SensorHost):
    """
    Sensor host backed by a list of SimulatedObject.

    The owner is the vessel carrying the sensor; scans are taken from its
    position and it is stepped along with everything else.
    """

    def __init__(
        self,
        owner: Optional[SimulatedObject] = None,
        objects: Optional[List[SimulatedObject]] = None,
        config: Optional[FusionConfig] = None,
        reference_snr: float = DEFAULT_REFERENCE_SNR,
        reference_distance: float = DEFAULT_REFERENCE_DISTANCE,
        seed: Optional[int] = None,
        start_time: float = 0.0
    ):
        self.config = config or FusionConfig()
        self.owner = owner or SimulatedObject()
        self.objects: List[SimulatedObject] = list(objects or [])
        self.reference_snr = reference_snr
        self.reference_distance = reference_distance
        self.rng = random.Random(seed) if seed is not None else None
        self.time = start_time

        self.heading = 0.0
        self.width = self.config.sensor.search_width
        self.min_distance = 0.0
        self.max_distance = self.config.sensor.max_range

        self.scans_taken = 0

    # -------------------------------------------------------------------------
    # SensorHost interface
    # -------------------------------------------------------------------------

    @property
    def tick_length(self) -> float:
        return self.config.sensor.tick_length

    def current_time(self) -> float:
        return self.time

    def scan(self) -> Optional[ScanResult]:
        """Nearest object inside the beam, or None."""
        self.scans_taken += 1
        visible = [obj for obj in self.objects if self.in_beam(obj.position)]
        if not visible:
            return None

        target = min(visible, key=lambda obj: obj.position.distance_to(self.owner.position))
        distance = target.position.distance_to(self.owner.position)
        snr = self.snr_at(distance)

        position = target.position
        velocity = target.velocity
        if self.rng is not None:
            position, velocity = self._perturb(target, snr, self.config.error_model)

        return ScanResult(
            contact_class=target.contact_class,
            position=Vector2D(position.x, position.y),
            velocity=Vector2D(velocity.x, velocity.y),
            rssi=target.rssi,
            snr=snr,
        )

    # -------------------------------------------------------------------------
    # Beam geometry and signal model
    # -------------------------------------------------------------------------

    def in_beam(self, point: Vector2D) -> bool:
        """True if point is inside the current beam sector and range gate."""
        offset = point - self.owner.position
        distance = offset.magnitude
        if distance < self.min_distance or distance > self.max_distance:
            return False
        if distance == 0:
            return True
        return abs(angle_diff(self.heading, offset.angle)) <= self.width / 2

    def snr_at(self, distance: float) -> float:
        """Signal-to-noise ratio (dB) for an object at distance."""
        distance = max(distance, 1.0)
        return self.reference_snr - 20.0 * math.log10(distance / self.reference_distance)

    def _perturb(self, target: SimulatedObject, snr: float, model: ErrorModelConfig):
        error = SensorError.from_snr(snr, model)
        line_of_sight = target.position - self.owner.position
        distance = line_of_sight.magnitude
        along = line_of_sight.normalized() if distance > 0 else Vector2D.unit_x()
        across = along.rotated(math.pi / 2)

        range_noise = self.rng.uniform(-1.0, 1.0) * error.distance * NOISE_FRACTION
        cross_noise = self.rng.uniform(-1.0, 1.0) * math.atan(error.bearing) * distance * NOISE_FRACTION
        velocity_noise = Vector2D(
            self.rng.uniform(-1.0, 1.0) * error.velocity * NOISE_FRACTION,
            self.rng.uniform(-1.0, 1.0) * error.velocity * NOISE_FRACTION,
        )

        position = target.position + along * range_noise + across * cross_noise
        return position, target.velocity + velocity_noise

    # -------------------------------------------------------------------------
    # Simulation control
    # -------------------------------------------------------------------------

    def add_object(self, obj: SimulatedObject) -> None:
        self.objects.append(obj)

    def step(self) -> None:
        """Advance the owner, all objects, and the clock by one tick."""
        dt = self.tick_length
        self.owner.step(dt)
        for obj in self.objects:
            obj.step(dt)
        self.time += dt

    def run(self, scheduler, ticks: int) -> None:
        """Drive a scheduler for a number of ticks, stepping after each."""
        for _ in range(ticks):
            scheduler.tick(self.owner)
            self.step()
        logger.debug("Ran %d ticks, %d contacts on board", ticks, scheduler.board.count())
