#!/usr/bin/env python3
"""
Radar Contact Model

Two forms of belief about a detected object:
- SearchContact: one immutable observation from a wide sweep
- TrackedContact: a bounded history of observations from a narrow beam,
  with an acceleration estimate derived from successive velocities

Both expose the same queries: when they were last seen, what class they are,
and the elliptical region they could occupy some time after that. Promotion
(search -> tracked) and demotion (tracked -> search) are explicit one-way
conversions; demotion keeps only the most recent sample.
"""

from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, List, Optional, Union

from .config import ErrorModelConfig
from .geometry import Ellipse
from .physics import Vector2D
from .sensor import ContactClass, Emitter, MaxAcceleration, ScanResult, SensorError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Samples kept by a tracked contact before the oldest is evicted
DEFAULT_HISTORY_CAPACITY = 9


# =============================================================================
# SHARED BEHAVIOUR
# =============================================================================

def initial_area(position: Vector2D, emitter: Emitter, error: SensorError) -> Ellipse:
    """
    Region a contact occupies at the instant it was measured.

    The ellipse is elongated along the line of sight by the range error and
    spread across it by the bearing error at the measured distance.
    """
    line_of_sight = emitter.position - position
    distance = line_of_sight.magnitude
    width = math.atan(error.bearing) * distance * 2.0
    height = error.distance * 2.0
    return Ellipse(Vector2D(position.x, position.y), line_of_sight.angle, width, height)


class RadarContact(ABC):
    """Behaviour shared by search and tracked contacts."""

    contact_class: ContactClass

    @property
    @abstractmethod
    def time(self) -> float:
        """Capture time of the latest observation."""

    @property
    @abstractmethod
    def position(self) -> Vector2D:
        ...

    @property
    @abstractmethod
    def velocity(self) -> Vector2D:
        ...

    @property
    @abstractmethod
    def error(self) -> SensorError:
        ...

    @property
    @abstractmethod
    def emitter(self) -> Emitter:
        ...

    def time_elapsed(self, now: float) -> float:
        """Seconds since the latest observation."""
        return now - self.time

    def is_class(self, contact_class: ContactClass) -> bool:
        return self.contact_class == contact_class

    def get_initial_area(self) -> Ellipse:
        return initial_area(self.position, self.emitter, self.error)

    def get_area_after(self, time: float) -> Ellipse:
        """
        Region the contact could occupy time seconds after its latest sample.

        Args:
            time: Seconds after capture

        Returns:
            Initial area moved by velocity*time and grown by the velocity
            error plus the class's worst-case acceleration
        """
        area = self.get_initial_area()
        area.translate(self.velocity * time)
        max_accel = MaxAcceleration.for_class(self.contact_class)
        area.expand(self.error.velocity * time + 0.5 * max_accel.magnitude * time * time)
        return area

    def get_area_now(self, now: float) -> Ellipse:
        return self.get_area_after(self.time_elapsed(now))


# =============================================================================
# SEARCH CONTACT
# =============================================================================

@dataclass(frozen=True)
class SearchContact(RadarContact):
    """
    Single observation from a search sweep.

    Attributes:
        captured_at: Simulation time of the scan
        scan_emitter: Beam state during the scan
        contact_class: Reported class
        scan_position: Measured position
        scan_velocity: Measured velocity
        rssi: Received signal strength
        snr: Signal-to-noise ratio (dB)
        scan_error: Error bounds derived from snr
    """
    captured_at: float
    scan_emitter: Emitter
    contact_class: ContactClass
    scan_position: Vector2D
    scan_velocity: Vector2D
    rssi: float
    snr: float
    scan_error: SensorError

    @classmethod
    def from_scan(
        cls,
        time: float,
        emitter: Emitter,
        scan: ScanResult,
        error_model: Optional[ErrorModelConfig] = None
    ) -> SearchContact:
        """Wrap a raw scan result captured at time."""
        return cls(
            captured_at=time,
            scan_emitter=emitter,
            contact_class=scan.contact_class,
            scan_position=scan.position,
            scan_velocity=scan.velocity,
            rssi=scan.rssi,
            snr=scan.snr,
            scan_error=SensorError.from_snr(scan.snr, error_model),
        )

    @property
    def time(self) -> float:
        return self.captured_at

    @property
    def position(self) -> Vector2D:
        return self.scan_position

    @property
    def velocity(self) -> Vector2D:
        return self.scan_velocity

    @property
    def error(self) -> SensorError:
        return self.scan_error

    @property
    def emitter(self) -> Emitter:
        return self.scan_emitter


# =============================================================================
# TRACKED CONTACT
# =============================================================================

@dataclass(frozen=True)
class ContactSample:
    """One entry of a tracked contact's history."""
    emitter: Emitter
    time: float
    position: Vector2D
    velocity: Vector2D
    rssi: float
    snr: float
    error: SensorError


class TrackedContact(RadarContact):
    """
    Contact followed by the tracking beam.

    Holds up to `capacity` samples (oldest evicted first) and re-estimates
    acceleration on every update as the mean finite-difference acceleration
    across consecutive samples. The history is never empty.
    """

    def __init__(
        self,
        contact_class: ContactClass,
        samples: Iterable[ContactSample],
        capacity: int = DEFAULT_HISTORY_CAPACITY
    ):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self.contact_class = contact_class
        self._samples: Deque[ContactSample] = deque(samples, maxlen=capacity)
        if not self._samples:
            raise ValueError("A tracked contact needs at least one sample")
        self._acceleration = self._estimate_acceleration()

    # -------------------------------------------------------------------------
    # Construction / conversion
    # -------------------------------------------------------------------------

    @classmethod
    def from_scan(
        cls,
        time: float,
        emitter: Emitter,
        scan: ScanResult,
        error_model: Optional[ErrorModelConfig] = None,
        capacity: int = DEFAULT_HISTORY_CAPACITY
    ) -> TrackedContact:
        sample = ContactSample(
            emitter=emitter,
            time=time,
            position=scan.position,
            velocity=scan.velocity,
            rssi=scan.rssi,
            snr=scan.snr,
            error=SensorError.from_snr(scan.snr, error_model),
        )
        return cls(scan.contact_class, [sample], capacity)

    @classmethod
    def from_search(cls, contact: SearchContact,
                    capacity: int = DEFAULT_HISTORY_CAPACITY) -> TrackedContact:
        """Promote a search observation to a one-sample track."""
        sample = ContactSample(
            emitter=contact.emitter,
            time=contact.time,
            position=contact.position,
            velocity=contact.velocity,
            rssi=contact.rssi,
            snr=contact.snr,
            error=contact.error,
        )
        return cls(contact.contact_class, [sample], capacity)

    def to_search(self) -> SearchContact:
        """Demote to a search observation built from the latest sample."""
        latest = self.latest
        return SearchContact(
            captured_at=latest.time,
            scan_emitter=latest.emitter,
            contact_class=self.contact_class,
            scan_position=latest.position,
            scan_velocity=latest.velocity,
            rssi=latest.rssi,
            snr=latest.snr,
            scan_error=latest.error,
        )

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update(
        self,
        time: float,
        emitter: Emitter,
        scan: ScanResult,
        error_model: Optional[ErrorModelConfig] = None
    ) -> None:
        """
        Append a fresh observation and re-estimate acceleration.

        Args:
            time: Capture time
            emitter: Beam state during the scan
            scan: Raw scan result (its class is ignored; the track keeps its own)
            error_model: Noise factors for the new sample's error bounds
        """
        self._samples.append(ContactSample(
            emitter=emitter,
            time=time,
            position=scan.position,
            velocity=scan.velocity,
            rssi=scan.rssi,
            snr=scan.snr,
            error=SensorError.from_snr(scan.snr, error_model),
        ))
        self._acceleration = self._estimate_acceleration()

    def _estimate_acceleration(self) -> Vector2D:
        total = Vector2D.zero()
        pairs = 0
        history = list(self._samples)
        for earlier, later in zip(history, history[1:]):
            dt = later.time - earlier.time
            if dt == 0:
                logger.debug("Skipping samples captured at the same time (t=%g)", later.time)
                continue
            total = total + (later.velocity - earlier.velocity) / dt
            pairs += 1
        if pairs == 0:
            return Vector2D.zero()
        return total / pairs

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def latest(self) -> ContactSample:
        return self._samples[-1]

    @property
    def samples(self) -> List[ContactSample]:
        """History, oldest first."""
        return list(self._samples)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    @property
    def time(self) -> float:
        return self.latest.time

    @property
    def position(self) -> Vector2D:
        return self.latest.position

    @property
    def velocity(self) -> Vector2D:
        return self.latest.velocity

    @property
    def acceleration(self) -> Vector2D:
        return self._acceleration

    @property
    def error(self) -> SensorError:
        return self.latest.error

    @property
    def emitter(self) -> Emitter:
        return self.latest.emitter

    @property
    def rssi(self) -> float:
        return self.latest.rssi

    @property
    def snr(self) -> float:
        return self.latest.snr

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return (f"TrackedContact({self.contact_class.value}, samples={len(self)}, "
                f"position={self.position!r}, acceleration={self._acceleration!r})")


Contact = Union[SearchContact, TrackedContact]
