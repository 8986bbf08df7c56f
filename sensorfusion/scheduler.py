#!/usr/bin/env python3
"""
Sensor Scheduler

Shares one physical sensor between a wide search sweep and any number of
narrow tracking beams. Each tick exactly one job runs:

    scan()   - execute the current job with the beam set last tick
    adjust() - advance the rotation and aim the beam for the next job

Beam parameters set during adjust() are only sampled by the host on the next
tick, so adjust always plans one tick ahead (own position and contact regions
are projected forward by one tick length).

Search sweeps raster around the vessel one beam width at a time; after a hit
the same bearing is rescanned with the range gate pushed beyond the contact
to find anything hiding behind it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .board import ContactBoard, ContactNotFound
from .config import FusionConfig
from .contacts import SearchContact, TrackedContact
from .draw import Canvas
from .kinematics import bearing_to, position_after
from .sensor import Emitter, SensorHost

logger = logging.getLogger(__name__)


# =============================================================================
# JOBS
# =============================================================================

class SensorJobKind(Enum):
    """Kinds of sensor duty."""
    SEARCH = "search"
    TRACK = "track"


@dataclass(frozen=True)
class SensorJob:
    """One slot in the job rotation."""
    kind: SensorJobKind
    contact_id: Optional[int] = None

    @classmethod
    def search(cls) -> SensorJob:
        return cls(SensorJobKind.SEARCH)

    @classmethod
    def track(cls, contact_id: int) -> SensorJob:
        return cls(SensorJobKind.TRACK, contact_id)

    @property
    def is_track(self) -> bool:
        return self.kind is SensorJobKind.TRACK

    def __repr__(self) -> str:
        if self.is_track:
            return f"Track({self.contact_id})"
        return "Search"


# =============================================================================
# SEARCH SENSOR
# =============================================================================

class SearchSensor:
    """
    Wide-beam raster search.

    Remembers the heading and result of its last scan so the next adjustment
    can either look behind a found contact or move on to the next sector.
    """

    def __init__(self, host: SensorHost, config: Optional[FusionConfig] = None):
        self.host = host
        self.config = config or FusionConfig()
        self.last_heading = 0.0
        self.last_contact: Optional[SearchContact] = None

    def scan(self, own) -> Optional[SearchContact]:
        """
        Sweep the current beam.

        Args:
            own: Own vessel (needs a position)

        Returns:
            SearchContact for a detection, otherwise None
        """
        emitter = Emitter.capture(own.position, self.host)
        result = self.host.scan()
        contact = None
        if result is not None:
            contact = SearchContact.from_scan(
                self.host.current_time(), emitter, result, self.config.error_model)

        self.last_heading = self.host.heading
        self.last_contact = contact
        return contact

    def adjust(self, own) -> None:
        """Aim the beam for the next search tick."""
        sensor = self.config.sensor
        tick = self.host.tick_length

        if self.last_contact is not None:
            contact = self.last_contact
            area = contact.get_area_after(contact.time_elapsed(self.host.current_time()) + tick)
            far_edge = area.max_distance_to(position_after(own, tick))
            self.host.point(self.last_heading, sensor.search_width, far_edge, sensor.max_range)
        else:
            self.host.point(self.last_heading + sensor.search_width,
                            sensor.search_width, 0.0, sensor.max_range)


# =============================================================================
# TRACKING SENSOR
# =============================================================================

class TrackingSensor:
    """Narrow-beam follow-up on a single contact."""

    def __init__(self, host: SensorHost, config: Optional[FusionConfig] = None):
        self.host = host
        self.config = config or FusionConfig()

    def scan(self, own, contact: TrackedContact) -> Optional[TrackedContact]:
        """
        Refresh a tracked contact with the current beam.

        Returns:
            The updated contact, or None if the beam found nothing
        """
        emitter = Emitter.capture(own.position, self.host)
        result = self.host.scan()
        if result is None:
            return None
        contact.update(self.host.current_time(), emitter, result, self.config.error_model)
        return contact

    def adjust(self, own, contact: TrackedContact) -> None:
        """Centre a narrow beam and range gate on the contact's region one tick ahead."""
        tick = self.host.tick_length
        area = contact.get_area_after(contact.time_elapsed(self.host.current_time()) + tick)
        own_next = position_after(own, tick)
        near, far = area.minmax_distance_to(own_next)
        heading = bearing_to(own_next, area.centre)
        logger.debug("Tracking centre %r, heading %.4f, range %.1f - %.1f",
                     area.centre, heading, near, far)
        self.host.point(heading, self.config.sensor.track_width, near, far)


# =============================================================================
# SCHEDULER
# =============================================================================

class SensorScheduler:
    """
    Cycles the shared sensor through a job rotation, one job per tick.

    The rotation starts as a single search job. Tracking jobs are added with
    start_tracking() or by replacing the rotation wholesale.
    """

    def __init__(
        self,
        host: SensorHost,
        board: Optional[ContactBoard] = None,
        config: Optional[FusionConfig] = None
    ):
        self.host = host
        self.config = config or FusionConfig()
        self.board = board if board is not None else ContactBoard()
        self.search_sensor = SearchSensor(host, self.config)
        self.tracking_sensor = TrackingSensor(host, self.config)
        self._job_rotation: List[SensorJob] = [SensorJob.search()]
        self.job_index = 0

    # -------------------------------------------------------------------------
    # Per-tick operation
    # -------------------------------------------------------------------------

    @property
    def current_job(self) -> Optional[SensorJob]:
        if 0 <= self.job_index < len(self._job_rotation):
            return self._job_rotation[self.job_index]
        return None

    def scan(self, own) -> None:
        """Execute the current job."""
        job = self.current_job
        if job is None:
            return

        now = self.host.current_time()
        if not job.is_track:
            contact = self.search_sensor.scan(own)
            if contact is not None:
                self.board.add(contact, now)
            return

        stored = self.board.take(job.contact_id)
        if stored is None:
            logger.debug("Track job for missing contact %s", job.contact_id)
            return
        if isinstance(stored, SearchContact):
            contact = TrackedContact.from_search(stored, self.config.tracking.history_capacity)
        else:
            contact = stored

        updated = self.tracking_sensor.scan(own, contact)
        if updated is None:
            # Missed scans leave the stored contact untouched
            logger.debug("Tracking scan missed contact %d", job.contact_id)
            self.board.update(job.contact_id, stored)
        else:
            self.board.update(job.contact_id, updated)

    def adjust(self, own) -> None:
        """Advance the rotation and aim the beam for the next job."""
        if self.job_index + 1 >= len(self._job_rotation):
            self.job_index = 0
        else:
            self.job_index += 1

        job = self.current_job
        if job is None:
            return
        if not job.is_track:
            self.search_sensor.adjust(own)
            return

        contact = self.board.get(job.contact_id)
        if contact is None:
            logger.debug("Cannot aim at missing contact %s", job.contact_id)
        elif isinstance(contact, TrackedContact):
            self.tracking_sensor.adjust(own, contact)
        else:
            self.tracking_sensor.adjust(own, TrackedContact.from_search(
                contact, self.config.tracking.history_capacity))

    def tick(self, own) -> None:
        """One full tick: scan with the current job, then plan the next."""
        self.scan(own)
        self.adjust(own)

    # -------------------------------------------------------------------------
    # Rotation control
    # -------------------------------------------------------------------------

    @property
    def job_rotation(self) -> List[SensorJob]:
        return list(self._job_rotation)

    @property
    def tracked_ids(self) -> List[int]:
        return [job.contact_id for job in self._job_rotation if job.is_track]

    def set_job_rotation(self, rotation: Sequence[SensorJob]) -> None:
        """
        Replace the job rotation.

        Tracked contacts whose track job disappears are demoted to search
        contacts, discarding their history. The cursor follows the current
        job into the new rotation; if that job is gone the next scan is
        skipped.
        """
        new_tracked = {job.contact_id for job in rotation if job.is_track}
        for contact_id in self.tracked_ids:
            if contact_id not in new_tracked:
                logger.debug("Demoting contact %d to search", contact_id)
                self.board.untrack(contact_id)

        current = self.current_job
        self._job_rotation = list(rotation)
        if current is None or current not in self._job_rotation:
            # No beam is aimed for anything in the new rotation; nothing runs
            # until the next adjust starts over at the front
            logger.debug("Current job %r not in new rotation", current)
            self.job_index = -1
        elif self.current_job != current:
            self.job_index = self._job_rotation.index(current)

    def start_tracking(self, contact_id: int) -> None:
        """
        Add a track job for a contact on the board.

        Raises:
            ContactNotFound: If contact_id is not on the board
        """
        if contact_id not in self.board:
            raise ContactNotFound(contact_id)
        if contact_id in self.tracked_ids:
            return
        self.set_job_rotation(self._job_rotation + [SensorJob.track(contact_id)])

    def stop_tracking(self, contact_id: int) -> None:
        """Drop the contact's track job, demoting it."""
        self.set_job_rotation([
            job for job in self._job_rotation
            if not (job.is_track and job.contact_id == contact_id)
        ])

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def draw_contacts(self, canvas: Canvas) -> None:
        logger.debug("Contacts: %d", self.board.count())
        logger.debug("Job rotation: %s", self._job_rotation)
        logger.debug("Next job: %d", self.job_index)
        self.board.draw(canvas, self.host.current_time())
