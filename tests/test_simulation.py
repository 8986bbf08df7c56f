#!/usr/bin/env python3
"""
Test Suite for the Simulated Sensor Host

Tests cover:
1. Beam geometry: sector and range gate membership
2. Signal model: SNR falloff with distance
3. Scans: nearest visible object, exact and seeded noisy measurements
4. Stepping objects and the clock
5. End-to-end: search sweep, fusion and tracking driven by the scheduler
"""

import math

import pytest

from sensorfusion.contacts import SearchContact, TrackedContact
from sensorfusion.physics import Vector2D
from sensorfusion.scheduler import SensorScheduler
from sensorfusion.sensor import ContactClass, Emitter
from sensorfusion.simulation import SimulatedObject, SimulatedSensor


# =============================================================================
# FIXTURES
# =============================================================================

def fighter_at(x, y=0.0, velocity=(0.0, 0.0), acceleration=(0.0, 0.0)):
    return SimulatedObject(ContactClass.FIGHTER, Vector2D(x, y),
                           Vector2D(*velocity), Vector2D(*acceleration))


@pytest.fixture
def sensor():
    return SimulatedSensor(objects=[fighter_at(5000.0)])


# =============================================================================
# BEAM AND SIGNAL TESTS
# =============================================================================

class TestBeam:
    """Tests for in_beam."""

    def test_initial_beam(self, sensor):
        assert sensor.heading == 0.0
        assert sensor.width == pytest.approx(math.pi / 8)
        assert sensor.min_distance == 0.0
        assert sensor.max_distance == 25_000.0

    @pytest.mark.parametrize("point,expected", [
        ((1000, 0), True),
        ((1000, 190), True),
        ((1000, 300), False),
        ((0, 1000), False),
        ((-1000, 0), False),
        ((30_000, 0), False),
    ])
    def test_sector(self, sensor, point, expected):
        assert sensor.in_beam(Vector2D(*point)) == expected

    def test_range_gate(self, sensor):
        sensor.point(0.0, math.pi / 8, 2000.0, 3000.0)
        assert not sensor.in_beam(Vector2D(1000, 0))
        assert sensor.in_beam(Vector2D(2500, 0))
        assert not sensor.in_beam(Vector2D(3500, 0))

    def test_heading_wraps(self, sensor):
        """A beam pointed across -pi/pi still sees both sides."""
        sensor.point(math.pi, math.pi / 8, 0.0, 25_000.0)
        assert sensor.in_beam(Vector2D(-1000, 10))
        assert sensor.in_beam(Vector2D(-1000, -10))


class TestSignal:
    """Tests for snr_at."""

    @pytest.mark.parametrize("distance,expected", [
        (1000.0, 50.0),
        (10_000.0, 30.0),
        (100.0, 70.0),
        (0.0, 110.0),
    ])
    def test_falloff(self, sensor, distance, expected):
        assert sensor.snr_at(distance) == pytest.approx(expected)


# =============================================================================
# SCAN TESTS
# =============================================================================

class TestScan:
    """Tests for scan."""

    def test_exact_scan(self, sensor):
        result = sensor.scan()
        assert result.contact_class is ContactClass.FIGHTER
        assert result.position == Vector2D(5000, 0)
        assert result.snr == pytest.approx(sensor.snr_at(5000.0))
        assert sensor.scans_taken == 1

    def test_empty_beam(self, sensor):
        sensor.point(math.pi / 2, math.pi / 8, 0.0, 25_000.0)
        assert sensor.scan() is None
        assert sensor.scans_taken == 1

    def test_nearest_object_wins(self, sensor):
        sensor.add_object(fighter_at(2000.0))
        assert sensor.scan().position == Vector2D(2000, 0)

    def test_seeded_noise_is_reproducible(self):
        first = SimulatedSensor(objects=[fighter_at(5000.0)], seed=3)
        second = SimulatedSensor(objects=[fighter_at(5000.0)], seed=3)
        assert [first.scan() for _ in range(5)] == [second.scan() for _ in range(5)]

    def test_noisy_measurement_stays_in_region(self):
        """The true position lies inside the region reported for a noisy scan."""
        truth = Vector2D(8000, 1500)
        sensor = SimulatedSensor(objects=[fighter_at(truth.x, truth.y)], seed=11)
        sensor.point(truth.angle, math.pi / 8, 0.0, 25_000.0)
        for _ in range(50):
            emitter = Emitter.capture(sensor.owner.position, sensor)
            contact = SearchContact.from_scan(0.0, emitter, sensor.scan())
            assert contact.position != truth
            assert contact.get_initial_area().contains(truth)


class TestStepping:
    """Tests for step."""

    def test_step_moves_objects_and_clock(self):
        target = fighter_at(0.0, velocity=(60.0, 0.0), acceleration=(0.0, 120.0))
        sensor = SimulatedSensor(objects=[target])
        for _ in range(60):
            sensor.step()
        assert sensor.current_time() == pytest.approx(1.0)
        assert target.position.x == pytest.approx(60.0)
        assert target.position.y == pytest.approx(60.0)
        assert target.velocity == Vector2D(60, 120)


# =============================================================================
# END-TO-END TESTS
# =============================================================================

class TestScheduledSensor:
    """Scheduler driving the simulated host."""

    def test_sweep_finds_single_contact(self, sensor):
        """Repeated sweeps over one object keep one board entry."""
        scheduler = SensorScheduler(sensor)
        sensor.run(scheduler, 40)
        assert scheduler.board.count() == 1
        assert sensor.scans_taken == 40

    def test_sweep_finds_separated_contacts(self):
        sensor = SimulatedSensor(objects=[fighter_at(5000.0), fighter_at(0.0, 7000.0),
                                          fighter_at(-3000.0, -3000.0)])
        scheduler = SensorScheduler(sensor)
        sensor.run(scheduler, 40)
        assert scheduler.board.count() == 3

    def test_tracking_estimates_acceleration(self):
        """A tracked accelerating object reports its acceleration."""
        target = fighter_at(5000.0, velocity=(0.0, 50.0), acceleration=(0.0, 10.0))
        sensor = SimulatedSensor(objects=[target])
        scheduler = SensorScheduler(sensor)
        sensor.run(scheduler, 1)
        scheduler.start_tracking(0)
        sensor.run(scheduler, 20)

        contact = scheduler.board.get(0)
        assert isinstance(contact, TrackedContact)
        assert len(contact) == contact.capacity
        assert contact.acceleration.x == pytest.approx(0.0, abs=1e-6)
        assert contact.acceleration.y == pytest.approx(10.0, rel=1e-6)
        assert contact.position.distance_to(target.position) < 5.0
