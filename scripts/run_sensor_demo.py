#!/usr/bin/env python3
"""
Run the sensor fusion loop against a simulated sensor.

A stationary observer sweeps for a handful of randomly placed, accelerating
targets. After the first full sweep every contact on the board gets a
tracking job, and each tick a firing solution is computed for every tracked
contact. The summary compares what the board believes with the truth.

Usage:
    python scripts/run_sensor_demo.py
    python scripts/run_sensor_demo.py --targets 6 --ticks 600 --seed 7
    python scripts/run_sensor_demo.py --selection earliest_positive --log-level DEBUG
"""

import argparse
import math
import random
import sys
from pathlib import Path

# Add project root to path for proper imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from sensorfusion.config import FusionConfig, configure_logging
from sensorfusion.contacts import TrackedContact
from sensorfusion.draw import Canvas
from sensorfusion.intercept import FiringSolution, RootSelection
from sensorfusion.physics import Vector2D
from sensorfusion.scheduler import SensorScheduler
from sensorfusion.sensor import ContactClass
from sensorfusion.simulation import SimulatedObject, SimulatedSensor

TARGET_CLASSES = [ContactClass.FIGHTER, ContactClass.FRIGATE, ContactClass.CRUISER]


def create_targets(count: int, rng: random.Random, max_range: float) -> list:
    """Scatter targets in a ring around the origin, each with its own thrust."""
    targets = []
    for i in range(count):
        bearing = 2 * math.pi * i / count + rng.uniform(-0.2, 0.2)
        distance = rng.uniform(0.1, 0.5) * max_range
        targets.append(SimulatedObject(
            contact_class=rng.choice(TARGET_CLASSES),
            position=Vector2D.from_polar(distance, bearing),
            velocity=Vector2D(rng.uniform(-100, 100), rng.uniform(-100, 100)),
            acceleration=Vector2D(rng.uniform(-5, 5), rng.uniform(-5, 5)),
        ))
    return targets


def nearest_truth(contact, targets):
    same_class = [t for t in targets if t.contact_class == contact.contact_class] or targets
    return min(same_class, key=lambda t: t.position.distance_to(contact.position))


def main():
    parser = argparse.ArgumentParser(
        description="Run the scan -> fuse -> schedule -> solve loop on a simulated sensor",
    )
    parser.add_argument(
        "--targets",
        type=int,
        default=4,
        help="Number of simulated targets (default: 4)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=300,
        help="Ticks to simulate (default: 300)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for target placement and measurement noise (default: 42)",
    )
    parser.add_argument(
        "--bullet-speed",
        type=float,
        default=1000.0,
        help="Projectile speed in m/s for firing solutions (default: 1000)",
    )
    parser.add_argument(
        "--selection",
        choices=[s.value for s in RootSelection],
        default=RootSelection.LEGACY.value,
        help="Root selection policy for firing solutions (default: legacy)",
    )
    parser.add_argument(
        "--config",
        help="Path to a fusion config JSON (default: environment / built-in)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: SENSORFUSION_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)
    config = FusionConfig.from_json(args.config) if args.config else FusionConfig.from_env()
    selection = RootSelection(args.selection)

    rng = random.Random(args.seed)
    targets = create_targets(args.targets, rng, config.sensor.max_range)
    sensor = SimulatedSensor(objects=targets, config=config, seed=args.seed)
    scheduler = SensorScheduler(sensor, config=config)

    sweep_ticks = math.ceil(2 * math.pi / config.sensor.search_width) + args.targets
    solutions = {}
    solved_ticks = 0

    print("=" * 70)
    print("SENSOR FUSION DEMO")
    print(f"Targets: {args.targets} | Ticks: {args.ticks} | Seed: {args.seed} | "
          f"Selection: {selection.value}")
    print("=" * 70)

    for tick in range(args.ticks):
        scheduler.tick(sensor.owner)
        sensor.step()

        if tick == sweep_ticks:
            for contact_id in scheduler.board.ids():
                scheduler.start_tracking(contact_id)
            print(f"\nTick {tick}: tracking {scheduler.tracked_ids}")

        for contact_id, contact in scheduler.board.tracked():
            solution = FiringSolution.solve(sensor.owner, args.bullet_speed, contact, selection)
            if solution is not None:
                solutions[contact_id] = solution
                solved_ticks += 1

    canvas = Canvas()
    scheduler.draw_contacts(canvas)

    print(f"\n{'=' * 70}")
    print("BOARD SUMMARY")
    print(f"{'=' * 70}")
    print(f"{'Id':<4} {'Class':<10} {'Kind':<9} {'Samples':<8} {'Pos err (m)':<12} "
          f"{'Acc err':<9} {'Impact (s)':<10}")
    print("-" * 70)

    position_errors = []
    acceleration_errors = []
    for contact_id, contact in scheduler.board.items():
        truth = nearest_truth(contact, targets)
        position_error = contact.position.distance_to(truth.position)
        position_errors.append(position_error)

        if isinstance(contact, TrackedContact):
            kind, samples = "tracked", len(contact)
            accel_error = contact.acceleration.distance_to(truth.acceleration)
            acceleration_errors.append(accel_error)
            accel_text = f"{accel_error:.2f}"
        else:
            kind, samples, accel_text = "search", 1, "-"

        solution = solutions.get(contact_id)
        impact_text = f"{solution.impact_time:.2f}" if solution else "-"
        print(f"{contact_id:<4} {contact.contact_class.value:<10} {kind:<9} {samples:<8} "
              f"{position_error:<12.1f} {accel_text:<9} {impact_text:<10}")

    print(f"\n{'=' * 70}")
    print("STATISTICS")
    print(f"{'=' * 70}")
    print(f"Contacts on board: {scheduler.board.count()} (truth: {len(targets)})")
    print(f"Scans taken: {sensor.scans_taken}")
    print(f"Firing solutions produced: {solved_ticks}")
    print(f"Debug lines drawn: {len(canvas)}")
    if position_errors:
        errors = np.array(position_errors)
        print(f"Position error: mean {errors.mean():.1f} m, "
              f"median {np.median(errors):.1f} m, max {errors.max():.1f} m")
    if acceleration_errors:
        errors = np.array(acceleration_errors)
        print(f"Acceleration error: mean {errors.mean():.2f} m/s^2, max {errors.max():.2f} m/s^2")
    if solutions:
        impact_times = np.array([s.impact_time for s in solutions.values()])
        print(f"Impact times: min {impact_times.min():.2f} s, max {impact_times.max():.2f} s")


if __name__ == "__main__":
    main()
