"""
Configuration for the sensor fusion core.

Tunable constants grouped by concern:
- Sensor beam geometry and range (search and tracking widths)
- Measurement error model (noise factors scaled by signal quality)
- Tracked-contact history depth

Configs load from a dict, a JSON file, or the environment (a .env file is
honoured through python-dotenv). Missing keys keep their defaults.
"""

import json
import logging
import math
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .physics import TICK_LENGTH


# Environment variables read by FusionConfig.from_env / configure_logging
ENV_CONFIG_PATH = "SENSORFUSION_CONFIG"
ENV_MAX_RANGE = "SENSORFUSION_MAX_RANGE"
ENV_LOG_LEVEL = "SENSORFUSION_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class SensorConfig:
    """Beam geometry for the scanning sensor."""
    max_range: float = 25_000.0
    search_width: float = math.pi / 8  # Wide raster sweep
    track_width: float = math.pi / 32  # Narrow beam on one contact
    tick_length: float = TICK_LENGTH

    def validate(self) -> None:
        if self.max_range <= 0:
            raise ValueError(f"max_range must be positive, got {self.max_range}")
        if not 0 < self.search_width <= 2 * math.pi:
            raise ValueError(f"search_width must be in (0, 2pi], got {self.search_width}")
        if not 0 < self.track_width <= 2 * math.pi:
            raise ValueError(f"track_width must be in (0, 2pi], got {self.track_width}")
        if self.tick_length <= 0:
            raise ValueError(f"tick_length must be positive, got {self.tick_length}")


@dataclass
class ErrorModelConfig:
    """
    Scale factors turning signal-to-noise ratio into error bounds.

    Each bound is factor * 10^(-snr/10) * rng_range.
    """
    bearing_noise_factor: float = math.radians(10.0)
    distance_noise_factor: float = 1e4
    velocity_noise_factor: float = 1e2
    rng_range: float = 4.0

    def validate(self) -> None:
        for name, value in asdict(self).items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass
class TrackingConfig:
    """History kept per tracked contact."""
    history_capacity: int = 9

    def validate(self) -> None:
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be at least 1, got {self.history_capacity}")


@dataclass
class FusionConfig:
    """Complete configuration for the fusion core."""
    sensor: SensorConfig = field(default_factory=SensorConfig)
    error_model: ErrorModelConfig = field(default_factory=ErrorModelConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)

    def __post_init__(self):
        self.sensor.validate()
        self.error_model.validate()
        self.tracking.validate()

    @classmethod
    def from_json(cls, path: str) -> 'FusionConfig':
        """Load configuration from JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Fusion config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FusionConfig':
        """Create configuration from dictionary."""
        sensor_data = data.get("sensor", {})
        error_data = data.get("error_model", {})
        tracking_data = data.get("tracking", {})

        sensor = SensorConfig(
            max_range=float(sensor_data.get("max_range", SensorConfig.max_range)),
            search_width=float(sensor_data.get("search_width", SensorConfig.search_width)),
            track_width=float(sensor_data.get("track_width", SensorConfig.track_width)),
            tick_length=float(sensor_data.get("tick_length", SensorConfig.tick_length)),
        )
        error_model = ErrorModelConfig(
            bearing_noise_factor=float(error_data.get(
                "bearing_noise_factor", ErrorModelConfig.bearing_noise_factor)),
            distance_noise_factor=float(error_data.get(
                "distance_noise_factor", ErrorModelConfig.distance_noise_factor)),
            velocity_noise_factor=float(error_data.get(
                "velocity_noise_factor", ErrorModelConfig.velocity_noise_factor)),
            rng_range=float(error_data.get("rng_range", ErrorModelConfig.rng_range)),
        )
        tracking = TrackingConfig(
            history_capacity=int(tracking_data.get(
                "history_capacity", TrackingConfig.history_capacity)),
        )

        return cls(sensor=sensor, error_model=error_model, tracking=tracking)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'FusionConfig':
        """
        Build configuration from the environment.

        Loads a .env file first, then reads SENSORFUSION_CONFIG (path to a
        JSON config) and SENSORFUSION_MAX_RANGE (override for the sensor
        range). Variables already set in the process take precedence over
        the .env file.
        """
        load_dotenv(dotenv_path)

        config_path = os.getenv(ENV_CONFIG_PATH)
        config = cls.from_json(config_path) if config_path else cls()

        max_range = os.getenv(ENV_MAX_RANGE)
        if max_range:
            config.sensor.max_range = float(max_range)
            config.sensor.validate()

        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Set up root logging for scripts and interactive use.

    Args:
        level: Level name ("DEBUG", "INFO", ...); defaults to
               SENSORFUSION_LOG_LEVEL or WARNING
    """
    level_name = (level or os.getenv(ENV_LOG_LEVEL) or "WARNING").upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
