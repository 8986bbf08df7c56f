"""Sensor fusion and targeting core for a tick-driven 2D vehicle controller."""

from .physics import (
    TICK_LENGTH,
    Vector2D,
    angle_diff,
    normalize_angle,
)

from .polynomial import (
    Roots,
    solve_linear,
    solve_quadratic,
    solve_cubic_normalized,
    solve_quartic_depressed,
    solve_quartic,
)

from .geometry import (
    Shape,
    EllipticalShape,
    Ellipse,
    Circle,
)

from .kinematics import (
    HasPosition,
    HasVelocity,
    HasAcceleration,
    HasHeading,
    HasAngularVelocity,
    KinematicModel,
)

from .config import (
    SensorConfig,
    ErrorModelConfig,
    TrackingConfig,
    FusionConfig,
    configure_logging,
)

from .sensor import (
    ContactClass,
    MaxAcceleration,
    SensorError,
    ScanResult,
    Emitter,
    SensorHost,
)

from .contacts import (
    Contact,
    ContactSample,
    SearchContact,
    TrackedContact,
)

from .board import (
    ContactBoard,
    ContactNotFound,
)

from .scheduler import (
    SensorJob,
    SensorJobKind,
    SearchSensor,
    TrackingSensor,
    SensorScheduler,
)

from .intercept import (
    RootSelection,
    FiringSolution,
    Intercept,
)

from .draw import (
    Colour,
    Canvas,
)

from .simulation import (
    SimulatedObject,
    SimulatedSensor,
)

__all__ = [
    "TICK_LENGTH", "Vector2D", "angle_diff", "normalize_angle",
    "Roots", "solve_linear", "solve_quadratic", "solve_cubic_normalized",
    "solve_quartic_depressed", "solve_quartic",
    "Shape", "EllipticalShape", "Ellipse", "Circle",
    "HasPosition", "HasVelocity", "HasAcceleration", "HasHeading",
    "HasAngularVelocity", "KinematicModel",
    "SensorConfig", "ErrorModelConfig", "TrackingConfig", "FusionConfig",
    "configure_logging",
    "ContactClass", "MaxAcceleration", "SensorError", "ScanResult", "Emitter",
    "SensorHost",
    "Contact", "ContactSample", "SearchContact", "TrackedContact",
    "ContactBoard", "ContactNotFound",
    "SensorJob", "SensorJobKind", "SearchSensor", "TrackingSensor", "SensorScheduler",
    "RootSelection", "FiringSolution", "Intercept",
    "Colour", "Canvas",
    "SimulatedObject", "SimulatedSensor",
]
