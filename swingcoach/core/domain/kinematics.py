"""
Kinematic Domain Models

Per-frame quantities derived from a PoseFrame by the feature extractor.

Any quantity that could not be derived (a landmark it needs was missing
or not visible) is set to its zero default and its name is added to
``missing``, so later stages can tell a defaulted zero from a measured one.
"""
from dataclasses import dataclass, field
from typing import Optional

Point = tuple[float, float]

# Names used in KinematicFrame.missing
CLUB_HEAD = "club_head"
VELOCITY = "velocity"
ACCELERATION = "acceleration"
WEIGHT_TRANSFER = "weight_transfer"
SHOULDER_ANGLE = "shoulder_angle"
HIP_ANGLE = "hip_angle"
SPINE_ANGLE = "spine_angle"
WRIST_ANGLE = "wrist_angle"
HAND_CENTER = "hand_center"
HEAD_POSITION = "head_position"


@dataclass(frozen=True)
class KinematicFrame:
    """
    Derived kinematics for a single frame.

    Positions are normalized image coordinates (y grows downward).
    Velocities and accelerations are in scaled units per second (see
    ``AnalysisParameters.position_scale``). Angles are in degrees.

    The club head is *estimated*: the midpoint of the wrists pushed down
    by a fixed club length. No club is actually detected.
    """
    frame_index: int
    time_s: float

    club_head: Point = (0.0, 0.0)
    velocity: Point = (0.0, 0.0)
    acceleration: Point = (0.0, 0.0)

    weight_transfer: float = 0.0         # Hip centre x as % of frame width
    shoulder_angle: float = 0.0          # Shoulder line, atan2
    hip_angle: float = 0.0               # Hip line, atan2
    spine_angle: float = 0.0             # Hip centre -> shoulder centre, from vertical
    wrist_angle: float = 0.0             # Wrist line, folded into [-90, 90)

    hand_center: Point = (0.0, 0.0)
    head_position: Point = (0.0, 0.0)

    landmark_confidence: float = 0.0     # Mean visibility of required landmarks
    missing: frozenset[str] = field(default_factory=frozenset)

    @property
    def speed(self) -> float:
        """Club-head speed magnitude."""
        return (self.velocity[0] ** 2 + self.velocity[1] ** 2) ** 0.5

    @property
    def vertical_velocity(self) -> float:
        """Club-head vertical velocity; negative means moving up the image."""
        return self.velocity[1]

    @property
    def is_degraded(self) -> bool:
        """True when any derived quantity was defaulted."""
        return bool(self.missing)

    def has(self, feature: str) -> bool:
        """Whether ``feature`` was actually measured in this frame."""
        return feature not in self.missing

    def value(self, feature: str) -> Optional[float]:
        """Scalar feature value, or None when it was defaulted."""
        if feature in self.missing:
            return None
        return getattr(self, feature)
