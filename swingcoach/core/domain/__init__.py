"""
Domain Models

Pure data structures representing golf swing analysis concepts.
No external dependencies - just Python dataclasses and enums.
"""

from .pose import PoseLandmark, PoseFrame, BodyPart, REQUIRED_BODY_PARTS
from .kinematics import KinematicFrame, Point
from .analysis import (
    SwingPhase,
    GolfClub,
    PhaseInterval,
    PhaseDetection,
    RawMetrics,
    SwingScore,
    CoachingTip,
    SwingMetrics,
    SwingAnalysis,
    LETTER_GRADES,
    letter_grade,
)

__all__ = [
    "PoseLandmark",
    "PoseFrame",
    "BodyPart",
    "REQUIRED_BODY_PARTS",
    "KinematicFrame",
    "Point",
    "SwingPhase",
    "GolfClub",
    "PhaseInterval",
    "PhaseDetection",
    "RawMetrics",
    "SwingScore",
    "CoachingTip",
    "SwingMetrics",
    "SwingAnalysis",
    "LETTER_GRADES",
    "letter_grade",
]
