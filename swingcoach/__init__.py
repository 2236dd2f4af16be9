"""
SwingCoach

Golf swing analysis from pose landmarks: phase segmentation,
biomechanical metrics and grading.

Usage:
    from swingcoach import SwingAnalyzer

    analysis = SwingAnalyzer().analyze_frames(pose_frames)
    print(analysis.letter_grade)
"""

from .core import (
    AnalysisParameters,
    DEFAULT_PARAMETERS,
    AnalysisError,
    InsufficientDataError,
    LowConfidenceError,
    SwingAnalyzer,
)
from .core.domain import PoseFrame, PoseLandmark, BodyPart, SwingPhase, GolfClub

__version__ = "1.0.0"

__all__ = [
    "AnalysisParameters",
    "DEFAULT_PARAMETERS",
    "AnalysisError",
    "InsufficientDataError",
    "LowConfidenceError",
    "SwingAnalyzer",
    "PoseFrame",
    "PoseLandmark",
    "BodyPart",
    "SwingPhase",
    "GolfClub",
]
