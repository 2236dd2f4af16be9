"""
Services Layer

The stages of the swing analysis pipeline and the analyzer that
chains them together.
"""

from .angle_calculator import AngleCalculator
from .feature_extractor import KinematicFeatureExtractor
from .phase_detector import PhaseBoundaryDetector
from .phase_validator import PhaseValidator
from .metrics_calculator import MetricsCalculator
from .scoring import SwingScorer
from .swing_analyzer import SwingAnalyzer

__all__ = [
    "AngleCalculator",
    "KinematicFeatureExtractor",
    "PhaseBoundaryDetector",
    "PhaseValidator",
    "MetricsCalculator",
    "SwingScorer",
    "SwingAnalyzer",
]
