"""
Core swing analysis: domain models, pipeline services and parameters.
"""

from .config import AnalysisParameters, DEFAULT_PARAMETERS
from .errors import AnalysisError, InsufficientDataError, LowConfidenceError
from .services import SwingAnalyzer

__all__ = [
    "AnalysisParameters",
    "DEFAULT_PARAMETERS",
    "AnalysisError",
    "InsufficientDataError",
    "LowConfidenceError",
    "SwingAnalyzer",
]
