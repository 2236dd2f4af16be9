"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    LandmarkSchema,
    PoseFrameSchema,
)

from .analysis import (
    GolfClubEnum,
    SwingPhaseEnum,
    PhaseIntervalSchema,
    RawMetricsSchema,
    SwingScoreSchema,
    CoachingTipSchema,
    SwingAnalysisResponse,
    AnalyzeFramesRequest,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Pose schemas
    "LandmarkSchema",
    "PoseFrameSchema",
    # Analysis schemas
    "GolfClubEnum",
    "SwingPhaseEnum",
    "PhaseIntervalSchema",
    "RawMetricsSchema",
    "SwingScoreSchema",
    "CoachingTipSchema",
    "SwingAnalysisResponse",
    "AnalyzeFramesRequest",
    "ErrorResponse",
    "HealthResponse",
]
