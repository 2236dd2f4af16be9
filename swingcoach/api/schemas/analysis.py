"""
Analysis API Schemas

Pydantic models for swing analysis API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum
from datetime import datetime

from .pose import PoseFrameSchema


class GolfClubEnum(str, Enum):
    """Golf club types for API."""
    DRIVER = "driver"
    WOOD_3 = "wood_3"
    WOOD_5 = "wood_5"
    HYBRID = "hybrid"
    IRON_4 = "iron_4"
    IRON_5 = "iron_5"
    IRON_6 = "iron_6"
    IRON_7 = "iron_7"
    IRON_8 = "iron_8"
    IRON_9 = "iron_9"
    PITCHING_WEDGE = "pitching_wedge"
    SAND_WEDGE = "sand_wedge"
    LOB_WEDGE = "lob_wedge"
    PUTTER = "putter"


class SwingPhaseEnum(str, Enum):
    """Swing phases for API."""
    ADDRESS = "address"
    APPROACH = "approach"
    BACKSWING = "backswing"
    TOP = "top"
    DOWNSWING = "downswing"
    IMPACT = "impact"
    FOLLOW_THROUGH = "follow_through"


class PhaseIntervalSchema(BaseModel):
    """
    One detected swing phase.
    """
    name: SwingPhaseEnum = Field(..., description="Swing phase")
    start_frame: int = Field(..., ge=0, description="First frame of the phase")
    end_frame: int = Field(..., ge=0, description="First frame of the next phase")
    duration_s: float = Field(..., ge=0.0, description="Phase duration in seconds")
    confidence: float = Field(..., ge=0.0, le=1.0, description="How well the frames fit this phase")


class RawMetricsSchema(BaseModel):
    """
    Biomechanical metrics. None means couldn't be calculated.
    """
    tempo_ratio: float = Field(..., description="Backswing time / downswing time")
    backswing_time: float = Field(..., description="Backswing duration (s)")
    downswing_time: float = Field(..., description="Downswing duration (s)")
    total_swing_time: float = Field(..., description="Whole clip duration (s)")

    shoulder_turn: Optional[float] = Field(None, description="Shoulder rotation address -> top (degrees)")
    hip_turn: Optional[float] = Field(None, description="Hip rotation address -> top (degrees)")
    x_factor: Optional[float] = Field(None, description="Shoulder-hip separation (degrees)")
    spine_angle: Optional[float] = Field(None, description="Spine tilt at impact (degrees)")

    weight_transfer: Optional[float] = Field(None, description="Weight transfer at impact (%)")
    pressure_shift: Optional[float] = Field(None, description="Weight shift during downswing (%)")
    balance_stability: Optional[float] = Field(None, description="0-100, higher is steadier")

    swing_plane: Optional[float] = Field(None, description="Wrist-line plane (degrees)")
    club_path: Optional[float] = Field(None, description="Wrist-line angle at impact (degrees)")
    attack_angle: Optional[float] = Field(None, description="Club-head travel into impact (degrees)")
    shaft_angle: Optional[float] = Field(None, description="Hands to club head at impact (degrees)")

    hand_position: Optional[List[float]] = Field(None, description="Hand centre [x, y] at impact")
    clubface_angle: Optional[float] = Field(None, description="Clubface proxy at impact (degrees)")
    low_point: Optional[float] = Field(None, description="Time of lowest hand position (s)")
    impact_velocity: Optional[float] = Field(None, description="Hand speed into impact")

    swing_consistency: Optional[float] = Field(None, description="0-100 body stability")
    tempo_stability: Optional[float] = Field(None, description="0-100 phase duration evenness")
    plane_consistency: Optional[float] = Field(None, description="0-100 wrist-plane steadiness")


class SwingScoreSchema(BaseModel):
    """
    Score for a specific aspect of the swing.
    """
    score: int = Field(..., ge=0, le=100, description="Score out of 100")
    grade: str = Field(..., description="Letter grade (A+ to F)")
    feedback: str = Field(..., description="Human-readable feedback")
    details: Optional[str] = Field(None, description="Additional details")

    class Config:
        json_schema_extra = {
            "example": {
                "score": 85,
                "grade": "A-",
                "feedback": "Good tempo, minor adjustments possible",
                "details": "Backswing/Downswing ratio: 2.7:1 (0.80s / 0.30s)"
            }
        }


class CoachingTipSchema(BaseModel):
    """
    Actionable coaching advice.
    """
    category: str = Field(..., description="Aspect of swing (e.g., 'Tempo', 'Rotation')")
    priority: int = Field(..., ge=1, le=5, description="Priority (1=highest)")
    title: str = Field(..., description="Short summary")
    description: str = Field(..., description="Detailed explanation")
    drill: Optional[str] = Field(None, description="Practice drill to fix issue")


class SwingAnalysisResponse(BaseModel):
    """
    Complete swing analysis result.

    This is the main response from the analyze endpoint.
    """
    # Identification
    id: str = Field(..., description="Unique analysis ID")
    timestamp: datetime = Field(..., description="When analysis was performed")

    # Clip info
    frame_count: int = Field(..., description="Frames analyzed")
    fps: float = Field(..., description="Frames per second used for durations")
    club: GolfClubEnum = Field(..., description="Golf club used")

    # Grade
    overall_score: float = Field(..., ge=0, le=100, description="Overall swing score")
    letter_grade: str = Field(..., description="Letter grade (A+ to F)")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Trust in this analysis")
    phase_confidence: float = Field(..., ge=0.0, le=1.0, description="Mean phase confidence")

    # Details
    phases: List[PhaseIntervalSchema] = Field(default_factory=list, description="Seven swing phases")
    metrics: RawMetricsSchema = Field(..., description="Raw biomechanical metrics")
    metric_scores: dict[str, float] = Field(default_factory=dict, description="Metric -> 0-100 score")
    tempo_score: Optional[SwingScoreSchema] = Field(None, description="Tempo analysis")
    rotation_score: Optional[SwingScoreSchema] = Field(None, description="Rotation analysis")
    weight_transfer_score: Optional[SwingScoreSchema] = Field(None, description="Weight transfer analysis")
    swing_plane_score: Optional[SwingScoreSchema] = Field(None, description="Swing plane analysis")

    # Coaching
    tips: List[CoachingTipSchema] = Field(default_factory=list, description="Improvement tips")
    summary: str = Field(..., description="Text summary of analysis")

    # Key frames for visualization
    key_frames: dict[str, int] = Field(default_factory=dict, description="Phase -> start frame mapping")
    corrected_phases: List[SwingPhaseEnum] = Field(default_factory=list, description="Phases whose boundary was forced")
    degraded_frame_count: int = Field(0, description="Frames with missing landmarks")
    parameters_version: str = Field(..., description="Analysis parameter set version")


class AnalyzeFramesRequest(BaseModel):
    """
    Request to analyze pre-extracted pose frames.

    Used when the client has already done pose detection.
    """
    frames: List[PoseFrameSchema] = Field(..., description="Pose frames of one swing, in order")
    club: GolfClubEnum = Field(GolfClubEnum.IRON_7, description="Club being used")
    fps: Optional[float] = Field(None, gt=0, description="Video FPS; derived from timestamps if omitted")


class ErrorResponse(BaseModel):
    """
    Analysis rejected by a quality gate.
    """
    detail: str = Field(..., description="Why the swing could not be analyzed")
    error: str = Field(..., description="Error type")


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
    parameters_version: str = Field(..., description="Analysis parameter set version")
