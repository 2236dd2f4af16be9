"""
REST API Routes

FastAPI routes for golf swing analysis.
Handles HTTP requests carrying pose frames from a pose-estimation client.
"""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from .schemas import (
    AnalyzeFramesRequest,
    SwingAnalysisResponse,
    PhaseIntervalSchema,
    RawMetricsSchema,
    SwingScoreSchema,
    CoachingTipSchema,
    GolfClubEnum,
    SwingPhaseEnum,
    ErrorResponse,
    HealthResponse,
)
from ..core.config import DEFAULT_PARAMETERS
from ..core.domain.analysis import GolfClub, SwingAnalysis, SwingScore
from ..core.errors import AnalysisError
from ..core.services import SwingAnalyzer

API_VERSION = "1.0.0"

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

# Stateless, safe to share between requests
analyzer = SwingAnalyzer()

# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running.

    Returns:
        Health status and version information
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        parameters_version=DEFAULT_PARAMETERS.version,
    )


# =============================================================================
# Swing Analysis
# =============================================================================

@router.post(
    "/analysis/frames",
    response_model=SwingAnalysisResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["Swing Analysis"],
    summary="Analyze a golf swing from pose frames"
)
def analyze_frames(request: AnalyzeFramesRequest):
    """
    Analyze a golf swing from pose frames detected by the client.

    Declared without ``async`` so FastAPI runs the CPU-bound analysis in
    its worker thread pool instead of on the event loop.

    Args:
        request: Pose frames, club and optional FPS

    Returns:
        Complete swing analysis, or 422 when the swing cannot be analyzed
    """
    frames = [frame.to_domain() for frame in request.frames]

    try:
        result = analyzer.analyze_frames(
            frames,
            club=GolfClub(request.club.value),
            fps=request.fps,
        )
    except AnalysisError as e:
        logger.warning(f"Swing analysis rejected: {e}")
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(detail=str(e), error=type(e).__name__).model_dump(),
        )
    except Exception as e:
        logger.error(f"Swing analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return _convert_analysis_to_response(result)


# =============================================================================
# Helper Functions
# =============================================================================

def _convert_score(score: Optional[SwingScore]) -> Optional[SwingScoreSchema]:
    if score is None:
        return None
    return SwingScoreSchema(
        score=score.score,
        grade=score.grade,
        feedback=score.feedback,
        details=score.details
    )


def _convert_analysis_to_response(result: SwingAnalysis) -> SwingAnalysisResponse:
    """Convert domain SwingAnalysis to API response schema."""
    metrics = result.metrics
    raw = metrics.raw

    phases = [
        PhaseIntervalSchema(
            name=SwingPhaseEnum(interval.name.value),
            start_frame=interval.start_frame,
            end_frame=interval.end_frame,
            duration_s=interval.duration_s,
            confidence=interval.confidence,
        )
        for interval in result.phases
    ]

    tips = [
        CoachingTipSchema(
            category=tip.category,
            priority=tip.priority,
            title=tip.title,
            description=tip.description,
            drill=tip.drill
        )
        for tip in result.tips
    ]

    raw_schema = RawMetricsSchema(
        tempo_ratio=raw.tempo_ratio,
        backswing_time=raw.backswing_time,
        downswing_time=raw.downswing_time,
        total_swing_time=raw.total_swing_time,
        shoulder_turn=raw.shoulder_turn,
        hip_turn=raw.hip_turn,
        x_factor=raw.x_factor,
        spine_angle=raw.spine_angle,
        weight_transfer=raw.weight_transfer,
        pressure_shift=raw.pressure_shift,
        balance_stability=raw.balance_stability,
        swing_plane=raw.swing_plane,
        club_path=raw.club_path,
        attack_angle=raw.attack_angle,
        shaft_angle=raw.shaft_angle,
        hand_position=list(raw.hand_position) if raw.hand_position else None,
        clubface_angle=raw.clubface_angle,
        low_point=raw.low_point,
        impact_velocity=raw.impact_velocity,
        swing_consistency=raw.swing_consistency,
        tempo_stability=raw.tempo_stability,
        plane_consistency=raw.plane_consistency,
    )

    return SwingAnalysisResponse(
        id=result.id,
        timestamp=result.timestamp,
        frame_count=result.frame_count,
        fps=result.fps,
        club=GolfClubEnum(result.club.value),
        overall_score=metrics.overall_score,
        letter_grade=metrics.letter_grade,
        confidence=metrics.confidence,
        phase_confidence=metrics.phase_confidence,
        phases=phases,
        metrics=raw_schema,
        metric_scores=metrics.metric_scores,
        tempo_score=_convert_score(metrics.tempo_score),
        rotation_score=_convert_score(metrics.rotation_score),
        weight_transfer_score=_convert_score(metrics.weight_transfer_score),
        swing_plane_score=_convert_score(metrics.swing_plane_score),
        tips=tips,
        summary=result.summary,
        key_frames={phase.value: frame for phase, frame in result.key_frames.items()},
        corrected_phases=[SwingPhaseEnum(phase.value) for phase in result.corrected_phases],
        degraded_frame_count=result.degraded_frame_count,
        parameters_version=result.parameters_version,
    )
