"""
Analysis Parameters

Every threshold and coefficient used by the pipeline, gathered in one
versioned, immutable parameter set.

The velocity thresholds, confidence coefficients and metric ideals were
tuned by hand on sample swings, not fitted to a labelled dataset. Bump
``version`` whenever a value changes so stored results can be traced
back to the parameters that produced them.
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class AnalysisParameters:
    version: str = "1.0"

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    assumed_frame_rate: float = 30.0
    min_frames: int = 30
    landmark_visibility: float = 0.5

    # -------------------------------------------------------------------------
    # Feature extraction
    # -------------------------------------------------------------------------

    club_length: float = 0.15       # Club head sits this far below the hands (normalized)
    position_scale: float = 100.0   # Normalized units -> velocity threshold units

    # -------------------------------------------------------------------------
    # Phase boundary detection
    # -------------------------------------------------------------------------

    address_window: int = 10
    address_speed: float = 5.0
    movement_speed: float = 10.0
    downswing_vertical_speed: float = 5.0
    follow_through_speed: float = 10.0

    # -------------------------------------------------------------------------
    # Phase confidence
    # -------------------------------------------------------------------------

    address_speed_ceiling: float = 20.0    # Average speed at which address confidence hits 0
    directional_confidence: float = 0.9    # Backswing/downswing moving the right way
    wrong_direction_confidence: float = 0.5
    impact_speed_reference: float = 50.0   # Average speed giving full impact confidence
    # Phases without a dedicated heuristic get 0.8 rather than full confidence,
    # so a segmentation built only from fallback boundaries cannot report 1.0.
    # Address confidence may reach 0 (no 0.5 floor) so a club that is already
    # moving at "address" pulls the overall confidence down.
    default_phase_confidence: float = 0.8
    min_phase_confidence: float = 0.5      # Below this, metrics are refused

    # -------------------------------------------------------------------------
    # Metrics
    # -------------------------------------------------------------------------

    consistency_landmark_visibility: float = 0.5
    balance_penalty: float = 2.0
    swing_consistency_penalty: float = 10.0
    tempo_stability_penalty: float = 20.0
    plane_consistency_penalty: float = 5.0

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    reference_frame_count: int = 90
    ideal_tempo_ratio: float = 3.0
    tempo_penalty: float = 20.0
    angle_penalty: float = 2.0             # Points lost per unit from the ideal
    penalties: dict[str, float] = field(default_factory=lambda: {
        "weight_transfer": 1.0,            # Percent, so a gentler slope than degrees
    })
    impact_velocity_divisor: float = 10.0
    ideals: dict[str, float] = field(default_factory=lambda: {
        "shoulder_turn": 90.0,
        "hip_turn": 50.0,
        "x_factor": 40.0,
        "weight_transfer": 85.0,
        "swing_plane": 60.0,
        "club_path": 0.0,
    })
    weights: dict[str, float] = field(default_factory=lambda: {
        "tempo_ratio": 0.15,
        "shoulder_turn": 0.10,
        "hip_turn": 0.10,
        "x_factor": 0.15,
        "weight_transfer": 0.15,
        "swing_plane": 0.10,
        "club_path": 0.10,
        "impact_velocity": 0.10,
        "swing_consistency": 0.05,
    })

    @property
    def frame_interval(self) -> float:
        """Seconds between frames at the assumed frame rate."""
        return 1.0 / self.assumed_frame_rate

    def with_overrides(self, **overrides) -> "AnalysisParameters":
        """Return a copy with some values replaced."""
        return replace(self, **overrides)


DEFAULT_PARAMETERS = AnalysisParameters()
