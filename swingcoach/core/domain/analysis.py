"""
Swing Analysis Domain Models

Data structures for swing analysis results: phases, raw metrics,
scores, grades and coaching feedback.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from datetime import datetime

from .kinematics import Point


class SwingPhase(Enum):
    """
    The seven phases of a golf swing, in temporal order.

    - ADDRESS: Setup position, club at rest
    - APPROACH: Takeaway starts, club begins to move
    - BACKSWING: Club moving up and back
    - TOP: Direction change at the top of the backswing
    - DOWNSWING: Club accelerating down
    - IMPACT: Peak club-head speed through the ball
    - FOLLOW_THROUGH: Deceleration after impact
    """
    ADDRESS = "address"
    APPROACH = "approach"
    BACKSWING = "backswing"
    TOP = "top"
    DOWNSWING = "downswing"
    IMPACT = "impact"
    FOLLOW_THROUGH = "follow_through"

    @classmethod
    def ordered(cls) -> tuple["SwingPhase", ...]:
        """All phases in the order they occur during a swing."""
        return tuple(cls)

    @property
    def position(self) -> int:
        """Index of this phase in the swing order."""
        return SwingPhase.ordered().index(self)


class GolfClub(Enum):
    """Golf club types - used for summary text and club-specific tips."""
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


GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "A-"),
    (80, "B+"),
    (75, "B"),
    (70, "B-"),
    (65, "C+"),
    (60, "C"),
    (55, "C-"),
    (50, "D+"),
    (45, "D"),
    (40, "D-"),
)

LETTER_GRADES: tuple[str, ...] = tuple(grade for _, grade in GRADE_THRESHOLDS) + ("F",)


def letter_grade(score: float) -> str:
    """Convert a 0-100 score to a letter grade (A+ ... F)."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


@dataclass(frozen=True)
class PhaseInterval:
    """
    One phase of the swing as a frame range.

    ``end_frame`` is the ``start_frame`` of the next phase; the last
    phase ends on the final frame of the clip.
    """
    name: SwingPhase
    start_frame: int
    end_frame: int
    duration_s: float
    confidence: float

    @property
    def frame_count(self) -> int:
        return max(0, self.end_frame - self.start_frame)

    def frames(self) -> range:
        """Frame indices belonging to this phase (end exclusive)."""
        return range(self.start_frame, max(self.start_frame, self.end_frame))


@dataclass(frozen=True)
class PhaseDetection:
    """
    Validated phase segmentation of a swing.

    Attributes:
        intervals: Seven PhaseIntervals in swing order
        confidence: Mean of the per-phase confidences
        frame_rate: Frame rate used to convert frames to seconds
        corrected_phases: Phases whose boundary had to be moved to keep order
    """
    intervals: tuple[PhaseInterval, ...]
    confidence: float
    frame_rate: float
    corrected_phases: tuple[SwingPhase, ...] = ()

    def get(self, phase: SwingPhase) -> PhaseInterval:
        """Get the interval for a phase."""
        return self.intervals[phase.position]

    def start(self, phase: SwingPhase) -> int:
        return self.get(phase).start_frame

    @property
    def key_frames(self) -> dict[SwingPhase, int]:
        return {interval.name: interval.start_frame for interval in self.intervals}


@dataclass(frozen=True)
class RawMetrics:
    """
    Biomechanical metrics computed from a segmented swing.

    None means the metric couldn't be calculated (landmarks not visible
    at the frames it depends on). Angles are in degrees, times in seconds.
    """
    # Timing
    tempo_ratio: float = 0.0
    backswing_time: float = 0.0
    downswing_time: float = 0.0
    total_swing_time: float = 0.0

    # Rotation
    shoulder_turn: Optional[float] = None
    hip_turn: Optional[float] = None
    x_factor: Optional[float] = None
    spine_angle: Optional[float] = None

    # Weight transfer
    weight_transfer: Optional[float] = None
    pressure_shift: Optional[float] = None
    balance_stability: Optional[float] = None

    # Swing path
    swing_plane: Optional[float] = None
    club_path: Optional[float] = None
    attack_angle: Optional[float] = None
    shaft_angle: Optional[float] = None

    # Impact
    hand_position: Optional[Point] = None
    clubface_angle: Optional[float] = None
    low_point: Optional[float] = None
    impact_velocity: Optional[float] = None

    # Consistency
    swing_consistency: Optional[float] = None
    tempo_stability: Optional[float] = None
    plane_consistency: Optional[float] = None


@dataclass(frozen=True)
class SwingScore:
    """
    Scoring for a specific aspect of the swing.

    Attributes:
        score: 0-100 rating
        feedback: Human-readable explanation
        details: Specific measurements or observations
    """
    score: int
    feedback: str
    details: Optional[str] = None

    @property
    def grade(self) -> str:
        """Convert score to letter grade."""
        return letter_grade(self.score)


@dataclass(frozen=True)
class CoachingTip:
    """
    A specific piece of coaching advice.

    Attributes:
        category: What aspect of the swing this addresses
        priority: 1 (highest) to 5 (lowest) importance
        title: Short summary
        description: Detailed explanation
        drill: Optional practice drill to fix the issue
    """
    category: str
    priority: int
    title: str
    description: str
    drill: Optional[str] = None


@dataclass(frozen=True)
class SwingMetrics:
    """
    Raw metrics plus their aggregate score, grade and confidence.

    ``metric_scores`` holds the 0-100 normalized score of every metric
    that took part in the overall score.
    """
    raw: RawMetrics
    overall_score: float
    letter_grade: str
    confidence: float
    phase_confidence: float
    metric_scores: dict[str, float] = field(default_factory=dict)

    tempo_score: Optional[SwingScore] = None
    rotation_score: Optional[SwingScore] = None
    weight_transfer_score: Optional[SwingScore] = None
    swing_plane_score: Optional[SwingScore] = None


@dataclass
class SwingAnalysis:
    """
    Complete analysis of a golf swing.

    This is the main result object returned after analyzing a swing.
    """
    # Identification
    id: str
    timestamp: datetime

    # Clip info
    frame_count: int
    fps: float
    club: GolfClub

    phases: list[PhaseInterval]
    metrics: SwingMetrics

    # Coaching
    tips: list[CoachingTip] = field(default_factory=list)
    summary: str = ""

    key_frames: dict[SwingPhase, int] = field(default_factory=dict)
    corrected_phases: list[SwingPhase] = field(default_factory=list)
    degraded_frame_count: int = 0
    parameters_version: str = ""

    @property
    def overall_score(self) -> float:
        return self.metrics.overall_score

    @property
    def letter_grade(self) -> str:
        return self.metrics.letter_grade

    def get_phase(self, phase: SwingPhase) -> Optional[PhaseInterval]:
        """Get the interval for a specific phase."""
        for interval in self.phases:
            if interval.name == phase:
                return interval
        return None

    @property
    def top_tips(self) -> list[CoachingTip]:
        """Get the 3 highest priority tips."""
        sorted_tips = sorted(self.tips, key=lambda t: t.priority)
        return sorted_tips[:3]
