"""
Swing Analyzer Service

High-level service that runs the full analysis pipeline over a
captured sequence of pose frames:

    feature extraction -> phase detection -> phase validation
    -> metrics -> scoring -> coaching tips

This is the main entry point for analyzing golf swings. It holds no
state between runs, so one instance can be shared across threads.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Sequence

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain.pose import PoseFrame
from ..domain.analysis import (
    SwingAnalysis,
    SwingMetrics,
    CoachingTip,
    GolfClub,
)
from .feature_extractor import KinematicFeatureExtractor
from .phase_detector import PhaseBoundaryDetector
from .phase_validator import PhaseValidator
from .metrics_calculator import MetricsCalculator
from .scoring import SwingScorer

logger = logging.getLogger(__name__)


class SwingAnalyzer:
    """
    Analyzes golf swings from pose frame sequences.

    This service:
    1. Derives club-head and body kinematics per frame
    2. Segments the swing into seven phases
    3. Calculates biomechanical metrics
    4. Scores and grades the swing
    5. Generates coaching tips

    Usage:
        analyzer = SwingAnalyzer()
        result = analyzer.analyze_frames(frames, club=GolfClub.IRON_7)
        print(f"Overall score: {result.overall_score:.0f} ({result.letter_grade})")

    Raises InsufficientDataError for clips shorter than the minimum frame
    count and LowConfidenceError when the phases cannot be trusted.
    """

    # -------------------------------------------------------------------------
    # Coaching tips for weak metrics
    # -------------------------------------------------------------------------

    TIP_THRESHOLD = 70

    METRIC_TIPS = {
        "tempo_ratio": CoachingTip(
            category="Tempo",
            priority=1,
            title="Smooth Out Your Tempo",
            description="Aim for a backswing about three times as long as the downswing.",
            drill="Practice with a metronome: three beats back, one beat down.",
        ),
        "shoulder_turn": CoachingTip(
            category="Rotation",
            priority=2,
            title="Complete Your Shoulder Turn",
            description="Turn your lead shoulder under your chin at the top.",
            drill="Cross a club over your chest and rotate until it points past the ball.",
        ),
        "hip_turn": CoachingTip(
            category="Rotation",
            priority=2,
            title="Control Your Hip Turn",
            description="Let the hips turn about half as much as the shoulders.",
            drill="Make backswings with a ball squeezed between your knees.",
        ),
        "x_factor": CoachingTip(
            category="Rotation",
            priority=1,
            title="Build More Coil",
            description="Create more separation between shoulder and hip rotation.",
            drill="Pause at the top and feel the stretch between chest and belt buckle.",
        ),
        "weight_transfer": CoachingTip(
            category="Weight Transfer",
            priority=1,
            title="Shift Onto Your Lead Side",
            description="Most of your weight should be on the lead foot at impact.",
            drill="Step-through drill: step toward the target with your trail foot after impact.",
        ),
        "swing_plane": CoachingTip(
            category="Swing Plane",
            priority=2,
            title="Find Your Swing Plane",
            description="Keep the hands travelling on a consistent inclined plane.",
            drill="Swing under an alignment stick set along your shaft line.",
        ),
        "club_path": CoachingTip(
            category="Swing Path",
            priority=2,
            title="Square Your Path Through Impact",
            description="Your hands are tilted at impact, sending the club across the ball.",
            drill="Gate drill: swing through two tees placed just outside the ball.",
        ),
        "impact_velocity": CoachingTip(
            category="Impact",
            priority=3,
            title="Accelerate Through the Ball",
            description="Hand speed drops before impact - keep accelerating to the finish.",
            drill="Swish drill: make the loudest whoosh just past the ball.",
        ),
        "swing_consistency": CoachingTip(
            category="Consistency",
            priority=3,
            title="Stay Centred",
            description="Your body moves a lot between address, top and impact.",
            drill="Rehearse half swings with your head against a wall.",
        ),
    }

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        """Initialize the swing analyzer and its pipeline stages."""
        self.params = params
        self.feature_extractor = KinematicFeatureExtractor(params)
        self.phase_detector = PhaseBoundaryDetector(params)
        self.phase_validator = PhaseValidator(params)
        self.metrics_calculator = MetricsCalculator(params)
        self.scorer = SwingScorer(params)

    # -------------------------------------------------------------------------
    # Main Analysis Methods
    # -------------------------------------------------------------------------

    def analyze_frames(
        self,
        frames: Sequence[PoseFrame],
        club: GolfClub = GolfClub.IRON_7,
        fps: Optional[float] = None,
    ) -> SwingAnalysis:
        """
        Analyze a golf swing from pre-detected pose frames.

        Args:
            frames: PoseFrames of one swing, in capture order
            club: Type of golf club
            fps: Frames per second; derived from timestamps when omitted

        Returns:
            Complete SwingAnalysis
        """
        frame_rate = fps or self.feature_extractor.estimate_frame_rate(frames)
        kinematic_frames = self.feature_extractor.extract(frames, fps)
        boundaries = self.phase_detector.detect(kinematic_frames)
        candidates = {phase.value: idx for phase, idx in boundaries.items()}
        logger.debug(f"Candidate boundaries: {candidates}")

        detection = self.phase_validator.validate(boundaries, kinematic_frames, frame_rate)

        raw = self.metrics_calculator.compute(kinematic_frames, detection, frames)
        metrics = self.scorer.score(raw, detection, kinematic_frames)

        logger.info(
            f"Analyzed {len(frames)} frames: score {metrics.overall_score:.1f} "
            f"({metrics.letter_grade}), confidence {metrics.confidence:.2f}"
        )

        return SwingAnalysis(
            id=str(uuid.uuid4()),
            timestamp=datetime.now(),
            frame_count=len(frames),
            fps=frame_rate,
            club=club,
            phases=list(detection.intervals),
            metrics=metrics,
            tips=self._generate_tips(metrics, club),
            summary=self._generate_summary(metrics, club),
            key_frames=detection.key_frames,
            corrected_phases=list(detection.corrected_phases),
            degraded_frame_count=sum(1 for f in kinematic_frames if f.is_degraded),
            parameters_version=self.params.version,
        )

    # -------------------------------------------------------------------------
    # Coaching Tips Generation
    # -------------------------------------------------------------------------

    def _generate_tips(self, metrics: SwingMetrics, club: GolfClub) -> List[CoachingTip]:
        """Generate actionable coaching tips for the weakest metrics."""
        weak = sorted(
            (score, metric)
            for metric, score in metrics.metric_scores.items()
            if score < self.TIP_THRESHOLD and metric in self.METRIC_TIPS
        )
        tips = [self.METRIC_TIPS[metric] for _, metric in weak]

        # Add club-specific tip
        tips.append(self._get_club_specific_tip(club))

        # Sort by priority (stable, so weaker metrics stay first within a priority)
        tips.sort(key=lambda t: t.priority)

        return tips[:5]  # Return top 5 tips

    def _get_club_specific_tip(self, club: GolfClub) -> CoachingTip:
        """Get a tip specific to the club being used."""
        tips = {
            GolfClub.DRIVER: CoachingTip(
                category="Driver",
                priority=3,
                title="Driver Swing Tip",
                description="For driver, focus on sweeping through the ball with an upward angle of attack.",
                drill="Tee the ball high and practice hitting up on the ball.",
            ),
            GolfClub.IRON_7: CoachingTip(
                category="Irons",
                priority=3,
                title="Iron Swing Tip",
                description="For irons, focus on hitting down on the ball with a divot after impact.",
                drill="Place a towel 2 inches behind the ball and practice not hitting it.",
            ),
            GolfClub.PUTTER: CoachingTip(
                category="Putting",
                priority=3,
                title="Putting Tip",
                description="Keep your lower body still and rock your shoulders like a pendulum.",
                drill="Practice with a coin under each foot to feel any lower body movement.",
            ),
        }

        return tips.get(club, CoachingTip(
            category="General",
            priority=3,
            title="Focus on Fundamentals",
            description="Maintain good posture and tempo throughout your swing.",
            drill="Practice with alignment sticks for better consistency.",
        ))

    def _generate_summary(self, metrics: SwingMetrics, club: GolfClub) -> str:
        """Generate a text summary of the analysis."""
        overall = metrics.overall_score
        if overall >= 85:
            quality = "excellent"
        elif overall >= 70:
            quality = "good"
        elif overall >= 55:
            quality = "developing"
        else:
            quality = "needs work"

        summary = (
            f"Your {club.value} swing scored {overall:.0f}/100 "
            f"({metrics.letter_grade}) - {quality}. "
        )

        weak = [
            metric.replace("_", " ")
            for metric, score in sorted(metrics.metric_scores.items(), key=lambda item: item[1])
            if score < self.TIP_THRESHOLD
        ]
        if weak:
            summary += f"Focus on improving: {', '.join(weak[:3])}. "
        else:
            summary += "Every measured part of your swing is solid. "

        if metrics.confidence < 0.5:
            summary += "Tracking quality was limited, so treat these numbers as rough. "

        summary += "Keep practicing to build consistency!"
        return summary

