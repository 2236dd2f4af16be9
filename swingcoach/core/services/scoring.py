"""
Swing Scoring Service

Normalizes raw metrics against ideal values, combines them into a
weighted overall score and letter grade, and rates how far the result
can be trusted.
"""

from typing import Optional, Sequence

import numpy as np

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain.analysis import PhaseDetection, RawMetrics, SwingMetrics, SwingScore, letter_grade
from ..domain.kinematics import KinematicFrame


class SwingScorer:
    """
    Scores a swing from its RawMetrics.

    Each scored metric is mapped to 0-100 by its distance from an ideal
    value. Metrics that could not be measured are left out and the
    remaining weights are renormalized, so a dropout does not count as
    a zero.

    Usage:
        scorer = SwingScorer()
        metrics = scorer.score(raw, detection, kinematic_frames)
        print(metrics.overall_score, metrics.letter_grade)
    """

    CATEGORIES = {
        "tempo": ("tempo_ratio",),
        "rotation": ("shoulder_turn", "hip_turn", "x_factor"),
        "weight_transfer": ("weight_transfer",),
        "swing_plane": ("swing_plane", "club_path"),
    }

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        self.params = params

    # -------------------------------------------------------------------------
    # Normalization
    # -------------------------------------------------------------------------

    def normalize(self, metric: str, value: float) -> float:
        """Map a raw metric value to a 0-100 score."""
        p = self.params
        if metric == "tempo_ratio":
            score = 100.0 - p.tempo_penalty * abs(value - p.ideal_tempo_ratio)
        elif metric == "impact_velocity":
            score = value / p.impact_velocity_divisor
        elif metric == "swing_consistency":
            score = value
        elif metric in p.ideals:
            slope = p.penalties.get(metric, p.angle_penalty)
            score = 100.0 - slope * abs(value - p.ideals[metric])
        else:
            raise KeyError(f"No normalization defined for metric '{metric}'")
        return min(100.0, max(0.0, score))

    def metric_scores(self, raw: RawMetrics) -> dict[str, float]:
        """Normalized score of every weighted metric that was measured."""
        scores = {}
        for metric in self.params.weights:
            value = getattr(raw, metric)
            if value is not None:
                scores[metric] = self.normalize(metric, value)
        return scores

    def overall_score(self, scores: dict[str, float]) -> float:
        """Weighted mean of the normalized scores present."""
        weights = self.params.weights
        total_weight = sum(weights[metric] for metric in scores)
        if total_weight <= 0:
            return 0.0
        weighted = sum(weights[metric] * score for metric, score in scores.items())
        return min(100.0, max(0.0, weighted / total_weight))

    # -------------------------------------------------------------------------
    # Confidence
    # -------------------------------------------------------------------------

    def analysis_confidence(
        self,
        phase_confidence: float,
        frames: Sequence[KinematicFrame],
    ) -> float:
        """
        Trust in the whole analysis: phase detection confidence x mean
        landmark confidence x clip length relative to a full swing.
        """
        if not frames:
            return 0.0
        landmark_confidence = float(np.mean([f.landmark_confidence for f in frames]))
        length_factor = min(1.0, len(frames) / self.params.reference_frame_count)
        return min(1.0, max(0.0, phase_confidence * landmark_confidence * length_factor))

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score(
        self,
        raw: RawMetrics,
        detection: PhaseDetection,
        frames: Sequence[KinematicFrame],
    ) -> SwingMetrics:
        """
        Produce the graded SwingMetrics for a swing.

        Args:
            raw: Metrics from the MetricsCalculator
            detection: Phase detection the metrics were computed from
            frames: Kinematic frames of the clip
        """
        scores = self.metric_scores(raw)
        overall = self.overall_score(scores)

        return SwingMetrics(
            raw=raw,
            overall_score=overall,
            letter_grade=letter_grade(overall),
            confidence=self.analysis_confidence(detection.confidence, frames),
            phase_confidence=detection.confidence,
            metric_scores=scores,
            tempo_score=self._tempo_score(raw, scores),
            rotation_score=self._rotation_score(raw, scores),
            weight_transfer_score=self._weight_transfer_score(raw, scores),
            swing_plane_score=self._swing_plane_score(raw, scores),
        )

    def _category_score(self, category: str, scores: dict[str, float]) -> Optional[int]:
        present = [scores[m] for m in self.CATEGORIES[category] if m in scores]
        if not present:
            return None
        return int(round(sum(present) / len(present)))

    def _tempo_score(self, raw: RawMetrics, scores: dict[str, float]) -> Optional[SwingScore]:
        score = self._category_score("tempo", scores)
        if score is None:
            return None

        ratio = raw.tempo_ratio
        if score >= 90:
            feedback = "Excellent tempo! Smooth and controlled"
        elif score >= 70:
            feedback = "Good tempo, minor adjustments possible"
        elif ratio < self.params.ideal_tempo_ratio:
            feedback = "Backswing may be too quick - slow it down"
        else:
            feedback = "Downswing may be too slow - accelerate through impact"

        return SwingScore(
            score=score,
            feedback=feedback,
            details=f"Backswing/Downswing ratio: {ratio:.1f}:1 "
                    f"({raw.backswing_time:.2f}s / {raw.downswing_time:.2f}s)",
        )

    def _rotation_score(self, raw: RawMetrics, scores: dict[str, float]) -> Optional[SwingScore]:
        score = self._category_score("rotation", scores)
        if score is None:
            return None

        if score >= 85:
            feedback = "Excellent shoulder-hip separation. Great power potential"
        elif score >= 65:
            feedback = "Good rotation, there is more coil available"
        else:
            feedback = "Increase shoulder turn while restricting hips"

        parts = []
        if raw.shoulder_turn is not None:
            parts.append(f"shoulder: {raw.shoulder_turn:.0f}°")
        if raw.hip_turn is not None:
            parts.append(f"hip: {raw.hip_turn:.0f}°")
        if raw.x_factor is not None:
            parts.append(f"X-factor: {raw.x_factor:.0f}°")

        return SwingScore(score=score, feedback=feedback, details=", ".join(parts))

    def _weight_transfer_score(
        self,
        raw: RawMetrics,
        scores: dict[str, float],
    ) -> Optional[SwingScore]:
        score = self._category_score("weight_transfer", scores)
        if score is None:
            return None

        ideal = self.params.ideals["weight_transfer"]
        if score >= 85:
            feedback = "Weight moves fully onto the lead side"
        elif raw.weight_transfer is not None and raw.weight_transfer < ideal:
            feedback = "Shift more weight to your lead side through impact"
        else:
            feedback = "Weight is sliding past the lead side - stay centred"

        details = f"Weight transfer at impact: {raw.weight_transfer:.0f}%"
        if raw.balance_stability is not None:
            details += f", balance stability: {raw.balance_stability:.0f}"

        return SwingScore(score=score, feedback=feedback, details=details)

    def _swing_plane_score(
        self,
        raw: RawMetrics,
        scores: dict[str, float],
    ) -> Optional[SwingScore]:
        score = self._category_score("swing_plane", scores)
        if score is None:
            return None

        if score >= 85:
            feedback = "Club stays on plane through the swing"
        elif score >= 65:
            feedback = "Swing plane is close - small path deviations"
        else:
            feedback = "Work on keeping the club on a consistent plane"

        parts = []
        if raw.swing_plane is not None:
            parts.append(f"plane: {raw.swing_plane:.0f}°")
        if raw.club_path is not None:
            parts.append(f"path at impact: {raw.club_path:+.0f}°")

        return SwingScore(score=score, feedback=feedback, details=", ".join(parts))
