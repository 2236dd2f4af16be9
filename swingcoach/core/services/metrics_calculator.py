"""
Metrics Calculator Service

Computes timing, rotation, weight-transfer, swing-path, impact and
consistency metrics from a validated phase segmentation.

A metric whose inputs were not measured (landmark dropout at the frame
it depends on) is left as None rather than reported as zero.
"""

from typing import Optional, Sequence

import numpy as np

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain import kinematics as kin
from ..domain.analysis import SwingPhase, PhaseDetection, RawMetrics
from ..domain.kinematics import KinematicFrame
from ..domain.pose import PoseFrame
from ..errors import LowConfidenceError
from .angle_calculator import AngleCalculator


class MetricsCalculator:
    """
    Calculates RawMetrics for a segmented swing.

    Key frames are the start frames of the ADDRESS, TOP, DOWNSWING,
    IMPACT and FOLLOW_THROUGH phases.

    Usage:
        calculator = MetricsCalculator()
        raw = calculator.compute(kinematic_frames, detection, pose_frames)
    """

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        self.params = params

    def compute(
        self,
        frames: Sequence[KinematicFrame],
        detection: PhaseDetection,
        pose_frames: Sequence[PoseFrame] = (),
    ) -> RawMetrics:
        """
        Compute all metrics.

        Args:
            frames: Kinematic frames for the clip
            detection: Validated phases for the same frames
            pose_frames: Raw frames, used for landmark-level consistency

        Raises:
            LowConfidenceError: phase detection confidence below
                ``params.min_phase_confidence``
        """
        if detection.confidence < self.params.min_phase_confidence:
            raise LowConfidenceError(detection.confidence, self.params.min_phase_confidence)

        address = frames[detection.start(SwingPhase.ADDRESS)]
        top = frames[detection.start(SwingPhase.TOP)]
        downswing = frames[detection.start(SwingPhase.DOWNSWING)]
        impact = frames[detection.start(SwingPhase.IMPACT)]
        impact_index = impact.frame_index
        before_impact = frames[impact_index - 1] if impact_index > 0 else None

        backswing_time = detection.get(SwingPhase.BACKSWING).duration_s
        downswing_time = detection.get(SwingPhase.DOWNSWING).duration_s

        shoulder_turn = self._turn(address, top, kin.SHOULDER_ANGLE)
        hip_turn = self._turn(address, top, kin.HIP_ANGLE)

        weight_at_impact = impact.value(kin.WEIGHT_TRANSFER)
        weight_at_downswing = downswing.value(kin.WEIGHT_TRANSFER)

        club_path = impact.value(kin.WRIST_ANGLE)

        return RawMetrics(
            tempo_ratio=backswing_time / downswing_time if downswing_time > 0 else 0.0,
            backswing_time=backswing_time,
            downswing_time=downswing_time,
            total_swing_time=sum(interval.duration_s for interval in detection.intervals),

            shoulder_turn=shoulder_turn,
            hip_turn=hip_turn,
            x_factor=(
                shoulder_turn - hip_turn
                if shoulder_turn is not None and hip_turn is not None
                else None
            ),
            spine_angle=impact.value(kin.SPINE_ANGLE),

            weight_transfer=weight_at_impact,
            pressure_shift=(
                weight_at_impact - weight_at_downswing
                if weight_at_impact is not None and weight_at_downswing is not None
                else None
            ),
            balance_stability=self._balance_stability(frames),

            swing_plane=self._swing_plane(frames, detection),
            club_path=club_path,
            attack_angle=self._attack_angle(before_impact, impact),
            shaft_angle=self._shaft_angle(impact),

            hand_position=impact.hand_center if impact.has(kin.HAND_CENTER) else None,
            clubface_angle=club_path,
            low_point=self._low_point(frames, detection),
            impact_velocity=self._impact_velocity(before_impact, impact, detection.frame_rate),

            swing_consistency=self._swing_consistency(pose_frames, detection),
            tempo_stability=self._tempo_stability(detection),
            plane_consistency=self._plane_consistency(frames, detection),
        )

    # -------------------------------------------------------------------------
    # Rotation & weight transfer
    # -------------------------------------------------------------------------

    @staticmethod
    def _turn(start: KinematicFrame, end: KinematicFrame, feature: str) -> Optional[float]:
        """Rotation of a body line between two frames."""
        a = start.value(feature)
        b = end.value(feature)
        if a is None or b is None:
            return None
        return AngleCalculator.angle_difference(a, b)

    def _balance_stability(self, frames: Sequence[KinematicFrame]) -> Optional[float]:
        series = [f.weight_transfer for f in frames if f.has(kin.WEIGHT_TRANSFER)]
        if not series:
            return None
        return max(0.0, 100.0 - self.params.balance_penalty * float(np.std(series)))

    # -------------------------------------------------------------------------
    # Swing path
    # -------------------------------------------------------------------------

    @staticmethod
    def _wrist_angles(frames: Sequence[KinematicFrame], indices: range) -> list[float]:
        return [frames[i].wrist_angle for i in indices if frames[i].has(kin.WRIST_ANGLE)]

    def _swing_plane(
        self,
        frames: Sequence[KinematicFrame],
        detection: PhaseDetection,
    ) -> Optional[float]:
        """
        Plane inclination: mean of the average wrist-line inclination
        over the backswing and over the downswing.
        """
        averages = []
        for phase in (SwingPhase.BACKSWING, SwingPhase.DOWNSWING):
            angles = self._wrist_angles(frames, detection.get(phase).frames())
            if angles:
                averages.append(float(np.mean(np.abs(angles))))
        if not averages:
            return None
        return float(np.mean(averages))

    @staticmethod
    def _attack_angle(
        before: Optional[KinematicFrame],
        impact: KinematicFrame,
    ) -> Optional[float]:
        """Club-head travel direction into impact; negative = hitting down."""
        if before is None or not (before.has(kin.CLUB_HEAD) and impact.has(kin.CLUB_HEAD)):
            return None
        dx = impact.club_head[0] - before.club_head[0]
        dy = impact.club_head[1] - before.club_head[1]
        if dx == 0 and dy == 0:
            return 0.0
        return AngleCalculator.vector_angle(dx, -dy)

    @staticmethod
    def _shaft_angle(impact: KinematicFrame) -> Optional[float]:
        """Direction from the hands to the estimated club head at impact."""
        if not impact.has(kin.CLUB_HEAD):
            return None
        return AngleCalculator.line_angle(impact.hand_center, impact.club_head)

    # -------------------------------------------------------------------------
    # Impact
    # -------------------------------------------------------------------------

    @staticmethod
    def _low_point(
        frames: Sequence[KinematicFrame],
        detection: PhaseDetection,
    ) -> Optional[float]:
        """Time of the lowest hand position between downswing and follow-through."""
        start = detection.start(SwingPhase.DOWNSWING)
        end = detection.start(SwingPhase.FOLLOW_THROUGH)
        candidates = [
            frames[i] for i in range(start, end + 1) if frames[i].has(kin.HAND_CENTER)
        ]
        if not candidates:
            return None
        lowest = max(candidates, key=lambda f: f.hand_center[1])
        return lowest.time_s

    def _impact_velocity(
        self,
        before: Optional[KinematicFrame],
        impact: KinematicFrame,
        frame_rate: float,
    ) -> Optional[float]:
        """Hand speed into impact, in the same units as club-head speed."""
        if before is None or not (before.has(kin.HAND_CENTER) and impact.has(kin.HAND_CENTER)):
            return None
        distance = AngleCalculator.calculate_distance(before.hand_center, impact.hand_center)
        return distance * frame_rate * self.params.position_scale

    # -------------------------------------------------------------------------
    # Consistency
    # -------------------------------------------------------------------------

    def _swing_consistency(
        self,
        pose_frames: Sequence[PoseFrame],
        detection: PhaseDetection,
    ) -> Optional[float]:
        """
        How little the body moves landmark-by-landmark across the
        address -> top -> impact positions.
        """
        if not pose_frames:
            return None

        key_frames = [
            pose_frames[detection.start(phase)]
            for phase in (SwingPhase.ADDRESS, SwingPhase.TOP, SwingPhase.IMPACT)
        ]
        threshold = self.params.consistency_landmark_visibility

        displacements = []
        for first, second in zip(key_frames, key_frames[1:]):
            for name, landmark in first.landmarks.items():
                other = second.landmarks.get(name)
                if other is None:
                    continue
                if landmark.visibility > threshold and other.visibility > threshold:
                    displacements.append(landmark.distance_to(other))

        if not displacements:
            return None
        mean_displacement = float(np.mean(displacements))
        return max(0.0, 100.0 - self.params.swing_consistency_penalty * mean_displacement)

    def _tempo_stability(self, detection: PhaseDetection) -> float:
        durations = [interval.duration_s for interval in detection.intervals]
        return max(0.0, 100.0 - self.params.tempo_stability_penalty * float(np.std(durations)))

    def _plane_consistency(
        self,
        frames: Sequence[KinematicFrame],
        detection: PhaseDetection,
    ) -> Optional[float]:
        start = detection.start(SwingPhase.BACKSWING)
        end = detection.start(SwingPhase.FOLLOW_THROUGH)
        angles = self._wrist_angles(frames, range(start, end + 1))
        if not angles:
            return None
        return max(0.0, 100.0 - self.params.plane_consistency_penalty * float(np.std(angles)))

