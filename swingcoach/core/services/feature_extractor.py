"""
Kinematic Feature Extractor

Turns raw pose frames into per-frame kinematics: estimated club-head
position, velocity and acceleration, weight transfer, and body angles.

The club head is an estimate, not a detection: the midpoint of the two
wrists moved down by ``AnalysisParameters.club_length``.
"""

from typing import Optional, Sequence

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain import kinematics as kin
from ..domain.kinematics import KinematicFrame, Point
from ..domain.pose import PoseFrame, BodyPart
from .angle_calculator import AngleCalculator


class KinematicFeatureExtractor:
    """
    Derives a KinematicFrame for every PoseFrame.

    Frames missing a landmark still produce a KinematicFrame; the
    quantities that needed it are zeroed and listed in ``missing``.

    Usage:
        extractor = KinematicFeatureExtractor()
        kinematic_frames = extractor.extract(pose_frames)
    """

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        self.params = params

    # -------------------------------------------------------------------------
    # Frame timing
    # -------------------------------------------------------------------------

    @staticmethod
    def has_usable_timestamps(frames: Sequence[PoseFrame]) -> bool:
        """True when every frame has a timestamp and they strictly increase."""
        if len(frames) < 2:
            return False
        stamps = [frame.timestamp_s for frame in frames]
        if any(stamp is None for stamp in stamps):
            return False
        return all(later > earlier for earlier, later in zip(stamps, stamps[1:]))

    def estimate_frame_rate(self, frames: Sequence[PoseFrame]) -> float:
        """
        Frame rate from the timestamps, or the assumed rate when they
        are absent or not monotonic.
        """
        if not self.has_usable_timestamps(frames):
            return self.params.assumed_frame_rate
        span = frames[-1].timestamp_s - frames[0].timestamp_s
        return (len(frames) - 1) / span

    def _frame_times(
        self,
        frames: Sequence[PoseFrame],
        fps: Optional[float] = None,
    ) -> list[float]:
        if fps:
            return [i / fps for i in range(len(frames))]
        if self.has_usable_timestamps(frames):
            start = frames[0].timestamp_s
            return [frame.timestamp_s - start for frame in frames]
        interval = self.params.frame_interval
        return [i * interval for i in range(len(frames))]

    # -------------------------------------------------------------------------
    # Extraction
    # -------------------------------------------------------------------------

    def extract(
        self,
        frames: Sequence[PoseFrame],
        fps: Optional[float] = None,
    ) -> list[KinematicFrame]:
        """
        Extract kinematics for a whole clip in one forward pass.

        Velocity and acceleration are finite differences against the most
        recent earlier frame where that quantity was measured, divided by
        the real time between the two frames. The first measured frame has
        zero velocity and acceleration.

        Args:
            frames: PoseFrames of one swing, in capture order
            fps: Known frame rate; when given it sets the frame times and
                any timestamps are ignored

        Returns:
            One KinematicFrame per input frame, same order
        """
        times = self._frame_times(frames, fps)
        result: list[KinematicFrame] = []
        last_club: Optional[KinematicFrame] = None
        last_velocity: Optional[KinematicFrame] = None

        for index, (frame, time_s) in enumerate(zip(frames, times)):
            current = self._extract_frame(index, frame, time_s, last_club, last_velocity)
            result.append(current)
            if current.has(kin.CLUB_HEAD):
                last_club = current
            if current.has(kin.VELOCITY):
                last_velocity = current

        return result

    def _extract_frame(
        self,
        index: int,
        frame: PoseFrame,
        time_s: float,
        last_club: Optional[KinematicFrame],
        last_velocity: Optional[KinematicFrame],
    ) -> KinematicFrame:
        threshold = self.params.landmark_visibility
        missing: set[str] = set()

        hand_center = AngleCalculator.calculate_center(
            frame, BodyPart.LEFT_WRIST, BodyPart.RIGHT_WRIST, threshold
        )
        if hand_center is None:
            missing.update((kin.HAND_CENTER, kin.CLUB_HEAD))
            club_head: Point = (0.0, 0.0)
        else:
            club_head = (hand_center[0], hand_center[1] + self.params.club_length)

        velocity: Point = (0.0, 0.0)
        if kin.CLUB_HEAD in missing:
            missing.add(kin.VELOCITY)
        elif last_club is not None:
            velocity = self._difference(
                last_club.club_head, club_head, time_s - last_club.time_s, self.params.position_scale
            )

        acceleration: Point = (0.0, 0.0)
        if kin.VELOCITY in missing:
            missing.add(kin.ACCELERATION)
        elif last_velocity is not None:
            acceleration = self._difference(
                last_velocity.velocity, velocity, time_s - last_velocity.time_s
            )

        hips = AngleCalculator.calculate_center(
            frame, BodyPart.LEFT_HIP, BodyPart.RIGHT_HIP, threshold
        )
        if hips is None:
            missing.add(kin.WEIGHT_TRANSFER)
            weight_transfer = 0.0
        else:
            weight_transfer = min(100.0, max(0.0, hips[0] * 100.0))

        head = frame.get_visible_landmark(BodyPart.NOSE, threshold)
        if head is None:
            missing.add(kin.HEAD_POSITION)

        confidences = frame.required_confidences()

        return KinematicFrame(
            frame_index=index,
            time_s=time_s,
            club_head=club_head,
            velocity=velocity,
            acceleration=acceleration,
            weight_transfer=weight_transfer,
            shoulder_angle=self._measured(
                AngleCalculator.calculate_pair_angle(
                    frame, BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER, threshold
                ),
                kin.SHOULDER_ANGLE,
                missing,
            ),
            hip_angle=self._measured(
                AngleCalculator.calculate_pair_angle(
                    frame, BodyPart.LEFT_HIP, BodyPart.RIGHT_HIP, threshold
                ),
                kin.HIP_ANGLE,
                missing,
            ),
            spine_angle=self._measured(
                AngleCalculator.calculate_spine_angle(frame, threshold),
                kin.SPINE_ANGLE,
                missing,
            ),
            wrist_angle=self._measured(
                AngleCalculator.calculate_wrist_angle(frame, threshold),
                kin.WRIST_ANGLE,
                missing,
            ),
            hand_center=hand_center or (0.0, 0.0),
            head_position=(head.x, head.y) if head else (0.0, 0.0),
            landmark_confidence=sum(confidences) / len(confidences),
            missing=frozenset(missing),
        )

    @staticmethod
    def _measured(value: Optional[float], name: str, missing: set[str]) -> float:
        if value is None:
            missing.add(name)
            return 0.0
        return value

    @staticmethod
    def _difference(previous: Point, current: Point, dt: float, scale: float = 1.0) -> Point:
        if dt <= 0:
            return (0.0, 0.0)
        return (
            (current[0] - previous[0]) * scale / dt,
            (current[1] - previous[1]) * scale / dt,
        )
