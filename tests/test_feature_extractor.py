"""Tests for KinematicFeatureExtractor and AngleCalculator."""

import pytest

from swingcoach.core.config import AnalysisParameters
from swingcoach.core.domain import kinematics as kin
from swingcoach.core.domain.pose import PoseFrame
from swingcoach.core.services import AngleCalculator, KinematicFeatureExtractor


BODY = {
    "nose": (0.5, 0.2, 1.0),
    "left_shoulder": (0.4, 0.35, 1.0),
    "right_shoulder": (0.6, 0.35, 1.0),
    "left_hip": (0.45, 0.55, 1.0),
    "right_hip": (0.55, 0.55, 1.0),
}


def make_frame(i, hands, timestamp=None, wrist_visibility=1.0, **overrides):
    hx, hy = hands
    points = dict(BODY)
    points["left_wrist"] = (hx - 0.02, hy, wrist_visibility)
    points["right_wrist"] = (hx + 0.02, hy, 1.0)
    points.update(overrides)
    return PoseFrame.from_points(points, frame_index=i, timestamp_s=timestamp)


class TestAngleCalculator:

    def test_vector_angle_uses_image_coordinates(self):
        assert AngleCalculator.vector_angle(1, 0) == pytest.approx(0.0)
        assert AngleCalculator.vector_angle(0, 1) == pytest.approx(90.0)
        assert AngleCalculator.vector_angle(-1, 0) == pytest.approx(180.0)

    def test_fold_line_angle(self):
        assert AngleCalculator.fold_line_angle(170.0) == pytest.approx(-10.0)
        assert AngleCalculator.fold_line_angle(-100.0) == pytest.approx(80.0)
        assert AngleCalculator.fold_line_angle(45.0) == pytest.approx(45.0)

    def test_angle_difference_wraps(self):
        assert AngleCalculator.angle_difference(170.0, -170.0) == pytest.approx(20.0)
        assert AngleCalculator.angle_difference(0.0, 90.0) == pytest.approx(90.0)

    def test_spine_angle_upright_is_zero(self):
        frame = make_frame(0, (0.5, 0.7))
        assert AngleCalculator.calculate_spine_angle(frame) == pytest.approx(0.0)

    def test_pair_angle_needs_visible_landmarks(self):
        frame = make_frame(0, (0.5, 0.7), wrist_visibility=0.2)
        assert AngleCalculator.calculate_wrist_angle(frame) is None


class TestKinematicFeatureExtractor:

    def test_one_frame_out_per_frame_in(self, swing_frames):
        result = KinematicFeatureExtractor().extract(swing_frames)
        assert len(result) == len(swing_frames)
        assert [f.frame_index for f in result] == list(range(len(swing_frames)))

    def test_club_head_below_hands(self):
        params = AnalysisParameters()
        frame = KinematicFeatureExtractor(params).extract([make_frame(0, (0.5, 0.6))])[0]
        assert frame.club_head == pytest.approx((0.5, 0.6 + params.club_length))
        assert frame.hand_center == pytest.approx((0.5, 0.6))

    def test_first_frame_has_zero_velocity(self):
        frame = KinematicFeatureExtractor().extract([make_frame(0, (0.5, 0.6))])[0]
        assert frame.velocity == (0.0, 0.0)
        assert frame.acceleration == (0.0, 0.0)
        assert frame.has(kin.VELOCITY)

    def test_velocity_and_acceleration_finite_differences(self):
        frames = [
            make_frame(0, (0.50, 0.60)),
            make_frame(1, (0.51, 0.58)),
            make_frame(2, (0.53, 0.54)),
        ]
        result = KinematicFeatureExtractor().extract(frames)

        # 30 fps, position scale 100
        assert result[1].velocity == pytest.approx((30.0, -60.0))
        assert result[2].velocity == pytest.approx((60.0, -120.0))
        assert result[2].acceleration == pytest.approx((900.0, -1800.0))

    def test_timestamps_set_time_step(self):
        frames = [
            make_frame(0, (0.50, 0.60), timestamp=0.0),
            make_frame(1, (0.51, 0.60), timestamp=0.1),
        ]
        result = KinematicFeatureExtractor().extract(frames)
        assert result[1].time_s == pytest.approx(0.1)
        assert result[1].velocity[0] == pytest.approx(10.0)

    def test_explicit_fps_sets_frame_times(self):
        frames = [
            make_frame(0, (0.50, 0.60), timestamp=0.0),
            make_frame(1, (0.51, 0.60), timestamp=1.0),
        ]
        result = KinematicFeatureExtractor().extract(frames, fps=60.0)

        assert result[1].time_s == pytest.approx(1 / 60.0)
        assert result[1].velocity[0] == pytest.approx(60.0)

    def test_frame_rate_from_timestamps(self, make_swing):
        extractor = KinematicFeatureExtractor()
        assert extractor.estimate_frame_rate(make_swing(fps=60.0)) == pytest.approx(60.0)

    def test_frame_rate_falls_back_without_timestamps(self, make_swing):
        extractor = KinematicFeatureExtractor()
        assert extractor.estimate_frame_rate(make_swing(timestamps=False)) == 30.0

    def test_frame_rate_falls_back_on_non_monotonic_timestamps(self):
        frames = [
            make_frame(0, (0.5, 0.6), timestamp=0.2),
            make_frame(1, (0.5, 0.6), timestamp=0.1),
        ]
        assert KinematicFeatureExtractor().estimate_frame_rate(frames) == 30.0

    def test_weight_transfer_is_hip_centre_percent(self):
        frame = KinematicFeatureExtractor().extract([make_frame(0, (0.5, 0.6))])[0]
        assert frame.weight_transfer == pytest.approx(50.0)

    def test_missing_wrist_degrades_instead_of_failing(self):
        frame = KinematicFeatureExtractor().extract(
            [make_frame(0, (0.5, 0.6), wrist_visibility=0.0)]
        )[0]
        assert frame.is_degraded
        assert {kin.CLUB_HEAD, kin.VELOCITY, kin.HAND_CENTER, kin.WRIST_ANGLE} <= frame.missing
        assert frame.club_head == (0.0, 0.0)
        assert frame.value(kin.WRIST_ANGLE) is None
        # Body quantities are unaffected
        assert frame.has(kin.SHOULDER_ANGLE)
        assert frame.has(kin.WEIGHT_TRANSFER)

    def test_absent_landmark_counts_as_zero_confidence(self):
        points = dict(BODY)
        points["left_wrist"] = (0.48, 0.6, 1.0)
        frame = PoseFrame.from_points(points)  # no right wrist
        result = KinematicFeatureExtractor().extract([frame])[0]
        assert result.landmark_confidence == pytest.approx(6 / 7)
        assert not result.has(kin.CLUB_HEAD)

    def test_velocity_bridges_dropout(self):
        frames = [
            make_frame(0, (0.50, 0.60)),
            make_frame(1, (0.51, 0.60), wrist_visibility=0.0),
            make_frame(2, (0.52, 0.60)),
        ]
        result = KinematicFeatureExtractor().extract(frames)

        assert not result[1].has(kin.VELOCITY)
        assert result[1].velocity == (0.0, 0.0)
        # Frame 2 differences against frame 0 over two frame intervals
        assert result[2].velocity[0] == pytest.approx(30.0)

    def test_input_not_mutated(self, swing_frames):
        before = [dict(frame.landmarks) for frame in swing_frames]
        KinematicFeatureExtractor().extract(swing_frames)
        assert [dict(frame.landmarks) for frame in swing_frames] == before
