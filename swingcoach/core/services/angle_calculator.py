"""
Angle Calculator Service

Geometry helpers for body angles used in golf swing analysis.
All angles are returned in degrees.

This is pure mathematics - no external dependencies except numpy.
"""

import math
from typing import Optional

import numpy as np

from ..domain.pose import PoseLandmark, PoseFrame, BodyPart
from ..domain.kinematics import Point


class AngleCalculator:
    """
    Calculates biomechanical angles from pose landmarks.

    Golf-specific angles include:
    - Shoulder line and hip line (rotation)
    - Spine tilt
    - Wrist line (swing plane / club path proxy)

    All methods are static - no state needed. Methods taking a PoseFrame
    return None when a landmark they need is missing or not visible.
    """

    # -------------------------------------------------------------------------
    # Core Angle Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def vector_angle(dx: float, dy: float) -> float:
        """
        Angle of the vector (dx, dy) via atan2, in degrees (-180, 180].

        Image coordinates: y grows downward, so a positive angle points
        down the image.
        """
        return float(np.degrees(np.arctan2(dy, dx)))

    @staticmethod
    def line_angle(p1: Point, p2: Point) -> float:
        """Angle of the vector from p1 to p2, in degrees."""
        return AngleCalculator.vector_angle(p2[0] - p1[0], p2[1] - p1[1])

    @staticmethod
    def fold_line_angle(angle: float) -> float:
        """
        Fold a direction into a line angle in [-90, 90).

        A line has no direction, so 170° and -10° describe the same line.
        """
        return (angle + 90.0) % 180.0 - 90.0

    @staticmethod
    def angle_difference(a: float, b: float) -> float:
        """Smallest absolute difference between two directions, in [0, 180]."""
        diff = abs(a - b) % 360.0
        return 360.0 - diff if diff > 180.0 else diff

    # -------------------------------------------------------------------------
    # Golf-Specific Angle Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_pair_angle(
        frame: PoseFrame,
        left: BodyPart,
        right: BodyPart,
        threshold: float = 0.5,
    ) -> Optional[float]:
        """
        Angle of the line from the left to the right landmark of a pair.

        Used for the shoulder line and hip line; the change of this angle
        between two frames is the rotation of that segment.
        """
        left_lm = frame.get_visible_landmark(left, threshold)
        right_lm = frame.get_visible_landmark(right, threshold)
        if left_lm is None or right_lm is None:
            return None
        return AngleCalculator.line_angle((left_lm.x, left_lm.y), (right_lm.x, right_lm.y))

    @staticmethod
    def calculate_wrist_angle(frame: PoseFrame, threshold: float = 0.5) -> Optional[float]:
        """
        Wrist-line angle, folded into [-90, 90).

        Stands in for the shaft plane since no club is detected.
        """
        angle = AngleCalculator.calculate_pair_angle(
            frame, BodyPart.LEFT_WRIST, BodyPart.RIGHT_WRIST, threshold
        )
        if angle is None:
            return None
        return AngleCalculator.fold_line_angle(angle)

    @staticmethod
    def calculate_spine_angle(frame: PoseFrame, threshold: float = 0.5) -> Optional[float]:
        """
        Calculate spine tilt.

        Angle of the hip-centre to shoulder-centre vector measured from
        straight up. Positive when the shoulders lean toward +x.

        Returns:
            Spine angle in degrees (0 = standing straight)
        """
        shoulders = AngleCalculator.calculate_center(
            frame, BodyPart.LEFT_SHOULDER, BodyPart.RIGHT_SHOULDER, threshold
        )
        hips = AngleCalculator.calculate_center(
            frame, BodyPart.LEFT_HIP, BodyPart.RIGHT_HIP, threshold
        )
        if shoulders is None or hips is None:
            return None

        dx = shoulders[0] - hips[0]
        dy = shoulders[1] - hips[1]
        # Vertical (pointing up) is negative y in image coordinates
        return float(np.degrees(np.arctan2(dx, -dy)))

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def calculate_center(
        frame: PoseFrame,
        left: BodyPart,
        right: BodyPart,
        threshold: float = 0.5,
    ) -> Optional[Point]:
        """Midpoint of a visible landmark pair."""
        return AngleCalculator.calculate_midpoint(
            frame.get_visible_landmark(left, threshold),
            frame.get_visible_landmark(right, threshold),
        )

    @staticmethod
    def calculate_distance(p1: Optional[Point], p2: Optional[Point]) -> Optional[float]:
        """Calculate 2D distance between two points."""
        if p1 is None or p2 is None:
            return None
        return math.sqrt((p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2)

    @staticmethod
    def calculate_midpoint(
        p1: Optional[PoseLandmark],
        p2: Optional[PoseLandmark]
    ) -> Optional[Point]:
        """Calculate midpoint between two landmarks."""
        if p1 is None or p2 is None:
            return None
        return ((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
