"""
Phase Boundary Detector

Proposes the frame where each swing phase starts, using single-pass
velocity and position heuristics on the estimated club head.

Each phase is searched for only after the boundary of the phase before
it, and every search has a fallback, so detection always returns a
complete map. The map is not guaranteed to be strictly ordered; the
PhaseValidator fixes that.
"""

from typing import Callable, Optional, Sequence

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain import kinematics as kin
from ..domain.analysis import SwingPhase
from ..domain.kinematics import KinematicFrame
from ..errors import InsufficientDataError


class PhaseBoundaryDetector:
    """
    Detects candidate phase boundaries from club-head kinematics.

    Image y grows downward, so a negative vertical velocity means the
    club is rising.

    Usage:
        detector = PhaseBoundaryDetector()
        boundaries = detector.detect(kinematic_frames)
        top_frame = boundaries[SwingPhase.TOP]
    """

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        self.params = params

    def detect(self, frames: Sequence[KinematicFrame]) -> dict[SwingPhase, int]:
        """
        Find the start frame of each phase.

        Raises:
            InsufficientDataError: fewer than ``params.min_frames`` frames
        """
        if len(frames) < self.params.min_frames:
            raise InsufficientDataError(len(frames), self.params.min_frames)

        p = self.params
        last = len(frames) - 1

        address = self._find_address(frames)

        approach = self._first_after(
            frames, address, lambda f: f.speed > p.movement_speed
        )
        if approach is None:
            approach = address + 1

        backswing = self._first_after(
            frames, approach, lambda f: f.vertical_velocity < 0
        )
        if backswing is None:
            backswing = approach + 1

        top = self._first_after(
            frames, backswing, lambda f: f.vertical_velocity >= 0
        )
        if top is None:
            top = self._highest_club_frame(frames, backswing)

        downswing = self._first_after(
            frames, top, lambda f: f.vertical_velocity > p.downswing_vertical_speed
        )
        if downswing is None:
            downswing = top + 1

        impact = self._fastest_frame(frames, downswing)

        follow_through = self._first_after(
            frames, impact, lambda f: f.speed < p.follow_through_speed
        )
        if follow_through is None:
            follow_through = last

        return {
            SwingPhase.ADDRESS: address,
            SwingPhase.APPROACH: approach,
            SwingPhase.BACKSWING: backswing,
            SwingPhase.TOP: top,
            SwingPhase.DOWNSWING: downswing,
            SwingPhase.IMPACT: impact,
            SwingPhase.FOLLOW_THROUGH: follow_through,
        }

    # -------------------------------------------------------------------------
    # Heuristics
    # -------------------------------------------------------------------------

    def _find_address(self, frames: Sequence[KinematicFrame]) -> int:
        """First slow frame within the address window, else frame 0."""
        window = min(self.params.address_window, len(frames))
        for i in range(window):
            frame = frames[i]
            if frame.has(kin.VELOCITY) and frame.speed < self.params.address_speed:
                return i
        return 0

    @staticmethod
    def _first_after(
        frames: Sequence[KinematicFrame],
        start: int,
        predicate: Callable[[KinematicFrame], bool],
    ) -> Optional[int]:
        """First frame after ``start`` with a measured velocity matching ``predicate``."""
        for i in range(start + 1, len(frames)):
            frame = frames[i]
            if frame.has(kin.VELOCITY) and predicate(frame):
                return i
        return None

    @staticmethod
    def _highest_club_frame(frames: Sequence[KinematicFrame], start: int) -> int:
        """Frame with the smallest club-head y at or after ``start``."""
        best = min(start, len(frames) - 1)
        best_y = float("inf")
        for i in range(best, len(frames)):
            frame = frames[i]
            if frame.has(kin.CLUB_HEAD) and frame.club_head[1] < best_y:
                best, best_y = i, frame.club_head[1]
        return best

    @staticmethod
    def _fastest_frame(frames: Sequence[KinematicFrame], start: int) -> int:
        """Frame with the highest club-head speed at or after ``start``."""
        best = min(start, len(frames) - 1)
        best_speed = -1.0
        for i in range(best, len(frames)):
            frame = frames[i]
            if frame.has(kin.VELOCITY) and frame.speed > best_speed:
                best, best_speed = i, frame.speed
        return best
