"""
Phase Validator

Turns candidate phase boundaries into seven ordered, contiguous
PhaseIntervals and scores how plausible each detected phase looks.
"""

import logging
from typing import Mapping, Optional, Sequence

import numpy as np

from ..config import AnalysisParameters, DEFAULT_PARAMETERS
from ..domain import kinematics as kin
from ..domain.analysis import SwingPhase, PhaseInterval, PhaseDetection
from ..domain.kinematics import KinematicFrame

logger = logging.getLogger(__name__)


class PhaseValidator:
    """
    Enforces phase order and computes per-phase confidence.

    A boundary that does not come strictly after the previous one is
    pushed to the frame after it. Such corrections mean the detector was
    unsure about that phase, so they are logged and reported on the
    result.
    """

    def __init__(self, params: AnalysisParameters = DEFAULT_PARAMETERS):
        self.params = params

    def validate(
        self,
        boundaries: Mapping[SwingPhase, int],
        frames: Sequence[KinematicFrame],
        frame_rate: Optional[float] = None,
    ) -> PhaseDetection:
        """
        Build validated phase intervals.

        Args:
            boundaries: Candidate start frame per phase
            frames: Kinematic frames the boundaries refer to
            frame_rate: Frames per second for durations (defaults to the
                assumed frame rate)

        Returns:
            PhaseDetection with seven intervals covering frame 0 to the
            last frame
        """
        frame_count = len(frames)
        if frame_count == 0:
            raise ValueError("No frames to validate")

        rate = frame_rate or self.params.assumed_frame_rate
        starts, corrected = self._ordered_starts(boundaries, frame_count)
        ends = starts[1:] + [frame_count - 1]

        intervals = []
        for phase, start, end in zip(SwingPhase.ordered(), starts, ends):
            intervals.append(PhaseInterval(
                name=phase,
                start_frame=start,
                end_frame=end,
                duration_s=(end - start) / rate,
                confidence=self._phase_confidence(phase, start, end, frames),
            ))

        confidence = float(np.mean([interval.confidence for interval in intervals]))

        return PhaseDetection(
            intervals=tuple(intervals),
            confidence=confidence,
            frame_rate=rate,
            corrected_phases=tuple(corrected),
        )

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def _ordered_starts(
        self,
        boundaries: Mapping[SwingPhase, int],
        frame_count: int,
    ) -> tuple[list[int], list[SwingPhase]]:
        last = frame_count - 1
        starts: list[int] = []
        corrected: list[SwingPhase] = []

        for phase in SwingPhase.ordered():
            if not starts:
                # The first phase always opens the clip
                starts.append(0)
                continue

            proposed = min(max(int(boundaries.get(phase, 0)), 0), last)
            previous = starts[-1]
            if proposed <= previous:
                forced = min(previous + 1, last)
                logger.warning(
                    f"Phase {phase.value} boundary {proposed} not after "
                    f"{previous}; forced to {forced}"
                )
                corrected.append(phase)
                proposed = forced
            starts.append(proposed)

        return starts, corrected

    # -------------------------------------------------------------------------
    # Confidence
    # -------------------------------------------------------------------------

    def _phase_confidence(
        self,
        phase: SwingPhase,
        start: int,
        end: int,
        frames: Sequence[KinematicFrame],
    ) -> float:
        """
        How much a phase's interval looks like that phase.

        - ADDRESS: club should be still
        - BACKSWING: club should be rising on average
        - DOWNSWING: club should be falling on average
        - IMPACT: club should be fast
        """
        if end <= start:
            return 0.0

        p = self.params
        measured = [f for f in frames[start:end] if f.has(kin.VELOCITY)]
        if not measured:
            return p.default_phase_confidence

        if phase == SwingPhase.ADDRESS:
            avg_speed = float(np.mean([f.speed for f in measured]))
            confidence = 1.0 - avg_speed / p.address_speed_ceiling
        elif phase == SwingPhase.BACKSWING:
            avg_vy = float(np.mean([f.vertical_velocity for f in measured]))
            confidence = p.directional_confidence if avg_vy < 0 else p.wrong_direction_confidence
        elif phase == SwingPhase.DOWNSWING:
            avg_vy = float(np.mean([f.vertical_velocity for f in measured]))
            confidence = p.directional_confidence if avg_vy > 0 else p.wrong_direction_confidence
        elif phase == SwingPhase.IMPACT:
            avg_speed = float(np.mean([f.speed for f in measured]))
            confidence = avg_speed / p.impact_speed_reference
        else:
            confidence = p.default_phase_confidence

        return min(1.0, max(0.0, confidence))
