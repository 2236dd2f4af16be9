"""
Analysis Errors

Raised when the input as a whole is too poor to analyze. Per-frame
landmark dropouts are not errors; the pipeline degrades around them.
"""


class AnalysisError(ValueError):
    """Base class for swing analysis quality gates."""


class InsufficientDataError(AnalysisError):
    """Too few frames for the phase heuristics to mean anything."""

    def __init__(self, frame_count: int, required: int):
        self.frame_count = frame_count
        self.required = required
        super().__init__(
            f"Swing analysis needs at least {required} frames, got {frame_count}"
        )


class LowConfidenceError(AnalysisError):
    """Phase detection is too unreliable to grade the swing."""

    def __init__(self, confidence: float, threshold: float):
        self.confidence = confidence
        self.threshold = threshold
        super().__init__(
            f"Unable to analyze this swing: phase detection confidence "
            f"{confidence:.2f} is below {threshold:.2f}"
        )
