"""
Pose Domain Models

Data structures for the body landmarks handed to the analysis pipeline
by an external pose estimator (MediaPipe, MoveNet, ...).

Landmarks are keyed by a stable lowercase name (``left_wrist``,
``right_hip``, ...). The pipeline only reads these records, it never
mutates them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class BodyPart(str, Enum):
    """
    Landmark names the swing pipeline relies on.

    Values match the names used by MediaPipe Pose's landmark enum,
    lowercased, so frames produced by MediaPipe can be passed straight in.
    """
    NOSE = "nose"

    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"

    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"


REQUIRED_BODY_PARTS: tuple[BodyPart, ...] = tuple(BodyPart)


@dataclass(frozen=True)
class PoseLandmark:
    """
    A single body landmark with normalized coordinates and visibility.

    Attributes:
        x: Horizontal position (0.0 = left edge, 1.0 = right edge)
        y: Vertical position (0.0 = top edge, 1.0 = bottom edge)
        visibility: Confidence score (0.0 to 1.0)
        name: Landmark name, e.g. "left_wrist"
        z: Optional depth; unused by the 2D pipeline

    Note:
        Coordinates are normalized to image dimensions.
        To get pixel coordinates: pixel_x = x * image_width
    """
    x: float
    y: float
    visibility: float
    name: str = ""
    z: float = 0.0

    def is_visible(self, threshold: float = 0.5) -> bool:
        """Check if landmark is visible above confidence threshold."""
        return self.visibility >= threshold

    def distance_to(self, other: "PoseLandmark") -> float:
        """2D Euclidean distance to another landmark."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


@dataclass(frozen=True)
class PoseFrame:
    """
    One video frame's pose observation.

    Attributes:
        landmarks: Landmark name -> PoseLandmark
        frame_index: Sequential frame number within the clip
        timestamp_s: Video timestamp in seconds, if the producer knows it
    """
    landmarks: Mapping[str, PoseLandmark] = field(default_factory=dict)
    frame_index: int = 0
    timestamp_s: Optional[float] = None

    def get_landmark(self, body_part: BodyPart) -> Optional[PoseLandmark]:
        """Get a specific landmark by body part."""
        return self.landmarks.get(body_part.value)

    def get_visible_landmark(
        self,
        body_part: BodyPart,
        threshold: float = 0.5,
    ) -> Optional[PoseLandmark]:
        """Get a landmark only if it is present and visible enough."""
        landmark = self.get_landmark(body_part)
        if landmark is None or not landmark.is_visible(threshold):
            return None
        return landmark

    def required_confidences(self) -> list[float]:
        """Visibility of each required landmark; absent landmarks count as 0."""
        confidences = []
        for part in REQUIRED_BODY_PARTS:
            landmark = self.get_landmark(part)
            confidences.append(landmark.visibility if landmark else 0.0)
        return confidences

    @classmethod
    def from_points(
        cls,
        points: Mapping[str, tuple[float, float, float]],
        frame_index: int = 0,
        timestamp_s: Optional[float] = None,
    ) -> "PoseFrame":
        """
        Build a frame from ``name -> (x, y, visibility)`` tuples.

        Convenient for producers that already hold plain numbers.
        """
        landmarks = {
            name: PoseLandmark(x=x, y=y, visibility=visibility, name=name)
            for name, (x, y, visibility) in points.items()
        }
        return cls(landmarks=landmarks, frame_index=frame_index, timestamp_s=timestamp_s)
