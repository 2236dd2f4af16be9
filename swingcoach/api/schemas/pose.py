"""
Pose API Schemas

Pydantic models for pose frames sent to the analysis API.
These define the JSON structure the pose-estimation client produces.
"""

from pydantic import BaseModel, Field
from typing import Optional, List

from ...core.domain.pose import PoseLandmark, PoseFrame


class LandmarkSchema(BaseModel):
    """
    Single body landmark.

    Coordinates are normalized (0.0 to 1.0).
    """
    name: str = Field(..., description="Landmark name (e.g., 'left_wrist')")
    x: float = Field(..., ge=0.0, le=1.0, description="Horizontal position (0=left, 1=right)")
    y: float = Field(..., ge=0.0, le=1.0, description="Vertical position (0=top, 1=bottom)")
    visibility: float = Field(..., ge=0.0, le=1.0, description="Detection confidence")
    z: float = Field(0.0, description="Depth (negative=closer to camera)")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "left_wrist",
                "x": 0.45,
                "y": 0.62,
                "visibility": 0.95,
            }
        }

    def to_domain(self) -> PoseLandmark:
        return PoseLandmark(
            x=self.x,
            y=self.y,
            visibility=self.visibility,
            name=self.name,
            z=self.z,
        )


class PoseFrameSchema(BaseModel):
    """
    Pose detection result for one video frame.
    """
    landmarks: List[LandmarkSchema] = Field(..., description="Detected body landmarks")
    frame_index: int = Field(..., ge=0, description="Sequential frame number")
    timestamp_s: Optional[float] = Field(None, ge=0.0, description="Video timestamp in seconds")

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [
                    {"name": "nose", "x": 0.5, "y": 0.2, "visibility": 0.99}
                ],
                "frame_index": 45,
                "timestamp_s": 1.5,
            }
        }

    def to_domain(self) -> PoseFrame:
        return PoseFrame(
            landmarks={lm.name: lm.to_domain() for lm in self.landmarks},
            frame_index=self.frame_index,
            timestamp_s=self.timestamp_s,
        )
