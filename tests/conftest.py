"""Shared fixtures: synthetic golf swings built from pose frames."""

import math

import pytest

from swingcoach.core.domain.pose import PoseFrame


def _hands(i, address_end, top, impact, total):
    """Hand centre and wrist-line angle for frame i of a synthetic swing."""
    if i < address_end:
        return 0.5, 0.7, 20.0
    if i <= top:
        # Smooth rise up and back
        e = (1 - math.cos(math.pi * (i - address_end) / (top - address_end))) / 2
        return 0.5 - 0.2 * e, 0.7 - 0.4 * e, 20.0 + 40.0 * e
    if i <= impact:
        # Accelerating drop to impact
        s = ((i - top) / (impact - top)) ** 2
        return 0.3 + 0.2 * s, 0.3 + 0.45 * s, 60.0 - 50.0 * s
    # Decelerating follow-through
    k = i - impact
    span = total - 1 - impact
    r = 1 - (1 - k / span) ** 2
    return 0.5 + 0.05 * r, 0.75 - 0.05 * r, 10.0 - 20.0 * r


def _rotation(i, address_end, top, impact):
    """Shoulder line angle in degrees and hip centre x."""
    if i < address_end:
        return 0.0, 0.5
    if i <= top:
        e = (i - address_end) / (top - address_end)
        return 80.0 * e, 0.5 - 0.02 * e
    if i <= impact:
        s = (i - top) / (impact - top)
        return 80.0 - 70.0 * s, 0.48 + 0.12 * s
    return 10.0, 0.6


def build_swing(
    total=90,
    address_end=10,
    top=40,
    impact=75,
    fps=30.0,
    timestamps=True,
    dropouts=None,
):
    """
    Build PoseFrames for a synthetic right-handed swing.

    Args:
        dropouts: landmark name -> frame range where its visibility is 0
    """
    dropouts = dropouts or {}
    frames = []
    for i in range(total):
        hx, hy, wrist_deg = _hands(i, address_end, top, impact, total)
        shoulder_deg, hip_x = _rotation(i, address_end, top, impact)

        wa = math.radians(wrist_deg)
        sa = math.radians(shoulder_deg)
        ha = math.radians(shoulder_deg / 2)

        points = {
            "nose": (0.5, 0.25),
            "left_wrist": (hx - 0.02 * math.cos(wa), hy - 0.02 * math.sin(wa)),
            "right_wrist": (hx + 0.02 * math.cos(wa), hy + 0.02 * math.sin(wa)),
            "left_shoulder": (0.5 - 0.1 * math.cos(sa), 0.35 - 0.1 * math.sin(sa)),
            "right_shoulder": (0.5 + 0.1 * math.cos(sa), 0.35 + 0.1 * math.sin(sa)),
            "left_hip": (hip_x - 0.07 * math.cos(ha), 0.55 - 0.07 * math.sin(ha)),
            "right_hip": (hip_x + 0.07 * math.cos(ha), 0.55 + 0.07 * math.sin(ha)),
        }
        landmarks = {}
        for name, (x, y) in points.items():
            visibility = 0.0 if i in dropouts.get(name, ()) else 1.0
            landmarks[name] = (x, y, visibility)

        frames.append(PoseFrame.from_points(
            landmarks,
            frame_index=i,
            timestamp_s=i / fps if timestamps else None,
        ))
    return frames


def frames_to_json(frames):
    """Serialize PoseFrames the way a pose-estimation client would."""
    return [
        {
            "frame_index": frame.frame_index,
            "timestamp_s": frame.timestamp_s,
            "landmarks": [
                {"name": lm.name, "x": lm.x, "y": lm.y, "visibility": lm.visibility}
                for lm in frame.landmarks.values()
            ],
        }
        for frame in frames
    ]


@pytest.fixture
def make_swing():
    return build_swing


@pytest.fixture
def swing_frames():
    """90-frame swing: still until 10, top at 40, impact at 75."""
    return build_swing()


@pytest.fixture
def short_swing_frames():
    """Minimum-length 30-frame swing."""
    return build_swing(total=30, address_end=3, top=13, impact=25)


@pytest.fixture
def to_json():
    return frames_to_json
