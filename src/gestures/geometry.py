"""
Geometry helpers shared by every detector.
All thresholds operate on palm-normalized distances, never raw landmark units.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import math

Point = Tuple[float, float]

# MediaPipe hand landmark indices
WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
PINKY_MCP = 17

NUM_LANDMARKS = 21


class MalformedFrameError(ValueError):
    """Raised when a present landmark frame cannot be measured."""


@dataclass
class HandMetrics:
    """Per-frame normalized distances between the fingertips that drive the classifiers."""
    palm_scale: float
    pinch: float          # thumb tip <-> index tip
    middle_thumb: float   # middle tip <-> thumb tip
    index_middle: float   # index tip <-> middle tip


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def distance(a, b) -> float:
    """2-D Euclidean distance; any z component is ignored."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def palm_scale(landmarks: Sequence, floor: float = 0.08) -> float:
    """
    Hand-size normalization factor.

    Larger of palm width (index MCP to pinky MCP) and palm length
    (wrist to middle MCP), floored so tiny or degenerate hands do not
    blow up the normalized distances.
    """
    return max(
        distance(landmarks[INDEX_MCP], landmarks[PINKY_MCP]),
        distance(landmarks[WRIST], landmarks[MIDDLE_MCP]),
        floor,
    )


def normalized_distance(a, b, scale: float) -> float:
    return distance(a, b) / scale


def validate_frame(frame: Optional[Sequence]) -> None:
    """
    Check that a present frame carries 21 finite 2-D points.

    Raises:
        MalformedFrameError: if a landmark is missing or unusable.
    """
    if frame is None:
        return
    try:
        count = len(frame)
    except TypeError:
        raise MalformedFrameError("landmark frame is not a sequence")
    if count < NUM_LANDMARKS:
        raise MalformedFrameError(f"expected {NUM_LANDMARKS} landmarks, got {count}")
    for idx in range(NUM_LANDMARKS):
        point = frame[idx]
        try:
            finite = point is not None and len(point) >= 2 and (
                math.isfinite(point[0]) and math.isfinite(point[1])
            )
        except TypeError:
            finite = False
        if not finite:
            raise MalformedFrameError(f"landmark {idx} is missing or not a finite 2-D point")


def measure_hand(landmarks: Sequence, floor: float = 0.08) -> HandMetrics:
    """Compute the normalized distances used by the mode arbiter and pinch classifier."""
    scale = palm_scale(landmarks, floor)
    thumb = landmarks[THUMB_TIP]
    index = landmarks[INDEX_TIP]
    middle = landmarks[MIDDLE_TIP]
    return HandMetrics(
        palm_scale=scale,
        pinch=normalized_distance(index, thumb, scale),
        middle_thumb=normalized_distance(middle, thumb, scale),
        index_middle=normalized_distance(index, middle, scale),
    )


def fingertip_midpoint(landmarks: Sequence) -> Point:
    """Midpoint of the index and middle fingertips in camera space."""
    index = landmarks[INDEX_TIP]
    middle = landmarks[MIDDLE_TIP]
    return ((index[0] + middle[0]) * 0.5, (index[1] + middle[1]) * 0.5)
