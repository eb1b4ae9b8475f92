"""
Index-fingertip cursor with velocity-adaptive smoothing.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import GestureConfig
from .geometry import INDEX_TIP, clamp, distance
from .state import CursorSample


@dataclass
class CursorUpdate:
    """Result of smoothing one frame."""
    cursor: Tuple[float, float]
    velocity: float          # normalized units per ms
    elapsed_ms: float
    previous: Optional[CursorSample]


def raw_cursor(landmarks: Sequence) -> Tuple[float, float]:
    """Mirror the index tip horizontally so the cursor follows the user, not the camera."""
    tip = landmarks[INDEX_TIP]
    return (clamp(1.0 - tip[0], 0.0, 1.0), clamp(tip[1], 0.0, 1.0))


def smooth_cursor(
    raw: Tuple[float, float],
    previous: Optional[CursorSample],
    now: float,
    config: GestureConfig,
) -> CursorUpdate:
    """
    Blend the raw cursor into the previous one.

    Slow motion gets the minimum blend weight (less jitter), fast motion a
    larger one (less lag). The first sample is passed through unchanged.
    """
    if previous is None:
        return CursorUpdate(
            cursor=raw,
            velocity=0.0,
            elapsed_ms=config.first_frame_elapsed_ms,
            previous=None,
        )

    elapsed = now - previous.t
    velocity = distance(raw, (previous.x, previous.y)) / max(elapsed, config.min_elapsed_ms)
    alpha = clamp(
        config.smoothing_min + velocity * config.smoothing_velocity_gain,
        config.smoothing_min,
        config.smoothing_max,
    )
    cursor = (
        previous.x * (1.0 - alpha) + raw[0] * alpha,
        previous.y * (1.0 - alpha) + raw[1] * alpha,
    )
    return CursorUpdate(cursor=cursor, velocity=velocity, elapsed_ms=elapsed, previous=previous)
