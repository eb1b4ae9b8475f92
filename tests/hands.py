"""
Synthetic landmark frames for driving the engine in tests.

Poses are given as fingertip offsets from the index tip in palm units.
make_hand() builds a palm whose scale is exactly PALM, so a palm-unit
offset of 0.1 is a normalized distance of 0.1.
"""
from typing import List, Tuple

PALM = 0.2

# (middle tip offset, thumb tip offset), palm units relative to the index tip
POINTER = ((0.6, 0.0), (0.3, 0.8))      # pinch 0.85, index-middle 0.6
PINCH = ((0.6, 0.0), (0.0, 0.1))        # pinch 0.1
LOOSE_PINCH = ((0.6, 0.0), (0.0, 0.38)) # inside the hysteresis band
OPEN_PINCH = ((0.6, 0.0), (0.0, 0.45))  # above the release threshold
SCROLL = ((0.1, 0.0), (0.0, 0.8))       # index-middle 0.1, middle-thumb 0.81
ZOOM = ((0.5, 0.0), (0.5, 0.1))         # middle-thumb 0.1, index-middle 0.5
ZOOM_WIDE = ((0.5, 0.0), (0.5, 0.2))    # middle-thumb 0.2
SCROLL_PINCH = ((0.1, 0.0), (-0.2, 0.2))  # scroll start pose that also reads as a pinch
ZOOM_PINCH = ((0.5, 0.0), (0.3, 0.1))     # zoom start pose that still holds a pinch (0.32)


def make_hand(cursor: Tuple[float, float] = (0.5, 0.5), pose=POINTER) -> List[Tuple[float, float]]:
    """
    Build 21 camera-space landmarks whose mirrored index tip lands on `cursor`.
    """
    (mdx, mdy), (tdx, tdy) = pose
    tip_x = 1.0 - cursor[0]
    tip_y = cursor[1]

    # Palm below the fingertips: index/pinky MCP 0.2 apart, wrist 0.2 below middle MCP
    base_y = tip_y + 0.3
    wrist = (tip_x, base_y + PALM)
    index_mcp = (tip_x - PALM / 2, base_y)
    middle_mcp = (tip_x, base_y)
    pinky_mcp = (tip_x + PALM / 2, base_y)

    landmarks = [wrist] * 21
    landmarks[5] = index_mcp
    landmarks[9] = middle_mcp
    landmarks[13] = middle_mcp
    landmarks[17] = pinky_mcp
    landmarks[8] = (tip_x, tip_y)
    landmarks[12] = (tip_x + mdx * PALM, tip_y + mdy * PALM)
    landmarks[4] = (tip_x + tdx * PALM, tip_y + tdy * PALM)
    return list(landmarks)


def run(engine, frames):
    """Step through (t_ms, frame) pairs; returns the list of FrameOutputs."""
    return [engine.step(frame, t) for t, frame in frames]


def hold(cursor, pose, start, stop, step=20):
    """Frames with a constant pose every `step` ms over [start, stop]."""
    return [(t, make_hand(cursor, pose)) for t in range(start, stop + 1, step)]


def events_of(outputs, kind):
    return [e for out in outputs for e in out.events if isinstance(e, kind)]
