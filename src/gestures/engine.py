"""
Per-frame gesture state machine.

step() consumes one landmark frame (or None when no hand is visible) and
runs the detectors in a fixed order, because later ones depend on locks
set by earlier ones:

    geometry -> cursor -> mode arbiter (zoom, scroll) -> pinch/click/drag
    -> swipe and dwell (pointer sub-mode only)
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import GestureConfig
from .cursor_tracker import raw_cursor, smooth_cursor
from .events import GestureEvent
from .geometry import MalformedFrameError, clamp, measure_hand, validate_frame
from .mode_arbiter import arbitrate_modes
from .pinch_classifier import classify_pinch
from .state import CursorSample, EngineState, Mode
from .surface import TileSurface
from .swipe_dwell import detect_swipe, track_dwell

LandmarkFrame = Sequence

ZOOM_STATUS = "Zoom mode: thumb + middle closer = zoom in, farther apart = zoom out."
SCROLL_STATUS = "Scroll mode: keep index + middle together, move up/down and left/right."
POINTER_STATUS = "Pointer mode: steer with your index finger."


@dataclass
class FrameOutput:
    """Everything the UI needs after one frame."""
    hand_visible: bool
    cursor: Tuple[float, float]
    mode: Mode
    zoom_level: float
    scroll_offset: Tuple[float, float]
    dwell_progress: float
    pinching: bool
    dragging: bool
    pinch_strength: float
    speed: float
    status: str
    events: List[GestureEvent] = field(default_factory=list)


def step(
    state: EngineState,
    frame: Optional[LandmarkFrame],
    now: float,
    surface: TileSurface,
    config: Optional[GestureConfig] = None,
) -> Tuple[List[GestureEvent], EngineState]:
    """
    Advance the state machine by one frame.

    Args:
        state: Engine state, mutated in place
        frame: 21 camera-space landmarks, or None if no hand was detected
        now: Monotonic timestamp in milliseconds
        surface: Tile layout used for hit testing and drag reorder
        config: Gesture thresholds (defaults if None)

    Returns:
        (events raised this frame, the same state object)
    """
    config = config or GestureConfig()

    if frame is None:
        state.reset_tracking()
        return [], state

    try:
        validate_frame(frame)
    except MalformedFrameError:
        # Skip the frame, keep whatever we had
        return [], state

    events: List[GestureEvent] = []
    metrics = measure_hand(frame, config.palm_scale_floor)

    update = smooth_cursor(raw_cursor(frame), state.previous_point, now, config)
    cursor = update.cursor
    state.hand_visible = True
    state.cursor = cursor
    state.speed = clamp(update.velocity * config.speed_gain, 0.0, 1.0)
    state.pinch_strength = clamp(1.0 - metrics.pinch / config.pinch_strength_range, 0.0, 1.0)

    events.extend(arbitrate_modes(state, frame, metrics, config))
    if state.zoom.locked:
        state.mode = Mode.ZOOM
        state.status = ZOOM_STATUS
    elif state.scroll.locked:
        state.mode = Mode.SCROLL
        state.status = SCROLL_STATUS

    last_click_at = state.last_click_at
    events.extend(classify_pinch(state, metrics.pinch, cursor, now, surface, config))
    clicked = state.last_click_at != last_click_at

    locked = state.zoom.locked or state.scroll.locked
    if not state.pinch.active and not locked:
        if not clicked:
            state.mode = Mode.POINTER
            state.status = POINTER_STATUS
        events.extend(detect_swipe(state, cursor, update.previous, update.elapsed_ms, now, config))
        events.extend(track_dwell(state, cursor, now, surface, config))

    state.previous_point = CursorSample(x=cursor[0], y=cursor[1], t=now)
    return events, state


class GestureEngine:
    """
    Owns an EngineState and turns frames into FrameOutput snapshots.

    Gestures detected:
    - Pointer: index fingertip steers a smoothed cursor
    - Click: quick thumb-index pinch
    - Dwell click: cursor rests on one tile
    - Drag: long pinch on the selected tile reorders it
    - Scroll: index + middle held together, two-axis
    - Zoom: thumb-middle pinch distance
    - Swipe: fast horizontal flick cycles tile focus
    """

    def __init__(self, surface: TileSurface, config: Optional[GestureConfig] = None):
        """
        Args:
            surface: Tile layout collaborator (hit test, reorder, active tile)
            config: Gesture thresholds
        """
        self._config = config or GestureConfig()
        self._surface = surface
        self.state = EngineState.from_config(self._config)

    def step(self, frame: Optional[LandmarkFrame], now: float) -> FrameOutput:
        events, state = step(self.state, frame, now, self._surface, self._config)
        return FrameOutput(
            hand_visible=state.hand_visible,
            cursor=state.cursor,
            mode=state.mode,
            zoom_level=state.zoom_level,
            scroll_offset=(state.scroll_x, state.scroll_y),
            dwell_progress=state.dwell.progress,
            pinching=state.pinch.active,
            dragging=state.drag.dragging,
            pinch_strength=state.pinch_strength,
            speed=state.speed,
            status=state.status,
            events=events,
        )

    def reset(self) -> None:
        """Start over, including zoom level and scroll offsets."""
        self.state = EngineState.from_config(self._config)
