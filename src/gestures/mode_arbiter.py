"""
Scroll / Zoom mode arbitration.

Each mode is a latch with explicit states. A latch arms after a run of
frames showing its start pose, stays locked while its (looser) hold pose
persists, and releases only after a run of frames without it. Zoom is
evaluated before scroll and neither may arm while the other is locked.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Sequence

from .config import GestureConfig
from .events import GestureEvent, ScrollDelta, ZoomDelta
from .geometry import HandMetrics, clamp, fingertip_midpoint

if TYPE_CHECKING:
    from .state import EngineState


class LatchState(Enum):
    INACTIVE = auto()
    ARMING = auto()
    ACTIVE = auto()
    RELEASING = auto()


# (current state, signal) -> next state.
# Unlocked states read the start signal, locked states read the hold signal.
# ARMING and RELEASING are promoted/demoted by their frame counters.
_TRANSITIONS = {
    (LatchState.INACTIVE, False): LatchState.INACTIVE,
    (LatchState.INACTIVE, True): LatchState.ARMING,
    (LatchState.ARMING, False): LatchState.INACTIVE,
    (LatchState.ARMING, True): LatchState.ARMING,
    (LatchState.ACTIVE, True): LatchState.ACTIVE,
    (LatchState.ACTIVE, False): LatchState.RELEASING,
    (LatchState.RELEASING, True): LatchState.ACTIVE,
    (LatchState.RELEASING, False): LatchState.RELEASING,
}


@dataclass
class ModeLatch:
    """Debounced enter/exit latch for one exclusive mode."""
    arm_frames: int = 3
    release_frames: int = 5
    state: LatchState = LatchState.INACTIVE
    frame_count: int = 0
    release_count: int = 0

    @property
    def locked(self) -> bool:
        """True while the mode owns the hand, including the release grace period."""
        return self.state in (LatchState.ACTIVE, LatchState.RELEASING)

    def update(self, start: bool, hold: bool, blocked: bool = False) -> LatchState:
        """
        Advance one frame.

        Args:
            start: Candidate pose seen this frame
            hold: Hold pose seen this frame
            blocked: The competing mode is locked, arming is not allowed
        """
        signal = hold if self.locked else (start and not blocked)
        next_state = _TRANSITIONS[(self.state, signal)]

        if next_state is LatchState.ARMING:
            self.frame_count += 1
            if self.frame_count >= self.arm_frames:
                next_state = LatchState.ACTIVE
                self.frame_count = 0
        elif next_state is LatchState.RELEASING:
            self.release_count += 1
            if self.release_count >= self.release_frames:
                next_state = LatchState.INACTIVE
                self.release_count = 0
        else:
            self.frame_count = 0
            self.release_count = 0

        self.state = next_state
        return next_state

    def reset(self) -> None:
        self.state = LatchState.INACTIVE
        self.frame_count = 0
        self.release_count = 0


def zoom_signals(metrics: HandMetrics, config: GestureConfig):
    """Return (start, hold) for the thumb-middle zoom pose."""
    start = (metrics.middle_thumb < config.zoom_start_middle_thumb
             and metrics.index_middle > config.zoom_start_index_middle)
    hold = (metrics.middle_thumb < config.zoom_hold_middle_thumb
            and metrics.index_middle > config.zoom_hold_index_middle)
    return start, hold


def scroll_signals(metrics: HandMetrics, config: GestureConfig):
    """Return (start, hold) for the index+middle scroll pose."""
    start = (metrics.index_middle < config.scroll_start_index_middle
             and metrics.middle_thumb > config.scroll_start_middle_thumb)
    hold = (metrics.index_middle < config.scroll_hold_index_middle
            and metrics.middle_thumb > config.scroll_hold_middle_thumb)
    return start, hold


def _apply_zoom(state: "EngineState", current: float, config: GestureConfig) -> List[GestureEvent]:
    if state.zoom_anchor is None:
        state.zoom_anchor = current
        return []

    events: List[GestureEvent] = []
    anchor = state.zoom_anchor
    delta = current - anchor
    if abs(delta) > config.zoom_deadband:
        factor = 1.0 + delta * config.zoom_gain
        state.zoom_level = clamp(state.zoom_level * factor, config.zoom_min, config.zoom_max)
        events.append(ZoomDelta(factor=factor))

    keep = config.zoom_anchor_keep
    state.zoom_anchor = anchor * keep + current * (1.0 - keep)
    return events


def _apply_scroll(state: "EngineState", landmarks: Sequence, config: GestureConfig) -> List[GestureEvent]:
    mid_x, mid_y = fingertip_midpoint(landmarks)
    if state.scroll_anchor is None:
        state.scroll_anchor = (mid_x, mid_y)
        return []

    anchor_x, anchor_y = state.scroll_anchor
    limit = config.scroll_step_max
    step_y = clamp((mid_y - anchor_y) * config.scroll_gain, -limit, limit)
    # Camera x grows toward the camera's right, the user sees it mirrored
    step_x = clamp((anchor_x - mid_x) * config.scroll_gain, -limit, limit)

    bound = config.scroll_offset_max
    state.scroll_y = clamp(state.scroll_y + step_y, -bound, bound)
    state.scroll_x = clamp(state.scroll_x + step_x, -bound, bound)

    keep = config.scroll_anchor_keep
    state.scroll_anchor = (
        anchor_x * keep + mid_x * (1.0 - keep),
        anchor_y * keep + mid_y * (1.0 - keep),
    )

    if step_x == 0.0 and step_y == 0.0:
        return []
    return [ScrollDelta(dx=step_x, dy=step_y)]


def arbitrate_modes(
    state: "EngineState",
    landmarks: Sequence,
    metrics: HandMetrics,
    config: GestureConfig,
) -> List[GestureEvent]:
    """
    Update both latches for one frame and apply the continuous delta of
    whichever mode is locked.

    Returns:
        ZoomDelta / ScrollDelta events produced this frame.
    """
    zoom_start, zoom_hold = zoom_signals(metrics, config)
    scroll_start, scroll_hold = scroll_signals(metrics, config)

    state.zoom.update(zoom_start, zoom_hold, blocked=state.scroll.locked)
    state.scroll.update(scroll_start, scroll_hold, blocked=state.zoom.locked)

    events: List[GestureEvent] = []
    if state.zoom.locked:
        events.extend(_apply_zoom(state, metrics.middle_thumb, config))
    else:
        state.zoom_anchor = None

    if state.scroll.locked:
        events.extend(_apply_scroll(state, landmarks, config))
    else:
        state.scroll_anchor = None

    if state.zoom.locked or state.scroll.locked:
        state.cancel_pointer_gestures()

    return events
