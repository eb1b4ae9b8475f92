"""
Thumb-index pinch: click on a short tap, drag-reorder on a long hold.
"""
from typing import List, Tuple

from .config import GestureConfig
from .events import Click, DragReorder, GestureEvent
from .state import DwellState, EngineState, Mode
from .surface import TileSurface


def next_pinch(active: bool, pinch_distance: float, locked: bool, config: GestureConfig) -> bool:
    """Hysteresis band: enter below pinch_start, stay until above pinch_release."""
    if locked:
        return False
    threshold = config.pinch_release if active else config.pinch_start
    return pinch_distance < threshold


def classify_pinch(
    state: EngineState,
    pinch_distance: float,
    cursor: Tuple[float, float],
    now: float,
    surface: TileSurface,
    config: GestureConfig,
) -> List[GestureEvent]:
    """
    Advance the pinch, drag and tap-click logic by one frame.

    Must run after the mode arbiter so a fresh scroll/zoom lock suppresses
    the pinch on the same frame.
    """
    events: List[GestureEvent] = []
    locked = state.zoom.locked or state.scroll.locked
    pinch = state.pinch
    was_pinching = pinch.active
    pinching = next_pinch(was_pinching, pinch_distance, locked, config)

    pinch.frame_count = pinch.frame_count + 1 if pinching else 0
    if pinching and not was_pinching:
        pinch.started_at = now

    drag = state.drag
    if pinching:
        drag.frame_count += 1
    else:
        drag.frame_count = 0
        drag.target = None
        drag.dragging = False

    active_tile = surface.active_tile
    if drag.frame_count > config.drag_hold_frames and active_tile:
        drag.dragging = True
        state.mode = Mode.POINTER
        hovered = surface.hit_test(cursor)
        swap_ready = drag.last_swap_at is None or now - drag.last_swap_at > config.drag_swap_cooldown_ms
        if hovered and hovered != active_tile and hovered != drag.target and swap_ready:
            surface.reorder(active_tile, hovered)
            drag.target = hovered
            drag.last_swap_at = now
            events.append(DragReorder(from_tile_id=active_tile, to_tile_id=hovered))
            state.status = f"Dragging {active_tile.upper()} over {hovered.upper()}."

    if was_pinching and not pinching:
        duration = now - (pinch.started_at if pinch.started_at is not None else now)
        cooled = state.last_click_at is None or now - state.last_click_at > config.click_cooldown_ms
        if duration < config.tap_max_ms and not locked and cooled:
            tile_id = surface.hit_test(cursor)
            if tile_id:
                events.append(Click(tile_id=tile_id))
                state.status = f"Pinch click: {tile_id.upper()} toggled."
            state.mode = Mode.CLICK
            state.last_click_at = now
        pinch.started_at = None
        # Dwell time does not accrue under a pinch; restart the hover timer
        state.dwell = DwellState(target=state.dwell.target, started_at=now)

    pinch.active = pinching
    return events
