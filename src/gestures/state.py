"""
Mutable engine state.
One EngineState per engine; only gestures.engine.step writes to it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .config import GestureConfig
from .mode_arbiter import ModeLatch

HAND_LOST_STATUS = "Hand not detected. Keep your hand in frame."


class Mode(Enum):
    """Externally visible interaction mode label."""
    IDLE = "idle"
    POINTER = "pointer"
    CLICK = "click"
    SCROLL = "scroll"
    ZOOM = "zoom"
    SWIPE = "swipe"


@dataclass
class CursorSample:
    x: float
    y: float
    t: float


@dataclass
class PinchState:
    active: bool = False
    frame_count: int = 0
    started_at: Optional[float] = None


@dataclass
class DragState:
    frame_count: int = 0
    target: Optional[str] = None
    last_swap_at: Optional[float] = None
    dragging: bool = False


@dataclass
class DwellState:
    target: Optional[str] = None
    started_at: float = 0.0
    progress: float = 0.0


@dataclass
class EngineState:
    """
    Everything the gesture state machine remembers between frames.

    The sub-states mirror the detectors: cursor memory, the two mode
    latches with their anchors, pinch/drag, dwell and the shared cooldowns.
    Zoom level and scroll offsets are view state; they survive tracking loss.
    """
    previous_point: Optional[CursorSample] = None

    pinch: PinchState = field(default_factory=PinchState)

    scroll: ModeLatch = field(default_factory=ModeLatch)
    scroll_anchor: Optional[Tuple[float, float]] = None

    zoom: ModeLatch = field(default_factory=ModeLatch)
    zoom_anchor: Optional[float] = None

    drag: DragState = field(default_factory=DragState)
    dwell: DwellState = field(default_factory=DwellState)

    last_click_at: Optional[float] = None
    last_swipe_at: Optional[float] = None

    # Values handed to the UI every frame
    cursor: Tuple[float, float] = (0.5, 0.5)
    hand_visible: bool = False
    mode: Mode = Mode.IDLE
    zoom_level: float = 1.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    pinch_strength: float = 0.0
    speed: float = 0.0
    status: str = "Enable your camera to start gesture control."

    @classmethod
    def from_config(cls, config: GestureConfig) -> "EngineState":
        """Fresh state with latch debounce lengths taken from config."""
        return cls(
            scroll=ModeLatch(config.mode_arm_frames, config.mode_release_frames),
            zoom=ModeLatch(config.mode_arm_frames, config.mode_release_frames),
        )

    def cancel_pointer_gestures(self) -> None:
        """Drop in-progress pinch, drag and dwell (a mode lock took the hand)."""
        self.pinch = PinchState()
        self.drag = DragState(last_swap_at=self.drag.last_swap_at)
        self.dwell = DwellState()

    def reset_tracking(self) -> None:
        """Full reset on loss of tracking: locks, counters, anchors, dwell and cursor memory."""
        self.zoom.reset()
        self.scroll.reset()
        self.zoom_anchor = None
        self.scroll_anchor = None
        self.pinch = PinchState()
        self.drag = DragState(last_swap_at=self.drag.last_swap_at)
        self.dwell = DwellState()
        self.previous_point = None
        self.hand_visible = False
        self.mode = Mode.IDLE
        self.speed = 0.0
        self.status = HAND_LOST_STATUS
