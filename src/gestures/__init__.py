"""
NeuroDesk Gesture Module

Per-frame gesture state machine over single-hand landmarks.
"""
from .config import Config, GestureConfig, load_config
from .engine import FrameOutput, GestureEngine, step
from .events import (
    Click,
    DragReorder,
    DwellClick,
    GestureEvent,
    ScrollDelta,
    SwipeSelect,
    ZoomDelta,
)
from .geometry import MalformedFrameError
from .state import EngineState, Mode
from .surface import TileSurface

__all__ = [
    'Config',
    'GestureConfig',
    'load_config',
    'FrameOutput',
    'GestureEngine',
    'step',
    'Click',
    'DragReorder',
    'DwellClick',
    'GestureEvent',
    'ScrollDelta',
    'SwipeSelect',
    'ZoomDelta',
    'MalformedFrameError',
    'EngineState',
    'Mode',
    'TileSurface',
]
