"""
Config loader for NeuroDesk.
Loads YAML configuration with dataclass validation.

Gesture thresholds are fixed (GestureConfig); the YAML file only covers
camera, detector and tile surface settings.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 960
    height: int = 540
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.72
    min_tracking_confidence: float = 0.7
    model_path: Optional[str] = None


@dataclass(frozen=True)
class GestureConfig:
    """Thresholds of the gesture state machine. Distances are palm-normalized, times in ms."""
    palm_scale_floor: float = 0.08

    # Cursor smoothing (velocity-adaptive EMA)
    smoothing_min: float = 0.22
    smoothing_max: float = 0.56
    smoothing_velocity_gain: float = 1.8
    min_elapsed_ms: float = 1.0
    first_frame_elapsed_ms: float = 16.0

    # Zoom lock (middle-thumb pinch, index and middle apart)
    zoom_start_middle_thumb: float = 0.24
    zoom_start_index_middle: float = 0.25
    zoom_hold_middle_thumb: float = 0.34
    zoom_hold_index_middle: float = 0.2

    # Scroll lock (index and middle together, thumb away)
    scroll_start_index_middle: float = 0.22
    scroll_start_middle_thumb: float = 0.34
    scroll_hold_index_middle: float = 0.3
    scroll_hold_middle_thumb: float = 0.28

    mode_arm_frames: int = 3
    mode_release_frames: int = 5

    zoom_deadband: float = 0.0012
    zoom_gain: float = 3.6
    zoom_min: float = 0.45
    zoom_max: float = 2.6
    zoom_anchor_keep: float = 0.45

    scroll_gain: float = 180.0
    scroll_step_max: float = 22.0
    scroll_offset_max: float = 360.0
    scroll_anchor_keep: float = 0.65

    # Pinch hysteresis band
    pinch_start: float = 0.34
    pinch_release: float = 0.42
    pinch_strength_range: float = 0.65

    tap_max_ms: float = 280.0
    click_cooldown_ms: float = 420.0

    drag_hold_frames: int = 12
    drag_swap_cooldown_ms: float = 280.0

    swipe_max_elapsed_ms: float = 135.0
    swipe_min_dx: float = 0.22
    swipe_cooldown_ms: float = 650.0

    dwell_ms: float = 980.0
    dwell_cooldown_ms: float = 600.0

    speed_gain: float = 900.0


@dataclass
class SurfaceConfig:
    """Pixel geometry of the tile grid used for hit testing."""
    width: int = 960
    height: int = 640
    padding: float = 24.0
    gap: float = 12.0
    columns: int = 3
    row_height: float = 96.0
    origin_x: float = 0.5   # transform origin, fraction of the grid box
    origin_y: float = 0.3


@dataclass
class UIConfig:
    show_preview: bool = False
    debug_overlay: bool = False


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    surface: SurfaceConfig = field(default_factory=SurfaceConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        surface=_dict_to_dataclass(SurfaceConfig, data.get('surface')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
