import pytest
import yaml
from gestures.config import Config, GestureConfig, load_config
from gestures.engine import GestureEngine
from gestures.events import SwipeSelect
from gestures.source import FrameSource, SequenceSource, load_replay, run_replay
from ui.tiles import TileBoard

from hands import POINTER, make_hand


def test_missing_config_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config == Config()


def test_config_sections_and_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "camera": {"device_id": 2, "fps": 60, "flux": True},
        "surface": {"columns": 4},
        "ui": {"show_preview": True},
    }))

    config = load_config(path)

    assert config.camera.device_id == 2
    assert config.camera.fps == 60
    assert config.camera.width == 960
    assert config.surface.columns == 4
    assert config.ui.show_preview is True
    assert config.mediapipe.max_num_hands == 1


def test_gesture_thresholds_are_not_loaded(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"gestures": {"dwell_ms": 10}}))

    assert load_config(path).gestures == GestureConfig()


def test_empty_config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


def test_sequence_source():
    source = SequenceSource([(0.0, None), (16.0, make_hand())])
    assert len(source) == 2

    assert source.next_frame() is None
    assert source.timestamp == 0.0
    assert len(source.next_frame()) == 21
    assert source.timestamp == 16.0
    assert source.exhausted

    with pytest.raises(EOFError):
        source.next_frame()


def test_replay_file_through_engine(tmp_path):
    frames = [
        {"t": 0, "landmarks": [list(p) for p in make_hand((0.2, 0.9), POINTER)]},
        {"t": 2, "landmarks": [list(p) for p in make_hand((0.7, 0.9), POINTER)]},
        {"t": 40, "landmarks": None},
    ]
    path = tmp_path / "session.yaml"
    path.write_text(yaml.safe_dump({"frames": frames}))

    source = load_replay(path)
    outputs = list(run_replay(GestureEngine(TileBoard()), source))

    assert len(outputs) == 3
    assert outputs[1].events == [SwipeSelect(direction="right")]
    assert outputs[2].hand_visible is False


def test_replay_frame_without_timestamp(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"frames": [{"landmarks": None}]}))

    with pytest.raises(ValueError):
        load_replay(path)


def test_replay_frame_with_bad_landmarks(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"frames": [{"t": 0, "landmarks": [1, 2, 3]}]}))

    with pytest.raises(ValueError):
        load_replay(path)


def test_run_replay_accepts_any_frame_source():
    class Countdown:
        """Two frames, then exhausted."""

        def __init__(self):
            self.timestamp = 0.0
            self._left = 2

        def next_frame(self):
            if not self._left:
                raise EOFError
            self._left -= 1
            self.timestamp += 20.0
            return make_hand((0.5, 0.9), POINTER)

    source = Countdown()
    assert isinstance(source, FrameSource)
    assert isinstance(SequenceSource([]), FrameSource)

    outputs = list(run_replay(GestureEngine(TileBoard()), source))

    assert len(outputs) == 2
    assert all(out.hand_visible for out in outputs)
    assert outputs[1].speed == 0.0
