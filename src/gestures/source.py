"""
Pull-based frame sources.

The engine never waits on a callback: a runner asks a source for the next
frame, steps the engine and asks again. Live sources block while the
detector runs, so frames that arrive in the meantime are dropped instead
of queued.
"""
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple, runtime_checkable
import yaml

from .engine import FrameOutput, GestureEngine

TimedFrame = Tuple[float, Optional[Sequence]]


@runtime_checkable
class FrameSource(Protocol):
    """Anything the engine can pull landmark frames from."""

    timestamp: float  # capture time of the last frame, ms

    def next_frame(self) -> Optional[Sequence]:
        """Landmarks of the next frame, or None when no hand was found."""
        ...


class SequenceSource:
    """Replays recorded (timestamp_ms, landmarks) pairs."""

    def __init__(self, frames: Iterable[TimedFrame]):
        self._frames: List[TimedFrame] = list(frames)
        self._index = 0
        self.timestamp: float = 0.0

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._frames)

    def next_frame(self) -> Optional[Sequence]:
        if self.exhausted:
            raise EOFError("replay exhausted")
        self.timestamp, landmarks = self._frames[self._index]
        self._index += 1
        return landmarks


def load_replay(path: Path) -> SequenceSource:
    """
    Load a recorded session.

    Expected YAML layout::

        frames:
          - t: 0.0
            landmarks: [[0.5, 0.5], ...]   # 21 points, or null for no hand

    Raises:
        ValueError: if a frame has no timestamp or unreadable landmarks.
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    frames: List[TimedFrame] = []
    for i, entry in enumerate(data.get('frames') or []):
        if not isinstance(entry, dict) or 't' not in entry:
            raise ValueError(f"replay frame {i} has no timestamp 't'")
        landmarks = entry.get('landmarks')
        if landmarks is not None:
            try:
                landmarks = [tuple(point) for point in landmarks]
            except TypeError:
                raise ValueError(f"replay frame {i} has malformed landmarks")
        frames.append((float(entry['t']), landmarks))
    return SequenceSource(frames)


def run_replay(engine: GestureEngine, source: FrameSource) -> Iterator[FrameOutput]:
    """Step the engine through every frame until the source raises EOFError."""
    while True:
        try:
            landmarks = source.next_frame()
        except EOFError:
            return
        yield engine.step(landmarks, source.timestamp)
