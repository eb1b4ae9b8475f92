"""
Background worker for hand tracking and the gesture engine.
Runs in a separate QThread to avoid blocking the UI.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from gestures.engine import GestureEngine
from ui.tiles import TileBoard
from .hand_tracker import HandTracker


class EngineWorker(QObject):
    """
    Pulls frames from the tracker and steps the engine, one frame at a time.

    The engine state is only touched from this worker's thread. The board is
    shared with the UI thread and locks internally.
    """
    # Signals
    frame_processed = pyqtSignal(object)  # Emits FrameOutput
    hand_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    def __init__(self, config, board: TileBoard, parent=None):
        super().__init__(parent)
        self._config = config
        self._board = board
        self._tracker: Optional[HandTracker] = None
        self._engine: Optional[GestureEngine] = None
        self._is_running = False

    def start_process(self):
        """Main processing loop. Runs in the worker thread until stop_process()."""
        self._tracker = HandTracker(self._config)
        self._engine = GestureEngine(self._board, self._config.gestures)

        if not self._tracker.start():
            self.error.emit(self._tracker.status)
            return

        self._is_running = True
        had_hand = False
        last_preview = 0.0
        preview_interval = 1.0 / 5  # Low FPS for landmarks preview

        try:
            while self._is_running:
                # Blocks on capture + detection; nothing is buffered meanwhile
                landmarks = self._tracker.next_frame()
                if not self._is_running:
                    # Torn down while the detector was busy; discard
                    break

                now = time.perf_counter()
                output = self._engine.step(landmarks, self._tracker.timestamp)
                self._board.apply(output.events)
                self._board.set_view(output.zoom_level, *output.scroll_offset)
                self.frame_processed.emit(output)

                if had_hand and not output.hand_visible:
                    self.hand_lost.emit()
                had_hand = output.hand_visible

                if self._config.ui.show_preview and landmarks is not None and now - last_preview >= preview_interval:
                    frame = self._tracker.get_frame_with_landmarks(landmarks, black_background=True)
                    if frame is not None:
                        self.frame_ready.emit(frame)
                    last_preview = now

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop; the camera is released by the worker thread."""
        self._is_running = False
