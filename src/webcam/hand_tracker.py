"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Pull-based frame source (gestures.source.FrameSource): each next_frame()
call captures and detects one frame.
"""
from pathlib import Path
from typing import List, Optional, Tuple
import time
import cv2
import numpy as np
import mediapipe as mp

from gestures.config import Config, CameraConfig, MediaPipeConfig

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"

# Skeleton edges for the debug overlay
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),        # Index
    (5, 9), (9, 10), (10, 11), (11, 12),   # Middle
    (9, 13), (13, 14), (14, 15), (15, 16), # Ring
    (13, 17), (17, 18), (18, 19), (19, 20),# Pinky
    (0, 17),                               # Palm
]


class HandTracker:
    """
    Camera + MediaPipe HandLandmarker, one hand, VIDEO running mode.

    Detection runs on the un-mirrored camera image; the engine mirrors the
    cursor itself. The capture buffer is kept at one frame so a slow
    detector drops frames instead of working through a backlog.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: NeuroDesk configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        if model_path is None and self._mp_config.model_path:
            model_path = Path(self._mp_config.model_path)
        self._model_path = model_path or self.DEFAULT_MODEL_PATH

        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1
        self.status = "Enable your camera to start gesture control."
        self.timestamp: float = 0.0  # perf_counter ms of the last capture

    def start(self) -> bool:
        """
        Open the camera and load the model.

        Returns:
            True if started successfully. On failure `status` explains why;
            there is no retry.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            self.status = f"Model file not found: {self._model_path} (download from {MODEL_URL})"
            print(f"ERROR: {self.status}")
            return False

        self.status = "Requesting camera access..."
        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            self._cap.release()
            self._cap = None
            self.status = f"Unable to start camera {self._camera_config.device_id} (in use or permission denied)."
            print(f"ERROR: {self.status}")
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)
        self._cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        try:
            self._landmarker = HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            self._cap.release()
            self._cap = None
            self.status = f"Failed to load hand tracking model: {e}"
            print(f"ERROR: {self.status}")
            return False

        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        self.status = "Camera ready. Raise one hand and point with your index finger."
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def next_frame(self) -> Optional[List[Tuple[float, float]]]:
        """
        Capture one frame and detect the hand.

        Returns:
            21 (x, y) camera-space landmarks, or None if no hand (or no frame).
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        self.timestamp = time.perf_counter() * 1000.0
        if not ret:
            return None

        self._frame_count += 1
        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode needs strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        if not result.hand_landmarks:
            return None

        return [(lm.x, lm.y) for lm in result.hand_landmarks[0]]

    def get_frame_with_landmarks(
        self,
        landmarks: Optional[List[Tuple[float, float]]] = None,
        black_background: bool = False
    ) -> Optional[np.ndarray]:
        """
        Get last frame, mirrored for display, with an optional skeleton overlay.

        Args:
            landmarks: If provided, draw landmarks on frame.
            black_background: If True, draw on black instead of camera image.
        """
        if self._last_frame is None:
            return None

        if black_background:
            frame = np.zeros_like(self._last_frame)
        else:
            frame = self._last_frame.copy()

        if landmarks is not None:
            h, w = frame.shape[:2]
            for start_idx, end_idx in HAND_CONNECTIONS:
                start = landmarks[start_idx]
                end = landmarks[end_idx]
                cv2.line(
                    frame,
                    (int(start[0] * w), int(start[1] * h)),
                    (int(end[0] * w), int(end[1] * h)),
                    (191, 212, 45), 2,
                )
            for x, y in landmarks:
                cv2.circle(frame, (int(x * w), int(y * h)), 4, (253, 230, 186), -1)

            # Dashed-style thumb-index guide
            thumb, index = landmarks[4], landmarks[8]
            cv2.line(
                frame,
                (int(thumb[0] * w), int(thumb[1] * h)),
                (int(index[0] * w), int(index[1] * h)),
                (245, 244, 244), 1,
            )

        return cv2.flip(frame, 1)

    @property
    def frame_count(self) -> int:
        return self._frame_count
