"""
NeuroDesk Webcam Module

Camera capture and hand landmark detection using MediaPipe.
"""
from .hand_tracker import HandTracker, HAND_CONNECTIONS
from .worker import EngineWorker

__all__ = [
    'HandTracker',
    'HAND_CONNECTIONS',
    'EngineWorker',
]
