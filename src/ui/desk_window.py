"""
Desk window - draws the tile board, gesture cursor and status readout.
"""
from typing import Optional
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt, QPoint, QRectF
from PyQt5.QtGui import QPainter, QPen, QColor, QFont, QImage, QPixmap
import numpy as np

from gestures.engine import FrameOutput
from .tiles import TileBoard


class DeskCanvas(QWidget):
    """Paints tiles (with the current scroll/zoom transform) and the cursor."""

    def __init__(self, board: TileBoard, parent=None):
        super().__init__(parent)
        self._board = board
        self._output: Optional[FrameOutput] = None
        w, h = board.size
        self.setFixedSize(w, h)

    def set_output(self, output: FrameOutput):
        self._output = output
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(12, 24, 36))

        active = self._board.active_tile
        title_font = QFont(self.font())
        title_font.setBold(True)

        for tile_id, rect in self._board.tile_rects().items():
            tile = self._board.get(tile_id)
            box = QRectF(rect.left, rect.top, rect.right - rect.left, rect.bottom - rect.top)
            if tile_id == active:
                painter.setBrush(QColor(167, 243, 208, 230))
                painter.setPen(QPen(QColor(16, 185, 129), 2))
                text_color = QColor(6, 78, 59)
            else:
                painter.setBrush(QColor(255, 255, 255, 26))
                painter.setPen(QPen(QColor(165, 243, 252, 80), 1))
                text_color = QColor(236, 254, 255)
            painter.drawRoundedRect(box, 12, 12)

            if tile is not None:
                painter.setPen(text_color)
                painter.setFont(title_font)
                painter.drawText(box.adjusted(12, 10, -12, -10), Qt.AlignLeft | Qt.AlignTop, tile.title.upper())
                painter.setFont(self.font())
                painter.drawText(box.adjusted(12, 34, -12, -10), Qt.AlignLeft | Qt.AlignTop, tile.detail)

        out = self._output
        if out is None or not out.hand_visible:
            return

        px = int(out.cursor[0] * self.width())
        py = int(out.cursor[1] * self.height())

        # Dwell ring grows with progress
        ring = 28 + int(out.dwell_progress * 18)
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor(165, 243, 252, 60 + int(out.dwell_progress * 180)), 2))
        painter.drawEllipse(QPoint(px, py), ring, ring)

        if out.pinching:
            painter.setBrush(QColor(251, 191, 36, 230))
            radius = 14
        else:
            painter.setBrush(QColor(34, 211, 238, 220))
            radius = 12
        painter.setPen(QPen(QColor(255, 255, 255), 2))
        painter.drawEllipse(QPoint(px, py), radius, radius)


class DeskWindow(QMainWindow):
    """Main window: tile canvas on top, status readout below."""

    def __init__(self, board: TileBoard, parent=None):
        super().__init__(parent)
        self.setWindowTitle("NeuroDesk Control")
        self._board = board

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        self.setCentralWidget(central)

        self.canvas = DeskCanvas(board)
        layout.addWidget(self.canvas)

        self.readout = QLabel("Enable your camera to start gesture control.")
        self.readout.setObjectName("Readout")
        layout.addWidget(self.readout)

        self.status = QLabel("")
        self.status.setObjectName("Status")
        self.status.setWordWrap(True)
        layout.addWidget(self.status)

        # Skeleton preview (only fed when ui.show_preview is on)
        self.webcam_preview = QLabel()
        self.webcam_preview.setObjectName("WebcamPreview")
        self.webcam_preview.setAlignment(Qt.AlignCenter)
        self.webcam_preview.setMaximumHeight(150)
        self.webcam_preview.setScaledContents(True)
        layout.addWidget(self.webcam_preview)

    def update_frame(self, output: FrameOutput):
        """Slot for EngineWorker.frame_processed."""
        self.canvas.set_output(output)
        sx, sy = output.scroll_offset
        hand = "Detected" if output.hand_visible else "Not found"
        self.readout.setText(
            f"Hand: {hand}   Gesture: {output.mode.value.upper()}   "
            f"Zoom: {round(output.zoom_level * 100)}%   Scroll: {round(sy)} px   Scroll X: {round(sx)} px   "
            f"Pinch: {round(output.pinch_strength * 100)}%   Speed: {round(output.speed * 100)}%   "
            f"Dwell: {round(output.dwell_progress * 100)}%"
        )
        text = output.status
        active = self._board.active_tile
        if active:
            tile = self._board.get(active)
            text += f"\nSelected: {tile.title if tile else active}"
        if output.dragging:
            text += "\nDrag mode active: hold pinch and hover another tile to reorder."
        self.status.setText(text)

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the webcam preview.

        Args:
            frame: BGR numpy array from HandTracker, already mirrored
        """
        if frame is None:
            self.webcam_preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def show_error(self, message: str):
        self.status.setText(message)
