"""
OpenCV camera capture.

Opens the webcam once and hands out RGB frames. A camera that fails to open
is reported and then simply yields no frames; the session keeps running.
``FrameGrabber`` moves the blocking reads off the render thread.
"""

import logging
import threading
from typing import Optional

import cv2
import numpy as np

from emotion_painter.core.expression import LatestValue

logger = logging.getLogger(__name__)


class CameraCapture:
    """Webcam handle returning RGB uint8 frames."""

    def __init__(self, index: int = 0, width: int = 640, height: int = 480):
        self.index = index
        self.width = width
        self.height = height
        self.cap: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self.cap is not None and self.cap.isOpened()

    def open(self) -> bool:
        """Open the camera. Returns False (and logs) on failure."""
        cap = cv2.VideoCapture(self.index)
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        if not cap.isOpened():
            logger.error("Cannot open camera %d", self.index)
            cap.release()
            self.cap = None
            return False

        self.cap = cap
        logger.info("Camera %d opened at %dx%d", self.index, self.width, self.height)
        return True

    def read(self) -> Optional[np.ndarray]:
        """Latest frame as (H, W, 3) RGB, or None if nothing is available."""
        if not self.is_open:
            return None
        ret, frame = self.cap.read()
        if not ret or frame is None:
            return None
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def release(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None


class FrameGrabber:
    """
    Reads the camera on its own thread and publishes every frame.

    ``cv2.VideoCapture.read`` blocks until the device delivers a frame, so the
    render loop takes frames from ``cell`` instead of waiting on the camera.
    """

    def __init__(self, camera, cell: Optional[LatestValue] = None, idle_s: float = 0.01):
        self.camera = camera
        self.cell: LatestValue = cell if cell is not None else LatestValue()
        self.idle_s = idle_s
        self.frames_grabbed = 0

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def grab(self) -> bool:
        """Read one frame into the cell. Returns False when none was available."""
        frame = self.camera.read()
        if frame is None:
            return False
        self.cell.publish(frame)
        self.frames_grabbed += 1
        return True

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="frame-grabber", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.is_set():
            # A closed or failed camera returns immediately; don't spin
            if not self.grab():
                self._stop_event.wait(self.idle_s)
