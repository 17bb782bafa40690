"""
Periodic expression sampler.

Runs the face/expression detector on its own thread at a fixed period and
publishes the first face's snapshot into a single-slot cell. The render loop
reads that cell whenever it likes; there is no other coordination.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional, Sequence

import numpy as np

from emotion_painter.core.expression import ExpressionScores, ExpressionSnapshot, LatestValue

logger = logging.getLogger(__name__)


class ExpressionSampler:
    """
    Polls a detector on a fixed interval.

    Usage:
        sampler = ExpressionSampler(detector, frame_source=frames.latest)
        sampler.start()
        snapshot = sampler.cell.latest()
        sampler.stop()
    """

    def __init__(
        self,
        detector: Any,
        frame_source: Callable[[], Optional[np.ndarray]],
        cell: Optional[LatestValue] = None,
        refresh_delay_ms: int = 50,
    ):
        """
        Args:
            detector: Object with ``detect(frame_rgb) -> Sequence[ExpressionScores]``.
            frame_source: Returns the latest RGB camera frame, or None.
            cell: Cell receiving snapshots. A new one is created if None.
            refresh_delay_ms: Sampling period in milliseconds.
        """
        self.detector = detector
        self.frame_source = frame_source
        self.cell: LatestValue[ExpressionSnapshot] = cell if cell is not None else LatestValue()
        self.interval = refresh_delay_ms / 1000.0

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.ticks = 0
        self.updates = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> bool:
        """
        Run one detection and publish the result.

        Returns:
            True if a new snapshot was published.
        """
        self.ticks += 1
        frame = self.frame_source()
        if frame is None:
            return False

        try:
            faces: Sequence[ExpressionScores] = self.detector.detect(frame)
        except Exception as e:
            logger.warning("Expression detection failed: %s", e)
            return False

        if not faces:
            # Stale data is kept on purpose
            return False

        self.cell.publish(ExpressionSnapshot.from_scores(faces[0]))
        self.updates += 1
        return True

    def start(self) -> None:
        """Start the sampling thread."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="expression-sampler",
            daemon=True,
        )
        self._thread.start()
        logger.info("Expression sampler started (every %.0f ms)", self.interval * 1000)

    def stop(self, timeout: float = 2.0) -> None:
        """Signal the sampling thread and wait for it to exit."""
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None

    def _run(self) -> None:
        next_tick = time.monotonic()
        while not self._stop_event.is_set():
            self.tick()
            next_tick += self.interval
            # Slow detections push the schedule forward instead of bursting
            delay = next_tick - time.monotonic()
            if delay < 0:
                next_tick = time.monotonic()
                delay = 0.0
            self._stop_event.wait(delay)
