"""
Interactive painting session.

Owns the window, the camera and the sampler thread. The render loop runs on
the main thread at a fixed frame rate. The frame grabber and the sampler run
on their own threads. They only meet in the frame and expression cells.
"""

import logging
import time
from typing import Any, Callable, Optional

import pygame

from emotion_painter.config import PainterConfig
from emotion_painter.core.expression import LatestValue
from emotion_painter.core.sampler import ExpressionSampler
from emotion_painter.io.camera import CameraCapture, FrameGrabber
from emotion_painter.visualizers.canvas import StrokeCanvas
from emotion_painter.visualizers.driver import FrameDriver

logger = logging.getLogger(__name__)

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


class PaintingSession:
    """Wires camera, detector, sampler and frame driver together."""

    def __init__(
        self,
        config: PainterConfig,
        camera: CameraCapture,
        detector: Any,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cfg = config
        self.camera = camera
        self.clock = clock

        self.frames: LatestValue = LatestValue()
        self.grabber = FrameGrabber(camera, cell=self.frames)
        self.expressions: LatestValue = LatestValue()
        self.sampler = ExpressionSampler(
            detector,
            frame_source=self.frames.latest,
            cell=self.expressions,
            refresh_delay_ms=config.refresh_delay_ms,
        )
        self.canvas = StrokeCanvas(
            config.width,
            config.height,
            background=config.background_color,
            curve_segments=config.curve_segments,
        )
        self.driver = FrameDriver(self.canvas, self.expressions, config, seed=seed)

        self.running = False
        self._start: Optional[float] = None

    def elapsed_ms(self) -> float:
        if self._start is None:
            return 0.0
        return (self.clock() - self._start) * 1000.0

    def step(self) -> int:
        """
        Render one frame from the latest camera image. Returns strokes painted.

        While the grabber thread runs this never touches the camera; otherwise
        the camera is read inline first.
        """
        if not self.grabber.is_running:
            self.grabber.grab()
        frame = self.frames.latest()
        strokes = self.driver.render_frame(frame, self.elapsed_ms())
        return len(strokes)

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key in QUIT_KEYS:
                self.running = False

    def run(self, fullscreen: bool = False, max_frames: Optional[int] = None):
        """
        Open the window and paint until the viewer quits.

        Args:
            fullscreen: Open a fullscreen window.
            max_frames: Stop after this many frames (None for no limit).
        """
        pygame.init()
        flags = pygame.FULLSCREEN if fullscreen else 0
        screen = pygame.display.set_mode((self.cfg.width, self.cfg.height), flags)
        pygame.display.set_caption("emotion-painter")
        fps_clock = pygame.time.Clock()

        self.camera.open()
        self.grabber.start()
        self.sampler.start()
        self._start = self.clock()
        self.running = True
        frame_count = 0

        try:
            while self.running:
                self._handle_events()
                self.step()
                screen.blit(self.canvas.surface, (0, 0))
                pygame.display.flip()
                fps_clock.tick(self.cfg.fps)

                frame_count += 1
                if max_frames is not None and frame_count >= max_frames:
                    self.running = False
        finally:
            self.sampler.stop()
            self.grabber.stop()
            self.camera.release()
            pygame.quit()
            logger.info(
                "Session ended after %d frames (%d detector updates)",
                frame_count,
                self.sampler.updates,
            )
