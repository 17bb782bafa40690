"""
Facial expression detector adapters.

Each adapter takes an RGB frame and returns one ExpressionScores per detected
face, in detector order. The heavy ML libraries are imported when an adapter
is constructed so the rest of the package works without them.
"""

import logging
from typing import Any, Dict, List

import cv2
import numpy as np

from emotion_painter.core.expression import ExpressionScores

logger = logging.getLogger(__name__)


def faces_from_deepface(results: Any, min_confidence: float = 0.0) -> List[ExpressionScores]:
    """
    Convert ``DeepFace.analyze`` output to ExpressionScores.

    DeepFace reports emotions as percentages and, with
    ``enforce_detection=False``, returns a whole-frame result with zero face
    confidence when nothing was found; those are dropped.
    """
    if isinstance(results, dict):
        results = [results]

    faces = []
    for res in results or []:
        if not isinstance(res, dict):
            continue
        if float(res.get("face_confidence", 1.0)) <= min_confidence:
            continue
        emotions = res.get("emotion") or res.get("emotions")
        if not isinstance(emotions, dict):
            continue
        scale = 100.0 if max(emotions.values(), default=0.0) > 1.0 else 1.0
        faces.append(ExpressionScores.from_mapping(emotions, scale=scale))
    return faces


def faces_from_fer(results: Any) -> List[ExpressionScores]:
    """Convert ``FER.detect_emotions`` output to ExpressionScores."""
    faces = []
    for res in results or []:
        emotions = res.get("emotions") if isinstance(res, dict) else None
        if isinstance(emotions, dict):
            faces.append(ExpressionScores.from_mapping(emotions))
    return faces


class DeepFaceDetector:
    """Expression detection through DeepFace."""

    name = "deepface"

    def __init__(self, detector_backend: str = "opencv", min_confidence: float = 0.0):
        from deepface import DeepFace

        self._deepface = DeepFace
        self.detector_backend = detector_backend
        self.min_confidence = min_confidence

    def detect(self, frame_rgb: np.ndarray) -> List[ExpressionScores]:
        # DeepFace follows the OpenCV BGR convention
        bgr = cv2.cvtColor(frame_rgb, cv2.COLOR_RGB2BGR)
        results = self._deepface.analyze(
            bgr,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend=self.detector_backend,
            silent=True,
        )
        return faces_from_deepface(results, self.min_confidence)


class FERDetector:
    """Expression detection through FER (faster, less accurate)."""

    name = "fer"

    def __init__(self, mtcnn: bool = False):
        from fer import FER

        self._fer = FER(mtcnn=mtcnn)

    def detect(self, frame_rgb: np.ndarray) -> List[ExpressionScores]:
        return faces_from_fer(self._fer.detect_emotions(frame_rgb))


DETECTORS: Dict[str, type] = {
    DeepFaceDetector.name: DeepFaceDetector,
    FERDetector.name: FERDetector,
}


def create_detector(name: str, **kwargs):
    """Instantiate a detector adapter by name."""
    try:
        cls = DETECTORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown detector {name!r}; choose from {', '.join(sorted(DETECTORS))}"
        ) from None
    detector = cls(**kwargs)
    logger.info("Expression detector ready: %s", name)
    return detector
