from __future__ import annotations

from typing import List

import numpy as np

from .cascade_detector import Detector
from .types import DetectionBox

SCALE_FACTOR = 1.1
MIN_NEIGHBORS = 3
MIN_SIZE = (50, 50)


def preprocess(frame: np.ndarray) -> np.ndarray:
    """Grayscale + histogram equalization. Always returns a new array."""
    import cv2  # lazy

    if frame.ndim == 2:
        gray = frame.copy()
    elif frame.shape[2] == 4:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
    else:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    return cv2.equalizeHist(gray)


def detect(frame: np.ndarray, detector: Detector) -> List[DetectionBox]:
    """Run the detector on one decoded BGR frame."""
    import cv2  # lazy

    gray = preprocess(frame)
    rects = detector.detect_multi_scale(
        gray,
        scale_factor=SCALE_FACTOR,
        min_neighbors=MIN_NEIGHBORS,
        min_size=MIN_SIZE,
        flags=cv2.CASCADE_SCALE_IMAGE,
    )
    # detectMultiScale returns an empty tuple when nothing is found
    if rects is None or len(rects) == 0:
        return []
    return [DetectionBox(int(x), int(y), int(w), int(h)) for (x, y, w, h) in rects]
