from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, Tuple

import numpy as np

from .errors import DetectorLoadError

DEFAULT_CASCADE = "haarcascade_profileface.xml"


class Detector(Protocol):
    """Anything that scans a grayscale image and returns (x, y, w, h) rectangles."""

    def detect_multi_scale(
        self,
        gray: np.ndarray,
        *,
        scale_factor: float,
        min_neighbors: int,
        min_size: Tuple[int, int],
        flags: int,
    ) -> Sequence[Sequence[int]]:
        ...


def default_detector_path() -> Path:
    """Profile-face cascade bundled with opencv-python."""
    import cv2  # lazy

    return Path(cv2.data.haarcascades) / DEFAULT_CASCADE


class CascadeDetector:
    """OpenCV cascade classifier wrapper.

    The artifact is parsed once by :meth:`load`; after that the instance is
    only read from, so it can be shared by every detect call of a run.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._cascade = None

    @property
    def loaded(self) -> bool:
        return self._cascade is not None

    def load(self) -> "CascadeDetector":
        if self._cascade is not None:
            return self
        if not self.path.is_file():
            raise DetectorLoadError(f"Detector file does not exist: {self.path}")

        import cv2  # lazy

        cascade = cv2.CascadeClassifier()
        try:
            ok = cascade.load(str(self.path))
        except cv2.error as e:
            raise DetectorLoadError(f"Cannot load detector file: {self.path}") from e
        if not ok or cascade.empty():
            raise DetectorLoadError(f"Cannot load detector file: {self.path}")
        self._cascade = cascade
        return self

    def detect_multi_scale(
        self,
        gray: np.ndarray,
        *,
        scale_factor: float,
        min_neighbors: int,
        min_size: Tuple[int, int],
        flags: int,
    ) -> Sequence[Sequence[int]]:
        if self._cascade is None:
            raise RuntimeError("Detector used before load()")
        return self._cascade.detectMultiScale(
            gray,
            scaleFactor=scale_factor,
            minNeighbors=min_neighbors,
            flags=flags,
            minSize=min_size,
        )


def load_detector(path: Path | str | None = None) -> CascadeDetector:
    return CascadeDetector(path or default_detector_path()).load()
