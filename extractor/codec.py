from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Protocol

import numpy as np

from .errors import DecodeError


class FrameSource(Protocol):
    def read(self) -> Optional[np.ndarray]:
        """Next decoded frame, or None once the stream has no more frames."""
        ...

    def release(self) -> None:
        ...


class Codec(Protocol):
    def read_image(self, path: Path) -> np.ndarray:
        ...

    def open_video(self, path: Path) -> FrameSource:
        ...


def load_image_bgr(path: Path) -> np.ndarray:
    import cv2  # lazy

    img = cv2.imread(str(path))
    if img is None:
        raise DecodeError(f"Failed to read image: {path}")
    return img


class VideoStream:
    """Sequential reader over a video file.

    Use as a context manager so the capture is released on every exit path.
    """

    def __init__(self, path: Path):
        import cv2  # lazy

        self.path = path
        self._cap = cv2.VideoCapture(str(path))
        if not self._cap.isOpened():
            self._cap.release()
            raise DecodeError(f"Failed to open video: {path}")

    def read(self) -> Optional[np.ndarray]:
        ok, frame = self._cap.read()
        if not ok or frame is None or frame.size == 0:
            return None
        return frame

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "VideoStream":
        return self

    def __exit__(self, *exc) -> None:
        self.release()


class OpenCVCodec:
    def read_image(self, path: Path) -> np.ndarray:
        return load_image_bgr(path)

    def open_video(self, path: Path) -> VideoStream:
        return VideoStream(path)


def iter_frames(source: FrameSource) -> Iterator[np.ndarray]:
    """Yield frames until a read fails or returns no data."""
    while True:
        frame = source.read()
        if frame is None:
            return
        yield frame
