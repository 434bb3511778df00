"""
Shared fixtures: a scripted detector and an in-memory codec.
"""

from pathlib import Path

import numpy as np
import pytest
from loguru import logger

from extractor.errors import DecodeError


class StubDetector:
    """Returns scripted rectangles, one entry per call (the last one repeats)."""

    def __init__(self, script=None):
        self.script = list(script or [[]])
        self.calls = []

    def detect_multi_scale(self, gray, *, scale_factor, min_neighbors, min_size, flags):
        self.calls.append(
            {
                "shape": gray.shape,
                "scale_factor": scale_factor,
                "min_neighbors": min_neighbors,
                "min_size": min_size,
                "flags": flags,
            }
        )
        idx = min(len(self.calls) - 1, len(self.script) - 1)
        return self.script[idx]


class FakeStream:
    def __init__(self, frames):
        self.frames = list(frames)
        self.reads = 0
        self.released = False

    def read(self):
        self.reads += 1
        if self.reads > len(self.frames):
            return None
        return self.frames[self.reads - 1]

    def release(self):
        self.released = True


class FakeCodec:
    """Images and videos keyed by file name; anything else fails to decode."""

    def __init__(self, images=None, videos=None):
        self.images = images or {}
        self.videos = videos or {}
        self.opened = []
        self.streams = []

    def read_image(self, path):
        self.opened.append(Path(path).name)
        try:
            return self.images[Path(path).name]
        except KeyError:
            raise DecodeError(f"Failed to read image: {path}")

    def open_video(self, path):
        self.opened.append(Path(path).name)
        if Path(path).name not in self.videos:
            raise DecodeError(f"Failed to open video: {path}")
        stream = FakeStream(self.videos[Path(path).name])
        self.streams.append(stream)
        return stream


def make_frame(height=120, width=160, value=128):
    frame = np.full((height, width, 3), value, dtype=np.uint8)
    # Some structure so equalization has something to work on
    frame[: height // 2, : width // 2] = 30
    return frame


@pytest.fixture
def frame():
    return make_frame()


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
