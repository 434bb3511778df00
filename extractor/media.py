from __future__ import annotations

from pathlib import Path
from typing import Union

from .types import MediaKind

# Extensions OpenCV's imread/VideoCapture are expected to handle
IMAGE_EXTENSIONS = (
    "bmp", "dib",
    "jpeg", "jpg", "jpe",
    "jp2",
    "png",
    "pbm", "pgm", "ppm",
    "sr", "ras",
    "tiff", "tif",
)
VIDEO_EXTENSIONS = ("avi", "mp4")


def extension_of(path: Union[str, Path]) -> str | None:
    text = str(path)
    dot = text.rfind(".")
    if dot < 0:
        return None
    return text[dot + 1:]


def classify(path: Union[str, Path]) -> MediaKind:
    """Media kind from the extension text alone (case-sensitive, no I/O)."""
    ext = extension_of(path)
    if ext is None:
        return "unsupported"
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return "unsupported"


def base_name(path: Union[str, Path]) -> str:
    """File name without its directory and last extension."""
    return Path(path).stem
