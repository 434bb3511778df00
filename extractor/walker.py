from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
from loguru import logger

from . import frame_detector, regions
from .cascade_detector import Detector
from .codec import Codec, OpenCVCodec, iter_frames
from .config import Settings
from .errors import DecodeError
from .media import base_name, classify
from .types import DetectionRecord, FileResult, MediaKind, OutputSpec, RunSummary


class MediaWalker:
    """Runs classify -> decode -> detect/extract over a list of input files.

    Files are handled one after another. A file that cannot be decoded is
    logged and skipped; it never stops the run.

    Example:
        >>> walker = MediaWalker(load_detector(), Settings(write_output=True))
        >>> summary = walker.run([Path("face.jpg"), Path("clip.avi")])
    """

    def __init__(self, detector: Detector, settings: Settings, codec: Optional[Codec] = None):
        self.detector = detector
        self.settings = settings
        self.codec = codec or OpenCVCodec()
        self.output_spec: OutputSpec = settings.output_spec()

    def run(self, paths: Iterable[Path]) -> RunSummary:
        summary = RunSummary()
        for path in paths:
            summary.files.append(self.process_file(Path(path)))
        return summary

    def process_file(self, path: Path) -> FileResult:
        kind = classify(path)
        if kind == "unsupported":
            logger.debug(f"[{path}]: unsupported file type, skipping")
            return FileResult(path=path, kind=kind, status="skipped")
        if kind == "image":
            return self._process_image(path)
        return self._process_video(path)

    def _process_image(self, path: Path) -> FileResult:
        try:
            frame = self.codec.read_image(path)
        except DecodeError as e:
            logger.error(f"[{path}]: cannot load image file ({e})")
            return FileResult(path=path, kind="image", status="failed", error=str(e))

        logger.debug(f"[{path}]: processing image file")
        result = FileResult(path=path, kind="image", status="done", frames_read=1)
        # Images always use frame index 0
        record = self._detect_and_extract(path, "image", frame, 0)
        if record is not None:
            result.records.append(record)
        return result

    def _process_video(self, path: Path) -> FileResult:
        try:
            stream = self.codec.open_video(path)
        except DecodeError as e:
            logger.error(f"[{path}]: cannot open video file ({e})")
            return FileResult(path=path, kind="video", status="failed", error=str(e))

        logger.debug(f"[{path}]: processing video file")
        result = FileResult(path=path, kind="video", status="done")
        try:
            for frame_index, frame in enumerate(iter_frames(stream)):
                result.frames_read += 1
                record = self._detect_and_extract(path, "video", frame, frame_index)
                if record is not None:
                    result.records.append(record)
        finally:
            stream.release()
        logger.debug(f"[{path}]: done processing video file ({result.frames_read} frames)")
        return result

    def _detect_and_extract(
        self,
        path: Path,
        kind: MediaKind,
        frame: np.ndarray,
        frame_index: int,
    ) -> Optional[DetectionRecord]:
        boxes = frame_detector.detect(frame, self.detector)
        if not boxes or len(boxes) < self.settings.min_detections:
            return None

        where = f"[{path}]:" if kind == "image" else f"[{path}]:[{frame_index}]:"
        logger.debug(f"{where} {len(boxes)} detection(s)")
        record = DetectionRecord(source=path, kind=kind, frame_index=frame_index, boxes=boxes)
        if self.settings.write_output:
            record.crops = regions.extract(frame, boxes, self.output_spec, base_name(path), frame_index)
        return record


def resolve_inputs(files: Iterable[Path], directories: Iterable[Path]) -> List[Path]:
    """Input files in command line order. Directories are reported, not walked."""
    for d in directories:
        logger.warning(f"[{d}]: directory inputs are not expanded, skipping")
    return [Path(f) for f in files]
