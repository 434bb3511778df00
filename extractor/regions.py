from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import numpy as np
from loguru import logger

from .types import CropResult, DetectionBox, OutputSpec


def crop(frame: np.ndarray, box: DetectionBox) -> np.ndarray:
    """View of the frame bounded by the box (no padding, no clamping)."""
    return frame[box.y:box.y + box.height, box.x:box.x + box.width]


def save_image_bgr(path: Path, image_bgr: np.ndarray) -> None:
    import cv2  # lazy

    try:
        ok = cv2.imwrite(str(path), image_bgr)
    except cv2.error as e:
        # Unknown extensions make imwrite raise instead of returning False
        raise ValueError(f"Failed to write image: {path}") from e
    if not ok:
        raise ValueError(f"Failed to write image: {path}")


def extract(
    frame: np.ndarray,
    boxes: Iterable[DetectionBox],
    output_spec: OutputSpec,
    base_name: str,
    frame_index: int = 0,
) -> List[CropResult]:
    """Write one crop per box; a failed write does not stop the others."""
    results: List[CropResult] = []
    for i, box in enumerate(boxes):
        path = output_spec.crop_path(base_name, frame_index, i)
        try:
            save_image_bgr(path, crop(frame, box))
        except ValueError as e:
            logger.error(f"[{path}]: {e}")
            results.append(CropResult(box_index=i, path=path, ok=False, error=str(e)))
            continue
        logger.debug(f"[{path}]: wrote crop {box.width}x{box.height}")
        results.append(CropResult(box_index=i, path=path, ok=True))
    return results
