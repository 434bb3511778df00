from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Literal, Optional


MediaKind = Literal["image", "video", "unsupported"]
FileStatus = Literal["done", "skipped", "failed"]


@dataclass(frozen=True)
class DetectionBox:
    # Bounding box in absolute pixel coordinates of the source frame
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class OutputSpec:
    """Where and how crops are written. Fixed for a whole run."""

    output_dir: Path
    prefix: str = ""
    extension: str = ".jpg"

    def crop_name(self, base_name: str, frame_index: int, box_index: int) -> str:
        name = f"{base_name}_{frame_index}_{box_index}{self.extension}"
        if self.prefix:
            name = f"{self.prefix}_{name}"
        return name

    def crop_path(self, base_name: str, frame_index: int, box_index: int) -> Path:
        return self.output_dir / self.crop_name(base_name, frame_index, box_index)


@dataclass(frozen=True)
class CropResult:
    box_index: int
    path: Path
    ok: bool
    error: Optional[str] = None


@dataclass
class DetectionRecord:
    """One reported detection set: a single image or a single video frame."""

    source: Path
    kind: MediaKind
    frame_index: int
    boxes: List[DetectionBox]
    crops: List[CropResult] = field(default_factory=list)

    def to_jsonable(self) -> dict:
        return {
            "source": str(self.source),
            "kind": self.kind,
            "frame_index": self.frame_index,
            "boxes": [asdict(b) for b in self.boxes],
            "crops": [
                {"box_index": c.box_index, "path": str(c.path), "ok": c.ok, "error": c.error}
                for c in self.crops
            ],
        }


@dataclass
class FileResult:
    path: Path
    kind: MediaKind
    status: FileStatus
    frames_read: int = 0
    records: List[DetectionRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def detections(self) -> int:
        return sum(len(r.boxes) for r in self.records)


@dataclass
class RunSummary:
    files: List[FileResult] = field(default_factory=list)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for f in self.files if f.status == status)

    @property
    def processed(self) -> int:
        return self._count("done")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def frames_read(self) -> int:
        return sum(f.frames_read for f in self.files)

    @property
    def detections(self) -> int:
        return sum(f.detections for f in self.files)

    def _crops(self) -> List[CropResult]:
        return [c for f in self.files for r in f.records for c in r.crops]

    @property
    def crops_written(self) -> int:
        return sum(1 for c in self._crops() if c.ok)

    @property
    def crops_failed(self) -> int:
        return sum(1 for c in self._crops() if not c.ok)

    def totals(self) -> dict:
        return {
            "files_processed": self.processed,
            "files_skipped": self.skipped,
            "files_failed": self.failed,
            "frames_read": self.frames_read,
            "detections": self.detections,
            "crops_written": self.crops_written,
            "crops_failed": self.crops_failed,
        }

    def to_jsonable(self) -> dict:
        return {
            "totals": self.totals(),
            "files": [
                {
                    "path": str(f.path),
                    "kind": f.kind,
                    "status": f.status,
                    "frames_read": f.frames_read,
                    "error": f.error,
                    "detections": [r.to_jsonable() for r in f.records],
                }
                for f in self.files
            ],
        }
