from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from .types import RunSummary


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def save_report(path: Path, summary: RunSummary, *, detector: str, output_dir: Path, write_output: bool) -> None:
    """Dump every reported detection set plus run totals as JSON."""
    data = {
        "created_at": int(time.time()),
        "detector": detector,
        "output_dir": str(output_dir),
        "write_output": write_output,
    }
    data.update(summary.to_jsonable())
    write_json(path, data)
