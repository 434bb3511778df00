"""
Tests for crop naming and extraction.
"""

import cv2
import numpy as np

from extractor.regions import crop, extract
from extractor.types import DetectionBox, OutputSpec


class TestCropNaming:
    def test_without_prefix(self, tmp_path):
        spec = OutputSpec(output_dir=tmp_path, prefix="", extension=".jpg")
        assert spec.crop_path("face", 0, 1) == tmp_path / "face_0_1.jpg"

    def test_with_prefix(self, tmp_path):
        spec = OutputSpec(output_dir=tmp_path, prefix="run1", extension=".png")
        assert spec.crop_name("clip", 12, 3) == "run1_clip_12_3.png"

    def test_distinct_boxes_never_collide(self, tmp_path):
        spec = OutputSpec(output_dir=tmp_path)
        names = {spec.crop_name("clip", 4, i) for i in range(10)}
        assert len(names) == 10


class TestCrop:
    def test_crop_matches_box(self, frame):
        region = crop(frame, DetectionBox(10, 20, 30, 40))
        assert region.shape == (40, 30, 3)
        assert np.array_equal(region, frame[20:60, 10:40])


class TestExtract:
    def test_one_file_per_box(self, frame, out_dir):
        spec = OutputSpec(output_dir=out_dir, extension=".png")
        boxes = [DetectionBox(0, 0, 50, 50), DetectionBox(60, 40, 60, 50)]
        results = extract(frame, boxes, spec, "face", 0)

        assert [r.ok for r in results] == [True, True]
        assert sorted(p.name for p in out_dir.iterdir()) == ["face_0_0.png", "face_0_1.png"]
        written = cv2.imread(str(out_dir / "face_0_1.png"))
        assert written.shape == (50, 60, 3)
        assert np.array_equal(written, frame[40:90, 60:120])

    def test_failure_does_not_stop_remaining_boxes(self, frame, out_dir, log_messages):
        spec = OutputSpec(output_dir=out_dir, extension=".png")
        # Zero-area box cannot be encoded
        boxes = [DetectionBox(0, 0, 0, 0), DetectionBox(10, 10, 50, 50)]
        results = extract(frame, boxes, spec, "face", 3)

        assert results[0].ok is False
        assert results[0].error
        assert results[1].ok is True
        assert [p.name for p in out_dir.iterdir()] == ["face_3_1.png"]
        assert any("Failed to write" in m for m in log_messages)

    def test_missing_directory_reports_every_box(self, frame, tmp_path):
        spec = OutputSpec(output_dir=tmp_path / "nope")
        boxes = [DetectionBox(0, 0, 50, 50), DetectionBox(50, 50, 50, 50)]
        results = extract(frame, boxes, spec, "face")
        assert [r.ok for r in results] == [False, False]
        assert [r.box_index for r in results] == [0, 1]
        assert not (tmp_path / "nope").exists()
