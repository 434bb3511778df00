"""
Tests for media classification.
"""

from pathlib import Path

import pytest

from extractor.media import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, base_name, classify


class TestClassify:
    """Media kind is a function of the extension text only."""

    @pytest.mark.parametrize("ext", IMAGE_EXTENSIONS)
    def test_image_extensions(self, ext):
        assert classify(f"photo.{ext}") == "image"

    @pytest.mark.parametrize("ext", VIDEO_EXTENSIONS)
    def test_video_extensions(self, ext):
        assert classify(f"clip.{ext}") == "video"

    def test_unknown_extension(self):
        assert classify("notes.txt") == "unsupported"

    def test_missing_extension(self):
        assert classify("README") == "unsupported"

    def test_case_sensitive(self):
        assert classify("face.JPG") == "unsupported"
        assert classify("clip.AVI") == "unsupported"

    def test_last_dot_wins(self):
        assert classify("archive.jpg.txt") == "unsupported"
        assert classify("frame.001.png") == "image"

    def test_accepts_path_objects(self):
        assert classify(Path("/data/in/face.jpg")) == "image"

    def test_no_io(self, tmp_path):
        # The file does not exist; classification must not care
        assert classify(tmp_path / "missing.mp4") == "video"

    def test_deterministic(self):
        assert [classify("a.tif") for _ in range(3)] == ["image"] * 3


class TestBaseName:
    def test_strips_directory_and_extension(self):
        assert base_name("/data/in/face.jpg") == "face"

    def test_only_last_extension_removed(self):
        assert base_name("clip.part1.avi") == "clip.part1"

    def test_no_extension(self):
        assert base_name("dir/README") == "README"
