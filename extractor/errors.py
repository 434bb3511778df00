from __future__ import annotations


class SetupError(RuntimeError):
    """Raised before any input is processed; aborts the run."""


class OutputDirectoryError(SetupError):
    pass


class DetectorLoadError(SetupError):
    pass


class DecodeError(ValueError):
    """An input image could not be decoded or a video could not be opened."""


class ReportFileError(SetupError):
    pass
