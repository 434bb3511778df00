from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import OutputDirectoryError, ReportFileError
from .types import OutputSpec


class Settings(BaseSettings):
    """Run configuration.

    Every field can be set via environment variables using the OBX_ prefix
    and is overridden by the matching command line flag.
    Example: OBX_EXTENSION=.png
    """

    model_config = SettingsConfigDict(env_prefix="OBX_", env_file=".env", extra="ignore")

    # Detection
    detector_path: Path | None = None  # None -> OpenCV's bundled profile-face cascade
    min_detections: int = Field(default=1, gt=0)

    # Output
    output_dir: Path = Field(default_factory=Path.cwd)
    prefix: str = ""
    extension: str = ".jpg"
    write_output: bool = False
    report_file: Path | None = None

    # Diagnostics
    verbose: bool = False
    log_file: Path | None = None

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, v: str) -> str:
        if v and not v.startswith("."):
            return "." + v
        return v

    def output_spec(self) -> OutputSpec:
        return OutputSpec(output_dir=self.output_dir, prefix=self.prefix, extension=self.extension)

    def check_output_dir(self) -> None:
        if not self.output_dir.is_dir():
            raise OutputDirectoryError(f"Output directory does not exist: {self.output_dir}")

    def check_report_file(self) -> None:
        if self.report_file is not None and self.report_file.is_dir():
            raise ReportFileError(f"Report file is a directory: {self.report_file}")
