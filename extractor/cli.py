from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .cascade_detector import default_detector_path, load_detector
from .config import Settings
from .errors import SetupError
from .logging import print_config_panel, print_summary, setup_logging
from .report import save_report
from .walker import MediaWalker, resolve_inputs


def _package_version() -> str:
    try:
        return version("object-extractor")
    except PackageNotFoundError:  # running from a source checkout
        return "unknown"


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="object-extractor",
        description="Detect objects in images and videos and extract them as separate images",
    )
    parser.add_argument("-f", "--file", action="append", default=[], type=Path, help="Input image or video (repeatable)")
    parser.add_argument("-d", "--directory", action="append", default=[], type=Path, help="Input directory (accepted, not expanded)")
    parser.add_argument("-r", "--recursive", action="store_true", help="Recursively browse the directories (no effect)")
    parser.add_argument("-x", "--detector", type=Path, default=None, help="Cascade classifier XML file")
    parser.add_argument("-o", "--output", action="store_true", default=None, help="Write output files")
    parser.add_argument("-u", "--output-directory", type=Path, default=None, help="Directory to output files")
    parser.add_argument("-p", "--prefix", default=None, help="Prefix to add to output files")
    parser.add_argument("-e", "--extension", default=None, help="Extension of the detection output files")
    parser.add_argument("-m", "--min-detections", type=_positive_int, default=None, help="Min detections before reporting")
    parser.add_argument("-y", "--output-file", type=Path, default=None, help="File to write the detection output (JSON)")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Produce verbose output")
    parser.add_argument("--log-file", type=Path, default=None, help="Also log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Command line flags override values coming from the environment."""
    base = base or Settings()
    overrides = {
        "detector_path": args.detector,
        "write_output": args.output,
        "output_dir": args.output_directory,
        "prefix": args.prefix,
        "extension": args.extension,
        "min_detections": args.min_detections,
        "report_file": args.output_file,
        "verbose": args.verbose,
        "log_file": args.log_file,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    return Settings(**{**base.model_dump(), **update})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    setup_logging(verbose=settings.verbose, log_file=settings.log_file)

    detector_path = settings.detector_path or default_detector_path()
    if settings.detector_path is None:
        logger.debug(f"No custom detector added, using default detector {detector_path}")

    print_config_panel(
        {
            "Verbose": settings.verbose,
            "Recursive": args.recursive,
            "Number of files": len(args.file),
            "Number of directories": len(args.directory),
            "Detector": detector_path,
            "Prefix of output files": settings.prefix,
        }
    )

    try:
        settings.check_output_dir()
        settings.check_report_file()
        detector = load_detector(detector_path)
    except SetupError as e:
        logger.error(str(e))
        return 1
    logger.debug(f"[{detector_path}]: correctly loaded detector")

    walker = MediaWalker(detector, settings)
    summary = walker.run(resolve_inputs(args.file, args.directory))

    if settings.report_file is not None:
        try:
            save_report(
                settings.report_file,
                summary,
                detector=str(detector_path),
                output_dir=settings.output_dir,
                write_output=settings.write_output,
            )
        except OSError as e:
            # Only setup failures change the exit status
            logger.error(f"[{settings.report_file}]: cannot write report ({e})")
        else:
            logger.info(f"Saved: {settings.report_file}")

    print_summary(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
