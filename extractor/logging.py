"""Logging setup using Loguru + Rich."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .types import RunSummary

# Rich output goes to stdout, log lines to stderr
console = Console()


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Configure Loguru with a colored stderr sink and an optional file sink.

    Args:
        verbose: If True, per-file, per-frame and per-detection lines (DEBUG) are shown.
        log_file: Optional path to a log file (with rotation).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
    )
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG",
        )


def print_config_panel(lines: dict) -> None:
    content = "\n".join(f"{k} : {v}" for k, v in lines.items())
    console.print(Panel(content, title="object-extractor", border_style="blue"))


def print_summary(summary: RunSummary) -> None:
    table = Table(title="Run summary", show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in summary.totals().items():
        table.add_row(name.replace("_", " "), str(value))
    console.print(table)


__all__ = ["logger", "console", "setup_logging", "print_config_panel", "print_summary"]
