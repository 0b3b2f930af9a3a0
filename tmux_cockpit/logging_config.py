"""Logging configuration helpers for the project."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {process}:{thread} | "
    "{name}:{function}:{line} | {message}"
)


def default_log_dir() -> Path:
    """``TMUX_COCKPIT_LOG_DIR`` or ``~/.cache/tmux-cockpit/logs``."""
    override = os.getenv("TMUX_COCKPIT_LOG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cache" / "tmux-cockpit" / "logs"


def configure_logging(
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    *,
    name: str = "cockpit",
    console: bool = True,
    file: bool = True,
) -> None:
    """Configure loguru for console (stderr) and rotating file output.

    The level comes from ``log_level``, then ``TMUX_COCKPIT_LOG_LEVEL``, then
    ``INFO``.
    """
    level = (log_level or os.getenv("TMUX_COCKPIT_LOG_LEVEL") or "INFO").upper()

    logger.remove()
    if console:
        logger.add(sink=sys.stderr, format=CONSOLE_FORMAT, level=level)
    if file:
        log_path = Path(log_dir) if log_dir is not None else default_log_dir()
        try:
            log_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("File logging disabled, cannot create {}: {}", log_path, exc)
            return
        logger.add(
            str(log_path / f"{name}.log"),
            rotation="1 MB",
            retention=10,
            compression="zip",
            level=level,
            format=FILE_FORMAT,
        )
