"""Runtime configuration with environment overrides."""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field

from loguru import logger


ENV_PREFIX = "TMUX_COCKPIT_"
GPU_BACKENDS = ("auto", "nvml", "nvidia-smi", "none")


def default_monitor_command() -> str:
    """Command that starts the resource monitor with this interpreter."""
    return f"{shlex.quote(sys.executable)} -m tmux_cockpit.monitor"


def _env(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring {}{}={!r}: not a number", ENV_PREFIX, name, raw)
        return default


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring {}{}={!r}: not an integer", ENV_PREFIX, name, raw)
        return default


@dataclass
class MonitorConfig:
    """Settings of the monitor pane."""

    interval: float = 2.0
    width: int = 10
    max_cores: int = 8
    gpu_backend: str = "auto"
    disk_path: str = "/"

    def __post_init__(self) -> None:
        if self.gpu_backend not in GPU_BACKENDS:
            message = (
                f"Unknown GPU backend {self.gpu_backend!r}; "
                f"expected one of {', '.join(GPU_BACKENDS)}"
            )
            raise ValueError(message)
        if self.width <= 0:
            message = f"Bar width must be positive, got {self.width}"
            raise ValueError(message)
        if self.interval < 0:
            message = f"Interval must not be negative, got {self.interval}"
            raise ValueError(message)

    @classmethod
    def from_env(cls) -> MonitorConfig:
        backend = (_env("GPU_BACKEND") or "auto").lower()
        if backend not in GPU_BACKENDS:
            logger.warning("Ignoring {}GPU_BACKEND={!r}", ENV_PREFIX, backend)
            backend = "auto"
        return cls(
            interval=max(0.0, _env_float("INTERVAL", 2.0)),
            width=max(1, _env_int("BAR_WIDTH", 10)),
            max_cores=_env_int("MAX_CORES", 8),
            gpu_backend=backend,
            disk_path=_env("DISK_PATH") or "/",
        )


@dataclass
class CockpitConfig:
    """Settings of the tmux session launcher."""

    session: str = "dev"
    monitor_command: str = field(default_factory=default_monitor_command)
    split_percent: int = 20
    attach: bool = True

    @classmethod
    def from_env(cls) -> CockpitConfig:
        split = _env_int("SPLIT_PERCENT", 20)
        if not 1 <= split <= 99:
            logger.warning("Ignoring {}SPLIT_PERCENT={}", ENV_PREFIX, split)
            split = 20
        return cls(
            session=_env("SESSION") or "dev",
            monitor_command=_env("MONITOR") or default_monitor_command(),
            split_percent=split,
        )
