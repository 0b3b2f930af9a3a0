"""Report composition and the refresh loop of the monitor pane."""

from __future__ import annotations

import sys
import time
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from loguru import logger

from tmux_cockpit.monitoring.bar import DEFAULT_WIDTH, render_bar, render_sample
from tmux_cockpit.types import SystemStats


if TYPE_CHECKING:
    from collections.abc import Callable

    from tmux_cockpit.monitoring.system import SystemMonitor


CLEAR_SCREEN = "\033[2J\033[H"
_BYTE_UNITS = ("B", "K", "M", "G", "T", "P")


def format_bytes(num_bytes: float) -> str:
    """Format a byte count the way ``free -h`` does (``7.6G``)."""
    value = float(max(num_bytes, 0))
    for unit in _BYTE_UNITS:
        if value < 1024 or unit == _BYTE_UNITS[-1]:
            break
        value /= 1024
    if unit == "B":
        return f"{value:.0f}B"
    return f"{value:.1f}{unit}"


def compose_report(
    stats: SystemStats,
    width: int = DEFAULT_WIDTH,
    max_cores: int = 8,
) -> str:
    """Render one snapshot as the multi-line monitor report.

    The GPU sections only appear when ``stats.gpus`` is not ``None``.
    """
    now = datetime.fromtimestamp(stats.timestamp) if stats.timestamp else datetime.now()
    lines = [f"📊 System Monitor - {now:%H:%M:%S}", "", "💻 CPUs:"]

    cores = stats.cpu_per_core[:max_cores] if max_cores > 0 else stats.cpu_per_core
    for index, pct in enumerate(cores):
        lines.append(f"  CPU{index}: {render_bar(pct, width)}")
    if len(stats.cpu_per_core) > len(cores):
        lines.append(f"  ... {len(stats.cpu_per_core) - len(cores)} more cores")

    if stats.gpus is not None:
        lines += ["", "🎮 GPUs:"]
        for gpu in stats.gpus:
            lines.append(
                f"  GPU{gpu.index}: {render_bar(gpu.utilization, width)}"
                f" | VRAM: {render_bar(gpu.memory_percent, width)}"
                f" | {gpu.temperature_c:.0f}°C"
            )

    totals = {sample.name: sample for sample in stats.samples()}

    def value(name: str) -> float:
        sample = totals.get(name)
        return sample.value if sample is not None else 0.0

    lines += [
        "",
        "📊 Totals:",
        f"  CPU: {render_sample(totals.get('cpu'), width)}"
        f" | RAM: {render_sample(totals.get('ram'), width)}"
        f" ({format_bytes(value('ram_used'))}/{format_bytes(value('ram_total'))})",
    ]
    if "gpu" in totals:
        lines.append(
            f"  GPU: {render_sample(totals['gpu'], width)}"
            f" | VRAM: {render_sample(totals.get('vram'), width)}"
            f" ({value('vram_used') / 1024**3:.0f}G"
            f"/{value('vram_total') / 1024**3:.0f}G)"
        )

    load = ", ".join(f"{load_value:.2f}" for load_value in stats.load_average)
    lines += [
        f"  Load: {load}",
        f"  Disk: {format_bytes(value('disk_used'))}"
        f"/{format_bytes(value('disk_total'))} ({value('disk'):.0f}%)",
    ]
    return "\n".join(lines) + "\n"


class MonitorComposer:
    """Poll a :class:`SystemMonitor` and redraw the report on a fixed interval."""

    def __init__(
        self,
        monitor: SystemMonitor,
        interval: float = 2.0,
        width: int = DEFAULT_WIDTH,
        max_cores: int = 8,
        stream: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.monitor = monitor
        self.interval = interval
        self.width = width
        self.max_cores = max_cores
        self.stream = stream if stream is not None else sys.stdout
        self._sleep = sleep
        self.ticks = 0

    def tick(self) -> str:
        """Collect one snapshot and compose its report.

        A collection error yields an all-zero report for this tick.
        """
        try:
            stats = self.monitor.get_stats()
        except Exception as exc:
            logger.warning("Collecting system stats failed: {}", exc)
            stats = SystemStats(timestamp=time.time())
        return compose_report(stats, width=self.width, max_cores=self.max_cores)

    def draw(self) -> None:
        """Clear the display and write the next report."""
        report = self.tick()
        self.stream.write(CLEAR_SCREEN + report)
        self.stream.flush()
        self.ticks += 1

    def run(self, max_ticks: int | None = None) -> None:
        """Redraw forever, or ``max_ticks`` times, until interrupted."""
        logger.info("Monitor loop started (interval: {}s)", self.interval)
        try:
            while max_ticks is None or self.ticks < max_ticks:
                self.draw()
                if max_ticks is not None and self.ticks >= max_ticks:
                    break
                self._sleep(self.interval)
        except KeyboardInterrupt:
            logger.info("Monitor loop interrupted")
        finally:
            logger.info("Monitor loop stopped after {} ticks", self.ticks)
