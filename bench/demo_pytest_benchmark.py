"""Pytest-benchmark demo for report composition."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable

from tmux_cockpit.monitoring import compose_report
from tmux_cockpit.types import GpuStats, SystemStats


def test_compose_report_benchmark(
    benchmark: Callable[[Callable[[], object]], object],
) -> None:
    """Benchmark rendering a 64-core, 8-GPU snapshot."""
    stats = SystemStats(
        cpu_per_core=[float(i % 100) for i in range(64)],
        gpus=[GpuStats(i, 50.0, 1024.0, 8192.0, 60.0) for i in range(8)],
    )
    benchmark(compose_report, stats, 10, 64)
