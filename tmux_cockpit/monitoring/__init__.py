"""Resource polling and rendering for the monitor pane."""

from __future__ import annotations

from tmux_cockpit.monitoring.bar import coerce_percent, render_bar, render_sample
from tmux_cockpit.monitoring.composer import MonitorComposer, compose_report
from tmux_cockpit.monitoring.system import (
    PYNVML_AVAILABLE,
    SystemMonitor,
    parse_nvidia_smi_csv,
)


__all__ = [
    "PYNVML_AVAILABLE",
    "MonitorComposer",
    "SystemMonitor",
    "coerce_percent",
    "compose_report",
    "parse_nvidia_smi_csv",
    "render_bar",
    "render_sample",
]
