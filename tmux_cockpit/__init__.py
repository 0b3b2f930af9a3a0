"""tmux-cockpit: a work pane next to a live resource monitor."""

from tmux_cockpit.monitoring import (
    MonitorComposer,
    SystemMonitor,
    compose_report,
    render_bar,
)


__all__ = [
    "MonitorComposer",
    "SystemMonitor",
    "compose_report",
    "render_bar",
]
