"""Entry point of the monitor pane: ``python -m tmux_cockpit.monitor``."""

from __future__ import annotations

import sys

from loguru import logger

from tmux_cockpit.cli import parse_monitor_args
from tmux_cockpit.logging_config import configure_logging
from tmux_cockpit.monitoring import MonitorComposer, SystemMonitor


def main(argv: list[str] | None = None) -> int:
    config, args = parse_monitor_args(argv)
    # Console output would be wiped by the next redraw, so log to file only.
    configure_logging(args.log_level, name="monitor", console=False)
    logger.info("Starting monitor: {}", config)

    monitor = SystemMonitor(gpu_backend=config.gpu_backend, disk_path=config.disk_path)
    composer = MonitorComposer(
        monitor,
        interval=config.interval,
        width=config.width,
        max_cores=config.max_cores,
    )
    try:
        composer.run()
    finally:
        monitor.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
