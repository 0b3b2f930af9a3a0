"""cProfile demo for one live monitor tick."""

import cProfile
import pstats

from tmux_cockpit.monitoring import MonitorComposer, SystemMonitor


def main() -> None:
    """Collect and render ten live snapshots for profiling."""
    monitor = SystemMonitor()
    composer = MonitorComposer(monitor)
    for _ in range(10):
        composer.tick()
    monitor.shutdown()


if __name__ == "__main__":
    profiler = cProfile.Profile()
    profiler.enable()
    main()
    profiler.disable()
    stats = pstats.Stats(profiler)
    stats.sort_stats(pstats.SortKey.CUMULATIVE).print_stats(20)
