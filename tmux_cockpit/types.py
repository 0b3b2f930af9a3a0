"""Shared data structures for the monitor pane."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MetricSample:
    """A single named measurement taken at one polling tick."""

    name: str
    value: float = 0.0
    unit: str = "%"


@dataclass
class GpuStats:
    """Utilization, memory and temperature of one accelerator."""

    index: int
    utilization: float = 0.0
    memory_used_mb: float = 0.0
    memory_total_mb: float = 0.0
    temperature_c: float = 0.0

    @property
    def memory_percent(self) -> float:
        if self.memory_total_mb <= 0:
            return 0.0
        return self.memory_used_mb / self.memory_total_mb * 100


@dataclass
class SystemStats:
    """Container for one tick of system statistics.

    ``gpus`` is ``None`` when no GPU query tool is present, and an empty list
    when the tool is present but reported no devices.
    """

    timestamp: float = 0.0
    cpu_percent: float = 0.0
    cpu_per_core: list[float] = field(default_factory=list)
    ram_percent: float = 0.0
    ram_used_bytes: int = 0
    ram_total_bytes: int = 0
    gpus: list[GpuStats] | None = None
    load_average: tuple[float, float, float] = (0.0, 0.0, 0.0)
    disk_used_bytes: int = 0
    disk_total_bytes: int = 0
    disk_percent: float = 0.0

    @property
    def gpu_utilization(self) -> float:
        """Mean utilization across all devices."""
        if not self.gpus:
            return 0.0
        return sum(gpu.utilization for gpu in self.gpus) / len(self.gpus)

    @property
    def gpu_memory_used_mb(self) -> float:
        return sum(gpu.memory_used_mb for gpu in self.gpus or [])

    @property
    def gpu_memory_total_mb(self) -> float:
        return sum(gpu.memory_total_mb for gpu in self.gpus or [])

    @property
    def gpu_memory_percent(self) -> float:
        total = self.gpu_memory_total_mb
        if total <= 0:
            return 0.0
        return self.gpu_memory_used_mb / total * 100

    def samples(self) -> list[MetricSample]:
        """Flatten the headline totals into metric samples.

        GPU samples are only present when a GPU tool reported in this tick.
        """
        samples = [
            MetricSample("cpu", self.cpu_percent),
            MetricSample("ram", self.ram_percent),
            MetricSample("ram_used", self.ram_used_bytes, "B"),
            MetricSample("ram_total", self.ram_total_bytes, "B"),
            MetricSample("disk", self.disk_percent),
            MetricSample("disk_used", self.disk_used_bytes, "B"),
            MetricSample("disk_total", self.disk_total_bytes, "B"),
        ]
        if self.gpus is not None:
            samples.extend(
                [
                    MetricSample("gpu", self.gpu_utilization),
                    MetricSample("vram", self.gpu_memory_percent),
                    MetricSample("vram_used", self.gpu_memory_used_mb * 1024**2, "B"),
                    MetricSample("vram_total", self.gpu_memory_total_mb * 1024**2, "B"),
                ]
            )
            samples.extend(
                MetricSample(f"gpu{gpu.index}_temperature", gpu.temperature_c, "°C")
                for gpu in self.gpus
            )
        return samples
