"""System monitoring for CPU, RAM, GPU, load and disk metrics."""

from __future__ import annotations

import math
import shutil
import subprocess
import time
from contextlib import suppress

import psutil
from loguru import logger

from tmux_cockpit.types import GpuStats, SystemStats


try:
    import pynvml

    PYNVML_AVAILABLE = True
except ImportError:
    PYNVML_AVAILABLE = False
    logger.debug("pynvml not available - falling back to nvidia-smi for GPUs")


NVIDIA_SMI = "nvidia-smi"
NVIDIA_SMI_QUERY = (
    "--query-gpu=index,utilization.gpu,memory.used,memory.total,temperature.gpu",
    "--format=csv,noheader,nounits",
)
NVIDIA_SMI_TIMEOUT = 5.0

TELEMETRY_ERRORS: tuple[type[BaseException], ...] = (
    psutil.Error,
    OSError,
    ValueError,
)


def _to_float(text: str, default: float = 0.0) -> float:
    try:
        value = float(text)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def parse_nvidia_smi_csv(text: str) -> list[GpuStats]:
    """Parse ``nvidia-smi --query-gpu`` CSV rows into per-device stats.

    Rows are ``index, utilization, memory.used, memory.total, temperature``.
    Blank or unreadable fields (``[N/A]``) become 0; a missing index falls back
    to the row position.
    """
    gpus = []
    for position, line in enumerate(text.splitlines()):
        if not line.strip():
            continue
        fields = [part.strip() for part in line.split(",")]
        fields += [""] * (5 - len(fields))
        index = int(_to_float(fields[0], default=float(position)))
        gpus.append(
            GpuStats(
                index=index,
                utilization=_to_float(fields[1]),
                memory_used_mb=_to_float(fields[2]),
                memory_total_mb=_to_float(fields[3]),
                temperature_c=_to_float(fields[4]),
            )
        )
    return gpus


class SystemMonitor:
    """Collect one :class:`SystemStats` snapshot per call.

    Every metric is read independently. A failing reading is logged at DEBUG
    level and left at zero so one broken source never aborts a tick.

    Example:
        >>> monitor = SystemMonitor(gpu_backend="auto")
        >>> stats = monitor.get_stats()
        >>> stats.cpu_percent, stats.gpus
        >>> monitor.shutdown()
    """

    def __init__(self, gpu_backend: str = "auto", disk_path: str = "/") -> None:
        """
        Initialize the system monitor.

        Args:
            gpu_backend: One of ``auto``, ``nvml``, ``nvidia-smi`` or ``none``
            disk_path: Mount point whose usage is reported
        """
        self.gpu_backend = gpu_backend
        self.disk_path = disk_path
        self._nvml_ready = False

        # The first non-blocking reading is always 0.0; prime both counters.
        with suppress(*TELEMETRY_ERRORS):
            psutil.cpu_percent(interval=None)
            psutil.cpu_percent(interval=None, percpu=True)

    def get_stats(self) -> SystemStats:
        """Collect current system metrics."""
        stats = SystemStats(timestamp=time.time())
        self._read_cpu(stats)
        self._read_memory(stats)
        stats.gpus = self.query_gpus()
        self._read_load(stats)
        self._read_disk(stats)
        return stats

    def _read_cpu(self, stats: SystemStats) -> None:
        try:
            stats.cpu_percent = float(psutil.cpu_percent(interval=None))
            stats.cpu_per_core = [
                float(pct) for pct in psutil.cpu_percent(interval=None, percpu=True)
            ]
        except TELEMETRY_ERRORS as exc:
            logger.debug("Error reading CPU usage: {}", exc)

    def _read_memory(self, stats: SystemStats) -> None:
        try:
            ram = psutil.virtual_memory()
            stats.ram_used_bytes = int(ram.used)
            stats.ram_total_bytes = int(ram.total)
            stats.ram_percent = (
                ram.used / ram.total * 100 if ram.total > 0 else 0.0
            )
        except TELEMETRY_ERRORS as exc:
            logger.debug("Error reading memory usage: {}", exc)

    def _read_load(self, stats: SystemStats) -> None:
        try:
            one, five, fifteen = psutil.getloadavg()
            stats.load_average = (float(one), float(five), float(fifteen))
        except TELEMETRY_ERRORS as exc:
            logger.debug("Error reading load average: {}", exc)

    def _read_disk(self, stats: SystemStats) -> None:
        try:
            disk = psutil.disk_usage(self.disk_path)
            stats.disk_used_bytes = int(disk.used)
            stats.disk_total_bytes = int(disk.total)
            stats.disk_percent = float(disk.percent)
        except TELEMETRY_ERRORS as exc:
            logger.debug("Error reading disk usage of {}: {}", self.disk_path, exc)

    def query_gpus(self) -> list[GpuStats] | None:
        """Return per-device GPU stats, or ``None`` when no GPU tool exists.

        Tool presence is re-checked on every call, so a driver that comes up
        after the monitor started is picked up on the next tick.
        """
        if self.gpu_backend == "none":
            return None
        if self.gpu_backend in {"auto", "nvml"} and self._ensure_nvml():
            return self._query_nvml()
        if self.gpu_backend == "nvml":
            return None
        return self._query_nvidia_smi()

    def _ensure_nvml(self) -> bool:
        if not PYNVML_AVAILABLE:
            return False
        if self._nvml_ready:
            return True
        try:
            pynvml.nvmlInit()
        except pynvml.NVMLError as exc:
            logger.debug("NVML unavailable: {}", exc)
            return False
        self._nvml_ready = True
        logger.info("GPU monitoring initialized through NVML")
        return True

    def _query_nvml(self) -> list[GpuStats]:
        try:
            count = pynvml.nvmlDeviceGetCount()
        except pynvml.NVMLError as exc:
            logger.debug("Error counting GPUs: {}", exc)
            return []

        gpus = []
        for index in range(count):
            gpu = GpuStats(index=index)
            try:
                handle = pynvml.nvmlDeviceGetHandleByIndex(index)
                gpu.utilization = float(pynvml.nvmlDeviceGetUtilizationRates(handle).gpu)
                mem = pynvml.nvmlDeviceGetMemoryInfo(handle)
                gpu.memory_used_mb = mem.used / (1024**2)
                gpu.memory_total_mb = mem.total / (1024**2)
                gpu.temperature_c = float(
                    pynvml.nvmlDeviceGetTemperature(handle, pynvml.NVML_TEMPERATURE_GPU)
                )
            except pynvml.NVMLError as exc:
                logger.debug("Error reading GPU {} stats: {}", index, exc)
            gpus.append(gpu)
        return gpus

    def _query_nvidia_smi(self) -> list[GpuStats] | None:
        executable = shutil.which(NVIDIA_SMI)
        if executable is None:
            return None
        try:
            result = subprocess.run(
                [executable, *NVIDIA_SMI_QUERY],
                capture_output=True,
                text=True,
                timeout=NVIDIA_SMI_TIMEOUT,
                check=True,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            logger.debug("nvidia-smi query failed: {}", exc)
            return []
        return parse_nvidia_smi_csv(result.stdout)

    def shutdown(self) -> None:
        """Release NVML if it was initialised."""
        if PYNVML_AVAILABLE and self._nvml_ready:
            with suppress(pynvml.NVMLError):
                pynvml.nvmlShutdown()
                logger.debug("GPU monitoring shutdown complete")
            self._nvml_ready = False
