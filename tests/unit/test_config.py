"""Unit tests for configuration defaults and environment overrides."""

from __future__ import annotations

import sys

import pytest

from tmux_cockpit.config import (
    CockpitConfig,
    MonitorConfig,
    default_monitor_command,
)


def test_default_monitor_command_uses_current_interpreter() -> None:
    command = default_monitor_command()

    assert sys.executable in command
    assert command.endswith(" -m tmux_cockpit.monitor")


class TestMonitorConfig:
    """Tests for MonitorConfig."""

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMUX_COCKPIT_INTERVAL", "1.5")
        monkeypatch.setenv("TMUX_COCKPIT_BAR_WIDTH", "20")
        monkeypatch.setenv("TMUX_COCKPIT_MAX_CORES", "4")
        monkeypatch.setenv("TMUX_COCKPIT_GPU_BACKEND", "NVIDIA-SMI")
        monkeypatch.setenv("TMUX_COCKPIT_DISK_PATH", "/data")

        config = MonitorConfig.from_env()

        assert config == MonitorConfig(
            interval=1.5,
            width=20,
            max_cores=4,
            gpu_backend="nvidia-smi",
            disk_path="/data",
        )

    def test_malformed_env_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMUX_COCKPIT_INTERVAL", "soon")
        monkeypatch.setenv("TMUX_COCKPIT_BAR_WIDTH", "wide")
        monkeypatch.setenv("TMUX_COCKPIT_GPU_BACKEND", "rocm")

        config = MonitorConfig.from_env()

        assert config.interval == 2.0
        assert config.width == 10
        assert config.gpu_backend == "auto"

    @pytest.mark.parametrize(
        "kwargs",
        [{"gpu_backend": "cuda"}, {"width": 0}, {"interval": -1.0}],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            MonitorConfig(**kwargs)


class TestCockpitConfig:
    """Tests for CockpitConfig."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("SESSION", "MONITOR", "SPLIT_PERCENT"):
            monkeypatch.delenv(f"TMUX_COCKPIT_{name}", raising=False)

        config = CockpitConfig.from_env()

        assert config.session == "dev"
        assert config.split_percent == 20
        assert config.monitor_command == default_monitor_command()

    def test_split_percent_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMUX_COCKPIT_SPLIT_PERCENT", "100")

        assert CockpitConfig.from_env().split_percent == 20

    def test_blank_values_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMUX_COCKPIT_SESSION", "   ")

        assert CockpitConfig.from_env().session == "dev"
