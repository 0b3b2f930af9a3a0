"""tmux session setup: a work pane on the left, the monitor on the right."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

from loguru import logger


if TYPE_CHECKING:
    from tmux_cockpit.config import CockpitConfig


WORK_PANE = "0.0"
MONITOR_PANE = "0.1"


class TmuxError(RuntimeError):
    """Raised when tmux is missing or one of its commands fails."""


class TmuxSession:
    """Thin wrapper over the ``tmux`` command line for one named session."""

    def __init__(self, name: str, tmux: str = "tmux") -> None:
        self.name = name
        self.tmux = tmux

    def _executable(self) -> str:
        path = shutil.which(self.tmux)
        if path is None:
            message = f"{self.tmux} not found on PATH"
            raise TmuxError(message)
        return path

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        command = [self._executable(), *args]
        logger.debug("Running {}", " ".join(command))
        result = subprocess.run(command, capture_output=True, text=True, check=False)
        if check and result.returncode != 0:
            message = (
                f"tmux {args[0]} failed with status {result.returncode}: "
                f"{result.stderr.strip()}"
            )
            raise TmuxError(message)
        return result

    def target(self, pane: str) -> str:
        return f"{self.name}:{pane}"

    def exists(self) -> bool:
        return self._run("has-session", "-t", self.name, check=False).returncode == 0

    def create(self) -> None:
        self._run("new-session", "-d", "-s", self.name)

    def send_keys(self, pane: str, command: str) -> None:
        """Type ``command`` into ``pane`` as literal text and press Enter."""
        self._run("send-keys", "-t", self.target(pane), "-l", command)
        self._run("send-keys", "-t", self.target(pane), "C-m")

    def split(self, percent: int) -> None:
        """Split the first window horizontally, new pane taking ``percent``."""
        self._run(
            "split-window", "-h", "-p", str(percent), "-t", self.target("0")
        )

    def select(self, pane: str) -> None:
        self._run("select-pane", "-t", self.target(pane))

    def attach(self) -> int:
        """Attach the terminal to the session; returns tmux's exit status."""
        # The terminal is handed to tmux, so nothing is captured.
        return subprocess.call([self._executable(), "attach", "-t", self.name])

    def kill(self) -> None:
        self._run("kill-session", "-t", self.name, check=False)


def launch(work_command: str, config: CockpitConfig) -> int:
    """Create (or reuse) the cockpit session and attach to it.

    Returns the exit status of ``tmux attach``, or 0 without attaching.
    """
    session = TmuxSession(config.session)

    if session.exists():
        logger.info("Attaching to existing session '{}'...", config.session)
        return session.attach() if config.attach else 0

    logger.info("Creating session '{}'...", config.session)
    session.create()
    try:
        session.send_keys(WORK_PANE, work_command)
        session.split(config.split_percent)
        session.send_keys(MONITOR_PANE, config.monitor_command)
        session.select(WORK_PANE)
    except TmuxError:
        logger.warning("Setup of session '{}' failed, removing it", config.session)
        session.kill()
        raise

    if not config.attach:
        logger.info(
            "Session '{}' ready; attach with: tmux attach -t {}",
            config.session,
            config.session,
        )
        return 0
    return session.attach()
