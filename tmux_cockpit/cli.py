from __future__ import annotations

import argparse
import shlex
import sys

from loguru import logger

from tmux_cockpit.config import GPU_BACKENDS, CockpitConfig, MonitorConfig
from tmux_cockpit.logging_config import configure_logging
from tmux_cockpit.session import TmuxError, launch


LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Launcher options that consume the following token as their value.
VALUE_OPTIONS = {"--monitor", "--session", "--split-percent", "--log-level"}
HELP_OPTIONS = {"-h", "--help"}
FLAG_OPTIONS = {"--no-attach", *HELP_OPTIONS}

USAGE_ERROR = """\
Error: you must supply the command to run in the left pane.
Example: {prog} python train.py --epochs 10

Available monitor overrides:
  --monitor 'htop'                    # CPU only
  --monitor 'watch -n1 nvidia-smi'    # GPU only
  --monitor 'nvtop'                   # GPU interactive
"""


def split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split launcher options from the work command.

    Options end at ``--`` or at the first token that is not a known option;
    everything after that belongs to the work command, including its flags.
    """
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--":
            return argv[:index], argv[index + 1 :]
        name = token.split("=", 1)[0]
        if name in VALUE_OPTIONS:
            index += 1 if "=" in token else 2
        elif token in FLAG_OPTIONS:
            index += 1
        else:
            break
    return argv[:index], argv[index:]


def build_launcher_parser(prog: str = "tmux-cockpit") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} [--monitor CMD] [--session NAME] [--] WORK_COMMAND...",
        description="Run a command in tmux next to a live CPU/RAM/GPU monitor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  {prog} python train.py --epochs 10
  {prog} --session exp1 -- ./run.sh --fast
  {prog} --monitor 'watch -n1 nvidia-smi' python train.py
		""",
    )
    parser.add_argument(
        "--monitor",
        type=str,
        default=None,
        help="Command for the right pane (default: built-in resource monitor)",
    )
    parser.add_argument("--session", type=str, default=None, help="tmux session name")
    parser.add_argument(
        "--split-percent",
        type=int,
        default=None,
        help="Width of the monitor pane in percent",
    )
    parser.add_argument(
        "--no-attach",
        action="store_true",
        help="Set up the session without attaching to it",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=LOG_LEVELS,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point of ``tmux-cockpit``."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_launcher_parser()
    options, work = split_argv(argv)

    # Checked before parsing so a dangling option still reports the usage error.
    if not work and not HELP_OPTIONS & set(options):
        sys.stderr.write(USAGE_ERROR.format(prog=parser.prog))
        return 1

    args = parser.parse_args(options)

    configure_logging(args.log_level, name="cockpit")

    config = CockpitConfig.from_env()
    if args.monitor:
        config.monitor_command = args.monitor
    if args.session:
        config.session = args.session
    if args.split_percent is not None:
        if not 1 <= args.split_percent <= 99:
            parser.error("--split-percent must be between 1 and 99")
        config.split_percent = args.split_percent
    if args.no_attach:
        config.attach = False

    work_command = shlex.join(work) if len(work) > 1 else work[0]
    logger.debug("Work command: {}", work_command)
    try:
        return launch(work_command, config)
    except TmuxError as exc:
        logger.error("{}", exc)
        return 1


def build_monitor_parser(prog: str = "tmux-cockpit-monitor") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Redraw CPU, RAM, GPU, load and disk gauges in the terminal",
    )
    parser.add_argument("--interval", type=float, default=None, help="Seconds between redraws")
    parser.add_argument("--width", type=int, default=None, help="Gauge width in segments")
    parser.add_argument("--max-cores", type=int, default=None)
    parser.add_argument("--gpu-backend", type=str, default=None, choices=GPU_BACKENDS)
    parser.add_argument("--disk-path", type=str, default=None)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=LOG_LEVELS,
    )
    return parser


def parse_monitor_args(argv: list[str] | None = None) -> tuple[MonitorConfig, argparse.Namespace]:
    """Merge monitor command line flags over the environment defaults."""
    parser = build_monitor_parser()
    args = parser.parse_args(argv)
    config = MonitorConfig.from_env()
    overrides = {
        "interval": args.interval,
        "width": args.width,
        "max_cores": args.max_cores,
        "gpu_backend": args.gpu_backend,
        "disk_path": args.disk_path,
    }
    try:
        config = MonitorConfig(
            **{
                key: value if value is not None else getattr(config, key)
                for key, value in overrides.items()
            }
        )
    except ValueError as exc:
        parser.error(str(exc))
    return config, args
