"""Run the launcher with ``python -m tmux_cockpit``."""

import sys

from tmux_cockpit.cli import main


sys.exit(main())
