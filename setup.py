"""Packaging setup for tmux-cockpit."""

from pathlib import Path

from setuptools import find_packages, setup


dist_name = "tmux-cockpit"
package_dir = "tmux_cockpit"
version = Path("VERSION.txt").read_text().strip()

install_requires = [
    "loguru>=0.7",
    "psutil>=5.9",
    "nvidia-ml-py>=12.0",
]

test_deps = [
    "pytest>=8.0",
    "pytest-benchmark>=4.0",
]

setup_kwargs = {
    "name": dist_name,
    "version": version,
    "description": "Run a command in tmux next to a live CPU/RAM/GPU monitor",
    "python_requires": ">=3.10",
    "zip_safe": False,
    "packages": find_packages(include=[package_dir, f"{package_dir}.*"]),
    "include_package_data": True,
    "install_requires": install_requires,
    "entry_points": {
        "console_scripts": [
            "tmux-cockpit=tmux_cockpit.cli:main",
            "tmux-cockpit-monitor=tmux_cockpit.monitor:main",
        ],
    },
}

setup_kwargs["extras_require"] = {
    "test": test_deps,
}

setup(**setup_kwargs)
