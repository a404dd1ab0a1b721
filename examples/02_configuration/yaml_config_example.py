#!/usr/bin/env python3
"""
Configure a monitor from YAML with environment overrides.

This example demonstrates:
- Loading MonitorConfig from a section of a YAML file
- Overriding file values with SIGMON_* environment variables
- Using the monitor as a context manager and reading its status

Usage:
    python yaml_config_example.py
    SIGMON_LOG_LEVEL=trace python yaml_config_example.py
"""

import os
import pathlib
import signal
import sys
import time

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
sys.path.append(project_root) if project_root not in sys.path else None

from sigmon import Monitor, MonitorConfig, State


def handle(state: State) -> None:
    print(f"handled {state.signal}")


def main() -> int:
    config = MonitorConfig.from_yaml(
        pathlib.Path(__file__).with_name("monitor.yaml"), section="signals"
    )

    with Monitor(handle, config=config) as monitor:
        os.kill(os.getpid(), signal.SIGUSR1)
        time.sleep(0.2)
        print(monitor.get_status())

    return 0


if __name__ == "__main__":
    sys.exit(main())
