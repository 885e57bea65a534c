#!/usr/bin/env python3
"""Set monitor brightness from a Home Assistant illuminance sensor.

Runs a single pass and exits; schedule it (cron, systemd timer, Task
Scheduler) to keep the monitor following the room light.

Usage:
    ha-brightness
    ha-brightness --dry-run --log-level DEBUG
    python -m ha_brightness --env-file ~/.config/ha-brightness.env
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import TYPE_CHECKING

from ha_brightness.brightness_table import percentage_for
from ha_brightness.config import config_from_env, load_env_file
from ha_brightness.monitor_controller import (
    MonitorNotFoundError,
    enumerate_monitors,
    get_brightness,
    select_monitor,
    set_brightness,
)
from ha_brightness.sensor_client import fetch_sensor, parse_lux

if TYPE_CHECKING:
    from collections.abc import Sequence

    import requests

    from ha_brightness.config import HAConfig

_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MONITOR_NOT_FOUND = 1


def configure_logging(log_level: str | None = None) -> None:
    """Configure root logging.

    Precedence: ``log_level`` argument, then ``HA_LOG_LEVEL``, then INFO.
    """
    level_name = (log_level or os.environ.get("HA_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [ha-brightness] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def run(
    config: HAConfig,
    *,
    session: requests.Session | None = None,
    dry_run: bool = False,
) -> int:
    """Read the sensor and update the monitor if the target changed.

    Sensor and monitor failures are logged and replaced by 0, so a failed
    fetch still leads to a brightness decision. Only a missing monitor stops
    the run.

    Returns:
        Process exit code.
    """
    try:
        monitor = select_monitor(enumerate_monitors(), config.monitor_index)
    except MonitorNotFoundError as e:
        _logger.error("Error getting the specified monitor: %s", e)
        return EXIT_MONITOR_NOT_FOUND

    current = get_brightness(monitor)
    _logger.info("current brightness: %d", current)

    reading = fetch_sensor(config, session)
    _logger.info("sensor value: %s", reading.value)
    _logger.debug("sensor last updated: %s", reading.last_updated)

    lux = parse_lux(reading)
    target = percentage_for(lux)
    _logger.debug("lux=%d target=%d%% current=%d%%", lux, target, current)

    if target == current:
        _logger.warning("brightness is already at %d%%, skipping...", current)
        return EXIT_OK

    if dry_run:
        _logger.info("dry run: would set brightness %d%% -> %d%%", current, target)
        return EXIT_OK

    set_brightness(monitor, target)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, load configuration and run one pass."""
    parser = argparse.ArgumentParser(
        description="Set monitor brightness from a Home Assistant lux sensor"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $HA_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (default: search from the working directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the target brightness without writing it",
    )
    args = parser.parse_args(argv)

    # Must precede configure_logging: .env may set HA_LOG_LEVEL.
    env_path = load_env_file(args.env_file)
    configure_logging(args.log_level)
    if env_path:
        _logger.debug("Loaded environment from %s", env_path)
    else:
        _logger.debug("No .env file loaded")
    config = config_from_env(os.environ)
    return run(config, dry_run=args.dry_run)


if __name__ == "__main__":
    raise SystemExit(main())
