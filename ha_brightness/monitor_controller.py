"""DDC/CI monitor brightness access through monitorcontrol.

Brightness here is the VCP luminance feature, as a percentage. Most monitors
report a maximum of 100 and reject anything above it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from monitorcontrol import get_monitors
from monitorcontrol.vcp import VCPError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from monitorcontrol import Monitor

_logger = logging.getLogger(__name__)

# Errors a DDC/CI call can surface: protocol failures, values outside the
# monitor's range, and I2C device access problems.
_DDC_ERRORS = (VCPError, ValueError, OSError)


class MonitorNotFoundError(LookupError):
    """Raised when the requested monitor index is not connected."""

    def __init__(self, index: int, count: int) -> None:
        """Store the requested index and the number of monitors found."""
        self.index = index
        self.count = count
        super().__init__(f"monitor {index} not found ({count} connected)")


def enumerate_monitors() -> list[Monitor]:
    """List DDC/CI capable monitors; an empty list if enumeration fails."""
    try:
        monitors = get_monitors()
    except _DDC_ERRORS as e:
        _logger.error("Error getting monitors: %s", e)
        return []
    _logger.debug("Found %d monitor(s)", len(monitors))
    return monitors


def select_monitor(monitors: Sequence[Monitor], index: int) -> Monitor:
    """Return the monitor at index.

    Raises:
        MonitorNotFoundError: If index is negative or past the end.
    """
    if not 0 <= index < len(monitors):
        raise MonitorNotFoundError(index, len(monitors))
    return monitors[index]


def get_brightness(monitor: Monitor) -> int:
    """Read the current luminance percentage, or 0 if the read fails."""
    try:
        with monitor:
            return monitor.get_luminance()
    except _DDC_ERRORS as e:
        _logger.error("Error getting monitor brightness: %s", e)
        return 0


def set_brightness(monitor: Monitor, percentage: int) -> bool:
    """Write a luminance percentage.

    Returns:
        True if the monitor accepted the value, False if the write failed.
    """
    _logger.info("setting monitor brightness to %d%%", percentage)
    try:
        with monitor:
            monitor.set_luminance(percentage)
    except _DDC_ERRORS as e:
        _logger.error("Error setting monitor brightness: %s", e)
        return False
    return True
