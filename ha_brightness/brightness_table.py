"""Lux-to-brightness lookup table.

Based on the Windows 11 ambient light response curve:
https://learn.microsoft.com/en-us/windows-hardware/design/device-experiences/sensors-adaptive-brightness
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

# Returned when no band contains the reading.
NO_MATCH_PERCENTAGE = 0


@dataclass(frozen=True)
class BrightnessBand:
    """One lux range (min inclusive, max exclusive) and its brightness."""

    min: int
    max: int
    percentage: int

    def contains(self, lux: int) -> bool:
        """Return True if lux falls inside [min, max)."""
        return self.min <= lux < self.max


# Ranges overlap on purpose. The first band that contains a value wins, so
# the order below is part of the mapping and must not be sorted.
BRIGHTNESS_BANDS: tuple[BrightnessBand, ...] = (
    BrightnessBand(min=0, max=10, percentage=10),
    BrightnessBand(min=5, max=50, percentage=25),
    BrightnessBand(min=15, max=100, percentage=40),
    BrightnessBand(min=60, max=300, percentage=55),
    BrightnessBand(min=150, max=400, percentage=70),
    BrightnessBand(min=250, max=650, percentage=85),
    BrightnessBand(min=350, max=2000, percentage=100),
    BrightnessBand(min=1000, max=7000, percentage=115),
    BrightnessBand(min=5000, max=10000, percentage=130),
)


def percentage_for(
    lux: int, bands: Sequence[BrightnessBand] = BRIGHTNESS_BANDS
) -> int:
    """Map a lux reading to a brightness percentage.

    Args:
        lux: Integer illuminance reading.
        bands: Ordered bands to scan; defaults to BRIGHTNESS_BANDS.

    Returns:
        Percentage of the first band containing lux, or 0 if none does.
    """
    for band in bands:
        if band.contains(lux):
            return band.percentage
    return NO_MATCH_PERCENTAGE
