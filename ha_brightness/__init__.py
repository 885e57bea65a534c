"""Home Assistant driven monitor brightness.

Reads an ambient light sensor from Home Assistant, maps the lux value to a
brightness percentage and applies it to an external monitor over DDC/CI.

Example usage:
    from ha_brightness.brightness_table import percentage_for

    percentage_for(42)  # 25
"""

from __future__ import annotations
