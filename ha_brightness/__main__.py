"""Ambient light to monitor brightness, one pass.

Usage:
    python -m ha_brightness
    python -m ha_brightness --dry-run --log-level DEBUG
"""

import sys

from ha_brightness.main import main

sys.exit(main())
