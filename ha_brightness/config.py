"""Environment-based configuration for the Home Assistant connection.

Variables (optionally loaded from a local .env file):
    HA_ADDRESS        Home Assistant host name or IP
    HA_PORT           Home Assistant port
    HA_ENTITY         Illuminance sensor entity id, e.g. sensor.office_lux
    HA_TOKEN          Long-lived access token
    HA_MONITOR_INDEX  Position of the monitor to control (default 0)
    HA_TIMEOUT        HTTP timeout in seconds (default 10)
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import os
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

_logger = logging.getLogger(__name__)

DEFAULT_MONITOR_INDEX = 0
DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class HAConfig:
    """Connection settings for Home Assistant plus the target monitor."""

    address: str
    port: str
    token: str
    entity: str
    monitor_index: int = DEFAULT_MONITOR_INDEX
    timeout: float = DEFAULT_TIMEOUT_S

    def __repr__(self) -> str:
        """Keep the token out of logs and tracebacks."""
        return (
            f"HAConfig(address={self.address!r}, port={self.port!r}, "
            f"token='***', entity={self.entity!r}, "
            f"monitor_index={self.monitor_index}, timeout={self.timeout})"
        )


def _int_from_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _logger.warning("Invalid %s=%r, using %d", name, raw, default)
        return default


def _float_from_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not (math.isfinite(value) and value > 0):
        _logger.warning("Invalid %s=%r, using %.1f", name, raw, default)
        return default
    return value


def config_from_env(environ: Mapping[str, str]) -> HAConfig:
    """Build an HAConfig from an environment mapping.

    Missing connection values become empty strings; no validation is done,
    so an incomplete environment simply produces a request that fails later.
    """
    return HAConfig(
        address=environ.get("HA_ADDRESS", ""),
        port=environ.get("HA_PORT", ""),
        token=environ.get("HA_TOKEN", ""),
        entity=environ.get("HA_ENTITY", ""),
        monitor_index=_int_from_env(
            environ, "HA_MONITOR_INDEX", DEFAULT_MONITOR_INDEX
        ),
        timeout=_float_from_env(environ, "HA_TIMEOUT", DEFAULT_TIMEOUT_S),
    )


def load_env_file(env_file: str | Path | None = None) -> str | Path | None:
    """Load .env into the process environment without overriding it.

    Without env_file, .env is searched for from the working directory upwards.

    Returns:
        The path that was loaded, or None if nothing was.
    """
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    if path and load_dotenv(path):
        return path
    return None


def load_config(env_file: str | Path | None = None) -> HAConfig:
    """Load .env (if present) into the process environment, then read it.

    Variables already set in the environment take precedence over the file.
    """
    path = load_env_file(env_file)
    if path:
        _logger.debug("Loaded environment from %s", path)
    else:
        _logger.debug("No .env file loaded")
    return config_from_env(os.environ)
