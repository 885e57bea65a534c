"""Home Assistant REST client for reading an illuminance sensor."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
import logging
import math
import time
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from ha_brightness.config import HAConfig

_logger = logging.getLogger(__name__)

# Length of the response body quoted in warning logs.
_BODY_SNIPPET_LEN = 200


@dataclass
class SensorReading:
    """State of one Home Assistant entity.

    Only ``value`` (the JSON ``state`` field) drives brightness; the
    timestamps are kept for logging.
    """

    value: str = ""
    last_changed: str = ""
    last_updated: str = ""
    last_reported: str = ""


def build_state_url(config: HAConfig) -> str:
    """Return the REST URL of the configured entity's state."""
    return f"http://{config.address}:{config.port}/api/states/{config.entity}"


def build_headers(config: HAConfig) -> dict[str, str]:
    """Return request headers carrying the bearer token."""
    return {
        "Authorization": f"Bearer {config.token}",
        "Content-Type": "application/json",
    }


def _as_str(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_reading(payload: object) -> SensorReading:
    """Map a decoded JSON document onto a SensorReading.

    Anything that is not a JSON object yields an empty reading.
    """
    if not isinstance(payload, dict):
        _logger.debug("Unexpected sensor payload type: %s", type(payload).__name__)
        return SensorReading()
    return SensorReading(
        value=_as_str(payload.get("state")),
        last_changed=_as_str(payload.get("last_changed")),
        last_updated=_as_str(payload.get("last_updated")),
        last_reported=_as_str(payload.get("last_reported")),
    )


def _log_response(response: requests.Response, url: str, elapsed: float) -> None:
    status = response.status_code
    if status < HTTPStatus.BAD_REQUEST:
        _logger.debug("HTTP GET %s -> %s in %.2fs", url, status, elapsed)
        return
    snippet = (response.text or "")[:_BODY_SNIPPET_LEN].replace("\n", " ")
    if snippet:
        _logger.warning(
            "HTTP GET %s -> %s in %.2fs body='%s'", url, status, elapsed, snippet
        )
    else:
        _logger.warning("HTTP GET %s -> %s in %.2fs", url, status, elapsed)


def fetch_sensor(
    config: HAConfig, session: requests.Session | None = None
) -> SensorReading:
    """Fetch the current state of the configured sensor.

    Never raises for network or decoding problems: they are logged and an
    empty SensorReading is returned so the caller can carry on.

    Args:
        config: Home Assistant connection settings.
        session: Optional session to reuse; one is created and closed
            otherwise.

    Returns:
        The decoded reading, or an empty one on failure.
    """
    url = build_state_url(config)
    own_session = session is None
    http = session or requests.Session()
    try:
        t0 = time.monotonic()
        try:
            response = http.get(
                url, headers=build_headers(config), timeout=config.timeout
            )
        except requests.RequestException as e:
            _logger.error("error getting response: %s", e)
            return SensorReading()
        _log_response(response, url, time.monotonic() - t0)

        try:
            payload = response.json()
        except ValueError as e:
            _logger.debug("Sensor response is not JSON: %s", e)
            return SensorReading()
        return parse_reading(payload)
    finally:
        if own_session:
            http.close()


def parse_lux(reading: SensorReading) -> int:
    """Convert the reading's state string to integer lux.

    The value is parsed as a float and truncated toward zero. Anything
    unparsable (including ``unavailable`` and ``unknown``) is logged and
    treated as 0. Surrounding whitespace and digit separators are rejected.
    """
    raw = reading.value
    if raw != raw.strip() or "_" in raw:
        _logger.error("Error parsing sensor value: invalid syntax %r", raw)
        return 0
    try:
        value = float(raw)
    except ValueError as e:
        _logger.error("Error parsing sensor value: %s", e)
        return 0
    if not math.isfinite(value):
        _logger.error("Error parsing sensor value: %r is not finite", reading.value)
        return 0
    return int(value)
