"""Parsing and validation of the OGP ``Location`` field.

``Location`` is a JSON object encoded as a string, mapping service types
(``wms``, ``wfs``, ``wcs``, ``purl``, ``download``, ...) to a URL or a list
of URLs.
"""

from __future__ import annotations

import json
from typing import Any

from ogp2gbl.common.constants import SERVICE_PROTOCOLS
from ogp2gbl.common.errors import (
    InvalidBoundsError,
    InvalidLocationError,
    MalformedLocationError,
    NoLocationError,
)
from ogp2gbl.common.uri import is_http_url


def _decode(raw: Any, record_id: str) -> dict[str, Any]:
    if raw is None or raw == "":
        raise NoLocationError(record_id)
    if not isinstance(raw, str):
        raise MalformedLocationError(record_id, f"expected a JSON string, got {type(raw).__name__}")
    try:
        decoded = json.loads(raw)
    except ValueError as exc:
        raise MalformedLocationError(record_id, str(exc)) from exc
    if not isinstance(decoded, dict):
        raise MalformedLocationError(record_id, "not a JSON object")
    return decoded


def parse_location(raw: Any, record_id: str = "") -> dict[str, Any]:
    location = _decode(raw, record_id)
    for protocol in SERVICE_PROTOCOLS:
        value = location.get(protocol)
        if isinstance(value, list):
            if value:
                location[protocol] = value[0]
            else:
                del location[protocol]
    return location


def validate_location(raw: Any, record_id: str = "") -> dict[str, Any]:
    """Strict check that the service URLs are usable.

    Requires a WMS endpoint plus a WFS or WCS endpoint, all absolute
    http(s) URLs. The legacy converter defined this check but never called
    it, so it only runs when strict validation is switched on. Returns the
    decoded location with every protocol value as a list.
    """
    location = _decode(raw, record_id)
    if location.get("wms") is None or (location.get("wcs") is None and location.get("wfs") is None):
        raise InvalidLocationError(record_id, f"Missing WMS or WCS/WFS: {raw}")

    for protocol in ("wms", "wcs", "wfs"):
        value = location.get(protocol)
        if value is None:
            continue
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise InvalidLocationError(record_id, f"Unknown {protocol} value: {raw}")
        for url in value:
            if not is_http_url(url):
                raise InvalidLocationError(record_id, f"Invalid {protocol} URL: {url!r}")
        location[protocol] = value
    return location


def _valid_lat(value: float) -> bool:
    return -90 <= value <= 90


def _valid_lon(value: float) -> bool:
    return -180 <= value <= 180


def validate_bounds(bounds: dict[str, float], record_id: str = "") -> None:
    """Check south/north are latitudes and west/east are longitudes."""
    for key in ("south", "north"):
        if not _valid_lat(bounds[key]):
            raise InvalidBoundsError(record_id, f"{key} latitude out of range: {bounds[key]}")
    for key in ("west", "east"):
        if not _valid_lon(bounds[key]):
            raise InvalidBoundsError(record_id, f"{key} longitude out of range: {bounds[key]}")
