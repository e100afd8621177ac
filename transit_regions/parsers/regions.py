"""
Regions Payload Parser

Builds Region objects from a OneBusAway regions-v3 JSON response.

Response structure:
    {
        "code": 200,
        "version": 3,
        "data": {
            "list": [
                {
                    "id": 1,
                    "regionName": "Puget Sound",
                    "obaBaseUrl": "http://api.pugetsound.onebusaway.org/",
                    "siriBaseUrl": null,
                    "bounds": [{"lat": .., "lon": .., "latSpan": .., "lonSpan": ..}],
                    ...
                }
            ]
        }
    }
"""

import json
from typing import Any, Dict, List, Union

from ..config import REGIONS_API_VERSION
from ..exceptions import SourceUnavailableError
from ..models import Bounds, Region


def safe_get(obj: Any, *keys, default=None) -> Any:
    """Safely traverse nested dictionaries"""
    current = obj
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _as_str(value: Any):
    if value is None:
        return None
    return str(value)


def parse_bounds(bounds_data: Dict) -> Bounds:
    """Build a Bounds from its JSON object"""
    try:
        return Bounds(
            lat=float(bounds_data["lat"]),
            lon=float(bounds_data["lon"]),
            lat_span=float(bounds_data["latSpan"]),
            lon_span=float(bounds_data["lonSpan"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SourceUnavailableError(f"Malformed bounds entry {bounds_data!r}: {e}")


def parse_region(region_data: Dict) -> Region:
    """Build a Region from its JSON object"""
    if not isinstance(region_data, dict) or region_data.get("id") is None:
        raise SourceUnavailableError(f"Region entry without id: {region_data!r}")

    try:
        region_id = int(region_data["id"])
    except (TypeError, ValueError):
        raise SourceUnavailableError(f"Region id is not an integer: {region_data['id']!r}")

    bounds_data = region_data.get("bounds") or []
    if not isinstance(bounds_data, list):
        raise SourceUnavailableError(f"Region {region_id} bounds is not a list: {bounds_data!r}")
    bounds = tuple(parse_bounds(b) for b in bounds_data)

    return Region(
        id=region_id,
        name=_as_str(region_data.get("regionName")) or "",
        oba_base_url=_as_str(region_data.get("obaBaseUrl")),
        siri_base_url=_as_str(region_data.get("siriBaseUrl")),
        language=_as_str(region_data.get("language")),
        contact_email=_as_str(region_data.get("contactEmail")),
        supports_oba_discovery_apis=_as_bool(region_data.get("supportsObaDiscoveryApis")),
        supports_oba_realtime_apis=_as_bool(region_data.get("supportsObaRealtimeApis")),
        supports_siri_realtime_apis=_as_bool(region_data.get("supportsSiriRealtimeApis")),
        twitter_url=_as_str(region_data.get("twitterUrl")),
        active=_as_bool(region_data.get("active"), default=True),
        experimental=_as_bool(region_data.get("experimental")),
        bounds=bounds,
    )


def parse_regions_response(payload: Union[str, bytes, Dict]) -> List[Region]:
    """
    Extract all regions from a regions API response.

    Args:
        payload: Raw response text/bytes or an already-decoded dictionary

    Returns:
        List of Region objects in payload order

    Raises:
        SourceUnavailableError: If the payload is not a valid regions response
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(f"Regions payload is not valid JSON: {e}")

    if not isinstance(payload, dict):
        raise SourceUnavailableError("Regions payload is not a JSON object")

    code = payload.get("code", 200)
    if code != 200:
        raise SourceUnavailableError(f"Regions API returned code {code}")

    version = payload.get("version", REGIONS_API_VERSION)
    if version != REGIONS_API_VERSION:
        raise SourceUnavailableError(
            f"Unsupported regions payload version {version}, expected {REGIONS_API_VERSION}"
        )

    entries = safe_get(payload, "data", "list", default=[])
    if not isinstance(entries, list):
        raise SourceUnavailableError("Regions payload 'data.list' is not a list")

    return [parse_region(entry) for entry in entries]
