"""
Region Span

Bounding-box aggregation over a region's bounds and point containment.

This is a simple bounding-box union, not a polygon union. Spans that
cross the +/-180 degree meridian are not normalized, so containment
tests near the International Date Line are unreliable.
"""

from ..exceptions import InvalidArgumentError
from ..models import Region, RegionSpan


def region_span(region: Region) -> RegionSpan:
    """
    Calculate the center and lat/lon span covering all bounds of a region.

    Args:
        region: The region to measure

    Returns:
        RegionSpan of the minimal box covering every bound

    Raises:
        InvalidArgumentError: If the region is None or has no bounds
    """
    if region is None:
        raise InvalidArgumentError("Region is null")
    if not region.bounds:
        raise InvalidArgumentError(f"Region '{region.name}' has no bounds")

    lat_min = 90.0
    lat_max = -90.0
    lon_min = 180.0
    lon_max = -180.0

    for bound in region.bounds:
        lat_half = bound.lat_span / 2.0
        lat_min = min(lat_min, bound.lat - lat_half)
        lat_max = max(lat_max, bound.lat + lat_half)

        lon_half = bound.lon_span / 2.0
        lon_min = min(lon_min, bound.lon - lon_half)
        lon_max = max(lon_max, bound.lon + lon_half)

    return RegionSpan(
        lat_span=lat_max - lat_min,
        lon_span=lon_max - lon_min,
        lat_center=lat_min + (lat_max - lat_min) / 2.0,
        lon_center=lon_min + (lon_max - lon_min) / 2.0,
    )


def _is_valid_location(lat, lon) -> bool:
    if lat is None or lon is None:
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def contains_point(span: RegionSpan, lat: float, lon: float) -> bool:
    """
    Check if a location is within a region span (closed box on both axes).

    Args:
        span: Span information for the region
        lat: Latitude of the location
        lon: Longitude of the location

    Returns:
        True if the location is within the span

    Raises:
        InvalidArgumentError: If the span is missing fields or the location is invalid
    """
    if span is None or None in (span.lat_span, span.lon_span, span.lat_center, span.lon_center):
        raise InvalidArgumentError("Region span is null or incomplete")
    if not _is_valid_location(lat, lon):
        raise InvalidArgumentError("Location must be a valid location")

    return (span.lat_min <= lat <= span.lat_max and
            span.lon_min <= lon <= span.lon_max)


def is_location_within_region(lat: float, lon: float, region: Region) -> bool:
    """Check if a location is within the span of a region."""
    return contains_point(region_span(region), lat, lon)
