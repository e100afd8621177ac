"""
Closest Region Search

Finds the usable region whose nearest bound center is closest to a location.
"""

import logging
from typing import Iterable, Optional

from ..geo.distance import meters_to_miles, nearest_bound_distance
from ..models import Region
from .filters import is_region_usable

logger = logging.getLogger(__name__)


def find_closest_region(
    regions: Iterable[Region],
    lat: Optional[float],
    lon: Optional[float],
    experimental_opt_in: bool = False,
) -> Optional[Region]:
    """
    Get the closest usable region to a location.

    Regions failing is_region_usable() are never returned, even when they
    are geographically closer. On equal distances the region appearing
    first in `regions` wins.

    Args:
        regions: Candidate regions
        lat: Latitude of the location (None if unknown)
        lon: Longitude of the location (None if unknown)
        experimental_opt_in: Whether experimental regions may be returned

    Returns:
        The closest usable region, or None if none could be found
    """
    if lat is None or lon is None:
        return None

    logger.debug("Finding region closest to %s,%s", lat, lon)

    closest = None
    min_dist = float("inf")

    for region in regions:
        if not is_region_usable(region, experimental_opt_in):
            logger.debug("Excluding '%s' from 'closest region' consideration", region.name)
            continue

        dist = nearest_bound_distance(region, lat, lon)
        if dist is None:
            logger.error("Couldn't measure distance to region '%s'", region.name)
            continue

        logger.debug("Region '%s' is %.1f miles away", region.name, meters_to_miles(dist))

        if dist < min_dist:
            closest = region
            min_dist = dist

    return closest
