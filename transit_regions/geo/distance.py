"""
Surface Distance

Geodesic distance on the WGS84 ellipsoid (Vincenty inverse formula),
matching what mobile location APIs report for Location.distanceBetween.
"""

import logging
import math
from typing import Optional

from ..config import METERS_TO_MILES
from ..models import Region

logger = logging.getLogger(__name__)

# WGS84 ellipsoid
WGS84_A = 6378137.0
WGS84_B = 6356752.3142
WGS84_F = (WGS84_A - WGS84_B) / WGS84_A

MEAN_EARTH_RADIUS = 6371008.8
MAX_ITERATIONS = 20
CONVERGENCE_THRESHOLD = 1.0e-12


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance on a sphere of mean Earth radius"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return MEAN_EARTH_RADIUS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the surface distance between two points.

    Args:
        lat1: Latitude of the first point (degrees)
        lon1: Longitude of the first point (degrees)
        lat2: Latitude of the second point (degrees)
        lon2: Longitude of the second point (degrees)

    Returns:
        Distance in meters
    """
    a, b, f = WGS84_A, WGS84_B, WGS84_F

    L = math.radians(lon2 - lon1)
    U1 = math.atan((1.0 - f) * math.tan(math.radians(lat1)))
    U2 = math.atan((1.0 - f) * math.tan(math.radians(lat2)))
    sin_u1, cos_u1 = math.sin(U1), math.cos(U1)
    sin_u2, cos_u2 = math.sin(U2), math.cos(U2)

    lam = L
    for _ in range(MAX_ITERATIONS):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sigma = math.sqrt(
            (cos_u2 * sin_lam) ** 2
            + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if sin_sigma == 0.0:
            return 0.0  # coincident points
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1.0 - sin_alpha ** 2
        # Both points on the equator
        cos_2sigma_m = cos_sigma - 2.0 * sin_u1 * sin_u2 / cos_sq_alpha if cos_sq_alpha != 0.0 else 0.0
        C = f / 16.0 * cos_sq_alpha * (4.0 + f * (4.0 - 3.0 * cos_sq_alpha))
        lam_prev = lam
        lam = L + (1.0 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m ** 2))
        )
        if abs(lam - lam_prev) < CONVERGENCE_THRESHOLD:
            break
    else:
        # Nearly antipodal points do not converge
        logger.debug(
            "Vincenty did not converge for (%s,%s)-(%s,%s), using haversine",
            lat1, lon1, lat2, lon2,
        )
        return haversine_meters(lat1, lon1, lat2, lon2)

    u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
    A = 1.0 + u_sq / 16384.0 * (4096.0 + u_sq * (-768.0 + u_sq * (320.0 - 175.0 * u_sq)))
    B = u_sq / 1024.0 * (256.0 + u_sq * (-128.0 + u_sq * (74.0 - 47.0 * u_sq)))
    delta_sigma = B * sin_sigma * (
        cos_2sigma_m + B / 4.0 * (
            cos_sigma * (-1.0 + 2.0 * cos_2sigma_m ** 2)
            - B / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma ** 2) * (-3.0 + 4.0 * cos_2sigma_m ** 2)
        )
    )
    return b * A * (sigma - delta_sigma)


def nearest_bound_distance(region: Region, lat: float, lon: float) -> Optional[float]:
    """
    Distance from a location to the center of the closest bound of a region.

    Args:
        region: The region to measure against
        lat: Latitude of the location
        lon: Longitude of the location

    Returns:
        Distance in meters, or None if the region has no bounds
    """
    if not region.bounds:
        return None
    return min(distance_meters(lat, lon, bound.lat, bound.lon) for bound in region.bounds)


def meters_to_miles(meters: float) -> float:
    """Convert meters to statute miles"""
    return meters * METERS_TO_MILES
