"""
Geographic utilities module.

- distance.py: Geodesic distance and nearest-bound distance
- span.py: Region span aggregation and point containment
"""

from .distance import distance_meters, nearest_bound_distance, meters_to_miles, haversine_meters
from .span import region_span, contains_point, is_location_within_region
