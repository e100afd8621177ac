"""
Transit Region Resolver

Finds the transit region serving a location and keeps a local copy of
the region catalog, falling back from the regions server to the local
store to the regions file bundled with the package.

Quick start (library usage):
    from transit_regions import RegionResolver

    with RegionResolver() as resolver:
        region = resolver.closest_region(47.6097, -122.3331)
        print(region.name if region else "no region here")

Or use the lower-level functions directly:
    from transit_regions import find_closest_region, region_span, contains_point
"""

from .catalog import (
    BundledRegionSource,
    HttpRegionSource,
    RegionCatalogManager,
    RegionCatalogStore,
    RegionSource,
    SqliteRegionStore,
    find_closest_region,
    is_region_usable,
)
from .config_manager import RegionsConfig
from .exceptions import (
    CatalogUnavailableError,
    ConfigurationError,
    InvalidArgumentError,
    RegionsError,
    SourceUnavailableError,
    StorageError,
)
from .geo import contains_point, distance_meters, is_location_within_region, nearest_bound_distance, region_span
from .models import Bounds, Region, RegionSpan
from .resolver import RegionResolver

__version__ = "1.0.0"
__all__ = [
    "RegionResolver",
    "RegionsConfig",
    "Region",
    "Bounds",
    "RegionSpan",
    "RegionCatalogManager",
    "RegionCatalogStore",
    "SqliteRegionStore",
    "RegionSource",
    "HttpRegionSource",
    "BundledRegionSource",
    "find_closest_region",
    "is_region_usable",
    "distance_meters",
    "nearest_bound_distance",
    "region_span",
    "contains_point",
    "is_location_within_region",
    "RegionsError",
    "InvalidArgumentError",
    "StorageError",
    "SourceUnavailableError",
    "CatalogUnavailableError",
    "ConfigurationError",
]
