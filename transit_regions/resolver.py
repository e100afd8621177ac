"""
RegionResolver - High-level API for transit region lookup.

Wires configuration, the local store, the region sources, and the
catalog manager together behind a small set of methods.

Usage:
    from transit_regions import RegionResolver

    with RegionResolver() as resolver:
        region = resolver.closest_region(47.6097, -122.3331)
        if region is not None:
            print(region.name, region.oba_base_url)
"""

from pathlib import Path
from typing import List, Optional, Union

from .catalog import (
    BundledRegionSource,
    HttpRegionSource,
    RegionCatalogManager,
    RegionCatalogStore,
    RegionSource,
    SqliteRegionStore,
    find_closest_region,
)
from .config_manager import RegionsConfig
from .geo import contains_point, region_span
from .models import Region, RegionSpan


class RegionResolver:
    """High-level interface for region discovery.

    Note: the catalog is loaded lazily on the first call that needs it
    and kept in memory; pass force_reload=True to go back to the server.

    Args:
        regions_url: Regions API URL (falls back to TRANSIT_REGIONS_URL).
        database_path: SQLite store path (falls back to TRANSIT_REGIONS_DB).
        bundled_path: Bundled regions file (falls back to the packaged file).
        experimental: Whether experimental regions are usable.
        timeout: Regions API request timeout in seconds.
        proxy: Optional proxy URL for the regions API.
        config: A prebuilt RegionsConfig; overrides the arguments above.
        store: Custom store (overrides database_path).
        remote: Custom server source (overrides regions_url).
        bundled: Custom bundled source (overrides bundled_path).

    Example:
        with RegionResolver(experimental=True) as resolver:
            for region in resolver.regions():
                print(region.id, region.name)
    """

    def __init__(
        self,
        regions_url: Optional[str] = None,
        database_path: Optional[Union[str, Path]] = None,
        bundled_path: Optional[Union[str, Path]] = None,
        experimental: Optional[bool] = None,
        timeout: Optional[float] = None,
        proxy: Optional[str] = None,
        config: Optional[RegionsConfig] = None,
        store: Optional[RegionCatalogStore] = None,
        remote: Optional[RegionSource] = None,
        bundled: Optional[RegionSource] = None,
    ):
        self.config = config or RegionsConfig(
            regions_url=regions_url,
            database_path=database_path,
            bundled_path=bundled_path,
            experimental_regions=experimental,
            request_timeout=timeout,
            proxy_url=proxy,
        )
        self.manager = RegionCatalogManager(
            store=store or SqliteRegionStore(self.config.database_path),
            remote=remote or HttpRegionSource(
                url=self.config.regions_url,
                timeout=self.config.request_timeout,
                proxy=self.config.proxy_url,
            ),
            bundled=bundled or BundledRegionSource(self.config.bundled_path),
            experimental_opt_in=self.config.experimental_opt_in,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Stop the background refresh worker, if one was started."""
        self.manager.shutdown()

    @property
    def last_update_time(self) -> Optional[float]:
        return self.manager.last_update_time

    def regions(self, force_reload: bool = False) -> List[Region]:
        """Return the region catalog, loading it if needed.

        Raises:
            CatalogUnavailableError: If no source produced a catalog
        """
        if force_reload or self.manager.catalog is None:
            return self.manager.resolve_catalog(force_reload=force_reload)
        return self.manager.catalog

    def closest_region(
        self,
        lat: Optional[float],
        lon: Optional[float],
        force_reload: bool = False,
    ) -> Optional[Region]:
        """Return the closest usable region to a location, or None."""
        return find_closest_region(
            self.regions(force_reload),
            lat,
            lon,
            experimental_opt_in=self.manager.experimental_opt_in,
        )

    def region_by_id(self, region_id: int) -> Optional[Region]:
        """Return the region with the given id, or None."""
        for region in self.regions():
            if region.id == region_id:
                return region
        return None

    def region_span(self, region_id: int) -> Optional[RegionSpan]:
        """Return the span of a region, or None if the id is unknown.

        Raises:
            InvalidArgumentError: If the region has no bounds
        """
        region = self.region_by_id(region_id)
        if region is None:
            return None
        return region_span(region)

    def contains(self, region_id: int, lat: float, lon: float) -> Optional[bool]:
        """Check if a location is within a region's span; None if the id is unknown.

        Raises:
            InvalidArgumentError: If the region has no bounds or the location is invalid
        """
        span = self.region_span(region_id)
        if span is None:
            return None
        return contains_point(span, lat, lon)
