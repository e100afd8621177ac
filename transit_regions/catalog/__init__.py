"""
Region catalog module.

- filters.py: Region usability predicate
- locator.py: Closest usable region search
- store.py: Durable region store (SQLite)
- sources.py: Regions server and bundled file sources
- manager.py: Tiered refresh of the region catalog
"""

from .filters import is_region_usable
from .locator import find_closest_region
from .store import RegionCatalogStore, SqliteRegionStore
from .sources import RegionSource, HttpRegionSource, BundledRegionSource
from .manager import RegionCatalogManager, RefreshState, CatalogOrigin
