"""
Region Catalog Manager

Keeps the region catalog consistent across three origins, in order of
preference: the regions server, the local store, and the bundled file.

Refresh algorithm:
1. Unless a reload is forced, a non-empty store is returned as-is (no network).
2. Otherwise fetch from the server. A non-empty result updates the
   last-update time and is committed to the store.
3. If the server fails: a forced reload gets a second chance at the store
   (returned without re-committing), then the bundled file is tried and
   committed. If that fails too, CatalogUnavailableError is raised.

Anything obtained from the server or the bundled file is persisted before
being returned, so later non-forced calls are cheap store hits.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from threading import Lock
from typing import Callable, List, Optional, Sequence, Union

from ..exceptions import CatalogUnavailableError, SourceUnavailableError, StorageError
from ..models import Region
from .filters import is_region_usable
from .sources import RegionSource
from .store import RegionCatalogStore

logger = logging.getLogger(__name__)


class RefreshState(Enum):
    IDLE = "idle"
    READING_STORE = "reading_store"
    FETCHING_REMOTE = "fetching_remote"
    READING_STORE_FALLBACK = "reading_store_fallback"
    FETCHING_BUNDLED = "fetching_bundled"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


class CatalogOrigin(Enum):
    STORE = "store"
    REMOTE = "remote"
    BUNDLED = "bundled"


class RegionCatalogManager:
    """Resolves the authoritative region catalog.

    At most one refresh or save runs at a time: resolve_catalog() and
    save() share one lock, so a concurrent reader waits for an in-flight
    refresh instead of seeing a half-committed catalog.

    Args:
        store: Durable region store.
        remote: Source for the regions server.
        bundled: Source for the bundled regions file (None to disable).
        experimental_opt_in: Bool, or a getter returning the experimental-regions preference.
        clock: Callable returning the current time in epoch seconds.
    """

    def __init__(
        self,
        store: RegionCatalogStore,
        remote: RegionSource,
        bundled: Optional[RegionSource] = None,
        experimental_opt_in: Union[bool, Callable[[], bool]] = False,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.remote = remote
        self.bundled = bundled
        self._experimental_opt_in = experimental_opt_in
        self._clock = clock
        self._lock = Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

        self.state = RefreshState.IDLE
        self.catalog: Optional[List[Region]] = None
        self.origin: Optional[CatalogOrigin] = None
        # Time of the last successful server fetch, written only by resolve_catalog()
        self.last_update_time: Optional[float] = None

    @property
    def experimental_opt_in(self) -> bool:
        if callable(self._experimental_opt_in):
            return bool(self._experimental_opt_in())
        return bool(self._experimental_opt_in)

    def is_usable(self, region: Region) -> bool:
        """Usability predicate bound to the current experimental opt-in."""
        return is_region_usable(region, self.experimental_opt_in)

    # =========================================================================
    # Tier helpers
    # =========================================================================

    def _read_store(self) -> Optional[List[Region]]:
        try:
            results = self.store.read_all()
        except StorageError as e:
            logger.warning("Could not read regions from store: %s", e)
            return None
        if not results:
            logger.debug("Regions list retrieved from store was empty.")
            return None
        return results

    def _fetch(self, source: Optional[RegionSource]) -> Optional[List[Region]]:
        if source is None:
            return None
        try:
            results = source.fetch()
        except SourceUnavailableError as e:
            logger.warning("Could not fetch regions from %s: %s", source.name, e)
            return None
        if not results:
            logger.debug("Regions list retrieved from %s was empty.", source.name)
            return None
        return results

    def _finish(self, results: List[Region], origin: CatalogOrigin) -> List[Region]:
        self.catalog = results
        self.origin = origin
        self.state = RefreshState.DONE
        return results

    # =========================================================================
    # Public API
    # =========================================================================

    def resolve_catalog(self, force_reload: bool = False) -> List[Region]:
        """
        Get regions from the server, the local store, or the bundled file.

        Args:
            force_reload: Skip the initial store read and go to the server first

        Returns:
            List of regions

        Raises:
            CatalogUnavailableError: If no source produced a catalog
        """
        with self._lock:
            if not force_reload:
                self.state = RefreshState.READING_STORE
                results = self._read_store()
                if results:
                    logger.debug("Retrieved %d regions from store.", len(results))
                    return self._finish(results, CatalogOrigin.STORE)

            self.state = RefreshState.FETCHING_REMOTE
            results = self._fetch(self.remote)
            if results:
                logger.debug("Retrieved %d regions from server.", len(results))
                self.last_update_time = self._clock()
                origin = CatalogOrigin.REMOTE
            else:
                if force_reload:
                    # The store was skipped above, so try it before the bundled file
                    self.state = RefreshState.READING_STORE_FALLBACK
                    results = self._read_store()
                    if results:
                        logger.debug("Retrieved %d regions from store.", len(results))
                        return self._finish(results, CatalogOrigin.STORE)

                self.state = RefreshState.FETCHING_BUNDLED
                results = self._fetch(self.bundled)
                if not results:
                    self.state = RefreshState.FAILED
                    logger.error("Could not load regions from the server, store, or bundled file.")
                    raise CatalogUnavailableError(
                        "No region catalog available from the server, the local store, or the bundled file"
                    )
                logger.debug("Retrieved %d regions from bundled file.", len(results))
                origin = CatalogOrigin.BUNDLED

            self.state = RefreshState.COMMITTING
            try:
                self._save(results)
            except StorageError as e:
                # The caller can still operate; the next call retries the commit
                logger.warning("Could not save regions to store: %s", e)
            return self._finish(results, origin)

    def _save(self, regions: Sequence[Region]):
        usable = []
        for region in regions:
            if not self.is_usable(region):
                logger.debug("Skipping insert of '%s' to store...", region.name)
                continue
            usable.append(region)
        self.store.replace_all(usable)

    def save(self, regions: Sequence[Region]):
        """
        Replace the stored catalog with the usable subset of `regions`.

        Raises:
            StorageError: If the store cannot be written
        """
        with self._lock:
            self._save(regions)

    def submit_resolve(self, force_reload: bool = False) -> "Future[List[Region]]":
        """Run resolve_catalog() on a background worker and return its Future."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="region-refresh")
        return self._executor.submit(self.resolve_catalog, force_reload)

    def shutdown(self):
        """Release the background worker, waiting for an in-flight refresh."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
