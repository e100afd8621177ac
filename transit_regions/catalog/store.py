"""
Region Catalog Store

Durable storage for the region catalog. The store only offers two
operations: read everything, or atomically replace everything.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..exceptions import StorageError
from ..models import Bounds, Region

logger = logging.getLogger(__name__)


class RegionCatalogStore(ABC):
    """Abstract durable store for the region catalog."""

    @abstractmethod
    def read_all(self) -> Optional[List[Region]]:
        """Return every stored region, or None when the store holds no rows.

        Raises:
            StorageError: If the underlying medium is unavailable
        """

    @abstractmethod
    def replace_all(self, regions: Sequence[Region]) -> None:
        """Delete every stored region and bounds, then insert `regions`, as one unit.

        Raises:
            StorageError: If the underlying medium is unavailable
        """


_SCHEMA = """
CREATE TABLE IF NOT EXISTS regions (
    id INTEGER PRIMARY KEY,
    name TEXT,
    oba_base_url TEXT,
    siri_base_url TEXT,
    language TEXT,
    contact_email TEXT,
    supports_oba_discovery INTEGER NOT NULL DEFAULT 0,
    supports_oba_realtime INTEGER NOT NULL DEFAULT 0,
    supports_siri_realtime INTEGER NOT NULL DEFAULT 0,
    twitter_url TEXT,
    experimental INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS region_bounds (
    region_id INTEGER NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    lat_span REAL NOT NULL,
    lon_span REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_region_bounds_region ON region_bounds(region_id);
"""


class SqliteRegionStore(RegionCatalogStore):
    """SQLite-backed region store.

    Uses a `regions` table keyed by id and a one-to-many `region_bounds`
    table keyed by region_id. replace_all() runs inside a single
    transaction, so readers never see a half-written catalog.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), timeout=10.0)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open region store at {self.db_path}: {e}") from e
        try:
            # Recreates the tables if the database file was removed
            conn.executescript(_SCHEMA)
            return conn
        except sqlite3.Error as e:
            conn.close()
            raise StorageError(f"Cannot open region store at {self.db_path}: {e}") from e

    def _read_bounds(self, conn: sqlite3.Connection) -> Dict[int, List[Bounds]]:
        """Prefetch all bounds, grouped by region id, in a single query."""
        results: Dict[int, List[Bounds]] = {}
        rows = conn.execute(
            "SELECT region_id, latitude, longitude, lat_span, lon_span "
            "FROM region_bounds ORDER BY rowid"
        )
        for region_id, lat, lon, lat_span, lon_span in rows:
            results.setdefault(region_id, []).append(
                Bounds(lat=lat, lon=lon, lat_span=lat_span, lon_span=lon_span)
            )
        return results

    def read_all(self) -> Optional[List[Region]]:
        with closing(self._connect()) as conn:
            try:
                all_bounds = self._read_bounds(conn)
                rows = conn.execute(
                    "SELECT id, name, oba_base_url, siri_base_url, language, contact_email, "
                    "supports_oba_discovery, supports_oba_realtime, supports_siri_realtime, "
                    "twitter_url, experimental FROM regions ORDER BY id"
                ).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to read regions: {e}") from e

        if not rows:
            return None

        results = []
        for row in rows:
            region_id = row[0]
            results.append(Region(
                id=region_id,
                name=row[1],
                # Only usable regions are persisted, so every stored region is active
                active=True,
                oba_base_url=row[2],
                siri_base_url=row[3],
                bounds=tuple(all_bounds.get(region_id, ())),
                language=row[4],
                contact_email=row[5],
                supports_oba_discovery_apis=row[6] > 0,
                supports_oba_realtime_apis=row[7] > 0,
                supports_siri_realtime_apis=row[8] > 0,
                twitter_url=row[9],
                experimental=row[10] > 0,
            ))
        return results

    def replace_all(self, regions: Sequence[Region]) -> None:
        with closing(self._connect()) as conn:
            try:
                # `with conn` commits on success and rolls back on any error
                with conn:
                    conn.execute("DELETE FROM regions")
                    conn.execute("DELETE FROM region_bounds")
                    for region in regions:
                        conn.execute(
                            "INSERT INTO regions (id, name, oba_base_url, siri_base_url, language, "
                            "contact_email, supports_oba_discovery, supports_oba_realtime, "
                            "supports_siri_realtime, twitter_url, experimental) "
                            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                            _region_row(region),
                        )
                        if region.bounds:
                            conn.executemany(
                                "INSERT INTO region_bounds (region_id, latitude, longitude, "
                                "lat_span, lon_span) VALUES (?, ?, ?, ?, ?)",
                                [_bounds_row(region.id, b) for b in region.bounds],
                            )
                        logger.debug("Saved region '%s' to store", region.name)
            except sqlite3.Error as e:
                raise StorageError(f"Failed to replace regions: {e}") from e


def _region_row(region: Region) -> tuple:
    return (
        region.id,
        region.name,
        region.oba_base_url or "",
        region.siri_base_url or "",
        region.language,
        region.contact_email,
        1 if region.supports_oba_discovery_apis else 0,
        1 if region.supports_oba_realtime_apis else 0,
        1 if region.supports_siri_realtime_apis else 0,
        region.twitter_url,
        1 if region.experimental else 0,
    )


def _bounds_row(region_id: int, bounds: Bounds) -> tuple:
    return (region_id, bounds.lat, bounds.lon, bounds.lat_span, bounds.lon_span)
