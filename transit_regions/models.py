"""
Region data model.

Regions are immutable once built: a refresh replaces the whole catalog
rather than mutating individual regions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Bounds:
    """One rectangular coverage patch of a region (center + span, in degrees)"""
    lat: float
    lon: float
    lat_span: float
    lon_span: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "latSpan": self.lat_span,
            "lonSpan": self.lon_span,
        }


@dataclass(frozen=True)
class RegionSpan:
    """Bounding box covering every Bounds of a region.

    Attributes:
        lat_span: Height of the box in degrees.
        lon_span: Width of the box in degrees.
        lat_center: Latitude of the box center.
        lon_center: Longitude of the box center.
    """
    lat_span: Optional[float]
    lon_span: Optional[float]
    lat_center: Optional[float]
    lon_center: Optional[float]

    @property
    def lat_min(self) -> float:
        return self.lat_center - self.lat_span / 2

    @property
    def lat_max(self) -> float:
        return self.lat_center + self.lat_span / 2

    @property
    def lon_min(self) -> float:
        return self.lon_center - self.lon_span / 2

    @property
    def lon_max(self) -> float:
        return self.lon_center + self.lon_span / 2

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "latSpan": self.lat_span,
            "lonSpan": self.lon_span,
            "latCenter": self.lat_center,
            "lonCenter": self.lon_center,
        }


@dataclass(frozen=True)
class Region:
    """A transit-data service area and the API capabilities it offers.

    Attributes:
        id: Stable region identifier.
        name: Display name.
        oba_base_url: Base URL of the primary (OneBusAway) API.
        siri_base_url: Base URL of the SIRI realtime API.
        language: Region language code.
        contact_email: Contact address for the region's operators.
        supports_oba_discovery_apis: Region offers the discovery APIs.
        supports_oba_realtime_apis: Region offers the realtime APIs.
        supports_siri_realtime_apis: Region offers the secondary (SIRI) realtime API.
        twitter_url: Social-media URL.
        active: Region is currently in service.
        experimental: Region is only shown to users who opted in.
        bounds: Coverage patches; may be empty for malformed data.
    """
    id: int
    name: str
    oba_base_url: Optional[str] = None
    siri_base_url: Optional[str] = None
    language: Optional[str] = None
    contact_email: Optional[str] = None
    supports_oba_discovery_apis: bool = False
    supports_oba_realtime_apis: bool = False
    supports_siri_realtime_apis: bool = False
    twitter_url: Optional[str] = None
    active: bool = True
    experimental: bool = False
    bounds: Tuple[Bounds, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Return the region in the regions-v3 wire layout."""
        return {
            "id": self.id,
            "regionName": self.name,
            "obaBaseUrl": self.oba_base_url,
            "siriBaseUrl": self.siri_base_url,
            "language": self.language,
            "contactEmail": self.contact_email,
            "supportsObaDiscoveryApis": self.supports_oba_discovery_apis,
            "supportsObaRealtimeApis": self.supports_oba_realtime_apis,
            "supportsSiriRealtimeApis": self.supports_siri_realtime_apis,
            "twitterUrl": self.twitter_url,
            "active": self.active,
            "experimental": self.experimental,
            "bounds": [b.to_dict() for b in self.bounds],
        }

    def __repr__(self):
        return f"<Region {self.id}: '{self.name}' ({len(self.bounds)} bounds)>"
