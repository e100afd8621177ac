"""
FastAPI Server for the transit region resolver

Provides API endpoints for:
- Listing the region catalog
- Finding the closest usable region to a location
- Region span and containment checks
"""

import logging
from threading import Lock
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .exceptions import CatalogUnavailableError, InvalidArgumentError
from .models import Region, RegionSpan
from .resolver import RegionResolver

logger = logging.getLogger(__name__)


# FastAPI app
app = FastAPI(title="Transit Regions API")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Response Models
class BoundsModel(BaseModel):
    lat: float
    lon: float
    latSpan: float
    lonSpan: float


class RegionModel(BaseModel):
    id: int
    regionName: str
    obaBaseUrl: Optional[str] = None
    siriBaseUrl: Optional[str] = None
    language: Optional[str] = None
    contactEmail: Optional[str] = None
    supportsObaDiscoveryApis: bool
    supportsObaRealtimeApis: bool
    supportsSiriRealtimeApis: bool
    twitterUrl: Optional[str] = None
    active: bool
    experimental: bool
    bounds: List[BoundsModel]


class RegionsResponse(BaseModel):
    count: int
    origin: Optional[str] = None
    lastUpdateTime: Optional[float] = None
    regions: List[RegionModel]


class ClosestRegionResponse(BaseModel):
    found: bool
    region: Optional[RegionModel] = None


class SpanModel(BaseModel):
    latSpan: float
    lonSpan: float
    latCenter: float
    lonCenter: float


class ContainsResponse(BaseModel):
    regionId: int
    lat: float
    lon: float
    contains: bool


# Resolver dependency
_resolver: Optional[RegionResolver] = None
_resolver_lock = Lock()


def get_resolver() -> RegionResolver:
    """Return the process-wide resolver, creating it on first use."""
    global _resolver
    with _resolver_lock:
        if _resolver is None:
            _resolver = RegionResolver()
        return _resolver


# Helper Functions
def region_to_model(region: Region) -> RegionModel:
    return RegionModel(**region.to_dict())


def span_to_model(span: RegionSpan) -> SpanModel:
    return SpanModel(**span.to_dict())


def load_regions(resolver: RegionResolver, force_reload: bool = False) -> List[Region]:
    try:
        return resolver.regions(force_reload=force_reload)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


def lookup_region(resolver: RegionResolver, region_id: int) -> Region:
    load_regions(resolver)
    region = resolver.region_by_id(region_id)
    if region is None:
        raise HTTPException(status_code=404, detail=f"Unknown region id: {region_id}")
    return region


# API Endpoints
# Endpoints are plain `def` so FastAPI runs the blocking refresh in its thread pool.
@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/regions", response_model=RegionsResponse)
def list_regions(
    refresh: bool = False,
    resolver: RegionResolver = Depends(get_resolver),
):
    """Return the region catalog, optionally forcing a reload from the server."""
    regions = load_regions(resolver, force_reload=refresh)
    origin = resolver.manager.origin
    return RegionsResponse(
        count=len(regions),
        origin=origin.value if origin else None,
        lastUpdateTime=resolver.last_update_time,
        regions=[region_to_model(r) for r in regions],
    )


@app.get("/api/regions/closest", response_model=ClosestRegionResponse)
def closest_region(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    resolver: RegionResolver = Depends(get_resolver),
):
    """Return the closest usable region to a location."""
    load_regions(resolver)
    region = resolver.closest_region(lat, lon)
    if region is None:
        return ClosestRegionResponse(found=False)
    return ClosestRegionResponse(found=True, region=region_to_model(region))


@app.get("/api/regions/{region_id}", response_model=RegionModel)
def get_region(region_id: int, resolver: RegionResolver = Depends(get_resolver)):
    """Return a single region."""
    return region_to_model(lookup_region(resolver, region_id))


@app.get("/api/regions/{region_id}/span", response_model=SpanModel)
def get_region_span(region_id: int, resolver: RegionResolver = Depends(get_resolver)):
    """Return the bounding box covering all bounds of a region."""
    lookup_region(resolver, region_id)
    try:
        return span_to_model(resolver.region_span(region_id))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/regions/{region_id}/contains", response_model=ContainsResponse)
def region_contains(
    region_id: int,
    lat: float,
    lon: float,
    resolver: RegionResolver = Depends(get_resolver),
):
    """Check if a location lies within a region's span."""
    lookup_region(resolver, region_id)
    try:
        inside = resolver.contains(region_id, lat, lon)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ContainsResponse(regionId=region_id, lat=lat, lon=lon, contains=inside)


def run_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    resolver: Optional[RegionResolver] = None,
):
    """Run the API server.

    Host and port default to the resolver's RegionsConfig.server_host / server_port.
    """
    global _resolver
    import uvicorn

    if resolver is not None:
        _resolver = resolver
    resolver = get_resolver()
    host = host or resolver.config.server_host
    port = port or resolver.config.server_port
    logger.info("Serving transit regions API on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port)
