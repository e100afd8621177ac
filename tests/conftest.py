"""
Shared test fixtures for transit_regions tests.

- Region factories with sensible usable defaults
- regions-v3 payload builders
- Temporary stores and bundled files
"""

import json
from unittest.mock import Mock

import pytest

from transit_regions.catalog import RegionCatalogStore, RegionSource, SqliteRegionStore
from transit_regions.models import Bounds, Region


def make_region(
    region_id=1,
    name=None,
    bounds=None,
    active=True,
    discovery=True,
    realtime=True,
    experimental=False,
    **kwargs,
):
    """Build a usable region centered on (lat, lon) pairs given as bounds."""
    if bounds is None:
        bounds = [Bounds(lat=47.6, lon=-122.3, lat_span=0.5, lon_span=0.5)]
    return Region(
        id=region_id,
        name=name or f"Region {region_id}",
        oba_base_url=kwargs.pop("oba_base_url", f"http://api.region{region_id}.example.org/"),
        active=active,
        supports_oba_discovery_apis=discovery,
        supports_oba_realtime_apis=realtime,
        experimental=experimental,
        bounds=tuple(bounds),
        **kwargs,
    )


def region_json(region: Region) -> dict:
    return region.to_dict()


def regions_payload(regions, code=200) -> dict:
    return {"code": code, "version": 3, "data": {"list": [region_json(r) for r in regions]}}


# ============================================================================
# REGION FIXTURES
# ============================================================================


@pytest.fixture
def seattle():
    return make_region(
        1, "Puget Sound",
        bounds=[
            Bounds(lat=47.221315, lon=-122.4051325, lat_span=0.33704, lon_span=0.440483),
            Bounds(lat=47.5607395, lon=-122.1462785, lat_span=0.743251, lon_span=0.720901),
        ],
        language="en_US",
        contact_email="puget_sound@onebusaway.org",
    )


@pytest.fixture
def tampa():
    return make_region(
        0, "Tampa",
        bounds=[Bounds(lat=27.9769105, lon=-82.445851, lat_span=0.542461, lon_span=0.576358)],
    )


@pytest.fixture
def atlanta_experimental():
    return make_region(
        3, "Atlanta",
        bounds=[Bounds(lat=33.79018, lon=-84.394832, lat_span=0.51837, lon_span=0.518627)],
        experimental=True,
    )


@pytest.fixture
def three_regions(seattle, tampa, atlanta_experimental):
    return [tampa, seattle, atlanta_experimental]


# ============================================================================
# COLLABORATOR FIXTURES
# ============================================================================


@pytest.fixture
def mock_store():
    store = Mock(spec=RegionCatalogStore)
    store.read_all.return_value = None
    return store


@pytest.fixture
def mock_remote():
    source = Mock(spec=RegionSource)
    source.name = "server"
    return source


@pytest.fixture
def mock_bundled():
    source = Mock(spec=RegionSource)
    source.name = "bundled file"
    return source


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteRegionStore(tmp_path / "regions.db")


@pytest.fixture
def bundled_file(tmp_path, tampa, seattle):
    path = tmp_path / "regions_v3.json"
    path.write_text(json.dumps(regions_payload([tampa, seattle])), encoding="utf-8")
    return path
