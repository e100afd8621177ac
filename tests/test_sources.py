"""Tests for the regions server and bundled file sources."""

import json

import httpx
import pytest

from transit_regions.catalog import BundledRegionSource, HttpRegionSource
from transit_regions.exceptions import SourceUnavailableError

from tests.conftest import regions_payload

REGIONS_URL = "http://regions.test/regions-v3.json"


def _source(handler):
    return HttpRegionSource(url=REGIONS_URL, timeout=5.0, transport=httpx.MockTransport(handler))


def test_http_source_parses_response(seattle, tampa):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=regions_payload([tampa, seattle]))

    regions = _source(handler).fetch()
    assert [r.name for r in regions] == ["Tampa", "Puget Sound"]
    assert str(seen[0].url) == REGIONS_URL
    assert seen[0].headers["User-Agent"].startswith("transit-regions/")


def test_http_error_status_raises():
    source = _source(lambda request: httpx.Response(503, text="down for maintenance"))
    with pytest.raises(SourceUnavailableError, match="503"):
        source.fetch()


def test_connection_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailableError):
        _source(handler).fetch()


def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(SourceUnavailableError, match="timed out"):
        _source(handler).fetch()


def test_malformed_body_raises():
    source = _source(lambda request: httpx.Response(200, text="<html></html>"))
    with pytest.raises(SourceUnavailableError):
        source.fetch()


def test_bundled_source_reads_file(bundled_file):
    regions = BundledRegionSource(bundled_file).fetch()
    assert [r.id for r in regions] == [0, 1]


def test_bundled_source_missing_file_raises(tmp_path):
    with pytest.raises(SourceUnavailableError):
        BundledRegionSource(tmp_path / "missing.json").fetch()


def test_bundled_source_default_path_is_packaged_file():
    regions = BundledRegionSource().fetch()
    assert regions
