"""Tests for geodesic distance, region span, and containment."""

import pytest

from transit_regions.exceptions import InvalidArgumentError
from transit_regions.geo import (
    contains_point,
    distance_meters,
    is_location_within_region,
    meters_to_miles,
    nearest_bound_distance,
    region_span,
)
from transit_regions.models import Bounds, RegionSpan

from tests.conftest import make_region


class TestDistanceMeters:
    def test_coincident_points(self):
        assert distance_meters(47.6, -122.3, 47.6, -122.3) == 0.0

    def test_one_degree_of_latitude_at_equator(self):
        assert distance_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(110574.389, abs=1.0)

    def test_one_degree_of_longitude_on_equator(self):
        assert distance_meters(0.0, 0.0, 0.0, 1.0) == pytest.approx(111319.491, abs=1.0)

    def test_symmetric(self):
        d1 = distance_meters(47.6097, -122.3331, 27.9506, -82.4572)
        d2 = distance_meters(27.9506, -82.4572, 47.6097, -122.3331)
        assert d1 == pytest.approx(d2, abs=1e-6)

    def test_seattle_to_tampa(self):
        # ~4,070 km between downtown Seattle and downtown Tampa
        d = distance_meters(47.6097, -122.3331, 27.9506, -82.4572)
        assert 4_000_000 < d < 4_150_000

    def test_antipodal_points_do_not_fail(self):
        d = distance_meters(0.0, 0.0, 0.5, 179.7)
        assert 19_500_000 < d < 20_100_000


class TestNearestBoundDistance:
    def test_no_bounds_returns_none(self):
        region = make_region(bounds=[])
        assert nearest_bound_distance(region, 47.6, -122.3) is None

    def test_minimum_over_bounds(self):
        near = Bounds(lat=47.6, lon=-122.3, lat_span=0.1, lon_span=0.1)
        far = Bounds(lat=45.5, lon=-122.7, lat_span=0.1, lon_span=0.1)
        region = make_region(bounds=[far, near])
        assert nearest_bound_distance(region, 47.6, -122.3) == 0.0

    def test_meters_to_miles(self):
        assert meters_to_miles(1609.344) == pytest.approx(1.0, abs=1e-3)


class TestRegionSpan:
    def test_single_bounds(self):
        region = make_region(bounds=[Bounds(lat=10.0, lon=20.0, lat_span=2.0, lon_span=4.0)])
        span = region_span(region)
        assert span.lat_span == pytest.approx(2.0)
        assert span.lon_span == pytest.approx(4.0)
        assert span.lat_center == pytest.approx(10.0)
        assert span.lon_center == pytest.approx(20.0)

    def test_union_of_disjoint_bounds(self):
        region = make_region(bounds=[
            Bounds(lat=0.0, lon=0.0, lat_span=2.0, lon_span=2.0),
            Bounds(lat=10.0, lon=10.0, lat_span=2.0, lon_span=2.0),
        ])
        span = region_span(region)
        # Box from (-1, -1) to (11, 11), not a weighted centroid
        assert span.lat_span == pytest.approx(12.0)
        assert span.lon_span == pytest.approx(12.0)
        assert span.lat_center == pytest.approx(5.0)
        assert span.lon_center == pytest.approx(5.0)

    def test_center_within_extent(self, seattle, tampa, atlanta_experimental):
        for region in (seattle, tampa, atlanta_experimental):
            span = region_span(region)
            assert span.lat_min <= span.lat_center <= span.lat_max
            assert span.lon_min <= span.lon_center <= span.lon_max

    def test_none_region_raises(self):
        with pytest.raises(InvalidArgumentError):
            region_span(None)

    def test_no_bounds_raises(self):
        with pytest.raises(InvalidArgumentError):
            region_span(make_region(bounds=[]))

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            region_span(None)


class TestContainsPoint:
    def test_own_center_is_contained(self, seattle, tampa, atlanta_experimental):
        for region in (seattle, tampa, atlanta_experimental):
            span = region_span(region)
            assert contains_point(span, span.lat_center, span.lon_center)

    def test_edges_are_inclusive(self):
        span = RegionSpan(lat_span=2.0, lon_span=2.0, lat_center=0.0, lon_center=0.0)
        assert contains_point(span, 1.0, 1.0)
        assert contains_point(span, -1.0, -1.0)

    def test_outside(self):
        span = RegionSpan(lat_span=2.0, lon_span=2.0, lat_center=0.0, lon_center=0.0)
        assert not contains_point(span, 1.5, 0.0)
        assert not contains_point(span, 0.0, -1.5)

    def test_missing_span_fields_raise(self):
        with pytest.raises(InvalidArgumentError):
            contains_point(None, 0.0, 0.0)
        with pytest.raises(InvalidArgumentError):
            contains_point(RegionSpan(None, 1.0, 0.0, 0.0), 0.0, 0.0)

    @pytest.mark.parametrize("lat,lon", [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.1), (0.0, -180.1), (None, 0.0)])
    def test_invalid_location_raises(self, lat, lon):
        span = RegionSpan(lat_span=2.0, lon_span=2.0, lat_center=0.0, lon_center=0.0)
        with pytest.raises(InvalidArgumentError):
            contains_point(span, lat, lon)

    def test_date_line_is_not_wrapped(self):
        # A span straddling +180 does not wrap around to -180
        region = make_region(bounds=[Bounds(lat=0.0, lon=179.9, lat_span=1.0, lon_span=0.4)])
        assert is_location_within_region(0.0, 179.95, region)
        assert not is_location_within_region(0.0, -179.95, region)

    def test_location_within_region(self, seattle):
        assert is_location_within_region(47.6097, -122.3331, seattle)
        assert not is_location_within_region(27.9506, -82.4572, seattle)
