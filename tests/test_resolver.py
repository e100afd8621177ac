"""Tests for the RegionResolver facade and its configuration."""

import importlib

import pytest

from transit_regions import RegionResolver, RegionsConfig, config as config_module
from transit_regions.exceptions import ConfigurationError, InvalidArgumentError

from tests.conftest import make_region


@pytest.fixture
def resolver(sqlite_store, mock_remote, mock_bundled, three_regions):
    mock_remote.fetch.return_value = three_regions
    with RegionResolver(
        config=RegionsConfig(experimental_regions=False),
        store=sqlite_store,
        remote=mock_remote,
        bundled=mock_bundled,
    ) as r:
        yield r


class TestRegionResolver:
    def test_regions_loaded_once(self, resolver, mock_remote, three_regions):
        assert resolver.regions() == three_regions
        assert resolver.regions() == three_regions
        mock_remote.fetch.assert_called_once()
        assert resolver.last_update_time is not None

    def test_force_reload_goes_back_to_server(self, resolver, mock_remote):
        resolver.regions()
        resolver.regions(force_reload=True)
        assert mock_remote.fetch.call_count == 2

    def test_closest_region(self, resolver, seattle):
        assert resolver.closest_region(47.6097, -122.3331) == seattle

    def test_closest_region_respects_opt_in(self, sqlite_store, mock_remote, mock_bundled, three_regions, atlanta_experimental):
        mock_remote.fetch.return_value = three_regions
        resolver = RegionResolver(
            config=RegionsConfig(experimental_regions=True),
            store=sqlite_store,
            remote=mock_remote,
            bundled=mock_bundled,
        )
        assert resolver.closest_region(33.749, -84.388) == atlanta_experimental

    def test_closest_region_unknown_location(self, resolver):
        assert resolver.closest_region(None, None) is None

    def test_region_lookup_and_span(self, resolver, tampa):
        assert resolver.region_by_id(0) == tampa
        assert resolver.region_by_id(404) is None
        span = resolver.region_span(0)
        assert span.lat_center == pytest.approx(tampa.bounds[0].lat)
        assert resolver.region_span(404) is None

    def test_contains(self, resolver):
        assert resolver.contains(1, 47.6097, -122.3331) is True
        assert resolver.contains(1, 27.9506, -82.4572) is False
        assert resolver.contains(404, 0.0, 0.0) is None
        with pytest.raises(InvalidArgumentError):
            resolver.contains(1, 95.0, 0.0)


class TestRegionsConfig:
    def test_env_vars_are_used(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRANSIT_REGIONS_URL", "http://regions.test/v3.json")
        monkeypatch.setenv("TRANSIT_REGIONS_DB", str(tmp_path / "env.db"))
        monkeypatch.setenv("TRANSIT_REGIONS_EXPERIMENTAL", "yes")
        monkeypatch.setenv("TRANSIT_REGIONS_TIMEOUT", "12.5")

        config = RegionsConfig()
        assert config.regions_url == "http://regions.test/v3.json"
        assert config.database_path == tmp_path / "env.db"
        assert config.experimental_opt_in() is True
        assert config.request_timeout == 12.5

    def test_explicit_args_beat_env(self, monkeypatch):
        monkeypatch.setenv("TRANSIT_REGIONS_URL", "http://regions.test/v3.json")
        monkeypatch.setenv("TRANSIT_REGIONS_EXPERIMENTAL", "1")
        config = RegionsConfig(regions_url="http://other.test/", experimental_regions=False)
        assert config.regions_url == "http://other.test/"
        assert config.experimental_opt_in() is False

    @pytest.mark.parametrize("kwargs", [
        {"request_timeout": 0},
        {"request_timeout": -1.0},
        {"server_port": 0},
        {"server_port": 70000},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ConfigurationError):
            RegionsConfig(**kwargs)

    def test_unparseable_timeout_env_raises(self, monkeypatch):
        monkeypatch.setenv("TRANSIT_REGIONS_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            RegionsConfig()

    def test_unparseable_timeout_env_does_not_break_import(self, monkeypatch):
        monkeypatch.setenv("TRANSIT_REGIONS_TIMEOUT", "soon")
        try:
            reloaded = importlib.reload(config_module)
            assert reloaded.REQUEST_TIMEOUT == reloaded.DEFAULT_REQUEST_TIMEOUT
            with pytest.raises(ConfigurationError):
                RegionsConfig()
        finally:
            monkeypatch.delenv("TRANSIT_REGIONS_TIMEOUT")
            importlib.reload(config_module)
