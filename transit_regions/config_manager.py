"""
Configuration manager for library usage.

Provides a single configuration object that resolves each setting from
an explicit argument, then the TRANSIT_REGIONS_* environment variables,
then the defaults in config.py.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from . import config
from .exceptions import ConfigurationError


@dataclass
class RegionsConfig:
    """Configuration for RegionResolver.

    Args:
        regions_url: URL of the regions REST API.
                     If None, falls back to TRANSIT_REGIONS_URL, then config.py default.
        database_path: Path of the SQLite region store.
                       If None, falls back to TRANSIT_REGIONS_DB, then ~/.transit_regions/regions.db.
        bundled_path: Path of the bundled fallback regions file.
        experimental_regions: Whether the user opted in to experimental regions.
                              If None, falls back to TRANSIT_REGIONS_EXPERIMENTAL.
        request_timeout: Timeout for the regions API request (seconds).
        proxy_url: Optional proxy URL for the regions API request.
        server_host: Host for the HTTP server.
        server_port: Port for the HTTP server.
    """

    regions_url: Optional[str] = None
    database_path: Optional[Union[str, Path]] = None
    bundled_path: Optional[Union[str, Path]] = None
    experimental_regions: Optional[bool] = None
    request_timeout: Optional[float] = None
    proxy_url: Optional[str] = None
    server_host: str = config.API_HOST
    server_port: int = config.API_PORT

    def __post_init__(self):
        """Resolve unset values from env vars, then defaults, and validate."""
        if self.regions_url is None:
            self.regions_url = os.environ.get("TRANSIT_REGIONS_URL", config.REGIONS_URL)

        if self.database_path is None:
            self.database_path = os.environ.get("TRANSIT_REGIONS_DB", config.DATABASE_PATH)
        self.database_path = Path(self.database_path).expanduser()

        if self.bundled_path is None:
            self.bundled_path = os.environ.get("TRANSIT_REGIONS_BUNDLED", config.BUNDLED_PATH)
        self.bundled_path = Path(self.bundled_path).expanduser()

        if self.experimental_regions is None:
            self.experimental_regions = config.env_flag(
                "TRANSIT_REGIONS_EXPERIMENTAL", config.EXPERIMENTAL_REGIONS
            )

        if self.request_timeout is None:
            raw = os.environ.get("TRANSIT_REGIONS_TIMEOUT")
            try:
                self.request_timeout = float(raw) if raw else config.REQUEST_TIMEOUT
            except ValueError:
                raise ConfigurationError(f"TRANSIT_REGIONS_TIMEOUT is not a number: {raw!r}")
        if self.request_timeout <= 0:
            raise ConfigurationError(f"request_timeout must be positive, got {self.request_timeout}")

        if self.proxy_url is None:
            self.proxy_url = os.environ.get("TRANSIT_REGIONS_PROXY") or config.get_proxy_url()

        if not 0 < self.server_port < 65536:
            raise ConfigurationError(f"server_port out of range: {self.server_port}")

    def experimental_opt_in(self) -> bool:
        """Getter for the experimental-regions preference."""
        return bool(self.experimental_regions)
