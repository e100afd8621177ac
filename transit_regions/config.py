"""
Default configuration for the transit region resolver.

Values can be overridden with environment variables or through the
RegionsConfig / RegionResolver constructor arguments.
"""

import os
from pathlib import Path

# Regions REST API (OneBusAway regions-v3 format)
_DEFAULT_REGIONS_URL = "http://regions.onebusaway.org/regions-v3.json"
REGIONS_URL = os.environ.get("TRANSIT_REGIONS_URL", _DEFAULT_REGIONS_URL)

# Proxy Configuration
PROXY_URL = os.environ.get("TRANSIT_REGIONS_PROXY", "")


def get_proxy_url():
    """Get proxy URL. Returns single URL string for httpx."""
    if PROXY_URL:
        return PROXY_URL
    return None


# Local region store
DEFAULT_DATABASE_PATH = Path.home() / ".transit_regions" / "regions.db"
DATABASE_PATH = Path(os.environ.get("TRANSIT_REGIONS_DB", str(DEFAULT_DATABASE_PATH)))

# Bundled fallback catalog, shipped with the package.
# Last resort only: never fresher than the server or the local store.
PACKAGE_DIR = Path(__file__).parent
DEFAULT_BUNDLED_PATH = PACKAGE_DIR / "data" / "regions_v3.json"
BUNDLED_PATH = Path(os.environ.get("TRANSIT_REGIONS_BUNDLED", str(DEFAULT_BUNDLED_PATH)))

# Request timeout (seconds)
# A malformed TRANSIT_REGIONS_TIMEOUT is reported by RegionsConfig, not at import
DEFAULT_REQUEST_TIMEOUT = 30.0


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


REQUEST_TIMEOUT = _env_float("TRANSIT_REGIONS_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)

USER_AGENT = "transit-regions/1.0"

# Experimental regions are hidden unless the user opts in
_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


EXPERIMENTAL_REGIONS = env_flag("TRANSIT_REGIONS_EXPERIMENTAL")

# API Server
API_HOST = "127.0.0.1"
API_PORT = 8000

# Geographic Constants
METERS_TO_MILES = 0.000621371

# Expected regions payload version
REGIONS_API_VERSION = 3
