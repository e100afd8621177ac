"""
Region Sources

Where a fresh region catalog comes from: the regions REST API, or the
regions file bundled with the package as a last resort.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import httpx

from ..config import REGIONS_URL, REQUEST_TIMEOUT, USER_AGENT, BUNDLED_PATH
from ..exceptions import SourceUnavailableError
from ..models import Region
from ..parsers import parse_regions_response

logger = logging.getLogger(__name__)


class RegionSource(ABC):
    """A place a parsed region catalog can be fetched from."""

    name = "source"

    @abstractmethod
    def fetch(self) -> List[Region]:
        """Fetch and parse the region catalog.

        Raises:
            SourceUnavailableError: If the catalog cannot be obtained
        """


class HttpRegionSource(RegionSource):
    """Fetches regions from the regions REST API.

    Args:
        url: Regions API URL
        timeout: Request timeout in seconds
        proxy: Optional proxy URL
        transport: Optional httpx transport (used to stub the server in tests)
    """

    name = "server"

    def __init__(
        self,
        url: str = REGIONS_URL,
        timeout: float = REQUEST_TIMEOUT,
        proxy: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.proxy = proxy
        self.transport = transport

    def fetch(self) -> List[Region]:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        client_kwargs = {"timeout": self.timeout, "follow_redirects": True}
        if self.proxy:
            client_kwargs["proxy"] = self.proxy
        if self.transport is not None:
            client_kwargs["transport"] = self.transport

        try:
            with httpx.Client(**client_kwargs) as client:
                response = client.get(self.url, headers=headers)
                response.raise_for_status()
                content = response.content
        except httpx.TimeoutException as e:
            raise SourceUnavailableError(f"Regions request to {self.url} timed out") from e
        except httpx.HTTPStatusError as e:
            raise SourceUnavailableError(
                f"Regions API error: {e.response.status_code} - {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(f"Regions request to {self.url} failed: {e}") from e

        regions = parse_regions_response(content)
        logger.debug("Fetched %d regions from %s", len(regions), self.url)
        return regions


class BundledRegionSource(RegionSource):
    """Reads regions from the regions file shipped with the package.

    This is a fail-safe for when the regions API is offline and nothing
    has been stored locally yet. It must never be preferred over the
    server or the local store.
    """

    name = "bundled file"

    def __init__(self, path: Union[str, Path] = BUNDLED_PATH):
        self.path = Path(path)

    def fetch(self) -> List[Region]:
        try:
            content = self.path.read_bytes()
        except OSError as e:
            raise SourceUnavailableError(f"Cannot read bundled regions file {self.path}: {e}") from e

        regions = parse_regions_response(content)
        logger.debug("Read %d regions from %s", len(regions), self.path)
        return regions
