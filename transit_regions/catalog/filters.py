"""
Region Usability

Decides whether a region can be used by the app. The same predicate
guards the nearest-region search and the store commit, so a region that
is never persisted is never a search candidate either.
"""

import logging

from ..models import Region

logger = logging.getLogger(__name__)


def is_region_usable(region: Region, experimental_opt_in: bool = False) -> bool:
    """
    Check if a region is usable, based on what this app supports.

    - Is the region active?
    - Does the region support the OBA Discovery APIs?
    - Does the region support the OBA Realtime APIs?
    - Is the region experimental, and if so, did the user opt in?

    Args:
        region: Region to check
        experimental_opt_in: Whether the user opted in to experimental regions

    Returns:
        True if the region is usable
    """
    if not region.active:
        logger.debug("Region '%s' is not active.", region.name)
        return False
    if not region.supports_oba_discovery_apis:
        logger.debug("Region '%s' does not support OBA Discovery APIs.", region.name)
        return False
    if not region.supports_oba_realtime_apis:
        logger.debug("Region '%s' does not support OBA Realtime APIs.", region.name)
        return False
    if region.experimental and not experimental_opt_in:
        logger.debug("Region '%s' is experimental and user hasn't opted in.", region.name)
        return False
    return True
