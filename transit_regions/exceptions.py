"""Custom exceptions for the transit-regions library."""


class RegionsError(Exception):
    """Base exception for all transit-regions errors."""
    pass


class InvalidArgumentError(RegionsError, ValueError):
    """Raised for malformed geometric input (null region, no bounds, bad coordinates)."""
    pass


class StorageError(RegionsError):
    """Raised when the region catalog store cannot be read or written."""
    pass


class SourceUnavailableError(RegionsError):
    """Raised when the remote or bundled region source cannot produce a catalog."""
    pass


class CatalogUnavailableError(RegionsError):
    """Raised when no region catalog could be obtained from any source."""
    pass


class ConfigurationError(RegionsError):
    """Raised when configuration is invalid or incomplete."""
    pass
