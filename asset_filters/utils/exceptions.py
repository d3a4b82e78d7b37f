class AssetFiltersError(Exception):
    """Base exception for all asset filter related errors."""

    pass


class ConfigurationError(AssetFiltersError):
    """Raised when there is an issue with configuration settings."""

    pass


class UnsupportedTypeError(AssetFiltersError):
    """Raised when an unsupported type is requested from a registry."""

    pass


class FilterNotFoundError(UnsupportedTypeError):
    """Raised when a filter name does not resolve in any transformer registry."""

    pass


class ConstructionError(AssetFiltersError, TypeError):
    """Raised when a transformer constructor rejects the supplied arguments."""

    pass


class UnboundDelegationError(AssetFiltersError, AttributeError):
    """Raised when a call is delegated from a filter that has no resource."""

    pass


class TransformerError(AssetFiltersError):
    """Raised when there is an issue transforming resource content."""

    pass
