from asset_filters.resources.base import Resource
from asset_filters.resources.asset import Asset

__all__ = ["Resource", "Asset"]
