"""Filter module for describing and applying asset transformations.

A filter is declared on a resource by name and configured fluently with
constructor arguments, environments, a group restriction and callbacks. At
build time each applicable filter resolves to a transformer, and the
transformers are applied to the resource content in order.

Key components:
- FilterDescriptor: The named, configurable filter record
- Transformer: Abstract base class for all content transformers
- GroupRestriction: The asset groups a filter can be limited to
- FilterChain: Class for applying transformers in sequence
- FilterFactory: Factory selecting and resolving filters for a build
"""

from asset_filters.filters.base import (
    FilterChain,
    GroupRestriction,
    Transformer,
    TransformerLike,
)
from asset_filters.filters.descriptor import FilterDescriptor
from asset_filters.filters.factory import ANY_GROUP, FilterFactory

__all__ = [
    "ANY_GROUP",
    "FilterChain",
    "FilterDescriptor",
    "FilterFactory",
    "GroupRestriction",
    "Transformer",
    "TransformerLike",
]
