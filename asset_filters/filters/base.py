from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Protocol

from asset_filters.utils.logger import logger


class GroupRestriction(str, Enum):
    """Asset groups a filter can be restricted to."""

    STYLESHEETS = "stylesheets"
    JAVASCRIPTS = "javascripts"


class TransformerLike(Protocol):
    """Protocol for objects with transformer method compatibility.

    Anything exposing ``filter(content) -> content`` can sit in a FilterChain,
    which keeps real Transformer subclasses and test doubles interchangeable.
    """

    def filter(self, content: str) -> str:
        """Transform resource content according to implementation rules."""
        ...


class Transformer(ABC):
    """Abstract base class for all content transformers.

    A transformer performs the actual work a filter describes, such as
    minifying a stylesheet or prepending a banner to a script.
    """

    @abstractmethod
    def filter(self, content: str) -> str:
        """Apply the transformation to resource content.

        Args:
            content: The content of the resource.

        Returns:
            The transformed content.

        Raises:
            TransformerError: If the content cannot be transformed.
        """
        pass


class FilterChain:
    """Transformers applied sequentially to resource content.

    The output of one transformer becomes the input to the next.
    """

    def __init__(self, transformers: Optional[List[TransformerLike]] = None):
        """Initialize a new filter chain.

        Args:
            transformers: Transformers to apply in sequence. If None, an empty
                list will be used.
        """
        self.transformers = transformers or []

    def add_filter(self, transformer: TransformerLike) -> None:
        """Add a transformer to the end of the chain."""
        self.transformers.append(transformer)

    def apply(self, content: str) -> str:
        """Apply all transformers in the chain to the content, in order.

        Args:
            content: The content to transform.

        Returns:
            The content after every transformer has run.
        """
        transformed = content
        for transformer in self.transformers:
            logger.debug(f"Applying transformer {type(transformer).__name__}")
            transformed = transformer.filter(transformed)
        return transformed

    def __len__(self) -> int:
        return len(self.transformers)
