from typing import Callable, Dict, List, Optional, Tuple, Type

from asset_filters.filters.base import Transformer
from asset_filters.utils.exceptions import UnsupportedTypeError
from asset_filters.utils.logger import logger


class TransformerRegistry:
    """
    Registry of transformer classes under one namespace.

    Transformers are registered under a short name and looked up case
    insensitively. Several registries are searched in priority order when a
    filter is resolved, so the same short name may exist in more than one of
    them.
    """

    def __init__(self, namespace: str):
        """
        Args:
            namespace (str): Prefix used to build qualified names, e.g. "core".
        """
        self.namespace = namespace
        self.registry: Dict[str, Type[Transformer]] = {}
        self.registered_names: Dict[str, str] = {}

    def register(self, name: str, transformer_class: Type[Transformer]) -> None:
        """
        Register a transformer class.

        Registering a name again replaces the previous class.

        Args:
            name (str): The short name to register the transformer under.
            transformer_class (Type[Transformer]): The transformer class.
        """
        normalized_name = name.lower()
        if normalized_name in self.registry:
            logger.debug(
                f"Replacing transformer {self.namespace}.{name} with "
                f"{transformer_class.__name__}"
            )
        self.registry[normalized_name] = transformer_class
        self.registered_names[normalized_name] = name

    def lookup(self, name: str) -> Optional[Type[Transformer]]:
        """Return the transformer class registered under name, or None."""
        return self.registry.get(name.lower())

    def qualified_name(self, name: str) -> str:
        """
        Build the namespace-qualified name for a registered transformer.

        The name part is the short name the transformer was registered under,
        so "Shout" registered for class Loud qualifies as "local.Shout".

        Raises:
            UnsupportedTypeError: If name is not registered here.
        """
        transformer_class = self.lookup(name)
        if transformer_class is None:
            raise UnsupportedTypeError(
                f"Unsupported transformer: {name}. Supported types: {self.names()}"
            )
        registered_name = self.registered_names.get(
            name.lower(), transformer_class.__name__
        )
        return f"{self.namespace}.{registered_name}"

    def names(self) -> List[str]:
        return list(self.registry.keys())

    def clear(self) -> None:
        self.registry.clear()
        self.registered_names.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.registry

    def __repr__(self) -> str:
        return f"TransformerRegistry({self.namespace!r}, {self.names()})"


CORE_TRANSFORMERS = TransformerRegistry("core")
LOCAL_TRANSFORMERS = TransformerRegistry("local")

# Searched in this order; the first registry defining a name wins.
DEFAULT_REGISTRIES: Tuple[TransformerRegistry, ...] = (
    CORE_TRANSFORMERS,
    LOCAL_TRANSFORMERS,
)

_REGISTRIES_BY_NAMESPACE = {
    registry.namespace: registry for registry in DEFAULT_REGISTRIES
}


def get_registry(namespace: str) -> TransformerRegistry:
    """
    Return the default registry for a namespace.

    Raises:
        UnsupportedTypeError: If the namespace is unknown.
    """
    try:
        return _REGISTRIES_BY_NAMESPACE[namespace.lower()]
    except KeyError:
        supported = list(_REGISTRIES_BY_NAMESPACE.keys())
        logger.error(
            f"Unsupported transformer namespace: {namespace}. "
            f"Supported namespaces: {supported}"
        )
        raise UnsupportedTypeError(
            f"Unsupported transformer namespace: {namespace}. "
            f"Supported namespaces: {supported}"
        ) from None


def register_transformer(
    name: Optional[str] = None, namespace: str = "local"
) -> Callable[[Type[Transformer]], Type[Transformer]]:
    """
    Class decorator registering a transformer in one of the default registries.

    Project code registers its own transformers in the "local" registry, which
    is searched after the "core" one.

    Args:
        name (str, optional): Short name. Defaults to the class name.
        namespace (str): Target registry namespace. Defaults to "local".
    """
    registry = get_registry(namespace)

    def decorator(transformer_class: Type[Transformer]) -> Type[Transformer]:
        registry.register(name or transformer_class.__name__, transformer_class)
        return transformer_class

    return decorator
