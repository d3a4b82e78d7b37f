import inspect
import weakref
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
)

from asset_filters.filters.base import GroupRestriction, Transformer
from asset_filters.transformers.registry import (
    DEFAULT_REGISTRIES,
    TransformerRegistry,
)
from asset_filters.utils.exceptions import (
    ConstructionError,
    FilterNotFoundError,
    UnboundDelegationError,
)
from asset_filters.utils.logger import logger

if TYPE_CHECKING:
    from asset_filters.resources.base import Resource

Hook = Callable[[Any], Any]


class FilterDescriptor:
    """
    A named filter attached to a resource.

    The descriptor only records what should happen: which transformer to use,
    its constructor arguments, the environments and asset group it applies to,
    and callbacks to run on the transformer once it has been built. The build
    pipeline reads this record and calls get_instance() to obtain the actual
    transformer.

    Configuration methods return the descriptor so they can be chained. Any
    attribute the descriptor does not define is looked up on its resource,
    which lets a chain continue with resource methods:

        asset.apply("CssMin").only_stylesheets().apply("Banner").set_arguments("v1")
    """

    def __init__(
        self,
        name: str,
        registries: Optional[Sequence[TransformerRegistry]] = None,
    ):
        """
        Args:
            name (str): Short name of the transformer to resolve.
            registries (Sequence[TransformerRegistry], optional): Registries to
                search, highest priority first. Defaults to the core registry
                followed by the local one.
        """
        self._name = name
        self._registries: Tuple[TransformerRegistry, ...] = tuple(
            DEFAULT_REGISTRIES if registries is None else registries
        )
        self._arguments: List[Any] = []
        self._before: List[Hook] = []
        self._environments: List[str] = []
        self._group_restriction: Optional[GroupRestriction] = None
        self._resource: Optional["weakref.ReferenceType[Resource]"] = None

    def before_filtering(self, callback: Hook) -> "FilterDescriptor":
        """Add a callback run on each new transformer before it is returned."""
        self._before.append(callback)
        return self

    def set_arguments(self, *arguments: Any) -> "FilterDescriptor":
        """Append positional constructor arguments for the transformer."""
        self._arguments.extend(arguments)
        return self

    def on_environment(self, environment: str) -> "FilterDescriptor":
        """Add an environment to apply the filter on."""
        self._environments.append(environment)
        return self

    def on_environments(self, *environments: str) -> "FilterDescriptor":
        """Add several environments to apply the filter on, in order."""
        self._environments.extend(environments)
        return self

    def only_stylesheets(self) -> "FilterDescriptor":
        """Apply the filter to stylesheets only."""
        self._group_restriction = GroupRestriction.STYLESHEETS
        return self

    def only_javascripts(self) -> "FilterDescriptor":
        """Apply the filter to javascripts only."""
        self._group_restriction = GroupRestriction.JAVASCRIPTS
        return self

    def set_resource(self, resource: "Resource") -> "FilterDescriptor":
        """
        Set the resource the filter belongs to.

        Only a weak reference is kept; the resource owns its filters, not the
        other way round. Once the resource is garbage collected the filter
        behaves as if none had been set.
        """
        self._resource = weakref.ref(resource)
        return self

    def _get_resource(self) -> Optional["Resource"]:
        reference = self.__dict__.get("_resource")
        return reference() if reference is not None else None

    @property
    def name(self) -> str:
        return self._name

    @property
    def resource(self) -> Optional["Resource"]:
        return self._get_resource()

    @property
    def group_restriction(self) -> Optional[GroupRestriction]:
        return self._group_restriction

    @property
    def environments(self) -> List[str]:
        return list(self._environments)

    @property
    def arguments(self) -> List[Any]:
        return list(self._arguments)

    @property
    def registries(self) -> Tuple[TransformerRegistry, ...]:
        return self._registries

    def get_resource(self) -> Optional["Resource"]:
        return self._get_resource()

    def get_filter(self) -> str:
        return self._name

    def get_group_restriction(self) -> Optional[GroupRestriction]:
        return self._group_restriction

    def get_environments(self) -> List[str]:
        return self.environments

    def get_arguments(self) -> List[Any]:
        return self.arguments

    def fire_callback(self, callback: Optional[Hook] = None) -> "FilterDescriptor":
        """
        Call a callback with this descriptor as its only argument.

        Missing or non-callable callbacks are ignored.

        Returns:
            FilterDescriptor: This descriptor, for chaining.
        """
        if callable(callback):
            callback(self)
        return self

    def _find_transformer(
        self,
    ) -> Optional[Tuple[TransformerRegistry, Type[Transformer]]]:
        for registry in self._registries:
            transformer_class = registry.lookup(self._name)
            if transformer_class is not None:
                return registry, transformer_class
        return None

    def get_class_name(self) -> Optional[str]:
        """
        Resolve the filter name to a namespace-qualified transformer name.

        Registries are searched in priority order and the first one defining
        the name wins.

        Returns:
            Optional[str]: For example "core.CssMin", or None when no registry
                defines the name.
        """
        found = self._find_transformer()
        if found is None:
            return None
        registry, _ = found
        return registry.qualified_name(self._name)

    def get_instance(self, strict: bool = False) -> Optional[Transformer]:
        """
        Build the transformer this filter describes.

        A transformer class without a constructor of its own is built without
        arguments. Otherwise the stored arguments are passed positionally. Each
        before-filtering callback is then called with the new transformer, in
        the order the callbacks were added. Nothing is cached: every call builds
        a new transformer.

        Args:
            strict (bool): Raise instead of returning None when the name does
                not resolve.

        Returns:
            Optional[Transformer]: The transformer, or None if no registry
                defines the filter name and strict is False.

        Raises:
            FilterNotFoundError: If the name does not resolve and strict is True.
            ConstructionError: If the stored arguments do not fit the
                transformer's constructor.
        """
        found = self._find_transformer()
        if found is None:
            searched = [registry.namespace for registry in self._registries]
            message = f"Filter {self._name} not found in registries {searched}"
            if strict:
                logger.error(message)
                raise FilterNotFoundError(message)
            logger.warning(message)
            return None

        registry, transformer_class = found
        logger.debug(
            f"Resolved filter {self._name} to {registry.qualified_name(self._name)}"
        )

        # Without a constructor of its own the class takes no arguments, so
        # any stored ones are dropped.
        if transformer_class.__init__ is object.__init__:
            instance = transformer_class()
        else:
            self._check_arguments(transformer_class)
            instance = transformer_class(*self._arguments)

        for callback in self._before:
            if callable(callback):
                callback(instance)

        return instance

    def _check_arguments(self, transformer_class: Type[Transformer]) -> None:
        try:
            signature = inspect.signature(transformer_class)
        except (TypeError, ValueError):
            # No introspectable signature; let the call itself decide.
            return

        try:
            signature.bind(*self._arguments)
        except TypeError as e:
            message = (
                f"Cannot construct {transformer_class.__name__} for filter "
                f"{self._name} with arguments {self._arguments}: {e}"
            )
            logger.error(message)
            raise ConstructionError(message) from e

    def delegate(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """
        Call a method on the resource and return its result unchanged.

        Raises:
            UnboundDelegationError: If no resource has been set.
            AttributeError: If the resource has no such attribute.
        """
        resource = self._get_resource()
        if resource is None:
            raise UnboundDelegationError(
                f"Cannot call {method} on filter {self._name}: no resource set"
            )
        return getattr(resource, method)(*args, **kwargs)

    def __getattr__(self, attribute: str) -> Any:
        # Only reached for names the descriptor does not define itself.
        if attribute.startswith("_"):
            raise AttributeError(attribute)

        resource = self._get_resource()
        if resource is None:
            raise UnboundDelegationError(
                f"Filter {self.__dict__.get('_name')} has no attribute "
                f"{attribute} and no resource to delegate to"
            )
        return getattr(resource, attribute)

    def __repr__(self) -> str:
        return (
            f"FilterDescriptor({self._name!r}, arguments={self._arguments!r}, "
            f"environments={self._environments!r}, "
            f"group_restriction={self._group_restriction!r})"
        )
