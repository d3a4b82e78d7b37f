from typing import Any, Iterable, List, Optional

from asset_filters.filters.base import FilterChain, GroupRestriction, TransformerLike
from asset_filters.filters.descriptor import FilterDescriptor
from asset_filters.utils.logger import logger

# Passed as group when group restrictions should not be checked at all. None
# stands for a resource outside every group.
ANY_GROUP: Any = object()


class FilterFactory:
    """Factory for creating filter chains.

    Selects the filter descriptors that apply to a build context, resolves them
    to transformers and wraps the transformers in a FilterChain.
    """

    @staticmethod
    def is_applicable(
        descriptor: FilterDescriptor,
        environment: Optional[str] = None,
        group: Any = ANY_GROUP,
    ) -> bool:
        """Check whether a descriptor applies to an environment and group.

        A descriptor without environments applies in every environment. A
        descriptor without a group restriction applies to every resource; one
        with a restriction applies only to resources of that group.

        Args:
            descriptor: The descriptor to check.
            environment: The environment being built. None skips the check.
            group: The GroupRestriction (or its value) of the resource being
                built, None for a resource belonging to no group, or ANY_GROUP
                to skip the check.
        """
        environments = descriptor.environments
        if environment is not None and environments and environment not in environments:
            return False

        restriction = descriptor.group_restriction
        if restriction is None or group is ANY_GROUP:
            return True
        if group is None:
            return False
        return restriction == GroupRestriction(group)

    @staticmethod
    def create_filter_chain(
        descriptors: Iterable[FilterDescriptor],
        environment: Optional[str] = None,
        group: Any = ANY_GROUP,
    ) -> FilterChain:
        """Create a filter chain from the descriptors applying to a context.

        Descriptors are resolved in order. Those whose name does not resolve to
        a transformer are skipped.

        Args:
            descriptors: The descriptors of a resource, in application order.
            environment: The environment being built. None skips the check.
            group: The group of the resource being built, as for is_applicable.

        Returns:
            A FilterChain holding one fresh transformer per applicable filter.

        Raises:
            ConstructionError: If a transformer rejects its arguments.
        """
        transformers: List[TransformerLike] = []
        for descriptor in descriptors:
            if not FilterFactory.is_applicable(descriptor, environment, group):
                logger.debug(
                    f"Skipping filter {descriptor.name} for environment="
                    f"{environment}, group={group}"
                )
                continue

            transformer = descriptor.get_instance()
            if transformer is not None:
                transformers.append(transformer)

        return FilterChain(transformers)
