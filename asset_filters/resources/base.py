from abc import ABC, abstractmethod
from typing import List, Optional

from asset_filters.filters.base import GroupRestriction
from asset_filters.filters.descriptor import FilterDescriptor


class Resource(ABC):
    """
    Base abstract class for all filterable resources.

    A resource is an asset, such as a stylesheet or a script, that filters can
    be applied to. Its filter descriptors keep a reference back to it, so
    calls the descriptors do not handle themselves end up here.
    """

    @abstractmethod
    def apply(self, name: str) -> FilterDescriptor:
        """
        Apply a filter to the resource.

        Args:
            name (str): The short name of the filter.

        Returns:
            FilterDescriptor: The new descriptor, bound to this resource.
        """
        pass

    @abstractmethod
    def get_filters(self) -> List[FilterDescriptor]:
        """
        Get the filters applied to the resource, in application order.

        Returns:
            List[FilterDescriptor]: The resource's filter descriptors.
        """
        pass

    @abstractmethod
    def get_group(self) -> Optional[GroupRestriction]:
        """
        Get the group the resource belongs to.

        Returns:
            Optional[GroupRestriction]: The group, or None if it is unknown.
        """
        pass

    @abstractmethod
    def get_content(self) -> str:
        """
        Get the raw, unfiltered content of the resource.

        Returns:
            str: The content.
        """
        pass
