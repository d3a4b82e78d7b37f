import os
from typing import Callable, List, Optional, Sequence, Union

from asset_filters.config.loader import AppConfig
from asset_filters.filters.base import GroupRestriction
from asset_filters.filters.descriptor import FilterDescriptor
from asset_filters.filters.factory import FilterFactory
from asset_filters.resources.base import Resource
from asset_filters.transformers.registry import TransformerRegistry
from asset_filters.utils.logger import logger

GROUP_EXTENSIONS = {
    ".css": GroupRestriction.STYLESHEETS,
    ".less": GroupRestriction.STYLESHEETS,
    ".sass": GroupRestriction.STYLESHEETS,
    ".scss": GroupRestriction.STYLESHEETS,
    ".styl": GroupRestriction.STYLESHEETS,
    ".js": GroupRestriction.JAVASCRIPTS,
    ".coffee": GroupRestriction.JAVASCRIPTS,
    ".ts": GroupRestriction.JAVASCRIPTS,
}


class Asset(Resource):
    """
    In-memory asset with an ordered list of filters.

    The group is derived from the file extension unless given explicitly.
    """

    def __init__(
        self,
        path: str,
        content: str = "",
        group: Optional[Union[GroupRestriction, str]] = None,
        registries: Optional[Sequence[TransformerRegistry]] = None,
    ):
        """
        Args:
            path (str): Path or URL identifying the asset.
            content (str): The raw content of the asset.
            group (GroupRestriction or str, optional): Overrides the group
                derived from the extension.
            registries (Sequence[TransformerRegistry], optional): Registries
                the asset's filters resolve against. Defaults to the core and
                local registries.
        """
        self.path = path
        self.content = content
        self.group = GroupRestriction(group) if group is not None else self._guess_group(path)
        self.registries = registries
        self.filters: List[FilterDescriptor] = []

    @staticmethod
    def _guess_group(path: str) -> Optional[GroupRestriction]:
        _, extension = os.path.splitext(path)
        return GROUP_EXTENSIONS.get(extension.lower())

    def apply(
        self,
        name: str,
        callback: Optional[Callable[[FilterDescriptor], object]] = None,
    ) -> FilterDescriptor:
        """
        Apply a filter to the asset.

        Args:
            name (str): The short name of the filter.
            callback (Callable, optional): Called with the new descriptor,
                typically to configure it in place.

        Returns:
            FilterDescriptor: The new descriptor, bound to this asset.
        """
        descriptor = FilterDescriptor(name, self.registries).set_resource(self)
        self.filters.append(descriptor)
        logger.debug(f"Applied filter {name} to {self.path}")
        return descriptor.fire_callback(callback)

    def get_filters(self) -> List[FilterDescriptor]:
        return list(self.filters)

    def get_group(self) -> Optional[GroupRestriction]:
        return self.group

    def get_content(self) -> str:
        return self.content

    def is_stylesheet(self) -> bool:
        return self.group is GroupRestriction.STYLESHEETS

    def is_javascript(self) -> bool:
        return self.group is GroupRestriction.JAVASCRIPTS

    def build(self, environment: Optional[str] = None) -> str:
        """
        Run the asset's applicable filters over its content.

        Filters restricted to a group are skipped for assets outside that
        group, including assets that belong to no group.

        Args:
            environment (str, optional): The environment being built. Defaults
                to the environment of the active AppConfig.

        Returns:
            str: The filtered content.
        """
        if environment is None:
            environment = AppConfig.current().environment

        chain = FilterFactory.create_filter_chain(
            self.filters, environment=environment, group=self.group
        )
        logger.info(
            f"Building {self.path} with {len(chain)} of {len(self.filters)} filters"
        )
        return chain.apply(self.content)

    def __repr__(self) -> str:
        return f"Asset({self.path!r}, group={self.group!r})"
