from asset_filters.transformers import core, local
from asset_filters.transformers.registry import (
    CORE_TRANSFORMERS,
    DEFAULT_REGISTRIES,
    LOCAL_TRANSFORMERS,
    TransformerRegistry,
    get_registry,
    register_transformer,
)

# Register the bundled transformers with their registries
CORE_TRANSFORMERS.register("CssMin", core.CssMin)
CORE_TRANSFORMERS.register("JsMin", core.JsMin)
CORE_TRANSFORMERS.register("Banner", core.Banner)
CORE_TRANSFORMERS.register("Replace", core.Replace)
LOCAL_TRANSFORMERS.register("UriRewrite", local.UriRewrite)
LOCAL_TRANSFORMERS.register("Replace", local.Replace)

__all__ = [
    "CORE_TRANSFORMERS",
    "DEFAULT_REGISTRIES",
    "LOCAL_TRANSFORMERS",
    "TransformerRegistry",
    "get_registry",
    "register_transformer",
]
