import importlib
from typing import Optional

from dotenv import load_dotenv

from asset_filters.config.loader import AppConfig
from asset_filters.utils.exceptions import ConfigurationError
from asset_filters.utils.logger import Logger, logger

# Importing the package registers the bundled transformers.
import asset_filters.transformers  # noqa: F401


def bootstrap(config: Optional[AppConfig] = None) -> AppConfig:
    """
    Prepare the filter pipeline for use.

    Loads a .env file if present, reads the configuration, makes it the
    active one used by builds without an explicit environment, applies the log
    level and imports the modules that register project-local transformers.

    Args:
        config (AppConfig, optional): Configuration to use instead of reading
            it from the environment.

    Returns:
        AppConfig: The configuration in effect.

    Raises:
        ConfigurationError: If the configuration is invalid or a transformer
            module cannot be imported.
    """
    if config is None:
        load_dotenv()
        config = AppConfig.load()

    Logger.update_level(config.log_level)
    AppConfig.activate(config)

    for module_name in config.transformer_modules:
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to import transformer module {module_name}: {e}")
            raise ConfigurationError(
                f"Failed to import transformer module {module_name}: {e}"
            ) from e
        logger.debug(f"Imported transformer module {module_name}")

    return config
