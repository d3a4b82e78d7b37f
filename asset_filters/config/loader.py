from dataclasses import dataclass, field
import os
from typing import ClassVar, List, Optional

from asset_filters.utils.exceptions import ConfigurationError
from asset_filters.utils.logger import LOG_LEVELS, logger


@dataclass
class AppConfig(object):
    """
    Configuration for the asset filter pipeline.

    Holds the logging level, the environment name builds run under, and the
    modules that register project-local transformers.
    """

    log_level: str = "WARNING"
    environment: str = "production"
    transformer_modules: List[str] = field(default_factory=list)

    _current: ClassVar[Optional["AppConfig"]] = None

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Create an AppConfig instance from environment variables.

        Reads LOG_LEVEL, ASSET_ENV and LOCAL_TRANSFORMER_MODULES (a comma
        separated list of importable module names).

        Returns:
            AppConfig: Configured instance.

        Raises:
            ConfigurationError: If LOG_LEVEL or ASSET_ENV hold invalid values.
        """
        log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL: {log_level}. Expected one of {list(LOG_LEVELS)}"
            )

        environment = os.getenv("ASSET_ENV", "production").strip()
        if not environment:
            raise ConfigurationError("ASSET_ENV must not be empty")

        raw_modules = os.getenv("LOCAL_TRANSFORMER_MODULES", "")
        transformer_modules = [
            module.strip() for module in raw_modules.split(",") if module.strip()
        ]

        logger.info(
            f"Config: log_level={log_level}, environment={environment}, "
            f"transformer_modules={transformer_modules}"
        )

        return cls(
            log_level=log_level,
            environment=environment,
            transformer_modules=transformer_modules,
        )

    @classmethod
    def activate(cls, config: Optional["AppConfig"]) -> None:
        """
        Make config the configuration returned by current().

        Passing None drops the active configuration, so the next call to
        current() reads the environment again.
        """
        cls._current = config

    @classmethod
    def current(cls) -> "AppConfig":
        """
        Get the active configuration, loading it from the environment on
        first use.

        Returns:
            AppConfig: The active configuration.

        Raises:
            ConfigurationError: If the configuration has to be loaded and is
                invalid.
        """
        if cls._current is None:
            cls._current = cls.load()
        return cls._current
