import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Logger:
    """
    Singleton logger shared by the filter, registry and resource modules.

    Asset pipelines are usually embedded in a larger application, so the logger
    writes to its own named channel and does not propagate to the root logger.
    Only one instance exists per process; later calls reuse it and may change
    its level.
    """

    _instance = None

    def __init__(self, log_level: str = "WARNING", logger_name: Optional[str] = None):
        """
        Initialize the logger with a level and an optional channel name.

        Args:
            log_level (str): The logging level (e.g., "INFO", "DEBUG").
                Defaults to "WARNING".
            logger_name (str, optional): Name of the channel. Defaults to the
                ASSET_FILTERS_LOGGER environment variable or "asset-filters".
        """
        self.logger_name = logger_name or os.getenv(
            "ASSET_FILTERS_LOGGER", "asset-filters"
        )
        self.logger = logging.getLogger(self.logger_name)

        self.logger.handlers.clear()

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)

        self.set_level(log_level)

        self.logger.propagate = False

    def set_level(self, log_level: str) -> None:
        """
        Set or update the logging level.

        Unknown level names fall back to WARNING.

        Args:
            log_level (str): The logging level (e.g., "INFO", "DEBUG").
        """
        normalized = log_level.upper()
        if normalized not in LOG_LEVELS:
            normalized = "WARNING"
        self.logger.setLevel(getattr(logging, normalized))
        self.logger.debug(f"Logging level set to {normalized}")

    @classmethod
    def get_logger(cls, log_level: str = "WARNING") -> logging.Logger:
        """
        Get the shared logger, creating it on first use.

        Args:
            log_level (str): The level to use if the logger is created now.

        Returns:
            logging.Logger: The configured logger.
        """
        if cls._instance is None:
            cls._instance = Logger(log_level=log_level)
        return cls._instance.logger

    @classmethod
    def update_level(cls, log_level: str) -> None:
        """Change the level of the shared logger, creating it if needed."""
        if cls._instance is None:
            cls.get_logger(log_level=log_level)
        else:
            cls._instance.set_level(log_level)


logger = Logger.get_logger()
