"""Logging utilities for the searchshaper package.

Every searchshaper module obtains its logger through ``LoggerFactory`` so that
the root logging configuration is applied exactly once, no matter how many
shaping modules are imported by the surrounding search layer.

Usage:
    >>> from searchshaper.utils.logging import LoggerFactory
    >>> logger = LoggerFactory(__name__).get_logger()
    >>> logger.debug("Resolved %d suggestions", 3)

    # Or pick the level from SEARCHSHAPER_LOG_LEVEL (or LOG_LEVEL)
    >>> logger = LoggerFactory.configure_from_env(__name__).get_logger()
"""

import logging
import os


PACKAGE_LOGGER_NAME = "searchshaper"
PACKAGE_LEVEL_ENV_VAR = "SEARCHSHAPER_LOG_LEVEL"
FALLBACK_LEVEL_ENV_VAR = "LOG_LEVEL"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerFactory:
    """Create named loggers sharing a single process-wide configuration.

    Attributes:
        logger_name (str): The name of the logger to create.
        log_level (int): The logging level applied on first initialization.
        log_format (str): The format for log messages.
        logger (logging.Logger): The configured logger instance.
    """

    _is_logger_initialized: bool = False

    def __init__(
        self,
        logger_name: str,
        log_level: int = logging.INFO,
        log_format: str = DEFAULT_LOG_FORMAT,
    ) -> None:
        """Initialize the factory and its logger.

        Args:
            logger_name (str): The name of the logger to create.
            log_level (int, optional): The logging level (default is logging.INFO).
            log_format (str, optional): The format for log messages.
        """
        self.logger_name = logger_name
        self.log_level = log_level
        self.log_format = log_format
        self.logger = self._initialize_logger()

    def _initialize_logger(self) -> logging.Logger:
        """Run ``basicConfig`` on first use and return the named logger."""
        if not LoggerFactory._is_logger_initialized:
            logging.basicConfig(level=self.log_level, format=self.log_format)
            LoggerFactory._is_logger_initialized = True

        return logging.getLogger(self.logger_name)

    def get_logger(self) -> logging.Logger:
        """Return the configured logger instance.

        Returns:
            logging.Logger: The logger instance.
        """
        return self.logger

    @staticmethod
    def configure_from_env(
        logger_name: str, env_var: str = PACKAGE_LEVEL_ENV_VAR
    ) -> "LoggerFactory":
        """Build a factory whose level is read from an environment variable.

        ``SEARCHSHAPER_LOG_LEVEL`` takes precedence; the generic ``LOG_LEVEL``
        is consulted when it is unset.

        Args:
            logger_name (str): The name of the logger to create.
            env_var (str, optional): The environment variable holding the level.

        Returns:
            LoggerFactory: A factory configured with the resolved level.
        """
        log_level_str = os.getenv(env_var) or os.getenv(FALLBACK_LEVEL_ENV_VAR, "INFO")
        # Unknown level names fall back to INFO
        log_level = getattr(logging, log_level_str.upper(), logging.INFO)
        return LoggerFactory(logger_name, log_level=log_level)
