"""Root logger configuration driven by runtime settings."""

import logging

from .settings import AppSettings

_CONFIG_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_configure_logging(settings: AppSettings) -> None:
    """Configure the root logger from validated settings.

    Args:
        settings: Validated runtime settings providing the log level.

    Returns:
        None: Logging is configured as a side effect.

    Raises:
        ValueError: Raised when the configured level name is unknown.
    """

    logging.basicConfig(level=settings.log_level.upper(), format=_CONFIG_LOG_FORMAT)
