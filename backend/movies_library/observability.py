"""Logfire observability initialization and instrumentation."""

import logging

import logfire

from movies_library import __version__
from movies_library.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> None:
    """
    Initialize Logfire tracing for the movies library.

    Call once at startup, before any store is opened. Instruments:
    - PyMongo commands (Motor delegates to PyMongo)
    - Python logging (bridged to Logfire)

    Args:
        settings: Application settings containing the Logfire token
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="movies-library",
            service_version=__version__,
        )

        logfire.instrument_pymongo()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
