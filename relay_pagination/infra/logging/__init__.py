"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.warning("Something odd", extra={"argument": "after"})

    # Lazy evaluation for expensive debug output
    from relay_pagination.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Expensive: {compute_heavy_data()}")
"""

from relay_pagination.infra.logging.config import (
    build_logging_config,
    configure_logging,
    setup_logging,
)
from relay_pagination.infra.logging.formatters import JSONFormatter
from relay_pagination.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "build_logging_config",
    "configure_logging",
    "get_lazy_logger",
    "lazy",
    "setup_logging",
]
