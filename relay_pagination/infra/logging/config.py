"""Logging configuration setup.

Uses dictConfig with every handler on the root logger, so that the
package's module loggers (``relay_pagination.*``) simply propagate.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from relay_pagination.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from relay_pagination.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    console_enabled: bool = True,
    capture_warnings: bool = True,
    static_fields: dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Configure logging with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        capture_warnings: Forward Python warnings to logging system.
        static_fields: Fields added to every JSON record (e.g. {"service": "api"}).
        **kwargs: Ignored extra settings, reported at DEBUG.

    Example:
        from relay_pagination.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))

    if capture_warnings:
        logging.captureWarnings(True)

    logging.config.dictConfig(
        build_logging_config(
            log_level=log_level,
            json_logs=json_logs,
            console_enabled=console_enabled,
            static_fields=static_fields,
        )
    )


def build_logging_config(
    log_level: str,
    json_logs: bool,
    console_enabled: bool,
    static_fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the dictConfig mapping used by configure_logging()."""
    formatters: dict[str, Any] = {}
    if json_logs:
        formatters["default"] = {
            "()": "relay_pagination.infra.logging.formatters.JSONFormatter",
            "static": static_fields or {},
        }
    else:
        formatters["default"] = {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }


__all__ = ["build_logging_config", "configure_logging", "setup_logging"]
