"""Production-grade logging configuration using loguru with automatic dev/prod detection."""

import sys
from loguru import logger

from regintel_engine.config.settings import settings


def configure_logging() -> None:
    """
    Configure loguru based on environment settings.

    Behavior:
    - Development (TTY + console format): Colorized, human-readable output
    - Production (non-TTY or json format): JSON-structured logs to stdout
    - Respects LOG_LEVEL from settings
    """
    # Drop loguru default stderr handler
    logger.remove()

    # Interactive terminal or piped output
    is_tty = sys.stderr.isatty()
    use_console_format = settings.log_format.lower() == "console"

    if is_tty and use_console_format:
        # Development: colorized lines tagged with the component
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
            level=settings.log_level,
            colorize=True,
        )
    else:
        # Production: one JSON object per record
        logger.add(
            sys.stdout,
            format="{message}",
            level=settings.log_level,
            serialize=True,  # emit JSON
            diagnose=False,  # no variable inspection in production logs
        )

    # Records logged without a bound component still render in console mode
    logger.configure(extra={"component": "regintel"})


def get_logger(component: str):
    """
    Get a logger instance bound to a specific component name.

    Args:
        component: Component/module name for log context

    Returns:
        Logger instance with component context

    Example:
        >>> log = get_logger("resolution.device_mapper")
        >>> log.info("Mapping devices")
    """
    return logger.bind(component=component)


# Configure on import
configure_logging()

# Export the configured logger for direct use
__all__ = ["logger", "get_logger", "configure_logging"]
