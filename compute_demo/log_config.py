"""structlog setup shared by the app and the command-line entry point."""

import logging

import structlog

_configured_level: int | None = None


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog to render key/value events to stderr.
    
    Calling this again with the same level is a no-op.
    
    Args:
        level: Standard logging level name, e.g. ``"DEBUG"``.
    """
    global _configured_level
    
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    if _configured_level == numeric_level:
        return
    
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
    _configured_level = numeric_level
