"""Command-line entry point: ``python -m compute_demo``."""

import sys

import uvicorn
from structlog import get_logger

from .config import BIND_HOST, load_settings
from .exceptions import ConfigurationError
from .log_config import configure_logging

logger = get_logger("server")

_UVICORN_LOG_LEVELS = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warning",
    "WARN": "warning",
    "ERROR": "error",
    "CRITICAL": "critical",
}


def main() -> int:
    """Load settings and serve until interrupted.
    
    Returns:
        Process exit status; 1 when the configuration is invalid.
    """
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("startup_failed", error=exc.message, errors=exc.errors)
        return 1
    
    configure_logging(settings.LOG_LEVEL)
    logger.info("server_starting", address=f"http://{BIND_HOST}:{settings.PORT}")
    
    config = uvicorn.Config(
        "compute_demo.main:app",
        host=BIND_HOST,
        port=settings.PORT,
        log_level=_UVICORN_LOG_LEVELS.get(settings.LOG_LEVEL.upper(), "info"),
    )
    uvicorn.Server(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
