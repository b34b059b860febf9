import logging
import sys

import structlog


_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for applications using the SDK.

    The SDK itself never calls this; it only emits events through
    ``get_logger``. Applications (and the bundled examples) call it once at
    startup to get JSON log lines on stderr.

    NOTE:
        Handlers are bound to ``sys.__stderr__`` rather than ``sys.stderr``.
        Test runners replace and later close ``sys.stderr``; a handler bound
        to that stream would raise ``ValueError: I/O operation on closed
        file`` on the next write.
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.__stderr__)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s")

    # Every request would otherwise be logged twice
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    The logger wraps the standard library logger of the same name, so SDK
    events stay silent until the application configures logging.

    Args:
        name: Optional name for the logger (usually __name__)

    Returns:
        A structlog logger
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
