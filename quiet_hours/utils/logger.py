import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
NAMESPACE = "quiet_hours"


def _namespace_logger() -> logging.Logger:
    # One stdout handler on the package logger; children propagate up to it
    # and it stops there, so nothing is printed twice.
    logger = logging.getLogger(NAMESPACE)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one component, e.g. ``get_logger("notification_service")``."""
    _namespace_logger()
    return logging.getLogger(f"{NAMESPACE}.{name}")


def configure_logging(debug: bool = False):
    """
    Configure process-wide logging for the API and the poller.
    """
    _namespace_logger().setLevel(logging.DEBUG if debug else logging.INFO)

    # Request lines are logged by LoggingMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if debug else logging.WARNING
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
