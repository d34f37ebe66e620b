"""Logging utilities for the research node service."""
import logging
import sys

from research_node.core.config import Settings
from research_node.core.request_context import get_request_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - request_id=%(request_id)s - %(message)s"
)

# Driver loggers that flood DEBUG output with per-statement chatter.
_NOISY_LOGGERS = ("aiosqlite", "aiomysql", "sqlalchemy.engine", "sqlalchemy.pool")


def _install_request_id_factory() -> None:
    old_factory = logging.getLogRecordFactory()
    if getattr(old_factory, "_adds_request_id", False):
        return

    def record_factory(*args, **kwargs) -> logging.LogRecord:
        record = old_factory(*args, **kwargs)
        record.request_id = get_request_id() or "system"
        return record

    record_factory._adds_request_id = True
    logging.setLogRecordFactory(record_factory)


def configure_logging(
    settings: Settings, *,
    logger_name: str = "research_node",
) -> logging.Logger:
    """Configure the root logger and return the application logger.

    Every record carries the id of the request being handled, or ``system``
    for startup and shutdown work. Safe to call more than once.

    Args:
        settings: Application settings containing log-level information.
        logger_name: Name of the logger to retrieve.

    Returns:
        Configured logger instance.
    """

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    _install_request_id_factory()

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.debug("Logging configured with level %s", logging.getLevelName(log_level))
    return logger
