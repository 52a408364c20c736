"""
structlog setup.

Every event goes through stdlib logging and ends up on stderr; stdout is
reserved for the running program's output.
"""
import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

DEFAULT_LOG_LEVEL = "WARNING"

PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.dev.ConsoleRenderer(colors=False),
]

_full_setup_done = False


def _level(log_level) -> int:
    return getattr(logging, str(log_level).upper(), logging.WARNING)


def route_to_stdlib() -> None:
    """
    Hand structlog events to stdlib logging if nobody configured structlog yet.

    Unconfigured stdlib logging writes WARNING and above to stderr, so
    library users who never call configure_logging get nothing on stdout.
    """
    if not structlog.is_configured():
        structlog.configure(logger_factory=LoggerFactory())


def set_log_level(log_level: str) -> None:
    """Adjust the root level after configuration, e.g. from a CLI flag."""
    logging.getLogger().setLevel(_level(log_level))


def configure_logging(log_level=DEFAULT_LOG_LEVEL):
    """Install the console renderer on stderr and apply `log_level`, every call."""
    global _full_setup_done
    if not _full_setup_done:
        root = logging.getLogger()
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(handler)
        structlog.configure(
            processors=PROCESSORS,
            context_class=dict,
            logger_factory=LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _full_setup_done = True
    set_log_level(log_level)
    structlog.get_logger().debug("Logging configured", log_level=log_level)
