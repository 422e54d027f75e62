"""Package-wide logging for trafficsplit.

All modules log through children of the ``trafficsplit`` logger. Records go
to standard error so that command output written to standard output (the
allocation CSV) is never interleaved with log lines.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "trafficsplit"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time.

    Resolving the stream lazily keeps output redirection (pytest capture,
    ``contextlib.redirect_stderr``) working after the handler is created.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Install a single handler on the package logger.

    Calling it again replaces the previous handler rather than stacking a
    second one.

    Args:
        level: Level for the package logger.
        handler: Destination handler; defaults to standard error.
        format_string: Format applied to the handler.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)

    if handler is None:
        handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(format_string))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Records still reach the root logger, where pytest's caplog listens
    package_logger.propagate = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package hierarchy.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the level every trafficsplit logger inherits."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        configure_logging(level)
    package_logger.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)
