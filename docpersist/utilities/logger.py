"""
Logger module for docpersist.

This module provides a centralized logger that can be imported throughout the package
without causing circular import issues.
"""

import logging

# Module-level logger
logger: logging.Logger = logging.getLogger('docpersist')
logger.setLevel(logging.WARNING)  # Default to WARNING level to avoid spam


class _ForwardingHandler(logging.Handler):
    """Hands every record to another logger."""

    def __init__(self, target: logging.Logger) -> None:
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        self.target.handle(record)


def set_logger(custom_logger: logging.Logger) -> None:
    """Allow users to provide their own logger.

    Modules hold a reference to the package logger, so records are forwarded rather than the logger replaced.
    """
    for handler in list(logger.handlers):
        if isinstance(handler, _ForwardingHandler):
            logger.removeHandler(handler)
    logger.addHandler(_ForwardingHandler(custom_logger))
    logger.propagate = False

def set_log_level(level: int) -> None:
    """Set the logging level for the package.
    
    Args:
        level: logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, or logging.CRITICAL
    """
    logger.setLevel(level)
