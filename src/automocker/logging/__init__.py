"""automocker logging — structlog configuration for the library's own loggers."""

from automocker.logging.structlog_setup import LogFormat, LoggingProperties, configure_logging

__all__ = ["LogFormat", "LoggingProperties", "configure_logging"]
