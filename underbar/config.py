"""
underbar.config - Library configuration and logging setup

underbar reads a couple of settings from the environment:

    UNDERBAR_LOG_LEVEL     level used by setup_logger() (default: WARNING)
    UNDERBAR_TIMER_DAEMON  whether timer threads are daemons (default: true)

The library never attaches log handlers on import. Applications that want
to see underbar's debug output call setup_logger().
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

# Default configuration values
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV = "UNDERBAR_LOG_LEVEL"
TIMER_DAEMON_ENV = "UNDERBAR_TIMER_DAEMON"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean environment value, raising ValueError on anything else."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def parse_level(value: str, name: str) -> str:
    """Normalize a log level name, raising ValueError if logging doesn't know it."""
    normalized = value.strip().upper()
    if not isinstance(logging.getLevelName(normalized), int):
        raise ValueError(f"Invalid log level for {name}: {value!r}")
    return normalized


@dataclass
class UnderbarConfig:
    """
    Settings for underbar.

    Fields:
        log_level: Level name applied by setup_logger()
        timer_daemon: Daemon flag for timers created by ThreadingScheduler
    """

    log_level: str = DEFAULT_LOG_LEVEL
    timer_daemon: bool = True


def load_config(environ: Optional[Mapping[str, str]] = None) -> UnderbarConfig:
    """
    Build an UnderbarConfig from environment variables.

    Args:
        environ: Mapping to read from. If None, uses os.environ.

    Returns:
        The loaded configuration; unset variables keep their defaults.
    """
    if environ is None:
        environ = os.environ

    config = UnderbarConfig()

    level = environ.get(LOG_LEVEL_ENV)
    if level:
        config.log_level = parse_level(level, LOG_LEVEL_ENV)

    daemon = environ.get(TIMER_DAEMON_ENV)
    if daemon:
        config.timer_daemon = parse_bool(daemon, TIMER_DAEMON_ENV)

    return config


def setup_logger(
    name: str = "underbar",
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (the package logger by default)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string

    Returns:
        Configured logger instance

    Raises:
        ValueError: If the level is not a known logging level
    """
    level = parse_level(level or load_config().log_level, "level")
    format_string = format_string or DEFAULT_LOG_FORMAT

    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVEL_ENV",
    "TIMER_DAEMON_ENV",
    "UnderbarConfig",
    "load_config",
    "parse_bool",
    "parse_level",
    "setup_logger",
]
