"""Logging from config and env.

Levels (inclusive):
- ERROR: critical errors only
- WARNING: non-critical issues and ERROR
- INFO: progress messages, WARNING, and ERROR
- DEBUG: every git command and API request

Configure via the config file (logging.level, logging.format), env
(LOGGING_LEVEL, LOGGING_FORMAT) or --verbose. Log records go to stderr so
they never mix with command output such as the list lines.
"""

import logging
import sys

from gitpr.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Chatty at DEBUG; only shown with --verbose.
THIRD_PARTY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names mean WARNING."""
    return LEVELS.get(level.upper().strip(), LEVELS[DEFAULT_LEVEL])


class GitPrLogging:
    """Configures the root logger for one CLI invocation."""

    def __init__(self, config: LoggingConfig, verbose: bool = False) -> None:
        self._verbose = verbose
        self._level = logging.DEBUG if verbose else _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        third_party_level = logging.DEBUG if self._verbose else max(self._level, logging.WARNING)
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(third_party_level)
