"""
Logging for methodref.

Sinks added here only receive records from the ``methodref`` package, so an
application that already configured loguru keeps its own handlers. The
console level follows the query-logging setting: with
METHODREF_LOG_QUERIES enabled the verdict lines are DEBUG and the sink
opens up to DEBUG, otherwise METHODREF_LOG_LEVEL (default WARNING) applies.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import get_config

PACKAGE = "methodref"
DEFAULT_LOG_LEVEL = "WARNING"

# Handlers added by setup_logging, removed again on reconfiguration
_handler_ids: List[int] = []
_logging_configured = False


def resolve_log_level(level: Optional[str] = None) -> str:
    """
    Pick the console level.

    Order: explicit argument, DEBUG when query logging is on,
    METHODREF_LOG_LEVEL, then WARNING.
    """
    if level:
        return level.upper()
    if get_config().log_queries:
        return "DEBUG"
    return os.getenv("METHODREF_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def setup_logging(level=None, suppress_console=None, enable_file_logging=None, force=False):
    """
    Configures the methodref sinks.

    Args:
        level: Console level; see resolve_log_level for the default
        suppress_console: If True, no console sink. If None, check METHODREF_MACHINE_MODE env var.
        enable_file_logging: If True, also log to METHODREF_LOG_DIR/methodref.log.
            If None, check METHODREF_FILE_LOGGING env var.
        force: Replace sinks from an earlier call instead of keeping them
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    # loguru's stock stderr handler would repeat every methodref record
    try:
        logger.remove(0)
    except ValueError:
        pass

    while _handler_ids:
        logger.remove(_handler_ids.pop())

    if suppress_console is None:
        suppress_console = os.getenv("METHODREF_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if not suppress_console:
        _handler_ids.append(logger.add(
            sys.stderr,
            level=resolve_log_level(level),
            filter=PACKAGE,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        ))

    if enable_file_logging is None:
        enable_file_logging = os.getenv("METHODREF_FILE_LOGGING", "").lower() in ("1", "true", "yes")

    if enable_file_logging:
        log_dir = Path(os.getenv("METHODREF_LOG_DIR", ".methodref/logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        # Verdict lines are only worth keeping on disk when they were asked for
        file_level = "DEBUG" if get_config().log_queries else "INFO"
        _handler_ids.append(logger.add(
            log_dir / "methodref.log",
            level=file_level,
            filter=PACKAGE,
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True
        ))


setup_logging()
