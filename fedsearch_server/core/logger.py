"""
Logging setup for the servers and the CLI.

All module loggers are children of the "fedsearch_server" logger; the
MCP and agent SDK loggers can be bound to the same handlers so tool-call
execution shows up in the server console and log file.
"""
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that carry MCP request handling
SERVER_LIBRARY_LOGGERS = (
    "dp",
    "dp.agent",
    "dp.agent.server",
    "mcp",
    "mcp.server",
)


def dated_log_file(base_dir: Optional[Path] = None, day: Optional[date] = None) -> Path:
    """
    Default log path: `<base_dir>/fedsearch_YYYYMMDD.log`.

    `base_dir` falls back to FEDSEARCH_LOG_DIR, then to the working directory.
    """
    if base_dir is None:
        env_dir = (os.getenv("FEDSEARCH_LOG_DIR") or "").strip()
        base_dir = Path(env_dir) if env_dir else Path.cwd()
    day = day or date.today()
    return Path(base_dir) / f"fedsearch_{day.strftime('%Y%m%d')}.log"


def _build_handlers(level: int, log_file: Optional[Path], format_string: str) -> List[logging.Handler]:
    formatter = logging.Formatter(format_string)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logger(
    name: str = "fedsearch_server",
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    bind: Iterable[str] = (),
) -> logging.Logger:
    """
    Configure the package logger, replacing any handlers set earlier.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, written as UTF-8
        format_string: Optional custom format string
        bind: Names of other loggers that should write to the same handlers
              instead of propagating to the root logger

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    handlers = _build_handlers(log_level, log_file, format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(name)
    for target in [logger, *(logging.getLogger(n) for n in bind)]:
        target.handlers.clear()
        target.setLevel(log_level)
        for handler in handlers:
            target.addHandler(handler)
    for n in bind:
        logging.getLogger(n).propagate = False

    return logger
