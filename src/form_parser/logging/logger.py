"""
Centralized logging configuration for the form parser.

Key behaviors
-------------
* ``get_logger`` is the only way modules obtain a logger, so handlers and
  formatters stay consistent.
* One master log file (default: ``logs/form_parser.log``) and, unless
  ``logging.per_module`` is false, one file per module logger.
* Console output at INFO, or DEBUG when the configured ``debug`` flag is set.
* Optional rotation controlled by ``config/form_parser.yml``.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from form_parser.config import get_config

BASE_LOGGER_NAME = "form_parser"
PROJECT_ROOT = Path(__file__).resolve().parents[3]
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger_cache: Dict[str, Logger] = {}


class _LogSettings:
    configured: bool = False
    level: int = logging.INFO
    log_dir: Path = PROJECT_ROOT / "logs"
    rotate: bool = False
    per_module: bool = True


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _resolve_log_dir(cfg) -> Path:
    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _file_handler(path: Path) -> logging.Handler:
    if _LogSettings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")

    handler.setLevel(_LogSettings.level)
    handler.setFormatter(_formatter())
    return handler


def _configure_base_logger() -> Logger:
    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if _LogSettings.configured:
        return base_logger

    cfg = get_config()
    debug_enabled = bool(cfg.debug)
    level_name = str(cfg.logging.get("level", "INFO")).upper()

    _LogSettings.level = logging.DEBUG if debug_enabled else getattr(logging, level_name, logging.INFO)
    _LogSettings.rotate = bool(cfg.logging.get("rotate", False))
    _LogSettings.per_module = bool(cfg.logging.get("per_module", True))
    _LogSettings.log_dir = _resolve_log_dir(cfg)

    base_logger.setLevel(_LogSettings.level)
    base_logger.propagate = False

    master_name = cfg.logging.get("file", "form_parser.log")
    base_logger.addHandler(_file_handler(_LogSettings.log_dir / master_name))

    console = StreamHandler()
    console.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    console.setFormatter(_formatter())
    base_logger.addHandler(console)

    _LogSettings.configured = True
    return base_logger


def _attach_module_handler(logger: Logger) -> None:
    if any(getattr(h, "is_module_handler", False) for h in logger.handlers):
        return
    filename = f"{logger.name.replace('.', '_')}.log"
    handler = _file_handler(_LogSettings.log_dir / filename)
    handler.is_module_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger wired to the project-wide handlers.

    Module names outside the ``form_parser`` namespace are nested under it
    so they inherit the console and master log handlers.
    """
    base_logger = _configure_base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    if logger_name == BASE_LOGGER_NAME:
        logger = base_logger
    else:
        logger = logging.getLogger(logger_name)
        logger.setLevel(_LogSettings.level)
        logger.propagate = True
        if _LogSettings.per_module:
            _attach_module_handler(logger)

    _logger_cache[logger_name] = logger
    return logger


def list_active_loggers() -> List[str]:
    """Helper for debugging configuration issues in tests."""
    return list(_logger_cache.keys())
