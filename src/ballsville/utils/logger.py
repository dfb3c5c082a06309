"""Logger configuration and convenience helpers."""

from __future__ import annotations

import logging
import sys

_DEFAULT_LOGGER_NAME = "ballsville"
_DEFAULT_LOG_LEVEL = logging.INFO
_DEFAULT_FORMATTER = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
_DEFAULT_HANDLER = logging.StreamHandler(sys.stdout)
_DEFAULT_HANDLER.setFormatter(_DEFAULT_FORMATTER)

_LEVEL_STATE = {"level": _DEFAULT_LOG_LEVEL}


def _configure_logger(logger: logging.Logger, level: int) -> None:
    """Give ``logger`` the stdout handler and stop propagation.

    An explicitly set level is left alone; only NOTSET loggers get ``level``.
    Repeated calls never stack handlers, so request-scoped modules may call
    ``get_logger`` freely.

    Examples
    --------
    >>> import logging
    >>> from ballsville.utils.logger import _configure_logger
    >>> proxy_logger = logging.getLogger("ballsville.proxy")
    >>> _configure_logger(proxy_logger, logging.INFO)
    >>> proxy_logger.propagate
    False
    """
    if logger.level == logging.NOTSET:
        logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_DEFAULT_HANDLER)
    logger.propagate = False


def get_logger(name: str | None = None, level: int | None = None) -> logging.Logger:
    """Return a configured logger for the given name.

    Without ``level`` the logger starts at the level last passed to
    ``set_level`` (INFO until then).
    """
    logger = logging.getLogger(name or _DEFAULT_LOGGER_NAME)
    _configure_logger(logger, _LEVEL_STATE["level"] if level is None else level)
    return logger


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else _DEFAULT_LOG_LEVEL
    return level


def set_level(level: int | str, logger_names: list[str] | None = None) -> None:
    """Set the level for ``logger_names`` and every logger beneath them.

    The default names are the package and uvicorn. ``level`` may be a name
    such as ``"debug"``; unknown names mean INFO. Package loggers created
    later start at the same level.
    """
    resolved = _resolve_level(level)
    names = logger_names or [_DEFAULT_LOGGER_NAME, "uvicorn"]
    if _DEFAULT_LOGGER_NAME in names:
        _LEVEL_STATE["level"] = resolved
    existing = [
        name
        for name, logger in logging.Logger.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    ]
    for name in names:
        logging.getLogger(name).setLevel(resolved)
        for child in existing:
            if child.startswith(f"{name}."):
                logging.getLogger(child).setLevel(resolved)
