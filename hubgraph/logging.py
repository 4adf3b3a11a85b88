"""femtologging wiring for HubGraph.

Modules obtain a logger with :func:`get_logger` and emit through the
``log_*`` helpers, which interpolate percent-style arguments before the
message reaches femtologging. The poll loop's structured ``[event] key=value``
messages are built the same way.

``HUBGRAPH_LOG_LEVEL`` is applied once, by :func:`configure_logging`, when the
server starts.
"""

from __future__ import annotations

import typing as typ

from femtologging import basicConfig, get_logger

DEFAULT_LEVEL = "INFO"

_LEVELS = frozenset(
    {"TRACE", "DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}
)


class _Logger(typ.Protocol):
    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def configure_logging(level: str | None) -> tuple[str, bool]:
    """Apply a log level to femtologging's root logger.

    Parameters
    ----------
    level : str | None
        Level name as read from the environment; case and surrounding
        whitespace are ignored.

    Returns
    -------
    tuple[str, bool]
        The level applied and whether ``level`` was unusable, in which case
        :data:`DEFAULT_LEVEL` was applied instead and the caller should warn.

    """
    candidate = (level or "").strip().upper()
    invalid = candidate not in _LEVELS
    applied = DEFAULT_LEVEL if invalid else candidate
    basicConfig(level=applied)
    return (applied, invalid)


def _emit(
    logger: _Logger,
    level: str,
    template: str,
    args: tuple[object, ...],
    exc_info: BaseException | None = None,
) -> None:
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_debug(logger: _Logger, template: str, *args: object) -> None:
    """Log page and wait progress at DEBUG."""
    _emit(logger, "DEBUG", template, args)


def log_info(logger: _Logger, template: str, *args: object) -> None:
    """Log lifecycle and run outcomes at INFO."""
    _emit(logger, "INFO", template, args)


def log_warning(logger: _Logger, template: str, *args: object) -> None:
    """Log recoverable problems, such as rate limiting, at WARNING."""
    _emit(logger, "WARNING", template, args)


def log_error(
    logger: _Logger,
    template: str,
    *args: object,
    exc_info: BaseException | None = None,
) -> None:
    """Log a failure at ERROR, optionally attaching the exception."""
    _emit(logger, "ERROR", template, args, exc_info)


def log_exception(logger: _Logger, message: str, exc: BaseException) -> None:
    """Log ``message`` verbatim at ERROR with ``exc`` attached."""
    _emit(logger, "ERROR", message, (), exc)


__all__ = [
    "DEFAULT_LEVEL",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
]
