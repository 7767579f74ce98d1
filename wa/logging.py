"""Structured logging setup for wa.

Logs go to stderr through a Rich console handler so they never mix with the
output of external operations streamed on stdout. structlog supplies the
key/value event rendering.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

import structlog
from rich.console import Console
from rich.markup import escape

__all__ = [
    "configure_logging",
    "get_logger",
]

_CONFIGURED = False
_CONSOLE = Console(soft_wrap=True, stderr=True)

_LEVEL_STYLES: Dict[str, str] = {
    "CRITICAL": "bold white on red",
    "ERROR": "red",
    "WARNING": "yellow",
    "INFO": "white",
    "DEBUG": "cyan",
    "NOTSET": "grey50",
}


class RichConsoleHandler(logging.Handler):
    """Stream handler that delegates rendering to Rich."""

    def __init__(self) -> None:
        super().__init__()
        self.console = _CONSOLE

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            message = self.format(record)
            self.console.print(message, markup=True, highlight=False, overflow="ignore")
        except Exception:  # pragma: no cover - logging must not raise
            self.handleError(record)


def _level_markup(level: str) -> str:
    style = _LEVEL_STYLES.get(level, "white")
    return f"[{style}]{level:<7}[/]"


def _format_pairs(pairs: Iterable[tuple[str, Any]]) -> str:
    formatted = []
    for key, value in pairs:
        if isinstance(value, (dict, list, tuple)):
            formatted.append(f"{key}={value!r}")
        elif isinstance(value, str) and " " in value:
            formatted.append(f"{key}=\"{value}\"")
        else:
            formatted.append(f"{key}={value}")
    return escape(" ".join(formatted))


def _console_renderer(
    logger: logging.Logger,
    name: str,
    event_dict: Dict[str, Any],
) -> str:
    timestamp = event_dict.pop("timestamp", None)
    level = event_dict.pop("level", "INFO").upper()
    component = event_dict.pop("logger", name)
    event = escape(str(event_dict.pop("event", "")))

    if isinstance(timestamp, str):
        ts_text = timestamp.split("T")[-1]
        if "." in ts_text:
            ts_text = ts_text.rsplit(".", 1)[0]
    else:
        ts_text = datetime.now().strftime("%H:%M:%S")

    pairs = _format_pairs(sorted(event_dict.items()))
    prefix = " | ".join(
        (
            f"[dim]{ts_text}[/dim]",
            _level_markup(level),
            f"[dim]{component}[/dim]",
        )
    )
    if pairs:
        return f"{prefix} | {event} {pairs}"
    return f"{prefix} | {event}"


def _pre_chain() -> list[Any]:
    return [
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _common_processors() -> list[Any]:
    return [*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter]


def configure_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Configure console logging once per process.

    Args:
        level: Optional level name; defaults to WA_LOG_LEVEL or WARNING.
        force: Reconfigure even if logging was already set up.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    resolved_level = (level or os.getenv("WA_LOG_LEVEL", "WARNING")).upper()
    if resolved_level not in _LEVEL_STYLES:
        resolved_level = "WARNING"

    console_handler = RichConsoleHandler()
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_console_renderer,
            foreign_pre_chain=_pre_chain(),
        )
    )

    root = logging.getLogger("wa")
    root.handlers = [console_handler]
    root.setLevel(getattr(logging, resolved_level, logging.WARNING))
    root.propagate = False

    structlog.configure(
        processors=_common_processors(),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    _CONFIGURED = True


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given name and context."""
    configure_logging()
    base = structlog.get_logger(name or "wa")
    if context:
        return base.bind(**context)
    return base
