"""
SecretForge Structured Logger
==============================

Provides :class:`ForgeLogger`, a logging facade for SecretForge
components. Records go to stderr through Rich and, when a log file is
configured, to a rotating file as plain text or JSON lines.

Secrets must not reach a log. Callers pass algorithm names, lengths and
counts as keyword context; any context key that names secret material
(``secret``, ``custom_character_set``, ...) is replaced by a length-only
placeholder before a handler sees the record.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

# Context keys whose values are never written out.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"secret", "secrets", "password", "custom_character_set", "charset", "value"}
)

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(operation)s | %(message)s"
_RECORD_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


def _redact(value: Any) -> str:
    try:
        return f"<redacted len={len(value)}>"
    except TypeError:
        return "<redacted>"


# ========================== Filters / Formatters ===========================


class _RedactionFilter(logging.Filter):
    """Replace sensitive context values on every record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = getattr(record, "forge_context", None)
        if context:
            record.forge_context = {
                key: _redact(val) if key in SENSITIVE_KEYS else val
                for key, val in context.items()
            }
        return True


class _JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp``, ``level``, ``logger``, ``component``,
    ``operation`` (when set), ``message``, ``context`` (when any keyword
    context was given) and ``exc_info`` (when an exception is attached).
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": getattr(record, "component", None),
            "message": record.getMessage(),
        }
        operation = getattr(record, "operation", None)
        if operation and operation != "-":
            entry["operation"] = operation
        context = getattr(record, "forge_context", None)
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: int) -> RichHandler:
    """Rich handler on stderr; markup is off so record text prints verbatim."""
    return RichHandler(
        console=Console(theme=_LOG_THEME, stderr=True),
        level=level,
        show_path=False,
        show_time=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )


def _file_handler(
    path: Path, level: int, json_logs: bool, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    if json_logs:
        handler.setFormatter(_JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(fmt=_PLAIN_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
        )
    return handler


# ========================== ForgeLogger ====================================


class ForgeLogger:
    """Context-aware logger bound to one SecretForge component.

    Keyword arguments other than the stdlib ones (``exc_info``,
    ``stack_info``, ``stacklevel``) become structured context on the
    record.

    Usage::

        log = ForgeLogger("engine", log_file="forge.log", json_logs=True)
        with log.operation("batch"):
            log.info("Batch generated", count=10, algorithm="uuid")
        with log.timed("distribution audit"):
            ...

    Args:
        component:       Name of the component, e.g. ``"engine"``; the
                         stdlib logger is ``secretforge.<component>``.
        log_level:       Minimum severity name.
        log_file:        Rotating log file; ``None`` or ``""`` disables it.
        json_logs:       Write JSON lines instead of plain text to the file.
        max_bytes:       File size that triggers rotation.
        backup_count:    Rotated files kept.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: str | None = None

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

        self._logger = logging.getLogger(f"secretforge.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Re-instantiation replaces rather than duplicates handlers.
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        for flt in list(self._logger.filters):
            self._logger.removeFilter(flt)

        self._logger.addFilter(_RedactionFilter())
        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file:
            self._logger.addHandler(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[ForgeLogger]:
        """Tag every record emitted inside the block with ``operation=name``."""
        previous = self._operation
        self._operation = name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log the start at DEBUG and the elapsed time at INFO."""
        start = time.perf_counter()
        self.debug("Started: %s", label)
        try:
            yield
        finally:
            self.info("Completed: %s (%.3f sec)", label, time.perf_counter() - start)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record_kwargs = {k: kwargs.pop(k) for k in list(kwargs) if k in _RECORD_KWARGS}
        extra: dict[str, Any] = {
            "component": self._component,
            "operation": self._operation or "-",
        }
        if kwargs:
            extra["forge_context"] = kwargs
        record_kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, extra=extra, **record_kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    @property
    def component(self) -> str:
        """Name of the component this logger is bound to."""
        return self._component

    @property
    def underlying(self) -> logging.Logger:
        """The stdlib :class:`logging.Logger` behind this facade."""
        return self._logger
