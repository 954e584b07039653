"""
elfcat Structured Logger
=========================

Provides :class:`ElfcatLogger`, a thin facade over :mod:`logging` that
writes colour-coded Rich output to stderr and, optionally, plain-text or
JSON-lines records to a rotating log file.

Each record carries the component name (``decoder``, ``engine``, ``cli``)
and, while an :meth:`ElfcatLogger.operation` block is active, the name of
the running operation.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

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

_ROOT_NAME = "elfcat"


class _JSONFormatter(logging.Formatter):
    """Emit each record as one JSON object per line.

    Output fields::

        {"timestamp": "...", "level": "INFO", "logger": "elfcat.decoder",
         "message": "...", "component": "decoder", "operation": "decode",
         "extra": {...}, "exc_info": "..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("component", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "elfcat_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: str) -> RichHandler:
    return RichHandler(
        console=Console(theme=_LOG_THEME, stderr=True),
        level=level,
        show_path=False,
        show_time=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )


class ElfcatLogger:
    """Component-bound logger for elfcat.

    Usage::

        log = ElfcatLogger("engine", log_file="elfcat.log", json_logs=True)
        with log.operation("decode"):
            log.info("Decoding %s", path)
        with log.timed("report generation"):
            ...

    Args:
        component:       Component name; the stdlib logger is
                         ``elfcat.<component>``.
        log_level:       Minimum severity name.
        log_file:        Rotating log file path, or ``None`` for none.
        json_logs:       Write JSON lines instead of plain text to the file.
        max_bytes:       Size at which the log file rotates.
        backup_count:    Rotated files to keep.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "INFO",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 3,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: str | None = None
        level = getattr(logging, log_level.upper(), logging.INFO)

        self._logger = logging.getLogger(f"{_ROOT_NAME}.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_console_handler(log_level.upper()))

        if log_file is not None:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    # ------------------------------------------------------------------ #
    #  Operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Temporarily binds an operation name to every record."""

        def __init__(self, parent: ElfcatLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> ElfcatLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Context manager setting the ``operation`` field of records."""
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        extra = kwargs.pop("extra", {}) or {}

        passthrough = {"exc_info", "stack_info", "stacklevel"}
        custom = {key: kwargs.pop(key) for key in list(kwargs) if key not in passthrough}

        extra["component"] = self._component
        extra["operation"] = self._operation
        if custom:
            extra["elfcat_extra"] = custom

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Logs start (DEBUG) and completion with elapsed time (INFO)."""

        def __init__(self, logger_inst: ElfcatLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0

        def __enter__(self) -> ElfcatLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._logger.info(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager measuring and logging how long a block took."""
        return self._TimingContext(self, label)
