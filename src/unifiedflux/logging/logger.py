"""
Structured logger for unifiedflux.

Records go through the stdlib ``logging`` machinery. Keyword arguments passed
to a log call become attributes of the ``LogRecord`` and are rendered by
``StructuredFormatter`` either as ``key=value`` pairs or as JSON fields.
"""

from __future__ import annotations

import contextlib
import datetime
import enum
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from unifiedflux.logging.config import LoggingSettings
from unifiedflux.logging.level import LogLevel

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

# Fields added by context()/async_context(); inherited by tasks spawned inside.
_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "unifiedflux_log_context", default={}
)

# Attributes every LogRecord carries; anything else on a record is context.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

# Marks handlers installed by FluxLogger so configuration runs once per name.
_HANDLER_MARK = "_unifiedflux_handler"


def context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The structured fields attached to ``record``, in insertion order."""
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class FluxJsonEncoder(json.JSONEncoder):
    """JSON encoder with string fallbacks for values found in log context."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime.date):
            return obj.isoformat()
        if isinstance(obj, type):
            return obj.__qualname__
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, BaseException):
            return f"{type(obj).__name__}: {obj}"
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        return str(obj)


class StructuredFormatter(logging.Formatter):
    """Renders a record's message followed by its context fields.

    Text output looks like ``INFO unifiedflux.dispatch | Dispatching request
    request_type=Ping``; JSON output is one object per record.
    """

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        parts = ["%(name)s | %(message)s"]
        if include_level and not json_format:
            parts.insert(0, "%(levelname)s")
        if include_timestamp:
            parts.insert(0, "%(asctime)s")
        super().__init__(fmt=" ".join(parts), datefmt="%Y-%m-%d %H:%M:%S")

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> StructuredFormatter:
        return cls(
            json_format=settings.json_format,
            include_timestamp=settings.include_timestamp,
            include_level=settings.include_level,
        )

    def format(self, record: logging.LogRecord) -> str:
        fields = context_fields(record)
        if self.json_format:
            return self._to_json(record, fields)

        line = super().format(record)
        if not fields:
            return line
        rendered = " ".join(f"{k}={self._render(v)}" for k, v in fields.items())
        # Keep fields on the first line when a traceback follows.
        head, newline, rest = line.partition("\n")
        return f"{head} {rendered}{newline}{rest}"

    def _to_json(self, record: logging.LogRecord, fields: dict[str, Any]) -> str:
        payload: dict[str, Any] = {
            "message": record.getMessage(),
            "name": record.name,
            **fields,
        }
        if self.include_level:
            payload["level"] = record.levelname
        if self.include_timestamp:
            payload["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, cls=FluxJsonEncoder, ensure_ascii=False)

    @staticmethod
    def _render(value: Any) -> str:
        if isinstance(value, str):
            return f'"{value}"' if " " in value else value
        if isinstance(value, type):
            return value.__qualname__
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, datetime.date):
            return value.isoformat()
        if isinstance(value, BaseException):
            return f'"{type(value).__name__}: {value}"'
        try:
            return json.dumps(value, cls=FluxJsonEncoder)
        except (TypeError, ValueError):
            return str(value)


class FluxLogger:
    """Structured logger used throughout unifiedflux.

    Fields come from three places, later ones winning: values bound with
    ``bind()``, values set by ``context()``/``async_context()``, and keyword
    arguments of the log call. A field whose name collides with a
    ``LogRecord`` attribute is emitted as ``ctx_<name>``.
    """

    def __init__(
        self,
        name: str,
        level: LogLevel | str | int | None = None,
        settings: LoggingSettings | None = None,
    ) -> None:
        """
        Args:
            name: Logger name
            level: Overrides the configured level for this logger name
            settings: Logger settings; loaded from the environment if None
        """
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._logger = logging.getLogger(name)
        self._bound: dict[str, Any] = {}
        self._install_handlers()
        if level is not None:
            self.set_level(LogLevel.coerce(level))

    def _install_handlers(self) -> None:
        if any(getattr(h, _HANDLER_MARK, False) for h in self._logger.handlers):
            return

        handlers: list[logging.Handler] = []
        if self._settings.console_enabled:
            stream = sys.stderr if self._settings.console_stream == "stderr" else sys.stdout
            handlers.append(logging.StreamHandler(stream))
        if self._settings.file_enabled and self._settings.file_path is not None:
            handlers.append(logging.FileHandler(self._settings.file_path, encoding="utf-8"))

        formatter = StructuredFormatter.from_settings(self._settings)
        for handler in handlers:
            handler.setFormatter(formatter)
            setattr(handler, _HANDLER_MARK, True)
            self._logger.addHandler(handler)

        self._logger.setLevel(self._settings.level.to_stdlib_level())
        self._logger.propagate = False

    @property
    def settings(self) -> LoggingSettings:
        return self._settings

    def _log(self, level: int, msg: str, args: tuple[Any, ...], fields: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        exc_info = fields.pop("exc_info", None)
        merged = {**self._bound, **_log_context.get(), **fields}
        extra = {
            (f"ctx_{key}" if key in _RECORD_ATTRS else key): value
            for key, value in merged.items()
        }
        # stacklevel=3 attributes the record to the caller of debug()/info()/...
        self._logger.log(level, msg, *args, exc_info=exc_info, extra=extra, stacklevel=3)

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.WARNING, msg, args, fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.ERROR, msg, args, fields)

    def critical(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log(logging.CRITICAL, msg, args, fields)

    def exception(self, msg: str, *args: Any, **fields: Any) -> None:
        fields.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, fields)

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(level.to_stdlib_level())

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(level.to_stdlib_level())

    @contextlib.contextmanager
    def context(self, **fields: Any) -> Iterator[None]:
        """Attach ``fields`` to every record emitted inside the block."""
        token = _log_context.set({**_log_context.get(), **fields})
        try:
            yield
        finally:
            _log_context.reset(token)

    @contextlib.asynccontextmanager
    async def async_context(self, **fields: Any) -> AsyncIterator[None]:
        """Async form of ``context()``; tasks created inside inherit the fields."""
        token = _log_context.set({**_log_context.get(), **fields})
        try:
            yield
        finally:
            _log_context.reset(token)

    def bind(self, **fields: Any) -> FluxLogger:
        """A logger for the same name that adds ``fields`` to every record."""
        bound = FluxLogger(self.name, settings=self._settings)
        bound._bound = {**self._bound, **fields}
        return bound

    def with_correlation_id(self, correlation_id: str) -> FluxLogger:
        return self.bind(correlation_id=correlation_id)


def get_logger(
    name: str,
    level: LogLevel | str | int | None = None,
    settings: LoggingSettings | None = None,
) -> FluxLogger:
    """Get a structured logger, installing its handlers on first use of ``name``."""
    return FluxLogger(name, level=level, settings=settings)
