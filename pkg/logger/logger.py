"""
Structured logging module.

Loggers accept arbitrary keyword fields which are rendered as JSON keys
(or ``key=value`` pairs in text mode), plus a request ID taken from context.
"""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Optional


request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Attributes every LogRecord carries; anything else on a record is a field.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Extract the structured fields attached to a record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS
    }


def _serialize_value(value: Any) -> Any:
    """
    Convert a field value into something JSON can encode.

    Args:
        value: Value to serialize.

    Returns:
        JSON-serializable value.
    """
    if isinstance(value, (str, int, float, bool, type(None))):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_serialize_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items()}
    return str(value)


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        for key, value in _record_fields(record).items():
            log_data[key] = _serialize_value(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter appending fields as key=value pairs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _record_fields(record)
        request_id = request_id_var.get()
        if request_id:
            fields["request_id"] = request_id
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class StructuredLogger(logging.Logger):
    """
    Logger with structured logging support.

    ``logger.info("Price saved", category_id="sofas")`` attaches
    ``category_id`` to the record. Field names that clash with LogRecord
    attributes get a trailing underscore.
    """

    def _log(  # type: ignore[override]
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: Optional[dict[str, Any]] = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **fields: Any,
    ) -> None:
        merged = dict(extra or {})
        for key, value in fields.items():
            merged[f"{key}_" if key in _RECORD_ATTRS else key] = value
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=merged,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
) -> None:
    """
    Set up root logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Whether to use JSON format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(StructuredFormatter() if json_format else TextFormatter())
    root_logger.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.
    """
    return logging.getLogger(name)  # type: ignore


def set_request_id(request_id: Optional[str]) -> None:
    """
    Set the request ID in context.

    Args:
        request_id: Request identifier.
    """
    request_id_var.set(request_id)


def get_request_id() -> Optional[str]:
    """
    Get the current request ID from context.

    Returns:
        Request ID or None.
    """
    return request_id_var.get()
