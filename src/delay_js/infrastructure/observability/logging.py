"""Logging setup with text and NDJSON formatters."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import IO, Any

ROOT_LOGGER = "delay_js"


def _format_timestamp(created: float) -> str:
    """Format a LogRecord ``created`` timestamp as RFC3339-ish UTC."""
    return (
        datetime.fromtimestamp(created, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _truncate_value(value: Any, *, max_length: int = 120) -> str:
    text = str(value)
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - matches logging.Formatter API
        payload: dict[str, Any] = {
            "ts": _format_timestamp(record.created),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": getattr(record, "event", None) or "log",
            "message": record.getMessage(),
        }

        data = getattr(record, "data", None)
        if data is not None:
            payload["data"] = data

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            payload["exc_type"] = getattr(exc_type, "__name__", None)
            payload["exc"] = str(exc)
            payload["traceback"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Render records as readable single-line text, with data as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - matches logging.Formatter API
        timestamp = _format_timestamp(record.created)
        event_name = getattr(record, "event", None) or "log"
        label = record.name if event_name == "log" else event_name
        head = f"[{timestamp}] {record.levelname.upper()} {label}: {record.getMessage()}"

        data = getattr(record, "data", None)
        if isinstance(data, dict) and data:
            extras = [f"{key}={_truncate_value(data[key])}" for key in sorted(data)[:8]]
            if len(data) > 8:
                extras.append("…")
            head += " (" + ", ".join(extras) + ")"

        if record.exc_info:
            head += "\n" + "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")

        return head


def setup_logging(
    *,
    log_format: str = "text",
    log_level: int = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler, so the CLI can reconfigure
    per invocation.
    """
    normalized_format = (log_format or "text").strip().lower()
    if normalized_format not in {"text", "ndjson"}:
        raise ValueError("log_format must be 'text' or 'ndjson'")

    formatter: logging.Formatter = JsonFormatter() if normalized_format == "ndjson" else TextFormatter()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    base_logger = logging.getLogger(ROOT_LOGGER)
    base_logger.setLevel(log_level)
    base_logger.handlers = [handler]
    base_logger.propagate = False
    return base_logger


__all__ = ["JsonFormatter", "ROOT_LOGGER", "TextFormatter", "setup_logging"]
