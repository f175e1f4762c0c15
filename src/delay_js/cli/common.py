"""Shared helpers/options for the delay-js CLI."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Optional

import typer
from typer import BadParameter

from delay_js.infrastructure.settings import RuntimeSettings


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


LOG_FORMAT_OPTION = typer.Option(None, "--log-format", help="Log output format (default from settings).")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Log level name, e.g. DEBUG or INFO.")
DEBUG_OPTION = typer.Option(False, "--debug", help="Shortcut for --log-level DEBUG.")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def resolve_log_level(log_level: Optional[str], default_level: int) -> int:
    """Resolve a string log level to a logging level constant."""
    if not log_level:
        return default_level

    resolved = logging.getLevelNamesMapping().get(str(log_level).upper())
    if isinstance(resolved, int):
        return resolved

    raise BadParameter(f"Invalid log level: {log_level}", param_hint="log_level")


def resolve_logging(
    *,
    log_format: Optional[LogFormat],
    log_level: Optional[str],
    debug: bool,
    settings: RuntimeSettings,
) -> tuple[str, int]:
    """Compute effective log format/level. Precedence: --debug > --log-level > settings."""
    effective_format = log_format.value if log_format else settings.log_format
    if debug:
        return effective_format, logging.DEBUG
    return effective_format, resolve_log_level(log_level, settings.log_level)


# ---------------------------------------------------------------------------
# JSON arguments
# ---------------------------------------------------------------------------


def parse_json_object(raw: Optional[str], *, param_hint: str) -> dict[str, Any]:
    """Parse a JSON object passed on the command line; empty means ``{}``."""
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise BadParameter(f"Invalid JSON: {exc.msg}", param_hint=param_hint) from exc
    if not isinstance(parsed, dict):
        raise BadParameter("Expected a JSON object", param_hint=param_hint)
    return parsed


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, sort_keys=True))


__all__ = [
    "DEBUG_OPTION",
    "LOG_FORMAT_OPTION",
    "LOG_LEVEL_OPTION",
    "LogFormat",
    "echo_json",
    "parse_json_object",
    "resolve_log_level",
    "resolve_logging",
]
