"""Option keys and explicit flag parsing for raw option values.

Raw values arrive from form submissions and the option store as strings,
ints, bools or nothing at all. They are parsed once, here, into a
:class:`ToggleState` instead of being truncated to integers at each use.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from delay_js.exceptions import OptionValueError

SETTINGS_GROUP = "general"

DELAY_JS = "delay_js"
DELAY_JS_EXCLUSIONS = "delay_js_exclusions"
MINIFY_CONCATENATE_JS = "minify_concatenate_js"
AUTOPTIMIZE_JS_AGGREGATE = "autoptimize_js_aggregate"

_ON_TOKENS = frozenset({"1", "on", "true", "yes"})
_OFF_TOKENS = frozenset({"0", "off", "false", "no", ""})


class ToggleState(str, Enum):
    ON = "on"
    OFF = "off"
    UNSET = "unset"
    INVALID = "invalid"

    @property
    def enabled(self) -> bool:
        return self is ToggleState.ON


def parse_toggle(value: Any) -> ToggleState:
    """Classify a raw option value without raising."""

    if value is None:
        return ToggleState.UNSET
    if isinstance(value, bool):
        return ToggleState.ON if value else ToggleState.OFF
    if isinstance(value, (int, float)):
        if value == 1:
            return ToggleState.ON
        if value == 0:
            return ToggleState.OFF
        return ToggleState.INVALID
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _ON_TOKENS:
            return ToggleState.ON
        if token in _OFF_TOKENS:
            return ToggleState.OFF
    return ToggleState.INVALID


def parse_flag(value: Any, *, default: bool | None = None) -> bool:
    """Parse a raw value into a bool, raising on anything ambiguous.

    ``default`` is returned for missing values; without one a missing value
    is an error too.
    """

    state = parse_toggle(value)
    if state is ToggleState.UNSET:
        if default is None:
            raise OptionValueError("flag value is missing")
        return default
    if state is ToggleState.INVALID:
        raise OptionValueError(f"Invalid flag value: {value!r}")
    return state.enabled


def option_state(options: Any, key: str) -> ToggleState:
    """Look up ``key`` in an options bag and classify it."""

    if not hasattr(options, "get"):
        return ToggleState.UNSET
    return parse_toggle(options.get(key))


__all__ = [
    "AUTOPTIMIZE_JS_AGGREGATE",
    "DELAY_JS",
    "DELAY_JS_EXCLUSIONS",
    "MINIFY_CONCATENATE_JS",
    "SETTINGS_GROUP",
    "ToggleState",
    "option_state",
    "parse_flag",
    "parse_toggle",
]
