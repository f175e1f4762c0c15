"""Delay JS option logic: defaults, upgrade migration, sanitisation and conflicts."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping

from delay_js.admin.sanitization import SanitizationContext
from delay_js.host.options import OptionStore
from delay_js.infrastructure.settings import DEFAULT_EXCLUSIONS
from delay_js.models.options import (
    DELAY_JS,
    DELAY_JS_EXCLUSIONS,
    MINIFY_CONCATENATE_JS,
    ToggleState,
    option_state,
)

logger = logging.getLogger(__name__)


_VERSION_RE = re.compile(r"^\s*v?(\d+(?:\.\d+)*)(?:[-_.+]?([a-z]+)[-_.]?(\d*))?", re.IGNORECASE)

# Pre-release tags sort below the release they precede; patch-level tags above it.
_STAGE_RANKS = {"dev": 0, "alpha": 1, "a": 1, "beta": 2, "b": 2, "rc": 3, "pl": 5, "p": 5}
_RELEASE_RANK = 4


def _version_key(version: str) -> tuple[tuple[int, ...], int, int]:
    match = _VERSION_RE.match(str(version))
    if match is None:
        return (), _RELEASE_RANK, 0
    parts = [int(part) for part in match.group(1).split(".")]
    while parts and parts[-1] == 0:
        parts.pop()
    stage = (match.group(2) or "").lower()
    rank = _STAGE_RANKS.get(stage, _RELEASE_RANK) if stage else _RELEASE_RANK
    return tuple(parts), rank, int(match.group(3) or 0)


def version_lt(left: str, right: str) -> bool:
    """Compare release numbers; ``3.9-beta1`` is older than ``3.9``."""
    return _version_key(left) < _version_key(right)


class Settings:
    """Owns the delay JS keys of the plugin settings bag."""

    def __init__(
        self,
        options: OptionStore,
        *,
        option_name: str = "wp_rocket_settings",
        threshold_version: str = "3.9",
        default_exclusions: Iterable[str] = DEFAULT_EXCLUSIONS,
    ) -> None:
        self.options = options
        self.option_name = option_name
        self.threshold_version = threshold_version
        self.default_exclusions = tuple(default_exclusions)

    def add_options(self, options: Mapping[str, Any] | None) -> dict[str, Any]:
        merged = dict(options or {})
        merged[DELAY_JS] = 1
        merged[DELAY_JS_EXCLUSIONS] = []
        return merged

    def set_option_on_update(self, old_version: str) -> None:
        if not version_lt(old_version, self.threshold_version):
            return

        options = dict(self.options.get_option(self.option_name, {}) or {})
        options[DELAY_JS_EXCLUSIONS] = []

        if option_state(options, DELAY_JS) is ToggleState.ON:
            options[MINIFY_CONCATENATE_JS] = 0
            options[DELAY_JS_EXCLUSIONS] = list(self.default_exclusions)

        self.options.update_option(self.option_name, options)
        logger.info(
            "Delay JS options migrated from %s",
            old_version,
            extra={
                "event": "settings.migrated",
                "data": {"old_version": old_version, "exclusions": len(options[DELAY_JS_EXCLUSIONS])},
            },
        )

    def sanitize_options(self, values: Mapping[str, Any], context: SanitizationContext) -> dict[str, Any]:
        sanitized = dict(values)
        sanitized[DELAY_JS] = context.sanitize_checkbox(values, DELAY_JS)
        exclusions = values.get(DELAY_JS_EXCLUSIONS)
        sanitized[DELAY_JS_EXCLUSIONS] = (
            context.sanitize_textarea(DELAY_JS_EXCLUSIONS, exclusions) if exclusions else []
        )
        return sanitized

    def maybe_disable_combine_js(self, value: Mapping[str, Any], old_value: Mapping[str, Any]) -> Mapping[str, Any]:
        if DELAY_JS not in value or MINIFY_CONCATENATE_JS not in value:
            return value

        if option_state(value, DELAY_JS).enabled and option_state(value, MINIFY_CONCATENATE_JS).enabled:
            logger.debug("Combine JS disabled because delay JS is on", extra={"event": "settings.combine_js_disabled"})
            updated = dict(value)
            updated[MINIFY_CONCATENATE_JS] = 0
            return updated

        return value


__all__ = ["Settings", "version_lt"]
