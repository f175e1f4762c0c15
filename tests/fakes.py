"""Test doubles for the settings collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RecordingSettings:
    """Settings double that records calls and returns canned values."""

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    fail_with: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def add_options(self, options):
        self._record("add_options", options)
        return {**options, "delay_js": 1, "delay_js_exclusions": []}

    def set_option_on_update(self, old_version):
        self._record("set_option_on_update", old_version)

    def sanitize_options(self, values, context):
        self._record("sanitize_options", values, context)
        return {**values, "sanitized": True}

    def maybe_disable_combine_js(self, value, old_value):
        self._record("maybe_disable_combine_js", value, old_value)
        return {**value, "minify_concatenate_js": 0}
