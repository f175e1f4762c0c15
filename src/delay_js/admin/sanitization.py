"""Helpers used while sanitising a submitted settings form."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from delay_js.exceptions import OptionValueError
from delay_js.models.options import parse_flag

_TAG_RE = re.compile(r"<[^>]*>")


class SanitizationContext:
    """Form-level helpers passed to each ``sanitize_options`` handler."""

    def sanitize_checkbox(self, values: Mapping[str, Any], key: str) -> int:
        """Return 1/0 for a submitted checkbox; an unchecked box is simply absent.

        Raises :class:`OptionValueError` for values that are not a recognisable flag.
        """
        try:
            return 1 if parse_flag(values.get(key), default=False) else 0
        except OptionValueError as exc:
            raise OptionValueError(f"{key}: {exc}") from exc

    def sanitize_textarea(self, field: str, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, Mapping):
            raise OptionValueError(f"{field} must be text or a list of lines, got a mapping")
        if isinstance(value, str):
            lines: Iterable[Any] = value.splitlines()
        elif isinstance(value, (set, frozenset)):
            lines = sorted(str(item) for item in value)
        elif isinstance(value, Iterable):
            lines = value
        else:
            lines = [value]

        cleaned = (_TAG_RE.sub("", str(line)).strip() for line in lines if line is not None)
        return list(dict.fromkeys(line for line in cleaned if line))


__all__ = ["SanitizationContext"]
