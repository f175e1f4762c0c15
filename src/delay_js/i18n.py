"""Translation lookup for user-facing strings."""

from __future__ import annotations

import gettext
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=None)
def _translations(domain: str, localedir: str | None) -> gettext.NullTranslations:
    return gettext.translation(domain, localedir=localedir, fallback=True)


def translate(text: str, domain: str, *, locale_dir: Path | None = None) -> str:
    """Return ``text`` translated in ``domain``, or ``text`` itself when no catalog exists."""
    localedir = str(locale_dir) if locale_dir is not None else None
    return _translations(domain, localedir).gettext(text)


__all__ = ["translate"]
