"""Admin notice sink used to surface non-blocking messages on the settings screen."""

from __future__ import annotations

import logging
from typing import List, Protocol, runtime_checkable

from delay_js.models.events import Notice, NoticeSeverity

logger = logging.getLogger(__name__)


@runtime_checkable
class NoticeSink(Protocol):
    def add_settings_error(self, setting: str, code: str, message: str, type: str = "error") -> None: ...


class SettingsErrors:
    """Collects notices for the current request."""

    def __init__(self) -> None:
        self._notices: List[Notice] = []

    def add_settings_error(self, setting: str, code: str, message: str, type: str = "error") -> None:
        notice = Notice(setting=setting, code=code, message=message, type=NoticeSeverity(type))
        self._notices.append(notice)
        logger.info(
            "Settings notice added: %s",
            code,
            extra={"event": "notice.added", "data": {"setting": setting, "code": code, "type": notice.type.value}},
        )

    def get_settings_errors(self, setting: str | None = None) -> list[Notice]:
        if setting is None:
            return list(self._notices)
        return [notice for notice in self._notices if notice.setting == setting]

    def clear(self) -> None:
        self._notices.clear()

    def __len__(self) -> int:
        return len(self._notices)


__all__ = ["NoticeSink", "SettingsErrors"]
