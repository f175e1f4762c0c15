"""Event names, subscription records and admin notices.

Event names keep the host's wire strings as their values so that a registry
built here can be matched against the host dispatcher one to one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_PRIORITY = 10


class EventKind(str, Enum):
    FILTER = "filter"
    ACTION = "action"


class EventName(str, Enum):
    FIRST_INSTALL_OPTIONS = "rocket_first_install_options"
    UPGRADE = "wp_rocket_upgrade"
    INPUT_SANITIZE = "rocket_input_sanitize"
    PRE_UPDATE_SETTINGS = "pre_update_option_wp_rocket_settings"

    @property
    def kind(self) -> EventKind:
        return EventKind.ACTION if self is EventName.UPGRADE else EventKind.FILTER


@dataclass(frozen=True)
class Subscription:
    """One handler declared by a subscriber for an event."""

    handler: str
    priority: int = DEFAULT_PRIORITY
    accepted_args: int = 1


class NoticeSeverity(str, Enum):
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    setting: str
    code: str
    message: str
    type: NoticeSeverity = NoticeSeverity.ERROR

    def as_dict(self) -> dict[str, str]:
        return {
            "setting": self.setting,
            "code": self.code,
            "message": self.message,
            "type": self.type.value,
        }


__all__ = [
    "DEFAULT_PRIORITY",
    "EventKind",
    "EventName",
    "Notice",
    "NoticeSeverity",
    "Subscription",
]
