"""Domain models: events, subscriptions, notices and option flags."""

from delay_js.models.events import (
    DEFAULT_PRIORITY,
    EventKind,
    EventName,
    Notice,
    NoticeSeverity,
    Subscription,
)
from delay_js.models.options import ToggleState, option_state, parse_flag, parse_toggle

__all__ = [
    "DEFAULT_PRIORITY",
    "EventKind",
    "EventName",
    "Notice",
    "NoticeSeverity",
    "Subscription",
    "ToggleState",
    "option_state",
    "parse_flag",
    "parse_toggle",
]
