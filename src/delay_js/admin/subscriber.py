"""Event subscriber wiring the delay JS settings into the host lifecycle."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from delay_js.admin.sanitization import SanitizationContext
from delay_js.admin.settings import Settings
from delay_js.host.notices import NoticeSink
from delay_js.host.options import OptionStore
from delay_js.i18n import translate
from delay_js.models.events import EventName, NoticeSeverity, Subscription
from delay_js.models.options import (
    AUTOPTIMIZE_JS_AGGREGATE,
    DELAY_JS,
    SETTINGS_GROUP,
    ToggleState,
    option_state,
)

logger = logging.getLogger(__name__)

COMPATIBILITY_NOTICE = "compatibility_notice"

AUTOPTIMIZE_CONFLICT_MESSAGE = (
    "We have detected that Autoptimize's JavaScript Aggregation feature is enabled. "
    "The Delay JavaScript Execution will not be applied to the file it creates. "
    "We suggest disabling it to take full advantage of Delay JavaScript Execution."
)

_SUBSCRIBED_EVENTS: Mapping[EventName, tuple[Subscription, ...]] = MappingProxyType(
    {
        EventName.FIRST_INSTALL_OPTIONS: (Subscription("add_options"),),
        EventName.UPGRADE: (Subscription("set_option_on_update", 13, 2),),
        EventName.INPUT_SANITIZE: (Subscription("sanitize_options", 13, 2),),
        EventName.PRE_UPDATE_SETTINGS: (
            Subscription("maybe_disable_combine_js", 11, 2),
            Subscription("add_notice_when_delayjs_and_autoptimize_aggregatejs", 10, 2),
        ),
    }
)


def _aggregate_state(value: Any) -> ToggleState:
    # Autoptimize stores its checkbox as the literal string "on".
    if value is None:
        return ToggleState.UNSET
    return ToggleState.ON if value == "on" else ToggleState.OFF


class Subscriber:
    def __init__(
        self,
        settings: Settings,
        options: OptionStore,
        notices: NoticeSink,
        *,
        text_domain: str = "rocket",
        locale_dir: Path | None = None,
    ) -> None:
        self.settings = settings
        self.options = options
        self.notices = notices
        self.text_domain = text_domain
        self.locale_dir = locale_dir

    @classmethod
    def get_subscribed_events(cls) -> Mapping[EventName, tuple[Subscription, ...]]:
        """Return the events this subscriber listens to, in declaration order."""
        return _SUBSCRIBED_EVENTS

    def add_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Add the delay JS defaults to the first-install options."""
        return self.settings.add_options(options)

    def set_option_on_update(self, new_version: str, old_version: str) -> None:
        """Migrate the delay JS options when upgrading from ``old_version``."""
        self.settings.set_option_on_update(old_version)

    def sanitize_options(self, values: Mapping[str, Any], context: SanitizationContext) -> dict[str, Any]:
        return self.settings.sanitize_options(values, context)

    def maybe_disable_combine_js(self, value: Mapping[str, Any], old_value: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.settings.maybe_disable_combine_js(value, old_value)

    def add_notice_when_delayjs_and_autoptimize_aggregatejs(
        self, value: Mapping[str, Any], old_value: Mapping[str, Any]
    ) -> Mapping[str, Any]:
        """Warn when delay JS gets enabled while Autoptimize aggregates JS.

        Observes only: ``value`` is always returned as received.
        """
        aggregate = _aggregate_state(self.options.get_option(AUTOPTIMIZE_JS_AGGREGATE))
        if aggregate is not ToggleState.ON:
            logger.debug(
                "Autoptimize JS aggregation is %s",
                aggregate.value,
                extra={"event": "compatibility.skipped", "data": {"autoptimize_js_aggregate": aggregate.value}},
            )
            return value

        # A flag missing from the previous bag means the feature was off.
        was_off = option_state(old_value, DELAY_JS) in (ToggleState.OFF, ToggleState.UNSET)
        now_on = option_state(value, DELAY_JS) is ToggleState.ON
        if not (was_off and now_on):
            return value

        text = translate(AUTOPTIMIZE_CONFLICT_MESSAGE, self.text_domain, locale_dir=self.locale_dir)
        message = "</strong>" + text + "<strong>"
        self.notices.add_settings_error(SETTINGS_GROUP, COMPATIBILITY_NOTICE, message, NoticeSeverity.INFO.value)
        return value


__all__ = ["AUTOPTIMIZE_CONFLICT_MESSAGE", "COMPATIBILITY_NOTICE", "Subscriber"]
