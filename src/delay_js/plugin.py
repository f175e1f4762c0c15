"""Plugin wiring: builds the collaborators and runs the host lifecycle flows."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from delay_js.admin.sanitization import SanitizationContext
from delay_js.admin.settings import Settings
from delay_js.admin.subscriber import Subscriber
from delay_js.events.manager import EventManager
from delay_js.host.notices import NoticeSink, SettingsErrors
from delay_js.host.options import InMemoryOptionStore, OptionStore
from delay_js.infrastructure.settings import RuntimeSettings
from delay_js.models.events import EventName

logger = logging.getLogger(__name__)


class DelayJsPlugin:
    """Owns one request's event manager and the delay JS subscriber."""

    def __init__(
        self,
        runtime: RuntimeSettings | None = None,
        *,
        options: OptionStore | None = None,
        notices: NoticeSink | None = None,
        events: EventManager | None = None,
    ) -> None:
        self.runtime = runtime or RuntimeSettings()
        self.options = options if options is not None else InMemoryOptionStore()
        self.notices = notices if notices is not None else SettingsErrors()
        self.events = events or EventManager()
        self.settings = Settings(
            self.options,
            option_name=self.runtime.settings_option_name,
            threshold_version=self.runtime.exclusions_threshold_version,
            default_exclusions=self.runtime.default_exclusions,
        )
        self.subscriber = Subscriber(
            self.settings,
            self.options,
            self.notices,
            text_domain=self.runtime.text_domain,
            locale_dir=self.runtime.locale_dir,
        )
        self.events.add_subscriber(self.subscriber)

    @property
    def option_name(self) -> str:
        return self.runtime.settings_option_name

    def current_settings(self) -> dict[str, Any]:
        return dict(self.options.get_option(self.option_name, {}) or {})

    def install(self) -> dict[str, Any]:
        options = self.events.apply_filters(EventName.FIRST_INSTALL_OPTIONS, {})
        self.options.update_option(self.option_name, options)
        logger.info("Default options installed", extra={"event": "plugin.installed", "data": {"keys": len(options)}})
        return dict(options)

    def upgrade(self, new_version: str, old_version: str) -> None:
        logger.info(
            "Upgrading from %s to %s",
            old_version,
            new_version,
            extra={"event": "plugin.upgrade", "data": {"new_version": new_version, "old_version": old_version}},
        )
        self.events.do_action(EventName.UPGRADE, new_version, old_version)

    def save_settings(self, submitted: Mapping[str, Any]) -> dict[str, Any]:
        """Run a settings form submission through sanitisation and pre-update filters, then persist."""
        old_value = self.current_settings()
        sanitized = self.events.apply_filters(EventName.INPUT_SANITIZE, dict(submitted), SanitizationContext())
        value = self.events.apply_filters(EventName.PRE_UPDATE_SETTINGS, sanitized, old_value)
        self.options.update_option(self.option_name, value)
        return dict(value)


__all__ = ["DelayJsPlugin"]
