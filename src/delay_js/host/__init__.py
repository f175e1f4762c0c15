"""Host capabilities: option storage and admin notices."""

from delay_js.host.notices import NoticeSink, SettingsErrors
from delay_js.host.options import InMemoryOptionStore, OptionStore

__all__ = ["InMemoryOptionStore", "NoticeSink", "OptionStore", "SettingsErrors"]
