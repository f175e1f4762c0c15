"""Admin-side delay JS settings and their event subscriber."""

from delay_js.admin.sanitization import SanitizationContext
from delay_js.admin.settings import Settings
from delay_js.admin.subscriber import Subscriber

__all__ = ["SanitizationContext", "Settings", "Subscriber"]
