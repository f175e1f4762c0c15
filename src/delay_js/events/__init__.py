"""Typed event registry and subscriber protocol."""

from delay_js.events.manager import EventManager, RegisteredCallback
from delay_js.events.subscriber import SubscriberInterface

__all__ = ["EventManager", "RegisteredCallback", "SubscriberInterface"]
