"""Subscriber protocol consumed by :class:`delay_js.events.manager.EventManager`."""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable

from delay_js.models.events import EventName, Subscription


@runtime_checkable
class SubscriberInterface(Protocol):
    @classmethod
    def get_subscribed_events(cls) -> Mapping[EventName, Sequence[Subscription]]: ...


__all__ = ["SubscriberInterface"]
