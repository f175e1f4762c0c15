"""Typed event registry and synchronous dispatcher."""

from __future__ import annotations

import inspect
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from delay_js.events.subscriber import SubscriberInterface
from delay_js.exceptions import ConfigError, DispatchError
from delay_js.models.events import DEFAULT_PRIORITY, EventKind, EventName

logger = logging.getLogger(__name__)


@dataclass
class RegisteredCallback:
    fn: Callable[..., Any]
    priority: int
    accepted_args: int
    qualname: str
    sequence: int = field(default=0, compare=False)


def _qualname(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", getattr(fn, "__name__", "<unknown>"))


def _coerce_event(event: EventName | str) -> EventName:
    if isinstance(event, EventName):
        return event
    try:
        return EventName(event)
    except ValueError as exc:
        valid = ", ".join(sorted(name.value for name in EventName))
        raise ConfigError(f"Unknown event '{event}'. Must be one of: {valid}") from exc


def _check_arity(fn: Callable[..., Any], accepted_args: int, *, label: str) -> None:
    if accepted_args < 0:
        raise ConfigError(f"{label}: accepted_args must be >= 0, got {accepted_args}")
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins such as `dict` expose no signature; the call itself will tell.
        return

    positional = 0
    required = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
            if param.default is inspect.Parameter.empty:
                required += 1
        elif param.kind == inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
            raise ConfigError(f"{label} has a required keyword-only parameter '{param.name}'")

    if accepted_args > positional:
        raise ConfigError(f"{label} accepts {positional} positional argument(s), {accepted_args} requested")
    if required > accepted_args:
        raise ConfigError(f"{label} requires {required} positional argument(s), only {accepted_args} passed")


class EventManager:
    """Holds callbacks per event and runs them in priority order.

    Lower priorities run first; callbacks sharing a priority run in the order
    they were added.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[EventName, List[RegisteredCallback]] = {name: [] for name in EventName}
        self._counter = itertools.count()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_callback(
        self,
        event: EventName | str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        event_name = _coerce_event(event)
        if not callable(callback):
            raise ConfigError(f"Callback for '{event_name.value}' is not callable: {callback!r}")
        qualname = _qualname(callback)
        _check_arity(callback, accepted_args, label=f"Callback {qualname} for '{event_name.value}'")

        callbacks = self._callbacks[event_name]
        callbacks.append(
            RegisteredCallback(
                fn=callback,
                priority=int(priority),
                accepted_args=accepted_args,
                qualname=qualname,
                sequence=next(self._counter),
            )
        )
        callbacks.sort(key=lambda item: (item.priority, item.sequence))

    def add_subscriber(self, subscriber: SubscriberInterface) -> None:
        for event, subscriptions in subscriber.get_subscribed_events().items():
            for subscription in subscriptions:
                method = getattr(subscriber, subscription.handler, None)
                if method is None:
                    raise ConfigError(
                        f"{type(subscriber).__name__} declares '{subscription.handler}' "
                        f"for '{_coerce_event(event).value}' but has no such method"
                    )
                self.add_callback(
                    event,
                    method,
                    priority=subscription.priority,
                    accepted_args=subscription.accepted_args,
                )
        logger.debug(
            "Subscriber registered",
            extra={"event": "subscriber.registered", "data": {"subscriber": type(subscriber).__name__}},
        )

    def remove_callback(
        self,
        event: EventName | str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> bool:
        callbacks = self._callbacks[_coerce_event(event)]
        for index, item in enumerate(callbacks):
            if item.fn == callback and item.priority == priority:
                del callbacks[index]
                return True
        return False

    def has_callback(self, event: EventName | str, callback: Callable[..., Any] | None = None) -> bool:
        callbacks = self._callbacks[_coerce_event(event)]
        if callback is None:
            return bool(callbacks)
        return any(item.fn == callback for item in callbacks)

    def callbacks(self, event: EventName | str) -> tuple[RegisteredCallback, ...]:
        return tuple(self._callbacks[_coerce_event(event)])

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def apply_filters(self, event: EventName | str, value: Any, *args: Any) -> Any:
        event_name = self._expect_kind(event, EventKind.FILTER)
        for item in self._callbacks[event_name]:
            value = self._call(event_name, item, (value, *args))
        return value

    def do_action(self, event: EventName | str, *args: Any) -> None:
        event_name = self._expect_kind(event, EventKind.ACTION)
        for item in self._callbacks[event_name]:
            self._call(event_name, item, args)

    def _expect_kind(self, event: EventName | str, kind: EventKind) -> EventName:
        event_name = _coerce_event(event)
        if event_name.kind is not kind:
            raise DispatchError(
                f"'{event_name.value}' is a {event_name.kind.value} event, not a {kind.value} event",
                event=event_name.value,
            )
        return event_name

    def _call(self, event: EventName, item: RegisteredCallback, args: tuple[Any, ...]) -> Any:
        logger.debug(
            "Dispatching %s to %s",
            event.value,
            item.qualname,
            extra={
                "event": "callback.start",
                "data": {"event_name": event.value, "callback": item.qualname, "priority": item.priority},
            },
        )
        try:
            return item.fn(*args[: item.accepted_args])
        except Exception:
            logger.exception(
                "Callback %s failed during %s",
                item.qualname,
                event.value,
                extra={"event": "callback.failed", "data": {"event_name": event.value, "callback": item.qualname}},
            )
            raise


__all__ = ["EventManager", "RegisteredCallback"]
