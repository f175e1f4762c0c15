from __future__ import annotations

import pytest

from delay_js.admin.subscriber import Subscriber
from delay_js.events.manager import EventManager
from delay_js.exceptions import ConfigError, DispatchError
from delay_js.host.notices import SettingsErrors
from delay_js.host.options import InMemoryOptionStore
from delay_js.models.events import EventName, Subscription
from fakes import RecordingSettings


def test_filters_run_in_ascending_priority_then_registration_order():
    manager = EventManager()
    order: list[str] = []

    def make(label):
        def _fn(value):
            order.append(label)
            return value + [label]

        return _fn

    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, make("late"), priority=20)
    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, make("first"), priority=5)
    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, make("second"), priority=5)

    assert manager.apply_filters(EventName.FIRST_INSTALL_OPTIONS, []) == ["first", "second", "late"]
    assert order == ["first", "second", "late"]


def test_filter_without_callbacks_returns_value_unchanged():
    manager = EventManager()
    value = {"delay_js": 1}

    assert manager.apply_filters(EventName.PRE_UPDATE_SETTINGS, value, {}) is value


def test_accepted_args_truncates_extra_arguments():
    manager = EventManager()
    seen = []

    def one_arg(value):
        seen.append(value)
        return value

    manager.add_callback(EventName.PRE_UPDATE_SETTINGS, one_arg)
    manager.apply_filters(EventName.PRE_UPDATE_SETTINGS, {"a": 1}, {"old": True})

    assert seen == [{"a": 1}]


def test_actions_ignore_return_values():
    manager = EventManager()
    received = []

    manager.add_callback(EventName.UPGRADE, lambda new, old: received.append((new, old)) or "ignored", 13, 2)

    assert manager.do_action(EventName.UPGRADE, "3.10", "3.8") is None
    assert received == [("3.10", "3.8")]


def test_dispatch_kind_is_enforced():
    manager = EventManager()

    with pytest.raises(DispatchError):
        manager.do_action(EventName.INPUT_SANITIZE, {})
    with pytest.raises(DispatchError) as excinfo:
        manager.apply_filters(EventName.UPGRADE, "3.10", "3.8")
    assert excinfo.value.event == "wp_rocket_upgrade"


def test_string_event_names_are_resolved_and_unknown_ones_rejected():
    manager = EventManager()
    manager.add_callback("rocket_first_install_options", lambda options: options)

    assert manager.has_callback(EventName.FIRST_INSTALL_OPTIONS)
    with pytest.raises(ConfigError):
        manager.add_callback("not_an_event", lambda value: value)


@pytest.mark.parametrize(
    ("callback", "accepted_args"),
    [
        (lambda value: value, 2),
        (lambda value, old, extra: value, 2),
        (lambda value: value, -1),
    ],
)
def test_arity_is_validated_at_registration(callback, accepted_args):
    manager = EventManager()

    with pytest.raises(ConfigError):
        manager.add_callback(EventName.PRE_UPDATE_SETTINGS, callback, accepted_args=accepted_args)


def test_variadic_and_defaulted_callbacks_are_accepted():
    manager = EventManager()
    manager.add_callback(EventName.PRE_UPDATE_SETTINGS, lambda *args: args[0], accepted_args=2)
    manager.add_callback(EventName.PRE_UPDATE_SETTINGS, lambda value, old=None, extra=None: value, accepted_args=2)

    assert len(manager.callbacks(EventName.PRE_UPDATE_SETTINGS)) == 2


def test_builtins_without_a_signature_skip_arity_validation():
    manager = EventManager()
    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, dict)

    original = {"a": 1}
    result = manager.apply_filters(EventName.FIRST_INSTALL_OPTIONS, original)

    assert result == {"a": 1}
    assert result is not original


def test_remove_and_has_callback():
    manager = EventManager()

    def handler(value):
        return value

    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, handler, priority=12)

    assert manager.has_callback(EventName.FIRST_INSTALL_OPTIONS, handler)
    assert manager.remove_callback(EventName.FIRST_INSTALL_OPTIONS, handler) is False
    assert manager.remove_callback(EventName.FIRST_INSTALL_OPTIONS, handler, priority=12) is True
    assert not manager.has_callback(EventName.FIRST_INSTALL_OPTIONS)


def test_callback_errors_propagate_unchanged():
    manager = EventManager()
    error = KeyError("delay_js")

    def broken(value):
        raise error

    manager.add_callback(EventName.FIRST_INSTALL_OPTIONS, broken)

    with pytest.raises(KeyError) as excinfo:
        manager.apply_filters(EventName.FIRST_INSTALL_OPTIONS, {})
    assert excinfo.value is error


def test_add_subscriber_registers_declared_handlers():
    manager = EventManager()
    subscriber = Subscriber(RecordingSettings(), InMemoryOptionStore(), SettingsErrors())

    manager.add_subscriber(subscriber)

    pre_update = manager.callbacks(EventName.PRE_UPDATE_SETTINGS)
    assert [(item.priority, item.accepted_args) for item in pre_update] == [(10, 2), (11, 2)]
    assert pre_update[0].fn == subscriber.add_notice_when_delayjs_and_autoptimize_aggregatejs
    assert pre_update[1].fn == subscriber.maybe_disable_combine_js
    assert manager.has_callback(EventName.UPGRADE, subscriber.set_option_on_update)


def test_add_subscriber_rejects_missing_handler():
    class Broken:
        @classmethod
        def get_subscribed_events(cls):
            return {EventName.UPGRADE: (Subscription("missing", 10, 2),)}

    with pytest.raises(ConfigError):
        EventManager().add_subscriber(Broken())
