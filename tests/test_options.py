from __future__ import annotations

import pytest

from delay_js.exceptions import OptionValueError
from delay_js.models.options import ToggleState, option_state, parse_flag, parse_toggle


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (1, ToggleState.ON),
        ("1", ToggleState.ON),
        (" On ", ToggleState.ON),
        (True, ToggleState.ON),
        (1.0, ToggleState.ON),
        (0, ToggleState.OFF),
        ("0", ToggleState.OFF),
        ("", ToggleState.OFF),
        (False, ToggleState.OFF),
        ("off", ToggleState.OFF),
        (None, ToggleState.UNSET),
        (2, ToggleState.INVALID),
        ("2", ToggleState.INVALID),
        ("1abc", ToggleState.INVALID),
        ([1], ToggleState.INVALID),
    ],
)
def test_parse_toggle(raw, expected):
    assert parse_toggle(raw) is expected


def test_parse_flag_strict_and_defaults():
    assert parse_flag("yes") is True
    assert parse_flag(0) is False
    assert parse_flag(None, default=False) is False

    with pytest.raises(OptionValueError):
        parse_flag(None)
    with pytest.raises(OptionValueError):
        parse_flag("1abc", default=False)


def test_option_state_handles_missing_bags():
    assert option_state({"delay_js": "1"}, "delay_js") is ToggleState.ON
    assert option_state({}, "delay_js") is ToggleState.UNSET
    assert option_state(False, "delay_js") is ToggleState.UNSET
