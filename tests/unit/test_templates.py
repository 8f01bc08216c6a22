"""Tests for built-in hook templates."""

from __future__ import annotations

import pytest

from hookchain.core.store import parse_event_hooks
from hookchain.core.templates import TEMPLATES, apply_template, get_template
from hookchain.types.hooks import HookEvent


def test_template_names_unique():
    names = [t.name.lower() for t in TEMPLATES]
    assert len(names) == len(set(names))


def test_every_template_round_trips_through_settings():
    for template in TEMPLATES:
        config = apply_template({}, template)
        for event in template.events:
            assert parse_event_hooks(config, event.value) == list(template.hooks)


def test_get_template_case_insensitive():
    assert get_template("session logging").name == "Session Logging"
    assert get_template("  AUTO BACKUP ").events == (HookEvent.ON_CONTEXT_COMPACT,)


def test_get_template_unknown():
    with pytest.raises(KeyError, match="Unknown template"):
        get_template("Coffee Maker")


def test_apply_appends_and_copies():
    config = {"OnSessionStart": [{"command": "echo existing"}], "Stop": [{"command": "x"}]}
    updated = apply_template(config, get_template("Session Logging"))

    assert [e["command"] for e in updated["OnSessionStart"]][0] == "echo existing"
    assert len(updated["OnSessionStart"]) == 2
    assert len(updated["OnSessionEnd"]) == 1
    assert updated["Stop"] == [{"command": "x"}]
    # input untouched
    assert len(config["OnSessionStart"]) == 1
    assert "OnSessionEnd" not in config


def test_file_change_template_has_condition():
    template = get_template("File Change Notification")
    assert template.hooks[0].condition is not None
    assert template.hooks[0].condition.enabled is True
