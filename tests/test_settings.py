import dataclasses

import pytest

from kiosk.models import AccessibilitySettings
from kiosk.settings import SettingsStore


def test_defaults_are_off():
    store = SettingsStore()
    assert store.current == AccessibilitySettings()
    assert not store.current.large_text


def test_toggle_notifies_subscribers():
    store = SettingsStore()
    seen = []
    store.subscribe(seen.append)
    store.toggle("high_contrast")
    store.toggle("high_contrast")
    assert [s.high_contrast for s in seen] == [True, False]


def test_update_without_change_is_silent():
    store = SettingsStore(AccessibilitySettings(large_text=True))
    seen = []
    store.subscribe(seen.append)
    store.update(large_text=True)
    assert seen == []


def test_unsubscribe():
    store = SettingsStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    store.toggle("accessibility_mode")
    assert seen == []
    assert store.current.accessibility_mode


def test_unknown_flag_rejected():
    store = SettingsStore()
    with pytest.raises(ValueError):
        store.toggle("dark_mode")
    with pytest.raises(ValueError):
        store.update(dark_mode=True)


def test_readers_get_an_immutable_value():
    store = SettingsStore()
    snapshot = store.current
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.large_text = True
    store.toggle("large_text")
    assert snapshot.large_text is False


def test_failing_listener_does_not_block_other_listeners():
    store = SettingsStore()
    seen = []

    def broken(_settings):
        raise RuntimeError("repaint failed")

    store.subscribe(broken)
    store.subscribe(seen.append)
    store.toggle("large_text")
    assert store.current.large_text
    assert [s.large_text for s in seen] == [True]
