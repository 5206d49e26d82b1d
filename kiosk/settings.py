"""Accessibility settings owner."""

from __future__ import annotations

import logging
from typing import Callable

from kiosk.models import ACCESSIBILITY_FLAGS, AccessibilitySettings

logger = logging.getLogger(__name__)

SettingsListener = Callable[[AccessibilitySettings], None]


class SettingsStore:
    """Single owner of the accessibility flags.

    Readers receive the immutable ``AccessibilitySettings`` value; only the
    store changes it and notifies subscribers when it actually changes.
    """

    def __init__(self, initial: AccessibilitySettings | None = None) -> None:
        self._current = initial or AccessibilitySettings()
        self._listeners: list[SettingsListener] = []

    @property
    def current(self) -> AccessibilitySettings:
        return self._current

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **flags: bool) -> AccessibilitySettings:
        updated = self._current.with_changes(**flags)
        if updated == self._current:
            return self._current
        self._current = updated
        logger.info(
            "settings_changed large_text=%s high_contrast=%s accessibility_mode=%s",
            updated.large_text,
            updated.high_contrast,
            updated.accessibility_mode,
        )
        for listener in list(self._listeners):
            try:
                listener(updated)
            except Exception:
                logger.exception("settings_listener_failed listener=%r", listener)
        return updated

    def toggle(self, flag: str) -> AccessibilitySettings:
        if flag not in ACCESSIBILITY_FLAGS:
            raise ValueError(f"Unknown accessibility flag: {flag!r}")
        return self.update(**{flag: not getattr(self._current, flag)})
