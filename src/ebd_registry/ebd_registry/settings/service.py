from __future__ import annotations

import logging

from ..core.constants import ALLOW_REGISTRATIONS_KEY
from .repository import SettingRepository

log = logging.getLogger(__name__)


class SystemLockGate:
    """Single system-wide switch for registration writes.

    The stored setting says whether registrations are *allowed*; the gate
    answers whether the system is *locked*. Anything other than a readable
    `True` counts as locked.
    """

    def __init__(self, settings: SettingRepository, *, key: str = ALLOW_REGISTRATIONS_KEY):
        self._settings = settings
        self._key = key

    def is_locked(self) -> bool:
        try:
            setting = self._settings.get(self._key)
        except Exception:
            log.exception("could not read setting %s; treating registrations as locked", self._key)
            return True

        if setting is None:
            log.warning("setting %s is missing; treating registrations as locked", self._key)
            return True
        return not setting.value

    def set_allow_registrations(self, allowed: bool) -> None:
        self._settings.upsert(self._key, bool(allowed))
        log.info("registrations %s", "unlocked" if allowed else "locked")
