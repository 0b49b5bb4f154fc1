from src.ebd_registry.ebd_registry.core.exceptions import PersistenceError
from src.ebd_registry.ebd_registry.settings.model import SystemSetting
from src.ebd_registry.ebd_registry.settings.service import SystemLockGate


class FakeSettingsRepo:
    def __init__(self, values=None, error=None):
        self.values = dict(values or {})
        self.error = error

    def get(self, key):
        if self.error:
            raise self.error
        if key not in self.values:
            return None
        return SystemSetting(key=key, value=self.values[key])

    def upsert(self, key, value):
        self.values[key] = value


def test_allowed_registrations_are_unlocked():
    assert SystemLockGate(FakeSettingsRepo({"allow_registrations": True})).is_locked() is False


def test_missing_row_counts_as_locked():
    assert SystemLockGate(FakeSettingsRepo()).is_locked() is True


def test_read_error_counts_as_locked():
    gate = SystemLockGate(FakeSettingsRepo(error=PersistenceError("timeout")))
    assert gate.is_locked() is True


def test_unexpected_error_counts_as_locked():
    gate = SystemLockGate(FakeSettingsRepo(error=RuntimeError("boom")))
    assert gate.is_locked() is True


def test_toggle_writes_allow_flag():
    repo = FakeSettingsRepo({"allow_registrations": True})
    gate = SystemLockGate(repo)

    gate.set_allow_registrations(False)
    assert repo.values["allow_registrations"] is False
    assert gate.is_locked() is True

    gate.set_allow_registrations(True)
    assert gate.is_locked() is False
