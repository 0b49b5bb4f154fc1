from __future__ import annotations

from typing import Optional, Protocol

from .model import SystemSetting


class SettingRepository(Protocol):
    def get(self, key: str) -> Optional[SystemSetting]:
        raise NotImplementedError

    def upsert(self, key: str, value: bool) -> None:
        raise NotImplementedError
