from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.business_day import DayWindow
from .model import Registration


class RegistrationRepository(Protocol):
    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def find_latest_for_class(self, class_id: int, window: DayWindow) -> Optional[Registration]:
        """Newest (by creation time) registration of a class inside the window."""

        raise NotImplementedError

    def list_in_window(self, window: DayWindow) -> Sequence[Registration]:
        """Registrations inside the window in creation order, class_name joined."""

        raise NotImplementedError

    def recent_for_class(self, class_id: int, limit: int) -> Sequence[Registration]:
        """Newest `limit` registrations of a class by registration_date."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Registration]:
        raise NotImplementedError

    def create(self, registration: Registration) -> None:
        raise NotImplementedError

    def update(self, registration: Registration) -> bool:
        """Overwrite the editable fields of an existing row; registration_date is kept."""

        raise NotImplementedError

    def delete_by_id(self, registration_id: str) -> bool:
        raise NotImplementedError
