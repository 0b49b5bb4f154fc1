from __future__ import annotations

from typing import Sequence

from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    """Use case: read the class list for selects and status screens."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_all(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def names_by_id(self) -> dict[int, str]:
        return {c.id: c.name for c in self._classes.list_all()}
