from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..classes.model import SchoolClass


@dataclass(frozen=True)
class Registration:
    """Entidade de domínio: o registro de uma classe num dia (presença, ofertas, hino)."""

    id: str
    class_id: int
    registration_date: datetime
    present_students: list[str]
    total_present: int
    visitors: int = 0
    bibles: int = 0
    magazines: int = 0
    offering_cash: Decimal = Decimal("0")
    offering_pix: Decimal = Decimal("0")
    hymn: str = ""
    pix_receipt_urls: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    class_name: Optional[str] = None

    @property
    def offering_total(self) -> Decimal:
        return self.offering_cash + self.offering_pix


@dataclass
class RegistrationForm:
    """Editable state of the registration screen for one class and day.

    `edit_target` holds the id of the registration being edited; None means
    the next submit inserts a new row.
    """

    class_id: Optional[int]
    day: date
    present_students: list[str] = field(default_factory=list)
    visitors: int = 0
    bibles: int = 0
    magazines: int = 0
    offering_cash: Decimal = Decimal("0")
    offering_pix: Decimal = Decimal("0")
    hymn: str = ""
    pix_receipt_urls: list[str] = field(default_factory=list)
    edit_target: Optional[str] = None

    @classmethod
    def blank(cls, class_id: Optional[int], day: date) -> "RegistrationForm":
        return cls(class_id=class_id, day=day)

    @classmethod
    def from_registration(cls, registration: Registration, day: date) -> "RegistrationForm":
        return cls(
            class_id=registration.class_id,
            day=day,
            present_students=list(registration.present_students),
            visitors=registration.visitors,
            bibles=registration.bibles,
            magazines=registration.magazines,
            offering_cash=registration.offering_cash,
            offering_pix=registration.offering_pix,
            hymn=registration.hymn,
            pix_receipt_urls=list(registration.pix_receipt_urls),
            edit_target=registration.id,
        )

    @property
    def total_present(self) -> int:
        return len(self.present_students)


@dataclass(frozen=True)
class ReceiptUpload:
    data: bytes
    filename: str
    content_type: Optional[str] = None


@dataclass(frozen=True)
class SubmitResult:
    registration: Optional[Registration]
    form: RegistrationForm
    created: bool


@dataclass(frozen=True)
class TodayStatus:
    sent: list[SchoolClass]
    pending: list[SchoolClass]


@dataclass(frozen=True)
class HymnEntry:
    hymn: str
    class_name: str
