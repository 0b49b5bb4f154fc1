from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.business_day import shifted_day, shifted_day_inclusive, utc_day_exclusive
from ..common.datetime_utils import last_sunday, local_date, now_utc
from ..common.validators import parse_count, parse_decimal, require_selected_id
from ..core.constants import DEFAULT_RECEIPT_URL_TTL_SECONDS, DEFAULT_TODAY_OFFSET_HOURS
from ..core.enums import ChangeType
from ..core.events import ChangeFeed
from ..core.exceptions import LockedError, PersistenceError, UploadError, ValidationError
from ..receipts.storage import ReceiptStorage
from ..settings.service import SystemLockGate
from .filenames import receipt_object_name
from .model import HymnEntry, ReceiptUpload, Registration, RegistrationForm, SubmitResult, TodayStatus
from .repository import RegistrationRepository

log = logging.getLogger(__name__)

REGISTRATIONS_TABLE = "registrations"


class RegistrationService:
    """Use case: one registration per class per day, created on first submit and edited afterwards."""

    def __init__(
        self,
        registrations: RegistrationRepository,
        classes: ClassRepository,
        lock_gate: SystemLockGate,
        storage: ReceiptStorage,
        *,
        change_feed: Optional[ChangeFeed] = None,
        today_offset_hours: int = DEFAULT_TODAY_OFFSET_HOURS,
        receipt_url_ttl_seconds: int = DEFAULT_RECEIPT_URL_TTL_SECONDS,
    ):
        self._registrations = registrations
        self._classes = classes
        self._lock = lock_gate
        self._storage = storage
        self._feed = change_feed or ChangeFeed()
        self._offset_hours = int(today_offset_hours)
        self._receipt_ttl = int(receipt_url_ttl_seconds)

    @property
    def change_feed(self) -> ChangeFeed:
        return self._feed

    def is_locked(self) -> bool:
        return self._lock.is_locked()

    # ---- upsert flow ----

    def _find_for_day(self, class_id: int, day: date) -> Optional[Registration]:
        return self._registrations.find_latest_for_class(int(class_id), utc_day_exclusive(day))

    def load_or_init(self, class_id: int, day: date) -> RegistrationForm:
        """Existing registration of (class, day) as an editable form, or a blank one."""
        try:
            existing = self._find_for_day(class_id, day)
        except PersistenceError as exc:
            log.warning("could not load registration class_id=%s day=%s: %s", class_id, day, exc)
            existing = None

        if existing is None:
            return RegistrationForm.blank(int(class_id), day)
        return RegistrationForm.from_registration(existing, day)

    def _upload_receipts(self, receipts: Iterable[ReceiptUpload], *, now: datetime) -> list[str]:
        uploaded: list[str] = []
        for receipt in receipts:
            name = receipt_object_name(receipt.filename, now=now)
            try:
                uploaded.append(self._storage.put(receipt.data, name, content_type=receipt.content_type))
            except Exception as exc:
                log.error("receipt upload aborted submit at %s: %s", receipt.filename, exc)
                self._storage.remove(uploaded)
                if isinstance(exc, UploadError):
                    raise
                raise UploadError(f"Falha ao enviar o comprovante {receipt.filename}") from exc
        return uploaded

    def submit(
        self,
        form: RegistrationForm,
        receipts: Sequence[ReceiptUpload] = (),
        *,
        now: Optional[datetime] = None,
    ) -> SubmitResult:
        if self._lock.is_locked():
            raise LockedError("Os registros estão bloqueados pela secretaria.")

        class_id = require_selected_id(form.class_id, "uma classe")
        now = now or now_utc()

        new_paths = self._upload_receipts(receipts, now=now)

        present = [str(n) for n in form.present_students]
        payload = Registration(
            id=form.edit_target or str(uuid.uuid4()),
            class_id=class_id,
            registration_date=now if now.date() == form.day else datetime.combine(form.day, time(12, 0)),
            present_students=present,
            total_present=len(present),
            visitors=parse_count(form.visitors),
            bibles=parse_count(form.bibles),
            magazines=parse_count(form.magazines),
            offering_cash=parse_decimal(form.offering_cash),
            offering_pix=parse_decimal(form.offering_pix),
            hymn=(form.hymn or "").strip(),
            pix_receipt_urls=list(form.pix_receipt_urls) + new_paths,
        )

        created = form.edit_target is None
        try:
            if created:
                self._registrations.create(payload)
            elif not self._registrations.update(payload):
                # Unchanged rows also report zero affected rows; only a missing row is a failure.
                if self._registrations.get_by_id(payload.id) is None:
                    raise PersistenceError(f"Registro {payload.id} não existe mais; recarregue o formulário.")
                log.debug("update of registration %s changed no rows", payload.id)
        except PersistenceError:
            log.exception("saving registration failed class_id=%s day=%s", class_id, form.day)
            self._storage.remove(new_paths)
            raise

        self._feed.publish(REGISTRATIONS_TABLE, ChangeType.INSERT if created else ChangeType.UPDATE, payload.id)
        log.info(
            "registration %s %s class_id=%s present=%d",
            payload.id, "created" if created else "updated", class_id, payload.total_present,
        )

        try:
            saved = self._find_for_day(class_id, form.day) or self._registrations.get_by_id(payload.id)
        except PersistenceError as exc:
            log.warning("reload after save failed for registration %s: %s", payload.id, exc)
            return SubmitResult(
                registration=payload,
                form=RegistrationForm.from_registration(payload, form.day),
                created=created,
            )

        if saved is None:
            log.error("registration %s missing right after save class_id=%s", payload.id, class_id)
            raise PersistenceError(f"Registro {payload.id} não encontrado após salvar.")
        return SubmitResult(
            registration=saved,
            form=RegistrationForm.from_registration(saved, form.day),
            created=created,
        )

    # ---- admin list ----

    def list_all(self) -> Sequence[Registration]:
        return self._registrations.list_all()

    def get(self, registration_id: str) -> Registration:
        registration = self._registrations.get_by_id(registration_id)
        if not registration:
            raise ValidationError("Registro não encontrado")
        return registration

    def delete(self, registration_id: str) -> None:
        """Delete the row, then its receipts; leftover files never block the delete."""
        registration = self.get(registration_id)
        self._registrations.delete_by_id(registration.id)
        self._storage.remove(registration.pix_receipt_urls)
        self._feed.publish(REGISTRATIONS_TABLE, ChangeType.DELETE, registration.id)
        log.info("registration %s deleted (%d receipt(s))", registration.id, len(registration.pix_receipt_urls))

    def receipt_links(self, registration_id: str, *, ttl_seconds: Optional[int] = None) -> list[str]:
        registration = self.get(registration_id)
        ttl = int(ttl_seconds or self._receipt_ttl)
        return [self._storage.sign(path, ttl) for path in registration.pix_receipt_urls]

    # ---- status screens ----

    def today_status(self, *, now: Optional[datetime] = None) -> TodayStatus:
        now = now or now_utc()
        day = local_date(now, offset_hours=self._offset_hours)
        window = shifted_day(day, offset_hours=self._offset_hours)

        classes = sorted(self._classes.list_all(), key=lambda c: c.name)
        sent_ids = {r.class_id for r in self._registrations.list_in_window(window)}
        return TodayStatus(
            sent=[c for c in classes if c.id in sent_ids],
            pending=[c for c in classes if c.id not in sent_ids],
        )

    def choir_hymns(self, *, now: Optional[datetime] = None) -> list[HymnEntry]:
        """Hymns chosen by the classes on the most recent Sunday (today, if Sunday)."""
        now = now or now_utc()
        sunday = last_sunday(local_date(now, offset_hours=self._offset_hours))
        window = shifted_day_inclusive(sunday, offset_hours=self._offset_hours)

        return [
            HymnEntry(hymn=r.hymn, class_name=r.class_name or "Classe desconhecida")
            for r in self._registrations.list_in_window(window)
            if r.hymn
        ]

