from __future__ import annotations

import re
import unicodedata
from datetime import datetime, timezone

_DISALLOWED = re.compile(r"[^A-Za-z0-9._-]")
_REPEATED_UNDERSCORE = re.compile(r"_+")


def sanitize_filename(name: str) -> str:
    """'Comprovante Pix João (1).png' -> 'Comprovante_Pix_Joao_1_.png' style.

    Diacritics are dropped, anything outside [A-Za-z0-9._-] becomes '_',
    runs of '_' collapse and leading/trailing '_' are trimmed.
    """
    decomposed = unicodedata.normalize("NFD", name or "")
    ascii_name = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    cleaned = _DISALLOWED.sub("_", ascii_name)
    cleaned = _REPEATED_UNDERSCORE.sub("_", cleaned)
    return cleaned.strip("_") or "arquivo"


def receipt_object_name(original_name: str, *, now: datetime) -> str:
    """Millisecond timestamp prefix keeps names from the same submit apart."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{millis}_{sanitize_filename(original_name)}"
