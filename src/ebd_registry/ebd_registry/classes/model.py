from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    """Entidade de domínio: uma classe da EBD (dados de referência)."""

    id: int
    name: str
