from __future__ import annotations

from enum import Enum


class Tier(str, Enum):
    """Faixa etária usada na classificação das ofertas."""

    CHILDREN = "children"
    ADOLESCENTS = "adolescents"
    ADULTS = "adults"


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
