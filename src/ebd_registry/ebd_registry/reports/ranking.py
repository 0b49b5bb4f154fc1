from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from ..core.constants import RANK_LABELS, TOP_RANK_COUNT

T = TypeVar("T")


def rank_by_offering(rows: Sequence[T], offering: Callable[[T], object]) -> list[tuple[T, str]]:
    """Rows sorted by offering (highest first) paired with their rank label.

    The sort is stable, so ties keep fetch order. Only the first three get a
    label ("1°", "2°", "3°"); the rest get "".
    """
    ordered = sorted(rows, key=offering, reverse=True)
    return [
        (row, RANK_LABELS[i] if i < TOP_RANK_COUNT else "")
        for i, row in enumerate(ordered)
    ]


def top_three(rows: Sequence[T], offering: Callable[[T], object]) -> list[tuple[T, str]]:
    return rank_by_offering(rows, offering)[:TOP_RANK_COUNT]
