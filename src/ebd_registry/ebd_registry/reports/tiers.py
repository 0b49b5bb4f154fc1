from __future__ import annotations

from ..core.enums import Tier

# Case-sensitive substrings of the class names; anything unmatched is an adult class.
CHILDREN_MARKERS = ("SOLDADOS", "OVELHINHAS")
ADOLESCENT_MARKERS = ("ESTRELA", "LAEL", "ÁGAPE")


def classify(class_name: str) -> Tier:
    if any(marker in class_name for marker in CHILDREN_MARKERS):
        return Tier.CHILDREN
    if any(marker in class_name for marker in ADOLESCENT_MARKERS):
        return Tier.ADOLESCENTS
    return Tier.ADULTS
