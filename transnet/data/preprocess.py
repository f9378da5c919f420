"""Value cleaning utilities applied to raw record fields."""
from __future__ import annotations

from typing import Optional

PLACEHOLDER_VALUES = frozenset({"Unknown", "N/A"})


def normalize_whitespace(text: str) -> str:
    """Collapse consecutive whitespace characters."""
    return " ".join(text.split())


def is_placeholder(value: str) -> bool:
    """Return True for blank values and exact, case-sensitive placeholder matches.

    The placeholder comparison uses the raw value, so ``" Unknown "`` is kept.
    """
    return not value.strip() or value in PLACEHOLDER_VALUES


def clean_entity_value(value: object) -> Optional[str]:
    """Return the usable display value of a raw field, or None when it must be skipped."""
    if not isinstance(value, str):
        return None
    if is_placeholder(value):
        return None
    return value
