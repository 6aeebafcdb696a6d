"""Payment-aging risk classification."""

from __future__ import annotations

from enum import Enum

from .rules import CURRENT_MAX_DAYS, OVERDUE_MAX_DAYS


class AgingStatus(str, Enum):
    CURRENT = "Current"
    OVERDUE = "Overdue"
    IMPAIRED = "Impaired"


def classify_status(aging_days: int) -> AgingStatus:
    if aging_days <= CURRENT_MAX_DAYS:
        return AgingStatus.CURRENT
    if aging_days <= OVERDUE_MAX_DAYS:
        return AgingStatus.OVERDUE
    return AgingStatus.IMPAIRED
