from __future__ import annotations

from enum import Enum


class ReportStatus(str, Enum):
    DRAFT = "draft"
    FINALIZED = "finalized"
    SUBMITTED = "submitted"

    def can_transition_to(self, target: ReportStatus) -> bool:
        if self is target:
            return True
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[ReportStatus, set[ReportStatus]] = {
    ReportStatus.DRAFT: {ReportStatus.FINALIZED, ReportStatus.SUBMITTED},
    ReportStatus.FINALIZED: {ReportStatus.DRAFT, ReportStatus.SUBMITTED},
    ReportStatus.SUBMITTED: set(),
}
