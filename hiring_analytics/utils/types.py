"""Shared type definitions for the tracker pipeline."""

from datetime import datetime
from enum import StrEnum


type MaybeDate = datetime | None
type MaybeNumber = float | None


class ScreeningStatus(StrEnum):
    CLEARED = "Cleared"
    NOT_CLEARED = "Not Cleared"
    IN_PROGRESS = "In progress"
    UNKNOWN = ""


class InterviewStatus(StrEnum):
    CLEARED = "Cleared"
    NOT_CLEARED = "Not Cleared"
    PENDING_R1 = "Pending at R1"
    PENDING_R2 = "Pending at R2"
    PENDING_R3 = "Pending at R3"
    UNKNOWN = ""


class FinalStatus(StrEnum):
    REJECTED = "Rejected"
    SELECTED = "Selected"
    IN_PROGRESS = "In progress"
    ON_HOLD = "Req on hold"
    PENDING_R1 = "Pending at R1"
    PENDING_R2 = "Pending at R2"
    PENDING_R3 = "Pending at R3"
    UNKNOWN = ""


class Round(StrEnum):
    R1 = "R1"
    R2 = "R2"
    R3 = "R3"

    @property
    def number(self) -> int:
        return int(self.value[1:])


class AlertKind(StrEnum):
    TIME_TO_HIRE = "TTH"
    TIME_TO_FILL = "TTF"


class UserType(StrEnum):
    SUPER_ADMIN = "super-admin"
    HIRING_MANAGER = "hiring-manager"
    RECRUITER = "recruiter"
    PANELLIST = "panellist"


PENDING_INTERVIEW_STATUSES = frozenset({
    InterviewStatus.PENDING_R1,
    InterviewStatus.PENDING_R2,
    InterviewStatus.PENDING_R3,
})

# Unknown counts as "still waiting on an outcome" for feedback tracking.
AWAITING_OUTCOME_STATUSES = PENDING_INTERVIEW_STATUSES | {InterviewStatus.UNKNOWN}

IN_PROGRESS_FINAL_STATUSES = frozenset({
    FinalStatus.IN_PROGRESS,
    FinalStatus.PENDING_R1,
    FinalStatus.PENDING_R2,
    FinalStatus.PENDING_R3,
})
