# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two families of models live here:
#   - Leave records (dataclasses): owned by this process, mutated only by
#     the leave store.
#   - Course-schedule envelopes (pydantic): owned by the UML API.  We never
#     interpret a class record beyond finding the array that holds them.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


# -----------------------------------------------------------------------------
# LeaveAccount — one employee's leave balance and history
# -----------------------------------------------------------------------------
@dataclass
class LeaveAccount:
    """Remaining leave days plus every date already taken.

    ``history`` is append-only and kept in application order.
    ``balance`` never goes below zero.
    """

    balance: int
    history: list[str] = field(default_factory=list)


class LeaveOutcome(str, Enum):
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"


# -----------------------------------------------------------------------------
# LeaveApplication — what happened to one apply-leave request
# -----------------------------------------------------------------------------
# ``balance`` is the balance *after* the request: reduced on APPLIED,
# untouched on INSUFFICIENT_BALANCE, and 0 when the employee is unknown.
# -----------------------------------------------------------------------------
@dataclass
class LeaveApplication:
    outcome: LeaveOutcome
    requested: int
    balance: int = 0


# -----------------------------------------------------------------------------
# CourseEnvelope — the UML class-schedule API response
# -----------------------------------------------------------------------------
# The API is outside our control, so every field is optional and extra
# fields are kept as-is.  A missing or null ``data`` means "no classes".
# -----------------------------------------------------------------------------
class CourseData(BaseModel):
    model_config = ConfigDict(extra="allow")

    Classes: Optional[list[Any]] = None
    Count: Optional[int] = None


class CourseEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    isError: bool = False
    message: Optional[str] = None
    statusCode: Optional[int] = None
    data: Optional[CourseData] = None

    @property
    def classes(self) -> list[Any]:
        """The matched class records, empty when the envelope carries none."""
        if self.data is None or self.data.Classes is None:
            return []
        return self.data.Classes
