# =============================================================================
# core/leave_store.py  —  Leave Account Storage
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds every employee's LeaveAccount and exposes exactly two capabilities:
#     - get(employee_id)            → point lookup (a snapshot copy)
#     - apply(employee_id, dates)   → check balance, then decrement + append,
#                                     as ONE operation
#
#   The leave operations in core/leave.py only see the LeaveStore protocol,
#   so the dict-backed store below can be swapped for a real datastore
#   without touching them.
#
# SEED DATA:
#   The set of employees is fixed at process start.  There is no create or
#   delete; state lives until the process restarts.
# =============================================================================

import copy
import threading
from typing import Optional, Protocol, Sequence

from core.models import LeaveAccount, LeaveApplication, LeaveOutcome


SEED_ACCOUNTS: dict[str, LeaveAccount] = {
    "E001": LeaveAccount(balance=18, history=["2024-12-25", "2025-01-01"]),
    "E002": LeaveAccount(balance=20, history=[]),
}


class LeaveStore(Protocol):
    def get(self, employee_id: str) -> Optional[LeaveAccount]:
        ...

    def apply(self, employee_id: str, leave_dates: Sequence[str]) -> LeaveApplication:
        ...


class InMemoryLeaveStore:
    """Dict-backed LeaveStore.

    ``apply`` runs its read-modify-write under a lock, so two concurrent
    requests for the same employee can never overdraw the balance.
    """

    def __init__(self, seed: Optional[dict[str, LeaveAccount]] = None):
        self._accounts: dict[str, LeaveAccount] = copy.deepcopy(seed or {})
        self._lock = threading.Lock()

    def get(self, employee_id: str) -> Optional[LeaveAccount]:
        with self._lock:
            account = self._accounts.get(employee_id)
            if account is None:
                return None
            return LeaveAccount(balance=account.balance, history=list(account.history))

    def apply(self, employee_id: str, leave_dates: Sequence[str]) -> LeaveApplication:
        requested = len(leave_dates)
        with self._lock:
            account = self._accounts.get(employee_id)
            if account is None:
                return LeaveApplication(LeaveOutcome.NOT_FOUND, requested)

            # Zero requested days always fits.
            if requested > account.balance:
                return LeaveApplication(
                    LeaveOutcome.INSUFFICIENT_BALANCE, requested, account.balance
                )

            account.balance -= requested
            account.history.extend(leave_dates)
            return LeaveApplication(LeaveOutcome.APPLIED, requested, account.balance)


def default_store() -> InMemoryLeaveStore:
    """A fresh store loaded with the seed accounts."""
    return InMemoryLeaveStore(SEED_ACCOUNTS)
