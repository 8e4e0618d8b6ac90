# =============================================================================
# core/leave.py  —  Leave Balance, Application & History
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns LeaveStore lookups and mutations into the short sentences the
#   calling agent reads.
#
# SOFT FAILURES:
#   Unknown employees and insufficient balances are NOT exceptions.  They
#   come back as ordinary text, and callers tell outcomes apart by reading
#   the message.
#
# NO DATE VALIDATION:
#   Dates are stored exactly as given: no format, duplicate, or
#   past/future checks.  An empty list is a valid request that uses zero
#   days.
# =============================================================================

from typing import Sequence

from core.leave_store import LeaveStore
from core.models import LeaveOutcome


NOT_FOUND_MESSAGE = "Employee ID not found."
NO_LEAVES_MESSAGE = "No leaves taken."


def get_balance(store: LeaveStore, employee_id: str) -> str:
    """Report how many leave days the employee has left."""
    account = store.get(employee_id)
    if account is None:
        return NOT_FOUND_MESSAGE
    return f"{employee_id} has {account.balance} leave days remaining."


def apply_leave(store: LeaveStore, employee_id: str, leave_dates: Sequence[str]) -> str:
    """Book leave for every date in ``leave_dates``, or for none of them.

    Args:
        store: Where the employee's account lives.
        employee_id: The employee identifier (e.g., "E001").
        leave_dates: Dates to record, in the order given.

    Returns:
        A confirmation with the remaining balance, an insufficient-balance
        notice stating requested vs. available days, or the not-found text.
    """
    result = store.apply(employee_id, list(leave_dates))

    if result.outcome is LeaveOutcome.NOT_FOUND:
        return NOT_FOUND_MESSAGE
    if result.outcome is LeaveOutcome.INSUFFICIENT_BALANCE:
        return (
            f"Insufficient leave balance. You requested {result.requested} day(s) "
            f"but have only {result.balance}."
        )
    return (
        f"Leave applied for {result.requested} day(s). "
        f"Remaining balance: {result.balance}."
    )


def get_history(store: LeaveStore, employee_id: str) -> str:
    account = store.get(employee_id)
    if account is None:
        return NOT_FOUND_MESSAGE
    history = ", ".join(account.history) if account.history else NO_LEAVES_MESSAGE
    return f"Leave history for {employee_id}: {history}"
