# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the calling agent can use.  Each tool is a thin
#   wrapper around a core/ function: it declares the argument schema,
#   logs the call, and formats the result as text.
#
# TOOLS:
#   Leave desk (in-memory, per-process state):
#     - get_leave_balance
#     - apply_leave            ← the only tool that mutates state
#     - get_leave_history
#   UML course schedule (proxied, read-only):
#     - get_course_details
#     - search_courses
#
# ARGUMENT VALIDATION:
#   Argument types below are pydantic-annotated.  FastMCP validates every
#   call against them BEFORE the function body runs, so a malformed term,
#   class number, subject code, or offering mode never reaches the UML API.
#
# ERRORS:
#   Course tools never raise.  A CourseApiError (or anything unexpected)
#   comes back as "Error: <message>" text.
#
# RUNNING THIS SERVER:
#     a) Standalone:   python main.py  (or python -m tools.mcp_server)
#     b) From an MCP client over stdio, streamable HTTP, or SSE
# =============================================================================

import asyncio
import json
import logging
import sys
from typing import Annotated, Any, Literal, Optional, Union

from fastmcp import FastMCP
from pydantic import BeforeValidator, Field

from core import config, course_api, leave
from core.course_api import CourseApiError, CourseApiErrorKind
from core.leave_store import LeaveStore, default_store

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the stdio transport, so logs go to STDERR.
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for responses
#   - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: str) -> str:
    """Log the tool response (first line only) in GREEN, then return it."""
    first_line = result.splitlines()[0] if result else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {first_line}{_RESET}")
    return result


# =============================================================================
# Argument types
# =============================================================================

def _as_str(value: Any) -> Any:
    # Integers (but not booleans) are accepted for class numbers.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


TermCode = Annotated[
    str,
    Field(
        pattern=r"^[0-9]+$",
        description="UML term code, numeric, e.g., '3530' for 2026 Spring",
    ),
]

ClassNumber = Annotated[
    str,
    BeforeValidator(_as_str),
    Field(pattern=r"^[0-9]+$", description="UML class number, numeric, e.g., '9670'"),
]

SubjectCode = Annotated[
    str,
    Field(pattern=r"^[A-Z]{2,5}$", description="Subject code, 2-5 uppercase letters, e.g., 'COMP'"),
]

Subjects = Union[SubjectCode, Annotated[list[SubjectCode], Field(min_length=1)]]


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("leave-course-desk")

# Process-wide leave state, shared by every tool call.
_leave_store: LeaveStore = default_store()


def set_leave_store(store: LeaveStore) -> LeaveStore:
    """Replace the backing store, returning the previous one."""
    global _leave_store
    previous, _leave_store = _leave_store, store
    return previous


# =============================================================================
# TOOL 1: get_leave_balance
# =============================================================================
@mcp.tool()
def get_leave_balance(employee_id: str) -> str:
    """Check how many leave days are left for the employee.

    Args:
        employee_id: The employee identifier (e.g., "E001").

    Returns:
        "<id> has <n> leave days remaining." or "Employee ID not found."
    """
    _log_request("get_leave_balance", employee_id=employee_id)
    return _log_response("get_leave_balance", leave.get_balance(_leave_store, employee_id))


# =============================================================================
# TOOL 2: apply_leave
# =============================================================================
# All-or-nothing: either every date is booked and the balance drops by the
# number of dates, or nothing changes.
# =============================================================================
@mcp.tool()
def apply_leave(employee_id: str, leave_dates: list[str]) -> str:
    """Apply leave for specific dates.

    WHEN TO CALL THIS: Only when the employee explicitly asks to book leave.
    This is the one tool that changes state.  Check the balance first if
    unsure whether enough days remain.

    Args:
        employee_id: The employee identifier (e.g., "E001").
        leave_dates: The dates to book, e.g., ["2025-04-17", "2025-04-18"].
            Each date uses one leave day.  Dates are recorded as given.

    Returns:
        A confirmation with the remaining balance, an "Insufficient leave
        balance" notice stating requested vs. available days (nothing is
        booked in that case), or "Employee ID not found."
    """
    _log_request("apply_leave", employee_id=employee_id, leave_dates=leave_dates)
    result = leave.apply_leave(_leave_store, employee_id, leave_dates)
    return _log_response("apply_leave", result)


# =============================================================================
# TOOL 3: get_leave_history
# =============================================================================
@mcp.tool()
def get_leave_history(employee_id: str) -> str:
    """Get leave history for the employee.

    Args:
        employee_id: The employee identifier (e.g., "E001").

    Returns:
        "Leave history for <id>: <dates, comma-separated>" in the order they
        were booked ("No leaves taken." when there are none), or
        "Employee ID not found."
    """
    _log_request("get_leave_history", employee_id=employee_id)
    return _log_response("get_leave_history", leave.get_history(_leave_store, employee_id))


# =============================================================================
# Course tool plumbing
# =============================================================================

async def _bounded(coro):
    """Run a course API call under MCP_MAX_DURATION."""
    try:
        return await asyncio.wait_for(coro, timeout=config.get_max_duration())
    except asyncio.TimeoutError as exc:
        raise CourseApiError(CourseApiErrorKind.TIMEOUT) from exc


_DEFAULT_UNKNOWN = CourseApiError(CourseApiErrorKind.UNKNOWN).message


def _error_text(exc: Exception) -> str:
    if isinstance(exc, CourseApiError):
        _log_status(f"{exc.kind.value} failure: {exc.message}")
        return f"Error: {exc.message}"
    logging.exception("Unexpected failure in course tool")
    return f"Error: {str(exc) or _DEFAULT_UNKNOWN}"


# =============================================================================
# TOOL 4: get_course_details
# =============================================================================
@mcp.tool()
async def get_course_details(term: TermCode, classNumber: ClassNumber) -> str:
    """Fetch detailed class information from UML for the given term and class number.

    Args:
        term: UML term code, numeric (e.g., "3530" for 2026 Spring).
        classNumber: UML class number, numeric (e.g., "9670").

    Returns:
        The class record as pretty-printed JSON, a "No class found" notice,
        or "Error: <message>" (timeouts say so explicitly).
    """
    _log_request("get_course_details", term=term, classNumber=classNumber)
    try:
        cls = await _bounded(course_api.fetch_course_details(term, classNumber))
    except Exception as exc:
        return _log_response("get_course_details", _error_text(exc))

    if cls is None:
        _log_status("No matching class")
        return _log_response(
            "get_course_details",
            f"No class found for term={term} and classNumber={classNumber}.",
        )
    return _log_response("get_course_details", json.dumps(cls, indent=2))


# =============================================================================
# TOOL 5: search_courses
# =============================================================================
@mcp.tool()
async def search_courses(
    term: TermCode,
    subjects: Subjects,
    courseOfferingMode: Optional[Literal[1, 2, 3]] = None,
) -> str:
    """Search UML class offerings for a term by one or more subject codes.

    Args:
        term: UML term code, numeric (e.g., "3530" for 2026 Spring).
        subjects: One subject code or a list of them, each 2-5 uppercase
            letters (e.g., "COMP" or ["COMP", "MATH"]).
        courseOfferingMode: Optional delivery mode filter: 1, 2, or 3.

    Returns:
        The search response as pretty-printed JSON with at most 20 classes
        reported in data.Count, or "Error: <message>".
    """
    _log_request(
        "search_courses",
        term=term,
        subjects=subjects,
        courseOfferingMode=courseOfferingMode,
    )
    subject_list = [subjects] if isinstance(subjects, str) else list(subjects)
    try:
        envelope = await _bounded(
            course_api.search_courses(term, subject_list, courseOfferingMode)
        )
    except Exception as exc:
        return _log_response("search_courses", _error_text(exc))

    data = envelope.get("data") or {}
    _log_status(f"Returning {len(data.get('Classes', []))} classes, Count={data.get('Count')}")
    return _log_response("search_courses", json.dumps(envelope, indent=2))


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
