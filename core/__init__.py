# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic for the leave & course desk.
#
# Nothing in this package imports FastMCP.  Leave operations are pure
# Python over a LeaveStore; the course client needs only httpx and pydantic.
# =============================================================================
