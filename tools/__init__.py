# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers.
#
# Each tool:
#   1. Declares its argument schema (validated by FastMCP before the call)
#   2. Calls a function from core/
#   3. Formats the outcome as text for the calling agent
#
# Tools hold no business logic of their own.
# =============================================================================
