# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything the server does that is NOT MCP plumbing:
#   - models.py           the catalog and envelope data shapes
#   - schemas.py          what callers may send (pydantic)
#   - errors.py           the error taxonomy and its text formats
#   - config.py           environment-driven settings
#   - telegram_client.py  the Bot API calls
#   - dispatcher.py       validate → call → normalize
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The dispatcher can be driven
#   from a test, a REPL, or any other tool host unchanged.
# =============================================================================
