# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the translation layer between MCP and core/.
#
#   - telegram_tools.py  the catalog: one tool per Bot API method
#   - mcp_server.py      exposes that catalog on a FastMCP server
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate by hand (schemas in core/ do that)
#   - They do NOT catch errors (the dispatcher converts them)
#   - They do NOT keep state between calls
#
# TOOL CONTRACT QUALITY:
#   Names and descriptions are what the calling model reads to decide WHEN
#   to use a tool; the published inputSchema tells it WHAT to pass.
# =============================================================================
