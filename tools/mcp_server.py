# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (wires the catalog to MCP)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Takes the ToolDispatcher built by tools/telegram_tools.py and exposes
#   every catalog entry as an MCP tool on a FastMCP server.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (Claude Desktop, an agent, ...) calls a tool by name
#   2. FastMCP routes the call to DispatchedTool.run() below
#   3. run() hands the RAW arguments to ToolDispatcher.invoke()
#   4. invoke() validates, calls Telegram once, and returns an envelope
#   5. run() converts the envelope to MCP TextContent
#
# WHY NOT @mcp.tool() ON EACH FUNCTION?
#   FastMCP's decorator validates arguments itself and raises on bad input.
#   Here validation failures are ordinary results ("Invalid arguments ..."),
#   so tools are registered as Tool objects that publish our pydantic schema
#   as inputSchema and leave validation to the dispatcher.
# =============================================================================

import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field

from core.dispatcher import ToolDispatcher
from core.models import ResponseEnvelope


# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# Anything printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI colors make tool traffic easy to scan in a terminal:
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for responses
#   - YELLOW for status messages
#
# httpx logs every request URL at INFO.  Bot API URLs contain the bot token,
# so its logger is held at WARNING.
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logger = logging.getLogger("telegram_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_REDACTED_PARAMS = {"secret_token"}


def _log_request(tool_name: str, params: dict) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(
        f"{k}='***'" if k in _REDACTED_PARAMS else f"{k}={v!r}" for k, v in params.items()
    )
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, envelope: ResponseEnvelope) -> ResponseEnvelope:
    """Log the envelope text in GREEN, then return it."""
    texts = json.dumps([item.text for item in envelope.content], ensure_ascii=False)
    logger.info(f"{_GREEN}  ← {tool_name} response: {texts}{_RESET}")
    return envelope


# =============================================================================
# DispatchedTool — one MCP tool backed by the dispatcher
# =============================================================================
class DispatchedTool(Tool):
    """An MCP tool whose execution is delegated to ToolDispatcher.invoke()."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments or {})
        envelope = _log_response(self.name, await self.dispatcher.invoke(self.name, arguments))
        return ToolResult(content=[TextContent(type="text", text=item.text) for item in envelope.content])


# =============================================================================
# Server factory
# =============================================================================
def create_server(dispatcher: ToolDispatcher, name: str = "telegram_bot") -> FastMCP:
    """Create a FastMCP server exposing every tool in the dispatcher."""
    mcp = FastMCP(name)
    for definition in dispatcher.definitions():
        mcp.add_tool(
            DispatchedTool(
                name=definition.name,
                description=definition.description,
                parameters=dispatcher.input_schema(definition.name),
                dispatcher=dispatcher,
            )
        )
    _log_status(f"Registered {len(dispatcher)} tools on '{name}'")
    return mcp
