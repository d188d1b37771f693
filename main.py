# =============================================================================
# main.py  —  Entry Point for the Telegram Bot MCP Server
# =============================================================================
#
# HOW TO RUN:
#   TELEGRAM_BOT_API_TOKEN=123:abc uv run python main.py
#   (or put the token in a .env file next to this script)
#
# WHAT HAPPENS:
#   1. Loads .env into the process environment
#   2. Reads Settings; a missing bot token is FATAL (exit status 1)
#   3. Builds ONE TelegramClient, shared read-only by every tool
#   4. Registers the tool catalog (tools/telegram_tools.py)
#   5. Serves it over stdio via FastMCP (tools/mcp_server.py)
#
# MCP CLIENT CONFIG (e.g. Claude Desktop):
#   {
#     "mcpServers": {
#       "telegram_bot": {
#         "command": "uv",
#         "args": ["run", "python", "/path/to/main.py"],
#         "env": {"TELEGRAM_BOT_API_TOKEN": "..."}
#       }
#     }
#   }
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import env, load_settings
from core.errors import ConfigError
from core.telegram_client import TelegramClient
from tools.mcp_server import configure_logging, create_server
from tools.telegram_tools import build_dispatcher


logger = logging.getLogger("telegram_mcp")


def main() -> None:
    """Start the Telegram bot MCP server on stdio."""
    # .env must be loaded BEFORE settings are read.
    load_dotenv()
    configure_logging(env("LOG_LEVEL", "INFO").upper())

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error(str(exc))
        sys.exit(1)

    client = TelegramClient(
        settings.bot_token,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )
    server = create_server(build_dispatcher(client), name=settings.server_name)

    logger.info("Telegram bot MCP Server running on stdio")
    server.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
