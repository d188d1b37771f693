# =============================================================================
# core/errors.py  —  Error Taxonomy & Formatting
# =============================================================================
#
# Four kinds of failure exist in this server:
#
#   1. ConfigError        — missing/invalid startup configuration.  FATAL:
#                           the process exits before any tool is registered.
#   2. Validation error   — pydantic.ValidationError from core/schemas.py.
#                           Reported per call; Telegram is never contacted.
#   3. TelegramAPIError   — the Bot API answered {"ok": false, ...}.
#                           Reported as "Telegram API Error <code>: <desc>".
#   4. Anything else      — network failures, responses that are not a Bot
#                           API envelope, bugs.  Reported with the
#                           exception's message (or its repr if it has none).
#
# Only (1) escapes to the process.  (2)-(4) are turned into text by the
# dispatcher and returned inside a ResponseEnvelope.
# =============================================================================

from typing import Any, Optional

from pydantic import ValidationError


class TelegramMCPError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(TelegramMCPError):
    """Required configuration is missing or malformed."""


class TelegramAPIError(TelegramMCPError):
    """The Bot API rejected a request."""

    def __init__(
        self,
        error_code: int,
        description: str,
        parameters: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(f"Telegram API Error {error_code}: {description}")
        self.error_code = error_code
        self.description = description
        self.parameters = parameters or {}


def format_telegram_error(error: BaseException) -> str:
    """Render any failure as a human-readable line.

    Anything carrying an error_code and a description (TelegramAPIError or a
    look-alike from another client) gets the Telegram format.
    """
    error_code = getattr(error, "error_code", None)
    description = getattr(error, "description", None)
    if error_code and description:
        return f"Telegram API Error {error_code}: {description}"

    message = str(error)
    if message:
        return f"Error: {message}"
    return f"Unknown error occurred: {error!r}"


def format_validation_error(tool_name: str, error: ValidationError) -> str:
    """Flatten pydantic's error list into one line: "loc: msg; loc: msg"."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)
