# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the dispatcher)
# =============================================================================
#
# These dataclasses define the *shape* of what flows through the dispatcher:
# the tool catalog entries and the envelope every tool call returns.
#
# They are intentionally separate from core/schemas.py:
#   - schemas.py describes what a CALLER may send (pydantic, validated)
#   - models.py describes what the SERVER holds and returns (plain dataclasses)
#
# DESIGN PRINCIPLE — "One Response Shape":
#   Success, validation failure, Telegram failure, network failure: every
#   outcome is a ResponseEnvelope with at least one text item.  The MCP host
#   never sees a raw exception or a bare value.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel


# A handler receives the validated argument model and returns whatever the
# Bot API returned (dict, list, int, bool ...).
ToolHandler = Callable[[Any], Awaitable[Any]]


# -----------------------------------------------------------------------------
# TextContent — one item of a response
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextContent:
    """A single text block, mirroring MCP's TextContent."""

    text: str
    type: str = "text"


# -----------------------------------------------------------------------------
# ResponseEnvelope — what every invocation returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform result of a tool invocation.

    Always holds at least one TextContent item; an empty envelope is a
    programming error and is rejected at construction.
    """

    content: list[TextContent] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("ResponseEnvelope requires at least one content item")

    @classmethod
    def text(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[TextContent(text=text)])

    @property
    def first_text(self) -> str:
        return self.content[0].text


# -----------------------------------------------------------------------------
# ToolDefinition — one entry in the catalog
# -----------------------------------------------------------------------------
# Built once at startup and never mutated (frozen).  success_message lets
# "fire and forget" tools (send-message, set-my-name ...) answer with a short
# confirmation instead of echoing the Bot API payload.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-validated operation bound to one Bot API call."""

    name: str
    description: str
    schema: type[BaseModel]
    handler: ToolHandler
    success_message: Optional[str] = None  # None → JSON-encode the result
