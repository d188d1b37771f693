# =============================================================================
# core/dispatcher.py  —  Tool Dispatcher (validate → call → normalize)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Owns the tool catalog and runs the same three-step protocol for EVERY
#   tool call:
#
#       raw args ──▶ [ schema.model_validate ] ──▶ [ handler ] ──▶ envelope
#                           │ fails                    │ raises
#                           ▼                          ▼
#                  "Invalid arguments ..."    format_telegram_error(exc)
#
# THE ONE RULE:
#   invoke() always returns a ResponseEnvelope.  Validation errors, Telegram
#   errors, network errors: all of them are converted here, at exactly one
#   boundary, and never reach the MCP host as exceptions.
#
# WHAT IT DOES NOT DO:
#   - No retries (a failed call is reported once, as-is)
#   - No caching or de-duplication (N identical calls → N outbound calls)
#   - No shared mutable state beyond the catalog, which is frozen once the
#     server starts serving
# =============================================================================

import json
import logging
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from core.errors import format_telegram_error, format_validation_error
from core.models import ResponseEnvelope, ToolDefinition, ToolHandler
from core.schemas import NoArguments


logger = logging.getLogger(__name__)


def render_result(result: Any) -> str:
    """Compact JSON, the same text JSON.stringify would produce."""
    return json.dumps(result, separators=(",", ":"), ensure_ascii=False)


class ToolDispatcher:
    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    # -------------------------------------------------------------------------
    # Registration (startup only)
    # -------------------------------------------------------------------------
    def register(
        self,
        name: str,
        description: str,
        schema: Optional[type[BaseModel]],
        handler: ToolHandler,
        success_message: Optional[str] = None,
    ) -> ToolDefinition:
        """Add a tool to the catalog.

        Duplicate or empty names are programming errors and raise ValueError
        immediately, so a broken catalog never starts serving.
        """
        if not name or not name.strip():
            raise ValueError("Tool name must be a non-empty string")
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")

        definition = ToolDefinition(
            name=name,
            description=description,
            schema=schema or NoArguments,
            handler=handler,
            success_message=success_message,
        )
        self._tools[name] = definition
        return definition

    def tool(
        self,
        name: str,
        description: str,
        schema: Optional[type[BaseModel]] = None,
        success_message: Optional[str] = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of register()."""

        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(name, description, schema, handler, success_message)
            return handler

        return decorator

    # -------------------------------------------------------------------------
    # Catalog access
    # -------------------------------------------------------------------------
    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def input_schema(self, name: str) -> dict:
        return self._tools[name].schema.model_json_schema()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    # -------------------------------------------------------------------------
    # Invocation
    # -------------------------------------------------------------------------
    async def invoke(self, name: str, raw_args: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        definition = self._tools.get(name)
        if definition is None:
            return ResponseEnvelope.text(f"Unknown tool: {name}")

        try:
            args = definition.schema.model_validate({} if raw_args is None else raw_args)
        except ValidationError as exc:
            message = format_validation_error(name, exc)
            logger.info(message)
            return ResponseEnvelope.text(message)

        try:
            result = await definition.handler(args)
        except Exception as exc:
            logger.error("Tool %s failed: %s", name, exc, exc_info=True)
            return ResponseEnvelope.text(format_telegram_error(exc))

        if definition.success_message is not None:
            return ResponseEnvelope.text(definition.success_message)
        try:
            return ResponseEnvelope.text(render_result(result))
        except (TypeError, ValueError) as exc:
            logger.error("Tool %s returned a non-JSON result: %s", name, exc)
            return ResponseEnvelope.text(format_telegram_error(exc))
