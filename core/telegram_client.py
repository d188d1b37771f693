# =============================================================================
# core/telegram_client.py  —  Telegram Bot API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues one HTTPS call per Bot API method:
#
#       POST {base_url}/bot{token}/{method}      (JSON body)
#
#   and unwraps Telegram's envelope:
#       {"ok": true,  "result": ...}                       → result
#       {"ok": false, "error_code": 400, "description": ...} → TelegramAPIError
#       anything else (HTML error page, bad JSON ...)   → TelegramMCPError
#
# WHAT IT DOES NOT DO:
#   - No retries, no rate limiting, no caching.  A failed call is reported
#     as-is; the dispatcher turns it into text.
#   - No polling or webhook serving.  Outbound calls only.
#
# SHARING:
#   One TelegramClient is built at startup and handed to every tool handler.
#   It holds only immutable settings; each call opens its own
#   httpx.AsyncClient, so concurrent tool calls never share a connection
#   object and nothing needs closing at shutdown.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.errors import TelegramAPIError, TelegramMCPError


logger = logging.getLogger(__name__)


def _unexpected_response(response: httpx.Response) -> TelegramMCPError:
    # Proxy pages, truncated bodies and envelopes missing error_code/description.
    detail = (response.text or "")[:200] or response.reason_phrase
    return TelegramMCPError(f"HTTP {response.status_code}: {detail}")


class TelegramClient:
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.telegram.org",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not token or token.strip() == "":
            raise ValueError("Telegram bot token is empty")
        self.token = token.strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    async def call(self, method: str, **params: Any) -> Any:
        """Invoke a Bot API method; None-valued params are not sent."""
        payload = {key: value for key, value in params.items() if value is not None}
        logger.debug("Telegram %s %s", method, sorted(payload))

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self._method_url(method), json=payload)

        try:
            body = response.json()
        except ValueError:
            raise _unexpected_response(response) from None

        if not isinstance(body, dict):
            raise _unexpected_response(response)
        if not body.get("ok"):
            if body.get("error_code") and body.get("description"):
                raise TelegramAPIError(body["error_code"], body["description"], body.get("parameters"))
            raise _unexpected_response(response)
        return body.get("result")

    # -------------------------------------------------------------------------
    # Bot identity & profile
    # -------------------------------------------------------------------------
    async def get_me(self) -> dict:
        return await self.call("getMe")

    async def get_my_name(self) -> dict:
        return await self.call("getMyName")

    async def set_my_name(self, name: str) -> bool:
        return await self.call("setMyName", name=name)

    async def get_my_description(self) -> dict:
        return await self.call("getMyDescription")

    async def set_my_description(self, description: str) -> bool:
        return await self.call("setMyDescription", description=description)

    async def get_my_short_description(self) -> dict:
        return await self.call("getMyShortDescription")

    async def set_my_short_description(self, short_description: str) -> bool:
        return await self.call("setMyShortDescription", short_description=short_description)

    async def get_my_commands(self) -> list:
        return await self.call("getMyCommands")

    async def set_my_commands(self, commands: list[dict]) -> bool:
        return await self.call("setMyCommands", commands=commands)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------
    async def send_message(
        self,
        chat_id: str,
        text: str,
        parse_mode: Optional[str] = None,
        reply_markup: Optional[dict] = None,
    ) -> dict:
        return await self.call(
            "sendMessage", chat_id=chat_id, text=text, parse_mode=parse_mode, reply_markup=reply_markup
        )

    async def send_photo(self, chat_id: str, photo: str, caption: Optional[str] = None) -> dict:
        return await self.call("sendPhoto", chat_id=chat_id, photo=photo, caption=caption)

    async def edit_message_text(
        self,
        chat_id: str,
        message_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        reply_markup: Optional[dict] = None,
    ) -> Any:
        return await self.call(
            "editMessageText",
            chat_id=chat_id,
            message_id=message_id,
            text=text,
            parse_mode=parse_mode,
            reply_markup=reply_markup,
        )

    async def edit_message_reply_markup(
        self, chat_id: str, message_id: int, reply_markup: Optional[dict] = None
    ) -> Any:
        return await self.call(
            "editMessageReplyMarkup", chat_id=chat_id, message_id=message_id, reply_markup=reply_markup
        )

    # -------------------------------------------------------------------------
    # Chats & members
    # -------------------------------------------------------------------------
    async def get_chat(self, chat_id: str) -> dict:
        return await self.call("getChat", chat_id=chat_id)

    async def get_chat_member_count(self, chat_id: str) -> int:
        return await self.call("getChatMemberCount", chat_id=chat_id)

    async def get_chat_member(self, chat_id: str, user_id: int) -> dict:
        return await self.call("getChatMember", chat_id=chat_id, user_id=user_id)

    async def ban_chat_member(self, chat_id: str, user_id: int) -> bool:
        return await self.call("banChatMember", chat_id=chat_id, user_id=user_id)

    async def unban_chat_member(self, chat_id: str, user_id: int, only_if_banned: bool = True) -> bool:
        return await self.call("unbanChatMember", chat_id=chat_id, user_id=user_id, only_if_banned=only_if_banned)

    async def set_chat_menu_button(self, menu_button: dict, chat_id: Optional[int] = None) -> bool:
        return await self.call("setChatMenuButton", chat_id=chat_id, menu_button=menu_button)

    # -------------------------------------------------------------------------
    # Queries & webhooks
    # -------------------------------------------------------------------------
    async def answer_callback_query(
        self,
        callback_query_id: str,
        text: Optional[str] = None,
        show_alert: Optional[bool] = None,
        url: Optional[str] = None,
        cache_time: Optional[int] = None,
    ) -> bool:
        return await self.call(
            "answerCallbackQuery",
            callback_query_id=callback_query_id,
            text=text,
            show_alert=show_alert,
            url=url,
            cache_time=cache_time,
        )

    async def answer_web_app_query(self, web_app_query_id: str, result: dict) -> dict:
        return await self.call("answerWebAppQuery", web_app_query_id=web_app_query_id, result=result)

    async def set_webhook(
        self,
        url: str,
        max_connections: Optional[int] = None,
        allowed_updates: Optional[list[str]] = None,
        secret_token: Optional[str] = None,
        drop_pending_updates: Optional[bool] = None,
    ) -> bool:
        return await self.call(
            "setWebhook",
            url=url,
            max_connections=max_connections,
            allowed_updates=allowed_updates,
            secret_token=secret_token,
            drop_pending_updates=drop_pending_updates,
        )
