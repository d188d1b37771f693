# =============================================================================
# tools/telegram_tools.py  —  The Tool Catalog (one tool per Bot API call)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   build_dispatcher(client) registers every tool this server offers.  Each
#   entry is three things:
#     1. a name + description   (the LLM reads these to decide WHEN to call)
#     2. a schema               (core/schemas.py — WHAT it may pass)
#     3. a handler              (ONE TelegramClient call, nothing else)
#
# HANDLER RULES:
#   - Handlers receive an already-validated pydantic model.
#   - Handlers never catch exceptions; the dispatcher converts failures.
#   - Handlers capture the client passed in here (no module-level globals),
#     so tests can hand in a client pointed at a fake transport.
#
# TOOL NAMING:
#   Names are part of the public contract with existing MCP clients, so the
#   kebab-case profile tools ("get-me") and the camelCase conversation-flow
#   tools ("sendMessage") both keep their established spelling.
# =============================================================================

from typing import Optional

from core.dispatcher import ToolDispatcher
from core.schemas import (
    AnswerCallbackQueryArgs,
    AnswerWebAppQueryArgs,
    ChatArgs,
    ChatMemberArgs,
    EditMessageReplyMarkupArgs,
    EditMessageTextArgs,
    RichMessageArgs,
    SendMessageArgs,
    SendPhotoArgs,
    SetChatMenuButtonArgs,
    SetCommandsArgs,
    SetDescriptionArgs,
    SetNameArgs,
    SetShortDescriptionArgs,
    SetWebhookArgs,
    WebAppQueryResult,
)
from core.telegram_client import TelegramClient


def _markup(model) -> Optional[dict]:
    return model.model_dump(exclude_none=True) if model is not None else None


def web_app_query_result(result: WebAppQueryResult) -> dict:
    """Shape a Web App answer the way the Bot API expects an article result.

    message_text / parse_mode travel inside input_message_content.
    """
    payload = result.model_dump(exclude_none=True, exclude={"message_text", "parse_mode"})
    if result.message_text is not None:
        content = {"message_text": result.message_text}
        if result.parse_mode is not None:
            content["parse_mode"] = result.parse_mode
        payload["input_message_content"] = content
    return payload


def build_dispatcher(client: TelegramClient) -> ToolDispatcher:
    dispatcher = ToolDispatcher()
    tool = dispatcher.tool

    # =========================================================================
    # Bot identity
    # =========================================================================
    @tool("get-me", "A simple method for testing your bot's authentication token. Requires no parameters")
    async def get_me(args):
        return await client.get_me()

    # =========================================================================
    # Plain messaging
    # =========================================================================
    @tool(
        "send-message",
        "Send message using a chat id",
        SendMessageArgs,
        success_message="Message sent to telegram user chat id",
    )
    async def send_message(args: SendMessageArgs):
        return await client.send_message(args.chatId, args.text)

    @tool(
        "send-photo",
        "Send photo with message using a chat id",
        SendPhotoArgs,
        success_message="Message sent to telegram user chat id",
    )
    async def send_photo(args: SendPhotoArgs):
        return await client.send_photo(args.chatId, args.media, caption=args.text)

    # =========================================================================
    # Chat administration
    # =========================================================================
    @tool(
        "kick-chat-member",
        "Kick a user from a group, a supergroup or a channel",
        ChatMemberArgs,
        success_message="user banned from chat successfully",
    )
    async def kick_chat_member(args: ChatMemberArgs):
        return await client.ban_chat_member(args.chatId, args.userId)

    @tool(
        "un-ban-chat-member",
        "Use this method to unban a previously banned user in a supergroup or channel. "
        "The user will not return to the group or channel automatically",
        ChatMemberArgs,
        success_message="user unbanned from chat successfully",
    )
    async def unban_chat_member(args: ChatMemberArgs):
        return await client.unban_chat_member(args.chatId, args.userId, only_if_banned=True)

    @tool("get-chat", "Use this method to get up-to-date information about the chat", ChatArgs)
    async def get_chat(args: ChatArgs):
        return await client.get_chat(args.chatId)

    @tool("get-chat-member-count", "Use this method to get the number of members in a chat", ChatArgs)
    async def get_chat_member_count(args: ChatArgs):
        return await client.get_chat_member_count(args.chatId)

    @tool("get-chat-member", "get information about a member of a chat", ChatMemberArgs)
    async def get_chat_member(args: ChatMemberArgs):
        return await client.get_chat_member(args.chatId, args.userId)

    # =========================================================================
    # Bot profile: short description, commands, name, description
    # =========================================================================
    @tool(
        "set-my-short-description",
        "Use this method to change the bot's short description, which is shown on the bot's "
        "profile page and is sent together with the link when users share the bot",
        SetShortDescriptionArgs,
        success_message="Successfully update short description",
    )
    async def set_my_short_description(args: SetShortDescriptionArgs):
        return await client.set_my_short_description(args.short_description)

    @tool("get-my-short-description", "Use this method to get the current bot short description")
    async def get_my_short_description(args):
        return await client.get_my_short_description()

    @tool(
        "set-my-commands",
        "Use this method to change the list of the bot's commands",
        SetCommandsArgs,
        success_message="Successfully updated bot commands",
    )
    async def set_my_commands(args: SetCommandsArgs):
        return await client.set_my_commands([command.model_dump() for command in args.commands])

    @tool("get-my-commands", "Use this method to get the current list of the bot's commands")
    async def get_my_commands(args):
        return await client.get_my_commands()

    @tool(
        "set-my-name",
        "Use this method to change the bot's name",
        SetNameArgs,
        success_message="Successfully updated bot name",
    )
    async def set_my_name(args: SetNameArgs):
        return await client.set_my_name(args.name)

    @tool("get-my-name", "Use this method to get the bot's name")
    async def get_my_name(args):
        return await client.get_my_name()

    @tool(
        "set-my-description",
        "Use this method to change the bot's description, which is shown in the chat with the "
        "bot if the chat is empty",
        SetDescriptionArgs,
        success_message="Successfully updated bot description",
    )
    async def set_my_description(args: SetDescriptionArgs):
        return await client.set_my_description(args.description)

    @tool("get-my-description", "Use this method to get the bot's description")
    async def get_my_description(args):
        return await client.get_my_description()

    # =========================================================================
    # Conversation flows: formatted messages, inline keyboards, edits
    # =========================================================================
    # These return the Bot API payload (the sent/edited Message) so the caller
    # can pick up message_id for later edits.
    # =========================================================================
    @tool(
        "sendMessage",
        "Send message with optional inline keyboard for dynamic conversation flows",
        RichMessageArgs,
    )
    async def send_rich_message(args: RichMessageArgs):
        return await client.send_message(
            args.chatId, args.text, parse_mode=args.parse_mode, reply_markup=_markup(args.reply_markup)
        )

    @tool(
        "editMessageText",
        "Edit text of a message, used for updating conversation flows dynamically",
        EditMessageTextArgs,
    )
    async def edit_message_text(args: EditMessageTextArgs):
        return await client.edit_message_text(
            args.chatId,
            args.messageId,
            args.text,
            parse_mode=args.parse_mode,
            reply_markup=_markup(args.reply_markup),
        )

    @tool(
        "editMessageReplyMarkup",
        "Edit only the reply markup of a message, used for modifying button layouts",
        EditMessageReplyMarkupArgs,
    )
    async def edit_message_reply_markup(args: EditMessageReplyMarkupArgs):
        return await client.edit_message_reply_markup(
            args.chatId, args.messageId, reply_markup=_markup(args.reply_markup)
        )

    @tool(
        "answerCallbackQuery",
        "Answer callback queries sent from inline keyboards, handles button press responses",
        AnswerCallbackQueryArgs,
    )
    async def answer_callback_query(args: AnswerCallbackQueryArgs):
        return await client.answer_callback_query(
            args.callback_query_id,
            text=args.text,
            show_alert=args.show_alert,
            url=args.url,
            cache_time=args.cache_time,
        )

    # =========================================================================
    # Mini Apps & webhooks
    # =========================================================================
    @tool(
        "setChatMenuButton",
        "Set the bot's menu button for a specific chat, used to link generated Mini Apps",
        SetChatMenuButtonArgs,
    )
    async def set_chat_menu_button(args: SetChatMenuButtonArgs):
        chat_id = int(args.chat_id) if args.chat_id is not None else None
        return await client.set_chat_menu_button(args.menu_button.model_dump(exclude_none=True), chat_id=chat_id)

    @tool(
        "answerWebAppQuery",
        "Answer queries from Mini Apps, processes data sent from web applications",
        AnswerWebAppQueryArgs,
    )
    async def answer_web_app_query(args: AnswerWebAppQueryArgs):
        return await client.answer_web_app_query(args.web_app_query_id, web_app_query_result(args.result))

    @tool("setWebHook", "Configure webhook URL for receiving updates from Telegram", SetWebhookArgs)
    async def set_webhook(args: SetWebhookArgs):
        return await client.set_webhook(
            args.url,
            max_connections=args.max_connections,
            allowed_updates=args.allowed_updates,
            secret_token=args.secret_token,
            drop_pending_updates=args.drop_pending_updates,
        )

    return dispatcher
