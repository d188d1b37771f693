import json

import httpx
import pytest


# One valid argument set per tool.
VALID_ARGS = {
    "get-me": {},
    "send-message": {"chatId": "12345", "text": "hello"},
    "send-photo": {"chatId": "12345", "media": "https://example.com/cat.jpg", "text": "a cat"},
    "kick-chat-member": {"chatId": "-100200", "userId": 7},
    "un-ban-chat-member": {"chatId": "-100200", "userId": 7},
    "get-chat": {"chatId": "@channel"},
    "get-chat-member-count": {"chatId": "@channel"},
    "get-chat-member": {"chatId": "@channel", "userId": 7},
    "set-my-short-description": {"short_description": "A helpful bot"},
    "get-my-short-description": {},
    "set-my-commands": {"commands": [{"command": "start", "description": "Start the bot"}]},
    "get-my-commands": {},
    "set-my-name": {"name": "Helper"},
    "get-my-name": {},
    "set-my-description": {"description": "I help."},
    "get-my-description": {},
    "sendMessage": {"chatId": "12345", "text": "*hi*", "parse_mode": "MarkdownV2"},
    "editMessageText": {"chatId": "12345", "messageId": 10, "text": "edited"},
    "editMessageReplyMarkup": {"chatId": "12345", "messageId": 10},
    "answerCallbackQuery": {"callback_query_id": "cb-1", "text": "Saved"},
    "setChatMenuButton": {"menu_button": {"type": "commands"}},
    "answerWebAppQuery": {"web_app_query_id": "wq-1", "result": {"type": "article", "id": "1", "title": "Done"}},
    "setWebHook": {"url": "https://example.com/hook"},
}


def test_catalog_lists_every_tool(dispatcher) -> None:
    assert sorted(dispatcher.names()) == sorted(VALID_ARGS)
    assert "sendPhoto" not in dispatcher
    for name in dispatcher.names():
        definition = dispatcher.get(name)
        assert definition.description
        assert dispatcher.input_schema(name)["type"] == "object"


# -----------------------------------------------------------------------------
# Properties that hold for every tool
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("name", sorted(VALID_ARGS))
def test_malformed_input_returns_validation_text(name, invoke, fake_api) -> None:
    text = invoke(name, ["not", "an", "object"])
    assert text.startswith(f"Invalid arguments for {name}: ")
    assert fake_api.requests == []


@pytest.mark.parametrize("name", sorted(VALID_ARGS))
def test_telegram_errors_are_formatted(name, invoke, fake_api) -> None:
    fake_api.fail(None, 400, "Bad Request: chat not found")

    assert invoke(name, VALID_ARGS[name]) == "Telegram API Error 400: Bad Request: chat not found"
    assert len(fake_api.requests) == 1


@pytest.mark.parametrize("name", sorted(VALID_ARGS))
def test_each_call_goes_out_once(name, invoke, fake_api) -> None:
    invoke(name, VALID_ARGS[name])
    invoke(name, VALID_ARGS[name])
    assert len(fake_api.requests) == 2
    assert fake_api.requests[0] == fake_api.requests[1]


def test_network_failure_is_reported(invoke, fake_api) -> None:
    fake_api.raise_for(None, httpx.ConnectError("Connection refused"))
    assert invoke("get-me") == "Error: Connection refused"


# -----------------------------------------------------------------------------
# Scenarios
# -----------------------------------------------------------------------------
def test_get_me_returns_identity_json(invoke, fake_api) -> None:
    fake_api.respond("getMe", {"id": 123456, "is_bot": True, "first_name": "Helper", "username": "helper_bot"})

    identity = json.loads(invoke("get-me"))
    assert isinstance(identity["id"], int)
    assert identity["is_bot"] is True
    assert fake_api.calls("getMe") == [{}]


def test_send_message_forwards_exact_parameters(invoke, fake_api) -> None:
    text = invoke("send-message", {"chatId": "12345", "text": "hello"})

    assert text == "Message sent to telegram user chat id"
    assert fake_api.requests == [("sendMessage", {"chat_id": "12345", "text": "hello"})]


def test_send_photo_maps_caption(invoke, fake_api) -> None:
    assert invoke("send-photo", VALID_ARGS["send-photo"]) == "Message sent to telegram user chat id"
    assert fake_api.calls("sendPhoto") == [
        {"chat_id": "12345", "photo": "https://example.com/cat.jpg", "caption": "a cat"}
    ]

    invoke("send-photo", {"chatId": "12345", "media": "file-id"})
    assert fake_api.calls("sendPhoto")[1] == {"chat_id": "12345", "photo": "file-id"}


def test_member_tools(invoke, fake_api) -> None:
    assert invoke("kick-chat-member", VALID_ARGS["kick-chat-member"]) == "user banned from chat successfully"
    assert invoke("un-ban-chat-member", VALID_ARGS["un-ban-chat-member"]) == "user unbanned from chat successfully"

    assert fake_api.calls("banChatMember") == [{"chat_id": "-100200", "user_id": 7}]
    assert fake_api.calls("unbanChatMember") == [{"chat_id": "-100200", "user_id": 7, "only_if_banned": True}]


def test_chat_info_tools(invoke, fake_api) -> None:
    fake_api.respond("getChat", {"id": -100200, "type": "supergroup", "title": "Team"})
    fake_api.respond("getChatMemberCount", 42)
    fake_api.respond("getChatMember", {"status": "member", "user": {"id": 7, "is_bot": False}})

    assert json.loads(invoke("get-chat", {"chatId": "-100200"}))["title"] == "Team"
    assert invoke("get-chat-member-count", {"chatId": "-100200"}) == "42"
    assert json.loads(invoke("get-chat-member", {"chatId": "-100200", "userId": 7}))["status"] == "member"


def test_profile_tools(invoke, fake_api) -> None:
    fake_api.respond("getMyName", {"name": "Helper"})
    fake_api.respond("getMyCommands", [{"command": "start", "description": "Start the bot"}])

    assert invoke("set-my-name", {"name": "Helper"}) == "Successfully updated bot name"
    assert invoke("get-my-name") == '{"name":"Helper"}'
    assert invoke("set-my-commands", VALID_ARGS["set-my-commands"]) == "Successfully updated bot commands"
    assert json.loads(invoke("get-my-commands"))[0]["command"] == "start"
    assert invoke("set-my-short-description", {"short_description": ""}) == "Successfully update short description"
    assert invoke("set-my-description", {"description": "I help."}) == "Successfully updated bot description"

    assert fake_api.calls("setMyCommands") == [{"commands": [{"command": "start", "description": "Start the bot"}]}]
    assert fake_api.calls("setMyShortDescription") == [{"short_description": ""}]


def test_rich_message_with_keyboard(invoke, fake_api) -> None:
    fake_api.respond("sendMessage", {"message_id": 99, "chat": {"id": 12345}, "text": "Pick one"})

    text = invoke(
        "sendMessage",
        {
            "chatId": "12345",
            "text": "Pick one",
            "parse_mode": "HTML",
            "reply_markup": {
                "inline_keyboard": [
                    [{"text": "Yes", "callback_data": "yes"}, {"text": "No", "callback_data": "no"}],
                    [{"text": "Docs", "url": "https://example.com/docs"}],
                ]
            },
        },
    )

    assert json.loads(text)["message_id"] == 99
    assert fake_api.calls("sendMessage") == [
        {
            "chat_id": "12345",
            "text": "Pick one",
            "parse_mode": "HTML",
            "reply_markup": {
                "inline_keyboard": [
                    [{"text": "Yes", "callback_data": "yes"}, {"text": "No", "callback_data": "no"}],
                    [{"text": "Docs", "url": "https://example.com/docs"}],
                ]
            },
        }
    ]


def test_rich_message_rejects_ambiguous_button(invoke, fake_api) -> None:
    text = invoke(
        "sendMessage",
        {
            "chatId": "12345",
            "text": "Pick one",
            "reply_markup": {"inline_keyboard": [[{"text": "Both", "url": "https://a.b", "callback_data": "x"}]]},
        },
    )
    assert "Button must have exactly one action type" in text
    assert "reply_markup.inline_keyboard.0.0" in text
    assert fake_api.requests == []


def test_edit_tools(invoke, fake_api) -> None:
    invoke("editMessageText", {"chatId": "12345", "messageId": 10, "text": "edited", "parse_mode": "Markdown"})
    invoke(
        "editMessageReplyMarkup",
        {"chatId": "12345", "messageId": 10, "reply_markup": {"inline_keyboard": [[{"text": "Go", "switch_inline_query": ""}]]}},
    )

    assert fake_api.calls("editMessageText") == [
        {"chat_id": "12345", "message_id": 10, "text": "edited", "parse_mode": "Markdown"}
    ]
    assert fake_api.calls("editMessageReplyMarkup") == [
        {
            "chat_id": "12345",
            "message_id": 10,
            "reply_markup": {"inline_keyboard": [[{"text": "Go", "switch_inline_query": ""}]]},
        }
    ]


def test_answer_callback_query_drops_absent_fields(invoke, fake_api) -> None:
    assert invoke("answerCallbackQuery", {"callback_query_id": "cb-1", "show_alert": True, "cache_time": 0}) == "true"
    assert fake_api.calls("answerCallbackQuery") == [{"callback_query_id": "cb-1", "show_alert": True, "cache_time": 0}]


def test_set_chat_menu_button(invoke, fake_api) -> None:
    invoke(
        "setChatMenuButton",
        {"chat_id": "42", "menu_button": {"type": "web_app", "text": "Open", "web_app": {"url": "https://example.com"}}},
    )
    invoke("setChatMenuButton", {"menu_button": {"type": "default"}})

    assert fake_api.calls("setChatMenuButton") == [
        {"chat_id": 42, "menu_button": {"type": "web_app", "text": "Open", "web_app": {"url": "https://example.com"}}},
        {"menu_button": {"type": "default"}},
    ]


def test_set_chat_menu_button_rejects_incomplete_web_app(invoke, fake_api) -> None:
    assert invoke("setChatMenuButton", {"menu_button": {"type": "web_app"}}).startswith(
        "Invalid arguments for setChatMenuButton: "
    )
    assert fake_api.requests == []


def test_answer_web_app_query_nests_message_content(invoke, fake_api) -> None:
    fake_api.respond("answerWebAppQuery", {"inline_message_id": "im-1"})

    text = invoke(
        "answerWebAppQuery",
        {
            "web_app_query_id": "wq-1",
            "result": {"type": "article", "id": "1", "title": "Order", "message_text": "<b>Paid</b>", "parse_mode": "HTML"},
        },
    )

    assert text == '{"inline_message_id":"im-1"}'
    assert fake_api.calls("answerWebAppQuery") == [
        {
            "web_app_query_id": "wq-1",
            "result": {
                "type": "article",
                "id": "1",
                "title": "Order",
                "input_message_content": {"message_text": "<b>Paid</b>", "parse_mode": "HTML"},
            },
        }
    ]


def test_set_webhook(invoke, fake_api) -> None:
    assert invoke("setWebHook", {"url": "http://example.com/hook"}).startswith("Invalid arguments for setWebHook: url:")
    assert invoke("setWebHook", {"url": "https://example.com/hook", "max_connections": 0}).startswith(
        "Invalid arguments for setWebHook: max_connections:"
    )
    assert fake_api.requests == []

    invoke(
        "setWebHook",
        {
            "url": "https://example.com/hook",
            "max_connections": 100,
            "allowed_updates": ["message", "callback_query"],
            "secret_token": "s3cret",
            "drop_pending_updates": True,
        },
    )
    assert fake_api.calls("setWebhook") == [
        {
            "url": "https://example.com/hook",
            "max_connections": 100,
            "allowed_updates": ["message", "callback_query"],
            "secret_token": "s3cret",
            "drop_pending_updates": True,
        }
    ]
