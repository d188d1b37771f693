import asyncio
import json

from fastmcp import Client

from tools.mcp_server import create_server


def test_server_lists_catalog_with_schemas(dispatcher) -> None:
    server = create_server(dispatcher, name="telegram_bot_test")

    async def scenario():
        async with Client(server) as client:
            return await client.list_tools()

    tools = {tool.name: tool for tool in asyncio.run(scenario())}

    assert set(tools) == set(dispatcher.names())
    assert set(tools["send-message"].inputSchema["properties"]) == {"chatId", "text"}
    assert tools["get-me"].description.startswith("A simple method for testing")


def test_server_calls_go_through_dispatcher(dispatcher, fake_api) -> None:
    fake_api.respond("getMe", {"id": 1, "is_bot": True, "first_name": "Helper"})
    server = create_server(dispatcher)

    async def scenario():
        async with Client(server) as client:
            identity = await client.call_tool("get-me", {})
            sent = await client.call_tool("send-message", {"chatId": "12345", "text": "hello"})
            rejected = await client.call_tool(
                "sendMessage",
                {
                    "chatId": "12345",
                    "text": "hi",
                    "reply_markup": {
                        "inline_keyboard": [[{"text": "Both", "url": "https://a.b", "callback_data": "x"}]]
                    },
                },
            )
            return identity, sent, rejected

    identity, sent, rejected = asyncio.run(scenario())

    assert json.loads(identity.content[0].text)["is_bot"] is True
    assert sent.content[0].text == "Message sent to telegram user chat id"
    assert "Button must have exactly one action type" in rejected.content[0].text
    assert [method for method, _ in fake_api.requests] == ["getMe", "sendMessage"]
