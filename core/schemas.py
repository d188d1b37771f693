# =============================================================================
# core/schemas.py  —  Tool Input Schemas (what callers are allowed to send)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares, per tool, the exact argument shape the Telegram Bot API will
#   accept.  Every rule the platform enforces that we CAN check locally is
#   checked here, before a single byte leaves the process:
#     - length limits (descriptions, names, callback text ...)
#     - URL well-formedness, and HTTPS where Telegram demands it
#     - enumerations (parse modes, update types)
#     - structural rules (keyboards are lists of non-empty rows)
#     - cross-field rules (a button has exactly ONE action)
#     - tagged unions (menu buttons pick their branch by "type")
#
# WHY PYDANTIC?
#   - Declarative: each field reads like the Bot API docs.
#   - Collects ALL violations in one pass, so a caller fixes them together.
#   - model_json_schema() gives the MCP host a ready-made inputSchema.
#
# FORWARDING CONVENTION:
#   Optional fields default to None.  When a model is sent to Telegram it is
#   dumped with exclude_none=True, so "absent" never becomes "null" on the wire.
# =============================================================================

from typing import Annotated, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
    model_validator,
)


# =============================================================================
# URL checks
# =============================================================================
# The caller's string is validated but forwarded untouched: pydantic's URL
# types normalize ("https://a.b" → "https://a.b/"), and Telegram should see
# exactly what the caller wrote.
# =============================================================================
_URL = TypeAdapter(AnyUrl)


def _parse_url(value: str) -> AnyUrl:
    try:
        return _URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid URL") from None


def _valid_url(value: str) -> str:
    _parse_url(value)
    return value


def _https_url(value: str) -> str:
    if _parse_url(value).scheme != "https":
        raise ValueError("must be a valid HTTPS URL")
    return value


Url = Annotated[str, AfterValidator(_valid_url)]
HttpsUrl = Annotated[str, AfterValidator(_https_url)]


# =============================================================================
# Shared field types
# =============================================================================
ChatId = Annotated[
    str,
    Field(
        min_length=1,
        description="Unique identifier for the target chat or username of the target channel",
    ),
]
UserId = Annotated[StrictInt, Field(description="Unique identifier of the target user")]
MessageId = Annotated[StrictInt, Field(description="Identifier of the message to edit")]
MessageText = Annotated[str, Field(min_length=1, max_length=4096)]

ParseMode = Literal["Markdown", "MarkdownV2", "HTML"]

UpdateType = Literal[
    "message",
    "callback_query",
    "inline_query",
    "chosen_inline_result",
    "channel_post",
    "edited_message",
    "edited_channel_post",
    "shipping_query",
    "pre_checkout_query",
    "poll",
    "poll_answer",
    "my_chat_member",
    "chat_member",
    "chat_join_request",
    "message_reaction",
    "message_reaction_count",
    "chat_boost",
    "removed_chat_boost",
]


class NoArguments(BaseModel):
    """Schema for tools that take no parameters."""


# =============================================================================
# Bot commands
# =============================================================================
class BotCommand(BaseModel):
    command: str = Field(
        min_length=1,
        max_length=32,
        pattern=r"^[a-z0-9_]+$",
        description="Text of the command; 1-32 characters. Lowercase English letters, digits and underscores",
    )
    description: str = Field(min_length=1, max_length=256, description="Description of the command; 1-256 characters")


# =============================================================================
# Inline keyboards
# =============================================================================
# A button is useless without an action and ambiguous with two, so the
# exclusivity rule runs over the whole parsed button.  "Set" means "not None":
# an empty string is a value the caller chose to send.
# =============================================================================
class WebAppInfo(BaseModel):
    url: HttpsUrl = Field(description="HTTPS URL of the Web App to be opened")


BUTTON_ACTION_FIELDS = (
    "url",
    "callback_data",
    "web_app",
    "switch_inline_query",
    "switch_inline_query_current_chat",
)


class InlineKeyboardButton(BaseModel):
    text: str = Field(min_length=1, description="Label text on the button")
    url: Optional[Url] = None
    callback_data: Optional[str] = Field(default=None, max_length=64)
    web_app: Optional[WebAppInfo] = None
    switch_inline_query: Optional[str] = None
    switch_inline_query_current_chat: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_action(self) -> "InlineKeyboardButton":
        actions = [name for name in BUTTON_ACTION_FIELDS if getattr(self, name) is not None]
        if len(actions) != 1:
            raise ValueError("Button must have exactly one action type")
        return self


KeyboardRow = Annotated[list[InlineKeyboardButton], Field(min_length=1)]


class InlineKeyboardMarkup(BaseModel):
    inline_keyboard: list[KeyboardRow] = Field(min_length=1, description="Rows of inline buttons")


# =============================================================================
# Menu buttons — a tagged union, resolved by "type" before anything else
# =============================================================================
class MenuButtonDefault(BaseModel):
    type: Literal["default"]


class MenuButtonCommands(BaseModel):
    type: Literal["commands"]


class MenuButtonWebApp(BaseModel):
    type: Literal["web_app"]
    text: str = Field(min_length=1, description="Text on the button")
    web_app: WebAppInfo


MenuButton = Annotated[
    Union[MenuButtonDefault, MenuButtonCommands, MenuButtonWebApp],
    Field(discriminator="type"),
]


# =============================================================================
# Per-tool argument models
# =============================================================================
class ChatArgs(BaseModel):
    chatId: ChatId


class ChatMemberArgs(BaseModel):
    chatId: ChatId
    userId: UserId


class SendMessageArgs(BaseModel):
    chatId: ChatId
    text: MessageText = Field(description="Message the user want to send to chat id")


class SendPhotoArgs(BaseModel):
    chatId: ChatId
    text: Optional[str] = Field(
        default=None, max_length=1024, description="Caption for the photo that user want to send"
    )
    media: str = Field(
        min_length=1,
        description=(
            "Photo to send. Pass a file_id to send a photo that exists on the Telegram servers "
            "(recommended) or an HTTP URL for Telegram to get a photo from the Internet. "
            "The photo must be at most 10 MB in size"
        ),
    )


class SetShortDescriptionArgs(BaseModel):
    short_description: str = Field(
        max_length=120,
        description=(
            "New short description for the bot; 0-120 characters. Pass an empty string "
            "to remove the dedicated short description"
        ),
    )


class SetCommandsArgs(BaseModel):
    commands: list[BotCommand] = Field(max_length=100, description="At most 100 commands")


class SetNameArgs(BaseModel):
    name: str = Field(max_length=64, description="New bot name; 0-64 characters")


class SetDescriptionArgs(BaseModel):
    description: str = Field(max_length=512, description="New bot description; 0-512 characters")


class RichMessageArgs(BaseModel):
    chatId: ChatId
    text: MessageText = Field(description="Text of the message to be sent")
    parse_mode: Optional[ParseMode] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None


class EditMessageTextArgs(BaseModel):
    chatId: ChatId
    messageId: MessageId
    text: MessageText = Field(description="New text of the message")
    parse_mode: Optional[ParseMode] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None


class EditMessageReplyMarkupArgs(BaseModel):
    chatId: ChatId
    messageId: MessageId
    reply_markup: Optional[InlineKeyboardMarkup] = None


class AnswerCallbackQueryArgs(BaseModel):
    callback_query_id: str = Field(min_length=1, description="Unique identifier for the query to be answered")
    text: Optional[str] = Field(default=None, max_length=200, description="Text of the notification (0-200 characters)")
    show_alert: Optional[bool] = Field(default=None, description="Show alert instead of notification")
    url: Optional[Url] = Field(default=None, description="URL to open")
    cache_time: Optional[StrictInt] = Field(default=None, ge=0, description="Maximum time in seconds for caching")


class SetChatMenuButtonArgs(BaseModel):
    chat_id: Optional[str] = Field(
        default=None,
        pattern=r"^-?\d+$",
        description="Unique identifier for the target private chat; omit to change the default menu button",
    )
    menu_button: MenuButton = Field(description="Menu button configuration")


class WebAppQueryResult(BaseModel):
    type: str = Field(min_length=1)
    id: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    message_text: Optional[str] = None
    parse_mode: Optional[ParseMode] = None


class AnswerWebAppQueryArgs(BaseModel):
    web_app_query_id: str = Field(min_length=1, description="Unique identifier for the answered query")
    result: WebAppQueryResult = Field(description="Result object for the web app query")


class SetWebhookArgs(BaseModel):
    url: HttpsUrl = Field(description="HTTPS URL to send updates to")
    max_connections: Optional[StrictInt] = Field(default=None, ge=1, le=100, description="Maximum allowed connections")
    allowed_updates: Optional[list[UpdateType]] = Field(default=None, description="List of update types to receive")
    secret_token: Optional[str] = Field(default=None, max_length=256, description="Secret token for webhook security")
    drop_pending_updates: Optional[bool] = Field(default=None, description="Drop all pending updates")
