"""Reply and inline keyboards, their buttons and builders."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from .content import WebApp
from .poll import PollType


@dataclass
class Login:
    """Inline-button parameter used to authorize a user automatically."""

    url: str = ""
    text: str = ""
    username: str = ""
    write_access: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"url": self.url}
        if self.text:
            out["forward_text"] = self.text
        if self.username:
            out["bot_username"] = self.username
        if self.write_access:
            out["request_write_access"] = True
        return out


class MenuButtonType(str, Enum):
    """Kind of the bot's menu button."""

    DEFAULT = "default"
    COMMANDS = "commands"
    WEB_APP = "web_app"


@dataclass
class MenuButton:
    """The bot's menu button in a private chat."""

    type: MenuButtonType = MenuButtonType.DEFAULT
    text: str = ""
    web_app: Optional[WebApp] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": MenuButtonType(self.type).value}
        if self.text:
            out["text"] = self.text
        if self.web_app is not None:
            out["web_app"] = self.web_app.to_dict()
        return out


@dataclass
class ReplyButton:
    """A button of a reply keyboard."""

    text: str = ""
    contact: bool = False
    location: bool = False
    poll: Optional[PollType] = None
    web_app: Optional[WebApp] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        if self.contact:
            out["request_contact"] = True
        if self.location:
            out["request_location"] = True
        if self.poll is not None:
            out["request_poll"] = PollType(self.poll).to_dict()
        if self.web_app is not None:
            out["web_app"] = self.web_app.to_dict()
        return out


@dataclass
class InlineButton:
    """A button displayed as part of a message.

    ``unique`` names the callback endpoint the button is routed to.
    """

    unique: str = ""
    text: str = ""
    url: str = ""
    data: str = ""
    inline_query: str = ""
    inline_query_chat: str = ""
    login: Optional[Login] = None
    web_app: Optional[WebApp] = None

    def with_data(self, data: str) -> "InlineButton":
        """Return a copy of the button carrying the given callback data."""
        return InlineButton(
            unique=self.unique,
            text=self.text,
            url=self.url,
            inline_query=self.inline_query,
            inline_query_chat=self.inline_query_chat,
            login=self.login,
            data=data,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.unique:
            out["unique"] = self.unique
        out["text"] = self.text
        if self.url:
            out["url"] = self.url
        if self.data:
            out["callback_data"] = self.data
        if self.inline_query:
            out["switch_inline_query"] = self.inline_query
        # A login or web app button must not carry an empty inline query field.
        if self.inline_query_chat or (self.login is None and self.web_app is None):
            out["switch_inline_query_current_chat"] = self.inline_query_chat
        if self.login is not None:
            out["login_url"] = self.login.to_dict()
        if self.web_app is not None:
            out["web_app"] = self.web_app.to_dict()
        return out


@dataclass
class Btn:
    """A button under construction that becomes a reply or an inline button."""

    unique: str = ""
    text: str = ""
    url: str = ""
    data: str = ""
    inline_query: str = ""
    inline_query_chat: str = ""
    contact: bool = False
    location: bool = False
    poll: Optional[PollType] = None
    login: Optional[Login] = None
    web_app: Optional[WebApp] = None

    def reply(self) -> Optional[ReplyButton]:
        """Reply-keyboard form, or None for a button bound to a callback."""
        if self.unique:
            return None
        return ReplyButton(
            text=self.text,
            contact=self.contact,
            location=self.location,
            poll=self.poll,
            web_app=self.web_app,
        )

    def inline(self) -> InlineButton:
        """Inline-keyboard form of the button."""
        return InlineButton(
            unique=self.unique,
            text=self.text,
            url=self.url,
            data=self.data,
            inline_query=self.inline_query,
            inline_query_chat=self.inline_query_chat,
            login=self.login,
            web_app=self.web_app,
        )


def _poll_type_from(value: Any) -> Optional[PollType]:
    if isinstance(value, Mapping):
        value = value.get("type")
    return PollType(value) if value else None


def _login_from(data: Optional[Mapping[str, Any]]) -> Optional[Login]:
    if data is None:
        return None
    return Login(
        url=data.get("url", ""),
        text=data.get("forward_text", ""),
        username=data.get("bot_username", ""),
        write_access=data.get("request_write_access", False),
    )


def _web_app_from(data: Optional[Mapping[str, Any]]) -> Optional[WebApp]:
    return WebApp.from_dict(data) if data is not None else None


def _reply_button_from(data: Mapping[str, Any]) -> ReplyButton:
    return ReplyButton(
        text=data.get("text", ""),
        contact=data.get("request_contact", False),
        location=data.get("request_location", False),
        poll=_poll_type_from(data.get("request_poll")),
        web_app=_web_app_from(data.get("web_app")),
    )


def _inline_button_from(data: Mapping[str, Any]) -> InlineButton:
    return InlineButton(
        unique=data.get("unique", ""),
        text=data.get("text", ""),
        url=data.get("url", ""),
        data=data.get("callback_data", ""),
        inline_query=data.get("switch_inline_query", ""),
        inline_query_chat=data.get("switch_inline_query_current_chat", ""),
        login=_login_from(data.get("login_url")),
        web_app=_web_app_from(data.get("web_app")),
    )


@dataclass
class ReplyMarkup:
    """Reply keyboard or inline keyboard options attached to a message."""

    inline_keyboard: list[list[InlineButton]] = field(default_factory=list)
    reply_keyboard: list[list[ReplyButton]] = field(default_factory=list)
    force_reply: bool = False
    resize_keyboard: bool = False
    one_time_keyboard: bool = False
    remove_keyboard: bool = False
    selective: bool = False
    placeholder: str = ""

    def copy(self) -> "ReplyMarkup":
        """Copy with the keyboard rows and their buttons duplicated."""
        return replace(
            self,
            inline_keyboard=[[replace(b) for b in row] for row in self.inline_keyboard],
            reply_keyboard=[[replace(b) for b in row] for row in self.reply_keyboard],
        )

    def row(self, *buttons: Btn) -> list[Btn]:
        """Create a row of buttons."""
        return list(buttons)

    def split(self, max_per_row: int, buttons: Sequence[Btn]) -> list[list[Btn]]:
        """Split buttons into rows holding at most max_per_row buttons."""
        if max_per_row < 1:
            raise ValueError("telebot: row size must be positive")
        return [
            list(buttons[start : start + max_per_row])
            for start in range(0, len(buttons), max_per_row)
        ]

    def inline(self, *rows: Sequence[Btn]) -> None:
        """Set the inline keyboard from rows of buttons."""
        self.inline_keyboard = [[btn.inline() for btn in row] for row in rows]

    def reply(self, *rows: Sequence[Btn]) -> None:
        """Set the reply keyboard from rows of buttons."""
        keyboard: list[list[ReplyButton]] = []
        for i, row in enumerate(rows):
            keys: list[ReplyButton] = []
            for j, btn in enumerate(row):
                key = btn.reply()
                if key is None:
                    raise ValueError(
                        f"telebot: button row {i} column {j} is not a reply button"
                    )
                keys.append(key)
            keyboard.append(keys)
        self.reply_keyboard = keyboard

    def text(self, text: str) -> Btn:
        return Btn(text=text)

    def contact(self, text: str) -> Btn:
        return Btn(contact=True, text=text)

    def location(self, text: str) -> Btn:
        return Btn(location=True, text=text)

    def poll(self, text: str, poll_type: PollType) -> Btn:
        return Btn(poll=poll_type, text=text)

    def data(self, text: str, unique: str, *data: str) -> Btn:
        return Btn(unique=unique, text=text, data="|".join(data))

    def url(self, text: str, url: str) -> Btn:
        return Btn(text=text, url=url)

    def query(self, text: str, query: str) -> Btn:
        return Btn(text=text, inline_query=query)

    def query_chat(self, text: str, query: str) -> Btn:
        return Btn(text=text, inline_query_chat=query)

    def login(self, text: str, login: Optional[Login]) -> Btn:
        return Btn(login=login, text=text)

    def web_app(self, text: str, app: Optional[WebApp]) -> Btn:
        return Btn(text=text, web_app=app)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.inline_keyboard:
            out["inline_keyboard"] = [
                [b.to_dict() for b in row] for row in self.inline_keyboard
            ]
        if self.reply_keyboard:
            out["keyboard"] = [[b.to_dict() for b in row] for row in self.reply_keyboard]
        for key, flag in (
            ("force_reply", self.force_reply),
            ("resize_keyboard", self.resize_keyboard),
            ("one_time_keyboard", self.one_time_keyboard),
            ("remove_keyboard", self.remove_keyboard),
            ("selective", self.selective),
        ):
            if flag:
                out[key] = True
        if self.placeholder:
            out["input_field_placeholder"] = self.placeholder
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReplyMarkup":
        return cls(
            inline_keyboard=[
                [_inline_button_from(b) for b in row]
                for row in data.get("inline_keyboard") or []
            ],
            reply_keyboard=[
                [_reply_button_from(b) for b in row] for row in data.get("keyboard") or []
            ],
            force_reply=data.get("force_reply", False),
            resize_keyboard=data.get("resize_keyboard", False),
            one_time_keyboard=data.get("one_time_keyboard", False),
            remove_keyboard=data.get("remove_keyboard", False),
            selective=data.get("selective", False),
            placeholder=data.get("input_field_placeholder", ""),
        )