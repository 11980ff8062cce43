"""Send options and the flags that build them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional

from .markup import InlineButton, ReplyMarkup


class Option(IntEnum):
    """Shortcut flags for common send options."""

    NO_PREVIEW = 0
    SILENT = 1
    ALLOW_WITHOUT_REPLY = 2
    PROTECTED = 3
    FORCE_REPLY = 4
    ONE_TIME_KEYBOARD = 5
    REMOVE_KEYBOARD = 6


@dataclass
class SendOptions:
    """Complete control over how a message is sent."""

    reply_to: Any = None
    reply_markup: Optional[ReplyMarkup] = None
    disable_web_page_preview: bool = False
    disable_notification: bool = False
    parse_mode: str = ""
    entities: list[Any] = field(default_factory=list)
    allow_without_reply: bool = False
    protected: bool = False

    def copy(self) -> "SendOptions":
        """Copy with the reply markup duplicated."""
        markup = self.reply_markup.copy() if self.reply_markup is not None else None
        return replace(self, reply_markup=markup)


def placeholder(text: str) -> SendOptions:
    """Send options that force a reply with an input field placeholder."""
    return SendOptions(reply_markup=ReplyMarkup(force_reply=True, placeholder=text))


def _markup(opts: SendOptions) -> ReplyMarkup:
    if opts.reply_markup is None:
        opts.reply_markup = ReplyMarkup()
    return opts.reply_markup


def _apply_flag(opts: SendOptions, flag: Option) -> None:
    if flag is Option.NO_PREVIEW:
        opts.disable_web_page_preview = True
    elif flag is Option.SILENT:
        opts.disable_notification = True
    elif flag is Option.ALLOW_WITHOUT_REPLY:
        opts.allow_without_reply = True
    elif flag is Option.FORCE_REPLY:
        _markup(opts).force_reply = True
    elif flag is Option.ONE_TIME_KEYBOARD:
        _markup(opts).one_time_keyboard = True
    elif flag is Option.REMOVE_KEYBOARD:
        _markup(opts).remove_keyboard = True
    elif flag is Option.PROTECTED:
        opts.protected = True
    else:
        raise ValueError("telebot: unsupported flag-option")


def extract_options(*how: Any) -> SendOptions:
    """Combine send options, markups, flags, parse modes and entities.

    A SendOptions argument replaces everything gathered before it.
    """
    opts = SendOptions()
    for prop in how:
        if prop is None:
            continue
        if isinstance(prop, SendOptions):
            opts = prop.copy()
        elif isinstance(prop, ReplyMarkup):
            opts.reply_markup = prop.copy()
        elif isinstance(prop, Option):
            _apply_flag(opts, prop)
        elif isinstance(prop, str):
            opts.parse_mode = prop.value if isinstance(prop, Enum) else prop
        elif isinstance(prop, (list, tuple)):
            opts.entities = list(prop)
        else:
            raise TypeError("telebot: unsupported send-option")
    return opts


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _entity_dict(entity: Any) -> Any:
    return entity.to_dict() if hasattr(entity, "to_dict") else entity


def process_buttons(keys: list[list[InlineButton]]) -> None:
    """Encode each unique button's endpoint into its callback data, in place.

    The result has the form "\\f<unique>" or "\\f<unique>|<data>".
    """
    if not keys or not keys[0]:
        return
    for row in keys:
        for key in row:
            if key.unique:
                key.data = (
                    f"\f{key.unique}" if not key.data else f"\f{key.unique}|{key.data}"
                )


def embed_send_options(
    params: Mapping[str, str], opt: Optional[SendOptions], default_parse_mode: str = ""
) -> dict[str, str]:
    """Return request parameters extended with the given send options."""
    result = dict(params)
    if default_parse_mode:
        result["parse_mode"] = str(getattr(default_parse_mode, "value", default_parse_mode))

    if opt is None:
        return result

    reply_id = getattr(opt.reply_to, "id", 0) if opt.reply_to is not None else 0
    if reply_id:
        result["reply_to_message_id"] = str(reply_id)

    if opt.disable_web_page_preview:
        result["disable_web_page_preview"] = "true"

    if opt.disable_notification:
        result["disable_notification"] = "true"

    if opt.parse_mode:
        result["parse_mode"] = str(getattr(opt.parse_mode, "value", opt.parse_mode))

    if opt.entities:
        result.pop("parse_mode", None)
        entities = _dumps([_entity_dict(e) for e in opt.entities])
        if result.get("caption"):
            result["caption_entities"] = entities
        else:
            result["entities"] = entities

    if opt.allow_without_reply:
        result["allow_sending_without_reply"] = "true"

    if opt.reply_markup is not None:
        process_buttons(opt.reply_markup.inline_keyboard)
        result["reply_markup"] = _dumps(opt.reply_markup.to_dict())

    if opt.protected:
        result["protect_content"] = "true"

    return result