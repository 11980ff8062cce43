"""Incoming updates and their routing to registered handlers."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from . import constants as ev
from .chain import Handler, Middleware, apply_middleware
from .message import Message
from .payments import PreCheckoutQuery, ShippingQuery
from .poll import Poll, PollAnswer

_log = logging.getLogger(__name__)

# "</command>@<bot> <payload>"
_CMD_RX = re.compile(r"^(/\w+)(@(\w+))?(\s|$)(.+)?", re.ASCII)
# "\f<unique>|<payload>"
_CBACK_RX = re.compile(r"^\f([-\w]+)(\|(.+))?\Z", re.ASCII)


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


@dataclass
class Callback:
    """A callback query from an inline button.

    ``unique`` is filled in when the data addresses a registered button endpoint.
    """

    id: str = ""
    sender: Optional[Mapping[str, Any]] = None
    message: Optional[Message] = None
    message_id: str = ""
    data: str = ""
    chat_instance: str = ""
    game_short_name: str = ""
    unique: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Callback":
        message = data.get("message")
        return cls(
            id=data.get("id", ""),
            sender=data.get("from"),
            message=Message.from_dict(message) if message is not None else None,
            message_id=data.get("inline_message_id", ""),
            data=data.get("data", ""),
            chat_instance=data.get("chat_instance", ""),
            game_short_name=data.get("game_short_name", ""),
        )


_WIRE_KEYS = (
    ("message", "message"),
    ("edited_message", "edited_message"),
    ("channel_post", "channel_post"),
    ("edited_channel_post", "edited_channel_post"),
    ("callback", "callback_query"),
    ("query", "inline_query"),
    ("inline_result", "chosen_inline_result"),
    ("shipping_query", "shipping_query"),
    ("pre_checkout_query", "pre_checkout_query"),
    ("poll", "poll"),
    ("poll_answer", "poll_answer"),
    ("my_chat_member", "my_chat_member"),
    ("chat_member", "chat_member"),
    ("chat_join_request", "chat_join_request"),
)


@dataclass
class Update:
    """An incoming update. Objects without a model here are kept as raw mappings."""

    id: int = 0
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None
    callback: Optional[Callback] = None
    query: Optional[Mapping[str, Any]] = None
    inline_result: Optional[Mapping[str, Any]] = None
    shipping_query: Optional[ShippingQuery] = None
    pre_checkout_query: Optional[PreCheckoutQuery] = None
    poll: Optional[Poll] = None
    poll_answer: Optional[PollAnswer] = None
    my_chat_member: Optional[Mapping[str, Any]] = None
    chat_member: Optional[Mapping[str, Any]] = None
    chat_join_request: Optional[Mapping[str, Any]] = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Update":
        def parsed(key: str, factory: Callable[[Any], Any]) -> Any:
            value = data.get(key)
            return factory(value) if value is not None else None

        return cls(
            id=data.get("update_id", 0),
            message=parsed("message", Message.from_dict),
            edited_message=parsed("edited_message", Message.from_dict),
            channel_post=parsed("channel_post", Message.from_dict),
            edited_channel_post=parsed("edited_channel_post", Message.from_dict),
            callback=parsed("callback_query", Callback.from_dict),
            query=data.get("inline_query"),
            inline_result=data.get("chosen_inline_result"),
            shipping_query=parsed("shipping_query", ShippingQuery.from_dict),
            pre_checkout_query=parsed("pre_checkout_query", PreCheckoutQuery.from_dict),
            poll=parsed("poll", Poll.from_dict),
            poll_answer=parsed("poll_answer", PollAnswer.from_dict),
            my_chat_member=data.get("my_chat_member"),
            chat_member=data.get("chat_member"),
            chat_join_request=data.get("chat_join_request"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form; parts received from the wire are returned as received."""
        out: dict[str, Any] = {"update_id": self.id}
        for attr, key in _WIRE_KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = self.raw[key] if key in self.raw else _jsonable(value)
        return out


class _Context:
    """What a handler receives: the update and the dispatcher that routed it."""

    def __init__(self, update: Update, dispatcher: "Dispatcher"):
        self._update = update
        self._dispatcher = dispatcher

    def update(self) -> Update:
        return self._update

    def bot(self) -> "Dispatcher":
        return self._dispatcher

    def callback(self) -> Optional[Callback]:
        return self._update.callback

    def message(self) -> Optional[Message]:
        u = self._update
        for msg in (u.message, u.edited_message, u.channel_post, u.edited_channel_post):
            if msg is not None:
                return msg
        if u.callback is not None:
            return u.callback.message
        return None

    def sender(self) -> Optional[Mapping[str, Any]]:
        u = self._update
        if u.callback is not None:
            return u.callback.sender
        msg = self.message()
        if msg is not None:
            return msg.sender
        for raw in (u.query, u.inline_result, u.my_chat_member, u.chat_member, u.chat_join_request):
            if raw is not None:
                return raw.get("from")
        for obj in (u.shipping_query, u.pre_checkout_query, u.poll_answer):
            if obj is not None:
                return getattr(obj, "sender", None)
        return None


def _log_error(err: BaseException, ctx: Any) -> None:
    _log.error("telebot: %s", err)


def _endpoint_key(endpoint: Any) -> str:
    if isinstance(endpoint, Enum):
        endpoint = endpoint.value
    if isinstance(endpoint, str):
        return endpoint
    unique = getattr(endpoint, "unique", None)
    if unique:
        return "\f" + unique
    raise TypeError("telebot: unsupported endpoint")


class Dispatcher:
    """Routes updates to handlers registered for commands, texts and events.

    ``me`` is the bot's own user mapping, holding at least "id" and "username".
    """

    def __init__(
        self,
        me: Optional[Mapping[str, Any]] = None,
        *,
        synchronous: bool = False,
        on_error: Optional[Callable[[BaseException, Any], None]] = None,
        middleware: tuple[Middleware, ...] | list[Middleware] = (),
    ):
        self.me = me
        self.synchronous = synchronous
        self.on_error = on_error or _log_error
        self.middleware: list[Middleware] = list(middleware)
        self.handlers: dict[str, Handler] = {}

    def handle(self, endpoint: Any, handler: Handler, *middleware: Middleware) -> None:
        """Register a handler for a text, command, event or button endpoint."""
        key = _endpoint_key(endpoint)
        self.handlers[key] = apply_middleware(handler, *self.middleware, *middleware)

    def process_update(self, update: Update) -> None:
        """Route a single update to its handler."""
        ctx = _Context(update, self)

        if update.message is not None and self._process_message(update.message, ctx):
            return

        if update.edited_message is not None:
            self._handle(ev.ON_EDITED, ctx)
            return

        if update.channel_post is not None:
            if update.channel_post.pinned_message is not None:
                self._handle(ev.ON_PINNED, ctx)
            else:
                self._handle(ev.ON_CHANNEL_POST, ctx)
            return

        if update.edited_channel_post is not None:
            self._handle(ev.ON_EDITED_CHANNEL_POST, ctx)
            return

        if update.callback is not None:
            data = update.callback.data
            if data.startswith("\f"):
                match = _CBACK_RX.match(data)
                if match:
                    unique, payload = match.group(1), match.group(3) or ""
                    handler = self.handlers.get("\f" + unique)
                    if handler is not None:
                        update.callback.unique = unique
                        update.callback.data = payload
                        self._run(handler, ctx)
                        return
            self._handle(ev.ON_CALLBACK, ctx)
            return

        for value, endpoint in (
            (update.query, ev.ON_QUERY),
            (update.inline_result, ev.ON_INLINE_RESULT),
            (update.shipping_query, ev.ON_SHIPPING),
            (update.pre_checkout_query, ev.ON_CHECKOUT),
            (update.poll, ev.ON_POLL),
            (update.poll_answer, ev.ON_POLL_ANSWER),
            (update.my_chat_member, ev.ON_MY_CHAT_MEMBER),
            (update.chat_member, ev.ON_CHAT_MEMBER),
            (update.chat_join_request, ev.ON_CHAT_JOIN_REQUEST),
        ):
            if value is not None:
                self._handle(endpoint, ctx)
                return

    def _process_message(self, m: Message, ctx: _Context) -> bool:
        """Handle a new message; False lets routing continue with other parts."""
        if m.pinned_message is not None:
            self._handle(ev.ON_PINNED, ctx)
            return True

        if m.text:
            if m.text.startswith("\a"):
                return True
            match = _CMD_RX.match(m.text)
            if match:
                command, bot_name = match.group(1), match.group(3) or ""
                own_name = (self.me or {}).get("username", "")
                if bot_name and own_name.casefold() != bot_name.casefold():
                    return True
                m.payload = match.group(5) or ""
                if self._handle(command, ctx):
                    return True
            if self._handle(m.text, ctx):
                return True
            self._handle(ev.ON_TEXT, ctx)
            return True

        if self._handle_media(m, ctx):
            return True

        for value, endpoint in (
            (m.contact, ev.ON_CONTACT),
            (m.location, ev.ON_LOCATION),
            (m.venue, ev.ON_VENUE),
            (m.game, ev.ON_GAME),
            (m.dice, ev.ON_DICE),
            (m.invoice, ev.ON_INVOICE),
            (m.payment, ev.ON_PAYMENT),
        ):
            if value is not None:
                self._handle(endpoint, ctx)
                return True

        me_id = self.me.get("id") if self.me is not None else None
        was_added = me_id is not None and (
            (m.user_joined is not None and m.user_joined.get("id") == me_id)
            or any(user.get("id") == me_id for user in m.users_joined)
        )
        if m.group_created or m.super_group_created or was_added:
            self._handle(ev.ON_ADDED_TO_GROUP, ctx)
            return True

        if m.user_joined is not None:
            self._handle(ev.ON_USER_JOINED, ctx)
            return True

        if m.users_joined:
            for user in m.users_joined:
                m.user_joined = user
                self._handle(ev.ON_USER_JOINED, ctx)
            return True

        if m.user_left is not None:
            self._handle(ev.ON_USER_LEFT, ctx)
            return True

        for flag, endpoint in (
            (bool(m.new_group_title), ev.ON_NEW_GROUP_TITLE),
            (m.new_group_photo is not None, ev.ON_NEW_GROUP_PHOTO),
            (m.group_photo_deleted, ev.ON_GROUP_PHOTO_DELETED),
            (m.group_created, ev.ON_GROUP_CREATED),
            (m.super_group_created, ev.ON_SUPER_GROUP_CREATED),
            (m.channel_created, ev.ON_CHANNEL_CREATED),
        ):
            if flag:
                self._handle(endpoint, ctx)
                return True

        if m.migrate_to != 0:
            m.migrate_from = m.chat.get("id", 0) if m.chat is not None else 0
            self._handle(ev.ON_MIGRATION, ctx)
            return True

        for value, endpoint in (
            (m.video_chat_started, ev.ON_VIDEO_CHAT_STARTED),
            (m.video_chat_ended, ev.ON_VIDEO_CHAT_ENDED),
            (m.video_chat_participants, ev.ON_VIDEO_CHAT_PARTICIPANTS),
            (m.video_chat_scheduled, ev.ON_VIDEO_CHAT_SCHEDULED),
        ):
            if value is not None:
                self._handle(endpoint, ctx)
                return True

        # Web app data does not end routing.
        if m.web_app_data is not None:
            self._handle(ev.ON_WEB_APP, ctx)

        if m.proximity_alert is not None:
            self._handle(ev.ON_PROXIMITY_ALERT, ctx)
            return True

        if m.auto_delete_timer is not None:
            self._handle(ev.ON_AUTO_DELETE_TIMER, ctx)
            return True

        return False

    def _handle_media(self, m: Message, ctx: _Context) -> bool:
        for value, endpoint in (
            (m.photo, ev.ON_PHOTO),
            (m.voice, ev.ON_VOICE),
            (m.audio, ev.ON_AUDIO),
            (m.animation, ev.ON_ANIMATION),
            (m.document, ev.ON_DOCUMENT),
            (m.sticker, ev.ON_STICKER),
            (m.video, ev.ON_VIDEO),
            (m.video_note, ev.ON_VIDEO_NOTE),
        ):
            if value is not None:
                return self._handle(endpoint, ctx) or self._handle(ev.ON_MEDIA, ctx)
        return False

    def _handle(self, endpoint: str, ctx: _Context) -> bool:
        handler = self.handlers.get(endpoint)
        if handler is None:
            return False
        self._run(handler, ctx)
        return True

    def _run(self, handler: Handler, ctx: _Context) -> None:
        if self.synchronous:
            self._invoke(handler, ctx)
        else:
            threading.Thread(target=self._invoke, args=(handler, ctx), daemon=True).start()

    def _invoke(self, handler: Handler, ctx: _Context) -> None:
        try:
            handler(ctx)
        except Exception as err:  # handler failures are reported, never propagated
            self.on_error(err, ctx)