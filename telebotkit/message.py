"""Messages, their text entities and related service objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .content import (
    VideoChatEnded,
    VideoChatParticipants,
    VideoChatScheduled,
    VideoChatStarted,
    WebAppData,
)
from .markup import ReplyMarkup
from .media import (
    Animation,
    Audio,
    Contact,
    Dice,
    Document,
    Location,
    Photo,
    Sticker,
    Venue,
    Video,
    VideoNote,
    Voice,
)
from .payments import Invoice, Payment
from .poll import Poll

_T = TypeVar("_T")

_CHAT_PRIVATE = "private"
_CHAT_GROUP = "group"
_CHAT_SUPERGROUP = "supergroup"
_CHAT_CHANNEL = "channel"

Media = Union[Photo, Voice, Audio, Animation, Sticker, Document, Video, VideoNote]


def _opt(data: Mapping[str, Any], key: str, factory: Callable[[Any], _T]) -> Optional[_T]:
    value = data.get(key)
    return factory(value) if value is not None else None


class EntityType(str, Enum):
    """Kind of a special part of message text."""

    MENTION = "mention"
    TEXT_MENTION = "text_mention"
    HASHTAG = "hashtag"
    CASHTAG = "cashtag"
    COMMAND = "bot_command"
    URL = "url"
    EMAIL = "email"
    PHONE = "phone_number"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    CODE_BLOCK = "pre"
    TEXT_LINK = "text_link"
    SPOILER = "spoiler"
    CUSTOM_EMOJI = "custom_emoji"


@dataclass
class MessageEntity:
    """A special part of message text; offset and length are in UTF-16 code units."""

    type: Union[EntityType, str] = EntityType.MENTION
    offset: int = 0
    length: int = 0
    url: str = ""
    user: Optional[Mapping[str, Any]] = None
    language: str = ""
    custom_emoji: str = ""

    def to_dict(self) -> dict[str, Any]:
        kind = self.type.value if isinstance(self.type, Enum) else self.type
        out: dict[str, Any] = {
            "type": kind,
            "offset": self.offset,
            "length": self.length,
        }
        if self.url:
            out["url"] = self.url
        if self.user is not None:
            out["user"] = dict(self.user)
        if self.language:
            out["language"] = self.language
        out["custom_emoji_id"] = self.custom_emoji
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MessageEntity":
        raw = data.get("type", "")
        try:
            kind: Union[EntityType, str] = EntityType(raw)
        except ValueError:
            kind = raw
        return cls(
            type=kind,
            offset=data.get("offset", 0),
            length=data.get("length", 0),
            url=data.get("url", ""),
            user=data.get("user"),
            language=data.get("language", ""),
            custom_emoji=data.get("custom_emoji_id", ""),
        )


@dataclass
class ProximityAlert:
    """Service content sent when a user triggers another user's proximity alert."""

    traveler: Optional[Mapping[str, Any]] = None
    watcher: Optional[Mapping[str, Any]] = None
    distance: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProximityAlert":
        return cls(
            traveler=data.get("traveler"),
            watcher=data.get("watcher"),
            distance=data.get("distance", 0),
        )


@dataclass
class AutoDeleteTimer:
    """Service content about a change in auto-delete timer settings."""

    unixtime: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoDeleteTimer":
        return cls(unixtime=data.get("message_auto_delete_time", 0))


def _entities(items: Any) -> list[MessageEntity]:
    return [MessageEntity.from_dict(e) for e in items or []]


@dataclass
class Message:
    """A message. Users and chats are kept as their raw mappings."""

    id: int = 0
    sender: Optional[Mapping[str, Any]] = None
    unixtime: int = 0
    chat: Optional[Mapping[str, Any]] = None
    sender_chat: Optional[Mapping[str, Any]] = None
    original_sender: Optional[Mapping[str, Any]] = None
    original_chat: Optional[Mapping[str, Any]] = None
    original_message_id: int = 0
    original_signature: str = ""
    original_sender_name: str = ""
    original_unixtime: int = 0
    automatic_forward: bool = False
    reply_to: Optional["Message"] = None
    via: Optional[Mapping[str, Any]] = None
    last_edit: int = 0
    protected: bool = False
    album_id: str = ""
    signature: str = ""
    text: str = ""
    payload: str = ""
    entities: list[MessageEntity] = field(default_factory=list)
    caption: str = ""
    caption_entities: list[MessageEntity] = field(default_factory=list)
    audio: Optional[Audio] = None
    document: Optional[Document] = None
    photo: Optional[Photo] = None
    sticker: Optional[Sticker] = None
    voice: Optional[Voice] = None
    video_note: Optional[VideoNote] = None
    video: Optional[Video] = None
    animation: Optional[Animation] = None
    contact: Optional[Contact] = None
    location: Optional[Location] = None
    venue: Optional[Venue] = None
    poll: Optional[Poll] = None
    game: Optional[Mapping[str, Any]] = None
    dice: Optional[Dice] = None
    user_joined: Optional[Mapping[str, Any]] = None
    user_left: Optional[Mapping[str, Any]] = None
    new_group_title: str = ""
    new_group_photo: Optional[Photo] = None
    users_joined: list[Mapping[str, Any]] = field(default_factory=list)
    group_photo_deleted: bool = False
    group_created: bool = False
    super_group_created: bool = False
    channel_created: bool = False
    migrate_to: int = 0
    migrate_from: int = 0
    pinned_message: Optional["Message"] = None
    invoice: Optional[Invoice] = None
    payment: Optional[Payment] = None
    connected_website: str = ""
    video_chat_started: Optional[VideoChatStarted] = None
    video_chat_ended: Optional[VideoChatEnded] = None
    video_chat_participants: Optional[VideoChatParticipants] = None
    video_chat_scheduled: Optional[VideoChatScheduled] = None
    web_app_data: Optional[WebAppData] = None
    proximity_alert: Optional[ProximityAlert] = None
    auto_delete_timer: Optional[AutoDeleteTimer] = None
    reply_markup: Optional[ReplyMarkup] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        return cls(
            id=data.get("message_id", 0),
            sender=data.get("from"),
            unixtime=data.get("date", 0),
            chat=data.get("chat"),
            sender_chat=data.get("sender_chat"),
            original_sender=data.get("forward_from"),
            original_chat=data.get("forward_from_chat"),
            original_message_id=data.get("forward_from_message_id", 0),
            original_signature=data.get("forward_signature", ""),
            original_sender_name=data.get("forward_sender_name", ""),
            original_unixtime=data.get("forward_date", 0),
            automatic_forward=data.get("is_automatic_forward", False),
            reply_to=_opt(data, "reply_to_message", cls.from_dict),
            via=data.get("via_bot"),
            last_edit=data.get("edit_date", 0),
            protected=data.get("has_protected_content", False),
            album_id=data.get("media_group_id", ""),
            signature=data.get("author_signature", ""),
            text=data.get("text", ""),
            entities=_entities(data.get("entities")),
            caption=data.get("caption", ""),
            caption_entities=_entities(data.get("caption_entities")),
            audio=_opt(data, "audio", Audio.from_dict),
            document=_opt(data, "document", Document.from_dict),
            photo=_opt(data, "photo", Photo.from_dict),
            sticker=_opt(data, "sticker", Sticker.from_dict),
            voice=_opt(data, "voice", Voice.from_dict),
            video_note=_opt(data, "video_note", VideoNote.from_dict),
            video=_opt(data, "video", Video.from_dict),
            animation=_opt(data, "animation", Animation.from_dict),
            contact=_opt(data, "contact", Contact.from_dict),
            location=_opt(data, "location", Location.from_dict),
            venue=_opt(data, "venue", Venue.from_dict),
            poll=_opt(data, "poll", Poll.from_dict),
            game=data.get("game"),
            dice=_opt(data, "dice", Dice.from_dict),
            user_joined=data.get("new_chat_member"),
            user_left=data.get("left_chat_member"),
            new_group_title=data.get("new_chat_title", ""),
            new_group_photo=_opt(data, "new_chat_photo", Photo.from_dict),
            users_joined=list(data.get("new_chat_members") or []),
            group_photo_deleted=data.get("delete_chat_photo", False),
            group_created=data.get("group_chat_created", False),
            super_group_created=data.get("supergroup_chat_created", False),
            channel_created=data.get("channel_chat_created", False),
            migrate_to=data.get("migrate_to_chat_id", 0),
            migrate_from=data.get("migrate_from_chat_id", 0),
            pinned_message=_opt(data, "pinned_message", cls.from_dict),
            invoice=_opt(data, "invoice", Invoice.from_dict),
            payment=_opt(data, "successful_payment", Payment.from_dict),
            connected_website=data.get("connected_website", ""),
            video_chat_started=_opt(
                data, "video_chat_started", lambda _: VideoChatStarted()
            ),
            video_chat_ended=_opt(data, "video_chat_ended", VideoChatEnded.from_dict),
            video_chat_participants=_opt(
                data, "video_chat_participants_invited", VideoChatParticipants.from_dict
            ),
            video_chat_scheduled=_opt(
                data, "video_chat_scheduled", VideoChatScheduled.from_dict
            ),
            web_app_data=_opt(data, "web_app_data", WebAppData.from_dict),
            proximity_alert=_opt(
                data, "proximity_alert_triggered", ProximityAlert.from_dict
            ),
            auto_delete_timer=_opt(
                data, "message_auto_delete_timer_changed", AutoDeleteTimer.from_dict
            ),
            reply_markup=_opt(data, "reply_markup", ReplyMarkup.from_dict),
        )

    def _chat(self) -> Mapping[str, Any]:
        if self.chat is None:
            raise ValueError("telebot: message has no chat")
        return self.chat

    def message_sig(self) -> tuple[str, int]:
        """Message id as text and the id of its chat."""
        return str(self.id), self._chat().get("id", 0)

    def time(self) -> datetime:
        """Moment of message creation in local time."""
        return datetime.fromtimestamp(self.unixtime)

    def last_edited(self) -> datetime:
        """Moment of the last edit in local time."""
        return datetime.fromtimestamp(self.last_edit)

    def is_forwarded(self) -> bool:
        return self.original_sender is not None or self.original_chat is not None

    def is_reply(self) -> bool:
        return self.reply_to is not None

    def private(self) -> bool:
        """Whether this is a personal message."""
        return self._chat().get("type") == _CHAT_PRIVATE

    def from_group(self) -> bool:
        """Whether the message came from a group or a supergroup."""
        return self._chat().get("type") in (_CHAT_GROUP, _CHAT_SUPERGROUP)

    def from_channel(self) -> bool:
        return self._chat().get("type") == _CHAT_CHANNEL

    def is_service(self) -> bool:
        """Whether this is an automatic service message."""
        return (
            self.user_joined is not None
            or bool(self.users_joined)
            or self.user_left is not None
            or bool(self.new_group_title)
            or self.new_group_photo is not None
            or self.group_photo_deleted
            or self.group_created
            or self.super_group_created
            or self.migrate_to != self.migrate_from
        )

    def entity_text(self, entity: MessageEntity) -> str:
        """Substring of the text (or caption) the entity points at."""
        text = self.text or self.caption
        units = text.encode("utf-16-le", errors="surrogatepass")
        count = len(units) // 2
        start, end = entity.offset, entity.offset + entity.length
        if start < 0 or end > count:
            return ""
        return units[start * 2 : end * 2].decode("utf-16-le", errors="replace")

    def media(self) -> Optional[Media]:
        """The first media the message carries, if any."""
        for item in (
            self.photo,
            self.voice,
            self.audio,
            self.animation,
            self.sticker,
            self.document,
            self.video,
            self.video_note,
        ):
            if item is not None:
                return item
        return None