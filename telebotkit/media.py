"""Media objects: files, photos, audio, documents, stickers, locations and dice."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union


def _file_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "file_id": data.get("file_id", ""),
        "unique_id": data.get("file_unique_id", ""),
        "file_size": data.get("file_size", 0),
        "file_path": data.get("file_path", ""),
    }


def _thumb(data: Mapping[str, Any]) -> Optional["Photo"]:
    thumb = data.get("thumb")
    return Photo.from_dict(thumb) if thumb else None


@dataclass
class MediaFile:
    """A file known to the server, stored locally or reachable by URL."""

    file_id: str = ""
    unique_id: str = ""
    file_size: int = 0
    file_path: str = ""
    file_local: str = ""
    file_url: str = ""

    def on_disk(self) -> bool:
        """Whether the file refers to an existing local path."""
        return bool(self.file_local) and os.path.exists(self.file_local)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MediaFile":
        return cls(**_file_fields(data))


@dataclass
class InputMedia:
    """Media description used when sending albums or editing media."""

    type: str = ""
    media: str = ""
    caption: str = ""
    thumbnail: str = ""
    parse_mode: str = ""
    entities: list[Any] = field(default_factory=list)
    width: int = 0
    height: int = 0
    duration: int = 0
    title: str = ""
    performer: str = ""
    streaming: bool = False
    disable_type_detection: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "media": self.media,
            "caption": self.caption,
        }
        optional = (
            ("thumb", self.thumbnail),
            ("parse_mode", self.parse_mode),
            (
                "caption_entities",
                [e.to_dict() if hasattr(e, "to_dict") else e for e in self.entities],
            ),
            ("width", self.width),
            ("height", self.height),
            ("duration", self.duration),
            ("title", self.title),
            ("performer", self.performer),
            ("supports_streaming", self.streaming),
            ("disable_content_type_detection", self.disable_type_detection),
        )
        for key, value in optional:
            if value:
                out[key] = value
        return out


@dataclass
class Photo(MediaFile):
    """A single photo; when several sizes arrive, the largest is kept."""

    width: int = 0
    height: int = 0
    caption: str = ""

    def media_type(self) -> str:
        return "photo"

    def input_media(self) -> InputMedia:
        return InputMedia(type=self.media_type(), caption=self.caption)

    @classmethod
    def from_dict(cls, data: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]) -> "Photo":
        if isinstance(data, Mapping):
            best = data
        else:
            if not data:
                raise ValueError("telebot: photo has no sizes")
            best = data[-1]
        return cls(
            **_file_fields(best),
            width=best.get("width", 0),
            height=best.get("height", 0),
        )


@dataclass
class Audio(MediaFile):
    """An audio file."""

    duration: int = 0
    caption: str = ""
    thumbnail: Optional[Photo] = None
    title: str = ""
    performer: str = ""
    mime: str = ""
    file_name: str = ""

    def media_type(self) -> str:
        return "audio"

    def input_media(self) -> InputMedia:
        return InputMedia(
            type=self.media_type(),
            caption=self.caption,
            duration=self.duration,
            title=self.title,
            performer=self.performer,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Audio":
        return cls(
            **_file_fields(data),
            duration=data.get("duration", 0),
            caption=data.get("caption", ""),
            thumbnail=_thumb(data),
            title=data.get("title", ""),
            performer=data.get("performer", ""),
            mime=data.get("mime_type", ""),
            file_name=data.get("file_name", ""),
        )


@dataclass
class Document(MediaFile):
    """A general file."""

    thumbnail: Optional[Photo] = None
    caption: str = ""
    mime: str = ""
    file_name: str = ""
    disable_type_detection: bool = False

    def media_type(self) -> str:
        return "document"

    def input_media(self) -> InputMedia:
        return InputMedia(
            type=self.media_type(),
            caption=self.caption,
            disable_type_detection=self.disable_type_detection,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        return cls(
            **_file_fields(data),
            thumbnail=_thumb(data),
            caption=data.get("caption", ""),
            mime=data.get("mime_type", ""),
            file_name=data.get("file_name", ""),
            disable_type_detection=data.get("disable_content_type_detection", False),
        )


@dataclass
class Video(MediaFile):
    """A video file."""

    width: int = 0
    height: int = 0
    duration: int = 0
    caption: str = ""
    thumbnail: Optional[Photo] = None
    streaming: bool = False
    mime: str = ""
    file_name: str = ""

    def media_type(self) -> str:
        return "video"

    def input_media(self) -> InputMedia:
        return InputMedia(
            type=self.media_type(),
            caption=self.caption,
            width=self.width,
            height=self.height,
            duration=self.duration,
            streaming=self.streaming,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Video":
        return cls(
            **_file_fields(data),
            width=data.get("width", 0),
            height=data.get("height", 0),
            duration=data.get("duration", 0),
            caption=data.get("caption", ""),
            thumbnail=_thumb(data),
            streaming=data.get("supports_streaming", False),
            mime=data.get("mime_type", ""),
            file_name=data.get("file_name", ""),
        )


@dataclass
class Animation(MediaFile):
    """An animation file."""

    width: int = 0
    height: int = 0
    duration: int = 0
    caption: str = ""
    thumbnail: Optional[Photo] = None
    mime: str = ""
    file_name: str = ""

    def media_type(self) -> str:
        return "animation"

    def input_media(self) -> InputMedia:
        return InputMedia(
            type=self.media_type(),
            caption=self.caption,
            width=self.width,
            height=self.height,
            duration=self.duration,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Animation":
        return cls(
            **_file_fields(data),
            width=data.get("width", 0),
            height=data.get("height", 0),
            duration=data.get("duration", 0),
            caption=data.get("caption", ""),
            thumbnail=_thumb(data),
            mime=data.get("mime_type", ""),
            file_name=data.get("file_name", ""),
        )


@dataclass
class Voice(MediaFile):
    """A voice note."""

    duration: int = 0
    caption: str = ""
    mime: str = ""

    def media_type(self) -> str:
        return "voice"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Voice":
        return cls(
            **_file_fields(data),
            duration=data.get("duration", 0),
            caption=data.get("caption", ""),
            mime=data.get("mime_type", ""),
        )


@dataclass
class VideoNote(MediaFile):
    """A round video message."""

    duration: int = 0
    thumbnail: Optional[Photo] = None
    length: int = 0

    def media_type(self) -> str:
        return "videoNote"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoNote":
        return cls(
            **_file_fields(data),
            duration=data.get("duration", 0),
            thumbnail=_thumb(data),
            length=data.get("length", 0),
        )


class MaskFeature(str, Enum):
    """Part of the face a mask is placed on."""

    FOREHEAD = "forehead"
    EYES = "eyes"
    MOUTH = "mouth"
    CHIN = "chin"


@dataclass
class MaskPosition:
    """Default position of a mask on faces."""

    feature: MaskFeature = MaskFeature.FOREHEAD
    x_shift: float = 0.0
    y_shift: float = 0.0
    scale: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": MaskFeature(self.feature).value,
            "x_shift": self.x_shift,
            "y_shift": self.y_shift,
            "scale": self.scale,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MaskPosition":
        return cls(
            feature=MaskFeature(data.get("point", MaskFeature.FOREHEAD.value)),
            x_shift=data.get("x_shift", 0.0),
            y_shift=data.get("y_shift", 0.0),
            scale=data.get("scale", 0.0),
        )


@dataclass
class Sticker(MediaFile):
    """A sticker image, animation or video."""

    width: int = 0
    height: int = 0
    animated: bool = False
    video: bool = False
    thumbnail: Optional[Photo] = None
    emoji: str = ""
    set_name: str = ""
    mask_position: Optional[MaskPosition] = None
    premium_animation: Optional[MediaFile] = None

    def media_type(self) -> str:
        return "sticker"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sticker":
        mask = data.get("mask_position")
        premium = data.get("premium_animation")
        return cls(
            **_file_fields(data),
            width=data.get("width", 0),
            height=data.get("height", 0),
            animated=data.get("is_animated", False),
            video=data.get("is_video", False),
            thumbnail=_thumb(data),
            emoji=data.get("emoji", ""),
            set_name=data.get("set_name", ""),
            mask_position=MaskPosition.from_dict(mask) if mask else None,
            premium_animation=MediaFile.from_dict(premium) if premium else None,
        )


@dataclass
class Contact:
    """A phone contact."""

    phone_number: str = ""
    first_name: str = ""
    last_name: str = ""
    user_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        return cls(
            phone_number=data.get("phone_number", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            user_id=data.get("user_id", 0),
        )


@dataclass
class Location:
    """A geographic position; live_period is in seconds."""

    lat: float = 0.0
    lng: float = 0.0
    horizontal_accuracy: Optional[float] = None
    heading: int = 0
    alert_radius: int = 0
    live_period: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Location":
        return cls(
            lat=data.get("latitude", 0.0),
            lng=data.get("longitude", 0.0),
            horizontal_accuracy=data.get("horizontal_accuracy"),
            heading=data.get("heading", 0),
            alert_radius=data.get("proximity_alert_radius", 0),
            live_period=data.get("live_period", 0),
        )


@dataclass
class Venue:
    """A venue with name, address and optional place identifiers."""

    location: Location = field(default_factory=Location)
    title: str = ""
    address: str = ""
    foursquare_id: str = ""
    foursquare_type: str = ""
    google_place_id: str = ""
    google_place_type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Venue":
        return cls(
            location=Location.from_dict(data.get("location") or {}),
            title=data.get("title", ""),
            address=data.get("address", ""),
            foursquare_id=data.get("foursquare_id", ""),
            foursquare_type=data.get("foursquare_type", ""),
            google_place_id=data.get("google_place_id", ""),
            google_place_type=data.get("google_place_type", ""),
        )


class DiceType(str, Enum):
    """Emoji on which a dice throw is based."""

    CUBE = "🎲"
    DART = "🎯"
    BALL = "🏀"
    GOAL = "⚽"
    SLOT = "🎰"
    BOWL = "🎳"


@dataclass
class Dice:
    """A dice with a random value."""

    type: Union[DiceType, str] = DiceType.CUBE
    value: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dice":
        emoji = data.get("emoji", "")
        try:
            kind: Union[DiceType, str] = DiceType(emoji)
        except ValueError:
            kind = emoji
        return cls(type=kind, value=data.get("value", 0))