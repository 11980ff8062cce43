"""Inline-result message contents, web app and video chat objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping


@dataclass
class InputTextMessageContent:
    """Text message sent as the result of an inline query."""

    text: str
    parse_mode: str = ""
    disable_preview: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message_text": self.text}
        if self.parse_mode:
            out["parse_mode"] = self.parse_mode
        out["disable_web_page_preview"] = self.disable_preview
        return out


@dataclass
class InputLocationMessageContent:
    """Location message sent as the result of an inline query."""

    lat: float
    lng: float

    def to_dict(self) -> dict[str, Any]:
        return {"latitude": self.lat, "longitude": self.lng}


@dataclass
class InputVenueMessageContent:
    """Venue message sent as the result of an inline query."""

    lat: float
    lng: float
    title: str
    address: str
    foursquare_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "latitude": self.lat,
            "longitude": self.lng,
            "title": self.title,
            "address": self.address,
        }
        if self.foursquare_id:
            out["foursquare_id"] = self.foursquare_id
        return out


@dataclass
class InputContactMessageContent:
    """Contact message sent as the result of an inline query."""

    phone_number: str
    first_name: str
    last_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "phone_number": self.phone_number,
            "first_name": self.first_name,
        }
        if self.last_name:
            out["last_name"] = self.last_name
        return out


@dataclass
class WebApp:
    """Web App launched from a keyboard or inline button."""

    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WebApp":
        return cls(url=data.get("url", ""))


@dataclass
class WebAppMessage:
    """Inline message sent by a Web App on behalf of a user."""

    inline_message_id: str = ""


@dataclass
class WebAppData:
    """Data sent from a Web App to the bot."""

    data: str = ""
    text: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WebAppData":
        return cls(data=data.get("data", ""), text=data.get("button_text", ""))


@dataclass
class VideoChatStarted:
    """Service message: a video chat started in the chat."""


@dataclass
class VideoChatEnded:
    """Service message: a video chat ended; duration is in seconds."""

    duration: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoChatEnded":
        return cls(duration=data.get("duration", 0))


@dataclass
class VideoChatParticipants:
    """Service message: users were invited to a video chat."""

    users: list[Mapping[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoChatParticipants":
        return cls(users=list(data.get("users") or []))


@dataclass
class VideoChatScheduled:
    """Service message: a video chat was scheduled."""

    unixtime: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoChatScheduled":
        return cls(unixtime=data.get("start_date", 0))

    def starts_at(self) -> datetime:
        """Moment the video chat is supposed to start, in local time."""
        return datetime.fromtimestamp(self.unixtime)