"""Sticker sets and the requests that manage them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

from .media import MaskPosition, MediaFile, Photo, Sticker


class StickerSetType(str, Enum):
    """Kind of sticker set."""

    REGULAR = "regular"
    MASK = "mask"
    CUSTOM_EMOJI = "custom_emoji"


@dataclass
class StickerSet:
    """A sticker set, or the files and settings for creating one."""

    type: Optional[StickerSetType] = None
    name: str = ""
    title: str = ""
    animated: bool = False
    video: bool = False
    stickers: list[Sticker] = field(default_factory=list)
    thumbnail: Optional[Photo] = None
    png: Optional[MediaFile] = None
    tgs: Optional[MediaFile] = None
    webm: Optional[MediaFile] = None
    emojis: str = ""
    contains_masks: bool = False
    mask_position: Optional[MaskPosition] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StickerSet":
        def file_of(key: str) -> Optional[MediaFile]:
            value = data.get(key)
            return MediaFile.from_dict(value) if value else None

        kind = data.get("sticker_type")
        thumb = data.get("thumb")
        mask = data.get("mask_position")
        return cls(
            type=StickerSetType(kind) if kind else None,
            name=data.get("name", ""),
            title=data.get("title", ""),
            animated=data.get("is_animated", False),
            video=data.get("is_video", False),
            stickers=[Sticker.from_dict(s) for s in data.get("stickers") or []],
            thumbnail=Photo.from_dict(thumb) if thumb else None,
            png=file_of("png_sticker"),
            tgs=file_of("tgs_sticker"),
            webm=file_of("webm_sticker"),
            emojis=data.get("emojis", ""),
            contains_masks=data.get("contains_masks", False),
            mask_position=MaskPosition.from_dict(mask) if mask else None,
        )


class _Request(NamedTuple):
    method: str
    files: dict[str, MediaFile]
    params: dict[str, str]


def _recipient(user: Any) -> str:
    return user.recipient() if hasattr(user, "recipient") else str(user)


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def create_sticker_set_request(user_id: Any, sticker_set: StickerSet) -> _Request:
    """Build the upload request that creates a new sticker set."""
    files: dict[str, MediaFile] = {}
    for key, value in (
        ("png_sticker", sticker_set.png),
        ("tgs_sticker", sticker_set.tgs),
        ("webm_sticker", sticker_set.webm),
    ):
        if value is not None:
            files[key] = value

    kind = sticker_set.type
    params = {
        "user_id": _recipient(user_id),
        "sticker_type": StickerSetType(kind).value if kind else "",
        "name": sticker_set.name,
        "title": sticker_set.title,
        "emojis": sticker_set.emojis,
        "contains_masks": _dumps(bool(sticker_set.contains_masks)),
    }
    if sticker_set.mask_position is not None:
        params["mask_position"] = _dumps(sticker_set.mask_position.to_dict())
    return _Request("createNewStickerSet", files, params)


def add_sticker_request(user_id: Any, sticker_set: StickerSet) -> _Request:
    """Build the upload request that adds one sticker to an existing set."""
    files: dict[str, MediaFile] = {}
    if sticker_set.png is not None:
        files["png_sticker"] = sticker_set.png
    elif sticker_set.tgs is not None:
        files["tgs_sticker"] = sticker_set.tgs
    elif sticker_set.webm is not None:
        files["webm_sticker"] = sticker_set.webm

    params = {
        "user_id": _recipient(user_id),
        "name": sticker_set.name,
        "emojis": sticker_set.emojis,
    }
    if sticker_set.mask_position is not None:
        params["mask_position"] = _dumps(sticker_set.mask_position.to_dict())
    return _Request("addStickerToSet", files, params)


def sticker_set_thumb_request(user_id: Any, sticker_set: StickerSet) -> _Request:
    """Build the upload request that sets a sticker set's thumbnail."""
    files: dict[str, MediaFile] = {}
    if sticker_set.png is not None:
        files["thumb"] = sticker_set.png
    elif sticker_set.tgs is not None:
        files["thumb"] = sticker_set.tgs

    params = {"name": sticker_set.name, "user_id": _recipient(user_id)}
    return _Request("setStickerSetThumb", files, params)