from datetime import datetime

import pytest

from telebotkit.media import Audio, Document, Photo, Sticker, Voice
from telebotkit.message import (
    AutoDeleteTimer,
    EntityType,
    Message,
    MessageEntity,
    ProximityAlert,
)


def test_entity_round_trip():
    entity = MessageEntity(
        type=EntityType.TEXT_LINK, offset=2, length=4, url="https://example.com"
    )
    data = entity.to_dict()
    assert data["type"] == "text_link"
    assert data["custom_emoji_id"] == ""
    assert "language" not in data
    assert MessageEntity.from_dict(data) == entity


def test_entity_unknown_type_kept_as_text():
    entity = MessageEntity.from_dict({"type": "brand_new", "offset": 0, "length": 1})
    assert entity.type == "brand_new"


def test_entity_text_plain():
    msg = Message(text="hello world")
    assert msg.entity_text(MessageEntity(offset=6, length=5)) == "world"


def test_entity_text_counts_utf16_units():
    msg = Message(text="hi 😀 there")
    assert msg.entity_text(MessageEntity(offset=3, length=2)) == "😀"
    assert msg.entity_text(MessageEntity(offset=6, length=5)) == "there"


def test_entity_text_uses_caption_when_no_text():
    msg = Message(caption="caption")
    assert msg.entity_text(MessageEntity(offset=0, length=7)) == "caption"


@pytest.mark.parametrize("offset,length", [(-1, 2), (5, 10), (0, 100)])
def test_entity_text_out_of_range(offset, length):
    msg = Message(text="short")
    assert msg.entity_text(MessageEntity(offset=offset, length=length)) == ""


def test_from_dict_basic_fields():
    data = {
        "message_id": 5,
        "date": 1000,
        "chat": {"id": 10, "type": "private"},
        "from": {"id": 7},
        "text": "/start",
        "entities": [{"type": "bot_command", "offset": 0, "length": 6}],
        "reply_to_message": {"message_id": 4, "chat": {"id": 10, "type": "private"}},
    }
    msg = Message.from_dict(data)
    assert msg.id == 5
    assert msg.sender == {"id": 7}
    assert msg.entities[0].type is EntityType.COMMAND
    assert msg.reply_to is not None and msg.reply_to.id == 4
    assert msg.is_reply()
    assert msg.message_sig() == ("5", 10)
    assert msg.private()
    assert not msg.from_group()
    assert msg.entity_text(msg.entities[0]) == "/start"


def test_from_dict_photo_picks_largest():
    msg = Message.from_dict(
        {
            "message_id": 1,
            "photo": [
                {"file_id": "small", "width": 90, "height": 90},
                {"file_id": "large", "width": 800, "height": 600},
            ],
        }
    )
    assert isinstance(msg.media(), Photo)
    assert msg.photo.file_id == "large"
    assert msg.photo.width == 800


def test_from_dict_service_objects():
    msg = Message.from_dict(
        {
            "proximity_alert_triggered": {"distance": 15, "traveler": {"id": 1}},
            "message_auto_delete_timer_changed": {"message_auto_delete_time": 86400},
            "video_chat_started": {},
        }
    )
    assert msg.proximity_alert == ProximityAlert(traveler={"id": 1}, distance=15)
    assert msg.auto_delete_timer == AutoDeleteTimer(unixtime=86400)
    assert msg.video_chat_started is not None
    assert msg.video_chat_ended is None


def test_time_and_last_edited():
    msg = Message(unixtime=1000, last_edit=2000)
    assert msg.time() == datetime.fromtimestamp(1000)
    assert msg.last_edited() == datetime.fromtimestamp(2000)


def test_is_forwarded():
    assert not Message().is_forwarded()
    assert Message(original_sender={"id": 1}).is_forwarded()
    assert Message(original_chat={"id": 2}).is_forwarded()


@pytest.mark.parametrize(
    "chat_type,group,channel",
    [("group", True, False), ("supergroup", True, False), ("channel", False, True)],
)
def test_chat_kinds(chat_type, group, channel):
    msg = Message(chat={"id": 1, "type": chat_type})
    assert msg.from_group() is group
    assert msg.from_channel() is channel
    assert not msg.private()


def test_chat_required_for_sig():
    with pytest.raises(ValueError):
        Message(id=1).message_sig()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_joined": {"id": 1}},
        {"users_joined": [{"id": 1}]},
        {"user_left": {"id": 1}},
        {"new_group_title": "title"},
        {"new_group_photo": Photo()},
        {"group_photo_deleted": True},
        {"group_created": True},
        {"super_group_created": True},
        {"migrate_to": 5},
    ],
)
def test_is_service(kwargs):
    assert Message(**kwargs).is_service()


def test_not_service():
    assert not Message(text="hello").is_service()
    assert not Message(migrate_to=3, migrate_from=3).is_service()


def test_media_priority():
    photo, voice, audio = Photo(file_id="p"), Voice(file_id="v"), Audio(file_id="a")
    assert Message(photo=photo, voice=voice, audio=audio).media() is photo
    assert Message(voice=voice, audio=audio).media() is voice
    sticker, document = Sticker(), Document()
    assert Message(sticker=sticker, document=document).media() is sticker
    assert Message(document=document).media() is document
    assert Message(text="x").media() is None