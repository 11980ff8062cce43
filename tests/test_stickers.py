import json

from telebotkit.media import MaskFeature, MaskPosition, MediaFile
from telebotkit.stickers import (
    StickerSet,
    StickerSetType,
    add_sticker_request,
    create_sticker_set_request,
    sticker_set_thumb_request,
)

PNG = MediaFile(file_id="png")
TGS = MediaFile(file_id="tgs")
WEBM = MediaFile(file_id="webm")


class _User:
    def recipient(self):
        return "42"


def test_create_request_includes_all_files():
    sset = StickerSet(
        type=StickerSetType.REGULAR, name="n", title="t", emojis="🙂", png=PNG, tgs=TGS, webm=WEBM
    )
    req = create_sticker_set_request(7, sset)
    assert req.method == "createNewStickerSet"
    assert req.files == {"png_sticker": PNG, "tgs_sticker": TGS, "webm_sticker": WEBM}
    assert req.params["sticker_type"] == "regular"
    assert req.params["contains_masks"] == "false"
    assert req.params["user_id"] == str(7)
    assert "mask_position" not in req.params


def test_create_request_mask_position_round_trip():
    mask = MaskPosition(feature=MaskFeature.MOUTH, x_shift=0.5, y_shift=0.5, scale=1.5)
    sset = StickerSet(name="n", mask_position=mask, contains_masks=True)
    req = create_sticker_set_request(_User(), sset)
    assert MaskPosition.from_dict(json.loads(req.params["mask_position"])) == mask
    assert req.params["contains_masks"] == "true"
    assert req.params["user_id"] == _User().recipient()


def test_add_request_uses_first_file_only():
    req = add_sticker_request(1, StickerSet(name="n", png=PNG, tgs=TGS))
    assert req.method == "addStickerToSet"
    assert req.files == {"png_sticker": PNG}
    req = add_sticker_request(1, StickerSet(name="n", webm=WEBM))
    assert req.files == {"webm_sticker": WEBM}


def test_thumb_request_prefers_png_then_tgs():
    assert sticker_set_thumb_request(1, StickerSet(png=PNG, tgs=TGS)).files == {"thumb": PNG}
    req = sticker_set_thumb_request(1, StickerSet(name="n", tgs=TGS, webm=WEBM))
    assert req.method == "setStickerSetThumb"
    assert req.files == {"thumb": TGS}
    assert req.params == {"name": "n", "user_id": str(1)}


def test_sticker_set_from_dict():
    data = {
        "sticker_type": "custom_emoji",
        "name": "set",
        "title": "Set",
        "is_video": True,
        "stickers": [{"file_id": "a"}, {"file_id": "b"}],
        "thumb": {"file_id": "t"},
    }
    sset = StickerSet.from_dict(data)
    assert sset.type is StickerSetType.CUSTOM_EMOJI
    assert [s.file_id for s in sset.stickers] == ["a", "b"]
    assert sset.thumbnail.file_id == "t"
    assert sset.video is True
    assert sset.png is None