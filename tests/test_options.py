import json
from types import SimpleNamespace

import pytest

from telebotkit.constants import ParseMode
from telebotkit.markup import InlineButton, ReplyMarkup
from telebotkit.options import (
    Option,
    SendOptions,
    embed_send_options,
    extract_options,
    placeholder,
    process_buttons,
)


def _markup():
    r = ReplyMarkup()
    r.reply(r.row(r.text("Menu")), r.row(r.text("Settings")))
    return r


def test_copy_equal_and_independent():
    o = SendOptions(reply_markup=_markup())
    cp = o.copy()
    assert cp == o
    assert cp.reply_markup is not o.reply_markup
    cp.reply_markup.force_reply = True
    assert o.reply_markup.force_reply is False


def test_placeholder():
    opts = placeholder("type")
    assert opts.reply_markup == ReplyMarkup(force_reply=True, placeholder="type")


@pytest.mark.parametrize(
    "flag, attr",
    [
        (Option.NO_PREVIEW, "disable_web_page_preview"),
        (Option.SILENT, "disable_notification"),
        (Option.ALLOW_WITHOUT_REPLY, "allow_without_reply"),
        (Option.PROTECTED, "protected"),
    ],
)
def test_extract_simple_flags(flag, attr):
    assert getattr(extract_options(flag), attr) is True
    assert getattr(extract_options(), attr) is False


@pytest.mark.parametrize(
    "flag, attr",
    [
        (Option.FORCE_REPLY, "force_reply"),
        (Option.ONE_TIME_KEYBOARD, "one_time_keyboard"),
        (Option.REMOVE_KEYBOARD, "remove_keyboard"),
    ],
)
def test_extract_markup_flags(flag, attr):
    opts = extract_options(flag)
    assert getattr(opts.reply_markup, attr) is True


def test_extract_copies_markup():
    markup = _markup()
    opts = extract_options(markup)
    assert opts.reply_markup == markup
    assert opts.reply_markup is not markup


def test_extract_parse_mode_and_entities():
    entities = [{"type": "bold", "offset": 0, "length": 1}]
    opts = extract_options(ParseMode.HTML, entities)
    assert opts.parse_mode == "HTML"
    assert opts.entities == entities


def test_send_options_replace_earlier_flags():
    given = SendOptions(protected=True)
    opts = extract_options(Option.SILENT, given)
    assert opts.disable_notification is False
    assert opts.protected is True
    assert opts is not given


def test_extract_rejects_unsupported():
    with pytest.raises(TypeError, match="unsupported send-option"):
        extract_options(3.5)


def test_embed_default_parse_mode_without_options():
    params = {"chat_id": "1"}
    result = embed_send_options(params, None, ParseMode.MARKDOWN)
    assert result == {"chat_id": "1", "parse_mode": "Markdown"}
    assert params == {"chat_id": "1"}


def test_embed_flags():
    opt = SendOptions(
        reply_to=SimpleNamespace(id=42),
        disable_web_page_preview=True,
        disable_notification=True,
        allow_without_reply=True,
        protected=True,
        parse_mode=ParseMode.HTML,
    )
    result = embed_send_options({}, opt, "")
    assert result["reply_to_message_id"] == "42"
    assert result["disable_web_page_preview"] == "true"
    assert result["disable_notification"] == "true"
    assert result["allow_sending_without_reply"] == "true"
    assert result["protect_content"] == "true"
    assert result["parse_mode"] == "HTML"


def test_embed_skips_zero_reply_id():
    result = embed_send_options({}, SendOptions(reply_to=SimpleNamespace(id=0)), "")
    assert "reply_to_message_id" not in result


def test_embed_entities_replace_parse_mode():
    entities = [{"type": "bold", "offset": 0, "length": 1}]
    result = embed_send_options({}, SendOptions(entities=entities), ParseMode.HTML)
    assert "parse_mode" not in result
    assert json.loads(result["entities"]) == entities

    result = embed_send_options({"caption": "c"}, SendOptions(entities=entities), "")
    assert json.loads(result["caption_entities"]) == entities
    assert "entities" not in result


def test_embed_reply_markup_encodes_callbacks():
    markup = ReplyMarkup()
    markup.inline(markup.row(markup.data("Next", "next", "1")))
    result = embed_send_options({}, SendOptions(reply_markup=markup), "")
    decoded = ReplyMarkup.from_dict(json.loads(result["reply_markup"]))
    assert decoded.inline_keyboard[0][0].data == "\fnext|1"


def test_process_buttons():
    keys = [[InlineButton(unique="prev", text="P"), InlineButton(unique="n", data="7")],
            [InlineButton(text="plain", data="x")]]
    process_buttons(keys)
    assert keys[0][0].data == "\fprev"
    assert keys[0][1].data == "\fn|7"
    assert keys[1][0].data == "x"


def test_process_buttons_empty_first_row_is_untouched():
    keys = [[], [InlineButton(unique="u")]]
    process_buttons(keys)
    assert keys[1][0].data == ""