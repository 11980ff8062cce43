import json
import logging

import pytest

from telebotkit.middlewares import (
    RestrictConfig,
    auto_respond,
    blacklist,
    ignore_via,
    logger,
    recover,
    restrict,
    whitelist,
)
from telebotkit.update import Dispatcher, Update


def _text_update(sender_id, text="hi", via=None):
    message = {
        "message_id": 1,
        "from": {"id": sender_id},
        "chat": {"id": sender_id, "type": "private"},
        "text": text,
    }
    if via is not None:
        message["via_bot"] = via
    return Update.from_dict({"update_id": 7, "message": message})


def _dispatcher(*middleware, on_error=None):
    return Dispatcher(
        me={"id": 99, "username": "bot"},
        synchronous=True,
        middleware=list(middleware),
        on_error=on_error,
    )


class _FakeContext:
    def __init__(self, update=None, callback=None):
        self._update = update
        self._callback = callback
        self.responded = 0

    def update(self):
        return self._update

    def callback(self):
        return self._callback

    def respond(self):
        self.responded += 1


def test_recover_carries_over_source_case():
    errors = []

    def h(c):
        raise RuntimeError("recover test")

    with pytest.raises(RuntimeError):
        h(None)

    assert recover(errors.append)(h)(None) is None
    assert [str(e) for e in errors] == ["recover test"]


def test_recover_passes_result_through():
    assert recover(lambda e: None)(lambda c: 42)(None) == 42


def test_recover_default_reports_to_bot_without_context():
    reported = []
    d = _dispatcher(recover(), on_error=lambda err, ctx: reported.append((str(err), ctx)))

    def boom(c):
        raise ValueError("boom")

    d.handle("hi", boom)
    d.process_update(_text_update(5))
    assert reported == [("boom", None)]


def test_whitelist_lets_listed_sender_through():
    seen = []
    d = _dispatcher(whitelist(5))
    d.handle("hi", lambda c: seen.append(c.sender()["id"]))
    d.process_update(_text_update(5))
    d.process_update(_text_update(6))
    assert seen == [5]


def test_blacklist_skips_listed_sender():
    seen = []
    d = _dispatcher(blacklist(5, 8))
    d.handle("hi", lambda c: seen.append(c.sender()["id"]))
    for sender in (5, 6, 8, 9):
        d.process_update(_text_update(sender))
    assert seen == [6, 9]


def test_restrict_uses_next_for_missing_handlers():
    seen = []
    config = RestrictConfig(chats=[5], in_=lambda c: seen.append("in"))
    d = _dispatcher(restrict(config))
    d.handle("hi", lambda c: seen.append("next"))
    d.process_update(_text_update(5))
    d.process_update(_text_update(6))
    assert seen == ["in", "next"]


def test_restrict_out_handler():
    seen = []
    config = RestrictConfig(chats=[5], out=lambda c: seen.append("out"))
    d = _dispatcher(restrict(config))
    d.handle("hi", lambda c: seen.append("next"))
    d.process_update(_text_update(6))
    d.process_update(_text_update(5))
    assert seen == ["out", "next"]


def test_ignore_via_drops_inline_bot_messages():
    seen = []
    d = _dispatcher(ignore_via())
    d.handle("hi", lambda c: seen.append(c.message().id))
    d.process_update(_text_update(5, via={"id": 1, "username": "other"}))
    assert seen == []
    d.process_update(_text_update(5))
    assert seen == [1]


def test_auto_respond_responds_to_callbacks():
    ctx = _FakeContext(callback=object())
    result = auto_respond()(lambda c: "done")(ctx)
    assert result == "done"
    assert ctx.responded == 1


def test_auto_respond_responds_even_when_handler_fails():
    ctx = _FakeContext(callback=object())

    def fail(c):
        raise KeyError("x")

    with pytest.raises(KeyError):
        auto_respond()(fail)(ctx)
    assert ctx.responded == 1


def test_auto_respond_ignores_non_callbacks():
    ctx = _FakeContext(callback=None)
    assert auto_respond()(lambda c: "ok")(ctx) == "ok"
    assert ctx.responded == 0


def test_logger_logs_update_as_json(caplog):
    name = "tests.telebotkit.logger"
    caplog.set_level(logging.INFO, logger=name)
    update = _text_update(5)
    ctx = _FakeContext(update=update)

    result = logger(logging.getLogger(name))(lambda c: "next")(ctx)

    assert result == "next"
    records = [r for r in caplog.records if r.name == name]
    assert len(records) == 1
    logged = json.loads(records[0].getMessage())
    assert logged["update_id"] == 7
    assert logged["message"]["text"] == "hi"
    assert "\n  " in records[0].getMessage()