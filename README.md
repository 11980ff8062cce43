# telebotkit

Building blocks for Telegram bots, using only the standard library.

- `telebotkit.message`, `telebotkit.update`, `telebotkit.poll`, `telebotkit.media`,
  `telebotkit.payments`, `telebotkit.stickers`, `telebotkit.content`: Bot API object types
  built from the dictionaries the API sends (`from_dict`) and, where they are sent back,
  turned into dictionaries (`to_dict`).
- `telebotkit.markup`: keyboards with `ReplyMarkup`, `Btn`, `ReplyButton`, `InlineButton`,
  `Login` and `MenuButton`.
- `telebotkit.options`: `SendOptions`, the `Option` flags, `placeholder`,
  `extract_options`, `embed_send_options` and `process_buttons`.
- `telebotkit.update`: `Dispatcher`, which routes an `Update` to the handler registered
  for its command, text, button or event.
- `telebotkit.chain`: `apply_middleware` and handler `Group`s.
- `telebotkit.poller` and `telebotkit.webhook`: `LongPoller`, `MiddlewarePoller`
  (also built with `new_middleware_poller`) and `Webhook`.
- `telebotkit.middlewares`: `logger`, `auto_respond`, `ignore_via`, `recover`,
  `restrict` (with `RestrictConfig`), `blacklist` and `whitelist`.
- `telebotkit.config`: `Config`, typed and case-insensitive access to a nested mapping.
- `telebotkit.constants`: the `ON_*` event endpoints, `ChatAction`, `ParseMode` and
  `TelebotError`.

## Installation

```
pip install telebotkit
```

## Keyboards

```python
from telebotkit.markup import ReplyMarkup

menu = ReplyMarkup()
menu.reply(
    menu.row(menu.text("Menu")),
    menu.row(menu.text("Settings")),
)

pager = ReplyMarkup()
pager.inline(pager.row(
    pager.data("Previous", "prev"),
    pager.data("Next", "next"),
))

pager.to_dict()  # ready to be JSON-encoded as "reply_markup"
```

`ReplyMarkup.split(3, buttons)` breaks a flat list of buttons into rows of at most three.
`reply` raises `ValueError` for a button bound to a callback (one with `unique` set).

## Send options

`extract_options` folds `SendOptions`, `ReplyMarkup`, `Option` flags, a parse-mode string
and a list of entities into one `SendOptions`. `embed_send_options` returns a new
parameter dictionary; the one passed in is left as it was.

```python
from telebotkit.options import Option, extract_options, embed_send_options

opts = extract_options(Option.SILENT, Option.NO_PREVIEW, "HTML")
params = embed_send_options({"chat_id": "42", "text": "<b>hi</b>"}, opts, "")
# params["disable_notification"] == "true"
# params["disable_web_page_preview"] == "true"
# params["parse_mode"] == "HTML"
```

Inline buttons with a `unique` name get their callback data rewritten to
`"\f<unique>|<data>"` when the markup is embedded, so that `Dispatcher` can route the
callback back to the handler registered for that button.

## Routing updates

```python
from telebotkit import constants
from telebotkit.update import Dispatcher, Update

bot = Dispatcher({"id": 1, "username": "my_bot"}, synchronous=True)

def on_start(ctx):
    print("payload:", ctx.message().payload)

bot.handle("/start", on_start)
bot.handle(constants.ON_TEXT, lambda ctx: print(ctx.message().text))

bot.process_update(Update.from_dict({
    "update_id": 1,
    "message": {"message_id": 5, "chat": {"id": 7, "type": "private"}, "text": "/start go"},
}))
```

A handler receives a context with `update()`, `message()`, `sender()`, `callback()` and
`bot()`. Exceptions raised by handlers go to the dispatcher's `on_error` callback (by
default they are logged). Without `synchronous=True` each handler runs on its own thread.

## Middleware

```python
from telebotkit.middlewares import whitelist, recover

bot.handle("/admin", on_start, whitelist(1001), recover())
```

`auto_respond` calls `respond()` on the context after a callback handler finishes, so it
needs a context object that provides that method.

## Configuration

```python
from datetime import timedelta
from telebotkit.config import Config

cfg = Config({"num": 123, "obj": {"dur": "10m"}, "strs": ["abc", "def"]})
cfg.get_int("num")              # 123
cfg.get_duration("obj.dur")     # timedelta(minutes=10)
cfg.strings("strs")             # ["abc", "def"]
```

## What the package does not do

There is no Bot API HTTP client. Nothing here sends messages or calls API methods: the
sticker functions only build request descriptions (method, files, parameters),
`LongPoller.poll` expects a bot object with a `get_updates` method, and `Webhook.poll`
expects one with `set_webhook` and `on_error`. There are no layout files, templates or
locales, and no command-line program.

## Testing

```
pip install -e ".[test]"
pytest
```