"""Ready-made handler middleware: logging, auto-responding, recovery and chat filters."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from .chain import Handler, Middleware

_default_logger = logging.getLogger("telebotkit")


def logger(log: Optional[logging.Logger] = None) -> Middleware:
    """Middleware that logs every incoming update as indented JSON."""
    target = log if log is not None else _default_logger

    def middleware(next_handler: Handler) -> Handler:
        def handler(c: Any) -> Any:
            update = c.update()
            data = update.to_dict() if hasattr(update, "to_dict") else update
            target.info(json.dumps(data, indent=2, ensure_ascii=False, default=str))
            return next_handler(c)

        return handler

    return middleware


def auto_respond() -> Middleware:
    """Middleware that answers every callback query once the handler is done."""

    def middleware(next_handler: Handler) -> Handler:
        def handler(c: Any) -> Any:
            if c.callback() is None:
                return next_handler(c)
            try:
                return next_handler(c)
            finally:
                c.respond()

        return handler

    return middleware


def ignore_via() -> Middleware:
    """Middleware that drops messages sent via an inline bot."""

    def middleware(next_handler: Handler) -> Handler:
        def handler(c: Any) -> Any:
            msg = c.message()
            if msg is not None and msg.via is not None:
                return None
            return next_handler(c)

        return handler

    return middleware


def recover(on_error: Optional[Callable[[BaseException], Any]] = None) -> Middleware:
    """Middleware that catches a handler's exception and reports it.

    Without ``on_error`` the exception goes to the bot's own error callback.
    """

    def middleware(next_handler: Handler) -> Handler:
        def handler(c: Any) -> Any:
            try:
                return next_handler(c)
            except Exception as err:
                if on_error is not None:
                    on_error(err)
                else:
                    c.bot().on_error(err, None)
                return None

        return handler

    return middleware


@dataclass
class RestrictConfig:
    """Chats to watch and the handlers for updates from inside and outside them.

    A missing handler falls back to the next handler in the chain.
    """

    chats: list[int] = field(default_factory=list)
    in_: Optional[Handler] = None
    out: Optional[Handler] = None


def _sender_id(c: Any) -> Any:
    sender = c.sender()
    if sender is None:
        return None
    if hasattr(sender, "get"):
        return sender.get("id")
    return getattr(sender, "id", None)


def restrict(config: RestrictConfig) -> Middleware:
    """Middleware that routes updates by whether the sender is in the chats list."""

    def middleware(next_handler: Handler) -> Handler:
        inside = config.in_ if config.in_ is not None else next_handler
        outside = config.out if config.out is not None else next_handler
        chats = set(config.chats)

        def handler(c: Any) -> Any:
            sender_id = _sender_id(c)
            if sender_id is not None and sender_id in chats:
                return inside(c)
            return outside(c)

        return handler

    return middleware


def _skip(c: Any) -> None:
    """Drop the update, noting the sender it came from."""
    _default_logger.debug("telebot: update from sender %s skipped", _sender_id(c))


def blacklist(*chats: int) -> Middleware:
    """Middleware that skips updates from the given users."""

    def middleware(next_handler: Handler) -> Handler:
        return restrict(RestrictConfig(chats=list(chats), in_=_skip, out=next_handler))(
            next_handler
        )

    return middleware


def whitelist(*chats: int) -> Middleware:
    """Middleware that skips updates from anyone but the given users."""

    def middleware(next_handler: Handler) -> Handler:
        return restrict(RestrictConfig(chats=list(chats), in_=next_handler, out=_skip))(
            next_handler
        )

    return middleware


__all__: Iterable[str] = (
    "RestrictConfig",
    "auto_respond",
    "blacklist",
    "ignore_via",
    "logger",
    "recover",
    "restrict",
    "whitelist",
)