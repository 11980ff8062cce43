"""Providers of updates: long polling and filtering pollers."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from .update import Update


class _Poller(Protocol):
    def poll(self, bot: Any, dest: Any, stop: threading.Event) -> None: ...


@dataclass
class LongPoller:
    """Long polling with a timeout in seconds.

    ``allowed_updates`` lists the update kinds to receive, such as
    "message", "callback_query" or "poll_answer".
    """

    limit: int = 0
    timeout: float = 0.0
    last_update_id: int = 0
    allowed_updates: list[str] = field(default_factory=list)

    def poll(self, bot: Any, dest: "queue.Queue[Update]", stop: threading.Event) -> None:
        """Fetch updates and put them into dest until stop is set."""
        while not stop.is_set():
            try:
                updates = bot.get_updates(
                    self.last_update_id + 1, self.limit, self.timeout, self.allowed_updates
                )
            except Exception as err:
                debug = getattr(bot, "debug", None)
                if debug is not None:
                    debug(err)
                continue
            for update in updates:
                self.last_update_id = update.id
                dest.put(update)


@dataclass
class MiddlewarePoller:
    """Wraps another poller and passes on only the updates the filter accepts."""

    poller: _Poller
    filter: Callable[[Update], bool]
    capacity: int = 1

    def poll(self, bot: Any, dest: "queue.Queue[Update]", stop: threading.Event) -> None:
        """Run the wrapped poller and sieve its updates until stop is set."""
        if self.capacity < 1:
            self.capacity = 1

        middle: "queue.Queue[Update]" = queue.Queue(maxsize=self.capacity)
        stop_poller = threading.Event()
        worker = threading.Thread(
            target=self.poller.poll, args=(bot, middle, stop_poller), daemon=True
        )
        worker.start()

        while True:
            if stop.is_set():
                stop_poller.set()
                while worker.is_alive():
                    # Keep the wrapped poller from blocking on a full queue.
                    try:
                        while True:
                            middle.get_nowait()
                    except queue.Empty:
                        pass
                    worker.join(0.05)
                return
            try:
                update = middle.get(timeout=0.05)
            except queue.Empty:
                continue
            if self.filter(update):
                dest.put(update)


def new_middleware_poller(original: _Poller, filter_func: Callable[[Update], bool]) -> MiddlewarePoller:
    """Build a middleware poller around the original poller."""
    return MiddlewarePoller(poller=original, filter=filter_func)