import queue
import threading

from telebotkit.poller import LongPoller, MiddlewarePoller, new_middleware_poller
from telebotkit.update import Update


class _TestPoller:
    def __init__(self):
        self.updates = queue.Queue(maxsize=1)
        self.done = queue.Queue(maxsize=1)

    def poll(self, bot, dest, stop):
        while not stop.is_set():
            try:
                upd = self.updates.get(timeout=0.01)
            except queue.Empty:
                continue
            dest.put(upd)


def test_middleware_poller():
    tp = _TestPoller()
    ids = []

    def filter_func(upd):
        if upd.id > 0:
            ids.append(upd.id)
            return True
        tp.done.put(True)
        return False

    mp = new_middleware_poller(tp, filter_func)
    dest = queue.Queue()
    stop = threading.Event()

    def feed():
        for i in (1, 2, 0):
            tp.updates.put(Update(id=i))

    threading.Thread(target=feed, daemon=True).start()
    runner = threading.Thread(target=mp.poll, args=(None, dest, stop), daemon=True)
    runner.start()
    assert tp.done.get(timeout=5) is True
    stop.set()
    runner.join(5)

    assert not runner.is_alive()
    assert 1 in ids
    assert 2 in ids
    assert [dest.get_nowait().id for _ in range(2)] == [1, 2]


def test_middleware_poller_fixes_capacity():
    mp = MiddlewarePoller(poller=_TestPoller(), filter=lambda u: True, capacity=0)
    stop = threading.Event()
    stop.set()
    mp.poll(None, queue.Queue(), stop)
    assert mp.capacity == 1


class _FakeBot:
    def __init__(self, responses, stop):
        self.responses = list(responses)
        self.stop = stop
        self.calls = []
        self.errors = []

    def get_updates(self, offset, limit, timeout, allowed):
        self.calls.append((offset, limit, timeout, allowed))
        item = self.responses.pop(0)
        if not self.responses:
            self.stop.set()
        if isinstance(item, Exception):
            raise item
        return item

    def debug(self, err):
        self.errors.append(err)


def test_long_poller_advances_offset():
    stop = threading.Event()
    bot = _FakeBot([[Update(id=5), Update(id=6)], []], stop)
    lp = LongPoller(limit=10, timeout=2.0, allowed_updates=["message"])
    dest = queue.Queue()
    lp.poll(bot, dest, stop)

    assert [c[0] for c in bot.calls] == [1, 7]
    assert bot.calls[0][1:] == (10, 2.0, ["message"])
    assert lp.last_update_id == 6
    assert [dest.get_nowait().id for _ in range(2)] == [5, 6]
    assert dest.empty()


def test_long_poller_reports_errors_and_continues():
    stop = threading.Event()
    failure = RuntimeError("network down")
    bot = _FakeBot([failure, [Update(id=3)]], stop)
    lp = LongPoller()
    dest = queue.Queue()
    lp.poll(bot, dest, stop)

    assert bot.errors == [failure]
    assert dest.get_nowait().id == 3
    assert lp.last_update_id == 3


def test_long_poller_stopped_does_nothing():
    stop = threading.Event()
    stop.set()
    bot = _FakeBot([[Update(id=1)]], stop)
    LongPoller().poll(bot, queue.Queue(), stop)
    assert bot.calls == []