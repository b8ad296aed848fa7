import itertools

import pytest

from portfolio.core.dom import Element


class ManualScheduler:
    """Deterministic stand-in for the event loop's timer queue."""

    def __init__(self):
        self.now = 0.0
        self._timers = []
        self._seq = itertools.count()

    def call_later(self, delay, callback):
        self._timers.append((self.now + delay, next(self._seq), callback))

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = sorted(t for t in self._timers if t[0] <= target)
            if not due:
                break
            when, seq, callback = due[0]
            self._timers.remove(due[0])
            self.now = when
            callback()
        self.now = target

    @property
    def pending(self):
        return len(self._timers)


class FakeHttpClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def get_json(self, url):
        self.calls.append(("GET", url, None))
        if self.error is not None:
            raise self.error
        return self.response

    async def post_json(self, url, payload):
        self.calls.append(("POST", url, payload))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def body():
    return Element("body")


@pytest.fixture
def http_client():
    return FakeHttpClient()
