"""Pytest configuration and fixtures."""

import copy

import pytest

from config import GraylogConfig


class FakeTransport:
    """
    Stand-in for GraylogTransport.

    Answers are queued per (method, path). An answer that is an exception
    instance is raised instead of returned. Every call is recorded.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def respond(self, method, path, *answers):
        self.responses.setdefault((method, path), []).extend(answers)

    def calls_to(self, method, path=None):
        return [
            c
            for c in self.calls
            if c["method"] == method and (path is None or c["path"] == path)
        ]

    async def call(self, method, path, body=None, decode=True):
        self.calls.append(
            {
                "method": method,
                "path": path,
                "body": copy.deepcopy(body),
                "decode": decode,
            }
        )
        queue = self.responses.get((method, path))
        if not queue:
            raise AssertionError(f"unexpected call: {method} {path}")
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, Exception):
            raise answer
        return copy.deepcopy(answer)


@pytest.fixture
def graylog_config():
    """Connection settings for a test server."""
    return GraylogConfig(
        base_url="https://graylog.example.com",
        username="admin",
        password="secret",
    )


@pytest.fixture
def fake_transport():
    return FakeTransport()
