"""Shared fixtures."""

import httpx
import pytest

from epic_leaderboard.client import LeaderboardClient, set_client
from epic_leaderboard.config import reset_config


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    """Isolate tests from the environment and global singletons."""
    for name in (
        "EPIC_LEADERBOARD_URL",
        "EPIC_LEADERBOARD_TIMEOUT",
        "EPIC_LEADERBOARD_USER_AGENT",
        "EPIC_LEADERBOARD_GAME_ID",
        "EPIC_LEADERBOARD_GAME_KEY",
        "EPIC_LEADERBOARD_LOG_LEVEL",
    ):
        # setenv first so values written during a test are rolled back
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_config()
    set_client(None)
    yield
    reset_config()
    set_client(None)


class Recorder:
    """Mock transport handler that records requests and replays a response."""

    def __init__(self, status_code: int = 200, text: str = "", error: Exception | None = None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    """Build a LeaderboardClient backed by a Recorder."""

    def _make(status_code: int = 200, text: str = "", error: Exception | None = None):
        recorder = Recorder(status_code=status_code, text=text, error=error)
        client = LeaderboardClient(transport=httpx.MockTransport(recorder))
        return client, recorder

    return _make
