"""Tests for the async leaderboard actions."""

import httpx
import pytest

from epic_leaderboard.actions import (
    ActionState,
    GetLeaderboardEntries,
    IsUsernameAvailable,
    SubmitLeaderboardEntry,
)
from epic_leaderboard.client import LeaderboardSubmitError, LeaderboardTransportError
from epic_leaderboard.models import Game, GetEntriesResponse, Leaderboard, UsernameAvailability

GAME = Game(game_id="game-1", game_key="key")
BOARD = Leaderboard(primary_id="main", secondary_id="")


class Outcome:
    """Collects callback invocations."""

    def __init__(self):
        self.successes: list[tuple] = []
        self.errors = 0

    def success(self, *args):
        self.successes.append(args)

    def error(self):
        self.errors += 1


def _bind(action) -> Outcome:
    outcome = Outcome()
    action.on_success.append(outcome.success)
    action.on_error.append(outcome.error)
    return outcome


class TestGetLeaderboardEntries:
    """Test the get-entries action."""

    @pytest.mark.asyncio
    async def test_success(self, make_client):
        """Success callbacks receive the parsed response."""
        client, _ = make_client(text='{"scores": [{"rank": 1, "username": "a"}]}')
        action = GetLeaderboardEntries(GAME, BOARD, "a", client=client)
        outcome = _bind(action)

        result = await action.activate()

        assert action.state is ActionState.SUCCEEDED
        assert outcome.errors == 0
        assert len(outcome.successes) == 1
        response = outcome.successes[0][0]
        assert isinstance(response, GetEntriesResponse)
        assert response.entries[0].username == "a"
        assert result is response
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_response_is_success(self, make_client):
        """An empty body still reports success."""
        client, _ = make_client(text="")
        action = GetLeaderboardEntries(GAME, BOARD, "a", client=client)
        outcome = _bind(action)

        await action.activate()

        assert outcome.errors == 0
        assert outcome.successes[0][0].entries == []
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_client):
        """Transport failure fires only the error callbacks."""
        client, _ = make_client(error=httpx.ConnectError("refused"))
        action = GetLeaderboardEntries(GAME, BOARD, "a", client=client)
        outcome = _bind(action)

        result = await action.activate()

        assert result is None
        assert action.state is ActionState.FAILED
        assert isinstance(action.error, LeaderboardTransportError)
        assert outcome.successes == []
        assert outcome.errors == 1
        await client.close()


class TestSubmitLeaderboardEntry:
    """Test the submit action."""

    @pytest.mark.asyncio
    async def test_success_fires_once(self, make_client):
        """HTTP 200 fires success and nothing else."""
        client, _ = make_client(status_code=200)
        action = SubmitLeaderboardEntry(GAME, BOARD, "a", 10.5, metadata={"lvl": "2"}, client=client)
        outcome = _bind(action)

        await action.activate()

        assert outcome.successes == [()]
        assert outcome.errors == 0
        assert action.state is ActionState.SUCCEEDED
        await client.close()

    @pytest.mark.asyncio
    async def test_rejected(self, make_client):
        """Non-200 status fires error only."""
        client, _ = make_client(status_code=500)
        action = SubmitLeaderboardEntry(GAME, BOARD, "a", 10.5, client=client)
        outcome = _bind(action)

        await action.activate()

        assert outcome.successes == []
        assert outcome.errors == 1
        assert isinstance(action.error, LeaderboardSubmitError)
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_client):
        """Transport failure fires error only."""
        client, _ = make_client(error=httpx.ConnectError("refused"))
        action = SubmitLeaderboardEntry(GAME, BOARD, "a", 1, client=client)
        outcome = _bind(action)

        await action.activate()

        assert outcome.successes == []
        assert outcome.errors == 1
        await client.close()


class TestIsUsernameAvailable:
    """Test the username check action."""

    @pytest.mark.asyncio
    async def test_async_callback(self, make_client):
        """Async callbacks are awaited."""
        client, _ = make_client(text="3")
        action = IsUsernameAvailable(GAME, "taken-name", client=client)
        received = []

        async def on_success(result):
            received.append(result)

        action.on_success.append(on_success)
        await action.activate()

        assert received == [UsernameAvailability.TAKEN]
        await client.close()


class TestActionLifecycle:
    """Test the one-shot state machine."""

    @pytest.mark.asyncio
    async def test_cannot_activate_twice(self, make_client):
        """A finished action rejects a second activation."""
        client, _ = make_client(text="0")
        action = IsUsernameAvailable(GAME, "n", client=client)

        assert action.state is ActionState.IDLE
        await action.activate()
        assert action.is_done

        with pytest.raises(RuntimeError):
            action.activate()
        await client.close()

    @pytest.mark.asyncio
    async def test_task_released(self, make_client):
        """The action holds its task only while the request is in flight."""
        client, _ = make_client(text="0")
        action = IsUsernameAvailable(GAME, "n", client=client)

        task = action.activate()
        assert action.state is ActionState.REQUESTING
        assert action._task is task
        await task

        assert action._task is None
        await client.close()

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_once(self, make_client):
        """Errors outside the client's own hierarchy still end in FAILED."""
        client, recorder = make_client(text="{}")
        action = GetLeaderboardEntries(GAME, BOARD, "a", timeframe="fortnight", client=client)
        outcome = _bind(action)

        result = await action.activate()

        assert result is None
        assert action.state is ActionState.FAILED
        assert isinstance(action.error, ValueError)
        assert outcome.successes == []
        assert outcome.errors == 1
        assert recorder.requests == []
        assert action._task is None
        await client.close()

    @pytest.mark.asyncio
    async def test_deeply_nested_body_is_success(self, make_client):
        """A pathologically nested body degrades to an empty response."""
        client, _ = make_client(text="[" * 100000)
        action = GetLeaderboardEntries(GAME, BOARD, "a", client=client)
        outcome = _bind(action)

        await action.activate()

        assert action.state is ActionState.SUCCEEDED
        assert outcome.errors == 0
        assert outcome.successes[0][0].entries == []
        await client.close()

    def test_activate_requires_running_loop(self):
        """activate() outside an event loop raises."""
        action = IsUsernameAvailable(GAME, "n")
        with pytest.raises(RuntimeError):
            action.activate()

    @pytest.mark.asyncio
    async def test_uses_global_client(self, make_client):
        """Without an explicit client the global one is used."""
        from epic_leaderboard.client import set_client

        client, recorder = make_client(text="2")
        set_client(client)
        action = IsUsernameAvailable(GAME, "n")

        assert await action.activate() is UsernameAvailability.PROFANITY
        assert len(recorder.requests) == 1
        await client.close()
