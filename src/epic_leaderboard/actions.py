"""
Async leaderboard actions.

Each action is a one-shot request/response exchange that reports its outcome
through callbacks, mirroring a Blueprint async action node:

    action = GetLeaderboardEntries(game, leaderboard, "player1")
    action.on_success.append(show_entries)
    action.on_error.append(show_error)
    task = action.activate()

State machine: IDLE -> REQUESTING -> SUCCEEDED | FAILED. Exactly one callback
group runs. ``activate()`` returns the driving task, which can be awaited for
the success value (None on failure). The action holds that task until the
outcome has been dispatched; keep a reference to the action or the task while
the request is in flight.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from .client import LeaderboardClient, LeaderboardError, get_client
from .models import Game, Leaderboard, Timeframe

logger = logging.getLogger(__name__)


class ActionState(str, Enum):
    """Lifecycle of a leaderboard action."""

    IDLE = "idle"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LeaderboardAction:
    """Base class for one-shot leaderboard requests."""

    def __init__(self, client: LeaderboardClient | None = None):
        self.on_success: list[Callable[..., Any]] = []
        self.on_error: list[Callable[..., Any]] = []
        self.state = ActionState.IDLE
        self.error: Exception | None = None
        self._client = client
        self._task: asyncio.Task | None = None

    @property
    def is_done(self) -> bool:
        return self.state in (ActionState.SUCCEEDED, ActionState.FAILED)

    def activate(self) -> asyncio.Task:
        """Start the request. Must be called from a running event loop.

        Raises:
            RuntimeError: If the action was already activated
        """
        if self.state is not ActionState.IDLE:
            raise RuntimeError(f"{type(self).__name__} already activated (state: {self.state.value})")

        loop = asyncio.get_running_loop()
        self.state = ActionState.REQUESTING
        self._task = loop.create_task(self._run())
        return self._task

    async def _execute(self, client: LeaderboardClient) -> tuple:
        """Perform the request and return the success callback arguments."""
        raise NotImplementedError

    async def _run(self) -> Any:
        try:
            try:
                args = await self._execute(self._client or get_client())
            except LeaderboardError as e:
                logger.info("%s failed: %s", type(self).__name__, e)
                await self._fail(e)
                return None
            except Exception as e:
                logger.exception("%s failed unexpectedly", type(self).__name__)
                await self._fail(e)
                return None

            self.state = ActionState.SUCCEEDED
            await _broadcast(self.on_success, *args)
            return args[0] if args else True
        finally:
            self._task = None

    async def _fail(self, error: Exception) -> None:
        self.state = ActionState.FAILED
        self.error = error
        await _broadcast(self.on_error)


class GetLeaderboardEntries(LeaderboardAction):
    """Fetch entries; success callbacks receive a GetEntriesResponse."""

    def __init__(
        self,
        game: Game,
        leaderboard: Leaderboard,
        username: str,
        timeframe: Timeframe = Timeframe.ALL_TIME,
        around_player: bool = True,
        local: bool = False,
        client: LeaderboardClient | None = None,
    ):
        super().__init__(client)
        self.game = game
        self.leaderboard = leaderboard
        self.username = username
        self.timeframe = timeframe
        self.around_player = around_player
        self.local = local

    async def _execute(self, client: LeaderboardClient) -> tuple:
        response = await client.get_entries(
            self.game,
            self.leaderboard,
            self.username,
            timeframe=self.timeframe,
            around_player=self.around_player,
            local=self.local,
        )
        return (response,)


class SubmitLeaderboardEntry(LeaderboardAction):
    """Submit a score; success callbacks receive no arguments."""

    def __init__(
        self,
        game: Game,
        leaderboard: Leaderboard,
        username: str,
        score: float,
        metadata: Mapping[str, str] | None = None,
        client: LeaderboardClient | None = None,
    ):
        super().__init__(client)
        self.game = game
        self.leaderboard = leaderboard
        self.username = username
        self.score = score
        self.metadata = dict(metadata or {})

    async def _execute(self, client: LeaderboardClient) -> tuple:
        await client.submit_entry(
            self.game,
            self.leaderboard,
            self.username,
            self.score,
            metadata=self.metadata,
        )
        return ()


class IsUsernameAvailable(LeaderboardAction):
    """Check a username; success callbacks receive a UsernameAvailability."""

    def __init__(self, game: Game, username: str, client: LeaderboardClient | None = None):
        super().__init__(client)
        self.game = game
        self.username = username

    async def _execute(self, client: LeaderboardClient) -> tuple:
        result = await client.is_username_available(self.game, self.username)
        return (result,)


async def _broadcast(callbacks: list[Callable[..., Any]], *args: Any) -> None:
    """Invoke callbacks in registration order, awaiting async ones."""
    for callback in list(callbacks):
        result = callback(*args)
        if inspect.isawaitable(result):
            await result
