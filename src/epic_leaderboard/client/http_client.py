"""
HTTP Client for the EpicLeaderboard API.
"""

import logging
from collections.abc import Mapping

import httpx

from ..codec import construct_params, format_score, serialize_metadata
from ..config import get_config
from ..models import (
    Game,
    GetEntriesResponse,
    Leaderboard,
    Timeframe,
    UsernameAvailability,
)

logger = logging.getLogger(__name__)

GET_SCORES_PATH = "/api/getScores"
SUBMIT_SCORE_PATH = "/api/submitScore"
IS_USERNAME_AVAILABLE_PATH = "/api/isUsernameAvailable_v2"


class LeaderboardClient:
    """HTTP client for communicating with the EpicLeaderboard service."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the leaderboard service (default from config)
            timeout: Request timeout in seconds (default from config)
            user_agent: User-Agent header value (default from config)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        config = get_config()
        self.base_url = (base_url or config.server_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.timeout
        self.user_agent = user_agent or config.user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "LeaderboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }

    def _url(self, path: str, params: Mapping[str, str] | None = None) -> str:
        """Build an absolute URL with an encoded query string."""
        url = self.base_url + path
        if params:
            url += "?" + construct_params(params)
        return url

    async def _send(self, method: str, url: str, content: str | None = None) -> httpx.Response:
        """Send a request; transport failures become LeaderboardTransportError."""
        client = await self._get_client()
        logger.debug("%s %s", method, url)

        try:
            return await client.request(method, url, content=content)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise LeaderboardTransportError(f"Request failed: {e}") from e

    async def get_entries(
        self,
        game: Game,
        leaderboard: Leaderboard,
        username: str,
        timeframe: Timeframe = Timeframe.ALL_TIME,
        around_player: bool = True,
        local: bool = False,
    ) -> GetEntriesResponse:
        """Get leaderboard entries.

        Args:
            game: Game identity (only the ID is sent)
            leaderboard: Leaderboard identity
            username: Requesting player, used for the player entry and centering
            timeframe: Time window of the scores
            around_player: Center the result window on the player's rank
            local: Restrict the results to the player's local scope

        Returns:
            Parsed response. The status code is not inspected and an unparsable
            body yields an empty response.

        Raises:
            LeaderboardTransportError: If the request could not be completed
        """
        url = self._url(GET_SCORES_PATH, {
            "gameID": game.game_id,
            "primaryID": leaderboard.primary_id,
            "secondaryID": leaderboard.secondary_id,
            "username": username,
            "timeframe": str(int(Timeframe.parse(timeframe))),
            "around": "1" if around_player else "0",
            "local": "1" if local else "0",
        })

        response = await self._send("GET", url)
        return GetEntriesResponse.from_json(response.text)

    async def submit_entry(
        self,
        game: Game,
        leaderboard: Leaderboard,
        username: str,
        score: float,
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        """Submit a score.

        Args:
            game: Game identity (ID and key are both sent)
            leaderboard: Leaderboard identity
            username: Player name
            score: Score value, sent with full double precision
            metadata: Optional string map stored alongside the score

        Raises:
            LeaderboardTransportError: If the request could not be completed
            LeaderboardSubmitError: If the server answered with a non-200 status
        """
        body = construct_params({
            "gameID": game.game_id,
            "gameKey": game.game_key,
            "primaryID": leaderboard.primary_id,
            "secondaryID": leaderboard.secondary_id,
            "username": username,
            "score": format_score(score),
            "meta": serialize_metadata(metadata),
        })

        response = await self._send("POST", self._url(SUBMIT_SCORE_PATH), content=body)
        if response.status_code != 200:
            logger.warning("Score submission rejected with HTTP %s", response.status_code)
            raise LeaderboardSubmitError(response.status_code, response.text)

    async def is_username_available(self, game: Game, username: str) -> UsernameAvailability:
        """Check whether a username can be used.

        Args:
            game: Game identity (only the ID is sent)
            username: Candidate username

        Returns:
            Availability decoded from the response code

        Raises:
            LeaderboardTransportError: If the request could not be completed
        """
        url = self._url(IS_USERNAME_AVAILABLE_PATH, {
            "gameID": game.game_id,
            "username": username,
        })

        response = await self._send("GET", url)
        return UsernameAvailability.from_code(response.text)


class LeaderboardError(Exception):
    """Error from the EpicLeaderboard API."""

    pass


class LeaderboardTransportError(LeaderboardError):
    """The request could not be completed (network, DNS, timeout)."""

    pass


class LeaderboardSubmitError(LeaderboardError):
    """The server did not accept a score submission."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"HTTP {status_code}: {body}" if body else f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


# Global client instance
_client: LeaderboardClient | None = None


def get_client() -> LeaderboardClient:
    """Get the global client instance."""
    global _client
    if _client is None:
        _client = LeaderboardClient()
    return _client


def set_client(client: LeaderboardClient | None) -> None:
    """Set the global client instance."""
    global _client
    _client = client
