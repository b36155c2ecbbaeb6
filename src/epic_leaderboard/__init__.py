"""
EpicLeaderboard - async Python client for the EpicLeaderboard web service.

Provides:
- Score retrieval (ranked entries + the player's own entry)
- Score submission with string key/value metadata
- Username availability checks
- One-shot async actions with success/error callbacks
- An MCP server exposing the above as tools
"""

__version__ = "0.1.0"

from .actions import (
    ActionState,
    GetLeaderboardEntries,
    IsUsernameAvailable,
    LeaderboardAction,
    SubmitLeaderboardEntry,
)
from .client import (
    LeaderboardClient,
    LeaderboardError,
    LeaderboardSubmitError,
    LeaderboardTransportError,
)
from .models import (
    Game,
    GetEntriesResponse,
    Leaderboard,
    LeaderboardEntry,
    Timeframe,
    UsernameAvailability,
)

__all__ = [
    "ActionState",
    "Game",
    "GetEntriesResponse",
    "GetLeaderboardEntries",
    "IsUsernameAvailable",
    "Leaderboard",
    "LeaderboardAction",
    "LeaderboardClient",
    "LeaderboardEntry",
    "LeaderboardError",
    "LeaderboardSubmitError",
    "LeaderboardTransportError",
    "SubmitLeaderboardEntry",
    "Timeframe",
    "UsernameAvailability",
]
