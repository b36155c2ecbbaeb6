"""
EpicLeaderboard HTTP Client.

Provides score retrieval, score submission and username checks against the
EpicLeaderboard web service.
"""

from .http_client import (
    LeaderboardClient,
    LeaderboardError,
    LeaderboardSubmitError,
    LeaderboardTransportError,
    get_client,
    set_client,
)

__all__ = [
    "LeaderboardClient",
    "LeaderboardError",
    "LeaderboardSubmitError",
    "LeaderboardTransportError",
    "get_client",
    "set_client",
]
