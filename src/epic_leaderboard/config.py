"""
Configuration management for the EpicLeaderboard client.

Configuration via environment variables:

Server:
- EPIC_LEADERBOARD_URL: Base URL of the leaderboard service (default: https://epicleaderboard.com)
- EPIC_LEADERBOARD_TIMEOUT: Request timeout in seconds (default: 30)
- EPIC_LEADERBOARD_USER_AGENT: User-Agent header sent on every request

Game identity (used by the MCP tools):
- EPIC_LEADERBOARD_GAME_ID: Game ID
- EPIC_LEADERBOARD_GAME_KEY: Game key (only needed for score submission)

Logging:
- EPIC_LEADERBOARD_LOG_LEVEL: Log level name (default: INFO)
"""

import os
from dataclasses import dataclass, field

from .models import Game

DEFAULT_SERVER_URL = "https://epicleaderboard.com"
DEFAULT_USER_AGENT = "X-EpicLeaderboard UE5"
DEFAULT_TIMEOUT = 30.0


def _parse_float(value: str | None, default: float) -> float:
    """Parse a positive float from an environment variable."""
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass
class Config:
    """Client configuration loaded from environment variables."""

    server_url: str = field(
        default_factory=lambda: os.getenv("EPIC_LEADERBOARD_URL", DEFAULT_SERVER_URL)
    )
    timeout: float = field(
        default_factory=lambda: _parse_float(os.getenv("EPIC_LEADERBOARD_TIMEOUT"), DEFAULT_TIMEOUT)
    )
    user_agent: str = field(
        default_factory=lambda: os.getenv("EPIC_LEADERBOARD_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # Game identity
    game_id: str = field(default_factory=lambda: os.getenv("EPIC_LEADERBOARD_GAME_ID", ""))
    game_key: str = field(default_factory=lambda: os.getenv("EPIC_LEADERBOARD_GAME_KEY", ""))

    log_level: str = field(
        default_factory=lambda: os.getenv("EPIC_LEADERBOARD_LOG_LEVEL", "INFO").upper()
    )

    def __post_init__(self):
        self.server_url = self.server_url.rstrip("/")

    @property
    def game(self) -> Game:
        """Get the configured game identity."""
        return Game(game_id=self.game_id, game_key=self.game_key)

    def has_game(self) -> bool:
        """Check if a game ID is configured."""
        return self.game_id.strip() != ""


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    global _config
    _config = None
