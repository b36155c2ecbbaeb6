"""
Leaderboard data model and response mapping.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .codec import deserialize_metadata, json_value_to_text

logger = logging.getLogger(__name__)


class Timeframe(IntEnum):
    """Time window of a leaderboard query (wire code = value)."""

    ALL_TIME = 0
    YEAR = 1
    MONTH = 2
    WEEK = 3
    DAY = 4

    @classmethod
    def parse(cls, value: "Timeframe | int | str") -> "Timeframe":
        """Accept an enum member, a wire code, or a name like ``"all_time"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper().replace(" ", "_").replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown timeframe: {value!r}") from None


class UsernameAvailability(IntEnum):
    """Result of a username availability check."""

    AVAILABLE = 0
    INVALID = 1
    PROFANITY = 2
    TAKEN = 3

    @classmethod
    def from_code(cls, code: str) -> "UsernameAvailability":
        """Map the server's response code; unknown codes are INVALID."""
        return _AVAILABILITY_CODES.get(code.strip(), cls.INVALID)


# "1" is deliberately absent: the server's own invalid code takes the default path.
_AVAILABILITY_CODES = {
    "0": UsernameAvailability.AVAILABLE,
    "2": UsernameAvailability.PROFANITY,
    "3": UsernameAvailability.TAKEN,
}


@dataclass
class Game:
    """Game identity. The key is only sent when submitting scores."""
    game_id: str
    game_key: str = ""


@dataclass
class Leaderboard:
    """Two-level leaderboard identity (leaderboard + board)."""
    primary_id: str
    secondary_id: str = ""


@dataclass
class LeaderboardEntry:
    """A single leaderboard row."""
    rank: int = 0
    username: str = ""
    score: str = ""
    country: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    # Raw JSON metadata as received, decoded into ``metadata``
    meta: str = field(default="", repr=False)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LeaderboardEntry":
        """Build an entry from a decoded JSON object.

        Keys match case-insensitively. Values that cannot be converted leave
        the field at its default.
        """
        fields = {str(key).lower(): value for key, value in data.items()}
        entry = cls(
            rank=_to_int(fields.get("rank")),
            username=json_value_to_text(fields.get("username")),
            score=json_value_to_text(fields.get("score")),
            country=json_value_to_text(fields.get("country")),
            meta=json_value_to_text(fields.get("meta")),
        )
        entry.metadata = deserialize_metadata(entry.meta)
        return entry

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary (without the raw meta)."""
        return {
            "rank": self.rank,
            "username": self.username,
            "score": self.score,
            "country": self.country,
            "metadata": dict(self.metadata),
        }


@dataclass
class GetEntriesResponse:
    """Entries in server order plus the requesting player's own row."""
    entries: list[LeaderboardEntry] = field(default_factory=list)
    player_entry: LeaderboardEntry = field(default_factory=LeaderboardEntry)

    @classmethod
    def from_json(cls, body: str) -> "GetEntriesResponse":
        """Parse a getScores response body.

        Missing or malformed parts produce empty/default values instead of errors.
        """
        response = cls()

        try:
            parsed = json.loads(body)
        except (TypeError, ValueError, RecursionError):
            logger.debug("getScores returned a non-JSON body")
            return response

        if not isinstance(parsed, dict):
            logger.debug("getScores returned non-object JSON")
            return response

        scores = parsed.get("scores")
        if isinstance(scores, list):
            response.entries = [
                LeaderboardEntry.from_json(item) for item in scores if isinstance(item, dict)
            ]

        player_score = parsed.get("playerscore")
        if isinstance(player_score, dict):
            response.player_entry = LeaderboardEntry.from_json(player_score)

        return response

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "player_entry": self.player_entry.to_dict(),
        }


def _to_int(value: Any) -> int:
    """Convert a JSON number or numeric string to int (0 if not convertible)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            return int(float(value.strip()))
    except (ValueError, OverflowError):
        return 0
    return 0
