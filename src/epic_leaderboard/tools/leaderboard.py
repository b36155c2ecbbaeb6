"""
Leaderboard tools.

These tools call the EpicLeaderboard web service for the game configured via
EPIC_LEADERBOARD_GAME_ID / EPIC_LEADERBOARD_GAME_KEY.

Keep parameter annotations in English; they are shown to the MCP client.
"""

from __future__ import annotations

from typing import Annotated, Literal

from ..client import LeaderboardError, get_client
from ..config import get_config
from ..models import Leaderboard, Timeframe

TimeframeType = Literal["all_time", "year", "month", "week", "day"]


def _api_error(tool: str, e: Exception) -> dict:
    """
    Build a structured error payload for a failed leaderboard call.

    Args:
        tool: Tool name.
        e: Exception.

    Returns:
        A dict with ok/error/detail/hint.
    """
    return {
        "ok": False,
        "error": f"EpicLeaderboard API call failed ({tool})",
        "detail": str(e),
        "hint": "Check network access and that EPIC_LEADERBOARD_URL points at the leaderboard service.",
    }


def _missing_game(tool: str, need_key: bool = False) -> dict | None:
    config = get_config()
    if not config.has_game():
        return {
            "ok": False,
            "error": f"No game configured ({tool})",
            "detail": "EPIC_LEADERBOARD_GAME_ID is empty.",
            "hint": "Set EPIC_LEADERBOARD_GAME_ID or pass --game-id.",
        }
    if need_key and not config.game_key:
        return {
            "ok": False,
            "error": f"No game key configured ({tool})",
            "detail": "EPIC_LEADERBOARD_GAME_KEY is empty.",
            "hint": "Set EPIC_LEADERBOARD_GAME_KEY or pass --game-key.",
        }
    return None


async def get_leaderboard_entries(
    primary_id: Annotated[str, "Leaderboard ID"],
    secondary_id: Annotated[str, "Board ID inside the leaderboard (may be empty)"] = "",
    username: Annotated[str, "Player whose own row is returned and centered on"] = "",
    timeframe: Annotated[TimeframeType, "Time window: all_time | year | month | week | day"] = "all_time",
    around_player: Annotated[bool, "Center the result window on the player's rank"] = True,
    local: Annotated[bool, "Restrict results to the player's local scope"] = False,
) -> dict:
    """
    Get leaderboard entries plus the requesting player's own entry.

    Returns:
        Dictionary containing:
        - entries: Ranked entries (rank, username, score, country, metadata)
        - player_entry: The player's own entry (zero-valued if absent)
        - count: Number of entries
    """
    missing = _missing_game("get_leaderboard_entries")
    if missing:
        return missing

    try:
        response = await get_client().get_entries(
            get_config().game,
            Leaderboard(primary_id=primary_id, secondary_id=secondary_id),
            username,
            timeframe=Timeframe.parse(timeframe),
            around_player=around_player,
            local=local,
        )
    except LeaderboardError as e:
        return _api_error("get_leaderboard_entries", e)

    return {
        "ok": True,
        **response.to_dict(),
        "count": len(response.entries),
    }


async def submit_leaderboard_entry(
    primary_id: Annotated[str, "Leaderboard ID"],
    username: Annotated[str, "Player name"],
    score: Annotated[float, "Score value"],
    secondary_id: Annotated[str, "Board ID inside the leaderboard (may be empty)"] = "",
    metadata: Annotated[dict[str, str] | None, "Optional string key/value metadata"] = None,
) -> dict:
    """
    Submit a score to a leaderboard.

    Returns:
        Dictionary containing ok=True on success, or a structured error.
    """
    missing = _missing_game("submit_leaderboard_entry", need_key=True)
    if missing:
        return missing

    try:
        await get_client().submit_entry(
            get_config().game,
            Leaderboard(primary_id=primary_id, secondary_id=secondary_id),
            username,
            score,
            metadata=metadata,
        )
    except LeaderboardError as e:
        return _api_error("submit_leaderboard_entry", e)

    return {"ok": True, "username": username, "score": score}


async def is_username_available(
    username: Annotated[str, "Candidate username"],
) -> dict:
    """
    Check whether a username is available.

    Returns:
        Dictionary containing:
        - result: available | invalid | profanity | taken
        - available: True only for "available"
    """
    missing = _missing_game("is_username_available")
    if missing:
        return missing

    try:
        result = await get_client().is_username_available(get_config().game, username)
    except LeaderboardError as e:
        return _api_error("is_username_available", e)

    return {
        "ok": True,
        "username": username,
        "result": result.name.lower(),
        "available": result.name == "AVAILABLE",
    }
