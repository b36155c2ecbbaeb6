"""
MCP Tools for the EpicLeaderboard client.

Modules:
- leaderboard: Score retrieval, submission and username checks
"""

from . import leaderboard

__all__ = ["leaderboard"]
