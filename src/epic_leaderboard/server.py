"""
MCP Server entry point - EpicLeaderboard.

Environment variables:
- EPIC_LEADERBOARD_URL: Leaderboard service base URL
- EPIC_LEADERBOARD_GAME_ID: Game ID used by all tools
- EPIC_LEADERBOARD_GAME_KEY: Game key (required for score submission)
- EPIC_LEADERBOARD_TIMEOUT: Request timeout in seconds (default: 30)
- EPIC_LEADERBOARD_LOG_LEVEL: Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import os
import sys

from fastmcp import FastMCP

from . import __version__
from .config import get_config, reset_config
from .logging_utils import setup_logging
from .tools import leaderboard

# Initialize MCP server
mcp = FastMCP(
    name="EpicLeaderboard",
    version=__version__,
)


def _log(message: str) -> None:
    # stdout carries the stdio transport
    print(f"[Epic Leaderboard] {message}", file=sys.stderr)


def register_tools():
    """Register MCP tools."""
    config = get_config()

    if not config.has_game():
        _log("Warning: EPIC_LEADERBOARD_GAME_ID is not configured.")
        _log("  Tools will return a configuration error until a game ID is set.")

    mcp.tool(description="Get leaderboard entries and the player's own entry")(
        leaderboard.get_leaderboard_entries
    )
    mcp.tool(description="Submit a score (with optional string metadata) to a leaderboard")(
        leaderboard.submit_leaderboard_entry
    )
    mcp.tool(description="Check whether a username is available")(
        leaderboard.is_username_available
    )

    _log("Registered 3 tools.")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epic-leaderboard",
        description="EpicLeaderboard MCP Server",
    )

    parser.add_argument(
        "--server-url",
        help="Leaderboard service base URL (default: https://epicleaderboard.com)",
        default=None,
    )
    parser.add_argument(
        "--game-id",
        help="Game ID",
        default=None,
    )
    parser.add_argument(
        "--game-key",
        help="Game key (required for score submission)",
        default=None,
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 30)",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: INFO)",
        default=None,
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print effective config and exit",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--mcp-host",
        default="127.0.0.1",
        help="Host for http/sse transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--mcp-port",
        type=int,
        default=8000,
        help="Port for http/sse transport (default: 8000)",
    )
    parser.add_argument(
        "--mcp-path",
        default="/mcp",
        help="Path prefix for http transport (default: /mcp)",
    )

    return parser


def _apply_cli_overrides(args: argparse.Namespace) -> None:
    """Apply CLI overrides to env vars (single-run convenience)."""
    if args.server_url:
        os.environ["EPIC_LEADERBOARD_URL"] = args.server_url
    if args.game_id:
        os.environ["EPIC_LEADERBOARD_GAME_ID"] = args.game_id
    if args.game_key:
        os.environ["EPIC_LEADERBOARD_GAME_KEY"] = args.game_key
    if args.timeout is not None:
        os.environ["EPIC_LEADERBOARD_TIMEOUT"] = str(args.timeout)
    if args.log_level:
        os.environ["EPIC_LEADERBOARD_LOG_LEVEL"] = args.log_level
    reset_config()


def main(argv: list[str] | None = None):
    """Run the MCP server."""
    parser = _build_arg_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    _apply_cli_overrides(args)

    cfg = get_config()
    setup_logging(cfg.log_level)

    if args.print_config:
        print("[Epic Leaderboard] Effective config:")
        print(f"  EPIC_LEADERBOARD_URL: {cfg.server_url}")
        print(f"  EPIC_LEADERBOARD_GAME_ID: {cfg.game_id or '(not set)'}")
        print(f"  EPIC_LEADERBOARD_GAME_KEY: {'(set)' if cfg.game_key else '(not set)'}")
        print(f"  EPIC_LEADERBOARD_TIMEOUT: {cfg.timeout}")
        print(f"  User-Agent: {cfg.user_agent}")
        print(f"  Log level: {cfg.log_level}")
        return

    register_tools()

    if args.transport == "stdio":
        mcp.run()
    elif args.transport == "http":
        mcp.run(transport="http", host=args.mcp_host, port=args.mcp_port, path=args.mcp_path)
    else:
        mcp.run(transport="sse", host=args.mcp_host, port=args.mcp_port)


if __name__ == "__main__":
    main()
