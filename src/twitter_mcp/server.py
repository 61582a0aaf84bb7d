import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from social_clients import TwitterClient, TwitterWebClient

from .config import API_KEY_VARS, PASSWORD_VARS, Settings, missing_variables
from .dispatcher import Dispatcher
from .errors import FatalError
from .logging_config import setup_logging
from .mcp import build_server
from .registry import registry
from .session import SessionManager

logger = logging.getLogger("twitter_mcp.server")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Twitter MCP Server")
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Run the MCP server over stdio transport (default for Claude Desktop).",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Run the MCP server over HTTP transport.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP server (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=9000,
        help="Port for HTTP server (default: 9000).",
    )
    return parser


def build_sessions(settings: Settings) -> SessionManager:
    """Wire the configured login tiers: account credentials first, API keys second."""
    primary = None
    if settings.password_credentials is not None:
        credentials = settings.password_credentials
        primary = lambda: TwitterWebClient.connect(credentials)  # noqa: E731
    else:
        logger.info(f"Username/password login not configured (missing {', '.join(missing_variables(PASSWORD_VARS))})")

    fallback = None
    if settings.api_key_credentials is not None:
        keys = settings.api_key_credentials
        fallback = lambda: TwitterClient.connect(keys)  # noqa: E731
    else:
        logger.info(f"API key login not configured (missing {', '.join(missing_variables(API_KEY_VARS))})")

    return SessionManager(primary=primary, fallback=fallback)


async def serve(args: argparse.Namespace, settings: Settings) -> None:
    sessions = build_sessions(settings)
    try:
        session = await sessions.initialize()
    except FatalError as e:
        logger.critical(f"Failed to initialize Twitter session: {e}")
        sys.exit(1)

    logger.info(f"Twitter session ready ({session.tier})")
    mcp = build_server(Dispatcher(registry, sessions))

    if args.http:
        await mcp.run_async(transport="http", host=args.host, port=args.port)
    else:
        # Default to stdio for Claude Desktop compatibility
        await mcp.run_async(transport="stdio")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    load_dotenv()
    settings = Settings.from_env()
    setup_logging(settings.log_dir, settings.log_level)

    asyncio.run(serve(args, settings))


if __name__ == "__main__":
    main()
