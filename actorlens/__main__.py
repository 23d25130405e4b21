"""
actorlens CLI entry point.

Looks up characters on the tabletop host from the command line, or runs
the MCP server that exposes the same lookups as tools.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from actorlens import __version__
from actorlens.bridge.mcp_client import MCPBridgeClient
from actorlens.config.logging import get_logger, setup_logging
from actorlens.config.settings import Settings, load_settings
from actorlens.tools.characters import CharacterTools


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="actorlens",
        description="Character summaries from a virtual tabletop (WFRP 4e and D&D 5e)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"actorlens {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    get_parser = subparsers.add_parser(
        "get",
        help="Show the summary of one character",
    )
    get_parser.add_argument(
        "identifier",
        help="Character name or ID",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List characters",
    )
    list_parser.add_argument(
        "--type",
        default=None,
        help='Only list actors of this type, e.g. "character" or "npc"',
    )

    subparsers.add_parser(
        "serve",
        help="Run the MCP server on stdio",
    )

    return parser


def build_tools(settings: Settings) -> CharacterTools:
    """Character tools wired to the configured bridge."""
    return CharacterTools(MCPBridgeClient.from_settings(settings.bridge))


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== actorlens Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBridge Server: {settings.bridge.server_path or 'Not set'}")
    logger.info(f"Bridge Command: {settings.bridge.command}")
    logger.info(f"Bridge Args: {' '.join(settings.bridge.args) or 'None'}")
    logger.info(f"Bridge Namespace: {settings.bridge.namespace}")

    return 0


async def cmd_get(args, settings: Settings) -> int:
    """Print the summary of one character as JSON."""
    logger = get_logger(__name__)

    try:
        async with build_tools(settings) as tools:
            result = await tools.lookup_character(args.identifier)
    except Exception as e:
        logger.error(f"Bridge unavailable: {e}")
        return 1

    if not result.ok:
        logger.error(f"{result.kind.capitalize()} error: {result.message}")
        return 1

    print(json.dumps(result.value.model_dump(by_alias=True), indent=2))
    return 0


async def cmd_list(args, settings: Settings) -> int:
    """Print the character listing as JSON."""
    logger = get_logger(__name__)

    try:
        async with build_tools(settings) as tools:
            result = await tools.list_characters(args.type)
    except Exception as e:
        logger.error(f"Bridge unavailable: {e}")
        return 1

    if not result.ok:
        logger.error(f"{result.kind.capitalize()} error: {result.message}")
        return 1

    print(json.dumps(result.value.model_dump(by_alias=True), indent=2))
    return 0


async def cmd_serve(settings: Settings) -> int:
    """Run the MCP server until the client disconnects."""
    from actorlens.server import serve

    logger = get_logger(__name__)

    try:
        await serve(build_tools(settings))
    except Exception as e:
        logger.error(f"Server stopped: {e}", exc_info=True)
        return 1
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    # stdout carries JSON output and the MCP stream, so logs go to stderr
    setup_logging(settings, stream=sys.stderr)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "get":
        return asyncio.run(cmd_get(args, settings))
    elif args.command == "list":
        return asyncio.run(cmd_list(args, settings))
    elif args.command == "serve":
        return asyncio.run(cmd_serve(settings))
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
