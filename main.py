# =============================================================================
# main.py  —  Entry Point for the Leave & Course Desk MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                          # stdio (default)
#   uv run python main.py --transport http --port 8000
#
# Every flag falls back to its environment variable (MCP_TRANSPORT,
# MCP_HOST, MCP_PORT), which in turn may come from a .env file.
# =============================================================================

import argparse
import logging
from typing import Optional

from dotenv import load_dotenv

# Load .env BEFORE importing the server: its module-level logging setup
# reads LOG_LEVEL.
load_dotenv()

from core import config
from tools.mcp_server import mcp

logger = logging.getLogger("leave-course-desk")

TRANSPORTS = ("stdio", "http", "sse")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Leave & course desk MCP server")
    parser.add_argument("--transport", choices=TRANSPORTS, default=config.get_transport())
    parser.add_argument("--host", default=config.get_host())
    parser.add_argument("--port", type=int, default=config.get_port())
    return parser.parse_args(argv)


def run(argv: Optional[list[str]] = None) -> None:
    """Start the MCP server with the requested transport."""
    args = parse_args(argv)
    config.log_environment_config(logger)

    if args.transport == "stdio":
        logger.info("Starting MCP server on stdio")
        mcp.run()
    else:
        logger.info("Starting MCP server on %s://%s:%s", args.transport, args.host, args.port)
        mcp.run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    run()
