from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from mcp.server.fastmcp import FastMCP

from cloud_alm_mcp.api import ApiClients, build_clients
from cloud_alm_mcp.core.config import Config, resolve_config
from cloud_alm_mcp.core.errors import ConfigError
from cloud_alm_mcp.core.logging import default_trace_path, setup_logging
from cloud_alm_mcp.core.observability import log_event
from cloud_alm_mcp.core.registry import register_discovered_tools

SERVER_NAME = "sap-cloud-alm-mcp"

log = logging.getLogger("cloud_alm_mcp.server")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cloud-alm-mcp", description="SAP Cloud ALM MCP server (stdio)"
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to a JSON config file (defaults to $CALM_CONFIG or ./config.json)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Verbose logging plus a trace file"
    )
    return parser.parse_args(argv)


def create_app(clients: ApiClients) -> tuple[FastMCP, List[str]]:
    app = FastMCP(SERVER_NAME)
    names = register_discovered_tools(app, lambda: clients)
    return app, names


async def serve(config: Config) -> None:
    clients = build_clients(config)
    try:
        app, names = create_app(clients)
        log_event("server_start", mode=config.describe().get("mode"))
        log.info("Serving %d tools over stdio", len(names))
        await app.run_stdio_async()
    finally:
        await clients.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    trace_file = default_trace_path() if args.debug else None
    trace_path = setup_logging(
        "DEBUG" if args.debug else "INFO", trace_file=trace_file
    )
    if trace_path is not None:
        log.info("Debug trace written to %s", trace_path)

    try:
        config = resolve_config(args.config)
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    if args.debug and not config.debug:
        config = config.model_copy(update={"debug": True})
    log.info("Configuration loaded", extra=config.describe())

    asyncio.run(serve(config))
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
