"""Command line entry points for wolsearch."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from wolsearch import __logo__, __version__
from wolsearch.config.loader import load_config, save_config
from wolsearch.config.schema import LOG_LEVELS, TIMEOUT_MS_RANGE, Config, WolConfig
from wolsearch.tools.wol import EngineInitError, EngineSession, WolSearchService
from wolsearch.tools.wol.installer import install_chromium
from wolsearch.tools.wol.models import DEFAULT_RESULTS, clamp_limit
from wolsearch.tools.wol.tool import WolSearchTool


def _timeout_ms(value: str) -> int:
    try:
        timeout_ms = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    low, high = TIMEOUT_MS_RANGE
    if not low <= timeout_ms <= high:
        raise argparse.ArgumentTypeError(f"must be between {low} and {high}, got {timeout_ms}")
    return timeout_ms


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wolsearch",
        description="Search the Watchtower Online Library from an AI assistant.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument(
        "--timeout-ms", type=_timeout_ms, default=None, help="Navigation timeout (1000-300000)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override logging level",
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Run the MCP server on stdio (default)")

    search = sub.add_parser("search", help="Run one search and print the results")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=DEFAULT_RESULTS)
    search.add_argument("--json", action="store_true", help="Print the raw response as JSON")

    sub.add_parser("install-browser", help="Download the Chromium build used for searches")
    sub.add_parser("init-config", help="Write a default config file")
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    config = load_config(Path(args.config).expanduser() if args.config else None)
    overrides = {}
    if args.headed:
        overrides["headless"] = False
    if args.timeout_ms is not None:
        overrides["timeout_ms"] = args.timeout_ms
    if overrides:
        config.wol = WolConfig.model_validate({**config.wol.model_dump(), **overrides})
    if args.log_level:
        config.logging.level = args.log_level
    return config


def configure_logging(level: str) -> None:
    # stdout carries the MCP stream
    logger.remove()
    logger.add(sys.stderr, level=level)


async def _search_once(config: Config, query: str, limit: int, as_json: bool) -> str:
    service = WolSearchService(EngineSession(config.wol), config.wol)
    async with service:
        if not as_json:
            return await WolSearchTool(service).execute(message=query, limit=limit)
        request = service.new_request(query, clamp_limit(limit))
        response = await service.search(request)
        return json.dumps(response.to_dict(), ensure_ascii=False, indent=2)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = resolve_config(args)
    configure_logging(config.logging.level)
    command = args.command or "serve"

    if command == "init-config":
        path = save_config(Config(), Path(args.config).expanduser() if args.config else None)
        print(f"{__logo__} Wrote default config to {path}")
        return 0

    if command == "install-browser":
        ok, details = asyncio.run(install_chromium())
        print(details)
        return 0 if ok else 1

    try:
        if command == "search":
            if not args.query.strip():
                print("❌ Please provide a search term or topic.")
                return 2
            print(asyncio.run(_search_once(config, args.query, args.limit, args.json)))
            return 0

        from wolsearch.server import run_stdio

        asyncio.run(run_stdio(config))
        return 0
    except EngineInitError as e:
        logger.error("{}", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
