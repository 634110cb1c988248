from __future__ import annotations

"""Issue a single tinyapi call from the command line.

Useful for checking an endpoint (or a mock resource directory) by hand.

Usage (with uv):

    uv run python script/fetch.py https://api.example.com /users --query page=2
    uv run python script/fetch.py https://api.example.com /users --mock-dir mocks
    uv run python script/fetch.py https://api.example.com /users --method POST --data '{"name": "x"}'
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Sequence

from loguru import logger
from rich.console import Console

from tinyapi.client import BaseAPIClient, TinyAPIClient
from tinyapi.config import Settings, get_settings
from tinyapi.endpoint import HTTPMethod, SimpleEndpoint
from tinyapi.errors import TinyAPIError
from tinyapi.mock import MockTinyAPIClient

console = Console()
log = logger.bind(module="script.fetch")


def _parse_pairs(values: Sequence[str] | None, *, option: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values or ():
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"{option} expects KEY=VALUE, got {raw!r}")
        pairs.append((key.strip(), value))
    return pairs


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Issue one HTTP call through tinyapi and print the result.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("base_url", help="Absolute base URL, e.g. https://api.example.com.")
    parser.add_argument("path", nargs="?", default="", help="Request path, e.g. /users/1.")
    parser.add_argument(
        "--method",
        default=HTTPMethod.GET.value,
        choices=[m.value for m in HTTPMethod],
        type=str.upper,
        help="HTTP method.",
    )
    parser.add_argument("--query", action="append", metavar="KEY=VALUE", help="Query parameter (repeatable).")
    parser.add_argument("--header", action="append", metavar="KEY=VALUE", help="Request header (repeatable).")
    parser.add_argument("--data", default=None, help="JSON request body.")
    parser.add_argument(
        "--mock-dir",
        default=None,
        help="Serve responses from this mock resource directory instead of the network.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Mock delay in seconds (defaults to TINYAPI_MOCK_DELAY_SECONDS).",
    )
    parser.add_argument("--raw", action="store_true", help="Print the raw body instead of decoded JSON.")
    return parser


def _configure_logging(settings: Settings) -> None:
    level = (settings.log_level or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)


def _build_client(args: argparse.Namespace, settings: Settings) -> BaseAPIClient:
    if args.mock_dir:
        overrides: dict[str, Any] = {"resource_dir": args.mock_dir}
        if args.delay is not None:
            overrides["delay"] = args.delay
        return MockTinyAPIClient.from_settings(settings, **overrides)
    return TinyAPIClient.from_settings(settings)


def _build_endpoint(args: argparse.Namespace) -> SimpleEndpoint:
    body: bytes | None = None
    if args.data is not None:
        # Reject malformed JSON before any I/O.
        json.loads(args.data)
        body = args.data.encode("utf-8")
    return SimpleEndpoint(
        base_url=args.base_url,
        path=args.path,
        method=HTTPMethod(args.method),
        headers=dict(_parse_pairs(args.header, option="--header")) or None,
        query_items=_parse_pairs(args.query, option="--query"),  # type: ignore[arg-type]
        body=body,
    )


async def _run(client: BaseAPIClient, endpoint: SimpleEndpoint, *, raw: bool) -> None:
    if raw:
        data = await client.request_raw(endpoint)
        console.print(data.decode("utf-8", errors="replace"), markup=False, highlight=False)
        return
    payload = await client.request(endpoint, Any)
    console.print_json(data=payload)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = get_settings()
    _configure_logging(settings)

    try:
        endpoint = _build_endpoint(args)
    except (argparse.ArgumentTypeError, json.JSONDecodeError) as exc:
        parser.error(str(exc))

    client = _build_client(args, settings)
    log.info("Fetching {} {}{} via {}", args.method, args.base_url, args.path, type(client).__name__)
    try:
        asyncio.run(_run(client, endpoint, raw=args.raw))
    except TinyAPIError as exc:
        console.print(f"[bold red]{exc.kind}[/] {exc}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
