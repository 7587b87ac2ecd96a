# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""PerfOps CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Any

from ..client import PerfOpsClient
from ..config import ClientSettings, load_client_settings, normalize_base_path
from ..errors import PerfOpsError, error_category_to_reason
from ..http import create_default_http_client
from ..log import setup_logging
from ..models.run import Ping, PingID, PingOutput
from ..utils.context import RequestContext, check_cancelled

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INCOMPLETE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PerfOps network diagnostics client")
    parser.add_argument("--base-path", help="API base URL (default: $PERFOPS_BASE_PATH or the public API)")
    parser.add_argument("--api-key", help="API key sent in the Authorization header")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--log-level", help="Logging level (default: $PERFOPS_LOG_LEVEL or WARNING)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ping = subparsers.add_parser("ping", help="Run a ping test from PerfOps nodes")
    ping.add_argument("target", help="Host name or address to ping")
    ping.add_argument("--nodes", default="", help="Comma separated node IDs")
    ping.add_argument("--location", default="", help="Comma separated country names")
    ping.add_argument("--limit", type=int, default=0, help="Maximum number of nodes")
    ping.add_argument("--wait", action="store_true", help="Poll until every node has reported")
    ping.add_argument("--interval", type=float, default=1.0, help="Seconds between polls when waiting")
    ping.add_argument("--max-wait", type=float, default=60.0, help="Give up waiting after this many seconds")

    output = subparsers.add_parser("output", help="Show the current output of a ping test")
    output.add_argument("id", help="Ping test ID")
    return parser


def _settings_from_args(args: argparse.Namespace) -> ClientSettings:
    settings = load_client_settings()
    if args.base_path:
        settings.base_path = normalize_base_path(args.base_path)
    if args.api_key:
        settings.api_key = args.api_key
    if args.timeout is not None and args.timeout > 0:
        settings.timeout = args.timeout
    return settings


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(output: PingOutput) -> None:
    reported = len(output.results)
    state = "complete" if output.is_complete() else "in progress"
    print(f"[PerfOps] Ping {output.id or '-'} -> {output.requested or '-'} ({state}, {reported}/{len(output.items)} nodes)")
    for item in output.items:
        if item.result is None or not item.result.is_complete():
            print(f"- {item.id or '?'}: waiting")
            continue
        print(f"- node {item.result.node_id}:")
        for line in item.result.output.splitlines():
            print(f"    {line}")


def wait_for_output(
    client: PerfOpsClient,
    ping_id: PingID,
    *,
    interval: float,
    max_wait: float,
    context: RequestContext | None = None,
) -> PingOutput:
    """Poll a ping test until it is complete or ``max_wait`` elapses; return the last snapshot."""
    deadline = time.monotonic() + max(0.0, max_wait)
    while True:
        output = client.ping_output(ping_id, context=context)
        if output.is_complete():
            return output
        if context is not None:
            check_cancelled(context)
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning("ping %s still incomplete after %.1fs", ping_id, max_wait)
            return output
        time.sleep(min(max(interval, 0.0), remaining))


def _run(args: argparse.Namespace, client: PerfOpsClient) -> int:
    if args.command == "output":
        output = client.ping_output(PingID(args.id))
    else:
        ping = Ping(target=args.target, nodes=args.nodes, location=args.location, limit=args.limit)
        ping_id = client.ping(ping)
        if not args.wait:
            if args.json:
                _print_json({"id": ping_id})
            else:
                print(ping_id)
            return EXIT_OK
        output = wait_for_output(client, ping_id, interval=args.interval, max_wait=args.max_wait)

    if args.json:
        _print_json(output)
    else:
        _pretty_print(output)
    if args.command == "ping" and not output.is_complete():
        return EXIT_INCOMPLETE
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = _settings_from_args(args)
    http_client = create_default_http_client(settings)

    with PerfOpsClient(settings=settings, http_client=http_client) as client:
        try:
            return _run(args, client)
        except PerfOpsError as exc:
            reason = error_category_to_reason(getattr(exc, "category", None))
            suffix = f" ({reason})" if reason else ""
            print(f"error: {exc}{suffix}", file=sys.stderr)
            return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
