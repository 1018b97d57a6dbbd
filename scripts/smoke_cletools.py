#!/usr/bin/env python3
"""Smoke test for the CLE tools listing endpoint against a running server.

Usage:
  python scripts/smoke_cletools.py --base-url http://127.0.0.1:8000

Environment fallbacks:
  CLETOOLS_BASE_URL, CLETOOLS_EXPECT_TOOL
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Any

import httpx


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="CLE tools endpoint smoke test")
    parser.add_argument("--base-url", default=os.getenv("CLETOOLS_BASE_URL", "http://127.0.0.1:8000"))
    parser.add_argument(
        "--expect-tool",
        default=os.getenv("CLETOOLS_EXPECT_TOOL"),
        help="Tool id that must appear in the listing",
    )
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--quiet", action="store_true")
    return parser.parse_args()


def exit_with(message: str, code: int = 1) -> None:
    print(message, file=sys.stderr)
    raise SystemExit(code)


def safe_json(response: httpx.Response) -> dict[str, Any]:
    try:
        return response.json()
    except ValueError:
        return {}


def main() -> None:
    args = parse_args()
    base_url = args.base_url.rstrip("/")

    with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
        try:
            health = client.get("/health")
        except httpx.HTTPError as exc:
            exit_with(f"Health check failed: {exc}")

        if health.status_code != 200:
            exit_with(f"Health check failed: HTTP {health.status_code} {health.text}")

        listing = client.get("/var/basiclti/cletools")
        if listing.status_code != 200:
            exit_with(f"Tool listing failed: HTTP {listing.status_code} {listing.text}")

    tool_list = safe_json(listing).get("toolList")
    if not isinstance(tool_list, list):
        exit_with(f"Tool listing has no toolList array: {listing.text}")

    if args.expect_tool and args.expect_tool not in tool_list:
        exit_with(f"Expected tool {args.expect_tool!r} not listed")

    if not args.quiet:
        print(f"OK: {len(tool_list)} tools listed")
        for tool_id in tool_list:
            print(f"  {tool_id}")


if __name__ == "__main__":
    main()
