#!/usr/bin/env python3
"""
CLI interface for gapi-transport.

Usage:
    gapi call <api> <version> <resource.method> [--param k=v ...]
    gapi methods <api> <version>

Calls go through the same transport as the library, so errors print in
their normalized shape ({"error": true, "code": ..., "message": ...}).
"""

import argparse
import json
import sys
from functools import reduce
from typing import Any

from logging_config import configure_logging
from models import ApiError
from tools.client import ApiClient, GoogleApis


def _parse_pairs(pairs: list[str] | None, flag: str) -> dict[str, Any]:
    """Parse repeated k=v flags. A key given twice becomes a list."""
    result: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"{flag} expects key=value, got {pair!r}")
        if key in result:
            existing = result[key]
            result[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            result[key] = value
    return result


def _bind(args: argparse.Namespace) -> ApiClient:
    google = GoogleApis()
    if args.discover:
        return google.discover(args.api, args.version)
    return google.api(args.api, args.version)


def _print_error(error: ApiError) -> None:
    print(json.dumps(error.to_dict(), indent=2))
    sys.exit(1)


def cmd_call(args: argparse.Namespace) -> None:
    """Call one API method."""
    params = _parse_pairs(args.param, "--param")
    headers = _parse_pairs(args.header, "--header")
    if headers:
        params["headers"] = headers
    try:
        if args.body is not None:
            params["body"] = json.loads(args.body)
        client = _bind(args)
        method = reduce(getattr, args.method.split("."), client)
        response = method(**params).execute()
    except ApiError as e:
        _print_error(e)
        return
    except (AttributeError, TypeError, ValueError) as e:
        raise SystemExit(f"{args.method}: {e}")

    print(json.dumps({"status": response.status, "data": response.data}, indent=2))


def cmd_methods(args: argparse.Namespace) -> None:
    """List methods an API exposes."""
    try:
        client = _bind(args)
    except ApiError as e:
        _print_error(e)
        return
    for method_id in client.method_ids():
        print(method_id)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Google REST API calls with normalized errors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    gapi methods drive v2
    gapi call drive v2 files.list --param q="title contains 'budget'"
    gapi call drive v2 files.get --param fileId=abc --header If-None-Match=12345
    gapi call urlshortener v1 url.insert --body '{"longUrl": "http://google.com/"}'
    gapi call oauth2 v2 tokeninfo --param access_token=ya29... --discover
""",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for stderr output (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_api_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("api", help="API name, e.g. drive")
        p.add_argument("version", help="API version, e.g. v2")
        p.add_argument(
            "--discover",
            action="store_true",
            help="Fetch the discovery document instead of using the bundled one",
        )

    # call
    call_p = subparsers.add_parser("call", help="Call an API method")
    add_api_args(call_p)
    call_p.add_argument("method", help="Method path, e.g. files.list or tokeninfo")
    call_p.add_argument("--param", action="append", help="Method parameter key=value (repeatable)")
    call_p.add_argument("--header", action="append", help="Request header key=value (repeatable)")
    call_p.add_argument("--body", help="JSON request body")
    call_p.set_defaults(func=cmd_call)

    # methods
    methods_p = subparsers.add_parser("methods", help="List an API's methods")
    add_api_args(methods_p)
    methods_p.set_defaults(func=cmd_methods)

    args = parser.parse_args()
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
