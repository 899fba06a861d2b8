"""Command line entry point for sending Engagespot notifications.

Credentials are read from ``ENGAGESPOT_API_KEY`` and ``ENGAGESPOT_API_SECRET``
(environment or ``.env``). Every run prints a JSON report and exits non-zero
when the API call failed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any, Sequence

from .client import Engagespot
from .common import EngagespotSettings, configure_logging, configure_tracing
from .exceptions import EngagespotError
from .notification import NotificationBuilder
from .result import EngagespotResult


def _json_argument(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="engagespot", description="Engagespot API client")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Override the API base URL (default: ENGAGESPOT_BASE_URL or the production endpoint)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send a notification")
    send.add_argument("--title", required=True, help="Notification title")
    send.add_argument(
        "--recipient",
        dest="recipients",
        action="append",
        required=True,
        help="Recipient email or user id; repeat for several recipients",
    )
    send.add_argument("--message", default=None, help="Notification message")
    send.add_argument("--url", default=None, help="URL opened when the notification is clicked")
    send.add_argument("--icon", default=None, help="Icon shown with the notification")
    send.add_argument("--category", default=None, help="Restrict delivery to a category")
    send.add_argument("--data", type=_json_argument, default=None, help="Extra JSON payload")

    attrs = subparsers.add_parser("user-attrs", help="Create or update user attributes")
    attrs.add_argument("identifier", help="User identifier, used verbatim in the URL")
    attrs.add_argument("--attrs", type=_json_argument, required=True, help="Attributes as JSON")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


async def run(args: argparse.Namespace, settings: EngagespotSettings) -> EngagespotResult:
    if args.base_url:
        settings = settings.model_copy(update={"base_url": args.base_url})
    async with Engagespot.from_settings(settings) as client:
        if args.command == "send":
            builder: NotificationBuilder[Any] = NotificationBuilder(args.title, args.recipients)
            if args.message is not None:
                builder = builder.message(args.message)
            if args.url is not None:
                builder = builder.url(args.url)
            if args.icon is not None:
                builder = builder.icon(args.icon)
            if args.category is not None:
                builder = builder.category(args.category)
            if args.data is not None:
                builder = builder.data(args.data)
            return await client.send(builder.build())
        return await client.create_or_update_user_attrs(args.identifier, args.attrs)


def _report(result: EngagespotResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "status": "ok" if result.is_ok else "error",
        "statusCode": result.status_code,
        "body": result.text,
    }
    if result.error_kind is not None:
        payload["errorKind"] = result.error_kind.value
    return payload


async def main_async(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = EngagespotSettings()
    configure_logging(settings)
    configure_tracing(settings)
    try:
        result = await run(args, settings)
    except EngagespotError as exc:
        print(json.dumps({"status": "error", "message": str(exc)}, indent=2, sort_keys=True))
        return 1
    print(json.dumps(_report(result), indent=2, sort_keys=True))
    return 0 if result.is_ok else 1


def main() -> None:
    exit_code = asyncio.run(main_async())
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
