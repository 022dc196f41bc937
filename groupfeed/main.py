"""
Main Entry Point

Command line access to the load-group workflow and the stored groups.

    groupfeed load --url https://www.facebook.com/groups/example/
    groupfeed load --body '{"url": "https://www.facebook.com/groups/example/"}'
    groupfeed list
    groupfeed show 1234567890
"""

import argparse
import dataclasses
import json
import logging
from typing import List, Optional

from .coreutils.config import Settings
from .coreutils.logging import setup_logging
from .load.group_store import GroupStore
from .orchestration.pipeline import load_group
from .orchestration.results import Err, to_http_response

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Facebook group loader")
    parser.add_argument("--db", help="DuckDB database path (overrides GROUPFEED_DB_PATH)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Load a group from its page URL")
    source = load_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Facebook group page URL")
    source.add_argument("--body", help='Raw JSON request body, e.g. {"url": "..."}')
    load_parser.add_argument(
        "--strict-status",
        action="store_true",
        help="Treat non-2xx group page responses as unreachable",
    )

    subparsers.add_parser("list", help="List stored groups")

    show_parser = subparsers.add_parser("show", help="Show a stored group and its postings")
    show_parser.add_argument("fb_id", help="Facebook group id")

    return parser


def run_load(settings: Settings, url: Optional[str], body: Optional[str]) -> int:
    payload = body if body is not None else json.dumps({"url": url})
    outcome = load_group(payload, settings)
    status, response = to_http_response(outcome)

    if isinstance(outcome, Err):
        print(f"❌ {status}: {response['message']}")
        return 1

    print(f"✅ {status}: {json.dumps(response)}")
    return 0


def run_list(settings: Settings) -> int:
    with GroupStore.from_settings(settings) as store:
        groups = store.list_groups()
        if not groups:
            print("No groups stored")
        for group in groups:
            print(
                f"{group.fb_id}\t{group.name}\t{store.count_postings(group)} postings\t{group.fb_url}"
            )
    return 0


def run_show(settings: Settings, fb_id: str) -> int:
    with GroupStore.from_settings(settings) as store:
        group = store.find_group(fb_id)
        if group is None:
            print(f"❌ Group {fb_id} not found")
            return 1
        print(f"{group.fb_id}: {group.name} ({group.fb_url})")
        print(store.postings_frame(group))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    if args.db:
        settings = dataclasses.replace(settings, db_path=args.db)
    if getattr(args, "strict_status", False):
        settings = dataclasses.replace(settings, strict_http_status=True)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_dir=settings.log_dir,
    )

    if args.command == "load":
        return run_load(settings, args.url, args.body)
    if args.command == "list":
        return run_list(settings)
    return run_show(settings, args.fb_id)


if __name__ == "__main__":
    raise SystemExit(main())
