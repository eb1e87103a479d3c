"""
Entry point for running google_tasks_cli as a module.

Usage:
    python -m google_tasks_cli tasks
    python -m google_tasks_cli photos-list [--all]
    python -m google_tasks_cli photos-upload [PATH] [--description TEXT]
    python -m google_tasks_cli auth
    python -m google_tasks_cli tasks --config /path/to/config.yaml

Console scripts google-tasks, google-photos-list and google-photos-upload run
the matching command directly.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from google_tasks_cli.auth import authorize
from google_tasks_cli.config import Settings
from google_tasks_cli.display import (
    format_media_items,
    format_task_report,
    format_upload_summary,
)
from google_tasks_cli.google_photos import (
    get_media_item,
    list_all_media_items,
    list_media_items,
    upload_file,
)
from google_tasks_cli.google_tasks import get_all_tasks, get_task_lists

logger = logging.getLogger(__name__)

SETUP_INSTRUCTIONS = [
    "",
    "=== SETUP INSTRUCTIONS ===",
    "1. Make sure you have a 1Password item with Google API OAuth client credentials",
    "2. The item should contain client_id and client_secret fields",
    "3. Make sure 1Password CLI is installed and you're signed in",
    "4. The OAuth client must allow the redirect URI http://localhost:3000",
]


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def _authorize(settings: Settings, service: str):
    print(f"🔄 Initializing {service} authentication...\n")
    creds = authorize(settings)
    if not creds:
        print("❌ Failed to authorize. Please check your credentials.", file=sys.stderr)
        return None
    print(f"✅ {service} authorization successful!")
    return creds


def cmd_auth(settings: Settings, args: argparse.Namespace) -> int:
    creds = _authorize(settings, "Google")
    if not creds:
        return 1
    print(f"Auth OK. Token cached at {settings.token_path}")
    return 0


def cmd_tasks(settings: Settings, args: argparse.Namespace) -> int:
    print("🔄 Fetching your Google Tasks...\n")
    creds = _authorize(settings, "Google Tasks")
    if not creds:
        return 1

    task_lists = get_task_lists(creds)
    if not task_lists:
        print("No task lists found.")
        return 0
    print(f"📚 Found {len(task_lists)} task list(s)")

    all_tasks = get_all_tasks(creds, task_lists, settings.tasks)
    _print_lines(format_task_report(task_lists, all_tasks))
    return 0


def cmd_photos_list(settings: Settings, args: argparse.Namespace) -> int:
    creds = _authorize(settings, "Google Photos")
    if not creds:
        return 1

    print("🚀 Starting Google Photos viewer...\n")
    if args.all:
        items = list_all_media_items(creds, page_size=settings.photos.page_size)
        if not items:
            print("📭 No media items found in your Google Photos library.")
            return 0
        _print_lines(format_media_items(items))
        return 0

    page_size = settings.photos.preview_page_size
    print(f"=== LISTING FIRST {page_size} MEDIA ITEMS ===")
    response = list_media_items(creds, page_size=page_size)
    items = response.get("mediaItems") or []
    if not items:
        print("📭 No media items found in your Google Photos library.")
        return 0

    _print_lines(format_media_items(items))

    print("=== GETTING DETAILED INFO FOR FIRST ITEM ===")
    detailed = get_media_item(creds, items[0]["id"])
    print(f"Detailed item: {json.dumps(detailed, indent=2)}")

    if response.get("nextPageToken"):
        print(f"\n📄 More items available. Use nextPageToken: {response['nextPageToken']}")
    return 0


def cmd_photos_upload(settings: Settings, args: argparse.Namespace) -> int:
    path = Path(args.path) if args.path else settings.photos.upload_path
    description = args.description or settings.photos.upload_description

    creds = _authorize(settings, "Google Photos")
    if not creds:
        return 1

    print("🚀 Starting Google Photos upload...\n")
    if not path.is_file():
        print(f"❌ File not found: {path}", file=sys.stderr)
        return 1

    item = upload_file(creds, path, description)
    _print_lines(format_upload_summary(item))
    return 0


COMMANDS: dict[str, Callable[[Settings, argparse.Namespace], int]] = {
    "auth": cmd_auth,
    "tasks": cmd_tasks,
    "photos-list": cmd_photos_list,
    "photos-upload": cmd_photos_upload,
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Optional YAML configuration file (environment variables apply otherwise)",
    )

    parser = argparse.ArgumentParser(
        prog="google-tasks-cli",
        description="Personal Google Tasks and Google Photos command-line tools",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("auth", parents=[common], help="Authorize and store a fresh OAuth token")
    sub.add_parser("tasks", parents=[common], help="List pending tasks across all task lists")

    photos_list = sub.add_parser(
        "photos-list", parents=[common], help="List media items in Google Photos"
    )
    photos_list.add_argument(
        "--all",
        action="store_true",
        help="Walk every page of the library instead of showing the first page",
    )

    photos_upload = sub.add_parser(
        "photos-upload", parents=[common], help="Upload one file to Google Photos"
    )
    photos_upload.add_argument("path", nargs="?", help="File to upload (default from config)")
    photos_upload.add_argument("--description", "-d", help="Media item description")
    return parser


def load_settings(config: Path | None) -> Settings:
    if config is None:
        return Settings()
    return Settings.from_yaml(config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return COMMANDS[args.command](settings, args)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ Error: {e}", file=sys.stderr)
        _print_lines(SETUP_INSTRUCTIONS)
        return 1


def _run(command: str) -> None:
    sys.exit(main([command, *sys.argv[1:]]))


def tasks_main() -> None:
    _run("tasks")


def photos_list_main() -> None:
    _run("photos-list")


def photos_upload_main() -> None:
    _run("photos-upload")


if __name__ == "__main__":
    sys.exit(main())
