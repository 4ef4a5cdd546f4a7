#!/usr/bin/env python3
"""
CLI for the debounced file watcher.

Usage:
    python -m src.cli watch /path/to/folder1 /path/to/folder2 --poll 100
    python -m src.cli folders /path/to/folder --exclude node_modules .cache
"""

import argparse
import logging
import os
import signal
import sys
import threading
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()

from src.bounce import Filewatcher, WatcherConfig, WatcherError


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("cli")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> list:
    return [item for item in os.environ.get(name, "").split(",") if item.strip()]


def build_config(args) -> WatcherConfig:
    """Build a WatcherConfig from parsed arguments."""
    return WatcherConfig(
        roots=args.roots,
        poll_interval_ms=args.poll,
        folder_exclusions=args.exclude,
        include_hidden=args.include_hidden,
        exclude_subdirs=args.no_subdirs,
        follow_new_folders=args.follow,
    )


def _drain(stream, label: str) -> None:
    """Print everything published on a stream until it closes."""
    for item in stream:
        print(f"{label} {item}", flush=True)


def cmd_watch(args):
    """Watch the roots and print settled files and folders."""
    try:
        watcher = Filewatcher(build_config(args))
    except WatcherError as e:
        logger.error(str(e))
        sys.exit(1)

    def _handler(signum, frame):
        logger.info("Received shutdown signal, stopping...")
        threading.Thread(target=watcher.close, name="Shutdown").start()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)

    consumers = [
        threading.Thread(target=_drain, args=(watcher.file_changed, "file changed"), daemon=True),
        threading.Thread(target=_drain, args=(watcher.folder_changed, "folder changed"), daemon=True),
        threading.Thread(target=_drain, args=(watcher.errors, "error"), daemon=True),
    ]
    for consumer in consumers:
        consumer.start()

    for folder in watcher.watch_folders():
        logger.debug(f"  - {folder}")
    logger.info("Press Ctrl+C to stop")

    watcher.start()
    logger.info("Watcher stopped")


def cmd_folders(args):
    """Print the folders that would be observed."""
    try:
        watcher = Filewatcher(build_config(args))
    except WatcherError as e:
        logger.error(str(e))
        sys.exit(1)

    with watcher:
        for folder in watcher.watch_folders():
            print(folder)


def main():
    parser = argparse.ArgumentParser(
        description="Debounced file watcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("roots", nargs="+", help="Root folders to watch")
    common.add_argument("--poll", type=int, default=int(os.environ.get("BOUNCE_POLL_MS", "100")),
                        help="Poll interval in ms, settle time is twice this (default: 100 or BOUNCE_POLL_MS)")
    common.add_argument("--exclude", nargs="*", default=_env_list("BOUNCE_EXCLUDE"),
                        help="Folder names to exclude (or comma-separated BOUNCE_EXCLUDE)")
    common.add_argument("--include-hidden", action="store_true", default=_env_flag("BOUNCE_INCLUDE_HIDDEN"),
                        help="Watch folders starting with '.'")
    common.add_argument("--no-subdirs", action="store_true", help="Only watch the root folders themselves")
    common.add_argument("--follow", action="store_true", default=_env_flag("BOUNCE_FOLLOW_NEW_FOLDERS"),
                        help="Start watching folders created while running")

    subparsers = parser.add_subparsers(dest="command", required=True)

    watch_parser = subparsers.add_parser("watch", parents=[common], help="Watch folders and print settled paths")
    watch_parser.set_defaults(func=cmd_watch)

    folders_parser = subparsers.add_parser("folders", parents=[common], help="List the folders that would be watched")
    folders_parser.set_defaults(func=cmd_folders)

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    args.func(args)


if __name__ == "__main__":
    main()
