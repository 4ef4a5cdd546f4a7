#!/usr/bin/env python3
"""
Debounced file watcher demo.

This example demonstrates:
1. Polling a folder every 100 milliseconds
2. Waiting until a file or folder has been quiet for 200 milliseconds
3. Printing settled files and folders as they are published

Usage:
    python examples/watch_demo.py

The demo will:
- Create a temporary folder
- Write a file several times in quick succession
- Show that only one notification arrives for it
- Clean up after a few seconds
"""

import sys
import tempfile
import threading
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.bounce import Filewatcher, WatcherConfig


def print_stream(stream, label: str) -> None:
    """Print every item published on a stream until it closes."""
    for item in stream:
        print(f"[{label}] {item}")


def main():
    with tempfile.TemporaryDirectory() as demo_dir:
        root = Path(demo_dir) / "folderToWatch"
        root.mkdir()

        config = WatcherConfig(roots=[root], poll_interval_ms=100)

        with Filewatcher(config) as watcher:
            for stream, label in (
                (watcher.file_changed, "FILE"),
                (watcher.folder_changed, "FOLDER"),
                (watcher.errors, "ERROR"),
            ):
                threading.Thread(target=print_stream, args=(stream, label), daemon=True).start()

            watcher.start_async()
            print(f"[DEMO] Watching {watcher.watch_folders()}")
            time.sleep(0.5)

            target = root / "notes.txt"
            for i in range(5):
                target.write_text("line\n" * (i + 1))
                print(f"[DEMO] Wrote {target.name} ({i + 1})")
                time.sleep(0.05)

            time.sleep(2)
            print("[DEMO] Stopping watcher...")

    print("[DEMO] Done")


if __name__ == "__main__":
    main()
