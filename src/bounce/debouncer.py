"""Per-path settling timers for file and folder change events."""

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class SettleTimer:
    """A pending notification for one path."""
    path: str
    deadline: float
    thread: Optional[threading.Thread] = field(default=None, repr=False)


class Debouncer:
    """
    Coalesces change events into one notification per path per quiet period.

    Every path gets its own timer thread. A repeat event for a path that
    still has a pending timer only pushes the deadline back. When a timer
    expires its path is removed from the table, checked on disk, and
    published if it still exists.

    Both tables share one lock that is only held while a table is read or
    changed, never while a timer waits or a path is being published.
    """

    def __init__(
        self,
        settle_seconds: float,
        publish_file: Callable[[str], bool],
        publish_folder: Callable[[str], bool],
        exists: Callable[[str], bool] = os.path.exists,
    ):
        """
        Initialize the debouncer.

        Args:
            settle_seconds: Quiet period before a path is published
            publish_file: Called with a settled file path; blocks until delivered
            publish_folder: Called with a settled folder path; blocks until delivered
            exists: Check used to suppress paths deleted before their timer fired
        """
        self.settle_seconds = settle_seconds
        self._publish_file = publish_file
        self._publish_folder = publish_folder
        self._exists = exists
        self._files: Dict[str, SettleTimer] = {}
        self._folders: Dict[str, SettleTimer] = {}
        self._threads: Set[threading.Thread] = set()
        self._cancelled = threading.Event()
        self._lock = threading.Lock()

    def on_event(self, path: str, is_directory: bool) -> None:
        """
        Arm or reset the timers for a changed path.

        A folder event only touches the folder table. A file event touches
        the file table for the path and the folder table for its parent.

        Args:
            path: Canonical absolute path
            is_directory: Whether the path is a folder
        """
        with self._lock:
            if self._cancelled.is_set():
                return
            if is_directory:
                self._arm(self._folders, path, self._publish_folder)
            else:
                self._arm(self._files, path, self._publish_file)
                self._arm(self._folders, os.path.dirname(path), self._publish_folder)

    def _arm(self, table: Dict[str, SettleTimer], path: str, publish: Callable[[str], bool]) -> None:
        """Reset the timer for path, or start one. Caller holds the lock."""
        deadline = time.monotonic() + self.settle_seconds
        timer = table.get(path)
        if timer is not None:
            timer.deadline = deadline
            return

        timer = SettleTimer(path=path, deadline=deadline)
        timer.thread = threading.Thread(
            target=self._wait,
            args=(table, timer, publish),
            name=f"Settle-{os.path.basename(path) or path}",
            daemon=True,
        )
        table[path] = timer
        self._threads.add(timer.thread)
        timer.thread.start()

    def _wait(self, table: Dict[str, SettleTimer], timer: SettleTimer, publish: Callable[[str], bool]) -> None:
        """Timer thread: sleep until the deadline stops moving, then publish."""
        try:
            while True:
                with self._lock:
                    remaining = timer.deadline - time.monotonic()
                    if remaining <= 0:
                        if table.get(timer.path) is timer:
                            del table[timer.path]
                        break
                if self._cancelled.wait(remaining):
                    with self._lock:
                        if table.get(timer.path) is timer:
                            del table[timer.path]
                    return

            if self._cancelled.is_set():
                return
            if not self._exists(timer.path):
                logger.debug(f"Suppressed notification for removed path: {timer.path}")
                return
            if not publish(timer.path):
                logger.debug(f"Notification dropped, stream closed: {timer.path}")
        finally:
            with self._lock:
                self._threads.discard(threading.current_thread())

    def pending_files(self) -> List[str]:
        """Get the file paths with a pending timer."""
        with self._lock:
            return sorted(self._files)

    def pending_folders(self) -> List[str]:
        """Get the folder paths with a pending timer."""
        with self._lock:
            return sorted(self._folders)

    def cancel(self) -> None:
        """
        Abandon all pending timers.

        Pending paths are not published and new events are ignored. Timer
        threads wake up and exit; a thread already blocked in publish only
        exits once its stream is closed.
        """
        self._cancelled.set()

    def join(self, timeout: float = 2.0) -> int:
        """
        Wait for the timer threads to exit.

        Args:
            timeout: Seconds to wait for each timer thread

        Returns:
            Number of timer threads waited on
        """
        with self._lock:
            threads = list(self._threads)

        for thread in threads:
            if thread is not threading.current_thread():
                thread.join(timeout=timeout)
        return len(threads)

    @property
    def cancelled(self) -> bool:
        """Check if the debouncer has been cancelled."""
        return self._cancelled.is_set()

    def __len__(self) -> int:
        """Return the number of pending timers across both tables."""
        with self._lock:
            return len(self._files) + len(self._folders)
