"""Debounced file watcher orchestrator."""

import logging
import threading
from enum import Enum
from typing import List, Optional

from .classifier import classify_event
from .config import WatcherConfig
from .debouncer import Debouncer
from .discovery import discover_folders
from .exceptions import (
    DiscoveryError,
    RegistrationError,
    WatcherAlreadyRunningError,
    WatcherClosedError,
)
from .exclusions import FolderFilter
from .extender import FolderFollower
from .fs_watcher import RawWatcher
from .models import RawEvent
from .streams import HandoffStream

logger = logging.getLogger(__name__)


class WatcherState(Enum):
    """Lifecycle states of a Filewatcher."""
    CONSTRUCTED = "constructed"
    RUNNING = "running"
    CLOSED = "closed"


class Filewatcher:
    """
    Debounced file watcher.

    Polls the configured folders every poll interval and publishes a
    file or folder path once it has seen no change for twice the poll
    interval. For a poll interval of 1 second a write to folder1/file1
    at 0.3s is picked up by the poll at 1s, which arms 2 second timers
    for folder1/file1 and folder1. If nothing else changes both are
    published at 3s.

    Settled paths are delivered on file_changed and folder_changed,
    runtime errors on errors. Each publish waits for a consumer, so the
    streams must be drained while the watcher runs.

    A Filewatcher is single use: constructed, started once, closed once.
    """

    def __init__(self, config: WatcherConfig):
        """
        Discover the folders to observe and register them for polling.

        Args:
            config: Watcher configuration

        Raises:
            DiscoveryError: If a root folder is missing or unreadable
            RegistrationError: If a discovered folder cannot be observed
        """
        self.config = config
        self.folder_filter = FolderFilter.from_patterns(
            config.folder_exclusions,
            config.include_hidden,
        )

        self.file_changed = HandoffStream("file_changed")
        self.folder_changed = HandoffStream("folder_changed")
        self.errors = HandoffStream("errors")
        self.closed = threading.Event()

        self._raw_watcher = RawWatcher(config.poll_interval, config.include_hidden)
        self._debouncer = Debouncer(
            config.settle_seconds,
            self.file_changed.publish,
            self.folder_changed.publish,
        )
        self._follower = FolderFollower(
            self._raw_watcher,
            self.folder_filter,
            config.follow_new_folders,
        )

        self._state = WatcherState.CONSTRUCTED
        self._dispatch_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

        try:
            self._register_folders()
        except Exception:
            self._raw_watcher.close()
            raise

    def _register_folders(self) -> None:
        """Run discovery and register every folder with the raw watcher."""
        try:
            folders = discover_folders(
                self.config.roots,
                self.config.exclude_subdirs,
                self.config.include_hidden,
                self.folder_filter.exclusions,
            )
        except DiscoveryError as e:
            raise type(e)(f"error determining watch folders: {e}") from e

        for folder in folders:
            try:
                self._raw_watcher.add(folder)
            except RegistrationError as e:
                raise RegistrationError(f"error adding watch folder: {e}") from e

        logger.info(
            f"Watching {len(self._raw_watcher)} folder(s) under "
            f"{len(self.config.roots)} root(s), settle={self.config.settle_ms}ms"
        )

    def watch_folders(self) -> List[str]:
        """
        Get the folders currently under observation.

        Returns:
            Sorted, deduplicated list of absolute folder paths
        """
        return self._raw_watcher.watched_folders()

    @property
    def state(self) -> WatcherState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._state == WatcherState.RUNNING

    def start(self) -> None:
        """
        Start the watcher (blocking).

        Blocks until close() is called from another thread.

        Raises:
            WatcherAlreadyRunningError: If already running
            WatcherClosedError: If the watcher has been closed
        """
        self.start_async()

        try:
            while not self.closed.is_set():
                self.closed.wait(timeout=0.5)
        except KeyboardInterrupt:
            pass
        finally:
            self.close()

    def start_async(self) -> None:
        """
        Start the watcher in the background.

        Returns immediately while polling and dispatch run in background threads.

        Raises:
            WatcherAlreadyRunningError: If already running
            WatcherClosedError: If the watcher has been closed
        """
        with self._lock:
            if self._state == WatcherState.RUNNING:
                raise WatcherAlreadyRunningError("Watcher is already running")
            if self._state == WatcherState.CLOSED:
                raise WatcherClosedError("Watcher has been closed")
            self._state = WatcherState.RUNNING

        self._dispatch_thread = threading.Thread(
            target=self._dispatch_loop,
            name="Dispatch",
            daemon=True,
        )
        self._dispatch_thread.start()
        self._raw_watcher.start()
        logger.info("Watcher started")

    def close(self) -> None:
        """
        Close the watcher and release all resources.

        Pending timers are abandoned without publishing. Returns once the
        dispatch and timer threads have exited; closed is set last.
        """
        with self._lock:
            if self._state == WatcherState.CLOSED:
                return
            self._state = WatcherState.CLOSED

        self._raw_watcher.close()
        self._debouncer.cancel()
        self.file_changed.close()
        self.folder_changed.close()
        self.errors.close()

        if self._dispatch_thread is not None and self._dispatch_thread.is_alive():
            self._dispatch_thread.join(timeout=2.0)
        self._debouncer.join(timeout=2.0)

        self.closed.set()
        logger.info("Watcher closed")

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the watcher is fully closed.

        Args:
            timeout: Seconds to wait, or None to wait forever

        Returns:
            True if the watcher is closed
        """
        return self.closed.wait(timeout)

    def _dispatch_loop(self) -> None:
        """Worker loop that feeds raw events to the follower and debouncer."""
        logger.debug("Dispatch loop started")

        while True:
            item = self._raw_watcher.events.get()
            if item is None:
                break

            if isinstance(item, Exception):
                logger.warning(f"Watcher error: {item}")
                self.errors.publish(item)
                continue

            try:
                self._dispatch(item)
            except Exception as e:
                logger.error(f"Dispatch error for {item.path}: {e}")

        logger.debug("Dispatch loop stopped")

    def _dispatch(self, event: RawEvent) -> None:
        """Process a single raw event."""
        path = classify_event(event)
        if not path:
            return
        logger.debug(f"{event.op.value}: {path}")

        try:
            self._follower.follow(event.op, path, event.is_directory)
        except RegistrationError as e:
            logger.warning(f"Could not follow new folder {path}: {e}")
            self.errors.publish(e)

        self._debouncer.on_event(path, event.is_directory)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
