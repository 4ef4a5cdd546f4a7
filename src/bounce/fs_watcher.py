"""Polling file system watcher using watchdog library."""

import logging
import os
import queue
import threading
from typing import Callable, Dict, List, Optional, Set, Union

from watchdog.observers.api import ObservedWatch
from watchdog.observers.polling import PollingObserver
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)

from .exceptions import RegistrationError, WatchedPathRemovedError
from .exclusions import is_hidden
from .models import Op, RawEvent

logger = logging.getLogger(__name__)

RawItem = Union[RawEvent, Exception]


class RawEventHandler(FileSystemEventHandler):
    """Handler that converts watchdog events for one folder to RawEvent."""

    def __init__(
        self,
        output: "queue.Queue[Optional[RawItem]]",
        folder: str,
        include_hidden: bool = False,
        on_removed: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self.output = output
        self.folder = folder
        self.include_hidden = include_hidden
        self.on_removed = on_removed

    def _should_ignore(self, path: str) -> bool:
        """Check if the path should be ignored."""
        return not self.include_hidden and is_hidden(path)

    def _emit(self, raw_event: RawEvent, path: str) -> None:
        """Put a RawEvent on the output queue."""
        if self._should_ignore(path):
            return
        self.output.put(raw_event)

    def on_any_event(self, event: FileSystemEvent):
        src_path = os.fsdecode(event.src_path)
        is_dir = event.is_directory

        if event.event_type == EVENT_TYPE_CREATED:
            self._emit(RawEvent(Op.CREATE, src_path, is_dir), src_path)
        elif event.event_type == EVENT_TYPE_MODIFIED:
            self._emit(RawEvent(Op.WRITE, src_path, is_dir), src_path)
        elif event.event_type == EVENT_TYPE_DELETED:
            if is_dir and src_path == self.folder:
                if self.on_removed is not None:
                    self.on_removed(src_path)
                self.output.put(WatchedPathRemovedError(src_path))
                return
            self._emit(RawEvent(Op.REMOVE, src_path, is_dir), src_path)
        elif event.event_type == EVENT_TYPE_MOVED:
            dest_path = os.fsdecode(event.dest_path)
            self._emit(RawEvent.moved(src_path, dest_path, is_dir), dest_path)


class RawWatcher:
    """
    Polls a set of folders for changes.

    Each registered folder is scheduled non-recursively on a single
    watchdog PollingObserver. Raw events and errors are delivered on
    the events queue; None is put on the queue once the watcher closes.
    """

    def __init__(self, poll_interval: float, include_hidden: bool = False):
        """
        Initialize the raw watcher.

        Args:
            poll_interval: Seconds between polls of each folder
            include_hidden: Whether to report events for hidden files and folders
        """
        self.poll_interval = poll_interval
        self.include_hidden = include_hidden
        self.events: "queue.Queue[Optional[RawItem]]" = queue.Queue()
        self._observer = PollingObserver(timeout=poll_interval)
        self._watches: Dict[str, ObservedWatch] = {}
        # folders whose emitter stopped after the folder disappeared
        self._removed: Set[str] = set()
        self._removed_lock = threading.Lock()
        self._started = False
        self._closed = False
        self._lock = threading.Lock()

    def add(self, folder: str) -> bool:
        """
        Start observing a folder.

        A folder that was removed while observed stays listed, and is
        observed again when it is added after being recreated.

        Args:
            folder: Path to the folder

        Returns:
            True if observation started, False if already observed

        Raises:
            RegistrationError: If the folder cannot be observed
        """
        path = os.path.abspath(folder)

        with self._lock:
            if self._closed:
                raise RegistrationError(f"Watcher is closed, cannot add: {path}")
            with self._removed_lock:
                removed = path in self._removed
            if path in self._watches and not removed:
                return False
            if not os.path.isdir(path):
                raise RegistrationError(f"Not a folder: {path}")
            if not os.access(path, os.R_OK | os.X_OK):
                raise RegistrationError(f"Folder is not readable: {path}")

            if removed:
                self._observer.unschedule(self._watches.pop(path))
                with self._removed_lock:
                    self._removed.discard(path)
                logger.debug(f"Replacing stopped watch for recreated folder: {path}")

            handler = RawEventHandler(self.events, path, self.include_hidden, self._mark_removed)
            try:
                watch = self._observer.schedule(handler, path, recursive=False)
            except OSError as e:
                raise RegistrationError(f"Cannot observe {path}: {e}") from e

            self._watches[path] = watch
            logger.debug(f"Observing folder: {path}")
            return True

    def _mark_removed(self, path: str) -> None:
        """Record that the watch for path stopped because the folder is gone."""
        with self._removed_lock:
            self._removed.add(path)

    def start(self) -> None:
        """Start polling all registered folders."""
        with self._lock:
            if self._started or self._closed:
                return
            self._started = True
        self._observer.start()
        logger.debug(f"Polling {len(self)} folder(s) every {self.poll_interval}s")

    def close(self) -> None:
        """Stop polling and signal the end of the event queue."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            started = self._started

        if started:
            self._observer.stop()
            self._observer.join(timeout=5.0)
        self.events.put(None)

    def is_watching(self, folder: str) -> bool:
        """
        Check if a folder is observed.

        Args:
            folder: Path to check

        Returns:
            True if the folder is observed
        """
        path = os.path.abspath(folder)

        with self._lock:
            return path in self._watches

    def watched_folders(self) -> List[str]:
        """
        Get the observed folders.

        Returns:
            Sorted list of absolute folder paths
        """
        with self._lock:
            return sorted(self._watches)

    @property
    def closed(self) -> bool:
        """Check if the watcher has been closed."""
        return self._closed

    def __len__(self) -> int:
        """Return the number of observed folders."""
        with self._lock:
            return len(self._watches)
