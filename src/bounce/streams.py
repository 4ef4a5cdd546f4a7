"""Unbuffered notification streams with synchronous hand-off."""

import queue
import threading
import time
from typing import Any, Iterator, Optional

from .exceptions import StreamClosedError


class HandoffStream:
    """
    Stream where each publish waits until a consumer has taken the item.
    
    There is no buffer: a publisher blocks until get() hands its item to
    a consumer, or until the stream is closed. Publishers are served one
    at a time. Closing wakes every waiting publisher and consumer.
    """

    def __init__(self, name: str = "stream"):
        """
        Initialize the stream.
        
        Args:
            name: Name used in repr and log messages
        """
        self.name = name
        self._cond = threading.Condition()
        self._item: Any = None
        self._has_item = False
        self._published = 0
        self._taken = 0
        self._closed = False

    def publish(self, item: Any) -> bool:
        """
        Hand an item to a consumer, blocking until it is taken.
        
        Args:
            item: Item to hand over
            
        Returns:
            True if a consumer took the item, False if the stream closed first
        """
        with self._cond:
            while self._has_item and not self._closed:
                self._cond.wait()
            if self._closed:
                return False

            self._item = item
            self._has_item = True
            self._published += 1
            ticket = self._published
            self._cond.notify_all()

            while self._taken < ticket and not self._closed:
                self._cond.wait()

            if self._taken >= ticket:
                return True
            # closed before anyone took it
            self._item = None
            self._has_item = False
            return False

    def get(self, timeout: Optional[float] = None) -> Any:
        """
        Take the next item, blocking until one is published.
        
        Args:
            timeout: Seconds to wait, or None to wait forever
            
        Returns:
            The published item
            
        Raises:
            queue.Empty: If nothing was published within timeout
            StreamClosedError: If the stream is closed
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                if self._closed:
                    raise StreamClosedError(f"{self.name} is closed")
                if self._has_item:
                    break
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise queue.Empty
                self._cond.wait(remaining)

            item = self._item
            self._item = None
            self._has_item = False
            self._taken += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Close the stream and wake all waiting publishers and consumers."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        """Check if the stream is closed."""
        with self._cond:
            return self._closed

    def __iter__(self) -> Iterator[Any]:
        """Yield items until the stream is closed."""
        while True:
            try:
                yield self.get()
            except StreamClosedError:
                return

    def __repr__(self) -> str:
        return f"HandoffStream({self.name!r}, closed={self.closed})"
