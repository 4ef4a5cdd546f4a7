"""Custom exceptions for the bounce package."""


class WatcherError(Exception):
    """Base exception for all watcher errors."""
    pass


class ConfigError(WatcherError):
    """Watcher configuration is invalid."""
    pass


class DiscoveryError(WatcherError):
    """Folder discovery could not walk a root folder."""
    pass


class RootNotFoundError(DiscoveryError):
    """Specified root folder does not exist."""
    pass


class RegistrationError(WatcherError):
    """The raw watcher rejected a folder."""
    pass


class WatchedPathRemovedError(WatcherError):
    """A folder under observation was removed from disk."""

    def __init__(self, path: str):
        super().__init__(f"Watched folder was removed: {path}")
        self.path = path


class WatcherAlreadyRunningError(WatcherError):
    """Watcher is already running."""
    pass


class WatcherClosedError(WatcherError):
    """Watcher has been closed and cannot be restarted."""
    pass


class StreamClosedError(WatcherError):
    """Notification stream has been closed."""
    pass
