"""
Debounced File Watcher Package

Turns the noisy stream of changes reported by a polling file watcher
into a settled stream of "this file or folder has stopped changing"
notifications.

Features:
- Folder discovery with hidden-folder and exclusion rules
- One notification per path once it has been quiet for 2x the poll interval
- File changes also settle their parent folder
- Paths deleted before they settle are never reported
- Optional observation of folders created while running
"""

from .models import (
    Op,
    RawEvent,
)

from .config import WatcherConfig

from .exceptions import (
    WatcherError,
    ConfigError,
    DiscoveryError,
    RootNotFoundError,
    RegistrationError,
    WatchedPathRemovedError,
    WatcherAlreadyRunningError,
    WatcherClosedError,
    StreamClosedError,
)

from .exclusions import (
    FolderFilter,
    normalize_exclusions,
    is_excluded,
    is_hidden,
)
from .discovery import discover_folders
from .classifier import classify, target_path
from .streams import HandoffStream
from .debouncer import Debouncer
from .fs_watcher import RawWatcher, RawEventHandler
from .extender import FolderFollower
from .watcher import Filewatcher, WatcherState


__all__ = [
    # Models
    "Op",
    "RawEvent",
    # Config
    "WatcherConfig",
    # Exceptions
    "WatcherError",
    "ConfigError",
    "DiscoveryError",
    "RootNotFoundError",
    "RegistrationError",
    "WatchedPathRemovedError",
    "WatcherAlreadyRunningError",
    "WatcherClosedError",
    "StreamClosedError",
    # Components
    "FolderFilter",
    "normalize_exclusions",
    "is_excluded",
    "is_hidden",
    "discover_folders",
    "classify",
    "target_path",
    "HandoffStream",
    "Debouncer",
    "RawWatcher",
    "RawEventHandler",
    "FolderFollower",
    # Main Watcher
    "Filewatcher",
    "WatcherState",
]

__version__ = "0.1.0"
