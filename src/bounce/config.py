"""Configuration for the bounce package."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .exceptions import ConfigError


@dataclass
class WatcherConfig:
    """
    Configuration options for the debounced watcher.
    
    Attributes:
        roots: Root folders to observe (at least one)
        poll_interval_ms: Interval between filesystem polls
        folder_exclusions: Folder names whose subtrees are never observed
        include_hidden: Whether to observe folders starting with "."
        exclude_subdirs: Only observe the literal roots, skip discovery
        follow_new_folders: Start observing folders created while running
    """
    roots: List[Union[str, Path]]
    poll_interval_ms: int
    folder_exclusions: List[str] = field(default_factory=list)
    include_hidden: bool = False
    exclude_subdirs: bool = False
    follow_new_folders: bool = False

    def __post_init__(self):
        if not self.roots:
            raise ConfigError("at least one root folder is required")
        if isinstance(self.poll_interval_ms, bool) or not isinstance(self.poll_interval_ms, (int, float)):
            raise ConfigError(f"poll_interval_ms must be a number: {self.poll_interval_ms!r}")
        if self.poll_interval_ms <= 0:
            raise ConfigError(f"poll_interval_ms must be positive: {self.poll_interval_ms}")
        self.roots = [str(root) for root in self.roots]
        self.folder_exclusions = list(self.folder_exclusions)

    @property
    def settle_ms(self) -> int:
        """Quiet period before a path counts as settled, always twice the poll interval."""
        return 2 * self.poll_interval_ms

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    @property
    def settle_seconds(self) -> float:
        """Settle duration in seconds."""
        return self.settle_ms / 1000.0
