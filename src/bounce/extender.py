"""Observation of folders that appear while the watcher runs."""

import logging
from typing import List

from .discovery import walk_folders
from .exceptions import DiscoveryError, RegistrationError
from .exclusions import FolderFilter
from .fs_watcher import RawWatcher
from .models import Op

logger = logging.getLogger(__name__)

FOLLOW_OPS = frozenset({Op.CREATE, Op.MOVE, Op.RENAME})


class FolderFollower:
    """
    Registers newly created or moved-in folders with the raw watcher.
    
    The new folder and its allowed subfolders are registered, using the
    same hidden and exclusion rules as the initial discovery.
    """

    def __init__(self, raw_watcher: RawWatcher, folder_filter: FolderFilter, enabled: bool = False):
        self.raw_watcher = raw_watcher
        self.folder_filter = folder_filter
        self.enabled = enabled

    def should_follow(self, op: Op, path: str, is_directory: bool) -> bool:
        """Check if an event introduces a folder that should be observed."""
        return (
            self.enabled
            and is_directory
            and op in FOLLOW_OPS
            and self.folder_filter.allows(path)
        )

    def follow(self, op: Op, path: str, is_directory: bool) -> List[str]:
        """
        Start observing a new folder if the event calls for it.
        
        Args:
            op: Operation of the event
            path: Canonical absolute path of the folder
            is_directory: Whether the path is a folder
            
        Returns:
            Folders that were newly registered
            
        Raises:
            RegistrationError: If the folder cannot be registered
        """
        if not self.should_follow(op, path, is_directory):
            return []

        try:
            folders = walk_folders(path, self.folder_filter)
        except DiscoveryError as e:
            raise RegistrationError(f"error following new folder: {e}") from e

        added = [folder for folder in folders if self.raw_watcher.add(folder)]
        if added:
            logger.info(f"Following {len(added)} new folder(s) under {path}")
        return added
