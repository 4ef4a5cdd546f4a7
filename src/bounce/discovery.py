"""Discovery of the folders to observe under each root."""

import logging
import os
import stat
from typing import Iterable, List, Sequence

from .exceptions import DiscoveryError, RootNotFoundError
from .exclusions import FolderFilter

logger = logging.getLogger(__name__)


def discover_folders(
    roots: Sequence[str],
    exclude_subdirs: bool = False,
    include_hidden: bool = False,
    exclusions: Iterable[str] = (),
) -> List[str]:
    """
    Walk the root folders and collect every folder to observe.
    
    With exclude_subdirs the roots are returned as given, without any
    traversal or filtering. Otherwise each root is walked depth first: a
    folder is kept if it passes the hidden and exclusion rules, and a
    folder that fails them is pruned together with its whole subtree.
    Parents come before their children and siblings keep the order of
    the directory listing.
    
    Args:
        roots: Root folders, in the order they should be walked
        exclude_subdirs: Only return the literal roots
        include_hidden: Keep folders whose name starts with "."
        exclusions: Normalized exclusion patterns (see normalize_exclusions)
        
    Returns:
        Folder paths, joined onto the roots as given
        
    Raises:
        RootNotFoundError: If a root does not exist
        DiscoveryError: If a root or one of its folders cannot be read
    """
    if exclude_subdirs:
        return list(roots)

    folder_filter = FolderFilter(tuple(exclusions), include_hidden)
    folders: List[str] = []
    for root in roots:
        try:
            mode = os.stat(root).st_mode
        except FileNotFoundError as e:
            raise RootNotFoundError(f"Root folder does not exist: {root}") from e
        except OSError as e:
            raise DiscoveryError(f"Cannot read root folder {root}: {e}") from e

        if not stat.S_ISDIR(mode):
            logger.debug(f"Skipping root that is not a folder: {root}")
            continue
        folders.extend(walk_folders(root, folder_filter))

    logger.debug(f"Discovered {len(folders)} folder(s) under {len(roots)} root(s)")
    return folders


def walk_folders(root: str, folder_filter: FolderFilter) -> List[str]:
    """
    Collect root and its allowed subfolders in pre-order.
    
    Raises:
        DiscoveryError: If a folder cannot be listed
    """
    if not folder_filter.allows(root):
        return []

    folders: List[str] = []
    stack = [root]
    while stack:
        path = stack.pop()
        folders.append(path)
        try:
            with os.scandir(path) as entries:
                children = [
                    os.path.join(path, entry.name)
                    for entry in entries
                    if entry.is_dir(follow_symlinks=False)
                ]
        except OSError as e:
            raise DiscoveryError(f"Cannot list folder {path}: {e}") from e

        # reversed so the first listed child is visited first
        for child in reversed(children):
            if folder_filter.allows(child):
                stack.append(child)
    return folders
