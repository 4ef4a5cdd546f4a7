"""Data models for the bounce package."""

from dataclasses import dataclass
from enum import Enum
import os


# Rename and move paths are reported as "<old path> -> <new path>"
MOVE_MARKER = "-> "


class Op(Enum):
    """Operations reported by the raw watcher."""
    CREATE = "create"
    WRITE = "write"
    REMOVE = "remove"
    RENAME = "rename"
    MOVE = "move"
    CHMOD = "chmod"


@dataclass(frozen=True)
class RawEvent:
    """
    Raw change record from the polling watcher before classification.
    
    Attributes:
        op: The operation that was observed
        path: Path as reported; for RENAME/MOVE this is "<old> -> <new>"
        is_directory: Whether the event is for a directory
    """
    op: Op
    path: str
    is_directory: bool = False

    @classmethod
    def moved(cls, src_path: str, dest_path: str, is_directory: bool = False) -> "RawEvent":
        """Create a RENAME (same folder) or MOVE (different folder) event."""
        same_folder = os.path.dirname(src_path) == os.path.dirname(dest_path)
        return cls(
            op=Op.RENAME if same_folder else Op.MOVE,
            path=f"{src_path} {MOVE_MARKER}{dest_path}",
            is_directory=is_directory,
        )
