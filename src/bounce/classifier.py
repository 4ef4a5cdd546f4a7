"""Normalization of raw change records into canonical paths."""

import os
from typing import Optional

from .models import MOVE_MARKER, Op, RawEvent


def target_path(raw_path: str) -> str:
    """
    Extract the destination from a "<old> -> <new>" path.
    
    Paths without the marker are returned unchanged.
    """
    index = raw_path.find(MOVE_MARKER)
    if index == -1:
        return raw_path
    return raw_path[index + len(MOVE_MARKER):]


def classify(raw_path: str, op: Op, is_directory: bool = False) -> Optional[str]:
    """
    Turn a raw event path into the canonical absolute path used as debounce key.
    
    Args:
        raw_path: Path as reported by the raw watcher
        op: Operation of the event; RENAME and MOVE carry "<old> -> <new>"
        is_directory: Whether the event is for a directory
        
    Returns:
        Absolute path, or None if the event should be dropped
    """
    path = target_path(raw_path) if op in (Op.RENAME, Op.MOVE) else raw_path
    if not path:
        return None
    try:
        return os.path.abspath(path)
    except (OSError, ValueError):
        return None


def classify_event(event: RawEvent) -> Optional[str]:
    """Classify a RawEvent, see classify()."""
    return classify(event.path, event.op, event.is_directory)
