"""Folder exclusion and hidden-folder rules."""

import os
from dataclasses import dataclass
from typing import Iterable, List, Tuple


HIDDEN_PREFIX = "."
SEPARATORS = "/\\"


def normalize_exclusions(patterns: Iterable[str]) -> List[str]:
    """
    Normalize folder exclusion patterns for segment matching.
    
    Leading and trailing separators are trimmed, empty patterns are
    dropped and the rest are wrapped with os.sep on both sides.
    
    Args:
        patterns: Raw folder names or folder name fragments
        
    Returns:
        Normalized patterns, e.g. "exclude/" becomes "/exclude/"
    """
    normalized = []
    for pattern in patterns:
        folder = pattern.strip(SEPARATORS)
        if not folder:
            continue
        normalized.append(f"{os.sep}{folder}{os.sep}")
    return normalized


def is_excluded(path: str, normalized: Iterable[str]) -> bool:
    """
    Check if a path contains an excluded folder.
    
    Only whole segments match: "/exclude/" matches ".../exclude/..."
    but never "excludeFoo" or "fooexclude".
    
    Args:
        path: Candidate path
        normalized: Patterns from normalize_exclusions()
        
    Returns:
        True if any pattern occurs in the separator-wrapped path
    """
    wrapped = f"{os.sep}{path}{os.sep}"
    return any(pattern in wrapped for pattern in normalized)


def is_hidden(path: str) -> bool:
    """Check if the last segment of a path starts with a dot."""
    name = os.path.basename(path)
    if name == ".":
        name = os.path.basename(os.path.abspath(path))
    return name.startswith(HIDDEN_PREFIX)


@dataclass(frozen=True)
class FolderFilter:
    """
    Decides which folders may be observed.
    
    Attributes:
        exclusions: Patterns already passed through normalize_exclusions()
        include_hidden: Whether folders starting with "." are allowed
    """
    exclusions: Tuple[str, ...] = ()
    include_hidden: bool = False

    @classmethod
    def from_patterns(cls, patterns: Iterable[str], include_hidden: bool = False) -> "FolderFilter":
        """Build a filter from raw exclusion patterns."""
        return cls(tuple(normalize_exclusions(patterns)), include_hidden)

    def allows(self, path: str) -> bool:
        """Return True if the folder passes the hidden and exclusion rules."""
        if not self.include_hidden and is_hidden(path):
            return False
        return not is_excluded(path, self.exclusions)
