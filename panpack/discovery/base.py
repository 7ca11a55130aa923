"""Base classes for entry-point scanners."""

from abc import ABC, abstractmethod
from typing import Iterable, List


class EntryPointScanner(ABC):
    """Contract for scanners that list the exported functions of a crate."""

    name = "base"

    @abstractmethod
    def scan(self, source: str) -> List[str]:
        """Return exported function names ordered by first occurrence.

        Names found through the public ``fn`` pattern come first; names only
        reachable through the ``#[panpan_export]`` marker follow.
        """


def merge_ordered(primary: Iterable[str], secondary: Iterable[str]) -> List[str]:
    """Deduplicate names, keeping first-occurrence order with ``primary`` first."""
    merged: List[str] = []
    seen: set[str] = set()
    for name in list(primary) + list(secondary):
        if name not in seen:
            merged.append(name)
            seen.add(name)
    return merged
