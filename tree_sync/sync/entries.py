"""Set algebra over directory listings.

Entries are compared by name only. A name present on both sides is an update
candidate even when its kind differs; the diff decides what that means.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from tree_sync.fs.base import DirEntry


class EntrySet:
    """Name-keyed entries of one directory, iterated in name order."""

    def __init__(self, entries: Iterable[DirEntry] = ()):
        self._entries: Dict[str, DirEntry] = {}
        for entry in entries:
            self._entries[entry.name] = entry

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DirEntry]:
        return iter(self.list())

    def get(self, name: str) -> Optional[DirEntry]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def list(self) -> List[DirEntry]:
        return [self._entries[name] for name in self.names()]


def difference(a: EntrySet, b: EntrySet) -> List[DirEntry]:
    """Entries of ``a`` with no same-named entry in ``b``."""
    return [entry for entry in a if entry.name not in b]


def intersection(a: EntrySet, b: EntrySet) -> List[DirEntry]:
    """Entries of ``a`` that also appear by name in ``b``."""
    return [entry for entry in a if entry.name in b]


@dataclass
class Classification:
    """Entries of one directory level split by what they need.

    Attributes:
        creates: Only in the source
        deletes: Only in the target
        updates: In both (source-side descriptors)
    """
    creates: List[DirEntry] = field(default_factory=list)
    deletes: List[DirEntry] = field(default_factory=list)
    updates: List[DirEntry] = field(default_factory=list)


def classify(source: EntrySet, target: EntrySet) -> Classification:
    """Split a source and target listing into create, delete and update candidates."""
    return Classification(
        creates=difference(source, target),
        deletes=difference(target, source),
        updates=intersection(source, target),
    )
