"""Sync operations produced by the diff and replayed by apply."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class OpType(Enum):
    """Kind of change to make at a path."""
    CREATE = 1
    UPDATE = 2
    DELETE = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Op:
    """A single change to the target tree.

    Attributes:
        type: Create, update or delete
        path: Slash path relative to the sync root
        data: Full file content; None for deletes
        mtime_ns: Source modification time to give the written file;
            None leaves the target's own write time
    """
    type: OpType
    path: str
    data: Optional[bytes] = None
    mtime_ns: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        """Deletes carry no data; creates and updates must."""
        if self.type is OpType.DELETE:
            if self.data is not None:
                raise ValueError(f"Delete operation carries data: {self.path}")
            if self.mtime_ns is not None:
                raise ValueError(f"Delete operation carries mtime: {self.path}")
        elif self.data is None:
            raise ValueError(f"{self.type} operation without data: {self.path}")

    def __str__(self) -> str:
        return f"{self.type}:{self.path}"

    @classmethod
    def create(cls, path: str, data: bytes, mtime_ns: Optional[int] = None) -> "Op":
        return cls(OpType.CREATE, path, data, mtime_ns)

    @classmethod
    def update(cls, path: str, data: bytes, mtime_ns: Optional[int] = None) -> "Op":
        return cls(OpType.UPDATE, path, data, mtime_ns)

    @classmethod
    def delete(cls, path: str) -> "Op":
        return cls(OpType.DELETE, path)
