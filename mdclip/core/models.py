# mdclip/core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Classification(str, Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class Entry:
    """
    One traversal result.

    A file entry carries either its text ``content`` or ``is_binary=True``;
    a directory entry carries only ``is_empty``.
    """
    path: str
    kind: EntryKind
    content: str | None = None
    is_binary: bool = False
    is_empty: bool = False

    def __post_init__(self):
        if self.kind is EntryKind.DIRECTORY:
            if self.content is not None or self.is_binary:
                raise ValueError(f"Directory entry cannot carry file data: {self.path}")
        elif self.is_binary == (self.content is not None):
            raise ValueError(f"File entry needs exactly one of content / is_binary: {self.path}")
        elif self.is_empty:
            raise ValueError(f"is_empty only applies to directories: {self.path}")

    @classmethod
    def text(cls, path: str, content: str) -> "Entry":
        return cls(path=path, kind=EntryKind.FILE, content=content)

    @classmethod
    def binary(cls, path: str) -> "Entry":
        return cls(path=path, kind=EntryKind.FILE, is_binary=True)

    @classmethod
    def directory(cls, path: str, is_empty: bool) -> "Entry":
        return cls(path=path, kind=EntryKind.DIRECTORY, is_empty=is_empty)

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_text(self) -> bool:
        return self.content is not None


@dataclass
class CopyResult:
    ok: bool
    message: str
    markdown: str | None = None
    entries: List[Entry] = field(default_factory=list)
