# mdclip/core/host.py
"""
The environment a copy operation runs in.

Everything the core needs from the outside world goes through a ``Host``:
directory listings, file bytes, file text, workspace roots and the
clipboard. ``LocalHost`` implements it on top of the local filesystem and
pyperclip; tests use in-memory hosts.
"""
from __future__ import annotations

import os
import sys
from typing import Iterable, List, Literal, Optional, Protocol, Sequence, Tuple

import pyperclip

from mdclip.errors import ClipboardError
from mdclip.utils.encoding_detector import decode_text
from mdclip.utils.logger import logger

ListingKind = Literal["file", "directory", "other"]


class Host(Protocol):
    def list_dir(self, path: str) -> Sequence[Tuple[str, ListingKind]]: ...

    def read_bytes(self, path: str) -> bytes: ...

    def read_text(self, path: str) -> str: ...

    def get_workspace_root(self, path: str) -> Optional[str]: ...

    def write_clipboard(self, text: str) -> None: ...


class Notifier(Protocol):
    """User-facing messages (the editor's info/warning/error popups)."""
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def _is_within(path: str, root: str) -> bool:
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # different drives on Windows
        return False


class LocalHost:
    """Filesystem + system clipboard."""

    def __init__(self, workspace_roots: Iterable[str] | None = None):
        roots = workspace_roots if workspace_roots is not None else [os.getcwd()]
        self.workspace_roots: List[str] = [os.path.abspath(r) for r in roots]

    def list_dir(self, path: str) -> List[Tuple[str, ListingKind]]:
        """
        List a directory as (name, kind) pairs, sorted case-insensitively.

        Symlinks to directories are reported as 'other' so a recursive walk
        cannot loop; symlinks to files are plain files.
        """
        out: List[Tuple[str, ListingKind]] = []
        with os.scandir(path) as it:
            for de in it:
                try:
                    if de.is_dir(follow_symlinks=False):
                        kind: ListingKind = "directory"
                    elif de.is_file(follow_symlinks=True):
                        kind = "file"
                    else:
                        kind = "other"
                except OSError as e:
                    logger.debug(f"Cannot stat {de.path}: {str(e)}")
                    kind = "other"
                out.append((de.name, kind))
        out.sort(key=lambda item: item[0].lower())
        return out

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def read_text(self, path: str) -> str:
        return decode_text(self.read_bytes(path), path)

    def get_workspace_root(self, path: str) -> Optional[str]:
        path = os.path.abspath(path)
        matches = [r for r in self.workspace_roots if _is_within(path, r)]
        # innermost root wins for nested workspaces
        return max(matches, key=len) if matches else None

    def write_clipboard(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Could not write to the clipboard: {e}") from e


class StdoutHost(LocalHost):
    """LocalHost that prints the Markdown instead of touching the clipboard."""

    def __init__(self, workspace_roots: Iterable[str] | None = None, stream=None):
        super().__init__(workspace_roots)
        self.stream = stream

    def write_clipboard(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        if not text.endswith("\n"):
            stream.write("\n")
        stream.flush()


class LoggingNotifier:
    """Notifier that only logs; the default when no UI is attached."""

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)
