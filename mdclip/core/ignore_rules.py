# mdclip/core/ignore_rules.py
from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from typing import Dict, Optional

from pathspec import PathSpec

from mdclip.config import GITIGNORE_FILENAME
from mdclip.core.host import Host
from mdclip.utils.logger import logger


@dataclass(frozen=True)
class IgnoreRuleSet:
    root: str
    spec: Optional[PathSpec]     # None: no .gitignore (or unreadable)
    digest: Optional[str]        # sha1 of the .gitignore bytes it was built from

    def matches(self, rel_path: str) -> bool:
        if self.spec is None:
            return False
        return self.spec.match_file(rel_path)


def relative_posix(path: str, root: str) -> Optional[str]:
    """Path relative to root with '/' separators; None when outside root."""
    try:
        rel = os.path.relpath(os.path.abspath(path), os.path.abspath(root))
    except ValueError:
        return None
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return None
    return rel.replace(os.sep, "/").replace("\\", "/")


class IgnoreRuleEngine:
    """
    Answers "is this path excluded by the workspace .gitignore?".

    Rule sets are compiled once per root and cached. Each cache entry keeps
    the digest of the file it came from; after ``revalidate()`` the next
    lookup for a root re-reads the .gitignore and rebuilds only when the
    bytes changed. ``clear()`` drops entries outright.
    """

    def __init__(self, host: Host):
        self.host = host
        self._cache: Dict[str, IgnoreRuleSet] = {}
        self._stale: set[str] = set()

    def is_ignored(self, path: str, root: Optional[str]) -> bool:
        if not root:
            return False
        try:
            rel_path = relative_posix(path, root)
            if rel_path is None:
                return False
            rules = self._rules_for(os.path.abspath(root))
            ignored = rules.matches(rel_path)
            if ignored:
                logger.debug(f"Ignored by {GITIGNORE_FILENAME}: {rel_path}")
            return ignored
        except Exception as e:
            # fail open
            logger.warning(f"Ignore check failed for {path}: {e}")
            return False

    def revalidate(self) -> None:
        """Mark every cached rule set for a freshness check on next use."""
        self._stale.update(self._cache)

    def clear(self, root: Optional[str] = None) -> None:
        if root is None:
            self._cache.clear()
            self._stale.clear()
            return
        root = os.path.abspath(root)
        self._cache.pop(root, None)
        self._stale.discard(root)

    def _rules_for(self, root: str) -> IgnoreRuleSet:
        cached = self._cache.get(root)
        if cached is not None and root not in self._stale:
            return cached
        self._stale.discard(root)

        gi = os.path.join(root, GITIGNORE_FILENAME)
        try:
            raw = self.host.read_bytes(gi)
        except OSError:
            rules = IgnoreRuleSet(root=root, spec=None, digest=None)
            self._cache[root] = rules
            return rules

        digest = hashlib.sha1(raw).hexdigest()
        if cached is not None and cached.digest == digest:
            return cached

        try:
            lines = raw.decode("utf-8", errors="ignore").splitlines()
            spec = PathSpec.from_lines("gitwildmatch", lines)
            logger.info(f"Loaded {GITIGNORE_FILENAME} for {root} ({len(lines)} lines)")
        except Exception as e:
            logger.warning(f"Failed to parse {gi}: {e}")
            spec = None
        rules = IgnoreRuleSet(root=root, spec=spec, digest=digest)
        self._cache[root] = rules
        return rules
