# mdclip/core/directory_walker.py

import os
from typing import List, Optional

from mdclip.config import CopyConfig
from mdclip.core.binary_classifier import BinaryClassifier
from mdclip.core.host import Host
from mdclip.core.ignore_rules import IgnoreRuleEngine
from mdclip.core.models import Classification, Entry
from mdclip.utils.logger import logger


class DirectoryWalker:
    """
    Depth-first walk of one directory into a flat list of entries.

    Output follows the host's listing order; nothing is re-sorted here.
    The directory itself always comes first. If the root cannot be listed,
    ``walk`` returns an empty list and ``last_error`` says why.
    """

    def __init__(
        self,
        host: Host,
        config: CopyConfig,
        ignore_engine: Optional[IgnoreRuleEngine] = None,
        classifier: Optional[BinaryClassifier] = None,
    ):
        self.host = host
        self.config = config
        self.ignore_engine = ignore_engine or IgnoreRuleEngine(host)
        self.classifier = classifier or BinaryClassifier(host, config.classification)
        self.last_error: Optional[str] = None

    def walk(self, root: str, recursive: bool) -> List[Entry]:
        self.last_error = None
        root = os.path.abspath(root)
        workspace_root = self.host.get_workspace_root(root)
        try:
            listing = self.host.list_dir(root)
        except OSError as e:
            self.last_error = f"Failed to read directory {root}: {e.strerror or e}"
            logger.error(self.last_error)
            return []

        entries: List[Entry] = []
        self._visit(root, listing, recursive, workspace_root, entries)
        logger.info(f"Walked {root} (recursive={recursive}): {len(entries)} entries")
        return entries

    def _visit(self, dir_path, listing, recursive, workspace_root, out: List[Entry]):
        out.append(Entry.directory(dir_path, is_empty=len(listing) == 0))
        excluded = self.config.classification.excluded_directories

        for name, kind in listing:
            child = os.path.join(dir_path, name)

            if kind == "directory":
                if name in excluded:
                    logger.debug(f"Excluding folder due to name match: {child}")
                    continue
                try:
                    sub_listing = self.host.list_dir(child)
                except OSError as e:
                    if recursive:
                        logger.warning(f"Skipping unreadable folder {child}: {e}")
                        continue
                    logger.warning(f"Cannot list {child}, reporting as non-empty: {e}")
                    out.append(Entry.directory(child, is_empty=False))
                    continue
                if recursive:
                    self._visit(child, sub_listing, recursive, workspace_root, out)
                else:
                    out.append(Entry.directory(child, is_empty=len(sub_listing) == 0))

            elif kind == "file":
                entry = self._file_entry(child, workspace_root)
                if entry is not None:
                    out.append(entry)

            else:
                logger.debug(f"Skipping special entry: {child}")

    def _file_entry(self, path: str, workspace_root: Optional[str]) -> Optional[Entry]:
        if self.config.use_gitignore and self.ignore_engine.is_ignored(path, workspace_root):
            return None

        if self.classifier.classify(path) is Classification.BINARY:
            return Entry.binary(path)

        try:
            return Entry.text(path, self.host.read_text(path))
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Skipping unreadable file {path}: {str(e)}")
            return None
