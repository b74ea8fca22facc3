# mdclip/core/copy_orchestrator.py
from __future__ import annotations

import os
from typing import Callable, List, Optional, Sequence

from mdclip.config import GITIGNORE_FILENAME, CopyConfig
from mdclip.core.binary_classifier import BinaryClassifier
from mdclip.core.directory_walker import DirectoryWalker
from mdclip.core.host import Host, LoggingNotifier, Notifier
from mdclip.core.ignore_rules import IgnoreRuleEngine
from mdclip.core.limit_guard import LimitGuard, total_text_chars
from mdclip.core.markdown_renderer import render
from mdclip.core.models import Classification, CopyResult, Entry
from mdclip.errors import ClipboardError, ConfigError
from mdclip.utils.logger import logger


class CopyOrchestrator:
    """
    The copy commands: one file, the current tab, all open tabs, a folder,
    a folder tree.

    Every command runs Gather -> Filter/Classify -> LimitCheck -> Render ->
    WriteClipboard -> Notify and reports failures through the notifier and
    the returned ``CopyResult``; nothing is raised to the caller. The only
    state kept between commands is the ignore-rule cache.
    """

    def __init__(
        self,
        host: Host,
        config: Optional[CopyConfig] = None,
        notifier: Optional[Notifier] = None,
        ignore_engine: Optional[IgnoreRuleEngine] = None,
    ):
        self.host = host
        self.config = config or CopyConfig()
        self.notifier = notifier or LoggingNotifier()
        self.ignore_engine = ignore_engine or IgnoreRuleEngine(host)

    # ---------- public API ----------

    def copy_file(self, path: str) -> CopyResult:
        path = os.path.abspath(path)
        failure = self._start()
        if failure:
            return failure

        if self.config.use_gitignore and self.ignore_engine.is_ignored(path, self.host.get_workspace_root(path)):
            return self._fail(f"Selected file is excluded by {GITIGNORE_FILENAME}", warning=True)
        return self._copy_single(path)

    def copy_current_tab(self, path: Optional[str]) -> CopyResult:
        if not path:
            return self._fail("No active editor found.")
        failure = self._start()
        if failure:
            return failure
        return self._copy_single(os.path.abspath(path))

    def copy_all_open_tabs(self, paths: Sequence[str]) -> CopyResult:
        if not paths:
            return self._fail("No open editors found.")
        failure = self._start()
        if failure:
            return failure

        entries: List[Entry] = []
        for p in paths:
            entry = self._read_entry(os.path.abspath(p))
            if entry is None:
                logger.error(f"Failed to read file: {p}")
                continue
            entries.append(entry)

        if not entries:
            return self._fail("No open editors found.")

        rel = ", ".join(self.relative_path(e.path) for e in entries)
        return self._check_and_write(entries, f"Copied {len(entries)} tab(s): {rel}")

    def copy_folder(self, path: str, recursive: bool = False) -> CopyResult:
        failure = self._start()
        if failure:
            return failure

        walker = DirectoryWalker(self.host, self.config, self.ignore_engine, self._classifier())
        entries = walker.walk(path, recursive)
        if walker.last_error:
            return self._fail(walker.last_error)
        files = [e for e in entries if not e.is_directory]
        if not files:
            return self._fail("No files found to copy.", warning=True)

        rel = ", ".join(self.relative_path(e.path) for e in files)
        return self._check_and_write(entries, f"Copied {len(files)} file(s): {rel}")

    def copy_folder_recursive(self, path: str) -> CopyResult:
        return self.copy_folder(path, recursive=True)

    def relative_path(self, path: str) -> str:
        """Path relative to its workspace root, or the bare file name."""
        root = self.host.get_workspace_root(path)
        if root:
            rel = os.path.relpath(path, root)
            return os.path.basename(path) if rel == os.curdir else rel
        return os.path.basename(path)

    # ---------- pipeline steps ----------

    def _start(self) -> Optional[CopyResult]:
        try:
            self.config.validate()
        except ConfigError as e:
            return self._fail(f"Invalid settings: {e}")
        self.ignore_engine.revalidate()
        return None

    def _classifier(self) -> BinaryClassifier:
        return BinaryClassifier(self.host, self.config.classification)

    def _read_entry(self, path: str) -> Optional[Entry]:
        # explicit targets must exist and be readable, whatever their extension
        try:
            data = self.host.read_bytes(path)
        except OSError as e:
            logger.debug(f"Cannot read {path}: {str(e)}")
            return None

        classifier = self._classifier()
        kind = classifier.classify_extension(path)
        if kind is None:
            kind = classifier.classify_bytes(data, path)
        if kind is Classification.BINARY:
            return Entry.binary(path)
        try:
            return Entry.text(path, self.host.read_text(path))
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Cannot read {path} as text: {str(e)}")
            return None

    def _copy_single(self, path: str) -> CopyResult:
        entry = self._read_entry(path)
        if entry is None:
            return self._fail(f'Failed to read "{self.relative_path(path)}".')
        return self._check_and_write([entry], f'Copied "{self.relative_path(path)}" to clipboard.')

    def _check_and_write(self, entries: List[Entry], summary: str) -> CopyResult:
        guard = LimitGuard(self.config.limits, self.notifier)
        # directory markers are not files
        if not guard.check_count(sum(1 for e in entries if not e.is_directory)):
            return CopyResult(ok=False, message="Too many files selected.", entries=entries)
        if not guard.check_size(total_text_chars(entries)):
            return CopyResult(ok=False, message="Content is too large.", entries=entries)

        markdown = render(entries, self._heading_formatter())
        try:
            self.host.write_clipboard(markdown)
        except ClipboardError as e:
            result = self._fail(str(e))
            result.entries = entries
            return result

        self.notifier.info(summary)
        logger.info(f"{summary} ({len(markdown)} characters)")
        return CopyResult(ok=True, message=summary, markdown=markdown, entries=entries)

    def _heading_formatter(self) -> Optional[Callable[[str], str]]:
        if self.config.relative_paths:
            return lambda p: self.relative_path(p).replace(os.sep, "/")
        return None

    def _fail(self, message: str, warning: bool = False) -> CopyResult:
        if warning:
            self.notifier.warning(message)
        else:
            self.notifier.error(message)
        return CopyResult(ok=False, message=message)
