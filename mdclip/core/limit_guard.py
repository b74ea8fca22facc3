# mdclip/core/limit_guard.py
from __future__ import annotations

from typing import Iterable, Optional

from mdclip.config import LimitPolicy
from mdclip.core.host import LoggingNotifier, Notifier
from mdclip.core.models import Entry

RETRY_HINT = "Please reduce the selection and try again."


def total_text_chars(entries: Iterable[Entry]) -> int:
    """Characters of text content; binary and directory entries count zero."""
    return sum(len(e.content) for e in entries if e.content is not None)


class LimitGuard:
    def __init__(self, policy: Optional[LimitPolicy] = None, notifier: Optional[Notifier] = None):
        self.policy = policy or LimitPolicy()
        self.notifier = notifier or LoggingNotifier()

    def check_count(self, n: int) -> bool:
        if n > self.policy.max_files:
            self.notifier.error(
                f"Too many files selected. Maximum limit is {self.policy.max_files} files.\n{RETRY_HINT}"
            )
            return False
        return True

    def check_size(self, total_chars: int) -> bool:
        if total_chars > self.policy.max_characters:
            self.notifier.error(
                f"Content is too large. Maximum size is approximately "
                f"{self.policy.max_characters} characters.\n{RETRY_HINT}"
            )
            return False
        return True
