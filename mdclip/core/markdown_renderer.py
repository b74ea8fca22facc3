# mdclip/core/markdown_renderer.py

import os
import re
from typing import Callable, Iterable, List, Optional

from mdclip.core.models import Entry

DIRECTORY_MARKER = "(Directory)"
EMPTY_DIRECTORY_MARKER = "(Empty Directory)"
BINARY_MARKER = "(Binary File)"

_BACKTICK_RUN = re.compile(r"`+")


def language_tag(path: str) -> str:
    ext = os.path.splitext(os.path.basename(path))[1]
    return ext[1:].lower() or "txt"


def fence_for(content: str) -> str:
    """Backtick fence longer than any backtick run inside the content (min 3)."""
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN.finditer(content)), default=0)
    return "`" * max(3, longest + 1)


def _block(entry: Entry, heading: str) -> str:
    if entry.is_directory:
        body = EMPTY_DIRECTORY_MARKER if entry.is_empty else DIRECTORY_MARKER
        opening, closing = "```", "```"
    elif entry.is_binary:
        body = BINARY_MARKER
        opening, closing = "```", "```"
    else:
        body = entry.content
        closing = fence_for(body)
        opening = closing + language_tag(entry.path)

    return "\n".join([f"# {heading}", "", opening, body, closing, ""])


def render(entries: Iterable[Entry], path_formatter: Optional[Callable[[str], str]] = None) -> str:
    """
    Render entries as one Markdown document.

    Each entry becomes ``# <path>``, a blank line and a fenced block; blocks
    are separated by a blank line. ``path_formatter`` turns the entry path
    into the heading text (default: the path as is).
    """
    fmt = path_formatter or (lambda p: p)
    blocks: List[str] = [_block(e, fmt(e.path)) for e in entries]
    return "\n".join(blocks)
