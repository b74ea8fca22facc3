# mdclip/core/binary_classifier.py
from __future__ import annotations

import os
from typing import Tuple

from mdclip.config import ClassificationConfig
from mdclip.core.host import Host
from mdclip.core.models import Classification
from mdclip.utils.logger import logger

# Leading bytes of formats that are never text
MAGIC_NUMBERS: Tuple[Tuple[str, bytes], ...] = (
    ("jpeg", b"\xff\xd8\xff"),
    ("png", b"\x89PNG"),
    ("gif", b"GIF"),
    ("zip", b"PK\x03\x04"),        # also jar, docx/xlsx/pptx
    ("pdf", b"%PDF"),
    ("elf", b"\x7fELF"),
    ("ole2", b"\xd0\xcf\x11\xe0"),  # legacy MS Office
)

# Control bytes that still occur in plain text: TAB, LF, CR
_TEXT_WHITESPACE = {9, 10, 13}
_CONTROL_BYTES = frozenset(
    b for b in list(range(32)) + list(range(0x7F, 0xA0)) if b not in _TEXT_WHITESPACE
)


def file_extension(path: str) -> str:
    return os.path.splitext(path)[1].lower()


def match_magic(data: bytes) -> str | None:
    for name, signature in MAGIC_NUMBERS:
        if data.startswith(signature):
            return name
    return None


def control_char_ratio(data: bytes) -> float:
    if not data:
        return 0.0
    control = sum(1 for b in data if b in _CONTROL_BYTES)
    return control / len(data)


class BinaryClassifier:
    def __init__(self, host: Host, config: ClassificationConfig | None = None):
        self.host = host
        self.config = config or ClassificationConfig()

    def classify(self, path: str) -> Classification:
        by_extension = self.classify_extension(path)
        if by_extension is not None:
            return by_extension

        try:
            data = self.host.read_bytes(path)
        except OSError as e:
            # fail safe
            logger.warning(f"Cannot inspect {path}, treating as binary: {str(e)}")
            return Classification.BINARY
        return self.classify_bytes(data, path)

    def classify_extension(self, path: str) -> Classification | None:
        ext = file_extension(path)
        if ext and ext in self.config.text_extensions:
            return Classification.TEXT
        if ext and ext in self.config.binary_extensions:
            return Classification.BINARY
        return None

    def classify_bytes(self, data: bytes, path: str = "") -> Classification:
        """Content sniffing for files whose extension is not known."""
        if not data:
            return Classification.TEXT

        magic = match_magic(data)
        if magic:
            logger.debug(f"Binary by signature ({magic}): {path}")
            return Classification.BINARY

        if self.config.null_byte_check and b"\x00" in data:
            logger.debug(f"Binary by null byte: {path}")
            return Classification.BINARY

        if self.config.control_char_check:
            ratio = control_char_ratio(data)
            if ratio > self.config.control_char_ratio:
                logger.debug(f"Binary by control characters ({ratio:.2f}): {path}")
                return Classification.BINARY

        return Classification.TEXT
