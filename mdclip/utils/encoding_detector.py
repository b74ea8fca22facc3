# mdclip/utils/encoding_detector.py

import chardet
from mdclip.utils.logger import logger

def detect_encoding(raw: bytes) -> str:
    """
    Detect the encoding of a file's bytes.

    Args:
        raw (bytes): File content (only the first 10KB go to chardet)

    Returns:
        str: Detected encoding or 'utf-8' as fallback
    """
    # Fast path: UTF-8 is common; if it decodes, use it without chardet
    try:
        raw.decode('utf-8')
        return 'utf-8'
    except UnicodeDecodeError:
        pass
    result = chardet.detect(raw[:10000])
    return result.get('encoding') or 'utf-8'

def decode_text(raw: bytes, file_path: str = "") -> str:
    """
    Decode file bytes strictly with the detected encoding.

    A UTF-8 BOM is dropped. Raises UnicodeDecodeError (or LookupError for a
    codec Python does not know) when the bytes are not text.
    """
    encoding = detect_encoding(raw)
    if encoding == 'utf-8':
        encoding = 'utf-8-sig'
    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        logger.debug(f"Failed to decode {file_path or '<bytes>'} as {encoding}: {str(e)}")
        raise
