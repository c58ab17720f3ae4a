"""
Read D source files into text.

D sources may be UTF-8, UTF-16 or UTF-32; the wider encodings are marked by
a byte order mark. Unmarked files are read as UTF-8 with a latin-1 fallback,
which accepts any byte sequence.
"""
import codecs
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = [
    "decode_source",
    "read_source_file",
]

# UTF-32 marks start with the UTF-16 ones, so they are checked first
_BOM_CODECS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)

_FALLBACK_ENCODINGS: tuple[str, ...] = ('utf-8', 'latin-1')


def decode_source(data: bytes, name: str = "<bytes>") -> Optional[str]:
    """
    Decode the raw bytes of a D source file.

    Args:
        data: File contents
        name: Used in log messages only

    Returns:
        Decoded text without a byte order mark, or None if a marked file
        does not decode in its declared encoding
    """
    for bom, encoding in _BOM_CODECS:
        if data.startswith(bom):
            try:
                return data.decode(encoding)
            except UnicodeDecodeError as e:
                logger.warning("Invalid %s in %s: %s", encoding, name, e)
                return None

    for encoding in _FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("%s decode failed for %s", encoding, name)
    return None


def read_source_file(filepath: Path | str) -> Optional[str]:
    """
    Read a source or manifest file and return its text.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        File contents as string, or None if the file can't be read
    """
    path = Path(filepath)
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e.strerror or type(e).__name__)
        return None
    return decode_source(data, str(path))
