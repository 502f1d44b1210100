"""Line parser for sysctl-style `key = value` configuration text.

Each non-blank, non-comment line must hold one assignment. The key is the
text before the first unescaped `=` and the value is everything after it,
both trimmed of surrounding whitespace. Parsing stops at the first malformed
line, and no partially filled store is ever returned.
"""
import logging
import re
from pathlib import Path
from typing import IO, Optional, Sequence, Tuple, Union

from .errors import ParseError
from .store import ConfigStore

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_PREFIXES = ("#", ";")

BYTE_ORDER_MARK = "\ufeff"

# An `=` that is not preceded by a backslash.
_SEPARATOR_RE = re.compile(r"(?<!\\)=")


def _is_skippable(stripped: str, comment_prefixes: Sequence[str]) -> bool:
    """Returns True for blank lines and comment lines."""
    return not stripped or stripped.startswith(tuple(comment_prefixes))


def parse_line(line: str, line_number: int) -> Tuple[str, str]:
    """Splits a single assignment line into its key and value.

    Args:
        line (str): The raw line, without its line terminator.
        line_number (int): The 1-based line number, for error reporting.

    Returns:
        Tuple[str, str]: The trimmed key and value.

    Raises:
        ParseError: If the line has no `=` separator or its key is empty.
    """
    match = _SEPARATOR_RE.search(line)
    if match is None:
        raise ParseError(line_number, "missing '=' separator")

    key = line[:match.start()].strip().replace("\\=", "=")
    value = line[match.end():].strip()
    if not key:
        raise ParseError(line_number, "empty key")
    return key, value


def parse(text: str, comment_prefixes: Optional[Sequence[str]] = None) -> ConfigStore:
    """Parses configuration text into a new `ConfigStore`.

    Args:
        text (str): The whole configuration document. A leading UTF-8
            byte order mark is ignored.
        comment_prefixes (Optional[Sequence[str]]): Prefixes that mark a
            comment line once leading whitespace is stripped. Defaults to
            `#` and `;`.

    Returns:
        ConfigStore: The parsed settings, in first-occurrence order.

    Raises:
        ParseError: On the first line that is not a valid assignment.
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    prefixes = DEFAULT_COMMENT_PREFIXES if comment_prefixes is None else tuple(comment_prefixes)
    store = ConfigStore()

    for line_number, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if _is_skippable(stripped, prefixes):
            continue
        key, value = parse_line(stripped, line_number)
        if key in store:
            logger.debug(f"Line {line_number}: overriding earlier value of '{key}'.")
        store.set(key, value)

    logger.info(f"Parsed {len(store)} setting(s).")
    return store


def parse_stream(stream: IO[str], comment_prefixes: Optional[Sequence[str]] = None) -> ConfigStore:
    """Reads a text stream to the end and parses its contents."""
    return parse(stream.read(), comment_prefixes)


def parse_file(path: Union[str, Path], comment_prefixes: Optional[Sequence[str]] = None) -> ConfigStore:
    """Reads a UTF-8 file and parses its contents.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If the contents are malformed.
    """
    logger.debug(f"Reading configuration from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return parse_stream(f, comment_prefixes)
