"""Line splitting and classification for section/key-value files.

Responsibilities:
- Split raw file bytes into physical lines, the unit of error reporting.
- Classify each trimmed line as blank/comment, section header, or assignment.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from .config import LINE_ENDINGS_CRLF, LINE_ENDINGS_UNIVERSAL
from .errors import IniSyntaxError


_UTF8_BOM = b"\xef\xbb\xbf"
_UNIVERSAL_SPLIT = re.compile(rb"\r?\n")
_COMMENT_PREFIXES = (";", "#")


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """A `[name]` line.

    Attributes:
        line_number: 1-based physical line number.
        name: Trimmed section name between the brackets.
    """

    line_number: int
    name: str


@dataclass(frozen=True, slots=True)
class Assignment:
    """A `key = value` line with both sides trimmed."""

    line_number: int
    key: str
    value: str


def split_lines(content: bytes, line_endings: str = LINE_ENDINGS_UNIVERSAL) -> list[bytes]:
    """Split raw content into physical lines.

    `universal` splits on both CRLF and lone LF. `crlf` splits on CRLF only,
    so a LF-terminated file comes back as a single line.
    """

    if content.startswith(_UTF8_BOM):
        content = content[len(_UTF8_BOM) :]
    if line_endings == LINE_ENDINGS_CRLF:
        return content.split(b"\r\n")
    if line_endings == LINE_ENDINGS_UNIVERSAL:
        return _UNIVERSAL_SPLIT.split(content)
    raise ValueError(f"Unsupported `line_endings` value `{line_endings}`.")


def decode_line(raw_line: bytes, line_number: int) -> str:
    """Decode one physical line as UTF-8, reporting the line on failure."""

    try:
        return raw_line.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IniSyntaxError(detail="invalid UTF-8 byte sequence", line=line_number) from exc


def classify_line(line: str, line_number: int) -> SectionHeader | Assignment | None:
    """Classify one line, returning `None` for blank and comment lines.

    Raises:
        IniSyntaxError: For an unterminated or empty section header, or an
            assignment line without `=` or starting with `=`.
    """

    text = line.strip()
    if not text or text.startswith(_COMMENT_PREFIXES):
        return None

    if text.startswith("["):
        if not text.endswith("]"):
            raise IniSyntaxError(detail="unterminated section header", line=line_number)
        name = text[1:-1].strip()
        if not name:
            raise IniSyntaxError(detail="empty section name", line=line_number)
        return SectionHeader(line_number=line_number, name=name)

    if text.startswith("="):
        raise IniSyntaxError(detail="assignment is missing a key", line=line_number)
    key, separator, value = text.partition("=")
    if not separator:
        raise IniSyntaxError(detail="expected `key = value`", line=line_number)
    return Assignment(line_number=line_number, key=key.strip(), value=value.strip())
