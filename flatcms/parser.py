"""Parser for post documents.

The header is read strictly line by line against four fixed productions:

1. a delimiter line of three or more dashes,
2. `title: <title>`,
3. `date published: <DD/MM/YYYY HH:MM>`,
4. a second delimiter line.

Everything after the second delimiter is the body and is kept verbatim. Any
deviation aborts with a ParseError; there is no partial result.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, AnyStr

from .errors import DateError, FormatError, UnexpectedEndOfInput
from .post import DATE_FORMAT, Post

logger = logging.getLogger(__name__)

DELIMITER_RE = re.compile(r"-{3,}")
TITLE_RE = re.compile(r"title: +([A-Za-z0-9_-]+)")
DATE_RE = re.compile(r"date published: +(.+)")
DATE_VALUE_RE = re.compile(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}", re.ASCII)

EXPECT_DELIMITER = "---"
EXPECT_TITLE = "title: {any title}"
EXPECT_DATE = "date published: {valid date time}"


class _LineReader:
    """Reads text lines from a text or binary stream.

    Attributes:
        stream: The underlying stream.
    """

    def __init__(self, stream: IO[AnyStr]):
        self.stream = stream

    def next_line(self, expected: str) -> str:
        """Read one header line without its trailing newline.

        Args:
            expected: Description of the line being read, used in errors.

        Returns:
            The line text.

        Raises:
            UnexpectedEndOfInput: If the stream is exhausted.
        """
        line = self._decode(self.stream.readline())
        if line == "":
            raise UnexpectedEndOfInput(expected)
        if line.endswith("\n"):
            line = line[:-1]
        return line

    def rest(self) -> str:
        """Read the remainder of the stream verbatim."""
        return self._decode(self.stream.read())

    @staticmethod
    def _decode(data: str | bytes) -> str:
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data


def parse(stream: IO[AnyStr]) -> Post:
    """Parse a post document from a stream.

    Args:
        stream: Text or binary stream positioned at the start of the document.

    Returns:
        The parsed Post.

    Raises:
        FormatError: If a header line does not have its expected shape.
        DateError: If the date value does not follow DATE_FORMAT.
        UnexpectedEndOfInput: If the stream ends inside the header.
    """
    reader = _LineReader(stream)

    line = reader.next_line(EXPECT_DELIMITER)
    if not DELIMITER_RE.fullmatch(line):
        raise FormatError(EXPECT_DELIMITER, line)

    line = reader.next_line(EXPECT_TITLE)
    match = TITLE_RE.fullmatch(line)
    if not match:
        raise FormatError(EXPECT_TITLE, line)
    title = match.group(1)

    line = reader.next_line(EXPECT_DATE)
    match = DATE_RE.fullmatch(line)
    if not match:
        raise FormatError(EXPECT_DATE, line)
    published = parse_date(match.group(1))

    line = reader.next_line(EXPECT_DELIMITER)
    if not DELIMITER_RE.fullmatch(line):
        raise FormatError(EXPECT_DELIMITER, line)

    content = reader.rest()
    logger.debug("parsed post %r (%d body characters)", title, len(content))
    return Post(title=title, published=published, content=content)


def parse_date(value: str) -> datetime:
    """Parse a `date published` value into a UTC datetime.

    Only the exact zero-padded `DD/MM/YYYY HH:MM` shape is accepted.

    Args:
        value: The raw date value.

    Returns:
        Timezone-aware UTC datetime with zero seconds.

    Raises:
        DateError: If the value has the wrong shape or is not a real date.
    """
    if not DATE_VALUE_RE.fullmatch(value):
        raise DateError(DATE_FORMAT, value)
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise DateError(DATE_FORMAT, value) from exc
    return parsed.replace(tzinfo=timezone.utc)


def parse_string(text: str) -> Post:
    """Parse a post document held in memory."""
    return parse(io.StringIO(text, newline=""))


def parse_file(path: Path) -> Post:
    """Parse a post document from a UTF-8 file.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(path, encoding="utf-8", newline="") as f:
        return parse(f)
