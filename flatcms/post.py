"""The Post value type and the on-disk document format.

A post document is plain text made of a four-line header followed by the
Markdown body:

    ------------------
    title: hello-world
    date published: 01/01/2024 09:00
    ------------------
    # Body starts here

The header format is the author-facing file format, so `serialize` writes
exactly what `flatcms.parser.parse` reads.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone

TITLE_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
DATE_FORMAT = "%d/%m/%Y %H:%M"
DELIMITER = "-" * 18


@dataclass(frozen=True)
class Post:
    """A parsed content document.

    Attributes:
        title: Short identifier made of ASCII word characters and hyphens.
        published: Publish timestamp, always timezone-aware UTC.
        content: Raw, unrendered body text. May be empty.
    """

    title: str
    published: datetime
    content: str

    def __post_init__(self):
        if not TITLE_PATTERN.fullmatch(self.title):
            raise ValueError(f"invalid post title: {self.title!r}")
        object.__setattr__(self, "published", to_utc(self.published))

    @property
    def is_empty(self) -> bool:
        """True when the body has no visible content."""
        return not self.content.strip()


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC, reading naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_date(value: datetime) -> str:
    """Format a timestamp the way the `date published` field expects it."""
    return to_utc(value).strftime(DATE_FORMAT)


def serialize(post: Post) -> str:
    """Render a Post back into the document format.

    Args:
        post: The post to write out.

    Returns:
        Document text with the header and the body appended verbatim.
    """
    return (
        f"{DELIMITER}\n"
        f"title: {post.title}\n"
        f"date published: {format_date(post.published)}\n"
        f"{DELIMITER}\n"
        f"{post.content}"
    )


def new_post_document(title: str, now: datetime | None = None) -> str:
    """Build the initial text for a new, empty post.

    Args:
        title: Title of the new post.
        now: Publish timestamp; defaults to the current UTC time.

    Returns:
        Document text containing only the header.
    """
    published = now or datetime.now(timezone.utc)
    published = to_utc(published).replace(second=0, microsecond=0)
    return serialize(Post(title=title, published=published, content=""))
