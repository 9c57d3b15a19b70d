"""Error types raised by flatcms.

Every error the package raises derives from CmsError so callers can catch a
single type. Parser failures share the ParseError base; the publish pipeline
wraps per-document failures in DocumentError and directory-level failures in
DirectoryError.
"""

from __future__ import annotations

from pathlib import Path


class CmsError(Exception):
    """Base class for all flatcms errors."""


class ConfigError(CmsError):
    """The project metadata file is missing, already present, or malformed."""


class ParseError(CmsError):
    """Base class for errors raised while parsing a post document."""


class FormatError(ParseError):
    """A header line does not have the expected shape.

    Attributes:
        expected: Description of the line shape that was expected.
        found: The line actually read, without its newline.
    """

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"expected line to be '{expected}', found '{found}'")


class DateError(ParseError):
    """The date field is present but does not match the date format.

    Attributes:
        expected_format: The strftime-style format the value must follow.
        value: The offending date value.
    """

    def __init__(self, expected_format: str, value: str):
        self.expected_format = expected_format
        self.value = value
        super().__init__(
            f"failed to parse date, expected {expected_format}, found {value}"
        )


class UnexpectedEndOfInput(ParseError):
    """The stream ended before the whole header was read.

    Attributes:
        expected: Description of the header line that was still missing.
    """

    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(f"unexpected end of input, expected '{expected}'")


class DirectoryError(CmsError):
    """The source directory cannot be listed or the target cannot be rebuilt.

    Attributes:
        path: The directory involved.
        message: Human-readable error message.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.path = path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{path}: {message}")


class DocumentError(CmsError):
    """Publishing a single source document failed.

    Covers parse errors as well as read, decode and write failures for the
    document and its artifact.

    Attributes:
        source_path: Path to the source document.
        message: Human-readable error message.
        original_error: The exception that caused the failure.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


def error_chain(exc: BaseException) -> list[str]:
    """Collect the messages of an exception and its causes, outermost first.

    Args:
        exc: The outermost exception.

    Returns:
        List of messages, one per link in the `__cause__` chain.
    """
    messages: list[str] = []
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, (DocumentError, DirectoryError)):
            messages.append(current.message)
        else:
            messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return messages
