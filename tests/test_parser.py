import io
from datetime import datetime, timezone

import pytest

from flatcms.errors import (
    CmsError,
    DateError,
    FormatError,
    ParseError,
    UnexpectedEndOfInput,
)
from flatcms.parser import (
    EXPECT_DATE,
    EXPECT_DELIMITER,
    EXPECT_TITLE,
    parse,
    parse_date,
    parse_file,
    parse_string,
)
from flatcms.post import DATE_FORMAT, Post, serialize

HEADER = "------------------\ntitle: hello-world\ndate published: 01/01/2024 09:00\n------------------\n"


def test_parse_well_formed_document():
    post = parse_string(HEADER + "# h1 title\na paragraph")
    assert post.title == "hello-world"
    assert post.published == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert post.content == "# h1 title\na paragraph"


def test_parse_accepts_binary_and_text_streams():
    from_bytes = parse(io.BytesIO((HEADER + "body\n").encode("utf-8")))
    from_text = parse(io.StringIO(HEADER + "body\n"))
    assert from_bytes == from_text
    assert from_bytes.content == "body\n"


def test_body_is_kept_verbatim():
    body = "\n\n  indented line  \n\n---\ntitle: not a header\n\n"
    post = parse_string(HEADER + body)
    assert post.content == body


def test_empty_body_is_valid():
    post = parse_string(HEADER)
    assert post.content == ""
    assert post.is_empty


def test_last_header_line_without_newline():
    post = parse_string(HEADER.rstrip("\n"))
    assert post.content == ""


def test_delimiters_of_any_length_and_extra_title_spaces():
    text = "---\ntitle:    my_post-2\ndate published: 31/12/2023 23:59\n-----------\nx"
    post = parse_string(text)
    assert post.title == "my_post-2"
    assert post.published == datetime(2023, 12, 31, 23, 59, tzinfo=timezone.utc)


def test_missing_opening_delimiter():
    text = "title: hello\ndate published: 01/01/2024 09:00\n---\nbody"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected == EXPECT_DELIMITER
    assert excinfo.value.found == "title: hello"
    assert "found 'title: hello'" in str(excinfo.value)


def test_missing_closing_delimiter():
    text = "---\ntitle: hello\ndate published: 01/01/2024 09:00\n# Heading\n"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected == EXPECT_DELIMITER
    assert excinfo.value.found == "# Heading"


def test_short_delimiter_is_rejected():
    with pytest.raises(FormatError):
        parse_string("--\ntitle: hello\ndate published: 01/01/2024 09:00\n---\n")


def test_title_with_invalid_characters():
    text = "---\ntitle: hello world\ndate published: 01/01/2024 09:00\n---\n"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected == EXPECT_TITLE


def test_missing_title_field():
    text = "---\ndate published: 01/01/2024 09:00\n---\n"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected == EXPECT_TITLE
    assert excinfo.value.found == "date published: 01/01/2024 09:00"


def test_missing_date_field():
    text = "---\ntitle: hello\n---\nbody"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected == EXPECT_DATE


def test_blank_line_inside_header():
    text = "---\n\ntitle: hello\ndate published: 01/01/2024 09:00\n---\n"
    with pytest.raises(FormatError) as excinfo:
        parse_string(text)
    assert excinfo.value.found == ""


def test_date_with_wrong_separators():
    text = "---\ntitle: hello\ndate published: 2024-01-01 10:00\n---\n"
    with pytest.raises(DateError) as excinfo:
        parse_string(text)
    assert excinfo.value.expected_format == DATE_FORMAT
    assert excinfo.value.value == "2024-01-01 10:00"
    assert DATE_FORMAT in str(excinfo.value)
    assert "2024-01-01 10:00" in str(excinfo.value)


def test_date_strictness():
    assert parse_date("01/01/2024 10:00") == datetime(
        2024, 1, 1, 10, 0, tzinfo=timezone.utc
    )
    for value in ("1/1/2024 10:00", "01/01/2024 10:00:30", "31/02/2024 10:00", "01/01/2024 24:00"):
        with pytest.raises(DateError):
            parse_date(value)


def test_unexpected_end_of_input():
    with pytest.raises(UnexpectedEndOfInput) as excinfo:
        parse_string("---\ntitle: hello\n")
    assert excinfo.value.expected == EXPECT_DATE

    with pytest.raises(UnexpectedEndOfInput) as excinfo:
        parse_string("")
    assert excinfo.value.expected == EXPECT_DELIMITER


def test_parse_errors_share_a_base():
    for error_type in (FormatError, DateError, UnexpectedEndOfInput):
        assert issubclass(error_type, ParseError)
        assert issubclass(error_type, CmsError)


def test_round_trip_through_serialize():
    posts = [
        Post("hello-world", datetime(2024, 1, 1, 9, 0), "# h1 title\na paragraph"),
        Post("empty", datetime(2020, 2, 29, 0, 0), ""),
        Post("under_score", datetime(1999, 12, 31, 23, 59), "\n\ntrailing\n\n"),
    ]
    for post in posts:
        assert parse_string(serialize(post)) == post


def test_parse_file(tmp_path):
    path = tmp_path / "post.md"
    path.write_bytes((HEADER + "line one\r\nline two\n").encode("utf-8"))
    post = parse_file(path)
    assert post.title == "hello-world"
    assert post.content == "line one\r\nline two\n"
