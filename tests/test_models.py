"""Tests for Pydantic models."""

import datetime

from scriptedstuff.models.content import Post, PostMetadata, parse_timestamp

UTC = datetime.timezone.utc


class TestParseTimestamp:
    """Tests for timestamp parsing used when sorting."""

    def test_date_only_is_midnight_utc(self):
        assert parse_timestamp("2024-01-01") == datetime.datetime(2024, 1, 1, tzinfo=UTC)

    def test_zulu_suffix(self):
        assert parse_timestamp("2024-01-01T10:00:00Z") == datetime.datetime(2024, 1, 1, 10, tzinfo=UTC)

    def test_offset_is_preserved(self):
        parsed = parse_timestamp("2024-01-01T10:00:00+02:00")
        assert parsed == datetime.datetime(2024, 1, 1, 8, tzinfo=UTC)

    def test_rfc2822(self):
        parsed = parse_timestamp("Mon, 01 Jan 2024 10:00:00 +0000")
        assert parsed == datetime.datetime(2024, 1, 1, 10, tzinfo=UTC)

    def test_garbage_returns_none(self):
        assert parse_timestamp("next tuesday") is None
        assert parse_timestamp("") is None
        assert parse_timestamp("   ") is None


def test_post_metadata_url():
    meta = PostMetadata(slug="hello-world", title="Hello", date="2024-01-01")
    assert meta.url == "/posts/hello-world"


def test_published_at_comparable_across_formats():
    naive = PostMetadata(slug="a", title="A", date="2024-01-01T12:00:00")
    aware = PostMetadata(slug="b", title="B", date="2024-01-01T11:00:00Z")
    assert naive.published_at > aware.published_at


def test_post_extends_metadata():
    post = Post(slug="p", title="P", date="2024-01-01", content="Body")
    assert post.tags == []
    assert post.description == ""
    assert post.draft is False
    assert post.html == ""
