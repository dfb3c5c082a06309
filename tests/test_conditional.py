from datetime import datetime, timezone

from ballsville.domain.conditional import (
    etag_matches,
    format_http_date,
    not_modified_since,
    quote_etag,
)


def test_quote_etag_normalizes_quotes() -> None:
    assert quote_etag("abc") == '"abc"'
    assert quote_etag('"abc"') == '"abc"'
    assert quote_etag('W/"abc"') == 'W/"abc"'
    assert quote_etag(None) is None


def test_etag_matches_comma_lists_and_weak_tags() -> None:
    assert etag_matches('"x", "abc"', '"abc"')
    assert etag_matches('W/"abc"', '"abc"')
    assert etag_matches("*", '"abc"')
    assert not etag_matches('"other"', '"abc"')
    assert not etag_matches(None, '"abc"')


def test_not_modified_since_compares_whole_seconds() -> None:
    modified = datetime(2025, 9, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)
    header = format_http_date(modified)
    assert header == "Mon, 01 Sep 2025 12:00:00 GMT"
    assert not_modified_since(header, modified)
    assert not_modified_since(header, header)
    assert not not_modified_since("Mon, 01 Sep 2025 11:59:59 GMT", modified)
    assert not not_modified_since("not a date", modified)
    assert not not_modified_since(None, modified)
