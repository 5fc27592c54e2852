"""Tests for the short URL entity."""

import uuid

import pytest
from pydantic import ValidationError as PydanticValidationError

from shortlink.core.exceptions import (
    InvalidTargetUrlError,
    ShortCodeInvalidCharactersError,
    ShortCodeTooShortError,
    StorageCorruptionError,
    StorageError,
)
from shortlink.models.short_code import ShortCode
from shortlink.models.short_url import ShortUrl, parse_target_url


@pytest.mark.models
class TestParseTargetUrl:
    """Canonicalization of target URLs."""

    @pytest.mark.parametrize("raw,expected", [
        ("https://rust-lang.org", "https://rust-lang.org/"),
        ("HTTPS://Rust-Lang.ORG", "https://rust-lang.org/"),
        ("https://example.com/a/b?q=1#frag", "https://example.com/a/b?q=1#frag"),
        ("http://localhost:8080", "http://localhost:8080/"),
        ("https://example.com:443/", "https://example.com/"),
    ])
    def test_canonical_form(self, raw, expected):
        assert parse_target_url(raw) == expected

    @pytest.mark.parametrize("raw", [
        "https://rust-lang.org/",
        "https://example.com/a/b?q=1#frag",
        "ftp://files.example.com/pub/",
    ])
    def test_canonical_form_is_stable(self, raw):
        once = parse_target_url(raw)
        assert parse_target_url(once) == once

    @pytest.mark.parametrize("raw", [
        "",
        "rust-lang.org",
        "/relative/path",
        "not a url",
        "http://",
    ])
    def test_rejects_relative_or_malformed(self, raw):
        with pytest.raises(InvalidTargetUrlError) as excinfo:
            parse_target_url(raw)
        assert excinfo.value.target == raw
        assert excinfo.value.diagnostic


@pytest.mark.models
class TestShortUrlCreate:
    """Building entities from caller input."""

    def test_create_canonicalizes_target(self):
        short_url = ShortUrl.create("rust", "https://rust-lang.org")

        assert short_url.code == ShortCode.parse("rust")
        assert short_url.short == "rust"
        assert short_url.target == "https://rust-lang.org/"

    def test_create_assigns_random_uuid(self):
        first = ShortUrl.create("a", "https://example.com")
        second = ShortUrl.create("a", "https://example.com")

        assert isinstance(first.id, uuid.UUID)
        assert first.id.version == 4
        assert first.id != second.id

    def test_invalid_code_is_propagated(self):
        with pytest.raises(ShortCodeTooShortError):
            ShortUrl.create("", "https://example.com")
        with pytest.raises(ShortCodeInvalidCharactersError):
            ShortUrl.create("a/b", "https://example.com")

    def test_invalid_target_is_reported(self):
        with pytest.raises(InvalidTargetUrlError) as excinfo:
            ShortUrl.create("rust", "rust-lang.org")
        assert "rust-lang.org" in str(excinfo.value)

    def test_code_is_checked_before_target(self):
        with pytest.raises(ShortCodeTooShortError):
            ShortUrl.create("", "not a url")

    def test_entity_is_immutable(self):
        short_url = ShortUrl.create("rust", "https://rust-lang.org")
        with pytest.raises(PydanticValidationError):
            short_url.target = "https://example.com/"
        assert short_url.target == "https://rust-lang.org/"

    def test_direct_construction_still_validates_target(self):
        with pytest.raises(InvalidTargetUrlError):
            ShortUrl(code=ShortCode.parse("rust"), target="nope")

    def test_str(self):
        short_url = ShortUrl.create("rust", "https://rust-lang.org")
        assert str(short_url) == "rust -> https://rust-lang.org/"


@pytest.mark.models
class TestShortUrlFromStored:
    """Rebuilding entities from persisted fields."""

    def test_round_trip_keeps_every_field(self):
        original = ShortUrl.create("rust", "https://rust-lang.org")

        restored = ShortUrl.from_stored(original.id, original.short, original.target)

        assert restored == original
        assert restored.target == "https://rust-lang.org/"

    def test_accepts_string_id(self):
        original = ShortUrl.create("rust", "https://rust-lang.org")
        restored = ShortUrl.from_stored(str(original.id), "rust", original.target)
        assert restored.id == original.id

    def test_corrupt_target_is_storage_error(self):
        with pytest.raises(StorageCorruptionError) as excinfo:
            ShortUrl.from_stored(uuid.uuid4(), "rust", "not a url")
        assert isinstance(excinfo.value, StorageError)
        assert isinstance(excinfo.value.original, InvalidTargetUrlError)

    def test_corrupt_code_is_storage_error(self):
        with pytest.raises(StorageCorruptionError):
            ShortUrl.from_stored(uuid.uuid4(), "has space", "https://example.com/")

    def test_corrupt_id_is_storage_error(self):
        with pytest.raises(StorageCorruptionError):
            ShortUrl.from_stored("not-a-uuid", "rust", "https://example.com/")
