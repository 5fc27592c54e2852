"""Behaviour every repository backend must share.

Each test runs once per backend through the parametrized `repository`
fixture.
"""

import pytest

from shortlink.core.exceptions import ShortCodeAlreadyExistsError, ShortUrlNotFoundError
from shortlink.models.short_url import ShortUrl
from tests.utils import create_test_short_url, random_url


@pytest.mark.repository
class TestRepositoryContract:
    """Find and insert semantics shared by all backends."""

    @pytest.mark.asyncio
    async def test_insert_then_find(self, repository):
        short_url = ShortUrl.create("rust", "https://rust-lang.org")

        await repository.insert(short_url)
        found = await repository.find_by_code("rust")

        assert found.id == short_url.id
        assert found.code == short_url.code
        assert found.target == "https://rust-lang.org/"
        assert found == short_url

    @pytest.mark.asyncio
    async def test_find_unknown_code(self, repository):
        with pytest.raises(ShortUrlNotFoundError) as excinfo:
            await repository.find_by_code("missing")
        assert excinfo.value.code == "missing"

    @pytest.mark.asyncio
    async def test_duplicate_code_is_rejected(self, repository):
        original = ShortUrl.create("dup", "https://example.com/first")
        duplicate = ShortUrl.create("dup", "https://example.com/second")

        await repository.insert(original)
        with pytest.raises(ShortCodeAlreadyExistsError) as excinfo:
            await repository.insert(duplicate)

        assert excinfo.value.code == "dup"
        found = await repository.find_by_code("dup")
        assert found.id == original.id
        assert found.target == "https://example.com/first"

    @pytest.mark.asyncio
    async def test_lookup_is_case_sensitive(self, repository):
        await repository.insert(ShortUrl.create("Rust", "https://rust-lang.org"))

        with pytest.raises(ShortUrlNotFoundError):
            await repository.find_by_code("rust")
        assert (await repository.find_by_code("Rust")).short == "Rust"

    @pytest.mark.asyncio
    async def test_codes_differing_in_case_are_distinct(self, repository):
        upper = ShortUrl.create("ABC", "https://example.com/upper")
        lower = ShortUrl.create("abc", "https://example.com/lower")

        await repository.insert(upper)
        await repository.insert(lower)

        assert (await repository.find_by_code("ABC")).id == upper.id
        assert (await repository.find_by_code("abc")).id == lower.id

    @pytest.mark.asyncio
    async def test_many_entities(self, repository):
        stored = [create_test_short_url(code=f"code{i}", target=random_url()) for i in range(20)]
        for short_url in stored:
            await repository.insert(short_url)

        for short_url in stored:
            found = await repository.find_by_code(short_url.short)
            assert found == short_url

    @pytest.mark.asyncio
    async def test_same_target_under_two_codes(self, repository):
        await repository.insert(ShortUrl.create("one", "https://example.com"))
        await repository.insert(ShortUrl.create("two", "https://example.com"))

        assert (await repository.find_by_code("one")).target == "https://example.com/"
        assert (await repository.find_by_code("two")).target == "https://example.com/"
