"""Tests for CachePolicy directives."""

import pytest

from upstash_rest.redis.cache import CachePolicy


class TestCachePolicy:
    """Tests for Cache-Control header construction."""

    def test_origin(self):
        assert CachePolicy.ORIGIN.headers() == {"Cache-Control": "no-cache"}

    def test_default_sends_no_header(self):
        assert CachePolicy.DEFAULT.headers() == {}

    def test_ttl(self):
        assert CachePolicy.ttl(30).directive == "max-age=30"

    def test_ttl_with_stale_while_revalidate(self):
        policy = CachePolicy.ttl(30, stale_while_revalidate=300)

        assert policy.directive == "max-age=30, stale-while-revalidate=300"

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError):
            CachePolicy.ttl(-1)

    def test_custom_directive(self):
        assert CachePolicy("private, max-age=5").headers() == {"Cache-Control": "private, max-age=5"}
