"""
Tests for the per-address submission throttle.
"""

from datetime import timedelta

import pytest

from models import WidgetClaim
from services import ClaimStore, RateLimiter, RateLimitError
from utils import utcnow


class TestRateLimiter:

    def test_under_limit(self, app, make_claim):
        for _ in range(4):
            make_claim(ip_hash="hash-a")
        assert RateLimiter(ClaimStore()).is_limited("hash-a") is False

    def test_five_recent_claims_trip_the_limit(self, app, make_claim):
        for _ in range(5):
            make_claim(ip_hash="hash-a", age=timedelta(minutes=10))
        assert RateLimiter(ClaimStore()).is_limited("hash-a") is True

    def test_claims_older_than_an_hour_do_not_count(self, app, make_claim):
        for _ in range(5):
            make_claim(ip_hash="hash-a", age=timedelta(hours=1, minutes=1))
        assert RateLimiter(ClaimStore()).is_limited("hash-a") is False

    def test_other_addresses_do_not_count(self, app, make_claim):
        for _ in range(5):
            make_claim(ip_hash="hash-b")
        assert RateLimiter(ClaimStore()).is_limited("hash-a") is False

    def test_custom_limit_and_window(self, app, make_claim):
        make_claim(ip_hash="hash-a", age=timedelta(minutes=3))
        limiter = RateLimiter(ClaimStore(), limit=1, window=timedelta(minutes=5))

        assert limiter.is_limited("hash-a") is True
        assert limiter.is_limited("hash-a", now=utcnow() + timedelta(minutes=3)) is False


class TestSubmitRateLimit:

    def test_sixth_submission_within_the_hour_fails(self, service, gateway, make_claim):
        for _ in range(5):
            make_claim(ip_hash="hash-a", age=timedelta(minutes=30))

        with pytest.raises(RateLimitError):
            service.submit("a@example.com", "theme-1", "hash-a")

        assert gateway.calls == []
        assert WidgetClaim.query.count() == 5

    def test_sixth_submission_after_the_hour_succeeds(self, service, make_claim):
        for _ in range(5):
            make_claim(ip_hash="hash-a", age=timedelta(hours=2))

        claim = service.submit("a@example.com", "theme-1", "hash-a")

        assert claim.ip_hash == "hash-a"
        assert WidgetClaim.query.count() == 6
