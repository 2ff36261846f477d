"""
Tests for retry logic.
"""

import pytest
from internmatch.retry import (
    exponential_backoff,
    should_retry_http_status,
    RetryError,
    TransientHTTPError,
)


class TestExponentialBackoff:
    """Test exponential backoff decorator."""

    def test_success_on_first_try(self):
        """Function that succeeds immediately should not retry."""
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.1)
        def succeeds():
            call_count[0] += 1
            return "success"

        assert succeeds() == "success"
        assert call_count[0] == 1

    def test_retry_then_succeed(self):
        """Function that fails then succeeds should retry."""
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01)
        def fails_twice():
            call_count[0] += 1
            if call_count[0] < 3:
                raise ConnectionError("Temporary failure")
            return "success"

        assert fails_twice() == "success"
        assert call_count[0] == 3

    def test_all_retries_exhausted(self):
        """Should raise RetryError chained to the last failure."""
        call_count = [0]

        @exponential_backoff(max_retries=2, base_delay=0.01)
        def always_fails():
            call_count[0] += 1
            raise TransientHTTPError(503, "https://files.example.com/resume")

        with pytest.raises(RetryError) as excinfo:
            always_fails()

        assert call_count[0] == 3  # Initial + 2 retries
        assert isinstance(excinfo.value.__cause__, TransientHTTPError)
        assert excinfo.value.__cause__.status_code == 503

    def test_only_catches_specified_exceptions(self):
        """Should only retry on specified exception types."""
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01, exceptions=(ConnectionError,))
        def raises_value_error():
            call_count[0] += 1
            raise ValueError("Not retryable")

        with pytest.raises(ValueError):
            raises_value_error()

        assert call_count[0] == 1

    def test_exponential_delay(self, no_sleep):
        """Delay should increase exponentially."""
        delays = []

        @exponential_backoff(
            max_retries=3,
            base_delay=0.01,
            exponential_base=2.0,
            on_retry=lambda attempt, exception, delay: delays.append(delay),
        )
        def always_fails():
            raise ConnectionError("Test")

        with pytest.raises(RetryError):
            always_fails()

        assert delays == [0.01, 0.02, 0.04]

    def test_max_delay_cap(self, no_sleep):
        """Delay should not exceed max_delay."""
        delays = []

        @exponential_backoff(
            max_retries=5,
            base_delay=1.0,
            max_delay=2.0,
            exponential_base=3.0,
            on_retry=lambda attempt, exception, delay: delays.append(delay),
        )
        def always_fails():
            raise ConnectionError("Test")

        with pytest.raises(RetryError):
            always_fails()

        assert len(delays) == 5
        assert all(d <= 2.0 for d in delays)


class TestRetryableStatus:

    def test_http_status_retry_logic(self):
        """Should correctly identify retryable HTTP status codes."""
        for status in (408, 429, 500, 502, 503, 504):
            assert should_retry_http_status(status)

        for status in (200, 401, 403, 404):
            assert not should_retry_http_status(status)
