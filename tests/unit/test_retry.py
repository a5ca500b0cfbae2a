"""
Unit tests for the retry utilities module.
"""

from unittest.mock import MagicMock, patch

import pytest
from web3.exceptions import BlockNotFound, ContractLogicError

from dao_vote_toolkit.shared.exceptions import (
    NonRetryableException,
    RetryableException,
)
from dao_vote_toolkit.shared.retry import (
    NETWORK_RETRYABLE_EXCEPTIONS,
    retry_sync_operation,
)


@pytest.fixture
def sleep_times():
    """Capture backoff delays instead of sleeping."""
    delays = []
    with patch(
        "dao_vote_toolkit.shared.retry.time.sleep", side_effect=delays.append
    ):
        yield delays


class TestRetrySyncOperation:
    """Tests for the retry_sync_operation function."""

    def test_succeeds_first_try(self, sleep_times):
        """Test operation that succeeds on first attempt."""
        mock_fn = MagicMock(return_value="success")

        assert retry_sync_operation(mock_fn, max_attempts=3) == "success"
        assert mock_fn.call_count == 1
        assert sleep_times == []

    def test_basic_operation(self, sleep_times):
        """Test basic sync operation retry."""
        call_count = [0]

        def failing_then_success():
            call_count[0] += 1
            if call_count[0] < 3:
                raise RetryableException("fail")
            return "success"

        result = retry_sync_operation(
            failing_then_success,
            max_attempts=3,
            base_delay=0.01,
        )
        assert result == "success"
        assert call_count[0] == 3

    def test_with_args(self):
        """Test sync operation with arguments."""
        mock_fn = MagicMock(return_value="result")

        result = retry_sync_operation(
            mock_fn,
            "arg1",
            "arg2",
            max_attempts=3,
            kwarg1="value1",
        )

        assert result == "result"
        mock_fn.assert_called_once_with("arg1", "arg2", kwarg1="value1")

    def test_fails_after_max_attempts(self, sleep_times):
        """Test operation that always fails exhausts retries."""
        mock_fn = MagicMock(side_effect=ConnectionError("always fail"))

        with pytest.raises(ConnectionError, match="always fail"):
            retry_sync_operation(mock_fn, max_attempts=3, base_delay=0.01)

        assert mock_fn.call_count == 3

    def test_exponential_backoff(self, sleep_times):
        """Test that exponential backoff doubles the delay."""
        mock_fn = MagicMock(
            side_effect=[BlockNotFound("fail"), BlockNotFound("fail"), "ok"]
        )

        assert retry_sync_operation(mock_fn, max_attempts=3) == "ok"
        assert sleep_times == [1.0, 2.0]

    def test_linear_backoff(self, sleep_times):
        mock_fn = MagicMock(side_effect=[OSError("fail")] * 3 + ["ok"])

        result = retry_sync_operation(
            mock_fn, max_attempts=4, base_delay=10.0, exponential=False
        )

        assert result == "ok"
        assert sleep_times == [10.0, 10.0, 10.0]

    def test_max_delay_cap(self, sleep_times):
        mock_fn = MagicMock(side_effect=[OSError("fail")] * 3 + ["ok"])

        result = retry_sync_operation(
            mock_fn, max_attempts=4, base_delay=10.0, max_delay=15.0
        )

        assert result == "ok"
        assert sleep_times == [10.0, 15.0, 15.0]

    def test_non_retryable_propagates_immediately(self, sleep_times):
        """Rejections are never retried."""
        mock_fn = MagicMock(side_effect=NonRetryableException("rejected"))

        with pytest.raises(NonRetryableException, match="rejected"):
            retry_sync_operation(mock_fn, max_attempts=3)

        assert mock_fn.call_count == 1

    def test_specific_exceptions(self, sleep_times):
        """Test that only specified exceptions are retried."""
        mock_fn = MagicMock(side_effect=ConnectionError("not retryable here"))

        with pytest.raises(ConnectionError):
            retry_sync_operation(
                mock_fn,
                max_attempts=3,
                retryable_exceptions=(TypeError,),
            )

        assert mock_fn.call_count == 1

    def test_unexpected_errors_are_not_retried(self, sleep_times):
        mock_fn = MagicMock(side_effect=KeyError("hash"))

        with pytest.raises(KeyError):
            retry_sync_operation(mock_fn, max_attempts=3)

        assert mock_fn.call_count == 1


class TestNetworkRetryableExceptions:
    def test_contract_revert_is_not_retried(self, sleep_times):
        mock_fn = MagicMock(side_effect=ContractLogicError("execution reverted"))

        with pytest.raises(ContractLogicError):
            retry_sync_operation(
                mock_fn,
                max_attempts=3,
                retryable_exceptions=NETWORK_RETRYABLE_EXCEPTIONS,
            )

        assert mock_fn.call_count == 1
        assert sleep_times == []

    def test_network_errors_are_retried(self, sleep_times):
        mock_fn = MagicMock(side_effect=[TimeoutError("slow"), 42])

        result = retry_sync_operation(
            mock_fn,
            max_attempts=2,
            base_delay=0.5,
            retryable_exceptions=NETWORK_RETRYABLE_EXCEPTIONS,
        )

        assert result == 42
        assert sleep_times == [0.5]
