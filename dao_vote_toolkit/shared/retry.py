"""
Retry utilities for handling transient RPC failures.

This module provides a functional helper for retrying synchronous RPC
operations with configurable backoff.

Exception Handling:
- By default, retries on RetryableException, network errors and web3 errors
- NonRetryableException is never retried (propagates immediately)
- Can customize retryable_exceptions per operation; view calls use
  NETWORK_RETRYABLE_EXCEPTIONS so that contract reverts are not retried
"""

import logging
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from web3.exceptions import (
    BadFunctionCallOutput,
    BlockNotFound,
    ContractLogicError,
    ProviderConnectionError,
    Web3Exception,
)

from dao_vote_toolkit.shared.exceptions import RetryableException

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Network/RPC related errors plus the RetryableException hierarchy
DEFAULT_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    RetryableException,
    ConnectionError,
    TimeoutError,
    OSError,
    Web3Exception,
    ContractLogicError,
    BadFunctionCallOutput,
    BlockNotFound,
)

# Transport failures only. Reverts and undecodable call output are
# deterministic for a pinned block and fail on the first attempt.
NETWORK_RETRYABLE_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    RetryableException,
    ConnectionError,
    TimeoutError,
    OSError,
    ProviderConnectionError,
    BlockNotFound,
)


def _backoff_delay(
    attempt: int, base_delay: float, max_delay: float, exponential: bool
) -> float:
    if exponential:
        return min(base_delay * (2**attempt), max_delay)
    return base_delay


def retry_sync_operation(
    operation: Callable[..., T],
    *args: Any,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential: bool = True,
    retryable_exceptions: Optional[Tuple[Type[Exception], ...]] = None,
    operation_name: Optional[str] = None,
    **kwargs: Any,
) -> T:
    """
    Retry a synchronous operation with configurable backoff.

    Args:
        operation: Function to call
        *args: Positional arguments for the operation
        max_attempts: Maximum retry attempts
        base_delay: Initial delay between retries
        max_delay: Maximum delay between retries
        exponential: Use exponential backoff
        retryable_exceptions: Exception types to retry on
        operation_name: Optional name for logging
        **kwargs: Keyword arguments for the operation

    Returns:
        Result of the operation
    """
    if retryable_exceptions is None:
        retryable_exceptions = DEFAULT_RETRYABLE_EXCEPTIONS

    name = operation_name or getattr(operation, "__name__", "operation")
    last_exception: Optional[Exception] = None

    for attempt in range(max_attempts):
        try:
            return operation(*args, **kwargs)
        except retryable_exceptions as e:
            last_exception = e

            if attempt < max_attempts - 1:
                delay = _backoff_delay(
                    attempt, base_delay, max_delay, exponential
                )

                logger.warning(
                    f"Attempt {attempt + 1}/{max_attempts} failed for "
                    f"{name}: {e}. Retrying in {delay:.1f}s..."
                )

                time.sleep(delay)

    if last_exception:
        raise last_exception
    raise RuntimeError(
        "Unexpected state: no exception but all attempts exhausted"
    )
