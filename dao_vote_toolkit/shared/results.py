"""
Result types for explicit success/failure tracking.

Verification itself raises on the first failed check. These types let the
service layer and the CLI report a failure without losing its context.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorSeverity(Enum):
    """Severity levels for processing errors."""

    ERROR = "error"  # Operation failed, may be retried
    CRITICAL = "critical"  # Operation rejected, never retried


@dataclass
class ProcessingError:
    """
    Represents a single processing error with context.

    Attributes:
        source: Component that generated the error (e.g., "vote_verification")
        message: Human-readable error description
        severity: How severe the error is (affects control flow)
        code: Stable machine-readable error code
        context: Additional context like voter, dao, proposal_id
        exception: Original exception if available
    """

    source: str
    message: str
    severity: ErrorSeverity
    code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source,
            "message": self.message,
            "severity": self.severity.value,
            "code": self.code,
            "context": self.context,
        }


@dataclass
class Result(Generic[T]):
    """
    Result type that carries success/failure information.

    Attributes:
        success: Whether the operation succeeded
        data: The result data if successful
        errors: List of errors encountered
    """

    success: bool
    data: Optional[T] = None
    errors: List[ProcessingError] = field(default_factory=list)

    @classmethod
    def ok(cls, data: T) -> "Result[T]":
        """Create a successful result with data."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ProcessingError) -> "Result[T]":
        """Create a failed result with an error."""
        return cls(success=False, errors=[error])

    @classmethod
    def fail_with_message(
        cls,
        source: str,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> "Result[T]":
        """Create a failed result with a message (convenience method)."""
        error = ProcessingError(
            source=source,
            message=message,
            severity=severity,
            code=code,
            context=context or {},
            exception=exception,
        )
        return cls(success=False, errors=[error])

    def unwrap(self) -> T:
        """Return the data, or raise RuntimeError with the error messages."""
        if not self.success:
            raise RuntimeError("; ".join(self.get_error_messages()))
        return self.data

    def get_error_messages(self) -> List[str]:
        """Get all error messages as strings."""
        return [e.message for e in self.errors]

    def get_error_codes(self) -> List[str]:
        """Get the codes of all errors that carry one."""
        return [e.code for e in self.errors if e.code]
