"""
Exception hierarchy for the DAO Vote Toolkit.

Exception Categories:
- RetryableException: Transient failures that may succeed on retry (RPC, network)
- NonRetryableException: Permanent failures that won't benefit from retry (bad data)
- ConfigurationException: Startup/config errors that prevent operation

Vote verification failures are all NonRetryableException: a signed vote is
either valid or it is not. The one exception is StateProofFailure, raised by
the state-verification collaborator, which is usually an RPC problem.
"""


class RetryableException(Exception):
    """
    Base class for exceptions that may succeed on retry.

    Use for transient failures like:
    - RPC timeouts
    - Rate limiting
    - Node temporarily behind the requested block
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NonRetryableException(Exception):
    """
    Base class for exceptions that won't benefit from retry.

    Use for permanent failures like:
    - Invalid input data
    - Invalid signatures
    - Business rule violations
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationException(NonRetryableException):
    """
    Exception for configuration/startup errors.

    Use when:
    - Required environment variables are missing
    - Unknown chain ID
    - Missing ABI resources
    """

    pass


class VoteVerificationException(NonRetryableException):
    """
    Base class for every check the vote verifier can fail.

    Each subclass carries a stable ``code`` used in results and CLI output.
    """

    code = "verification_failed"


class InvalidInputEncoding(VoteVerificationException):
    """An input field does not fit its declared width (address, u8, u64, u256)."""

    code = "invalid_input_encoding"


class InvalidRecoveryId(VoteVerificationException):
    """The signature's v value matches none of the known encodings."""

    code = "invalid_recovery_id"


class InvalidSignatureEncoding(VoteVerificationException):
    """r or s is malformed or outside the secp256k1 scalar range."""

    code = "invalid_signature_encoding"


class InvalidSignature(VoteVerificationException):
    """No public key can be recovered from the signature and digest."""

    code = "invalid_signature"


class SignerMismatch(VoteVerificationException):
    """The recovered signer is not the claimed voter."""

    code = "signer_mismatch"


class InvalidDirection(VoteVerificationException):
    """The vote direction is neither 0 (against) nor 1 (for)."""

    code = "invalid_direction"


class NonPositiveBalance(VoteVerificationException):
    """The claimed balance is zero."""

    code = "non_positive_balance"


class BalanceMismatch(VoteVerificationException):
    """The proven token balance differs from the claimed balance."""

    code = "balance_mismatch"


class StateProofFailure(RetryableException):
    """
    Exception for state environment failures.

    Raised when the state-verification collaborator cannot build an
    environment consistent with the committed block header, or cannot
    resolve a view call against it.
    """

    code = "state_proof_failure"
