"""Custom exceptions for the Paybox Direct client."""

# Business codes for which resubmitting the whole operation may succeed.
RETRYABLE_CODES = frozenset({105, 151, 157})


class PayboxError(Exception):
    """Base exception for all Paybox Direct errors."""

    pass


class RequestValidationError(PayboxError, ValueError):
    """
    Raised when operation parameters violate the protocol contract.

    Detected before any network activity. This is a TERMINAL error: the
    same parameters will always be rejected.

    Examples:
    - Missing card number on a first-time authorization
    - Card number and wallet both provided
    - Unsupported currency
    """

    pass


class RequestNotExecutedError(PayboxError, RuntimeError):
    """Raised when reading the outcome of a request that was never executed."""

    pass


class ServerUnavailableError(PayboxError):
    """
    Raised when the Paybox server could not give a usable answer.

    Covers network errors, timeouts, non-200 statuses, replies without a
    response code and the internal timeout code 00001. Only raised once the
    fallback endpoint (production only) has been tried as well.
    """

    pass


class PayboxRequestError(PayboxError):
    """
    Raised when Paybox rejects an operation with a business response code.

    Business failures are never retried by the client. Use ``may_retry`` to
    decide whether resubmitting the whole operation makes sense.
    """

    def __init__(
        self,
        code: int,
        comment: str | None,
        request_id: int | None = None,
    ) -> None:
        self.code = code
        self.comment = comment or ""
        self.request_id = request_id
        super().__init__(f"{code:05d}: {self.comment}")

    @property
    def may_retry(self) -> bool:
        """Whether the code is known to be transient on Paybox's side."""
        return self.code in RETRYABLE_CODES


class AuthorizationError(PayboxRequestError):
    pass


class DebitError(AuthorizationError):
    """
    Raised when a debit is rejected.

    When the debit followed a successful subscriber creation, ``authorization``
    holds that creation's PayboxResult so the new wallet is not lost.
    """

    authorization = None


class CancelError(PayboxRequestError):
    pass


class RefundError(PayboxRequestError):
    pass


class CreditError(PayboxRequestError):
    pass


class DeleteSubscriberError(PayboxRequestError):
    pass
