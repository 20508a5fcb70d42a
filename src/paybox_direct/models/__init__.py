"""Domain models for the Paybox Direct client."""

from paybox_direct.models.exceptions import (
    AuthorizationError,
    CancelError,
    CreditError,
    DebitError,
    DeleteSubscriberError,
    PayboxError,
    PayboxRequestError,
    RefundError,
    RequestNotExecutedError,
    RequestValidationError,
    ServerUnavailableError,
)
from paybox_direct.models.operations import (
    AuthorizeOperation,
    CancelOperation,
    CreditOperation,
    Currency,
    DebitAuthorizationOperation,
    DeleteSubscriberOperation,
    OperationCode,
    RefundOperation,
)
from paybox_direct.models.results import OutcomeKind, PayboxResult, ResponseOutcome

__all__ = [
    "AuthorizationError",
    "AuthorizeOperation",
    "CancelError",
    "CancelOperation",
    "CreditError",
    "CreditOperation",
    "Currency",
    "DebitAuthorizationOperation",
    "DebitError",
    "DeleteSubscriberError",
    "DeleteSubscriberOperation",
    "OperationCode",
    "OutcomeKind",
    "PayboxError",
    "PayboxRequestError",
    "PayboxResult",
    "RefundError",
    "RefundOperation",
    "RequestNotExecutedError",
    "RequestValidationError",
    "ResponseOutcome",
    "ServerUnavailableError",
]
