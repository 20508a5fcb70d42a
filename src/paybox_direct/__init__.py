"""Async client for the Paybox Direct / Direct Plus payment API."""

from paybox_direct.clients import PayboxClient, PayboxRequest
from paybox_direct.config import PayboxSettings
from paybox_direct.models import (
    AuthorizationError,
    AuthorizeOperation,
    CancelError,
    CancelOperation,
    CreditError,
    CreditOperation,
    Currency,
    DebitAuthorizationOperation,
    DebitError,
    DeleteSubscriberError,
    DeleteSubscriberOperation,
    PayboxError,
    PayboxRequestError,
    PayboxResult,
    RefundError,
    RefundOperation,
    RequestNotExecutedError,
    RequestValidationError,
    ServerUnavailableError,
)
from paybox_direct.processors import PayboxDirectProcessor

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
    "PayboxClient",
    "PayboxDirectProcessor",
    "PayboxError",
    "PayboxRequest",
    "PayboxRequestError",
    "PayboxResult",
    "PayboxSettings",
    "RefundError",
    "RefundOperation",
    "RequestNotExecutedError",
    "RequestValidationError",
    "ServerUnavailableError",
]
