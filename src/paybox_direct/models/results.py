"""Outcome and result models."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paybox_direct.clients.request import PayboxRequest


class OutcomeKind(str, Enum):
    """Classification of one Paybox reply."""

    SUCCESS = "SUCCESS"
    BUSINESS_FAILURE = "BUSINESS_FAILURE"
    TRANSIENT_UNAVAILABLE = "TRANSIENT_UNAVAILABLE"


@dataclass(frozen=True)
class ResponseOutcome:
    """
    Outcome of a single exchange with the Paybox server.

    ``code`` and ``comment`` are only meaningful for BUSINESS_FAILURE (and
    SUCCESS, where the code is always 0).
    """

    kind: OutcomeKind
    code: int | None = None
    comment: str = ""

    @classmethod
    def success(cls, comment: str = "") -> "ResponseOutcome":
        return cls(OutcomeKind.SUCCESS, code=0, comment=comment)

    @classmethod
    def business_failure(cls, code: int, comment: str = "") -> "ResponseOutcome":
        return cls(OutcomeKind.BUSINESS_FAILURE, code=code, comment=comment)

    @classmethod
    def transient(cls) -> "ResponseOutcome":
        return cls(OutcomeKind.TRANSIENT_UNAVAILABLE)

    @property
    def is_transient(self) -> bool:
        return self.kind is OutcomeKind.TRANSIENT_UNAVAILABLE


@dataclass
class PayboxResult:
    """
    Result of a successful Paybox operation.

    Fields are parsed from the reply; those the operation does not return
    stay ``None``.
    """

    request: "PayboxRequest"
    request_id: int | None = None
    transaction_id: int | None = None

    # AUTORISATION, None when Paybox answers "XXXXXX" (not applicable)
    authorization: str | None = None

    # PORTEUR, only set when a subscriber was created
    wallet: str | None = None

    # Follow-up debit issued after creating a subscriber with debit requested
    debit: "PayboxResult | None" = None
