"""Typed Paybox Direct operations.

Each operation validates its own parameters on construction, so an invalid
combination never reaches the network. The protocol mapping lives in
``paybox_direct.protocol.fields``.
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Union

from paybox_direct.models.exceptions import RequestValidationError

Amount = Union[Decimal, int, float]


class Currency(Enum):
    """Supported currencies and their ISO 4217 numeric codes."""

    AUD = 36
    CAD = 124
    CHF = 756
    DKK = 208
    EUR = 978
    GBP = 826
    HKD = 344
    JPY = 392
    USD = 840

    @classmethod
    def parse(cls, value: "Currency | str") -> "Currency":
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise RequestValidationError(f"currency: Not supported ({value!r})")


class OperationCode(IntEnum):
    """Values of the TYPE field."""

    AUTHORIZE = 1
    DEBIT_AUTHORIZATION = 2
    AUTHORIZE_AND_DEBIT = 3
    CREDIT = 4
    CANCEL = 5
    REFUND = 14
    SUBSCRIBER_AUTHORIZE = 51
    SUBSCRIBER_AUTHORIZE_AND_DEBIT = 53
    SUBSCRIBER_CREDIT = 54
    SUBSCRIBER_CANCEL = 55
    SUBSCRIBER_CREATE = 56
    SUBSCRIBER_DELETE = 58


def _check_amount(amount: Amount) -> None:
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int, float)):
        raise RequestValidationError("amount: Expecting a number")
    if isinstance(amount, Decimal) and not amount.is_finite():
        raise RequestValidationError("amount: Expecting a finite number")
    if isinstance(amount, float) and not math.isfinite(amount):
        raise RequestValidationError("amount: Expecting a finite number")
    if amount < 0:
        raise RequestValidationError("amount: Expecting a non-negative number")


def _check_expiry(card_expiry: date | None) -> None:
    if not isinstance(card_expiry, date):
        raise RequestValidationError("card_expiry: Expecting date")


def _check_text(name: str, value: str | None) -> None:
    if not isinstance(value, str) or not value:
        raise RequestValidationError(f"{name}: Expecting non-empty string")


def _check_identifier(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RequestValidationError(f"{name}: Expecting non-negative integer")


@dataclass
class AuthorizeOperation:
    """
    Authorization, with or without debit.

    Without a subscriber a card number is required and the operation is
    #1 (#3 with debit). With a subscriber and a wallet it is #51 (#53 with
    debit). With a subscriber and a card number a new subscriber is created
    with #56; Paybox cannot debit there, so a #2 follows when ``debit`` is set.
    """

    amount: Amount
    currency: Currency | str
    ref: str
    card_expiry: date
    cvv: str
    card_number: str | None = None
    wallet: str | None = None
    subscriber: str | None = None
    debit: bool = False

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        self.currency = Currency.parse(self.currency)
        _check_text("ref", self.ref)
        _check_expiry(self.card_expiry)
        _check_text("cvv", self.cvv)

        if self.subscriber is not None:
            _check_text("subscriber", self.subscriber)
            if self.wallet is not None:
                if self.card_number is not None:
                    raise RequestValidationError(
                        "card_number: Unexpected when `wallet` provided"
                    )
            elif self.card_number is None:
                raise RequestValidationError("Expecting `card_number` option")
        else:
            if self.card_number is None:
                raise RequestValidationError("Expecting `card_number` option")
            if self.wallet is not None:
                raise RequestValidationError("Unexpected `wallet` option")

    @property
    def op_code(self) -> OperationCode:
        if self.subscriber is not None:
            if self.wallet is None:
                return OperationCode.SUBSCRIBER_CREATE
            if self.debit:
                return OperationCode.SUBSCRIBER_AUTHORIZE_AND_DEBIT
            return OperationCode.SUBSCRIBER_AUTHORIZE
        if self.debit:
            return OperationCode.AUTHORIZE_AND_DEBIT
        return OperationCode.AUTHORIZE


@dataclass
class DebitAuthorizationOperation:
    """
    Debit (capture) of a prior authorization, operation #2.

    ``ref`` is optional; it is set when the debit follows a subscriber
    creation so both operations carry the same business reference.
    """

    amount: Amount
    currency: Currency | str
    request_id: int
    transaction_id: int
    ref: str | None = None

    op_code = OperationCode.DEBIT_AUTHORIZATION

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        self.currency = Currency.parse(self.currency)
        _check_identifier("request_id", self.request_id)
        _check_identifier("transaction_id", self.transaction_id)
        if self.ref is not None:
            _check_text("ref", self.ref)


@dataclass
class RefundOperation:
    """Refund of a debited payment, operation #14."""

    amount: Amount
    currency: Currency | str
    request_id: int
    transaction_id: int

    op_code = OperationCode.REFUND

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        self.currency = Currency.parse(self.currency)
        _check_identifier("request_id", self.request_id)
        _check_identifier("transaction_id", self.transaction_id)


@dataclass
class CancelOperation:
    """Cancellation of a prior operation, #55 for subscribers, #5 otherwise."""

    amount: Amount
    currency: Currency | str
    ref: str
    card_expiry: date
    cvv: str
    request_id: int
    transaction_id: int
    wallet: str | None = None
    subscriber: str | None = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        self.currency = Currency.parse(self.currency)
        _check_text("ref", self.ref)
        _check_expiry(self.card_expiry)
        _check_text("cvv", self.cvv)
        _check_identifier("request_id", self.request_id)
        _check_identifier("transaction_id", self.transaction_id)

        if self.subscriber is not None:
            _check_text("subscriber", self.subscriber)
            if self.wallet is None:
                raise RequestValidationError("Expecting `wallet` option")
        elif self.wallet is not None:
            raise RequestValidationError("Unexpected `wallet` option")

    @property
    def op_code(self) -> OperationCode:
        if self.subscriber is not None:
            return OperationCode.SUBSCRIBER_CANCEL
        return OperationCode.CANCEL


@dataclass
class CreditOperation:
    """Credit to a card, #54 for subscribers (wallet required), #4 otherwise."""

    amount: Amount
    currency: Currency | str
    ref: str
    card_expiry: date
    cvv: str
    card_number: str | None = None
    wallet: str | None = None
    subscriber: str | None = None

    def __post_init__(self) -> None:
        _check_amount(self.amount)
        self.currency = Currency.parse(self.currency)
        _check_text("ref", self.ref)
        _check_expiry(self.card_expiry)
        _check_text("cvv", self.cvv)

        if self.subscriber is not None:
            _check_text("subscriber", self.subscriber)
            if self.wallet is None:
                raise RequestValidationError("Expecting `wallet` option")
            if self.card_number is not None:
                raise RequestValidationError(
                    "card_number: Unexpected when `wallet` provided"
                )
        else:
            if self.card_number is None:
                raise RequestValidationError("Expecting `card_number` option")
            if self.wallet is not None:
                raise RequestValidationError("Unexpected `wallet` option")

    @property
    def op_code(self) -> OperationCode:
        if self.subscriber is not None:
            return OperationCode.SUBSCRIBER_CREDIT
        return OperationCode.CREDIT


@dataclass
class DeleteSubscriberOperation:
    """Deletion of a subscriber and its wallet, operation #58."""

    subscriber: str

    op_code = OperationCode.SUBSCRIBER_DELETE

    def __post_init__(self) -> None:
        _check_text("subscriber", self.subscriber)
