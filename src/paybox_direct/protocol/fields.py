"""
Field encoding for Paybox Direct operations.

Maps typed operations to the flat protocol field set. All values are
strings; numeric fields are zero-padded to the width Paybox expects.
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from paybox_direct.config import PayboxSettings
from paybox_direct.models.exceptions import RequestValidationError
from paybox_direct.models.operations import (
    Amount,
    AuthorizeOperation,
    CancelOperation,
    CreditOperation,
    Currency,
    DebitAuthorizationOperation,
    DeleteSubscriberOperation,
    OperationCode,
    RefundOperation,
)

FieldSet = dict[str, str]

AMOUNT_WIDTH = 10
CURRENCY_WIDTH = 3
OP_CODE_WIDTH = 5
IDENTIFIER_WIDTH = 10

_CARD_NUMBER_SEPARATORS = re.compile(r"[ .\-]")
_CENT = Decimal("0.01")


def pad(value: int | str, width: int) -> str:
    """Left-pad with zeros to ``width``."""
    return str(value).rjust(width, "0")


def format_op_code(op_code: OperationCode) -> str:
    return pad(int(op_code), OP_CODE_WIDTH)


def format_amount(amount: Amount) -> str:
    """
    Convert a decimal amount to minor units.

    Floats go through their shortest repr so that 14.29 becomes 1429
    and not 1428.
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    try:
        minor_units = int(value.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)
    except InvalidOperation as e:
        raise RequestValidationError(f"amount: Too large ({amount})") from e
    formatted = pad(minor_units, AMOUNT_WIDTH)
    if len(formatted) > AMOUNT_WIDTH:
        raise RequestValidationError(f"amount: Too large ({amount})")
    return formatted


def format_currency(currency: Currency) -> str:
    return pad(currency.value, CURRENCY_WIDTH)


def format_expiry(card_expiry: date) -> str:
    return card_expiry.strftime("%m%y")


def format_identifier(value: int) -> str:
    formatted = pad(value, IDENTIFIER_WIDTH)
    if len(formatted) > IDENTIFIER_WIDTH:
        raise RequestValidationError(f"identifier: Too large ({value})")
    return formatted


def clean_card_number(card_number: str) -> str:
    return _CARD_NUMBER_SEPARATORS.sub("", card_number)


def _holder(card_number: str | None, wallet: str | None) -> str:
    if wallet is not None:
        return wallet
    return clean_card_number(card_number or "")


def encode_authorize(op: AuthorizeOperation, settings: PayboxSettings) -> FieldSet:
    fields = {
        "TYPE": format_op_code(op.op_code),
        "REFERENCE": settings.ref_prefix + op.ref,
        "MONTANT": format_amount(op.amount),
        "DEVISE": format_currency(op.currency),
        "PORTEUR": _holder(op.card_number, op.wallet),
        "DATEVAL": format_expiry(op.card_expiry),
        "CVV": op.cvv,
    }
    if op.subscriber is not None:
        fields["REFABONNE"] = settings.ref_prefix + op.subscriber
    return fields


def encode_debit_authorization(
    op: DebitAuthorizationOperation, settings: PayboxSettings
) -> FieldSet:
    fields = {
        "TYPE": format_op_code(op.op_code),
        "MONTANT": format_amount(op.amount),
        "DEVISE": format_currency(op.currency),
        "NUMAPPEL": format_identifier(op.request_id),
        "NUMTRANS": format_identifier(op.transaction_id),
    }
    if op.ref is not None:
        fields["REFERENCE"] = settings.ref_prefix + op.ref
    return fields


def encode_refund(op: RefundOperation) -> FieldSet:
    return {
        "TYPE": format_op_code(op.op_code),
        "MONTANT": format_amount(op.amount),
        "DEVISE": format_currency(op.currency),
        "NUMAPPEL": format_identifier(op.request_id),
        "NUMTRANS": format_identifier(op.transaction_id),
    }


def encode_cancel(op: CancelOperation, settings: PayboxSettings) -> FieldSet:
    fields = {
        "TYPE": format_op_code(op.op_code),
        "REFERENCE": settings.ref_prefix + op.ref,
        "MONTANT": format_amount(op.amount),
        "DEVISE": format_currency(op.currency),
        "DATEVAL": format_expiry(op.card_expiry),
        "CVV": op.cvv,
        "NUMAPPEL": format_identifier(op.request_id),
        "NUMTRANS": format_identifier(op.transaction_id),
    }
    if op.subscriber is not None:
        fields["PORTEUR"] = op.wallet
        fields["REFABONNE"] = settings.ref_prefix + op.subscriber
    return fields


def encode_credit(op: CreditOperation, settings: PayboxSettings) -> FieldSet:
    fields = {
        "TYPE": format_op_code(op.op_code),
        "REFERENCE": settings.ref_prefix + op.ref,
        "MONTANT": format_amount(op.amount),
        "DEVISE": format_currency(op.currency),
        "PORTEUR": _holder(op.card_number, op.wallet),
        "DATEVAL": format_expiry(op.card_expiry),
        "CVV": op.cvv,
    }
    if op.subscriber is not None:
        fields["REFABONNE"] = settings.ref_prefix + op.subscriber
    return fields


def encode_delete_subscriber(
    op: DeleteSubscriberOperation, settings: PayboxSettings
) -> FieldSet:
    return {
        "TYPE": format_op_code(op.op_code),
        "REFABONNE": settings.ref_prefix + op.subscriber,
    }
