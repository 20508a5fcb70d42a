"""Unit tests for operation validation."""

from datetime import date
from decimal import Decimal

import pytest

from paybox_direct.models import (
    AuthorizeOperation,
    CancelOperation,
    CreditOperation,
    Currency,
    DebitAuthorizationOperation,
    DeleteSubscriberOperation,
    OperationCode,
    RefundOperation,
    RequestValidationError,
)

EXPIRY = date(2030, 10, 1)


def _authorize(**overrides) -> AuthorizeOperation:
    values = {
        "amount": 10,
        "currency": "EUR",
        "ref": "order_1",
        "card_number": "1111222233334444",
        "card_expiry": EXPIRY,
        "cvv": "123",
    }
    values.update(overrides)
    return AuthorizeOperation(**values)


class TestCurrency:
    def test_parse_code(self):
        assert Currency.parse("eur") is Currency.EUR
        assert Currency.parse(Currency.JPY) is Currency.JPY

    @pytest.mark.parametrize("value", ["XYZ", "", 978, None])
    def test_parse_unsupported(self, value):
        with pytest.raises(RequestValidationError, match="currency: Not supported"):
            Currency.parse(value)


class TestAuthorizeOperation:
    def test_currency_is_normalized(self):
        assert _authorize(currency="usd").currency is Currency.USD

    @pytest.mark.parametrize(
        "overrides, op_code",
        [
            ({}, OperationCode.AUTHORIZE),
            ({"debit": True}, OperationCode.AUTHORIZE_AND_DEBIT),
            ({"subscriber": "sub"}, OperationCode.SUBSCRIBER_CREATE),
            ({"subscriber": "sub", "debit": True}, OperationCode.SUBSCRIBER_CREATE),
            (
                {"subscriber": "sub", "wallet": "w", "card_number": None},
                OperationCode.SUBSCRIBER_AUTHORIZE,
            ),
            (
                {"subscriber": "sub", "wallet": "w", "card_number": None, "debit": True},
                OperationCode.SUBSCRIBER_AUTHORIZE_AND_DEBIT,
            ),
        ],
    )
    def test_op_code(self, overrides, op_code):
        assert _authorize(**overrides).op_code is op_code

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"card_number": None}, "Expecting `card_number`"),
            ({"wallet": "w"}, "Unexpected `wallet`"),
            ({"subscriber": "sub", "card_number": None}, "Expecting `card_number`"),
            ({"subscriber": "sub", "wallet": "w"}, "Unexpected when `wallet` provided"),
            ({"amount": "10"}, "amount"),
            ({"amount": True}, "amount"),
            ({"amount": -1}, "amount"),
            ({"amount": float("nan")}, "amount"),
            ({"amount": Decimal("Infinity")}, "amount"),
            ({"currency": "XXX"}, "currency"),
            ({"card_expiry": "2030-10"}, "card_expiry"),
            ({"ref": ""}, "ref"),
            ({"cvv": None}, "cvv"),
            ({"subscriber": "", "wallet": "w", "card_number": None}, "subscriber"),
        ],
    )
    def test_invalid(self, overrides, message):
        with pytest.raises(RequestValidationError, match=message):
            _authorize(**overrides)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            _authorize(amount=-5)


class TestIdentifierOperations:
    @pytest.mark.parametrize("operation_class", [DebitAuthorizationOperation, RefundOperation])
    def test_valid(self, operation_class):
        op = operation_class(amount=1, currency="EUR", request_id=1, transaction_id=2)

        assert op.currency is Currency.EUR

    @pytest.mark.parametrize("operation_class", [DebitAuthorizationOperation, RefundOperation])
    @pytest.mark.parametrize(
        "request_id, transaction_id",
        [("1", 2), (1, None), (-1, 2), (True, 2)],
    )
    def test_invalid_identifiers(self, operation_class, request_id, transaction_id):
        with pytest.raises(RequestValidationError):
            operation_class(
                amount=1,
                currency="EUR",
                request_id=request_id,
                transaction_id=transaction_id,
            )


class TestCancelOperation:
    def _cancel(self, **overrides) -> CancelOperation:
        values = {
            "amount": 1,
            "currency": "EUR",
            "ref": "order_1",
            "card_expiry": EXPIRY,
            "cvv": "123",
            "request_id": 1,
            "transaction_id": 2,
        }
        values.update(overrides)
        return CancelOperation(**values)

    def test_op_codes(self):
        assert self._cancel().op_code is OperationCode.CANCEL
        assert (
            self._cancel(subscriber="sub", wallet="w").op_code
            is OperationCode.SUBSCRIBER_CANCEL
        )

    def test_subscriber_requires_wallet(self):
        with pytest.raises(RequestValidationError, match="Expecting `wallet`"):
            self._cancel(subscriber="sub")

    def test_wallet_requires_subscriber(self):
        with pytest.raises(RequestValidationError, match="Unexpected `wallet`"):
            self._cancel(wallet="w")

    def test_expiry_required(self):
        with pytest.raises(RequestValidationError, match="card_expiry"):
            self._cancel(card_expiry=None)


class TestCreditOperation:
    def _credit(self, **overrides) -> CreditOperation:
        values = {
            "amount": 1,
            "currency": "EUR",
            "ref": "order_1",
            "card_expiry": EXPIRY,
            "cvv": "123",
        }
        values.update(overrides)
        return CreditOperation(**values)

    def test_op_codes(self):
        assert self._credit(card_number="4111").op_code is OperationCode.CREDIT
        assert (
            self._credit(subscriber="sub", wallet="w").op_code
            is OperationCode.SUBSCRIBER_CREDIT
        )

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({}, "Expecting `card_number`"),
            ({"card_number": "4111", "wallet": "w"}, "Unexpected `wallet`"),
            ({"subscriber": "sub", "card_number": "4111"}, "Expecting `wallet`"),
            (
                {"subscriber": "sub", "wallet": "w", "card_number": "4111"},
                "Unexpected when `wallet` provided",
            ),
        ],
    )
    def test_invalid(self, overrides, message):
        with pytest.raises(RequestValidationError, match=message):
            self._credit(**overrides)


class TestDeleteSubscriberOperation:
    def test_valid(self):
        assert DeleteSubscriberOperation("sub").op_code is OperationCode.SUBSCRIBER_DELETE

    @pytest.mark.parametrize("subscriber", ["", None, 42])
    def test_invalid(self, subscriber):
        with pytest.raises(RequestValidationError, match="subscriber"):
            DeleteSubscriberOperation(subscriber)
