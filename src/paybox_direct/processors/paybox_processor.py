"""
Paybox Direct operations.

Each operation validates its parameters, encodes them into protocol fields,
wraps them in the session envelope and executes the request through a
PayboxClient. A successful call returns a PayboxResult; a business rejection
raises the operation's PayboxRequestError subclass; an unreachable server
raises ServerUnavailableError.
"""

import asyncio
import dataclasses
from typing import Mapping

import structlog

from paybox_direct.clients.paybox_client import PayboxClient
from paybox_direct.clients.request import PayboxRequest
from paybox_direct.config import PayboxSettings
from paybox_direct.models import (
    AuthorizationError,
    AuthorizeOperation,
    CancelError,
    CancelOperation,
    CreditError,
    CreditOperation,
    DebitAuthorizationOperation,
    DebitError,
    DeleteSubscriberError,
    DeleteSubscriberOperation,
    OperationCode,
    OutcomeKind,
    PayboxRequestError,
    PayboxResult,
    RefundError,
    RefundOperation,
)
from paybox_direct.protocol import fields as encoder
from paybox_direct.protocol.envelope import Clock, build_envelope, utc_now

logger = structlog.get_logger(__name__)

# AUTORISATION value meaning "no authorization number"
NO_AUTHORIZATION = "XXXXXX"


class PayboxDirectProcessor:
    """
    Paybox Direct (and Direct Plus) operations.

    Usage:
        settings = PayboxSettings(site=1999888, rank=32, password="...")
        async with PayboxDirectProcessor(settings) as paybox:
            result = await paybox.debit(AuthorizeOperation(...))
    """

    def __init__(
        self,
        settings: PayboxSettings,
        client: PayboxClient | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize the processor.

        Args:
            settings: Session settings shared by every request
            client: Client executing the requests; one is created from
                ``settings`` if not provided
            clock: Source of the request timestamp
        """
        self.settings = settings
        self.client = client or PayboxClient(settings)
        self.clock = clock

    async def close(self) -> None:
        await self.client.close()

    def new_request(self, operation_fields: Mapping[str, str]) -> PayboxRequest:
        """Wrap operation fields into a request carrying the session envelope."""
        return PayboxRequest(build_envelope(self.settings, operation_fields, self.clock))

    async def _run(
        self,
        operation_fields: Mapping[str, str],
        error_class: type[PayboxRequestError],
    ) -> PayboxRequest:
        request = self.new_request(operation_fields)
        outcome = await self.client.execute(request)

        if outcome.kind is OutcomeKind.BUSINESS_FAILURE:
            logger.warning(
                "paybox_operation_rejected",
                op_code=request.op_code,
                question_number=request.question_number,
                code=outcome.code,
                comment=outcome.comment,
            )
            raise error_class(outcome.code, outcome.comment, request_id=request.request_id)

        logger.info(
            "paybox_operation_succeeded",
            op_code=request.op_code,
            question_number=request.question_number,
            request_id=request.request_id,
            transaction_id=request.transaction_id,
        )
        return request

    @staticmethod
    def _result(request: PayboxRequest) -> PayboxResult:
        authorization = request.fields.get("AUTORISATION") if request.fields else None
        if authorization == NO_AUTHORIZATION or not authorization:
            authorization = None
        return PayboxResult(
            request=request,
            request_id=request.request_id,
            transaction_id=request.transaction_id,
            authorization=authorization,
        )

    async def authorize(self, operation: AuthorizeOperation) -> PayboxResult:
        """
        Execute an authorization, with or without debit.

        When a subscriber is created (#56) the result carries the new wallet.
        If a debit was requested too, a #2 debit is issued on the new
        authorization after ``debit_delay_seconds`` and attached as
        ``result.debit``.

        Raises:
            AuthorizationError: Authorization rejected (DebitError for #3/#53)
            DebitError: Follow-up debit after a subscriber creation rejected;
                ``error.authorization`` holds the #56 result and its wallet
            ServerUnavailableError: Paybox server unavailable
        """
        op_code = operation.op_code
        if operation.debit and op_code is not OperationCode.SUBSCRIBER_CREATE:
            error_class: type[PayboxRequestError] = DebitError
        else:
            error_class = AuthorizationError

        request = await self._run(
            encoder.encode_authorize(operation, self.settings), error_class
        )
        result = self._result(request)

        if op_code is OperationCode.SUBSCRIBER_CREATE:
            result.wallet = request.fields.get("PORTEUR")

            if operation.debit:
                # Paybox recommends waiting between the authorization and the debit
                await asyncio.sleep(self.settings.debit_delay_seconds)
                # Missing identifiers are sent as 0 and rejected by Paybox
                follow_up = DebitAuthorizationOperation(
                    amount=operation.amount,
                    currency=operation.currency,
                    request_id=result.request_id or 0,
                    transaction_id=result.transaction_id or 0,
                    ref=operation.ref,
                )
                try:
                    result.debit = await self.debit_authorization(follow_up)
                except DebitError as e:
                    e.authorization = result
                    raise

        return result

    async def debit(self, operation: AuthorizeOperation) -> PayboxResult:
        """Execute a direct debit, without prior authorization."""
        return await self.authorize(dataclasses.replace(operation, debit=True))

    async def debit_authorization(
        self, operation: DebitAuthorizationOperation
    ) -> PayboxResult:
        """
        Debit a prior authorization (#2).

        Raises:
            DebitError: Debit rejected
            ServerUnavailableError: Paybox server unavailable
        """
        request = await self._run(
            encoder.encode_debit_authorization(operation, self.settings), DebitError
        )
        return self._result(request)

    async def cancel(self, operation: CancelOperation) -> PayboxResult:
        """
        Cancel an operation if possible (#55 for subscribers, #5 otherwise).

        Raises:
            CancelError: Cancellation rejected
            ServerUnavailableError: Paybox server unavailable
        """
        request = await self._run(
            encoder.encode_cancel(operation, self.settings), CancelError
        )
        return self._result(request)

    async def refund(self, operation: RefundOperation) -> PayboxResult:
        """
        Refund a debited payment (#14).

        Raises:
            RefundError: Refund rejected
            ServerUnavailableError: Paybox server unavailable
        """
        request = await self._run(encoder.encode_refund(operation), RefundError)
        return self._result(request)

    async def credit(self, operation: CreditOperation) -> PayboxResult:
        """
        Credit a card (#54 for subscribers, #4 otherwise).

        Raises:
            CreditError: Credit rejected
            ServerUnavailableError: Paybox server unavailable
        """
        request = await self._run(
            encoder.encode_credit(operation, self.settings), CreditError
        )
        return self._result(request)

    async def delete_subscriber(
        self, operation: DeleteSubscriberOperation
    ) -> PayboxResult:
        """
        Delete a subscriber (#58).

        Raises:
            DeleteSubscriberError: Deletion rejected
            ServerUnavailableError: Paybox server unavailable
        """
        request = await self._run(
            encoder.encode_delete_subscriber(operation, self.settings),
            DeleteSubscriberError,
        )
        return self._result(request)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
