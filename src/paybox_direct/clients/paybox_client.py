"""HTTP client executing requests against the Paybox Direct servers."""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable

import httpx
import structlog

from paybox_direct.clients.request import PayboxRequest
from paybox_direct.config import PayboxSettings
from paybox_direct.models.exceptions import ServerUnavailableError
from paybox_direct.models.results import ResponseOutcome
from paybox_direct.protocol.classifier import classify, parse_reply

logger = structlog.get_logger(__name__)

# Called once per physical HTTP call with the request; may be a coroutine function.
RequestObserver = Callable[[PayboxRequest], Awaitable[Any] | Any]


class PayboxClient:
    """
    Client for the Paybox Direct PPPS endpoint.

    Executes a request against the test server, or in production against the
    primary server with a single failover to the fallback server. Any network
    error, non-200 status, reply without response code, or internal timeout
    code (00001) makes the attempt transient; once the endpoints are exhausted
    the request fails with ServerUnavailableError. Business rejections are
    returned as they are and never retried.
    """

    def __init__(
        self,
        settings: PayboxSettings,
        http_client: httpx.AsyncClient | None = None,
        observers: Iterable[RequestObserver] = (),
    ):
        """
        Initialize the Paybox client.

        Args:
            settings: Session settings (environment, endpoints, timeouts)
            http_client: Optional shared connection pool. Not closed by this
                client; the caller must not use it from two operations at once
                if it is not safe to do so.
            observers: Callbacks notified after every physical HTTP call
        """
        self.settings = settings
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=settings.timeout_seconds
        )
        self.observers: list[RequestObserver] = list(observers)

        logger.info(
            "paybox_client_initialized",
            is_prod=settings.is_prod,
            timeout_seconds=settings.timeout_seconds,
        )

    def add_observer(self, observer: RequestObserver) -> None:
        """Register a callback notified after every physical HTTP call."""
        self.observers.append(observer)

    def endpoints(self) -> list[str]:
        """Endpoints to try, in order."""
        if not self.settings.is_prod:
            return [self.settings.dev_url]
        return [self.settings.prod_url, self.settings.prod_fallback_url]

    async def close(self) -> None:
        """Close the HTTP connection pool if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def execute(self, request: PayboxRequest) -> ResponseOutcome:
        """
        Execute a request, failing over to the fallback endpoint in production.

        Args:
            request: Request carrying the complete field set

        Returns:
            SUCCESS or BUSINESS_FAILURE outcome of the last exchange

        Raises:
            ServerUnavailableError: No endpoint gave a usable reply
        """
        last_error: httpx.HTTPError | None = None

        for attempt, url in enumerate(self.endpoints(), start=1):
            if attempt > 1:
                logger.warning(
                    "paybox_failover",
                    op_code=request.op_code,
                    question_number=request.question_number,
                    url=url,
                    delay_seconds=self.settings.failover_delay_seconds,
                )
                await asyncio.sleep(self.settings.failover_delay_seconds)

            outcome, last_error = await self._exchange(request, url, attempt)
            if not outcome.is_transient:
                return outcome

        logger.error(
            "paybox_server_unavailable",
            op_code=request.op_code,
            question_number=request.question_number,
            attempts=request.attempts,
        )
        raise ServerUnavailableError(
            f"Paybox server unavailable after {request.attempts} attempt(s)"
        ) from last_error

    async def _exchange(
        self,
        request: PayboxRequest,
        url: str,
        attempt: int,
    ) -> tuple[ResponseOutcome, httpx.HTTPError | None]:
        """Perform one physical HTTP call and classify its reply."""
        request.attempts = attempt
        request.endpoint = url
        request.http_response = None
        request.fields = None
        error: httpx.HTTPError | None = None

        logger.info(
            "paybox_request_sent",
            op_code=request.op_code,
            question_number=request.question_number,
            url=url,
            attempt=attempt,
        )

        try:
            response = await self.http_client.post(url, data=request.vars)

        except httpx.TimeoutException as e:
            logger.error(
                "paybox_request_timeout",
                question_number=request.question_number,
                url=url,
                error=str(e),
            )
            error = e

        except httpx.RequestError as e:
            # Connection refused, DNS, TLS, ...
            logger.error(
                "paybox_request_error",
                question_number=request.question_number,
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            error = e

        else:
            request.http_response = response
            if response.status_code == 200:
                request.fields = parse_reply(response.text)
            else:
                logger.error(
                    "paybox_unexpected_status",
                    question_number=request.question_number,
                    url=url,
                    status_code=response.status_code,
                )

        outcome = classify(request.fields)
        request.outcome = outcome

        logger.info(
            "paybox_response_received",
            op_code=request.op_code,
            question_number=request.question_number,
            outcome=outcome.kind.value,
            code=outcome.code,
        )

        await self._notify(request)
        return outcome, error

    async def _notify(self, request: PayboxRequest) -> None:
        for observer in self.observers:
            result = observer(request)
            if inspect.isawaitable(result):
                await result

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
