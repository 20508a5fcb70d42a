"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Session settings for the preprod and production environments
- A fake Paybox server plugged into httpx through MockTransport
- A fixed clock for deterministic envelopes
"""

from datetime import date, datetime, timezone

import httpx
import pytest

from paybox_direct.clients.paybox_client import PayboxClient
from paybox_direct.config import PayboxSettings
from paybox_direct.processors.paybox_processor import PayboxDirectProcessor

FIXED_TIME = datetime(2015, 9, 12, 13, 32, 51, tzinfo=timezone.utc)


class FakePaybox:
    """
    Callable handler for httpx.MockTransport.

    Replies are consumed in order. A reply may be a body string (served with
    status 200), an httpx.Response, or an exception to raise.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, text=reply)

    @property
    def urls(self) -> list[str]:
        return [str(call.url) for call in self.calls]

    def sent_fields(self, index: int = -1) -> dict[str, str]:
        """Form fields posted in the given call."""
        return dict(httpx.QueryParams(self.calls[index].content.decode()).items())


def fixed_clock() -> datetime:
    return FIXED_TIME


@pytest.fixture
def settings() -> PayboxSettings:
    """Preprod settings without delays."""
    return PayboxSettings(
        site=1999888,
        rank=32,
        login="my_login",
        password="my_password",
        is_prod=False,
        ref_prefix="test_",
        failover_delay_seconds=0,
        debit_delay_seconds=0,
    )


@pytest.fixture
def prod_settings(settings: PayboxSettings) -> PayboxSettings:
    """Production settings without delays."""
    return settings.model_copy(update={"is_prod": True})


@pytest.fixture
def make_client():
    """Build a PayboxClient talking to a FakePaybox."""

    def _make(settings: PayboxSettings, *replies) -> tuple[PayboxClient, FakePaybox]:
        fake = FakePaybox(*replies)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        return PayboxClient(settings, http_client=http_client), fake

    return _make


@pytest.fixture
def make_processor(make_client, settings):
    """Build a PayboxDirectProcessor talking to a FakePaybox."""

    def _make(*replies, settings: PayboxSettings = settings):
        client, fake = make_client(settings, *replies)
        return PayboxDirectProcessor(settings, client=client, clock=fixed_clock), fake

    return _make


@pytest.fixture
def card_expiry() -> date:
    return date(2030, 10, 1)
