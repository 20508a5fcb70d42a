"""HTTP clients for the Paybox Direct servers."""

from paybox_direct.clients.paybox_client import PayboxClient, RequestObserver
from paybox_direct.clients.request import PayboxRequest

__all__ = [
    "PayboxClient",
    "PayboxRequest",
    "RequestObserver",
]
