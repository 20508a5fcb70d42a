"""A single Paybox Direct request and its reply."""

from typing import Mapping

import httpx

from paybox_direct.models.exceptions import RequestNotExecutedError
from paybox_direct.models.results import ResponseOutcome
from paybox_direct.protocol.classifier import (
    COMMENT_FIELD,
    RESPONSE_CODE_FIELD,
    SUCCESS_CODE,
    normalize_code,
)
from paybox_direct.protocol.fields import FieldSet


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


class PayboxRequest:
    """
    One exchange with the Paybox server.

    ``vars`` holds the complete field set sent to Paybox and ``fields`` the
    parsed reply, set once the request has been executed. A request is
    executed at most twice (primary then fallback endpoint); the state always
    reflects the last physical attempt.
    """

    def __init__(self, vars: Mapping[str, str]) -> None:
        self.vars: FieldSet = dict(vars)
        self.fields: FieldSet | None = None
        self.http_response: httpx.Response | None = None
        self.endpoint: str | None = None
        self.attempts = 0
        self.outcome: ResponseOutcome | None = None

    def __repr__(self) -> str:
        return (
            f"<PayboxRequest TYPE={self.op_code} NUMQUESTION={self.question_number} "
            f"attempts={self.attempts}>"
        )

    @property
    def op_code(self) -> str | None:
        return self.vars.get("TYPE")

    @property
    def question_number(self) -> str | None:
        return self.vars.get("NUMQUESTION")

    def _reply(self) -> FieldSet:
        if self.fields is None:
            raise RequestNotExecutedError("Not executed yet")
        return self.fields

    @property
    def failed(self) -> bool:
        code = self._reply().get(RESPONSE_CODE_FIELD, "")
        return normalize_code(code) != SUCCESS_CODE

    @property
    def error_code(self) -> int | None:
        return _to_int(self._reply().get(RESPONSE_CODE_FIELD))

    @property
    def error_comment(self) -> str:
        return self._reply().get(COMMENT_FIELD) or ""

    @property
    def request_id(self) -> int | None:
        """NUMAPPEL from the reply."""
        return _to_int(self._reply().get("NUMAPPEL"))

    @property
    def transaction_id(self) -> int | None:
        """NUMTRANS from the reply."""
        return _to_int(self._reply().get("NUMTRANS"))
