"""Reply parsing and classification."""

import re
from typing import Mapping

import httpx

from paybox_direct.models.results import ResponseOutcome
from paybox_direct.protocol.fields import FieldSet

RESPONSE_CODE_FIELD = "CODEREPONSE"
COMMENT_FIELD = "COMMENTAIRE"

SUCCESS_CODE = "00000"
# Paybox internal processing timeout
TIMEOUT_CODE = "00001"

_DIGITS = re.compile(r"[0-9]+")


def parse_reply(body: str) -> FieldSet:
    """Parse a form-encoded reply body into a field set."""
    return dict(httpx.QueryParams(body).items())


def normalize_code(code: str) -> str | None:
    """Return the 5-digit form of a response code, None if it is not numeric."""
    code = code.strip()
    if not _DIGITS.fullmatch(code):
        return None
    return f"{int(code):05d}"


def classify(fields: Mapping[str, str] | None) -> ResponseOutcome:
    """
    Classify a parsed reply.

    A missing or non-numeric response code, or the internal timeout code,
    means the server could not process the request.
    """
    if fields is None or RESPONSE_CODE_FIELD not in fields:
        return ResponseOutcome.transient()

    code = normalize_code(fields[RESPONSE_CODE_FIELD])
    if code is None or code == TIMEOUT_CODE:
        return ResponseOutcome.transient()

    comment = fields.get(COMMENT_FIELD) or ""
    if code == SUCCESS_CODE:
        return ResponseOutcome.success(comment)
    return ResponseOutcome.business_failure(int(code), comment)
