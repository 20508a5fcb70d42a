"""
Paybox Direct wire protocol.

- fields: typed operations to protocol fields
- envelope: session fields (VERSION, SITE, RANG, CLE, DATEQ, NUMQUESTION, ...)
- classifier: reply parsing and outcome classification
"""

from paybox_direct.protocol.classifier import classify, parse_reply
from paybox_direct.protocol.envelope import build_envelope
from paybox_direct.protocol.fields import FieldSet

__all__ = [
    "FieldSet",
    "build_envelope",
    "classify",
    "parse_reply",
]
