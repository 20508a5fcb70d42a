"""Paybox Direct operations facade."""

from paybox_direct.processors.paybox_processor import PayboxDirectProcessor

__all__ = ["PayboxDirectProcessor"]
