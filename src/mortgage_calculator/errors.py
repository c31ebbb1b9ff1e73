"""Exceptions raised by the calculator core.

Every user-facing error carries the message-table key the front-end shows
for it.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional


class MortgageCalculatorError(Exception):
    """Base exception for all mortgage calculator errors."""

    message_key: Optional[str] = None

    def __init__(self, message: str, message_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if message_key is not None:
            self.message_key = message_key


class InvalidInputError(MortgageCalculatorError):
    """Raw text was empty, unparsable, non-finite or negative."""

    message_key = "empty_input_error"

    def __init__(self, raw: str, reason: str):
        super().__init__(f"Invalid input {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class InvalidCalculationError(MortgageCalculatorError):
    """The computed monthly payment is not a finite number."""

    message_key = "invalid_input_error"

    def __init__(self, payment: Decimal):
        super().__init__(f"Monthly payment is not finite: {payment}")
        self.payment = payment


class SessionStateError(MortgageCalculatorError):
    """An operation was called in a session phase that does not allow it.

    Raised for caller mistakes, never shown to the user, so it has no
    message key.
    """
