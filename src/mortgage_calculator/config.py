"""Application-wide constants and the message table.

All tuneable defaults and user-facing strings live here so there is a single
place to adjust them.
"""
from __future__ import annotations

from decimal import Decimal

# ── Calendar / rate conversion ────────────────────────────────────────────────

MONTHS_PER_YEAR: int = 12
PERCENT = Decimal("100")

# ── Numeric convenience ───────────────────────────────────────────────────────

ZERO = Decimal("0")
CENT = Decimal("0.01")

# ── Message table ─────────────────────────────────────────────────────────────

MESSAGES: dict[str, str] = {
    # Step prompts, in collection order
    "prompt_principal": "Enter Principal Amount ($)",
    "prompt_interest_rate": "Enter Interest Rate (%)",
    "prompt_mortgage_period": "Enter Mortgage Period (Years)",
    # Action labels
    "next": "Next",
    "calculate": "Calculate",
    "recalculate": "Recalculate",
    # Errors
    "empty_input_error": "Please enter a valid, non-negative number.",
    "invalid_input_error": "Invalid input: the monthly payment could not be calculated.",
    # Summary
    "mortgage_overview": "Mortgage Overview",
    "message_principal": "Principal Amount",
    "message_interest": "Interest Rate",
    "message_mortgage": "Mortgage Period",
    "message_result": "Monthly Payment",
    "monthly_payment": "Monthly Payment: $",
    "percent": "%",
    "years": "years",
    "looks_good": "Looks good!",
}


def message(key: str) -> str:
    """Look up a user-facing string. Unknown keys raise KeyError."""
    return MESSAGES[key]
