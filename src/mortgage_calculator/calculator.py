"""Monthly mortgage payment calculation.

All monetary values use decimal.Decimal.
Full precision for every intermediate step; rounding to 2 decimal places
(ROUND_HALF_UP) happens only when formatting for display.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)

from .config import CENT, MONTHS_PER_YEAR, PERCENT, ZERO

logger = logging.getLogger(__name__)


@dataclass
class LoanParameters:
    """The three values collected from the user, zeroed until set."""
    principal: Decimal = ZERO
    annual_interest_rate_percent: Decimal = ZERO
    term_years: Decimal = ZERO

    def clear(self) -> None:
        self.principal = ZERO
        self.annual_interest_rate_percent = ZERO
        self.term_years = ZERO

    def monthly_payment(self) -> Decimal:
        return compute_monthly_payment(
            self.principal, self.annual_interest_rate_percent, self.term_years
        )


def payment_count(term_years: Decimal) -> int:
    """Number of monthly payments, truncated toward zero (1.99 years → 23)."""
    return int(term_years * MONTHS_PER_YEAR)


def compute_monthly_payment(
    principal: Decimal,
    annual_interest_rate_percent: Decimal,
    term_years: Decimal,
) -> Decimal:
    """Return the monthly payment for a fixed-rate amortized loan.

    Uses the standard formula:
        M = P * r * (1 + r)^n / ((1 + r)^n - 1)
    with r = annual_rate_percent / 100 / 12 and n = int(term_years * 12).

    Special case: if the rate is zero, M = P / n.

    No validation is applied. Degenerate inputs (n == 0, huge exponents)
    produce Infinity or NaN instead of raising; check the result with
    is_finite_payment().
    """
    with localcontext() as ctx:
        ctx.traps[DivisionByZero] = False
        ctx.traps[InvalidOperation] = False
        ctx.traps[Overflow] = False

        r = Decimal(annual_interest_rate_percent) / PERCENT / MONTHS_PER_YEAR
        months = Decimal(term_years) * MONTHS_PER_YEAR
        if not months.is_finite():
            logger.debug("Term of %s years overflows the payment count", term_years)
            return Decimal("NaN")
        n = payment_count(Decimal(term_years))

        if r == ZERO:
            payment = Decimal(principal) / Decimal(n)
        else:
            factor = (1 + r) ** n
            payment = Decimal(principal) * r * factor / (factor - 1)

    logger.debug(
        "Payment for P=%s rate=%s%% n=%d: %s",
        principal, annual_interest_rate_percent, n, payment,
    )
    return payment


def is_finite_payment(value: Decimal) -> bool:
    return Decimal(value).is_finite()


def format_payment(value: Decimal) -> str:
    """Format to exactly two decimals with '.' as separator and no grouping."""
    return f"{Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP):f}"
