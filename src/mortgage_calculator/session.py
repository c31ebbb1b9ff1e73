"""Step sequencer: collects the three loan inputs one prompt at a time.

A session owns one LoanParameters instance and a cursor over STEPS.
The cursor ranges over [0, len(STEPS)]; after advance() has shown
STEPS[i], the cursor is i + 1, so the next submitted value is written to
STEPS[cursor - 1].field. A cursor equal to len(STEPS) means every prompt
has been shown.

Phases:
  COLLECTING  prompts are being answered
  COMPLETE    every field is set but the payment was not finite
  REVIEW      every field is set and a finite payment was computed
Only reset() leaves COMPLETE or REVIEW.
"""
from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional

from .calculator import LoanParameters, is_finite_payment
from .config import ZERO
from .errors import InvalidCalculationError, InvalidInputError, SessionStateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    field: str
    prompt_key: str


STEPS: tuple[Step, ...] = (
    Step("principal", "prompt_principal"),
    Step("annual_interest_rate_percent", "prompt_interest_rate"),
    Step("term_years", "prompt_mortgage_period"),
)


class Phase(enum.Enum):
    COLLECTING = "collecting"
    COMPLETE = "complete"
    REVIEW = "review"


_GROUPED_NUMBER = re.compile(r"[+-]?\d{1,3}(,\d{3})+(\.\d*)?")


def parse_amount(raw: str) -> Decimal:
    """Parse user text into a non-negative finite Decimal.

    Ignores spaces ("200 000") and accepts ',' only as a thousands
    separator in well-formed groups ("200,000", "1,234.56").
    Raises InvalidInputError otherwise.
    """
    text = raw.strip().replace(" ", "")
    if not text:
        raise InvalidInputError(raw, "empty")
    if "," in text:
        if not _GROUPED_NUMBER.fullmatch(text):
            raise InvalidInputError(raw, "misplaced thousands separator")
        text = text.replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise InvalidInputError(raw, "not a number") from None
    if not value.is_finite():
        raise InvalidInputError(raw, "not finite")
    if value < ZERO:
        raise InvalidInputError(raw, "negative")
    return value


@dataclass
class Session:
    params: LoanParameters = field(default_factory=LoanParameters)
    cursor: int = 0
    phase: Phase = Phase.COLLECTING
    payment: Optional[Decimal] = None

    @property
    def collected(self) -> bool:
        """True once every prompt has been shown."""
        return self.cursor >= len(STEPS)

    @staticmethod
    def is_last_step(step: Step) -> bool:
        return step == STEPS[-1]

    def current_step(self) -> Optional[Step]:
        """The step whose answer the next submit() fills, if any."""
        if self.cursor == 0:
            return None
        return STEPS[self.cursor - 1]

    def advance(self) -> Optional[Step]:
        """Move to the next prompt and return it, or None when all were shown."""
        if self.collected:
            logger.debug("advance() with every step shown")
            return None
        step = STEPS[self.cursor]
        self.cursor += 1
        logger.debug("Advanced to step %d (%s)", self.cursor, step.field)
        return step

    def submit(self, raw: str) -> Step:
        """Parse *raw* and store it in the field of the current step.

        On InvalidInputError nothing is changed and the cursor stays put.
        """
        if self.phase is not Phase.COLLECTING:
            raise SessionStateError(f"Cannot submit input in phase {self.phase.value}")
        step = self.current_step()
        if step is None:
            raise SessionStateError("Cannot submit input before the first prompt is shown")

        value = parse_amount(raw)
        setattr(self.params, step.field, value)
        logger.debug("Set %s = %s", step.field, value)
        return step

    def finish(self) -> Decimal:
        """Compute the payment once every field is set.

        Enters REVIEW and returns the payment if it is finite. Otherwise
        enters COMPLETE and raises InvalidCalculationError.
        """
        if self.phase is not Phase.COLLECTING or not self.collected:
            raise SessionStateError("Cannot calculate before every step is collected")

        payment = self.params.monthly_payment()
        if not is_finite_payment(payment):
            self.phase = Phase.COMPLETE
            logger.warning("Calculation for %s produced %s", self.params, payment)
            raise InvalidCalculationError(payment)

        self.payment = payment
        self.phase = Phase.REVIEW
        return payment

    def reset(self) -> Step:
        """Clear every entered value and show the first prompt again."""
        self.params.clear()
        self.payment = None
        self.cursor = 0
        self.phase = Phase.COLLECTING
        self.advance()
        return STEPS[0]
