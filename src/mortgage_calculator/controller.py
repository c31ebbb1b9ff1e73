"""Session controller: maps user commands onto the step sequencer.

The controller owns the only translation from core errors to user-visible
messages. It never renders anything itself; every visible effect goes
through the View protocol, implemented by the console front-end and by
test fakes.
"""
from __future__ import annotations

import enum
import logging
from decimal import Decimal
from typing import Optional, Protocol

from .calculator import format_payment
from .config import message
from .errors import InvalidCalculationError, InvalidInputError
from .session import Phase, Session, Step

logger = logging.getLogger(__name__)


class Command(enum.Enum):
    NEXT = "next"
    RECALCULATE = "recalculate"


class View(Protocol):
    def display_prompt(self, text: str) -> None: ...
    def clear_input_field(self) -> None: ...
    def set_input_hint(self, text: str) -> None: ...
    def read_input_text(self) -> str: ...
    def show_error(self, message_key: str) -> None: ...
    def show_result(self, formatted_payment: str) -> None: ...
    def show_summary(
        self,
        principal: Decimal,
        rate_percent: Decimal,
        term_years: Decimal,
        formatted_payment: str,
    ) -> None: ...
    def toggle_recalculate_affordance(self, visible: bool) -> None: ...
    def toggle_input_affordance(self, visible: bool) -> None: ...
    def set_action_label(self, text: str) -> None: ...


class MortgageController:
    def __init__(self, view: View, session: Optional[Session] = None):
        self.view = view
        self.session = session if session is not None else Session()

    def start(self) -> None:
        """Show the first prompt of a fresh session."""
        self.view.toggle_recalculate_affordance(False)
        self.view.set_action_label(message("next"))
        self._guide_to_next_step()

    def handle(self, command: Command) -> None:
        logger.debug("Handling %s in phase %s", command.value, self.session.phase.value)
        if command is Command.NEXT:
            self._on_next()
        elif command is Command.RECALCULATE:
            self._on_recalculate()
        else:
            raise ValueError(f"Unknown command: {command!r}")

    # ── Transitions ───────────────────────────────────────────────────────────

    def _show_step(self, step: Step) -> None:
        prompt = message(step.prompt_key)
        self.view.display_prompt(prompt)
        self.view.set_input_hint(prompt)
        self.view.clear_input_field()
        if self.session.is_last_step(step):
            self.view.set_action_label(message("calculate"))

    def _guide_to_next_step(self) -> None:
        step = self.session.advance()
        if step is None:
            self.view.toggle_input_affordance(False)
            return
        self._show_step(step)

    def _on_next(self) -> None:
        if self.session.phase is not Phase.COLLECTING:
            logger.debug("Ignoring next in phase %s", self.session.phase.value)
            return

        raw = self.view.read_input_text()
        try:
            step = self.session.submit(raw)
        except InvalidInputError as exc:
            logger.info("Rejected input: %s", exc)
            self.view.show_error(exc.message_key)
            return

        if self.session.is_last_step(step):
            self._show_review()
            return

        self._guide_to_next_step()

    def _show_review(self) -> None:
        try:
            payment = self.session.finish()
        except InvalidCalculationError as exc:
            self.view.show_error(exc.message_key)
            self.view.toggle_input_affordance(False)
            self.view.toggle_recalculate_affordance(True)
            return

        params = self.session.params
        formatted = format_payment(payment)
        logger.info("Monthly payment %s for %s", formatted, params)

        self.view.show_result(formatted)
        self.view.toggle_input_affordance(False)
        self.view.toggle_recalculate_affordance(True)
        self.view.show_summary(
            params.principal,
            params.annual_interest_rate_percent,
            params.term_years,
            formatted,
        )

    def _on_recalculate(self) -> None:
        first = self.session.reset()
        self.view.clear_input_field()
        self.view.set_action_label(message("next"))
        self.view.toggle_input_affordance(True)
        self._show_step(first)
        self.view.toggle_recalculate_affordance(False)
