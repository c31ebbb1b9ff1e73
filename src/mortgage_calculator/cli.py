"""Interactive CLI — click entry point + guided prompt loop.

Session flow:
  1. Prompt for principal, interest rate and mortgage period, one at a time.
     Values passed as options are used instead of prompting.
  2. Show the monthly payment and the mortgage overview.
  3. Offer 'recalculate' (start over) or 'exit'.

When all three values are passed as options the command prints the overview
and exits without entering the loop.
"""
from __future__ import annotations

import logging
import sys
from decimal import Decimal
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import message
from .controller import Command, MortgageController
from .session import STEPS, Phase

console = Console()
err_console = Console(stderr=True, style="bold red")

_EXIT_WORDS = frozenset({"exit", "quit", "q"})
_RECALCULATE_WORDS = frozenset({"recalculate", "r"})

# ──────────────────────────────────────────────────────────────────────────────
# Formatting helpers
# ──────────────────────────────────────────────────────────────────────────────

def _fmt_number(value: Decimal) -> str:
    return f"{value:f}"


# ──────────────────────────────────────────────────────────────────────────────
# Console view
# ──────────────────────────────────────────────────────────────────────────────

class ConsoleView:
    """Renders controller output on the terminal and buffers typed input."""

    def __init__(self) -> None:
        self.input_text = ""
        self.input_hint = ""
        self.action_label = message("next")
        self.input_visible = True
        self.recalculate_visible = False
        self.last_error: Optional[str] = None

    def display_prompt(self, text: str) -> None:
        console.print()
        console.print(f"[bold cyan]{text}[/bold cyan]")

    def clear_input_field(self) -> None:
        self.input_text = ""

    def set_input_hint(self, text: str) -> None:
        self.input_hint = text

    def read_input_text(self) -> str:
        return self.input_text

    def show_error(self, message_key: str) -> None:
        self.last_error = message_key
        err_console.print(f"  {message(message_key)}")

    def show_result(self, formatted_payment: str) -> None:
        console.print()
        console.print(f"[bold green]{message('monthly_payment')}{formatted_payment}[/bold green]")

    def show_summary(
        self,
        principal: Decimal,
        rate_percent: Decimal,
        term_years: Decimal,
        formatted_payment: str,
    ) -> None:
        t = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
        t.add_column("Field", style="cyan")
        t.add_column("Value", justify="right")
        t.add_row(message("message_principal"), f"${_fmt_number(principal)}")
        t.add_row(message("message_interest"), f"{_fmt_number(rate_percent)}{message('percent')}")
        t.add_row(message("message_mortgage"), f"{_fmt_number(term_years)} {message('years')}")
        t.add_row(message("message_result"), f"[bold]${formatted_payment}[/bold]")

        console.print(Panel(t, title=message("mortgage_overview"), expand=False))
        console.print(f"[dim]{message('looks_good')}[/dim]")

    def toggle_recalculate_affordance(self, visible: bool) -> None:
        self.recalculate_visible = visible

    def toggle_input_affordance(self, visible: bool) -> None:
        self.input_visible = visible

    def set_action_label(self, text: str) -> None:
        self.action_label = text


# ──────────────────────────────────────────────────────────────────────────────
# Session runner
# ──────────────────────────────────────────────────────────────────────────────

def run_session(
    controller: MortgageController,
    view: ConsoleView,
    prefill: Optional[dict[str, str]] = None,
    one_shot: bool = False,
) -> int:
    """Drive *controller* until the user exits. Returns the process exit code.

    *prefill* maps a step field to raw text submitted instead of prompting.
    With *one_shot*, the run stops at the first error or at the end of the
    first calculation.
    """
    prefill = dict(prefill or {})
    controller.start()

    while True:
        if view.input_visible:
            step = controller.session.current_step()
            raw = prefill.pop(step.field, None) if step is not None else None
            if raw is None:
                raw = console.input(f"[bold]{view.input_hint} ({view.action_label}):[/bold] ")
                if raw.strip().lower() in _EXIT_WORDS:
                    console.print("Goodbye.")
                    return 0
            else:
                console.print(f"[bold]{view.input_hint}:[/bold] {escape(raw)}")

            view.last_error = None
            view.input_text = raw
            controller.handle(Command.NEXT)
            if one_shot and view.last_error is not None:
                return 1
            continue

        if one_shot:
            return 0 if controller.session.phase is Phase.REVIEW else 1

        console.print()
        console.print(
            "[bold]Actions:[/bold] "
            "[cyan]recalculate[/cyan] · [cyan]exit[/cyan]"
        )
        action = console.input("[bold]> [/bold]").strip().lower()

        if action in _EXIT_WORDS:
            console.print("Goodbye.")
            return 0
        elif action in _RECALCULATE_WORDS and view.recalculate_visible:
            controller.handle(Command.RECALCULATE)
        else:
            err_console.print(f"  Unknown action '{escape(action)}'.")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    package_logger = logging.getLogger(__package__)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


# ──────────────────────────────────────────────────────────────────────────────
# Click entry point
# ──────────────────────────────────────────────────────────────────────────────

@click.command()
@click.option("--principal", type=str, default=None, help="Principal amount ($)")
@click.option("--rate", type=str, default=None, help="Annual interest rate (%), e.g. 6 for 6%")
@click.option("--years", type=str, default=None, help="Mortgage period in years")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def main(
    principal: Optional[str],
    rate: Optional[str],
    years: Optional[str],
    verbose: bool,
) -> None:
    """Guided monthly mortgage payment calculator."""
    _configure_logging(verbose)
    console.print(Panel("[bold blue]Mortgage Calculator[/bold blue]", expand=False))

    given = dict(zip((step.field for step in STEPS), (principal, rate, years)))
    prefill = {name: raw for name, raw in given.items() if raw is not None}
    one_shot = len(prefill) == len(STEPS)

    view = ConsoleView()
    controller = MortgageController(view)
    try:
        code = run_session(controller, view, prefill, one_shot=one_shot)
    except (KeyboardInterrupt, EOFError):
        console.print("\nSession ended.")
        code = 0
    sys.exit(code)
