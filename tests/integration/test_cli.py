"""Integration tests for the CLI — prompts, one-shot options and recalculation."""
import logging

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from mortgage_calculator.cli import main


@pytest.fixture
def package_logger():
    logger = logging.getLogger("mortgage_calculator")
    yield logger
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestCLIRunner:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "mortgage" in result.output.lower()

    def test_one_shot_via_args(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "200000", "--rate", "6", "--years", "30"])
        assert result.exit_code == 0
        assert "1199.10" in result.output
        assert "Mortgage Overview" in result.output

    def test_one_shot_invalid_calculation(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "1000", "--rate", "5", "--years", "0"])
        assert result.exit_code == 1
        assert "could not be calculated" in result.output

    def test_one_shot_invalid_value(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "lots", "--rate", "5", "--years", "30"])
        assert result.exit_code == 1
        assert "valid, non-negative number" in result.output

    def test_interactive_session(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="200000\n6\n30\nexit\n")
        assert result.exit_code == 0
        assert "Enter Principal Amount" in result.output
        assert "Enter Interest Rate" in result.output
        assert "Enter Mortgage Period" in result.output
        assert "Monthly Payment: $1199.10" in result.output
        assert "Goodbye." in result.output

    def test_empty_input_reprompts(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="\n1200\n0\n1\nq\n")
        assert result.exit_code == 0
        assert "valid, non-negative number" in result.output
        assert "100.00" in result.output

    def test_recalculate(self):
        runner = CliRunner()
        result = runner.invoke(
            main, [], input="200000\n6\n30\nrecalculate\n1200\n0\n1\nexit\n"
        )
        assert result.exit_code == 0
        assert "1199.10" in result.output
        assert "100.00" in result.output

    def test_partial_options_prompt_for_the_rest(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "1200"], input="0\n1\nexit\n")
        assert result.exit_code == 0
        assert "100.00" in result.output

    def test_eof_ends_session(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="200000\n")
        assert result.exit_code == 0
        assert "Session ended." in result.output

    def test_unknown_action(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="200000\n6\n30\ndance\nexit\n")
        assert result.exit_code == 0
        assert "Unknown action 'dance'" in result.output

    def test_one_shot_overflowing_term(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "1000", "--rate", "5", "--years", "1e999999"])
        assert result.exit_code == 1
        assert "could not be calculated" in result.output

    def test_grouped_principal(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "200,000", "--rate", "6", "--years", "30"])
        assert result.exit_code == 0
        assert "1199.10" in result.output


class TestVerboseLogging:
    def test_verbose_logs_transitions(self, package_logger):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", "--principal", "200000", "--rate", "6", "--years", "30"])
        assert result.exit_code == 0
        assert "Advanced to step" in result.output
        assert package_logger.level == logging.DEBUG
        assert sum(isinstance(h, RichHandler) for h in package_logger.handlers) == 1

    def test_repeated_verbose_runs_keep_one_handler(self, package_logger):
        runner = CliRunner()
        args = ["--verbose", "--principal", "1200", "--rate", "0", "--years", "1"]
        runner.invoke(main, args)
        result = runner.invoke(main, args)
        assert result.exit_code == 0
        assert sum(isinstance(h, RichHandler) for h in package_logger.handlers) == 1

    def test_quiet_by_default(self, package_logger):
        runner = CliRunner()
        result = runner.invoke(main, ["--principal", "200000", "--rate", "6", "--years", "30"])
        assert result.exit_code == 0
        assert "Advanced to step" not in result.output
