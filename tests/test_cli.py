"""
Tests for the CLI interface.
"""

import json
import os
import tempfile
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from fx_converter.cli.main import app, EXIT_CODE_OK, EXIT_CODE_FAIL
from fx_converter.sdk.fastforex_client import RateFetchError
from fx_converter.storage.repository import ConversionRepository

runner = CliRunner()


@pytest.fixture
def workspace():
    """Temporary directory holding a config file and log path."""
    with tempfile.TemporaryDirectory() as temp_dir:
        config_path = os.path.join(temp_dir, "config.json")
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump({"api_key": "test-key"}, f)
        yield {
            "config": config_path,
            "log": os.path.join(temp_dir, "conversions.json"),
        }


@pytest.fixture
def mock_client():
    """Mock the FastForexClient constructed by the CLI."""
    with patch('fx_converter.cli.main.FastForexClient') as mock_cls:
        client = mock_cls.return_value
        client.fetch_rates.return_value = {"EUR": 0.9, "GBP": 0.79}
        yield mock_cls


def _invoke(workspace, user_input, date="2024-01-15"):
    args = [date] if date else []
    args += ["--config", workspace["config"], "--log-file", workspace["log"]]
    return runner.invoke(app, args, input=user_input)


class TestCLI:
    """Test the interactive conversion command."""

    def test_missing_date_exits_with_failure(self, workspace, mock_client):
        """Test that the date argument is required."""
        result = _invoke(workspace, "", date=None)

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Please provide a date in the format YYYY-MM-DD" in result.output
        mock_client.assert_not_called()

    def test_missing_config_exits_with_failure(self, workspace, mock_client):
        """Test that a missing key file stops before any prompt."""
        os.remove(workspace["config"])
        result = _invoke(workspace, "10\nUSD\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Amount" not in result.output
        mock_client.assert_not_called()

    def test_single_conversion_then_end(self, workspace, mock_client):
        """Test one conversion is printed and persisted."""
        result = _invoke(workspace, "10\nusd\neur\nend\n")

        assert result.exit_code == EXIT_CODE_OK
        assert "10.00 USD is 9.00 EUR" in result.output
        assert "Terminating the application." in result.output
        mock_client.assert_called_once_with("test-key", base_url="https://api.fastforex.io")

        records = ConversionRepository(workspace["log"]).load_all()
        assert len(records) == 1
        assert records[0].date == "2024-01-15"
        assert records[0].converted_amount == "9.00"

    def test_rates_cached_across_iterations(self, workspace, mock_client):
        """Test one fetch serves every conversion from the same base."""
        result = _invoke(workspace, "10\nUSD\nEUR\n20\nUSD\nGBP\n5.5\nUSD\nEUR\nEND\n")

        assert result.exit_code == EXIT_CODE_OK
        mock_client.return_value.fetch_rates.assert_called_once_with("2024-01-15", "USD")
        records = ConversionRepository(workspace["log"]).load_all()
        assert [r.converted_amount for r in records] == ["9.00", "15.80", "4.95"]

    @pytest.mark.parametrize("user_input", [
        "end\n",
        "10\nEnd\n",
        "10\nUSD\neNd\n",
    ])
    def test_sentinel_at_any_prompt_writes_nothing(self, workspace, mock_client, user_input):
        """Test the sentinel ends the session without a record."""
        result = _invoke(workspace, user_input)

        assert result.exit_code == EXIT_CODE_OK
        assert "Terminating the application." in result.output
        assert not os.path.exists(workspace["log"])
        mock_client.return_value.fetch_rates.assert_not_called()

    def test_sentinel_leaves_existing_log_untouched(self, workspace, mock_client):
        """Test an earlier run's log survives a sentinel-only session."""
        _invoke(workspace, "10\nUSD\nEUR\nend\n")
        with open(workspace["log"], 'r', encoding='utf-8') as f:
            before = f.read()

        _invoke(workspace, "10\nUSD\nend\n")

        with open(workspace["log"], 'r', encoding='utf-8') as f:
            assert f.read() == before

    def test_invalid_input_is_reprompted(self, workspace, mock_client):
        """Test bad amount and currency answers are asked again."""
        result = _invoke(workspace, "abc\n10.234\n10\nUS\nUSD\n12A\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_OK
        assert result.output.count("Please enter a valid amount (e.g., 10.23)") == 2
        assert result.output.count("Please enter a valid ISO 4217 currency code") == 2
        assert "10.00 USD is 9.00 EUR" in result.output

    def test_unknown_target_continues_loop(self, workspace, mock_client):
        """Test a missing target rate skips only that iteration."""
        result = _invoke(workspace, "10\nUSD\nJPY\n10\nUSD\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_OK
        assert "Exchange rate for USD to JPY not found." in result.output
        records = ConversionRepository(workspace["log"]).load_all()
        assert [r.target_currency for r in records] == ["EUR"]

    def test_empty_rate_table_reports_not_found(self, workspace, mock_client):
        """Test an empty table skips the iteration instead of exiting."""
        mock_client.return_value.fetch_rates.return_value = {}
        result = _invoke(workspace, "10\nUSD\nEUR\n10\nUSD\nGBP\nend\n")

        assert result.exit_code == EXIT_CODE_OK
        assert "Exchange rate for USD to EUR not found." in result.output
        assert "Exchange rate for USD to GBP not found." in result.output
        assert mock_client.return_value.fetch_rates.call_count == 1
        assert not os.path.exists(workspace["log"])

    def test_missing_rate_table_continues_loop(self, workspace, mock_client):
        """Test the unavailable-rates message when no table is returned."""
        mock_client.return_value.fetch_rates.return_value = None
        result = _invoke(workspace, "10\nUSD\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_OK
        assert "Could not fetch exchange rates for USD. Please try again." in result.output
        assert not os.path.exists(workspace["log"])

    def test_fetch_failure_exits_with_failure(self, workspace, mock_client):
        """Test a fetch error terminates the whole session."""
        mock_client.return_value.fetch_rates.side_effect = RateFetchError(
            "Error fetching exchange rates: unreachable"
        )
        result = _invoke(workspace, "10\nUSD\nEUR\n10\nUSD\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_FAIL
        assert "unreachable" in result.output
        assert mock_client.return_value.fetch_rates.call_count == 1
        assert not os.path.exists(workspace["log"])

    def test_corrupt_log_exits_with_failure(self, workspace, mock_client):
        """Test a malformed conversion log is fatal."""
        with open(workspace["log"], 'w', encoding='utf-8') as f:
            f.write("{broken")
        result = _invoke(workspace, "10\nUSD\nEUR\nend\n")

        assert result.exit_code == EXIT_CODE_FAIL
        with open(workspace["log"], 'r', encoding='utf-8') as f:
            assert f.read() == "{broken"
