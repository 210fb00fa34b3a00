"""
CLI interface for FX Converter.

Runs the interactive conversion loop for a single date.
"""

import logging
import sys
from typing import Callable, Optional, TypeVar

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from fx_converter.config.loader import load_api_config
from fx_converter.core.session import ConversionSession, ConversionStatus
from fx_converter.core.validation import is_sentinel, parse_amount, parse_currency
from fx_converter.sdk.fastforex_client import FastForexClient, RateFetchError
from fx_converter.storage.repository import (
    DEFAULT_LOG_PATH,
    ConversionLogError,
    ConversionRepository
)
from fx_converter.utils.logger import configure_logging

app = typer.Typer()
console = Console(highlight=False)
err_console = Console(stderr=True)

EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1

DEFAULT_CONFIG_PATH = "config.json"

T = TypeVar("T")


@app.command()
def main(
    date: Optional[str] = typer.Argument(
        None,
        help="Conversion date in the format YYYY-MM-DD"
    ),
    config: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to the API key file (JSON or YAML)"
    ),
    log_file: str = typer.Option(
        DEFAULT_LOG_PATH,
        "--log-file",
        "-l",
        help="Path to the JSON conversion log"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """
    Convert amounts between currencies at historical rates.

    Prompts for an amount, base currency and target currency until
    "end" is entered at any prompt.
    """
    configure_logging(logging.DEBUG if verbose else logging.INFO)

    if not date:
        err_console.print("Please provide a date in the format YYYY-MM-DD")
        sys.exit(EXIT_CODE_FAIL)

    try:
        api_config = load_api_config(config)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    session = ConversionSession(
        date=date,
        client=FastForexClient(api_config.api_key, base_url=api_config.base_url),
        repository=ConversionRepository(log_file)
    )

    try:
        _run_loop(session)
    except RateFetchError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)
    except ConversionLogError as e:
        err_console.print(f"[red]Error reading conversion log:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    sys.exit(EXIT_CODE_OK)


def _run_loop(session: ConversionSession) -> None:
    """Prompt, convert, print, and persist until the sentinel is entered."""
    while True:
        amount = _ask("Amount", parse_amount)
        if amount is None:
            break
        base = _ask("Base currency", parse_currency)
        if base is None:
            break
        target = _ask("Target currency", parse_currency)
        if target is None:
            break

        outcome = session.convert(amount, base, target)

        if outcome.status == ConversionStatus.RATES_UNAVAILABLE:
            console.print(f"Could not fetch exchange rates for {outcome.base_currency}. Please try again.")
            continue
        if outcome.status == ConversionStatus.RATE_NOT_FOUND:
            console.print(f"Exchange rate for {outcome.base_currency} to {outcome.target_currency} not found.")
            continue

        record = outcome.record
        console.print(f"{record.amount} {record.base_currency} is {record.converted_amount} {record.target_currency}")
        session.save(record)

    console.print("Terminating the application.")


def _ask(label: str, parse: Callable[[str], T]) -> Optional[T]:
    """Prompt until the answer parses; None means the sentinel was entered."""
    while True:
        answer = typer.prompt(label)
        if is_sentinel(answer):
            return None
        try:
            return parse(answer)
        except ValueError as e:
            console.print(f"[yellow]>>[/] {escape(str(e))}")


if __name__ == "__main__":
    app()
