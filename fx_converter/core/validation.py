"""
Input validation for interactive prompts.

Each parser returns the normalized value or raises ValueError carrying
the message shown to the user before re-prompting. Input is matched
as typed, without trimming whitespace.
"""

import re
from decimal import Decimal

SENTINEL = "end"

_AMOUNT_PATTERN = re.compile(r"[0-9]+(\.[0-9]{1,2})?")
_CURRENCY_PATTERN = re.compile(r"[A-Za-z]{3}")

AMOUNT_ERROR = "Please enter a valid amount (e.g., 10.23)"
CURRENCY_ERROR = "Please enter a valid ISO 4217 currency code (e.g., USD, EUR)"


def is_sentinel(text: str) -> bool:
    """True if the answer asks to end the session."""
    return text.lower() == SENTINEL


def parse_amount(text: str) -> Decimal:
    """Parse a positive amount with at most 2 fraction digits.

    Only ASCII digits are accepted.

    Args:
        text: Raw user input

    Returns:
        The amount as a Decimal

    Raises:
        ValueError: If the input is not a valid positive amount
    """
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise ValueError(AMOUNT_ERROR)
    amount = Decimal(text)
    if amount <= 0:
        raise ValueError(AMOUNT_ERROR)
    return amount


def parse_currency(text: str) -> str:
    """Parse a 3-letter currency code, normalized to uppercase.

    Raises:
        ValueError: If the input is not exactly 3 letters
    """
    if not _CURRENCY_PATTERN.fullmatch(text):
        raise ValueError(CURRENCY_ERROR)
    return text.upper()
