"""
Per-run conversion session.

Owns the rate cache and the conversion log handle for one interactive
run at a fixed date.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Dict, Optional

from .conversion import convert_amount, round_money
from ..sdk.fastforex_client import FastForexClient
from ..storage.models import ConversionRecord
from ..storage.repository import ConversionRepository
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class ConversionStatus(Enum):
    """Result of a single conversion attempt."""
    CONVERTED = auto()          # Record produced
    RATES_UNAVAILABLE = auto()  # No usable rate table for the base currency
    RATE_NOT_FOUND = auto()     # Table has no rate for the target currency


@dataclass(frozen=True)
class ConversionOutcome:
    """Outcome of one iteration; record is set only when CONVERTED."""
    status: ConversionStatus
    base_currency: str
    target_currency: str
    record: Optional[ConversionRecord] = None


class ConversionSession:
    """State for one run: the date, rate cache, fetcher, and log store.

    The cache is keyed by base currency only. The date is fixed for the
    session's lifetime, so the key never needs to include it.
    """

    def __init__(self, date: str, client: FastForexClient, repository: ConversionRepository):
        self.date = date
        self.client = client
        self.repository = repository
        self._rates: Dict[str, Dict[str, float]] = {}

    def get_rates(self, base_currency: str) -> Optional[Dict[str, float]]:
        """Return the cached rate table for a base currency, fetching on miss.

        RateFetchError from the client propagates unchanged.

        Returns:
            The rate table, or None if no table was stored
        """
        if base_currency not in self._rates:
            LOGGER.info("Fetching exchange rates for %s on %s...", base_currency, self.date)
            self._rates[base_currency] = self.client.fetch_rates(self.date, base_currency)

        # The client raises rather than returning None, but a missing table
        # still abandons only this iteration. An empty table is usable.
        return self._rates.get(base_currency)

    def convert(self, amount: Decimal, base_currency: str, target_currency: str) -> ConversionOutcome:
        """Convert an amount, resolving rates through the cache.

        Does not persist; call save() with the returned record.
        """
        rates = self.get_rates(base_currency)
        if rates is None:
            return ConversionOutcome(ConversionStatus.RATES_UNAVAILABLE, base_currency, target_currency)

        rate = rates.get(target_currency)
        if not rate:
            return ConversionOutcome(ConversionStatus.RATE_NOT_FOUND, base_currency, target_currency)

        record = ConversionRecord(
            date=self.date,
            amount=str(round_money(amount)),
            base_currency=base_currency,
            target_currency=target_currency,
            converted_amount=str(convert_amount(amount, rate))
        )
        return ConversionOutcome(ConversionStatus.CONVERTED, base_currency, target_currency, record)

    def save(self, record: ConversionRecord) -> None:
        """Append a completed conversion to the log."""
        self.repository.append(record)
