"""
FastForex historical rates client.

Fetches one rate table per (date, base currency) request. Failures are
loud: any response without a ``results`` field raises.
"""

from typing import Dict, Optional

import requests

from ..config.loader import DEFAULT_BASE_URL
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class RateFetchError(Exception):
    """Raised when a rate table cannot be obtained from the service."""


class FastForexClient:
    """Thin wrapper over the ``/historical`` endpoint.

    No retries and no backoff. The request timeout defaults to None,
    so a hung request blocks the caller.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        """Initialize the client.

        Args:
            api_key: Service credential, sent as a query parameter
            base_url: Service root URL
            session: Optional requests session to reuse
            timeout: Optional request timeout in seconds

        Raises:
            ValueError: If api_key is missing/empty
        """
        if not api_key or not api_key.strip():
            raise ValueError("api_key is required and cannot be empty")

        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_rates(self, date: str, base_currency: str) -> Dict[str, float]:
        """Fetch the rate table for a base currency on a date.

        Args:
            date: Date as YYYY-MM-DD, passed through unvalidated
            base_currency: 3-letter base currency code

        Returns:
            Mapping of currency code to rate, exactly as returned

        Raises:
            RateFetchError: On transport errors, non-2xx responses,
                non-JSON bodies, or a body without ``results``
        """
        url = f"{self.base_url}/historical"
        params = {"date": date, "base": base_currency, "api_key": self.api_key}
        LOGGER.debug("GET %s date=%s base=%s", url, date, base_currency)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            LOGGER.error("Error fetching exchange rates: %s", e)
            raise RateFetchError(f"Error fetching exchange rates: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            LOGGER.error("Unexpected API response format: %s", response.text)
            raise RateFetchError("Unexpected API response format: body is not JSON") from e

        # An empty table is still a valid response; only a missing field is fatal
        results = payload.get("results") if isinstance(payload, dict) else None
        if results is None:
            LOGGER.error("Unexpected API response format: %s", payload)
            raise RateFetchError(f"Unexpected API response format: {payload}")

        return results
