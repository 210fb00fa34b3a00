"""
SDK for FX Converter.

Provides programmatic access to the remote rate-quote service.
"""

from .fastforex_client import FastForexClient, RateFetchError

__all__ = ["FastForexClient", "RateFetchError"]
