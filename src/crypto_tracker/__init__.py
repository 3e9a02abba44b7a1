"""Crypto tracker: market snapshot, portfolio, favorites, alerts and charts."""

__version__ = "0.1.0"
