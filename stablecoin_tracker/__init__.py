"""Stablecoin tracker: provider id discovery and market data synchronization."""

__version__ = "0.1.0"
