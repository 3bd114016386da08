"""Aave V3 health factor monitor."""

__version__ = "0.1.0"
