"""Aave V3 protocol adapter."""
from .adapter import AaveV3Adapter
from .summary import format_user_summary

__all__ = ["AaveV3Adapter", "format_user_summary"]
