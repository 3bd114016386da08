"""Data models — all frozen (immutable)."""
from __future__ import annotations

import enum
from dataclasses import dataclass


class AlertLevel(enum.Enum):
    NONE = "none"
    CAUTION = "caution"
    CRITICAL = "critical"


@dataclass(frozen=True)
class AccountData:
    """Pool.getUserAccountData as computed on-chain.

    Amounts are in base-currency units, thresholds in basis points and the
    health factor in wad (1e18).
    """

    total_collateral_base: int
    total_debt_base: int
    available_borrows_base: int
    current_liquidation_threshold: int
    ltv: int
    health_factor: int


@dataclass(frozen=True)
class AccountSnapshot:
    """One read of an account: aggregate data, e-mode and the base-currency unit."""

    account_data: AccountData
    base_currency_unit: int
    user_emode_category_id: int = 0


@dataclass(frozen=True)
class UserSummary:
    """USD-denominated aggregate of an account's position."""

    total_collateral_usd: float
    total_borrows_usd: float
    current_liquidation_threshold: float
    health_factor: float
    user_emode_category_id: int = 0
