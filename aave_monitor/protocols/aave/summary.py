"""Convert Pool account data into a USD summary — pure, no I/O."""
from __future__ import annotations

from ...models import AccountSnapshot, UserSummary

WAD = 10**18
PERCENTAGE_FACTOR = 10**4
# getUserAccountData reports uint256 max when the account has no debt
NO_DEBT_HEALTH_FACTOR = 2**255


def health_factor_from_wad(raw: int) -> float:
    if raw >= NO_DEBT_HEALTH_FACTOR:
        return float("inf")
    return raw / WAD


def base_to_usd(amount: int, base_currency_unit: int) -> float:
    return amount / base_currency_unit


def format_user_summary(snapshot: AccountSnapshot) -> UserSummary:
    """Derive the USD summary from values the Pool contract computed.

    Aave V3 markets quote their base currency in USD, so one
    ``base_currency_unit`` is one dollar.
    """
    unit = snapshot.base_currency_unit
    if unit <= 0:
        raise ValueError(f"Invalid base currency unit: {unit}")

    data = snapshot.account_data
    if data.total_debt_base == 0:
        health_factor = float("inf")
    else:
        health_factor = health_factor_from_wad(data.health_factor)

    return UserSummary(
        total_collateral_usd=base_to_usd(data.total_collateral_base, unit),
        total_borrows_usd=base_to_usd(data.total_debt_base, unit),
        current_liquidation_threshold=(
            data.current_liquidation_threshold / PERCENTAGE_FACTOR
        ),
        health_factor=health_factor,
        user_emode_category_id=snapshot.user_emode_category_id,
    )
