"""Pure parsing functions for Aave Pool results — no I/O."""
from __future__ import annotations

from typing import Any, Sequence

from ...models import AccountData
from .abi import ACCOUNT_DATA_FIELDS, field_names


def to_record(raw: Any, names: Sequence[str]) -> dict[str, Any]:
    """Map a decoded ABI result to a dict keyed by field name.

    web3 returns plain tuples by default and named tuples or dicts when
    tuple decoding is enabled; all three are accepted.
    """
    if isinstance(raw, dict):
        return dict(raw)
    if hasattr(raw, "_asdict"):
        return dict(raw._asdict())
    values = tuple(raw)
    if len(values) < len(names):
        raise ValueError(
            f"Result has {len(values)} fields, expected at least {len(names)}"
        )
    return dict(zip(names, values))


def parse_account_data(raw: Any) -> AccountData:
    r = to_record(raw, field_names(ACCOUNT_DATA_FIELDS))
    return AccountData(
        total_collateral_base=int(r["totalCollateralBase"]),
        total_debt_base=int(r["totalDebtBase"]),
        available_borrows_base=int(r["availableBorrowsBase"]),
        current_liquidation_threshold=int(r["currentLiquidationThreshold"]),
        ltv=int(r["ltv"]),
        health_factor=int(r["healthFactor"]),
    )
