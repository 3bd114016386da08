"""Minimal ABIs for the Aave V3 contracts the monitor reads."""
from __future__ import annotations

from typing import Any

# (solidity type, name) in the order Pool.getUserAccountData returns them
ACCOUNT_DATA_FIELDS: tuple[tuple[str, str], ...] = (
    ("uint256", "totalCollateralBase"),
    ("uint256", "totalDebtBase"),
    ("uint256", "availableBorrowsBase"),
    ("uint256", "currentLiquidationThreshold"),
    ("uint256", "ltv"),
    ("uint256", "healthFactor"),
)


def field_names(fields: tuple[tuple[str, str], ...]) -> tuple[str, ...]:
    return tuple(name for _, name in fields)


def _view(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[tuple[str, str]],
) -> dict[str, Any]:
    return {
        "inputs": [{"internalType": t, "name": n, "type": t} for t, n in inputs],
        "name": name,
        "outputs": [{"internalType": t, "name": n, "type": t} for t, n in outputs],
        "stateMutability": "view",
        "type": "function",
    }


POOL_ADDRESSES_PROVIDER_ABI: list[dict[str, Any]] = [
    _view("getPool", [], [("address", "")]),
    _view("getPriceOracle", [], [("address", "")]),
]

POOL_ABI: list[dict[str, Any]] = [
    _view("getUserAccountData", [("address", "user")], list(ACCOUNT_DATA_FIELDS)),
    _view("getUserEMode", [("address", "user")], [("uint256", "")]),
]

AAVE_ORACLE_ABI: list[dict[str, Any]] = [
    _view("BASE_CURRENCY_UNIT", [], [("uint256", "")]),
]
