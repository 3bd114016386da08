"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from aave_monitor.config import (
    AppConfig,
    ChainConfig,
    MonitorConfig,
    TelegramConfig,
    ThresholdsConfig,
)
from aave_monitor.models import AccountData, AccountSnapshot, UserSummary

ACCOUNT = "0x1111111111111111111111111111111111111111"
BASE_CURRENCY_UNIT = 10**8
# Pool.getUserAccountData reports uint256 max for an account without debt
NO_DEBT = 2**256 - 1


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_thresholds() -> ThresholdsConfig:
    return ThresholdsConfig(health_factor_caution=1.4)


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(rpc_url="https://rpc.example.com", rpc_timeout=10)


@pytest.fixture()
def sample_telegram_config() -> TelegramConfig:
    return TelegramConfig(
        enabled=True, bot_token="fake-token", chat_id="12345", poll_timeout=1
    )


@pytest.fixture()
def sample_app_config(
    sample_thresholds: ThresholdsConfig,
    sample_chain_config: ChainConfig,
    sample_telegram_config: TelegramConfig,
) -> AppConfig:
    return AppConfig(
        account_address=ACCOUNT,
        monitor=MonitorConfig(polling_interval_seconds=20, thresholds=sample_thresholds),
        chain=sample_chain_config,
        telegram=sample_telegram_config,
    )


# ---------------------------------------------------------------------------
# On-chain account fixtures
# ---------------------------------------------------------------------------


def make_account_snapshot(
    collateral_usd: int = 2000,
    debt_usd: int = 1000,
    liquidation_threshold_bps: int = 8250,
    emode: int = 0,
) -> AccountSnapshot:
    """Account data as the Pool reports it, HF derived the same way on-chain."""
    collateral = collateral_usd * BASE_CURRENCY_UNIT
    debt = debt_usd * BASE_CURRENCY_UNIT
    if debt:
        health_factor = collateral * liquidation_threshold_bps * 10**14 // debt
    else:
        health_factor = NO_DEBT
    return AccountSnapshot(
        account_data=AccountData(
            total_collateral_base=collateral,
            total_debt_base=debt,
            available_borrows_base=0,
            current_liquidation_threshold=liquidation_threshold_bps,
            ltv=liquidation_threshold_bps - 500,
            health_factor=health_factor,
        ),
        base_currency_unit=BASE_CURRENCY_UNIT,
        user_emode_category_id=emode,
    )


@pytest.fixture()
def snapshot_factory():
    return make_account_snapshot


@pytest.fixture()
def sample_snapshot() -> AccountSnapshot:
    """$2000 collateral at 82.5% LT against $1000 debt: HF 1.65."""
    return make_account_snapshot()


def make_summary(health_factor: float) -> UserSummary:
    return UserSummary(
        total_collateral_usd=2000.0,
        total_borrows_usd=1000.0,
        current_liquidation_threshold=0.825,
        health_factor=health_factor,
    )


@pytest.fixture()
def summary_factory():
    return make_summary


@pytest.fixture()
def sample_summary() -> UserSummary:
    return make_summary(1.65)


@pytest.fixture()
def account_address() -> str:
    return ACCOUNT


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    account_address: "0x1111111111111111111111111111111111111111"
    monitor:
      polling_interval_seconds: 30
      thresholds:
        health_factor_caution: 1.5
    chain:
      rpc_url: "https://rpc.example.com"
      rpc_timeout: 10
    telegram:
      bot_token: "tok"
      chat_id: "999"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
