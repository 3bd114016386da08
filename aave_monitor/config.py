"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from web3 import Web3

logger = logging.getLogger(__name__)

# Hard liquidation-risk floor. Not derived from the caution threshold.
CRITICAL_HEALTH_FACTOR = 1.2

# Aave V3 Ethereum mainnet
DEFAULT_POOL_ADDRESSES_PROVIDER = "0x2f39d218133AFaB8F2B819B1066c7E434Ad94E9e"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ThresholdsConfig:
    health_factor_caution: float = 1.4
    health_factor_critical: float = CRITICAL_HEALTH_FACTOR


@dataclass(frozen=True)
class MonitorConfig:
    polling_interval_seconds: int = 20
    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)


@dataclass(frozen=True)
class ChainConfig:
    rpc_url: str = ""
    rpc_timeout: int = 30
    pool_addresses_provider: str = DEFAULT_POOL_ADDRESSES_PROVIDER


@dataclass(frozen=True)
class TelegramConfig:
    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""
    poll_timeout: int = 30


@dataclass(frozen=True)
class AppConfig:
    account_address: str = ""
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    chain: ChainConfig = field(default_factory=ChainConfig)
    telegram: TelegramConfig = field(default_factory=TelegramConfig)


# Used when no config.yaml is present: everything comes from the environment.
DEFAULT_RAW: dict[str, Any] = {
    "account_address": "${ACCOUNT_ADDRESS}",
    "monitor": {
        "polling_interval_seconds": "${POLLING_INTERVAL:-20}",
        "thresholds": {"health_factor_caution": "${HEALTH_FACTOR_THRESHOLD:-1.4}"},
    },
    "chain": {
        "rpc_url": "${RPC_URL}",
        "pool_addresses_provider": (
            "${AAVE_POOL_ADDRESSES_PROVIDER:-" + DEFAULT_POOL_ADDRESSES_PROVIDER + "}"
        ),
    },
    "telegram": {
        "bot_token": "${TELEGRAM_BOT_TOKEN}",
        "chat_id": "${TELEGRAM_CHAT_ID}",
    },
}

# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} / ${VAR:-default} with environment values.

    The default applies when the variable is unset or empty.
    """
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(
            lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), value
        )
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _to_int(value: Any, name: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _to_float(value: Any, name: str) -> float:
    try:
        return float(str(value).strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _build_thresholds(raw: dict[str, Any]) -> ThresholdsConfig:
    return ThresholdsConfig(
        health_factor_caution=_to_float(
            raw.get("health_factor_caution", 1.4), "health_factor_caution"
        ),
    )


def _build_monitor(raw: dict[str, Any]) -> MonitorConfig:
    return MonitorConfig(
        polling_interval_seconds=_to_int(
            raw.get("polling_interval_seconds", 20), "polling_interval_seconds"
        ),
        thresholds=_build_thresholds(raw.get("thresholds") or {}),
    )


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_url=str(raw.get("rpc_url") or "").strip(),
        rpc_timeout=_to_int(raw.get("rpc_timeout", 30), "rpc_timeout"),
        pool_addresses_provider=str(
            raw.get("pool_addresses_provider") or DEFAULT_POOL_ADDRESSES_PROVIDER
        ),
    )


def _build_telegram(raw: dict[str, Any]) -> TelegramConfig:
    token = str(raw.get("bot_token") or "").strip()
    chat_id = str(raw.get("chat_id") or "").strip()
    return TelegramConfig(
        enabled=bool(token and chat_id),
        bot_token=token,
        chat_id=chat_id,
        poll_timeout=_to_int(raw.get("poll_timeout", 30), "poll_timeout"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root; when that file does not exist either, the built-in
            environment-only document is used.
    """
    load_dotenv()

    if config_path is None:
        default_path = Path(__file__).resolve().parent.parent / "config.yaml"
        if default_path.exists():
            config_path = default_path

    if config_path is None:
        raw: dict[str, Any] = DEFAULT_RAW
        source = "environment"
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        source = str(config_path)

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        account_address=str(raw.get("account_address") or "").strip(),
        monitor=_build_monitor(raw.get("monitor") or {}),
        chain=_build_chain(raw.get("chain") or {}),
        telegram=_build_telegram(raw.get("telegram") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", source)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_url:
        raise ValueError("RPC_URL environment variable is required")

    if cfg.monitor.polling_interval_seconds <= 0:
        raise ValueError("Polling interval must be a positive number of seconds")

    caution = cfg.monitor.thresholds.health_factor_caution
    if not math.isfinite(caution):
        raise ValueError(
            f"Health factor threshold must be a finite number, got {caution}"
        )
    if caution <= 0:
        raise ValueError("Health factor threshold must be positive")
    if caution <= cfg.monitor.thresholds.health_factor_critical:
        logger.warning(
            "Caution threshold %.2f is not above the critical boundary %.2f; "
            "caution alerts will never fire",
            caution,
            cfg.monitor.thresholds.health_factor_critical,
        )

    provider = cfg.chain.pool_addresses_provider
    if not Web3.is_address(provider):
        raise ValueError(
            f"Invalid contract address for pool_addresses_provider: {provider!r}"
        )
