"""Aave V3 adapter — reads an account's aggregate position from the Pool."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from ...chains.evm import EvmClient
from ...config import ChainConfig
from ...models import AccountSnapshot
from . import parser
from .abi import AAVE_ORACLE_ABI, POOL_ABI, POOL_ADDRESSES_PROVIDER_ABI

logger = logging.getLogger(__name__)


class AaveV3Adapter:
    """Read an account's Aave V3 position through Pool.getUserAccountData.

    The Pool and oracle are resolved from the PoolAddressesProvider on first
    use and reused afterwards; account data is read fresh on every call.
    """

    def __init__(self, client: EvmClient, config: ChainConfig) -> None:
        self._client = client
        self._provider = client.contract(
            config.pool_addresses_provider, POOL_ADDRESSES_PROVIDER_ABI
        )
        self._pool: Any = None
        self._base_currency_unit: int | None = None

    @property
    def protocol_name(self) -> str:
        return "aave-v3"

    async def _resolve(self) -> None:
        if self._pool is not None:
            return
        pool_address = await self._provider.functions.getPool().call()
        oracle_address = await self._provider.functions.getPriceOracle().call()
        oracle = self._client.contract(oracle_address, AAVE_ORACLE_ABI)
        base_currency_unit = int(await oracle.functions.BASE_CURRENCY_UNIT().call())

        self._pool = self._client.contract(pool_address, POOL_ABI)
        self._base_currency_unit = base_currency_unit
        logger.info(
            "Resolved Aave pool %s (base currency unit %d)",
            pool_address,
            base_currency_unit,
        )

    async def fetch_snapshot(self, account_address: str) -> AccountSnapshot:
        """Fetch the account's aggregate data and e-mode category."""
        await self._resolve()
        user = self._client.checksum(account_address)
        raw_data, emode = await asyncio.gather(
            self._pool.functions.getUserAccountData(user).call(),
            self._pool.functions.getUserEMode(user).call(),
        )
        snapshot = AccountSnapshot(
            account_data=parser.parse_account_data(raw_data),
            base_currency_unit=self._base_currency_unit,
            user_emode_category_id=int(emode),
        )
        logger.debug("Fetched account data for %s: %s", user, snapshot.account_data)
        return snapshot
