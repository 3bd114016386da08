"""EVM JSON-RPC client built on web3's async provider."""
from __future__ import annotations

import logging
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3

from ...config import ChainConfig

logger = logging.getLogger(__name__)


class EvmClient:
    """Read-only access to contracts on an EVM chain."""

    def __init__(self, config: ChainConfig, web3: AsyncWeb3 | None = None) -> None:
        self.rpc_url = config.rpc_url
        if web3 is None:
            web3 = AsyncWeb3(
                AsyncHTTPProvider(
                    config.rpc_url,
                    request_kwargs={"timeout": config.rpc_timeout},
                )
            )
        self.web3 = web3

    @staticmethod
    def checksum(address: str) -> str:
        return AsyncWeb3.to_checksum_address(address)

    def contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        """Bind an ABI to a deployed contract address."""
        return self.web3.eth.contract(address=self.checksum(address), abi=abi)
