"""Resolve the monitored account address from CLI or environment."""
from __future__ import annotations

from web3 import Web3


def resolve_address(cli_value: str | None, env_value: str | None) -> str:
    """Return the address to monitor.

    An explicit ``--address`` wins over ``ACCOUNT_ADDRESS``. An invalid CLI
    value is an error even when the environment holds a valid one.
    """
    if cli_value is not None:
        address = cli_value.strip()
        if Web3.is_address(address):
            return address
        raise ValueError(
            "Invalid Ethereum address provided as command line argument"
        )

    if env_value:
        address = env_value.strip()
        if Web3.is_address(address):
            return address
        raise ValueError("Invalid Ethereum address in environment variable")

    raise ValueError(
        "No account address provided. Please provide it either:\n"
        "1. As a command line argument: --address=0x...\n"
        "2. In the .env file: ACCOUNT_ADDRESS=0x..."
    )
