"""Position source protocol — per-protocol account reads."""
from typing import Protocol

from ..models import AccountSnapshot


class PositionSource(Protocol):
    """Abstract interface for reading an account's lending position."""

    @property
    def protocol_name(self) -> str: ...

    async def fetch_snapshot(self, account_address: str) -> AccountSnapshot: ...
