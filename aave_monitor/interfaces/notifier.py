"""Notifier protocol — messaging channel abstraction."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Protocol


class Notifier(Protocol):
    """Abstract interface for pushing messages and listening for commands."""

    async def send_message(self, message: str) -> bool: ...

    async def listen(
        self,
        on_status: Callable[[], Awaitable[Any]],
        stop_event: asyncio.Event,
    ) -> None: ...
