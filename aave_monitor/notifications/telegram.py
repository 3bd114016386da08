"""Telegram notification service."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, Awaitable, Callable

import aiohttp
import certifi

from ..config import TelegramConfig

logger = logging.getLogger(__name__)

API_BASE = "https://api.telegram.org"
STATUS_COMMANDS = frozenset({"status", "/status"})
# Pause after a failed getUpdates call before polling again.
LISTEN_ERROR_PAUSE = 5.0


def is_status_command(update: dict[str, Any], chat_id: str) -> bool:
    """True when the update is a status request from the authorised chat."""
    message = update.get("message") or {}
    sender_chat = str((message.get("chat") or {}).get("id", ""))
    if not chat_id or sender_chat != str(chat_id):
        return False
    text = (message.get("text") or "").strip().lower()
    # "/status@MyBot" is how Telegram addresses commands in group chats
    return text.split("@", 1)[0] in STATUS_COMMANDS


class TelegramNotifier:
    """Send messages through a Telegram bot and listen for status requests.

    The HTTP session is opened and closed with ``async with``; the caller
    owns the notifier's lifetime.
    """

    def __init__(
        self,
        config: TelegramConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.bot_token = config.bot_token
        self.chat_id = config.chat_id
        self.poll_timeout = config.poll_timeout
        self._session = session
        self._owns_session = session is None
        self._offset = 0

    async def __aenter__(self) -> "TelegramNotifier":
        if self._session is None:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            connector = aiohttp.TCPConnector(ssl=ssl_context)
            self._session = aiohttp.ClientSession(connector=connector)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _url(self, method: str) -> str:
        return f"{API_BASE}/bot{self.bot_token}/{method}"

    def _require_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("TelegramNotifier must be used inside 'async with'")
        return self._session

    async def send_message(self, message: str) -> bool:
        """Deliver an HTML message once. Failures are logged, never raised."""
        if not self.bot_token or not self.chat_id:
            logger.warning("Telegram credentials not configured")
            return False

        payload = {
            "chat_id": self.chat_id,
            "text": message,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

        try:
            session = self._require_session()
            async with session.post(self._url("sendMessage"), json=payload) as response:
                if response.status == 200:
                    logger.info("Telegram message sent")
                    return True
                logger.error("Failed to send Telegram message: %s", response.status)
                return False
        except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError) as e:
            logger.error("Failed to send Telegram message: %s", e)
            return False

    async def get_updates(
        self, offset: int | None = None, poll_timeout: int | None = None
    ) -> list[dict[str, Any]]:
        """Long-poll for new updates and advance the offset past them."""
        session = self._require_session()
        if poll_timeout is None:
            poll_timeout = self.poll_timeout
        params = {
            "offset": self._offset if offset is None else offset,
            "timeout": poll_timeout,
            "allowed_updates": '["message"]',
        }
        timeout = aiohttp.ClientTimeout(total=poll_timeout + 10)
        async with session.get(
            self._url("getUpdates"), params=params, timeout=timeout
        ) as response:
            data = await response.json()

        if not data.get("ok"):
            raise RuntimeError(f"Telegram API error: {data.get('description', data)}")

        updates: list[dict[str, Any]] = data.get("result", [])
        for update in updates:
            self._offset = max(self._offset, int(update.get("update_id", 0)) + 1)
        return updates

    async def skip_pending_updates(self) -> None:
        """Acknowledge updates queued before startup so they go unanswered."""
        try:
            skipped = await self.get_updates(offset=-1, poll_timeout=0)
        except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError, ValueError) as e:
            logger.warning("Could not skip pending Telegram updates: %s", e)
            return
        if skipped:
            logger.info("Skipped Telegram updates queued before startup")

    async def listen(
        self,
        on_status: Callable[[], Awaitable[Any]],
        stop_event: asyncio.Event,
    ) -> None:
        """Invoke ``on_status`` for each status command until ``stop_event`` is set."""
        await self.skip_pending_updates()
        logger.info("Listening for Telegram status requests")
        while not stop_event.is_set():
            try:
                updates = await self.get_updates()
            except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError, ValueError) as e:
                logger.warning("Telegram polling failed: %s", e)
                try:
                    await asyncio.wait_for(stop_event.wait(), LISTEN_ERROR_PAUSE)
                except asyncio.TimeoutError:
                    pass
                continue

            for update in updates:
                if is_status_command(update, self.chat_id):
                    logger.info("Status requested via Telegram")
                    try:
                        await on_status()
                    except Exception:
                        logger.exception("Status request failed")
                else:
                    logger.debug("Ignoring Telegram update %s", update.get("update_id"))
