"""Monitoring pipeline — fetch, evaluate, notify, report."""
from __future__ import annotations

import logging

from rich.console import Console

from ..config import AppConfig
from ..interfaces.notifier import Notifier
from ..interfaces.position_source import PositionSource
from ..models import AlertLevel, UserSummary
from ..protocols.aave.summary import format_user_summary
from .alerts import build_alert_message, build_status_message, evaluate
from .reporter import print_report, render_report

logger = logging.getLogger(__name__)


class Monitor:
    """Evaluates one account's position and alerts on low health factor."""

    def __init__(
        self,
        config: AppConfig,
        account_address: str,
        source: PositionSource,
        notifier: Notifier | None = None,
        console: Console | None = None,
    ) -> None:
        self._thresholds = config.monitor.thresholds
        self.account_address = account_address
        self._source = source
        self._notifier = notifier
        self._console = console or Console()

    async def fetch_summary(self) -> UserSummary:
        snapshot = await self._source.fetch_snapshot(self.account_address)
        return format_user_summary(snapshot)

    async def _notify(self, message: str) -> bool:
        if self._notifier is None:
            return False
        try:
            return await self._notifier.send_message(message)
        except Exception as e:
            logger.error("Notifier send_message failed: %s", e)
            return False

    async def run_cycle(self, clear: bool = True) -> AlertLevel:
        """One evaluation: at most one notification, then the console report."""
        if clear:
            self._console.clear()

        summary = await self.fetch_summary()
        level = evaluate(
            summary.health_factor,
            self._thresholds.health_factor_caution,
            self._thresholds.health_factor_critical,
        )
        logger.info(
            "Position — Collateral: $%.2f  Borrowed: $%.2f  LT: %.2f%%  HF: %.3f  "
            "e-mode: %d  (%s)",
            summary.total_collateral_usd,
            summary.total_borrows_usd,
            summary.current_liquidation_threshold * 100,
            summary.health_factor,
            summary.user_emode_category_id,
            level.value,
        )

        if level is not AlertLevel.NONE:
            message = build_alert_message(
                self.account_address,
                summary,
                level,
                self._thresholds.health_factor_caution,
                self._thresholds.health_factor_critical,
            )
            await self._notify(message)

        print_report(
            self._console,
            render_report(
                self.account_address, summary, self._thresholds.health_factor_caution
            ),
            clear=False,
        )
        return level

    async def check(self) -> AlertLevel:
        """Single run without clearing the screen."""
        return await self.run_cycle(clear=False)

    async def send_status(self) -> bool:
        """Push the current position regardless of thresholds."""
        try:
            summary = await self.fetch_summary()
        except Exception as e:
            logger.error("Could not fetch position for status request: %s", e)
            await self._notify("❌ Unable to fetch position data.")
            return False

        message = build_status_message(
            self.account_address,
            summary,
            self._thresholds.health_factor_caution,
            self._thresholds.health_factor_critical,
        )
        return await self._notify(message)
