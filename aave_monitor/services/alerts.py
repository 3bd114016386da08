"""Health factor evaluation and alert message formatting."""
from __future__ import annotations

import html
import math

from ..config import CRITICAL_HEALTH_FACTOR
from ..models import AlertLevel, UserSummary


def evaluate(
    health_factor: float,
    caution_threshold: float,
    critical_threshold: float = CRITICAL_HEALTH_FACTOR,
) -> AlertLevel:
    """Classify a health factor. Comparisons use full float precision."""
    if health_factor <= critical_threshold:
        return AlertLevel.CRITICAL
    if health_factor < caution_threshold:
        return AlertLevel.CAUTION
    return AlertLevel.NONE


def format_usd(value: str | float) -> str:
    """Format a USD amount: "1234.5" → "$1,234.50"."""
    amount = float(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_health_factor(health_factor: float, decimals: int = 3) -> str:
    if math.isinf(health_factor):
        return "∞"
    return f"{health_factor:.{decimals}f}"


def _position_lines(account_address: str, summary: UserSummary) -> str:
    return (
        f"<b>Address:</b> {html.escape(account_address)}\n"
        f"<b>Health Factor:</b> {format_health_factor(summary.health_factor)}\n"
        f"<b>Total Collateral:</b> {format_usd(summary.total_collateral_usd)}\n"
        f"<b>Total Borrowed:</b> {format_usd(summary.total_borrows_usd)}\n"
    )


def build_alert_message(
    account_address: str,
    summary: UserSummary,
    level: AlertLevel,
    caution_threshold: float,
    critical_threshold: float = CRITICAL_HEALTH_FACTOR,
) -> str:
    """Build the HTML alert for a CAUTION or CRITICAL evaluation."""
    hf = format_health_factor(summary.health_factor)

    if level is AlertLevel.CRITICAL:
        return (
            f"🚨 <b>Liquidation Risk</b> 🚨\n\n"
            f"{_position_lines(account_address, summary)}\n"
            f"Your health factor is <b>{hf}</b>, at or below {critical_threshold}. "
            f"Add collateral or reduce your borrowed amount immediately."
        )
    if level is AlertLevel.CAUTION:
        return (
            f"⚠️ <b>Health Factor Alert</b> ⚠️\n\n"
            f"{_position_lines(account_address, summary)}\n"
            f"Your health factor is <b>{hf}</b>! Below {caution_threshold}. "
            f"Consider adding more collateral to improve your position's safety."
        )
    raise ValueError(f"No alert message for level {level.value!r}")


def build_status_message(
    account_address: str,
    summary: UserSummary,
    caution_threshold: float,
    critical_threshold: float = CRITICAL_HEALTH_FACTOR,
) -> str:
    """Build the on-demand HTML status report; sent regardless of thresholds."""
    level = evaluate(summary.health_factor, caution_threshold, critical_threshold)
    status = {
        AlertLevel.NONE: "✅ Healthy",
        AlertLevel.CAUTION: "⚠️ Caution",
        AlertLevel.CRITICAL: "🚨 Critical",
    }[level]
    emode = summary.user_emode_category_id
    emode_label = f"category {emode}" if emode else "off"
    return (
        f"📊 <b>Position Status</b>\n\n"
        f"{_position_lines(account_address, summary)}"
        f"<b>Liquidation Threshold:</b> "
        f"{summary.current_liquidation_threshold * 100:.2f}%\n"
        f"<b>E-Mode:</b> {emode_label}\n\n"
        f"{status} (caution below {caution_threshold}, "
        f"critical at {critical_threshold})"
    )
